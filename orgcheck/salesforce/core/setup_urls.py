"""Deep links into the Lightning Setup UI.

Kinds come from two sources: Org Check's own kebab-case kinds (``field``,
``apex-class``...) and the metadata types reported by the dependency API
(``CustomField``, ``ApexClass``...). The dependency API only gives an id and a
type, so those kinds mostly resolve to ``/<id>``.
"""

from __future__ import annotations

from .enums import ObjectType

# Object-scoped pages under the Object Manager, keyed by kind
_OBJECT_MANAGER_PAGES = {
    "layout": "PageLayouts",
    "web-link": "ButtonsLinksActions",
    "record-type": "RecordTypes",
    "apex-trigger": "ApexTriggers",
    "field-set": "FieldSets",
}

# Setup pages addressed through "page?address=%2F<id>"
_ADDRESS_PAGES = {
    "validation-rule": "ObjectManager",
    "ValidationRule": "ObjectManager",
    "profile": "EnhancedProfiles",
    "permission-set": "PermSets",
    "permission-set-group": "PermSetGroups",
    "custom-label": "ExternalStrings",
    "CustomLabel": "ExternalStrings",
    "visual-force-page": "ApexPages",
    "ApexPage": "ApexPages",
    "visual-force-component": "ApexComponent",
    "ApexComponent": "ApexComponent",
    "static-resource": "StaticResources",
    "StaticResource": "StaticResources",
    "apex-class": "ApexClasses",
    "ApexClass": "ApexClasses",
}

# Setup areas hosting non-standard objects and their fields
_SETUP_AREAS = {
    ObjectType.CUSTOM_BIG_OBJECT: "BigObjects",
    ObjectType.CUSTOM_EVENT: "EventObjects",
    ObjectType.CUSTOM_SETTING: "CustomSettings",
    ObjectType.CUSTOM_METADATA_TYPE: "CustomMetadata",
    ObjectType.CUSTOM_EXTERNAL_SOBJECT: "ExternalObjects",
}

_OBJECT_MANAGER_TYPES = (ObjectType.STANDARD_SOBJECT, ObjectType.CUSTOM_SOBJECT)


def _setup_area_url(area: str, durable_id: str | None) -> str:
    return f"/lightning/setup/{area}/page?address=%2F{durable_id}%3Fsetupid%3D{area}"


def _coerce_object_type(object_type: ObjectType | str | None) -> ObjectType | None:
    if object_type is None or isinstance(object_type, ObjectType):
        return object_type
    try:
        return ObjectType(object_type)
    except ValueError:
        return None


def resolve_setup_url(
    kind: str | None,
    durable_id: str | None,
    object_durable_id: str | None = None,
    object_type: ObjectType | str | None = None,
) -> str:
    """Resolve the setup path of a component.

    Args:
        kind: Component kind (Org Check kind or dependency API type)
        durable_id: Id of the component
        object_durable_id: Id of the owning object, for object-scoped kinds
        object_type: Type of the owning object, for fields and objects

    Returns:
        Path relative to the org's Lightning domain; unknown kinds fall back
        to ``/<durable_id>``

    Examples:
        >>> resolve_setup_url("flow", "301000000000001")
        '/builder_platform_interaction/flowBuilder.app?flowId=301000000000001'
        >>> resolve_setup_url("Unknown", "001000000000001")
        '/001000000000001'
    """
    owner_type = _coerce_object_type(object_type)

    if kind == "field":
        if owner_type in _OBJECT_MANAGER_TYPES:
            return (
                f"/lightning/setup/ObjectManager/{object_durable_id}"
                f"/FieldsAndRelationships/{durable_id}/view"
            )
        if owner_type in _SETUP_AREAS:
            return _setup_area_url(_SETUP_AREAS[owner_type], durable_id)
        return f"/{durable_id}"

    if kind == "object":
        if owner_type in _OBJECT_MANAGER_TYPES:
            return f"/lightning/setup/ObjectManager/{object_durable_id}/Details/view"
        if owner_type in _SETUP_AREAS:
            return _setup_area_url(_SETUP_AREAS[owner_type], object_durable_id)
        return f"/{object_durable_id}"

    if kind in _OBJECT_MANAGER_PAGES:
        page = _OBJECT_MANAGER_PAGES[kind]
        return f"/lightning/setup/ObjectManager/{object_durable_id}/{page}/{durable_id}/view"

    if kind in _ADDRESS_PAGES:
        return f"/lightning/setup/{_ADDRESS_PAGES[kind]}/page?address=%2F{durable_id}"

    if kind == "user":
        return (
            f"/lightning/setup/ManageUsers/page?address=%2F{durable_id}"
            "%3Fnoredirect%3D1%26isUserEntityOverride%3D1"
        )

    if kind in ("flow", "Flow"):
        return f"/builder_platform_interaction/flowBuilder.app?flowId={durable_id}"

    return f"/{durable_id}"
