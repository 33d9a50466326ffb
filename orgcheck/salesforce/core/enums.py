"""Core enumerations shared across the orchestration layer.

Key Types:
    - QuotaZone: Green / yellow / red classification of daily API usage
    - ObjectType: Kind of sObject, derived from its API name suffix
"""

from __future__ import annotations

from enum import Enum


class QuotaZone(str, Enum):
    """Classification of the daily API request usage ratio."""

    GREEN = "green"
    YELLOW = "yellow"
    RED = "red"

    @classmethod
    def classify(cls, ratio: float, warning_threshold: float, fatal_threshold: float) -> QuotaZone:
        """Classify a usage ratio.

        Green up to and including the warning threshold, yellow up to and
        including the fatal threshold, red above it.
        """
        if ratio > fatal_threshold:
            return cls.RED
        if ratio > warning_threshold:
            return cls.YELLOW
        return cls.GREEN


class ObjectType(str, Enum):
    """Kind of sObject."""

    STANDARD_SOBJECT = "StandardEntity"
    CUSTOM_SOBJECT = "CustomObject"
    CUSTOM_EXTERNAL_SOBJECT = "ExternalObject"
    CUSTOM_SETTING = "CustomSetting"
    CUSTOM_METADATA_TYPE = "CustomMetadataType"
    CUSTOM_EVENT = "CustomEvent"
    KNOWLEDGE_ARTICLE = "KnowledgeArticle"
    CUSTOM_BIG_OBJECT = "CustomBigObject"


_SUFFIX_MAP = {
    "__c": ObjectType.CUSTOM_SOBJECT,
    "__x": ObjectType.CUSTOM_EXTERNAL_SOBJECT,
    "__mdt": ObjectType.CUSTOM_METADATA_TYPE,
    "__e": ObjectType.CUSTOM_EVENT,
    "__ka": ObjectType.KNOWLEDGE_ARTICLE,
    "__b": ObjectType.CUSTOM_BIG_OBJECT,
}


def get_object_type(api_name: str, is_custom_setting: bool = False) -> ObjectType:
    """Derive the object type from an sObject API name.

    Examples:
        >>> get_object_type("Invoice__c")
        <ObjectType.CUSTOM_SOBJECT: 'CustomObject'>
        >>> get_object_type("Account")
        <ObjectType.STANDARD_SOBJECT: 'StandardEntity'>
    """
    if is_custom_setting:
        return ObjectType.CUSTOM_SETTING
    for suffix, object_type in _SUFFIX_MAP.items():
        if api_name.endswith(suffix):
            return object_type
    return ObjectType.STANDARD_SOBJECT
