"""Metadata API SOAP envelopes.

Only the two calls the orchestration layer needs are supported:
``listMetadata`` and ``readMetadata``. Responses are converted to plain
dicts so they can be handled like REST payloads.
"""

from __future__ import annotations

import xml.etree.ElementTree as ET
from typing import Any
from xml.sax.saxutils import escape

from ..core.exceptions import RemoteCallError

SOAP_ENV_NS = "http://schemas.xmlsoap.org/soap/envelope/"
METADATA_NS = "http://soap.sforce.com/2006/04/metadata"
XSI_NS = "http://www.w3.org/2001/XMLSchema-instance"

_ENVELOPE = (
    '<?xml version="1.0" encoding="utf-8"?>'
    f'<soapenv:Envelope xmlns:soapenv="{SOAP_ENV_NS}" xmlns:met="{METADATA_NS}">'
    "<soapenv:Header><met:SessionHeader><met:sessionId>{session_id}</met:sessionId>"
    "</met:SessionHeader></soapenv:Header>"
    "<soapenv:Body>{body}</soapenv:Body>"
    "</soapenv:Envelope>"
)


def list_metadata_envelope(session_id: str, metadata_type: str, api_version: str) -> str:
    body = (
        "<met:listMetadata>"
        f"<met:queries><met:type>{escape(metadata_type)}</met:type></met:queries>"
        f"<met:asOfVersion>{escape(api_version)}</met:asOfVersion>"
        "</met:listMetadata>"
    )
    return _ENVELOPE.format(session_id=escape(session_id), body=body)


def read_metadata_envelope(session_id: str, metadata_type: str, members: list[str]) -> str:
    full_names = "".join(f"<met:fullNames>{escape(member)}</met:fullNames>" for member in members)
    body = (
        "<met:readMetadata>"
        f"<met:type>{escape(metadata_type)}</met:type>"
        f"{full_names}"
        "</met:readMetadata>"
    )
    return _ENVELOPE.format(session_id=escape(session_id), body=body)


def _local(tag: str) -> str:
    return tag.rsplit("}", 1)[-1]


def element_to_value(element: ET.Element) -> Any:
    """Convert an element to a string (leaf) or a dict (repeated children become lists)."""
    children = list(element)
    if not children:
        return element.text
    value: dict[str, Any] = {}
    xsi_type = element.get(f"{{{XSI_NS}}}type")
    if xsi_type:
        value["@type"] = _local(xsi_type.split(":")[-1])
    for child in children:
        key = _local(child.tag)
        converted = element_to_value(child)
        if key in value:
            existing = value[key]
            if not isinstance(existing, list):
                value[key] = existing = [existing]
            existing.append(converted)
        else:
            value[key] = converted
    return value


def _body(document: str) -> ET.Element:
    try:
        root = ET.fromstring(document)
    except ET.ParseError as e:
        raise RemoteCallError(f"Malformed SOAP response: {e}", payload=document) from e
    body = root.find(f"{{{SOAP_ENV_NS}}}Body")
    if body is None:
        raise RemoteCallError("SOAP response has no Body", payload=document)
    return body


def parse_fault(document: str, status_code: int | None = None) -> RemoteCallError | None:
    """Return the error described by a SOAP fault, or None if there is no fault."""
    try:
        body = _body(document)
    except RemoteCallError:
        return None
    fault = body.find(f"{{{SOAP_ENV_NS}}}Fault")
    if fault is None:
        return None
    fault_code = fault.findtext("faultcode") or ""
    fault_string = fault.findtext("faultstring") or "SOAP fault"
    return RemoteCallError(
        fault_string,
        error_code=fault_code.split(":")[-1] or None,
        status_code=status_code,
        payload=document,
    )


def parse_results(document: str) -> list[Any]:
    """Extract the ``result`` entries of a listMetadata response."""
    fault = parse_fault(document)
    if fault is not None:
        raise fault
    body = _body(document)
    results: list[Any] = []
    for response in body:
        for result in response:
            if _local(result.tag) == "result":
                results.append(element_to_value(result))
    return results


def parse_read_records(document: str) -> list[dict[str, Any]]:
    """Extract the ``records`` entries of a readMetadata response.

    Members that do not exist come back as records without a ``fullName``;
    they are dropped.
    """
    records: list[dict[str, Any]] = []
    for result in parse_results(document):
        if not isinstance(result, dict):
            continue
        entries = result.get("records") or []
        if not isinstance(entries, list):
            entries = [entries]
        records.extend(
            entry for entry in entries if isinstance(entry, dict) and entry.get("fullName")
        )
    return records
