"""Shared fixtures for I/O tests: recorded Metadata API SOAP responses."""

from __future__ import annotations

import pytest

LIST_RESPONSE = """<?xml version="1.0" encoding="UTF-8"?>
<soapenv:Envelope xmlns:soapenv="http://schemas.xmlsoap.org/soap/envelope/"
    xmlns="http://soap.sforce.com/2006/04/metadata">
  <soapenv:Body>
    <listMetadataResponse>
      <result><fullName>Account-Account Layout</fullName><type>Layout</type></result>
      <result><fullName>Case-Case Layout</fullName><type>Layout</type></result>
    </listMetadataResponse>
  </soapenv:Body>
</soapenv:Envelope>"""

READ_RESPONSE = """<?xml version="1.0" encoding="UTF-8"?>
<soapenv:Envelope xmlns:soapenv="http://schemas.xmlsoap.org/soap/envelope/"
    xmlns="http://soap.sforce.com/2006/04/metadata"
    xmlns:xsi="http://www.w3.org/2001/XMLSchema-instance">
  <soapenv:Body>
    <readMetadataResponse>
      <result>
        <records xsi:type="Layout">
          <fullName>Account-Account Layout</fullName>
          <layoutSections><label>Information</label></layoutSections>
          <layoutSections><label>System</label></layoutSections>
        </records>
        <records xsi:nil="true"/>
      </result>
    </readMetadataResponse>
  </soapenv:Body>
</soapenv:Envelope>"""

FAULT_RESPONSE = """<?xml version="1.0" encoding="UTF-8"?>
<soapenv:Envelope xmlns:soapenv="http://schemas.xmlsoap.org/soap/envelope/">
  <soapenv:Body>
    <soapenv:Fault>
      <faultcode>sf:INVALID_SESSION_ID</faultcode>
      <faultstring>INVALID_SESSION_ID: Invalid Session ID found in SessionHeader</faultstring>
    </soapenv:Fault>
  </soapenv:Body>
</soapenv:Envelope>"""


@pytest.fixture
def list_response() -> str:
    return LIST_RESPONSE


@pytest.fixture
def read_response() -> str:
    return READ_RESPONSE


@pytest.fixture
def fault_response() -> str:
    return FAULT_RESPONSE
