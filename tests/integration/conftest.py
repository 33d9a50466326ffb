"""Shared fixtures for integration tests."""

import os

import pytest
import pytest_asyncio

from orgcheck.salesforce import SalesforceManager

# Skip all integration tests unless RUN_ORGCHECK_NETWORK_TESTS=1
pytestmark = pytest.mark.skipif(
    os.environ.get("RUN_ORGCHECK_NETWORK_TESTS") != "1",
    reason="Requires network access. Set RUN_ORGCHECK_NETWORK_TESTS=1 to run",
)


@pytest_asyncio.fixture
async def manager():
    """Manager connected to the org named by ORGCHECK_INSTANCE_URL / ORGCHECK_ACCESS_TOKEN."""
    instance_url = os.environ.get("ORGCHECK_INSTANCE_URL")
    access_token = os.environ.get("ORGCHECK_ACCESS_TOKEN")
    if not instance_url or not access_token:
        pytest.skip("ORGCHECK_INSTANCE_URL and ORGCHECK_ACCESS_TOKEN are required")
    async with SalesforceManager.connect(
        instance_url=instance_url, access_token=access_token
    ) as connected:
        yield connected
