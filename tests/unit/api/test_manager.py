"""Unit tests for SalesforceManager."""

from __future__ import annotations

import pytest

from orgcheck.salesforce import (
    MetadataRequest,
    ObjectType,
    QuerySpec,
    QuotaExceededError,
    QuotaPolicy,
    QuotaZone,
    SalesforceManager,
)
from orgcheck.salesforce.io import SalesforceRESTTransport
from orgcheck.salesforce.models import ApiUsage, QueryPage


@pytest.fixture
def manager(transport, watchdog):
    return SalesforceManager(transport, watchdog=watchdog)


class TestSalesforceManager:
    """Test the facade wiring."""

    def test_connect_builds_rest_transport(self):
        manager = SalesforceManager.connect(
            instance_url="https://acme.my.salesforce.com",
            access_token="token",
            api_version="60.0",
            quota_policy=QuotaPolicy(warning_threshold=0.5, fatal_threshold=0.8),
        )

        assert isinstance(manager.transport, SalesforceRESTTransport)
        assert manager.api_version == 60
        assert manager.watchdog.policy.fatal_threshold == 0.8

    def test_default_watchdog(self, transport):
        manager = SalesforceManager(transport)
        assert manager.watchdog.policy == QuotaPolicy()

    @pytest.mark.asyncio
    async def test_run_queries(self, manager, transport):
        transport.queries["SELECT Id FROM Account"] = QueryPage(records=[{"Id": "001"}])

        [result] = await manager.run_queries([QuerySpec(text="SELECT Id FROM Account")])

        assert result.records == [{"Id": "001"}]

    @pytest.mark.asyncio
    async def test_describe_metadata(self, manager, transport):
        transport.listings["Flow"] = [{"fullName": "MyFlow"}]

        response = await manager.describe_metadata([MetadataRequest(type="Flow", members=["*"])])

        assert [item["fullName"] for item in response["Flow"]] == ["MyFlow"]

    @pytest.mark.asyncio
    async def test_fetch_at_scale(self, manager, transport):
        records = await manager.fetch_at_scale("CustomField", ["00N1", "00N2"])

        assert records == [{"Id": "00N1"}, {"Id": "00N2"}]
        [(_, sub_requests, _)] = transport.calls_named("invoke_composite")
        assert sub_requests[0].url == "/services/data/v61.0/tooling/sobjects/CustomField/00N1"

    @pytest.mark.asyncio
    async def test_engines_share_one_watchdog(self, manager, transport):
        transport.usage_per_call = [ApiUsage(used=95, limit=100)]

        with pytest.raises(QuotaExceededError):
            await manager.run_queries([QuerySpec(text="SELECT Id FROM Account")])

        with pytest.raises(QuotaExceededError):
            await manager.fetch_at_scale("CustomField", ["00N1"])
        with pytest.raises(QuotaExceededError):
            await manager.describe_global()
        assert len(transport.calls) == 1

    @pytest.mark.asyncio
    async def test_quota_snapshot(self, manager, transport):
        transport.usage_per_call = [ApiUsage(used=7500, limit=10000)]

        await manager.record_count("Account")
        snapshot = manager.get_quota_snapshot()

        assert snapshot.ratio == pytest.approx(0.75)
        assert snapshot.percentage == 75.0
        assert snapshot.zone is QuotaZone.YELLOW
        assert snapshot.is_yellow

    @pytest.mark.asyncio
    async def test_describe_calls(self, manager, transport):
        transport.sobjects = [{"name": "Account"}]
        transport.counts["Account"] = 12

        assert await manager.describe_global() == [{"name": "Account"}]
        assert (await manager.describe("Account"))["name"] == "Account"
        assert await manager.record_count("Account") == 12
        assert [call[0] for call in transport.calls] == [
            "describe_global",
            "describe_sobject",
            "record_count",
        ]

    @pytest.mark.asyncio
    async def test_context_manager_closes_transport(self, transport):
        async with SalesforceManager(transport) as manager:
            assert manager.transport is transport

        assert transport.closed


class TestSalesforceManagerHelpers:
    """Test the pure helpers exposed by the facade."""

    def test_is_version_old(self, manager):
        # transport reports 61.0
        assert manager.is_version_old(52)
        assert not manager.is_version_old(53)
        assert manager.is_version_old(59, definition_of_old=0)
        assert not manager.is_version_old(60, definition_of_old=1)

    def test_static_helpers(self):
        assert SalesforceManager.case_safe_id("001000000000001AAA") == "001000000000001"
        assert list(SalesforceManager.chunk([1, 2, 3], 2)) == [[1, 2], [3]]
        assert SalesforceManager.get_object_type("Invoice__c") is ObjectType.CUSTOM_SOBJECT
        assert SalesforceManager.resolve_setup_url("user", "005000000000001") == (
            "/lightning/setup/ManageUsers/page?address=%2F005000000000001"
            "%3Fnoredirect%3D1%26isUserEntityOverride%3D1"
        )
