"""
Data source read tests: identifier, client boundary, flattening and projection.
"""
import json
import os
from datetime import timedelta

import pytest

from azres.clients import SnapshotResourceClient
from azres.errors import (
    InvalidParentId,
    InvalidResourceType,
    ResourceNotFound,
    ResourceReadError,
)
from azres.models.state import DataSourceConfig
from azres.services import data_source
from azres.services.data_source import DEFAULT_READ_TIMEOUT, ReadContext

FIXTURES = os.path.join(os.path.dirname(__file__), "fixtures")

RG = "/subscriptions/00000000-0000-0000-0000-000000000000/resourceGroups/rg1"
VNET = RG + "/providers/Microsoft.Network/virtualNetworks/vnet1"


class FakeClient:
    def __init__(self, bodies=None, error=None):
        self.bodies = bodies or {}
        self.error = error
        self.calls = []

    def get(self, resource_id, api_version, timeout=None):
        self.calls.append((resource_id, api_version, timeout))
        if self.error is not None:
            raise self.error
        if resource_id not in self.bodies:
            raise ResourceNotFound(resource_id)
        return self.bodies[resource_id]


def _vnet_config(**overrides):
    values = dict(
        name="vnet1",
        parent_id=RG,
        type="Microsoft.Network/virtualNetworks@2021-02-01",
        response_export_values=["properties.addressSpace"],
        label="vnet",
    )
    values.update(overrides)
    return DataSourceConfig(**values)


VNET_BODY = {
    "name": "vnet1",
    "location": "West Europe",
    "tags": {"env": "test"},
    "properties": {"addressSpace": {"addressPrefixes": ["10.0.0.0/16"]}, "subnets": []},
}


class TestRead:
    def test_read_sets_state(self):
        client = FakeClient({VNET: VNET_BODY})
        state = data_source.read(_vnet_config(), ReadContext(client=client))
        assert state.id == VNET + "?api-version=2021-02-01"
        assert state.name == "vnet1"
        assert state.parent_id == RG
        assert state.type == "Microsoft.Network/virtualNetworks@2021-02-01"
        assert state.location == "westeurope"
        assert state.tags == {"env": "test"}
        assert state.identity == []
        assert json.loads(state.output) == {"properties": {"addressSpace": {"addressPrefixes": ["10.0.0.0/16"]}}}
        assert state.label == "vnet"

    def test_client_called_with_resource_id_and_version(self):
        client = FakeClient({VNET: VNET_BODY})
        ctx = ReadContext(client=client, timeout=timedelta(seconds=30))
        data_source.read(_vnet_config(), ctx)
        assert client.calls == [(VNET, "2021-02-01", 30.0)]

    def test_default_timeout(self):
        assert ReadContext(client=FakeClient()).timeout == DEFAULT_READ_TIMEOUT == timedelta(minutes=5)

    def test_no_export_values(self):
        client = FakeClient({VNET: VNET_BODY})
        state = data_source.read(_vnet_config(response_export_values=[]), ReadContext(client=client))
        assert state.output == "{}"

    def test_missing_well_known_fields(self):
        client = FakeClient({VNET: {"tags": None, "properties": {}}})
        state = data_source.read(_vnet_config(), ReadContext(client=client))
        assert state.tags == {}
        assert state.location == ""
        assert state.identity == []
        assert state.output == "{}"

    def test_non_object_body(self):
        client = FakeClient({VNET: [{"a": 1}]})
        state = data_source.read(_vnet_config(response_export_values=["[0].a"]), ReadContext(client=client))
        assert state.tags == {}
        assert json.loads(state.output) == [{"a": 1}]

    def test_not_found_propagates_unchanged(self):
        error = ResourceNotFound(VNET)
        client = FakeClient(error=error)
        with pytest.raises(ResourceNotFound) as exc_info:
            data_source.read(_vnet_config(), ReadContext(client=client))
        assert exc_info.value is error

    def test_client_failure_is_wrapped(self):
        cause = RuntimeError("connection reset")
        client = FakeClient(error=cause)
        with pytest.raises(ResourceReadError) as exc_info:
            data_source.read(_vnet_config(), ReadContext(client=client))
        assert exc_info.value.__cause__ is cause
        assert VNET in str(exc_info.value)
        assert "connection reset" in str(exc_info.value)

    def test_invalid_identifier_aborts_before_client_call(self):
        client = FakeClient({VNET: VNET_BODY})
        with pytest.raises(InvalidResourceType):
            data_source.read(_vnet_config(type="Microsoft.Network/virtualNetworks"), ReadContext(client=client))
        with pytest.raises(InvalidParentId):
            data_source.read(_vnet_config(parent_id="rg1"), ReadContext(client=client))
        assert client.calls == []

    def test_read_all_with_resources_named_providers(self):
        named = RG + "/providers/Microsoft.Network/virtualNetworks/providers"
        client = FakeClient({named: VNET_BODY, named + "/subnets/providers": {"name": "providers"}})
        configs = [
            _vnet_config(name="providers", label="vnet"),
            _vnet_config(name="x", parent_id=named, type="Microsoft.Network/virtualNetworks/providers@2021-02-01", label="bad"),
            _vnet_config(
                name="providers", parent_id=named,
                type="Microsoft.Network/virtualNetworks/subnets@2021-02-01", label="subnet",
            ),
        ]
        states, failures = data_source.read_all(configs, ReadContext(client=client))
        assert [s.label for s in states] == ["vnet", "subnet"]
        assert states[1].id == named + "/subnets/providers?api-version=2021-02-01"
        assert [(f.config.label, type(f.error)) for f in failures] == [("bad", InvalidResourceType)]

    def test_to_dict(self):
        client = FakeClient({VNET: dict(VNET_BODY, identity={"type": "SystemAssigned", "principalId": "p"})})
        state = data_source.read(_vnet_config(), ReadContext(client=client)).to_dict()
        assert state["identity"] == [{"type": "SystemAssigned", "identity_ids": [], "principal_id": "p", "tenant_id": ""}]
        assert set(state) == {"id", "name", "parent_id", "type", "location", "tags", "identity", "output"}


class TestReadAll:
    def setup_method(self):
        from azres.parsers import manifest
        self.configs = manifest.parse_file(os.path.join(FIXTURES, "data_sources.yaml"))
        self.client = SnapshotResourceClient.from_file(os.path.join(FIXTURES, "snapshot.json"))

    def test_failures_do_not_stop_other_reads(self):
        states, failures = data_source.read_all(self.configs, ReadContext(client=self.client))
        assert [s.label for s in states] == ["account"]
        assert [(f.config.label, type(f.error)) for f in failures] == [
            ("missing", ResourceNotFound),
            ("broken", InvalidResourceType),
        ]

    def test_account_projection_and_identity(self):
        states, _ = data_source.read_all(self.configs, ReadContext(client=self.client))
        account = states[0]
        assert json.loads(account.output) == {
            "properties": {"primaryEndpoints": {"blob": "https://acct1.blob.core.windows.net/"}},
            "sku": {"name": "Standard_LRS"},
        }
        assert account.identity[0].type == "SystemAssigned, UserAssigned"
        assert len(account.identity[0].identity_ids) == 1
        assert account.location == "westeurope"

    def test_failure_to_dict(self):
        _, failures = data_source.read_all(self.configs, ReadContext(client=self.client))
        d = failures[1].to_dict()
        assert d["label"] == "broken"
        assert d["error"] == "InvalidResourceType"
        assert "Microsoft.Storage/storageAccounts" in d["message"]
