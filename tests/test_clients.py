"""
Snapshot client tests.
"""
import os

import pytest

from azres.clients import SnapshotResourceClient
from azres.errors import ResourceNotFound, ResourceReadError

FIXTURES = os.path.join(os.path.dirname(__file__), "fixtures")
VNET = (
    "/subscriptions/00000000-0000-0000-0000-000000000000/resourceGroups/rg1"
    "/providers/Microsoft.Network/virtualNetworks/vnet1"
)


class TestSnapshotResourceClient:
    def setup_method(self):
        self.client = SnapshotResourceClient.from_file(os.path.join(FIXTURES, "snapshot.json"))

    def test_loads_all_bodies(self):
        assert len(self.client) == 3

    def test_lookup(self):
        assert self.client.get(VNET, "2021-02-01")["name"] == "vnet1"

    def test_lookup_ignores_case_and_api_version(self):
        body = self.client.get(VNET.upper() + "?api-version=2021-02-01", "2021-02-01")
        assert body["name"] == "vnet1"

    def test_returns_copies(self):
        body = self.client.get(VNET, "2021-02-01")
        body["tags"]["env"] = "changed"
        assert self.client.get(VNET, "2021-02-01")["tags"]["env"] == "test"

    def test_not_found(self):
        with pytest.raises(ResourceNotFound) as exc_info:
            self.client.get(VNET + "2", "2021-02-01")
        assert exc_info.value.resource_id == VNET + "2"

    def test_yaml_snapshot(self, tmp_path):
        f = tmp_path / "snap.yaml"
        f.write_text("/providers/Provider.Test/widgets/foo:\n  name: foo\n")
        client = SnapshotResourceClient.from_file(str(f))
        assert client.get("/providers/Provider.Test/widgets/foo", "2021-01-01") == {"name": "foo"}

    def test_empty_snapshot(self, tmp_path):
        f = tmp_path / "snap.yaml"
        f.write_text("")
        assert len(SnapshotResourceClient.from_file(str(f))) == 0

    def test_missing_file(self):
        with pytest.raises(ResourceReadError):
            SnapshotResourceClient.from_file("/nonexistent/snapshot.json")

    def test_invalid_json(self, tmp_path):
        f = tmp_path / "snap.json"
        f.write_text("{not json")
        with pytest.raises(ResourceReadError):
            SnapshotResourceClient.from_file(str(f))

    def test_not_a_mapping(self, tmp_path):
        f = tmp_path / "snap.json"
        f.write_text("[1, 2]")
        with pytest.raises(ResourceReadError):
            SnapshotResourceClient.from_file(str(f))
