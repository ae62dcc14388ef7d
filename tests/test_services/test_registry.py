"""Tests for the inventory-backed node registry."""

import json
from pathlib import Path

import pytest

from ssh_job.config import Config
from ssh_job.exceptions import NodeNotFoundError
from ssh_job.services.registry import InventoryNodeRegistry


@pytest.fixture
def registry(tmp_path: Path) -> InventoryNodeRegistry:
    """Registry over a two-node inventory."""
    inventory = tmp_path / "nodes.json"
    inventory.write_text(json.dumps({
        "nodes": {
            "rack-02": {"host": "10.1.0.12", "user": "admin", "password": "enc"},
            "rack-01": {"host": "10.1.0.11", "user": "root", "privateKey": "enc-key"},
        }
    }))
    return InventoryNodeRegistry(Config.from_inventory(inventory))


@pytest.mark.asyncio
async def test_resolve_known_node(registry: InventoryNodeRegistry) -> None:
    """Known nodes resolve to their credentials."""
    node = await registry.resolve("rack-01")

    assert node.id == "rack-01"
    assert node.credentials.host == "10.1.0.11"
    assert node.credentials.username == "root"
    assert node.credentials.private_key == "enc-key"
    assert node.credentials.password is None
    assert node.credentials.port == 22


@pytest.mark.asyncio
async def test_resolve_unknown_node(registry: InventoryNodeRegistry) -> None:
    """Unknown nodes raise NodeNotFoundError."""
    with pytest.raises(NodeNotFoundError) as exc_info:
        await registry.resolve("rack-99")

    assert exc_info.value.node_id == "rack-99"
    assert str(exc_info.value) == "Unknown node: rack-99"


def test_list_nodes_sorted(registry: InventoryNodeRegistry) -> None:
    """Node identifiers are listed in sorted order."""
    assert registry.list_nodes() == ["rack-01", "rack-02"]
