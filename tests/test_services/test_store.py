"""Tests for catalog stores."""

from pathlib import Path

import pytest

from ssh_job.models import CatalogEntry
from ssh_job.services.store import JsonlCatalogStore, MemoryCatalogStore


@pytest.mark.asyncio
async def test_memory_store_find() -> None:
    """Memory store filters by node and source."""
    store = MemoryCatalogStore()
    await store.create(CatalogEntry(node="n1", source="lshw", data={}))
    await store.create(CatalogEntry(node="n1", source="dmi", data={}))
    await store.create(CatalogEntry(node="n2", source="lshw", data={}))

    assert len(store.find("n1")) == 2
    assert [e.node for e in store.find("n2", "lshw")] == ["n2"]


@pytest.mark.asyncio
async def test_jsonl_store_appends(tmp_path: Path) -> None:
    """Entries are appended as JSON lines and can be read back."""
    path = tmp_path / "catalog" / "entries.jsonl"
    store = JsonlCatalogStore(path)

    await store.create(CatalogEntry(node="n1", source="lshw", data={"cpu": 4}))
    await store.create(CatalogEntry(node="n1", source="uname", data="Linux"))

    assert len(path.read_text().splitlines()) == 2
    assert store.read_all() == [
        CatalogEntry(node="n1", source="lshw", data={"cpu": 4}),
        CatalogEntry(node="n1", source="uname", data="Linux"),
    ]


def test_jsonl_store_missing_file(tmp_path: Path) -> None:
    """Reading a store that was never written returns nothing."""
    assert JsonlCatalogStore(tmp_path / "none.jsonl").read_all() == []
