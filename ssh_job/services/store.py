"""Catalog store implementations."""

import asyncio
import json
import logging
from dataclasses import asdict
from pathlib import Path

from ssh_job.models import CatalogEntry

logger = logging.getLogger(__name__)


class MemoryCatalogStore:
    """Keeps catalog entries in memory."""

    def __init__(self) -> None:
        self.entries: list[CatalogEntry] = []

    async def create(self, entry: CatalogEntry) -> None:
        """Append entry to the in-memory list."""
        self.entries.append(entry)

    def find(self, node: str, source: str | None = None) -> list[CatalogEntry]:
        """Return entries for a node, optionally filtered by source."""
        return [
            e
            for e in self.entries
            if e.node == node and (source is None or e.source == source)
        ]


class JsonlCatalogStore:
    """Appends catalog entries to a JSON-lines file."""

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path).expanduser()
        self._lock = asyncio.Lock()

    async def create(self, entry: CatalogEntry) -> None:
        """Append entry as one JSON line.

        Raises:
            OSError: If the file cannot be written
            TypeError: If entry data is not JSON serializable
        """
        line = json.dumps(asdict(entry), sort_keys=True)
        async with self._lock:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with self.path.open("a", encoding="utf-8") as f:
                f.write(line + "\n")
        logger.debug("Stored catalog %s for %s in %s", entry.source, entry.node, self.path)

    def read_all(self) -> list[CatalogEntry]:
        """Load every entry stored so far."""
        if not self.path.exists():
            return []
        entries = []
        for line in self.path.read_text(encoding="utf-8").splitlines():
            if line.strip():
                entries.append(CatalogEntry(**json.loads(line)))
        return entries
