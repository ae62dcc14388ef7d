"""Routing of command output into the catalog."""

import logging
from collections.abc import Sequence
from typing import TYPE_CHECKING

from ssh_job.exceptions import CatalogServiceError
from ssh_job.models import CatalogEntry
from ssh_job.models.catalog import UNKNOWN_SOURCE

if TYPE_CHECKING:
    from ssh_job.models import ExecutionResult, ParsedOutput
    from ssh_job.protocols import CatalogStore, OutputParser

logger = logging.getLogger(__name__)


class ResponseCataloger:
    """Parses catalog-bound results and persists the significant ones.

    Per-record parse errors are logged and skipped. Failures of the parser
    or store themselves raise CatalogServiceError.
    """

    def __init__(
        self,
        node_id: str,
        parser: "OutputParser",
        store: "CatalogStore",
    ) -> None:
        self.node_id = node_id
        self._parser = parser
        self._store = store

    @staticmethod
    def select(results: Sequence["ExecutionResult"]) -> list["ExecutionResult"]:
        """Return the results that carry catalog options."""
        return [r for r in results if r.catalog_options is not None]

    async def catalog(self, results: Sequence["ExecutionResult"]) -> int:
        """Parse and store catalog-bound results.

        Args:
            results: All results of a run

        Returns:
            Number of catalog entries created

        Raises:
            CatalogServiceError: If parsing or storing fails as a whole
        """
        logger.debug("Received remote command output from node %s", self.node_id)

        selected = self.select(results)
        if not selected:
            logger.debug("No catalog-bound results for node %s", self.node_id)
            return 0

        try:
            parsed = await self._parser.parse(selected)
        except Exception as e:
            logger.error("Job error processing catalog output for %s: %s", self.node_id, e)
            raise CatalogServiceError(self.node_id, e) from e

        if len(parsed) != len(selected):
            error = ValueError(
                f"parser returned {len(parsed)} result(s) for {len(selected)} input(s)"
            )
            logger.error("Job error processing catalog output for %s: %s", self.node_id, error)
            raise CatalogServiceError(self.node_id, error)

        created = 0
        for item in parsed:
            if await self._handle(item):
                created += 1

        logger.info(
            "Stored %d of %d catalog result(s) for node %s",
            created,
            len(parsed),
            self.node_id,
        )
        return created

    async def _handle(self, item: "ParsedOutput") -> bool:
        """Store one parsed item if it is marked for storage."""
        if item.error:
            logger.error("Failed to parse data for %s, %s", item.source, item.error)
            return False

        if not item.store:
            logger.info(
                "Catalog result for %s has not been marked as significant. Not storing.",
                item.source,
            )
            return False

        entry = CatalogEntry(
            node=self.node_id,
            source=item.source or UNKNOWN_SOURCE,
            data=item.data,
        )
        try:
            await self._store.create(entry)
        except Exception as e:
            logger.error("Failed to store catalog %s for %s: %s", entry.source, self.node_id, e)
            raise CatalogServiceError(self.node_id, e) from e
        return True
