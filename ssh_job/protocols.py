"""Protocol interfaces for the collaborators an SSH job depends on.

The job core only talks to these abstractions; concrete implementations
live in ssh_job.services and are wired together by ssh_job.dependencies.

Usage Example:

    from ssh_job.protocols import CatalogStore

    class PrintStore:
        async def create(self, entry):
            print(entry)

    cataloger = ResponseCataloger("node-1", parser, PrintStore())
"""

from collections.abc import Sequence
from typing import Protocol, runtime_checkable

from ssh_job.models import CatalogEntry, ExecutionResult, Node, ParsedOutput


@runtime_checkable
class NodeRegistry(Protocol):
    """Read-only lookup of node credentials."""

    async def resolve(self, node_id: str) -> Node:
        """Resolve a node identifier.

        Raises:
            NodeNotFoundError: If the node is unknown
        """
        ...

    def list_nodes(self) -> list[str]:
        """Return known node identifiers."""
        ...


@runtime_checkable
class SecretDecryptor(Protocol):
    """Decrypts credential secrets right before use."""

    def decrypt(self, ciphertext: str | None) -> str | None:
        """Return plaintext for ciphertext (None stays None)."""
        ...


@runtime_checkable
class OutputParser(Protocol):
    """Classifies raw command output into catalog records.

    Must return exactly one ParsedOutput per input result, in order.
    """

    async def parse(self, results: Sequence[ExecutionResult]) -> list[ParsedOutput]:
        ...


@runtime_checkable
class CatalogStore(Protocol):
    """Persists catalog entries."""

    async def create(self, entry: CatalogEntry) -> None:
        ...
