"""Command specification and execution result models."""

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class CatalogOptions:
    """Catalog intent attached to a command."""

    source: str | None = None
    format: str | None = None

    def to_dict(self) -> dict[str, str | None]:
        """Return a JSON-friendly representation."""
        return {"source": self.source, "format": self.format}


@dataclass(frozen=True)
class CommandSpec:
    """Normalized description of one remote command."""

    command: str
    accepted_codes: frozenset[int] = frozenset({0})
    catalog_options: CatalogOptions | None = None
    retries: int | None = None

    def __post_init__(self) -> None:
        # Exit status 0 is always a success, whatever the caller asked for
        object.__setattr__(
            self, "accepted_codes", frozenset(self.accepted_codes) | {0}
        )


@dataclass
class ExecutionResult:
    """Result of running a single command over one SSH session.

    stdout and stderr stay None until the first chunk arrives on the
    respective stream.
    """

    stdout: str | None = None
    stderr: str | None = None
    exit_code: int | None = None
    cmd: str = ""
    catalog_options: CatalogOptions | None = field(default=None)

    def append_stdout(self, data: str) -> None:
        """Append a chunk of primary output."""
        self.stdout = (self.stdout or "") + data

    def append_stderr(self, data: str) -> None:
        """Append a chunk of error output."""
        self.stderr = (self.stderr or "") + data

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-friendly representation."""
        return {
            "cmd": self.cmd,
            "stdout": self.stdout,
            "stderr": self.stderr,
            "exit_code": self.exit_code,
            "catalog_options": (
                self.catalog_options.to_dict() if self.catalog_options else None
            ),
        }
