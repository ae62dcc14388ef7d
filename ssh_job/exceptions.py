"""Exception hierarchy for ssh_job."""

from collections.abc import Iterable
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ssh_job.models import ExecutionResult


class SshJobError(Exception):
    """Base class for all ssh_job errors."""


class InvalidCommandSpec(SshJobError, ValueError):
    """A command option is malformed or not supported."""


class NodeNotFoundError(SshJobError, KeyError):
    """Node identifier could not be resolved to credentials."""

    def __init__(self, node_id: str):
        self.node_id = node_id
        super().__init__(f"Unknown node: {node_id}")

    def __str__(self) -> str:
        return str(self.args[0])


class TransportError(SshJobError):
    """SSH connection, authentication or protocol failure."""

    def __init__(self, host: str, original_error: BaseException):
        """Initialize transport error.

        Args:
            host: Host the session was talking to
            original_error: Exception raised by the transport
        """
        self.host = host
        self.original_error = original_error
        super().__init__(f"SSH transport error on {host}: {original_error}")


class CommandTimeout(TransportError):
    """Command did not finish within the configured timeout."""

    def __init__(self, host: str, timeout: float):
        self.timeout = timeout
        super().__init__(host, TimeoutError(f"command timed out after {timeout}s"))


class UnacceptedExitCode(SshJobError):
    """Command finished with an exit status outside the accepted set.

    The partial result (stdout, stderr, exit code) is kept for diagnostics.
    """

    def __init__(self, result: "ExecutionResult", accepted_codes: Iterable[int]):
        self.result = result
        self.accepted_codes = frozenset(accepted_codes)
        super().__init__(
            f"Command {result.cmd!r} exited with {result.exit_code}, "
            f"accepted: {sorted(self.accepted_codes)}"
        )


class CatalogParseError(SshJobError):
    """Output of a single command could not be parsed for cataloging."""

    def __init__(self, source: str | None, detail: str):
        self.source = source
        self.detail = detail
        super().__init__(f"Failed to parse data for {source}, {detail}")


class CatalogServiceError(SshJobError):
    """The parsing or persistence service itself failed."""

    def __init__(self, node_id: str, original_error: BaseException):
        self.node_id = node_id
        self.original_error = original_error
        super().__init__(f"Cataloging failed for node {node_id}: {original_error}")
