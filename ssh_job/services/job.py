"""SSH job: run a command list on one node and catalog the output."""

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from ssh_job.services.cataloger import ResponseCataloger
from ssh_job.services.commands import build_commands
from ssh_job.services.runner import CommandRunner

if TYPE_CHECKING:
    from ssh_job.dependencies import Dependencies
    from ssh_job.models import CommandSpec, ExecutionResult

logger = logging.getLogger(__name__)


@dataclass
class JobReport:
    """Outcome of a successful job run."""

    node_id: str
    results: list["ExecutionResult"] = field(default_factory=list)
    cataloged: int = 0


class SshJob:
    """Executes remote commands on a target node.

    Commands are validated when the job is constructed, so malformed job
    definitions fail before any network activity.

    Example:
        job = SshJob(deps, "rack-01", ["uname -a", {"command": "lshw -json",
                     "catalog": {"source": "lshw", "format": "json"}}])
        report = await job.run()
    """

    def __init__(
        self,
        deps: "Dependencies",
        target: str,
        commands: Any,
        accepted_codes: Iterable[int] = (),
    ) -> None:
        """Initialize job.

        Args:
            deps: Collaborators (registry, session factory, parser, store)
            target: Node identifier to run against
            commands: Raw command options (string, object, or list of both)
            accepted_codes: Extra exit codes treated as success

        Raises:
            InvalidCommandSpec: If a command option is not supported
        """
        if not isinstance(target, str) or not target:
            raise ValueError("SshJob target must be a non-empty node identifier")
        self.node_id = target
        self.commands: list["CommandSpec"] = build_commands(commands, accepted_codes)
        self._deps = deps

    async def run(self) -> JobReport:
        """Resolve the node, run every command, then catalog the results.

        Raises:
            NodeNotFoundError: If the node cannot be resolved
            TransportError: If a session fails at the transport level
            UnacceptedExitCode: If a command exits with an unaccepted status
            CatalogServiceError: If the parser or store fails
        """
        node = await self._deps.registry.resolve(self.node_id)
        logger.info(
            "Running %d command(s) on node %s (%s)",
            len(self.commands),
            node.id,
            node.credentials.address,
        )

        runner = CommandRunner(self._deps.session_factory)
        results = await runner.run(self.commands, node.credentials)

        cataloger = ResponseCataloger(node.id, self._deps.parser, self._deps.store)
        cataloged = await cataloger.catalog(results)

        return JobReport(node_id=node.id, results=results, cataloged=cataloged)
