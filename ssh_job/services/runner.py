"""Sequential execution of a command list against one node."""

import logging
from collections.abc import Callable, Sequence
from typing import TYPE_CHECKING

from ssh_job.services.session import RemoteSession

if TYPE_CHECKING:
    from ssh_job.models import CommandSpec, ConnectionCredentials, ExecutionResult

logger = logging.getLogger(__name__)

SessionFactory = Callable[[], RemoteSession]


class CommandRunner:
    """Runs commands in order, one fresh RemoteSession per command.

    Commands never run concurrently against the same node: later commands
    may depend on side effects of earlier ones. The first failing command
    aborts the run and its error propagates unchanged.
    """

    def __init__(self, session_factory: SessionFactory) -> None:
        """Initialize runner.

        Args:
            session_factory: Callable returning a new, unused RemoteSession
        """
        self._session_factory = session_factory

    async def run(
        self,
        commands: Sequence["CommandSpec"],
        credentials: "ConnectionCredentials",
    ) -> list["ExecutionResult"]:
        """Execute commands sequentially.

        Args:
            commands: Normalized command specs
            credentials: Credentials of the target node

        Returns:
            One ExecutionResult per command, in command order

        Raises:
            TransportError: If a session fails at the transport level
            UnacceptedExitCode: If a command exits with an unaccepted status
        """
        results: list["ExecutionResult"] = []

        for index, spec in enumerate(commands, start=1):
            logger.debug(
                "Running command %d/%d on %s: %r",
                index,
                len(commands),
                credentials.host,
                spec.command,
            )
            session = self._session_factory()
            result = await session.execute(
                spec.command, credentials, accepted_codes=spec.accepted_codes
            )
            result.cmd = spec.command
            result.catalog_options = spec.catalog_options
            results.append(result)

        logger.info(
            "Completed %d command(s) on %s", len(results), credentials.host
        )
        return results
