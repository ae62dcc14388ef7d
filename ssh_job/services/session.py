"""Single-use SSH session that runs exactly one remote command.

State machine:

    NEW -> CONNECTING -> READY -> EXECUTING -> CLOSING -> CLOSED
              |            |          |
              +------------+----------+--> FAILED

- CONNECTING: secrets are decrypted and the SSH connection is opened.
- READY: authentication succeeded, the command channel is opened.
- EXECUTING: stdout/stderr chunks are appended to the result as they arrive.
- CLOSING: the channel closed with an exit status, the connection is torn down.
- CLOSED: the connection is gone; the exit status is checked against the
  accepted codes and the result is returned or UnacceptedExitCode is raised.
- FAILED: a transport error happened; TransportError is raised and no
  partial result is kept. An open connection is still closed.

Channel data is decoded as UTF-8, with undecodable bytes replaced.
"""

import asyncio
import logging
from collections.abc import Iterable
from enum import Enum
from typing import TYPE_CHECKING

import asyncssh

from ssh_job.exceptions import CommandTimeout, TransportError, UnacceptedExitCode
from ssh_job.models import ExecutionResult

if TYPE_CHECKING:
    from ssh_job.models import ConnectionCredentials
    from ssh_job.protocols import SecretDecryptor

logger = logging.getLogger(__name__)

DEFAULT_ACCEPTED_CODES = frozenset({0})

# Recorded when the channel closes without an exit status (e.g. killed by signal)
MISSING_EXIT_STATUS = -1

OUTPUT_ENCODING = "utf-8"


class SessionState(str, Enum):
    """Lifecycle states of a RemoteSession."""

    NEW = "new"
    CONNECTING = "connecting"
    READY = "ready"
    EXECUTING = "executing"
    CLOSING = "closing"
    CLOSED = "closed"
    FAILED = "failed"


class _OutputCollector(asyncssh.SSHClientSession):
    """Channel callbacks that feed output into an ExecutionResult."""

    def __init__(self, result: ExecutionResult) -> None:
        self._result = result
        self.channel_error: Exception | None = None

    def data_received(self, data: str, datatype: int | None) -> None:
        if datatype == asyncssh.EXTENDED_DATA_STDERR:
            self._result.append_stderr(data)
        else:
            self._result.append_stdout(data)

    def connection_lost(self, exc: Exception | None) -> None:
        self.channel_error = exc


class RemoteSession:
    """Owns one SSH connection for one command execution."""

    def __init__(
        self,
        decryptor: "SecretDecryptor",
        known_hosts: str | None = None,
        strict_host_key_checking: bool = True,
        command_timeout: float | None = None,
    ) -> None:
        """Initialize session.

        Args:
            decryptor: Service used to decrypt password and private key
            known_hosts: Path to known_hosts file, or None to disable verification
            strict_host_key_checking: Whether to reject unknown host keys
            command_timeout: Seconds to wait for the command, None waits forever
        """
        self._decryptor = decryptor
        self._known_hosts = known_hosts
        self._strict_host_key = strict_host_key_checking
        self._command_timeout = command_timeout
        self._state = SessionState.NEW

    @property
    def state(self) -> SessionState:
        """Current lifecycle state."""
        return self._state

    def _transition(self, state: SessionState) -> None:
        logger.debug("Session state %s -> %s", self._state.value, state.value)
        self._state = state

    @staticmethod
    def _client_keys(private_key: str | None) -> list[asyncssh.SSHKey] | None:
        if not private_key:
            return None
        return [asyncssh.import_private_key(private_key)]

    async def _connect(
        self, credentials: "ConnectionCredentials"
    ) -> asyncssh.SSHClientConnection:
        """Decrypt secrets and open the connection.

        Raises:
            ValueError: If a secret cannot be decrypted or the key imported
            asyncssh.Error, OSError: If connecting or authenticating fails
        """
        self._transition(SessionState.CONNECTING)
        password = self._decryptor.decrypt(credentials.password)
        private_key = self._decryptor.decrypt(credentials.private_key)
        client_keys = self._client_keys(private_key)

        logger.info("Opening SSH session to %s", credentials.address)
        try:
            return await asyncssh.connect(
                credentials.host,
                port=credentials.port,
                username=credentials.username,
                password=password,
                client_keys=client_keys,
                known_hosts=self._known_hosts,
            )
        except asyncssh.HostKeyNotVerifiable as e:
            if self._strict_host_key:
                logger.error(
                    "Host key verification failed for %s: %s. "
                    "Add the host key to %s or set "
                    "SSH_JOB_STRICT_HOST_KEY_CHECKING=false",
                    credentials.host,
                    e,
                    self._known_hosts,
                )
                raise
            logger.warning(
                "Host key not verified for %s (strict mode disabled): %s",
                credentials.host,
                e,
            )
            return await asyncssh.connect(
                credentials.host,
                port=credentials.port,
                username=credentials.username,
                password=password,
                client_keys=client_keys,
                known_hosts=None,
            )

    async def _run_command(
        self,
        conn: asyncssh.SSHClientConnection,
        command: str,
        result: ExecutionResult,
    ) -> None:
        """Run the command and wait for its channel to close."""
        channel, collector = await conn.create_session(
            lambda: _OutputCollector(result),
            command,
            encoding=OUTPUT_ENCODING,
            errors="replace",
        )
        self._transition(SessionState.EXECUTING)

        await channel.wait_closed()
        if collector.channel_error is not None:
            raise collector.channel_error

        status = channel.get_exit_status()
        result.exit_code = MISSING_EXIT_STATUS if status is None else status
        logger.debug("Command %r closed with exit status %s", command, result.exit_code)

    async def _wait_for_command(
        self,
        conn: asyncssh.SSHClientConnection,
        command: str,
        result: ExecutionResult,
        host: str,
    ) -> None:
        """Run the command, bounded by command_timeout when one is set."""
        timeout = self._command_timeout
        if timeout is None:
            await self._run_command(conn, command, result)
            return

        try:
            await asyncio.wait_for(self._run_command(conn, command, result), timeout)
        except asyncio.TimeoutError as e:
            logger.error("Command %r on %s timed out after %ss", command, host, timeout)
            raise CommandTimeout(host, timeout) from e

    async def execute(
        self,
        command: str,
        credentials: "ConnectionCredentials",
        accepted_codes: Iterable[int] = DEFAULT_ACCEPTED_CODES,
    ) -> ExecutionResult:
        """Run command on the host described by credentials.

        Args:
            command: Shell command to execute
            credentials: Node credentials with encrypted secrets
            accepted_codes: Exit codes treated as success (0 always included)

        Returns:
            ExecutionResult with accumulated stdout/stderr and exit code

        Raises:
            TransportError: Connection, authentication or protocol failure
            CommandTimeout: If command_timeout was set and expired
            UnacceptedExitCode: Exit status not in accepted_codes
            RuntimeError: If the session has already been used
        """
        if self._state is not SessionState.NEW:
            raise RuntimeError("RemoteSession is single-use")

        accepted = frozenset(accepted_codes) | {0}
        result = ExecutionResult(cmd=command)

        try:
            conn = await self._connect(credentials)
        except (asyncssh.Error, OSError, ValueError) as e:
            self._transition(SessionState.FAILED)
            logger.error("SSH connection to %s failed: %s", credentials.address, e)
            raise TransportError(credentials.host, e) from e

        self._transition(SessionState.READY)
        try:
            await self._wait_for_command(conn, command, result, credentials.host)
        except CommandTimeout:
            self._transition(SessionState.FAILED)
            raise
        except (asyncssh.Error, OSError) as e:
            self._transition(SessionState.FAILED)
            logger.error("SSH session on %s failed: %s", credentials.host, e)
            raise TransportError(credentials.host, e) from e
        except BaseException:
            # Cancellation or an unexpected error
            self._transition(SessionState.FAILED)
            raise
        finally:
            if self._state is not SessionState.FAILED:
                self._transition(SessionState.CLOSING)
            conn.close()
            await conn.wait_closed()

        self._transition(SessionState.CLOSED)

        if result.exit_code not in accepted:
            logger.warning(
                "Command %r on %s exited with %s (accepted: %s)",
                command,
                credentials.host,
                result.exit_code,
                sorted(accepted),
            )
            raise UnacceptedExitCode(result, accepted)

        logger.info(
            "Command %r on %s completed with exit status %d",
            command,
            credentials.host,
            result.exit_code,
        )
        return result
