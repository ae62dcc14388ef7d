"""SSH host key verification settings.

Resolves the known_hosts file handed to asyncssh for MITM prevention.
"""

import logging
from pathlib import Path

logger = logging.getLogger(__name__)

DISABLED = "none"


class HostKeyVerifier:
    """Resolves the known_hosts file used when connecting to nodes."""

    def __init__(
        self,
        known_hosts_path: str | None = None,
        strict_checking: bool = True,
    ):
        """Initialize host key verifier.

        Args:
            known_hosts_path: Path to known_hosts file or 'none' to disable
            strict_checking: Reject unknown host keys

        Raises:
            FileNotFoundError: If strict mode and the file is missing
        """
        self.strict_checking = strict_checking
        self._known_hosts = self._resolve_known_hosts(known_hosts_path)

    def _resolve_known_hosts(self, env_value: str | None) -> str | None:
        """Resolve known_hosts path, failing closed in strict mode.

        Returns:
            Path to known_hosts file or None to disable verification
        """
        if env_value and env_value.lower() == DISABLED:
            logger.critical(
                "SSH host key verification DISABLED - vulnerable to MITM attacks. "
                "Only use in trusted networks."
            )
            return None

        path = (
            Path(env_value).expanduser()
            if env_value
            else Path.home() / ".ssh" / "known_hosts"
        )
        if path.exists():
            return str(path)

        if self.strict_checking:
            raise FileNotFoundError(
                f"SSH host key verification required but known_hosts not found "
                f"at {path}.\n\n"
                f"To fix this:\n"
                f"1. Add host keys: ssh-keyscan <hostname> >> {path}\n"
                f"2. Or point SSH_JOB_KNOWN_HOSTS at another file\n"
                f"3. Or disable verification (NOT RECOMMENDED): "
                f"SSH_JOB_KNOWN_HOSTS=none"
            )

        logger.warning(
            "known_hosts not found at %s, verification disabled. This is insecure!",
            path,
        )
        return None

    def get_known_hosts_path(self) -> str | None:
        """Get path to known_hosts file, None if verification is disabled."""
        return self._known_hosts

    def is_enabled(self) -> bool:
        """Check if host key verification is enabled."""
        return self._known_hosts is not None
