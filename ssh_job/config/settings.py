"""Application settings from environment variables.

Centralized environment variable parsing and validation.
"""

import logging
import os
from dataclasses import dataclass, field

logger = logging.getLogger(__name__)

DEFAULT_INVENTORY = "~/.config/ssh_job/nodes.json"


@dataclass
class Settings:
    """Application settings from environment.

    Handles parsing, validation, and defaults for all env vars.
    """

    # Node inventory and secrets
    inventory_path: str = field(default=DEFAULT_INVENTORY)
    secret_key: str | None = field(default=None, repr=False)

    # Catalog
    catalog_path: str | None = field(default=None)

    # Execution
    accepted_codes: list[int] = field(default_factory=list)
    command_timeout: float | None = field(default=None)

    # Transport
    transport: str = field(default="stdio")
    http_host: str = field(default="127.0.0.1")
    http_port: int = field(default=8000)

    # Logging
    log_level: str = field(default="INFO")

    @classmethod
    def from_env(cls) -> "Settings":
        """Load settings from SSH_JOB_* environment variables.

        Returns:
            Settings instance with values from environment
        """
        return cls(
            inventory_path=os.getenv("SSH_JOB_INVENTORY", DEFAULT_INVENTORY),
            secret_key=os.getenv("SSH_JOB_SECRET_KEY") or None,
            catalog_path=os.getenv("SSH_JOB_CATALOG_PATH") or None,
            accepted_codes=cls._get_int_list("SSH_JOB_ACCEPTED_CODES"),
            command_timeout=cls._get_timeout("SSH_JOB_COMMAND_TIMEOUT"),
            transport=cls._get_transport(),
            http_host=os.getenv("SSH_JOB_HTTP_HOST", "127.0.0.1"),
            http_port=cls._get_int("SSH_JOB_HTTP_PORT", 8000),
            log_level=os.getenv("SSH_JOB_LOG_LEVEL", "INFO").upper(),
        )

    @staticmethod
    def _get_int(key: str, default: int) -> int:
        """Get integer from environment.

        Args:
            key: Environment variable key
            default: Default value if not set

        Returns:
            Integer value from environment or default
        """
        value = os.getenv(key)
        if value is None:
            return default

        try:
            return int(value)
        except ValueError:
            logger.warning("Invalid int for %s: %s, using default %d", key, value, default)
            return default

    @staticmethod
    def _get_int_list(key: str) -> list[int]:
        """Get comma-separated integers, skipping invalid entries."""
        value = os.getenv(key, "").strip()
        codes = []
        for part in value.split(","):
            part = part.strip()
            if not part:
                continue
            try:
                codes.append(int(part))
            except ValueError:
                logger.warning("Ignoring invalid exit code in %s: %s", key, part)
        return codes

    @staticmethod
    def _get_timeout(key: str) -> float | None:
        """Get a positive timeout in seconds, None when unset or disabled."""
        value = os.getenv(key)
        if not value:
            return None
        try:
            timeout = float(value)
        except ValueError:
            logger.warning("Invalid timeout for %s: %s, timeout disabled", key, value)
            return None
        return timeout if timeout > 0 else None

    @staticmethod
    def _get_transport() -> str:
        """Get transport from environment with validation.

        Returns:
            Transport type ("http" or "stdio")
        """
        transport = os.getenv("SSH_JOB_TRANSPORT", "").lower()
        if transport in ("http", "stdio"):
            return transport
        return "stdio"
