"""Application configuration.

Delegates to specialized components:
- NodeInventoryParser: Reads the node inventory file
- HostKeyVerifier: Manages known_hosts
- Settings: Environment variables
"""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path

from ssh_job.config.host_keys import HostKeyVerifier
from ssh_job.config.inventory import NodeInventoryParser
from ssh_job.config.settings import Settings
from ssh_job.models import ConnectionCredentials

logger = logging.getLogger(__name__)


def _split_env_list(key: str) -> list[str] | None:
    value = os.getenv(key, "").strip()
    if not value:
        return None
    return [item.strip() for item in value.split(",") if item.strip()]


@dataclass
class Config:
    """Application configuration.

    Aggregates settings from the node inventory, known_hosts, and environment.
    """

    settings: Settings
    inventory: NodeInventoryParser
    host_keys: HostKeyVerifier
    _nodes_cache: dict[str, ConnectionCredentials] = field(
        default_factory=dict, init=False, repr=False
    )

    @classmethod
    def from_env(cls) -> "Config":
        """Create config from environment.

        Returns:
            Configured instance with all components initialized
        """
        settings = Settings.from_env()

        inventory = NodeInventoryParser(
            settings.inventory_path,
            allowlist=_split_env_list("SSH_JOB_ALLOWLIST"),
            blocklist=_split_env_list("SSH_JOB_BLOCKLIST"),
        )

        host_keys = HostKeyVerifier(
            known_hosts_path=os.getenv("SSH_JOB_KNOWN_HOSTS"),
            strict_checking=cls._get_bool_env("SSH_JOB_STRICT_HOST_KEY_CHECKING", True),
        )

        return cls(settings=settings, inventory=inventory, host_keys=host_keys)

    @classmethod
    def from_inventory(
        cls,
        inventory_path: Path | str,
        settings: Settings | None = None,
    ) -> "Config":
        """Create config for an explicit inventory file.

        Host key verification is not enforced; intended for tests and
        trusted lab networks.
        """
        settings = settings or Settings(inventory_path=str(inventory_path))
        inventory = NodeInventoryParser(inventory_path)
        host_keys = HostKeyVerifier(known_hosts_path="none", strict_checking=False)
        return cls(settings=settings, inventory=inventory, host_keys=host_keys)

    @staticmethod
    def _get_bool_env(key: str, default: bool) -> bool:
        value = os.getenv(key)
        if value is None:
            return default
        return value.lower() != "false"

    def get_nodes(self) -> dict[str, ConnectionCredentials]:
        """Get node credentials from the inventory.

        Lazy loads and caches nodes on first call.
        """
        if not self._nodes_cache:
            self._nodes_cache = self.inventory.parse()
        return self._nodes_cache

    def get_node(self, node_id: str) -> ConnectionCredentials | None:
        """Get credentials for a node, None if unknown."""
        return self.get_nodes().get(node_id)

    # Delegate to settings for convenience
    @property
    def accepted_codes(self) -> list[int]:
        """Job-level accepted exit codes (0 is always added later)."""
        return self.settings.accepted_codes

    @property
    def command_timeout(self) -> float | None:
        """Per-command timeout in seconds, None if disabled."""
        return self.settings.command_timeout

    @property
    def transport(self) -> str:
        """Transport type (http or stdio)."""
        return self.settings.transport

    @property
    def http_host(self) -> str:
        """HTTP server bind address."""
        return self.settings.http_host

    @property
    def http_port(self) -> int:
        """HTTP server port."""
        return self.settings.http_port

    @property
    def known_hosts_path(self) -> str | None:
        """Path to known_hosts file or None if disabled."""
        return self.host_keys.get_known_hosts_path()

    @property
    def strict_host_key_checking(self) -> bool:
        """Whether to reject unknown host keys."""
        return self.host_keys.strict_checking
