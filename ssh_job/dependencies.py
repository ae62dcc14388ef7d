"""Dependency injection container for ssh_job.

Holds the external collaborators an SSH job talks to, so they are passed
explicitly instead of looked up at runtime.
"""

from dataclasses import dataclass

from ssh_job.config import Config
from ssh_job.protocols import CatalogStore, NodeRegistry, OutputParser, SecretDecryptor
from ssh_job.services.parser import CommandOutputParser
from ssh_job.services.registry import InventoryNodeRegistry
from ssh_job.services.secrets import FernetDecryptor, PlaintextDecryptor
from ssh_job.services.session import RemoteSession
from ssh_job.services.store import JsonlCatalogStore, MemoryCatalogStore


@dataclass
class Dependencies:
    """Container for ssh_job dependencies.

    Example:
        deps = Dependencies.create()
        report = await SshJob(deps, "rack-01", ["uptime"]).run()
    """

    config: Config
    registry: NodeRegistry
    decryptor: SecretDecryptor
    parser: OutputParser
    store: CatalogStore

    @classmethod
    def create(cls) -> "Dependencies":
        """Create dependencies from environment configuration."""
        return cls.from_config(Config.from_env())

    @classmethod
    def from_config(cls, config: Config) -> "Dependencies":
        """Create default collaborators for a configuration.

        Args:
            config: Config instance

        Returns:
            Dependencies wired from config settings
        """
        settings = config.settings
        decryptor: SecretDecryptor = (
            FernetDecryptor(settings.secret_key)
            if settings.secret_key
            else PlaintextDecryptor()
        )
        store: CatalogStore = (
            JsonlCatalogStore(settings.catalog_path)
            if settings.catalog_path
            else MemoryCatalogStore()
        )
        return cls(
            config=config,
            registry=InventoryNodeRegistry(config),
            decryptor=decryptor,
            parser=CommandOutputParser(),
            store=store,
        )

    def session_factory(self) -> RemoteSession:
        """Create a new single-use RemoteSession."""
        return RemoteSession(
            self.decryptor,
            known_hosts=self.config.known_hosts_path,
            strict_host_key_checking=self.config.strict_host_key_checking,
            command_timeout=self.config.command_timeout,
        )
