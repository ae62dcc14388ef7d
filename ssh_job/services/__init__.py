"""Services for ssh_job."""

from ssh_job.services.cataloger import ResponseCataloger
from ssh_job.services.commands import build_commands
from ssh_job.services.job import JobReport, SshJob
from ssh_job.services.parser import CommandOutputParser
from ssh_job.services.registry import InventoryNodeRegistry
from ssh_job.services.runner import CommandRunner
from ssh_job.services.secrets import FernetDecryptor, PlaintextDecryptor
from ssh_job.services.session import RemoteSession, SessionState
from ssh_job.services.store import JsonlCatalogStore, MemoryCatalogStore

__all__ = [
    "CommandOutputParser",
    "CommandRunner",
    "FernetDecryptor",
    "InventoryNodeRegistry",
    "JobReport",
    "JsonlCatalogStore",
    "MemoryCatalogStore",
    "PlaintextDecryptor",
    "RemoteSession",
    "ResponseCataloger",
    "SessionState",
    "SshJob",
    "build_commands",
]
