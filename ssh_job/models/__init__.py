"""Data models for ssh_job."""

from ssh_job.models.catalog import CatalogEntry, ParsedOutput
from ssh_job.models.command import CatalogOptions, CommandSpec, ExecutionResult
from ssh_job.models.ssh import SSH_PORT, ConnectionCredentials, Node

__all__ = [
    "CatalogEntry",
    "CatalogOptions",
    "CommandSpec",
    "ConnectionCredentials",
    "ExecutionResult",
    "Node",
    "ParsedOutput",
    "SSH_PORT",
]
