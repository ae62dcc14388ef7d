"""MCP tools for ssh_job."""

from ssh_job.tools.ssh_job import list_nodes, ssh_job

__all__ = ["list_nodes", "ssh_job"]
