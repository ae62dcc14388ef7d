"""Utility modules for ssh_job."""

from ssh_job.utils.console import ColorfulFormatter

__all__ = ["ColorfulFormatter"]
