"""ssh_job: run ordered command lists on remote nodes over SSH and catalog the output."""

__version__ = "0.1.0"
