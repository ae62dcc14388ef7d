"""Configuration module for ssh_job.

Provides focused classes for different configuration concerns:
- Config: Main configuration class (aggregates all components)
- NodeInventoryParser: Parses the JSON node inventory
- HostKeyVerifier: Manages SSH host key verification
- Settings: Environment variable configuration
"""

from ssh_job.config.host_keys import HostKeyVerifier
from ssh_job.config.inventory import NodeInventoryParser
from ssh_job.config.main import Config
from ssh_job.config.settings import Settings

__all__ = ["Config", "HostKeyVerifier", "NodeInventoryParser", "Settings"]
