"""Node registry backed by the node inventory file."""

import logging
from typing import TYPE_CHECKING

from ssh_job.exceptions import NodeNotFoundError
from ssh_job.models import Node

if TYPE_CHECKING:
    from ssh_job.config import Config

logger = logging.getLogger(__name__)


class InventoryNodeRegistry:
    """Resolves node identifiers against the configured inventory."""

    def __init__(self, config: "Config") -> None:
        self._config = config

    async def resolve(self, node_id: str) -> Node:
        """Look up node credentials.

        Raises:
            NodeNotFoundError: If the node is not in the inventory
        """
        credentials = self._config.get_node(node_id)
        if credentials is None:
            logger.warning("Node %s not found in inventory", node_id)
            raise NodeNotFoundError(node_id)
        return Node(id=node_id, credentials=credentials)

    def list_nodes(self) -> list[str]:
        """Return known node identifiers, sorted."""
        return sorted(self._config.get_nodes())
