"""Node inventory file parser.

Reads a JSON inventory of nodes with encrypted credentials:

    {
        "nodes": {
            "rack-01": {
                "host": "10.1.0.11",
                "user": "admin",
                "password": "<ciphertext>",
                "privateKey": "<ciphertext>"
            }
        }
    }
"""

import json
import logging
from pathlib import Path
from typing import Any

from ssh_job.models import ConnectionCredentials

logger = logging.getLogger(__name__)


class NodeInventoryParser:
    """Parser for node inventory files.

    Supports allowlist/blocklist filtering of node identifiers.
    """

    def __init__(
        self,
        inventory_path: Path | str,
        allowlist: list[str] | None = None,
        blocklist: list[str] | None = None,
    ):
        """Initialize inventory parser.

        Args:
            inventory_path: Path to JSON inventory file
            allowlist: Only include these nodes (if set)
            blocklist: Exclude these nodes
        """
        self.inventory_path = Path(inventory_path).expanduser()
        self.allowlist = set(allowlist) if allowlist else None
        self.blocklist = set(blocklist) if blocklist else set()

    def parse(self) -> dict[str, ConnectionCredentials]:
        """Parse inventory and return node credentials.

        Malformed entries are logged and skipped.

        Returns:
            Dictionary mapping node identifier to ConnectionCredentials
        """
        if not self.inventory_path.exists():
            logger.warning("Node inventory not found: %s", self.inventory_path)
            return {}

        try:
            content = json.loads(self.inventory_path.read_text(encoding="utf-8"))
            logger.debug("Reading node inventory from %s", self.inventory_path)
        except (OSError, ValueError) as e:
            logger.warning("Cannot read node inventory %s: %s", self.inventory_path, e)
            return {}

        raw_nodes = content.get("nodes") if isinstance(content, dict) else None
        if not isinstance(raw_nodes, dict):
            logger.warning("Node inventory %s has no 'nodes' object", self.inventory_path)
            return {}

        nodes: dict[str, ConnectionCredentials] = {}
        for node_id, entry in raw_nodes.items():
            if not self._is_node_allowed(node_id):
                continue
            credentials = self._build_credentials(node_id, entry)
            if credentials is not None:
                nodes[node_id] = credentials

        logger.info("Parsed %d node(s) from %s", len(nodes), self.inventory_path)
        return nodes

    @staticmethod
    def _build_credentials(node_id: str, entry: Any) -> ConnectionCredentials | None:
        if not isinstance(entry, dict) or not entry.get("host"):
            logger.warning("Skipping node %s: missing host", node_id)
            return None

        username = entry.get("user") or entry.get("username")
        if not username:
            logger.warning("Skipping node %s: missing user", node_id)
            return None

        return ConnectionCredentials(
            host=str(entry["host"]),
            username=str(username),
            password=entry.get("password"),
            private_key=entry.get("privateKey"),
        )

    def _is_node_allowed(self, name: str) -> bool:
        """Check if node passes allowlist/blocklist filters.

        Args:
            name: Node identifier to check

        Returns:
            True if node is allowed
        """
        # Allowlist takes precedence
        if self.allowlist:
            return name in self.allowlist

        if self.blocklist:
            return name not in self.blocklist

        return True
