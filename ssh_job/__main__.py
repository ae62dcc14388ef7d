"""Entry point for the ssh_job server."""

import logging

from ssh_job.server import mcp  # This import also configures logging
from ssh_job.services.state import get_deps

logger = logging.getLogger(__name__)


def run_server() -> None:
    """Run the MCP server with the configured transport."""
    config = get_deps().config

    if config.transport == "stdio":
        logger.info("Starting ssh_job server (transport=stdio)")
        mcp.run(transport="stdio")
    else:
        logger.info(
            "Starting ssh_job server (transport=http, host=%s, port=%d)",
            config.http_host,
            config.http_port,
        )
        mcp.run(transport="http", host=config.http_host, port=config.http_port)


if __name__ == "__main__":
    run_server()
