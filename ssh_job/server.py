"""ssh_job FastMCP server.

Thin wrapper that exposes SSH jobs as MCP tools. All business logic is
delegated to the services/ and tools/ modules.
"""

import logging
import os
import sys
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

from fastmcp import FastMCP
from starlette.requests import Request
from starlette.responses import PlainTextResponse

from ssh_job.services.state import get_deps
from ssh_job.tools import list_nodes, ssh_job
from ssh_job.utils.console import ColorfulFormatter

NOISY_LOGGERS = (
    "asyncssh",
    "fastmcp",
    "httpx",
    "httpcore",
    "uvicorn",
    "uvicorn.access",
    "uvicorn.error",
    "starlette",
    "anyio",
)


def _configure_logging() -> None:
    """Configure colorful logging for the ssh_job package.

    Called at module load time so logging is set up before any loggers are
    used, regardless of how the server is started.
    """
    log_level = os.getenv("SSH_JOB_LOG_LEVEL", "INFO").upper()
    use_colors = os.getenv("SSH_JOB_LOG_COLORS", "true").lower() != "false"

    if not sys.stderr.isatty():
        use_colors = False

    package_logger = logging.getLogger("ssh_job")
    package_logger.setLevel(getattr(logging, log_level, logging.INFO))

    # Only add handler if not already configured
    if not package_logger.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(ColorfulFormatter(use_colors=use_colors))
        package_logger.addHandler(handler)
        package_logger.propagate = False

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


_configure_logging()

logger = logging.getLogger(__name__)


async def nodes_resource() -> str:
    """List configured nodes."""
    return await list_nodes()


@asynccontextmanager
async def app_lifespan(server: FastMCP) -> AsyncIterator[dict[str, Any]]:
    """Load the node inventory at startup.

    Args:
        server: The FastMCP server instance

    Yields:
        Dict with node identifiers
    """
    logger.info("ssh_job server starting up")

    deps = get_deps()
    nodes = deps.registry.list_nodes()
    logger.info(
        "Loaded %d node(s): %s",
        len(nodes),
        ", ".join(nodes) if nodes else "(none)",
    )
    logger.info("ssh_job server ready to accept connections")

    try:
        yield {"nodes": nodes}
    finally:
        logger.info("ssh_job server shutdown complete")


def create_server() -> FastMCP:
    """Create the MCP server with tools, resources and health route.

    Returns:
        Configured FastMCP server instance
    """
    server = FastMCP("ssh_job", lifespan=app_lifespan)

    server.tool()(ssh_job)
    server.tool()(list_nodes)
    server.resource("nodes://list")(nodes_resource)

    @server.custom_route("/health", methods=["GET"])
    async def health_check(request: Request) -> PlainTextResponse:
        """Health check endpoint."""
        client_host = request.client.host if request.client else "unknown"
        logger.debug("Health check from %s", client_host)
        return PlainTextResponse("OK")

    return server


# Default server instance
mcp = create_server()
