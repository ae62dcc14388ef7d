"""MCP tools for running SSH jobs."""

import logging
from typing import Any

from ssh_job.exceptions import (
    NodeNotFoundError,
    SshJobError,
    UnacceptedExitCode,
)
from ssh_job.models import ExecutionResult
from ssh_job.services.job import JobReport, SshJob
from ssh_job.services.state import get_deps

logger = logging.getLogger(__name__)


def format_result(label: str, result: ExecutionResult) -> str:
    """Format one command result as a text block."""
    lines = [f"═══ [{label}] {result.cmd}"]
    if result.stdout:
        lines.append(result.stdout.rstrip("\n"))
    if result.stderr:
        lines.append(f"[stderr]\n{result.stderr.rstrip()}")
    lines.append(f"[exit code: {result.exit_code}]")
    return "\n".join(lines)


def format_report(report: JobReport) -> str:
    """Format a job report for display."""
    blocks = [format_result(str(i), r) for i, r in enumerate(report.results, start=1)]
    blocks.append(
        f"─── {len(report.results)} command(s) succeeded on {report.node_id}, "
        f"{report.cataloged} catalog entr{'y' if report.cataloged == 1 else 'ies'} stored ───"
    )
    return "\n\n".join(blocks)


async def ssh_job(
    target: str,
    commands: str | dict[str, Any] | list[str | dict[str, Any]],
    accepted_codes: list[int] | None = None,
) -> str:
    """Run commands sequentially on a node over SSH and catalog their output.

    Each command runs in its own SSH session, in order. The run stops at the
    first command that fails or exits with a code outside accepted_codes
    (0 is always accepted).

    Args:
        target: Node identifier from the node inventory.
        commands: A command string, a command object, or a list of both.
            Command objects accept 'command', 'retries' and
            'catalog': {'source': ..., 'format': 'json' | 'raw' | 'lines'}.
        accepted_codes: Extra exit codes treated as success. Defaults to
            SSH_JOB_ACCEPTED_CODES.

    Examples:
        ssh_job("rack-01", "uptime")
        ssh_job("rack-01", ["apt-get install -y lshw", {"command": "lshw -json",
                "catalog": {"source": "lshw", "format": "json"}}])

    Returns:
        Per-command output and a summary line, or an error message.
    """
    deps = get_deps()
    codes = accepted_codes if accepted_codes is not None else deps.config.accepted_codes

    try:
        job = SshJob(deps, target, commands, codes)
    except ValueError as e:
        return f"Error: Invalid job definition: {e}"

    try:
        report = await job.run()
    except NodeNotFoundError as e:
        available = ", ".join(deps.registry.list_nodes()) or "(none)"
        return f"Error: {e}. Available: {available}"
    except UnacceptedExitCode as e:
        logger.warning("SSH job on %s failed: %s", target, e)
        return f"Error: {e}\n\n{format_result('failed', e.result)}"
    except SshJobError as e:
        logger.error("SSH job on %s failed: %s", target, e)
        return f"Error: {e}"

    return format_report(report)


async def list_nodes() -> str:
    """List node identifiers available to ssh_job.

    Returns:
        One node per line with its SSH address.
    """
    deps = get_deps()
    lines = []
    for node_id in deps.registry.list_nodes():
        node = await deps.registry.resolve(node_id)
        lines.append(f"{node_id} -> {node.credentials.address}")
    return "\n".join(lines) if lines else "No nodes configured."
