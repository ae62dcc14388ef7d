"""Tests for the ssh_job MCP tools."""

import json
from collections.abc import Iterator
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from ssh_job.config import Config
from ssh_job.dependencies import Dependencies
from ssh_job.exceptions import TransportError, UnacceptedExitCode
from ssh_job.models import ExecutionResult
from ssh_job.services.state import reset_state, set_deps
from ssh_job.tools import list_nodes, ssh_job


@pytest.fixture
def deps(tmp_path: Path) -> Iterator[Dependencies]:
    """Install dependencies over a one-node inventory."""
    inventory = tmp_path / "nodes.json"
    inventory.write_text(json.dumps({
        "nodes": {"rack-01": {"host": "10.1.0.11", "user": "admin", "password": "pw"}}
    }))
    deps = Dependencies.from_config(Config.from_inventory(inventory))
    set_deps(deps)
    yield deps
    reset_state()


def fake_sessions(*outcomes: ExecutionResult | Exception) -> MagicMock:
    sessions = []
    for outcome in outcomes:
        session = MagicMock()
        if isinstance(outcome, Exception):
            session.execute = AsyncMock(side_effect=outcome)
        else:
            session.execute = AsyncMock(return_value=outcome)
        sessions.append(session)
    return MagicMock(side_effect=sessions)


class TestSshJobTool:
    """Test the ssh_job tool."""

    @pytest.mark.asyncio
    async def test_reports_each_command(self, deps: Dependencies) -> None:
        """Output of every command is shown with a summary."""
        factory = fake_sessions(
            ExecutionResult(stdout="up 3 days\n", exit_code=0),
            ExecutionResult(stdout='{"cpu": 4}', exit_code=0),
        )
        with patch.object(Dependencies, "session_factory", factory):
            output = await ssh_job("rack-01", [
                "uptime",
                {"command": "lshw -json", "catalog": {"source": "lshw", "format": "json"}},
            ])

        assert "═══ [1] uptime" in output
        assert "up 3 days" in output
        assert "═══ [2] lshw -json" in output
        assert "2 command(s) succeeded on rack-01, 1 catalog entry stored" in output
        assert deps.store.find("rack-01", "lshw")[0].data == {"cpu": 4}

    @pytest.mark.asyncio
    async def test_invalid_definition(self, deps: Dependencies) -> None:
        """Unsupported options are reported without running anything."""
        output = await ssh_job("rack-01", {"command": "x", "junk": 1})

        assert output.startswith("Error: Invalid job definition")
        assert "junk option is not supported" in output

    @pytest.mark.asyncio
    async def test_malformed_commands(self, deps: Dependencies) -> None:
        """Command input of the wrong type is reported as an invalid job."""
        output = await ssh_job("rack-01", None)  # type: ignore[arg-type]

        assert output.startswith("Error: Invalid job definition: commands must be")

    @pytest.mark.asyncio
    async def test_unknown_node(self, deps: Dependencies) -> None:
        """Unknown nodes list the available ones."""
        output = await ssh_job("rack-99", "uptime")

        assert output == "Error: Unknown node: rack-99. Available: rack-01"

    @pytest.mark.asyncio
    async def test_unaccepted_exit_code_shows_partial_output(
        self, deps: Dependencies
    ) -> None:
        """Rejected commands include their stderr and exit code."""
        failed = ExecutionResult(stderr="errData", exit_code=127, cmd="bogus")
        factory = fake_sessions(UnacceptedExitCode(failed, {0}))
        with patch.object(Dependencies, "session_factory", factory):
            output = await ssh_job("rack-01", "bogus")

        assert output.startswith("Error: Command 'bogus' exited with 127")
        assert "errData" in output
        assert "[exit code: 127]" in output

    @pytest.mark.asyncio
    async def test_transport_error(self, deps: Dependencies) -> None:
        """Transport failures are reported as errors."""
        factory = fake_sessions(TransportError("10.1.0.11", OSError("Connection refused")))
        with patch.object(Dependencies, "session_factory", factory):
            output = await ssh_job("rack-01", "uptime")

        assert output == "Error: SSH transport error on 10.1.0.11: Connection refused"

    @pytest.mark.asyncio
    async def test_accepted_codes_default_from_config(self, deps: Dependencies) -> None:
        """Configured accepted codes apply when none are passed."""
        deps.config.settings.accepted_codes = [3]
        session = MagicMock()
        session.execute = AsyncMock(return_value=ExecutionResult(exit_code=3))
        with patch.object(Dependencies, "session_factory", MagicMock(return_value=session)):
            output = await ssh_job("rack-01", "check")

        assert "[exit code: 3]" in output
        assert session.execute.await_args.kwargs["accepted_codes"] == frozenset({0, 3})


@pytest.mark.asyncio
async def test_list_nodes(deps: Dependencies) -> None:
    """Nodes are listed with their SSH address."""
    assert await list_nodes() == "rack-01 -> admin@10.1.0.11:22"
