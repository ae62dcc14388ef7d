"""Tests for the default command output parser."""

import pytest

from ssh_job.exceptions import CatalogParseError
from ssh_job.models import CatalogOptions, ExecutionResult
from ssh_job.services.parser import CommandOutputParser


def result(stdout: str | None, fmt: str | None, source: str | None = "src") -> ExecutionResult:
    return ExecutionResult(
        stdout=stdout,
        exit_code=0,
        cmd="cmd",
        catalog_options=CatalogOptions(source=source, format=fmt),
    )


class TestCommandOutputParser:
    """Test CommandOutputParser."""

    @pytest.mark.asyncio
    async def test_json_format(self) -> None:
        """JSON output is decoded and marked for storage."""
        parsed = await CommandOutputParser().parse([result('{"cpu": 4}', "json", "lshw")])

        assert len(parsed) == 1
        assert parsed[0].store is True
        assert parsed[0].source == "lshw"
        assert parsed[0].data == {"cpu": 4}
        assert parsed[0].error is None

    @pytest.mark.asyncio
    async def test_raw_format(self) -> None:
        """Raw output is stored verbatim."""
        parsed = await CommandOutputParser().parse([result("Linux 6.1\n", "raw")])

        assert parsed[0].data == "Linux 6.1\n"
        assert parsed[0].store is True

    @pytest.mark.asyncio
    async def test_lines_format(self) -> None:
        """Lines format drops blank lines and surrounding whitespace."""
        parsed = await CommandOutputParser().parse([result(" a \n\nb\n", "lines")])

        assert parsed[0].data == ["a", "b"]

    @pytest.mark.asyncio
    async def test_default_format(self) -> None:
        """Missing format falls back to the default."""
        parsed = await CommandOutputParser(default_format="lines").parse([result("x\ny", None)])

        assert parsed[0].data == ["x", "y"]

    @pytest.mark.asyncio
    async def test_invalid_json_is_error_payload(self) -> None:
        """Malformed JSON yields an error item instead of raising."""
        parsed = await CommandOutputParser().parse([result("{not json", "json")])

        assert parsed[0].store is False
        assert "invalid JSON" in parsed[0].error
        assert parsed[0].source == "src"

    @pytest.mark.asyncio
    async def test_unsupported_format(self) -> None:
        """Unknown formats are reported per record."""
        parsed = await CommandOutputParser().parse([result("x", "xml")])

        assert "unsupported format" in parsed[0].error

    @pytest.mark.asyncio
    async def test_missing_stdout(self) -> None:
        """Results without output cannot be cataloged."""
        parsed = await CommandOutputParser().parse([result(None, "raw")])

        assert "no output" in parsed[0].error

    @pytest.mark.asyncio
    async def test_preserves_order_and_count(self) -> None:
        """One output per input, same order."""
        inputs = [result("1", "json", "a"), result("{", "json", "b"), result("z", "raw", "c")]

        parsed = await CommandOutputParser().parse(inputs)

        assert [p.source for p in parsed] == ["a", "b", "c"]
        assert [p.store for p in parsed] == [True, False, True]

    def test_parse_one_raises(self) -> None:
        """parse_one raises CatalogParseError with the source attached."""
        with pytest.raises(CatalogParseError) as exc_info:
            CommandOutputParser().parse_one(result("[", "json", "lshw"))

        assert exc_info.value.source == "lshw"

    def test_rejects_unknown_default_format(self) -> None:
        """The default format must be supported."""
        with pytest.raises(ValueError):
            CommandOutputParser(default_format="yaml")
