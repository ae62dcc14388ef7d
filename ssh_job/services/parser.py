"""Default output parser for catalog-bound command results."""

import json
import logging
from collections.abc import Callable, Sequence
from typing import Any

from ssh_job.exceptions import CatalogParseError
from ssh_job.models import ExecutionResult, ParsedOutput

logger = logging.getLogger(__name__)


def _parse_json(text: str) -> Any:
    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        raise ValueError(f"invalid JSON: {e}") from e


def _parse_raw(text: str) -> str:
    return text


def _parse_lines(text: str) -> list[str]:
    return [line.strip() for line in text.splitlines() if line.strip()]


FORMATS: dict[str, Callable[[str], Any]] = {
    "json": _parse_json,
    "raw": _parse_raw,
    "lines": _parse_lines,
}


class CommandOutputParser:
    """Parses stdout according to each result's catalog format.

    Supported formats: json, raw, lines. Results are never dropped: each
    input yields exactly one ParsedOutput, carrying either data marked for
    storage or an error message.
    """

    def __init__(self, default_format: str = "raw") -> None:
        if default_format not in FORMATS:
            raise ValueError(f"Unsupported default format: {default_format}")
        self.default_format = default_format

    def parse_one(self, result: ExecutionResult) -> Any:
        """Parse a single result.

        Raises:
            CatalogParseError: If the output cannot be parsed
        """
        options = result.catalog_options
        source = options.source if options else None
        fmt = (options.format if options else None) or self.default_format

        handler = FORMATS.get(fmt)
        if handler is None:
            raise CatalogParseError(source, f"unsupported format {fmt!r}")
        if result.stdout is None:
            raise CatalogParseError(source, f"no output from {result.cmd!r}")

        try:
            return handler(result.stdout)
        except ValueError as e:
            raise CatalogParseError(source, str(e)) from e

    async def parse(self, results: Sequence[ExecutionResult]) -> list[ParsedOutput]:
        """Classify each result into a ParsedOutput, preserving order."""
        parsed: list[ParsedOutput] = []
        for result in results:
            source = result.catalog_options.source if result.catalog_options else None
            try:
                data = self.parse_one(result)
            except CatalogParseError as e:
                logger.debug("Parse failure for %s: %s", source, e.detail)
                parsed.append(ParsedOutput(source=source, error=e.detail))
                continue
            parsed.append(ParsedOutput(source=source, data=data, store=True))
        return parsed
