"""Catalog data models."""

from dataclasses import dataclass
from typing import Any

UNKNOWN_SOURCE = "unknown"


@dataclass
class ParsedOutput:
    """Classification of one command result by the output parser."""

    source: str | None = None
    data: Any = None
    store: bool = False
    error: str | None = None


@dataclass(frozen=True)
class CatalogEntry:
    """A structured record extracted from command output."""

    node: str
    source: str
    data: Any
