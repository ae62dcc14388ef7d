"""Normalization of raw command options into CommandSpec lists."""

import logging
from collections.abc import Iterable, Mapping
from typing import Any

from ssh_job.exceptions import InvalidCommandSpec
from ssh_job.models import CatalogOptions, CommandSpec

logger = logging.getLogger(__name__)

# Reserved for future use; callers must not pass them yet
RESERVED_OPTIONS = ("downloadUrl", "acceptedResponseCodes")

# Tolerated at the top level of a command object but not used
IGNORED_OPTIONS = ("source", "format")

RawCommand = str | Mapping[str, Any]


def _flatten(raw: RawCommand | Iterable[RawCommand]) -> list[Any]:
    """Wrap a scalar command in a list; pass a sequence through as a list."""
    if isinstance(raw, (str, Mapping)):
        return [raw]
    if not isinstance(raw, (list, tuple)):
        raise InvalidCommandSpec(
            f"commands must be a string, an object or a list, got {type(raw).__name__}"
        )
    return list(raw)


def _build_catalog_options(value: Any) -> CatalogOptions:
    if not isinstance(value, Mapping):
        raise InvalidCommandSpec(
            f"catalog option must be an object with source/format, got {value!r}"
        )
    return CatalogOptions(source=value.get("source"), format=value.get("format"))


def _build_one(cmd: Any, accepted_codes: frozenset[int]) -> CommandSpec:
    if isinstance(cmd, str):
        if not cmd:
            raise InvalidCommandSpec("command string must not be empty")
        return CommandSpec(command=cmd, accepted_codes=accepted_codes)

    if not isinstance(cmd, Mapping):
        raise InvalidCommandSpec(
            f"command must be a string or an object, got {type(cmd).__name__}"
        )

    command: Any = None
    catalog_options: CatalogOptions | None = None
    retries: int | None = None

    for key, value in cmd.items():
        if key == "catalog":
            catalog_options = _build_catalog_options(value)
        elif key == "command":
            command = value
        elif key == "retries":
            retries = value
        elif key in RESERVED_OPTIONS:
            raise InvalidCommandSpec(f"{key} option is not supported yet")
        elif key not in IGNORED_OPTIONS:
            raise InvalidCommandSpec(f"{key} option is not supported")

    if not isinstance(command, str) or not command:
        raise InvalidCommandSpec(f"command object is missing a command string: {cmd!r}")

    return CommandSpec(
        command=command,
        accepted_codes=accepted_codes,
        catalog_options=catalog_options,
        retries=retries,
    )


def build_commands(
    raw: RawCommand | Iterable[RawCommand],
    accepted_codes: Iterable[int] = (),
) -> list[CommandSpec]:
    """Transform command options from a job definition into CommandSpecs.

    Example input:
        [
            "uname -a",
            {
                "command": "sudo lshw -json",
                "retries": 3,
                "catalog": {"format": "json", "source": "lshw user"},
            },
        ]

    Args:
        raw: A command string, a command object, or a list mixing both
        accepted_codes: Exit codes treated as success for every command
            (0 is always included)

    Returns:
        One CommandSpec per input command, in input order

    Raises:
        InvalidCommandSpec: If the input is malformed or a command uses an
            unsupported option
    """
    codes = frozenset(accepted_codes) | {0}
    specs = [_build_one(cmd, codes) for cmd in _flatten(raw)]
    logger.debug(
        "Built %d command spec(s), accepted codes %s", len(specs), sorted(codes)
    )
    return specs
