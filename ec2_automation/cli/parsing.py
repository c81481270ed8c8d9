"""CLI argument parsing and parameter conversion utilities."""

from __future__ import annotations

import re
from collections.abc import Sequence
from typing import Any

from ec2_automation.core.errors import InvalidConfigurationError

TEXT_FLAGS = frozenset({"action", "tag_key", "tag_value", "region"})

_FLAG_PATTERN = re.compile(r"^-{1,2}([A-Za-z][\w-]*)(=.*)?$", re.DOTALL)


def quote_text_flags(argv: Sequence[str]) -> list[str]:
    """Wrap text flag values in string literals so Fire keeps them verbatim.

    Fire evaluates flag values as Python literals, which turns ``1.50`` into
    ``1.5`` and ``0x10`` into ``16``. Quoting the raw token makes Fire hand
    back exactly what was typed.

    Parameters
    ----------
    argv : Sequence[str]
        Command-line arguments, without the program name

    Returns
    -------
    list[str]
        Arguments with ``-flag value`` and ``-flag=value`` text values quoted
    """
    quoted: list[str] = []
    index = 0

    while index < len(argv):
        arg = argv[index]

        if arg == "--":
            quoted.extend(argv[index:])
            break

        match = _FLAG_PATTERN.match(arg)
        flag_name = match.group(1).replace("-", "_") if match else None

        if flag_name not in TEXT_FLAGS:
            quoted.append(arg)
        elif match.group(2) is not None:
            quoted.append(f"{arg[: match.start(2)]}={match.group(2)[1:]!r}")
        elif index + 1 < len(argv) and not _FLAG_PATTERN.match(argv[index + 1]):
            quoted.extend([arg, repr(argv[index + 1])])
            index += 1
        else:
            quoted.append(arg)

        index += 1

    return quoted


def parse_text_flag(name: str, value: Any) -> str | None:
    """Convert a flag value to a string.

    Values that reach ``EC2AutomationCLI.manage`` without going through
    ``quote_text_flags`` may still be Fire literals (int, bool); tag filters
    always compare strings.

    Parameters
    ----------
    name : str
        Flag name used in error messages
    value : Any
        Value parsed by Fire, or None when the flag was not passed

    Returns
    -------
    str | None
        String value, or None when the flag was not passed

    Raises
    ------
    InvalidConfigurationError
        If the value is a collection rather than a scalar
    """
    if value is None:
        return None

    if isinstance(value, (list, tuple, dict, set)):
        raise InvalidConfigurationError(f"{name} must be a single value, got: {value!r}")

    return str(value)


def parse_dry_run(dry_run: str | bool | None) -> bool | None:
    """Parse dry_run parameter into boolean.

    Parameters
    ----------
    dry_run : str | bool | None
        Bare flag (True), boolean, or "true"/"false" string

    Returns
    -------
    bool | None
        Boolean value, or None when the flag was not passed

    Raises
    ------
    InvalidConfigurationError
        If string value is not "true" or "false"
    """
    if dry_run is None or isinstance(dry_run, bool):
        return dry_run

    if isinstance(dry_run, str):
        dry_run_lower = dry_run.lower()

        if dry_run_lower not in ("true", "false"):
            raise InvalidConfigurationError(
                f"dry_run must be 'true' or 'false', got: {dry_run}"
            )

        return dry_run_lower == "true"

    raise InvalidConfigurationError(f"Unexpected type for dry_run: {type(dry_run)}")


def build_cli_overrides(
    action: Any,
    tag_key: Any,
    tag_value: Any,
    region: Any,
    dry_run: str | bool | None,
) -> dict[str, Any]:
    """Collect CLI flags into configuration overrides.

    Parameters
    ----------
    action : Any
        Action to perform (list, start, stop)
    tag_key : Any
        Tag key to filter instances
    tag_value : Any
        Tag value to filter instances
    region : Any
        AWS region
    dry_run : str | bool | None
        Dry run flag

    Returns
    -------
    dict[str, Any]
        Overrides for ConfigLoader.build; flags not passed are None
    """
    return {
        "action": parse_text_flag("action", action),
        "tag_key": parse_text_flag("tag_key", tag_key),
        "tag_value": parse_text_flag("tag_value", tag_value),
        "region": parse_text_flag("region", region),
        "dry_run": parse_dry_run(dry_run),
    }


__all__ = [
    "quote_text_flags",
    "parse_text_flag",
    "parse_dry_run",
    "build_cli_overrides",
]
