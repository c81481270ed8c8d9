"""CLI argument parsing and handling."""

from __future__ import annotations

from ec2_automation.cli.parsing import (
    build_cli_overrides,
    parse_dry_run,
    parse_text_flag,
)

__all__ = [
    "build_cli_overrides",
    "parse_dry_run",
    "parse_text_flag",
]
