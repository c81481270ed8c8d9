"""Logging setup for ec2_automation entry points."""

from __future__ import annotations

import logging
import sys
import uuid

from ec2_automation.logging.filters import StreamRoutingFilter
from ec2_automation.logging.formatters import StreamFormatter

LOGGER_NAME = "ec2_automation"
LOG_FORMAT = "%(asctime)s %(message)s"

__all__ = [
    "StreamFormatter",
    "StreamRoutingFilter",
    "configure_logging",
    "get_invocation_logger",
]


def configure_logging(level: int = logging.INFO) -> None:
    """Route log records to stdout/stderr with the tool prefix.

    Parameters
    ----------
    level : int
        Root log level
    """
    stdout_handler = logging.StreamHandler(sys.stdout)
    stdout_handler.setFormatter(StreamFormatter(LOG_FORMAT))
    stdout_handler.addFilter(StreamRoutingFilter("stdout"))

    stderr_handler = logging.StreamHandler(sys.stderr)
    stderr_handler.setFormatter(StreamFormatter(LOG_FORMAT))
    stderr_handler.addFilter(StreamRoutingFilter("stderr"))

    logging.basicConfig(
        level=level,
        handlers=[stdout_handler, stderr_handler],
        force=True,
    )

    for boto_module in ["botocore", "boto3", "urllib3"]:
        logging.getLogger(boto_module).setLevel(logging.WARNING)


def get_invocation_logger(invocation_id: str | None = None) -> logging.LoggerAdapter:
    """Create a logger handle scoped to one invocation.

    Parameters
    ----------
    invocation_id : str | None
        Identifier attached to every record (e.g. the Lambda request ID).
        A short random ID is generated when omitted.

    Returns
    -------
    logging.LoggerAdapter
        Adapter adding ``invocation_id`` to each record
    """
    if invocation_id is None:
        invocation_id = uuid.uuid4().hex[:8]

    return logging.LoggerAdapter(
        logging.getLogger(LOGGER_NAME), {"invocation_id": invocation_id}
    )
