"""Logging formatters for ec2_automation output."""

import logging

from ec2_automation.constants import LOG_PREFIX


class StreamFormatter(logging.Formatter):
    """Logging formatter that prepends the tool prefix and invocation ID."""

    def format(self, record: logging.LogRecord) -> str:
        """Format log record with prefix and optional invocation tag.

        Parameters
        ----------
        record : logging.LogRecord
            Log record to format

        Returns
        -------
        str
            Formatted log message
        """
        msg = super().format(record)
        invocation_id = getattr(record, "invocation_id", None)

        if invocation_id:
            return f"{LOG_PREFIX}[{invocation_id}] {msg}"

        return f"{LOG_PREFIX}{msg}"
