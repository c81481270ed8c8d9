"""Error variants raised while managing instances.

Every variant carries the phase that failed and the original cause, so entry
points can branch on the error kind instead of the message text.
"""

from __future__ import annotations


class AutomationError(Exception):
    """Base class for ec2_automation failures.

    Parameters
    ----------
    message : str
        Human-readable error message
    cause : BaseException | None
        Underlying exception, if any
    """

    phase = "run"

    def __init__(self, message: str, cause: BaseException | None = None) -> None:
        super().__init__(message)
        self.cause = cause

    def __str__(self) -> str:
        message = super().__str__()
        if self.cause is not None:
            return f"{message}: {self.cause}"
        return message


class InvalidConfigurationError(AutomationError, ValueError):
    """Raised when the configuration is invalid (e.g. unknown action)."""

    phase = "config"


class MalformedEventError(AutomationError, ValueError):
    """Raised when an inbound event payload cannot be parsed."""

    phase = "event"


class ClientInitializationError(AutomationError):
    """Raised when the compute provider client cannot be constructed."""

    phase = "client"


class QueryError(AutomationError):
    """Raised when querying instances by tag fails."""

    phase = "query"


class ActionError(AutomationError):
    """Raised when a start or stop request fails.

    Parameters
    ----------
    message : str
        Human-readable error message
    action : str
        Action that failed (``start`` or ``stop``)
    cause : BaseException | None
        Underlying exception, if any
    """

    def __init__(
        self, message: str, action: str, cause: BaseException | None = None
    ) -> None:
        super().__init__(message, cause)
        self.phase = action
