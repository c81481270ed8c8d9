"""Core ec2_automation functionality."""

from __future__ import annotations

from ec2_automation.core.config import ConfigLoader, Configuration
from ec2_automation.core.errors import (
    ActionError,
    AutomationError,
    ClientInitializationError,
    InvalidConfigurationError,
    MalformedEventError,
    QueryError,
)
from ec2_automation.core.interfaces import ComputeProvider
from ec2_automation.core.models import Instance, ManageResult, StateTransition

__all__ = [
    "ActionError",
    "AutomationError",
    "ClientInitializationError",
    "ComputeProvider",
    "ConfigLoader",
    "Configuration",
    "Instance",
    "InvalidConfigurationError",
    "MalformedEventError",
    "ManageResult",
    "QueryError",
    "StateTransition",
]
