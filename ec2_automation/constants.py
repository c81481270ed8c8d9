"""Global constants for ec2_automation."""

from enum import Enum

DEFAULT_ACTION = "list"
DEFAULT_TAG_KEY = "AutoManage"
DEFAULT_TAG_VALUE = "true"
DEFAULT_REGION = "us-east-1"

NAME_TAG_KEY = "Name"
"""Tag holding the display name of an instance."""

NAME_PLACEHOLDER = "N/A"
"""Display name used when an instance has no Name tag."""

ENV_REGION = "AWS_REGION"
ENV_TAG_KEY = "EC2_TAG_KEY"
ENV_TAG_VALUE = "EC2_TAG_VALUE"

ENV_CONFIG_PATH = "EC2_AUTOMATION_CONFIG"
"""Environment variable pointing at an optional YAML config file."""

DEFAULT_CONFIG_PATH = "ec2-automation.yaml"

ENV_DEBUG = "EC2_AUTOMATION_DEBUG"
"""When set to ``1`` the CLI re-raises errors instead of exiting."""

LOG_PREFIX = "[EC2-Manager] "

EXIT_GENERAL_ERROR = 1
"""Exit code for client, query and action failures."""

EXIT_CONFIG_ERROR = 2
"""Exit code indicating an invalid configuration."""


class Action(str, Enum):
    """Actions the instance manager can perform."""

    LIST = "list"
    START = "start"
    STOP = "stop"


VALID_ACTIONS = tuple(action.value for action in Action)


class InstanceState(str, Enum):
    """Instance state values."""

    PENDING = "pending"
    RUNNING = "running"
    STOPPING = "stopping"
    STOPPED = "stopped"
