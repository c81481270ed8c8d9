"""AWS-specific constants for EC2 operations."""

ACTIVE_INSTANCE_STATES = [
    "pending",
    "running",
    "stopping",
    "stopped",
]
"""EC2 instance states considered active (not terminated).

Terminated and shutting-down instances are always excluded from queries.
"""

INSTANCE_STATE_FILTER = "instance-state-name"
"""Name of the describe_instances filter on lifecycle state."""

TAG_FILTER_PREFIX = "tag:"
"""Prefix of describe_instances filters matching a tag key."""
