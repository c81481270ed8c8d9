"""AWS-specific utility functions for ec2_automation."""

from __future__ import annotations

from typing import Any

from ec2_automation.core.models import Instance, StateTransition


def instance_from_description(instance: dict[str, Any]) -> Instance:
    """Project a describe_instances entry onto an Instance.

    Parameters
    ----------
    instance : dict[str, Any]
        Instance dictionary from a describe_instances reservation

    Returns
    -------
    Instance
        Read-only instance projection
    """
    tags = {tag["Key"]: tag["Value"] for tag in instance.get("Tags", [])}

    return Instance(
        instance_id=instance["InstanceId"],
        state=instance["State"]["Name"],
        instance_type=instance.get("InstanceType", ""),
        tags=tags,
    )


def transitions_from_response(
    response: dict[str, Any], key: str
) -> list[StateTransition]:
    """Extract state transitions from a start/stop_instances response.

    Parameters
    ----------
    response : dict[str, Any]
        Response from boto3 start_instances or stop_instances
    key : str
        ``StartingInstances`` or ``StoppingInstances``

    Returns
    -------
    list[StateTransition]
        One transition per instance in the response
    """
    return [
        StateTransition(
            instance_id=item["InstanceId"],
            previous_state=item["PreviousState"]["Name"],
            current_state=item["CurrentState"]["Name"],
        )
        for item in response.get(key, [])
    ]


def get_aws_credentials_error_message() -> str:
    """Get standard AWS credentials error message.

    Returns
    -------
    str
        Formatted AWS credentials error message
    """
    return (
        "AWS credentials not found\n\n"
        "Configure your credentials:\n"
        "  aws configure\n\n"
        "Or set environment variables:\n"
        "  export AWS_ACCESS_KEY_ID=...\n"
        "  export AWS_SECRET_ACCESS_KEY=..."
    )
