"""AWS Lambda entry point for ec2_automation.

The handler accepts either the payload itself or an EventBridge envelope
carrying the payload under ``detail``::

    {"action": "stop", "tag_key": "AutoManage", "tag_value": "true",
     "region": "eu-west-1", "dry_run": true}

Every field is optional. Environment overrides and the YAML config file are
not consulted here.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from typing import Any

from ec2_automation.constants import (
    DEFAULT_ACTION,
    DEFAULT_REGION,
    DEFAULT_TAG_KEY,
    DEFAULT_TAG_VALUE,
)
from ec2_automation.core.config import Configuration
from ec2_automation.core.errors import (
    AutomationError,
    InvalidConfigurationError,
    MalformedEventError,
)
from ec2_automation.core.runner import ComputeProviderFactory, run
from ec2_automation.logging import LOGGER_NAME, get_invocation_logger

logging.getLogger(LOGGER_NAME).setLevel(logging.INFO)

for _boto_module in ["botocore", "boto3", "urllib3"]:
    logging.getLogger(_boto_module).setLevel(logging.WARNING)

EVENT_DEFAULTS = {
    "action": DEFAULT_ACTION,
    "tag_key": DEFAULT_TAG_KEY,
    "tag_value": DEFAULT_TAG_VALUE,
    "region": DEFAULT_REGION,
}

RESPONSE_HEADERS = {"Content-Type": "application/json"}


def extract_payload(event: Any) -> Mapping[str, Any]:
    """Return the payload from a direct invocation or an EventBridge event.

    Parameters
    ----------
    event : Any
        Raw Lambda event

    Returns
    -------
    Mapping[str, Any]
        Payload mapping

    Raises
    ------
    MalformedEventError
        If the event or its ``detail`` is not a JSON object
    """
    if event is None:
        return {}

    if not isinstance(event, Mapping):
        raise MalformedEventError(
            f"Event must be a JSON object, got {type(event).__name__}"
        )

    if "detail" not in event:
        return event

    detail = event["detail"]

    if isinstance(detail, str):
        try:
            detail = json.loads(detail) if detail.strip() else {}
        except json.JSONDecodeError as e:
            raise MalformedEventError("Error parsing event detail", cause=e) from e

    if detail is None:
        return {}

    if not isinstance(detail, Mapping):
        raise MalformedEventError(
            f"Event detail must be a JSON object, got {type(detail).__name__}"
        )

    return detail


def parse_event(event: Any) -> Configuration:
    """Build a Configuration from an event, filling in defaults.

    Missing, null and empty-string fields take their defaults.

    Parameters
    ----------
    event : Any
        Raw Lambda event

    Returns
    -------
    Configuration
        Configuration built from the payload (not yet validated)

    Raises
    ------
    MalformedEventError
        If the payload is not an object or a field has the wrong type
    """
    payload = extract_payload(event)
    values: dict[str, Any] = {}

    for field_name, default in EVENT_DEFAULTS.items():
        value = payload.get(field_name)

        if value is not None and not isinstance(value, str):
            raise MalformedEventError(
                f"Field '{field_name}' must be a string, got {type(value).__name__}"
            )

        values[field_name] = value or default

    dry_run = payload.get("dry_run")
    if dry_run is not None and not isinstance(dry_run, bool):
        raise MalformedEventError(
            f"Field 'dry_run' must be a boolean, got {type(dry_run).__name__}"
        )
    values["dry_run"] = bool(dry_run)

    return Configuration(**values)


def build_response(status_code: int, body: dict[str, Any]) -> dict[str, Any]:
    """Build the Lambda response envelope."""
    return {
        "statusCode": status_code,
        "body": json.dumps(body),
        "headers": dict(RESPONSE_HEADERS),
    }


def handle_event(
    event: Any,
    compute_provider_factory: ComputeProviderFactory | None = None,
    invocation_id: str | None = None,
) -> dict[str, Any]:
    """Run one action for an event and encode the outcome as a response.

    Parameters
    ----------
    event : Any
        Raw Lambda event
    compute_provider_factory : Callable[[str], ComputeProvider] | None
        Optional factory for the compute provider. If None, uses EC2.
    invocation_id : str | None
        Identifier attached to log records

    Returns
    -------
    dict[str, Any]
        ``{"statusCode", "body", "headers"}``; 200 on success, 400 for
        malformed input or invalid configuration, 500 for execution failures
    """
    invocation_logger = get_invocation_logger(invocation_id)

    try:
        config = parse_event(event)
        result = run(
            config,
            compute_provider_factory=compute_provider_factory,
            logger=invocation_logger,
        )
    except (MalformedEventError, InvalidConfigurationError) as e:
        invocation_logger.warning("Rejected event: %s", e)
        return build_response(400, {"message": "Invalid request", "error": str(e)})
    except AutomationError as e:
        invocation_logger.error("Failed to manage instances (%s): %s", e.phase, e)
        return build_response(
            500, {"message": "Failed to manage instances", "error": str(e)}
        )
    except Exception as e:
        invocation_logger.error("Unexpected error: %s", e, exc_info=True)
        return build_response(500, {"message": "Unexpected error", "error": str(e)})

    body = {"message": f"Successfully executed action: {config.action}"}
    body.update(result.summary())
    return build_response(200, body)


def handler(event: Any, context: Any) -> dict[str, Any]:
    """Lambda handler.

    Parameters
    ----------
    event : Any
        Lambda event object
    context : Any
        Lambda context object

    Returns
    -------
    dict[str, Any]
        Response dict with statusCode, body and headers
    """
    invocation_id = getattr(context, "aws_request_id", None)
    return handle_event(event, invocation_id=invocation_id)
