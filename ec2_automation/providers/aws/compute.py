"""EC2 instance queries and state changes for ec2_automation."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

import boto3

from ec2_automation.core.models import Instance, StateTransition
from ec2_automation.providers.aws.constants import INSTANCE_STATE_FILTER, TAG_FILTER_PREFIX
from ec2_automation.providers.aws.errors import handle_aws_errors
from ec2_automation.providers.aws.utils import (
    instance_from_description,
    transitions_from_response,
)

logger = logging.getLogger(__name__)


class EC2Manager:
    """Query, start and stop EC2 instances in one region."""

    def __init__(
        self,
        region: str,
        boto3_client_factory: Any | None = None,
    ) -> None:
        """Initialize EC2 manager.

        Parameters
        ----------
        region : str
            AWS region for EC2 operations. An empty string falls back to the
            region resolved by boto3 from the environment.
        boto3_client_factory : Callable[..., Any] | None
            Optional factory for creating boto3 clients. If None, uses boto3.client

        Raises
        ------
        ProviderError
            If the boto3 client cannot be created
        """
        self.region = region
        self.boto3_client_factory = boto3_client_factory or boto3.client

        with handle_aws_errors():
            self.ec2_client = self.boto3_client_factory("ec2", region_name=region or None)

    def describe_instances_by_tag(
        self, tag_key: str, tag_value: str, states: Sequence[str]
    ) -> list[Instance]:
        """Find instances with an exact tag match in the given states.

        Parameters
        ----------
        tag_key : str
            Tag key to filter on
        tag_value : str
            Exact tag value to match
        states : Sequence[str]
            Lifecycle states to include

        Returns
        -------
        list[Instance]
            Matching instances in response order

        Raises
        ------
        ProviderError
            If the describe_instances call fails
        """
        filters = [
            {"Name": f"{TAG_FILTER_PREFIX}{tag_key}", "Values": [tag_value]},
            {"Name": INSTANCE_STATE_FILTER, "Values": list(states)},
        ]

        instances: list[Instance] = []

        with handle_aws_errors():
            paginator = self.ec2_client.get_paginator("describe_instances")

            for page in paginator.paginate(Filters=filters):
                for reservation in page["Reservations"]:
                    for instance in reservation["Instances"]:
                        instances.append(instance_from_description(instance))

        logger.debug(
            "describe_instances returned %d instances in %s", len(instances), self.region
        )
        return instances

    def start_instances(self, instance_ids: Sequence[str]) -> list[StateTransition]:
        """Request a start of the given instances.

        Parameters
        ----------
        instance_ids : Sequence[str]
            Instance IDs to start

        Returns
        -------
        list[StateTransition]
            Transition reported for each instance

        Raises
        ------
        ProviderError
            If the start_instances call fails
        """
        with handle_aws_errors():
            response = self.ec2_client.start_instances(InstanceIds=list(instance_ids))

        return transitions_from_response(response, "StartingInstances")

    def stop_instances(self, instance_ids: Sequence[str]) -> list[StateTransition]:
        """Request a stop of the given instances.

        Parameters
        ----------
        instance_ids : Sequence[str]
            Instance IDs to stop

        Returns
        -------
        list[StateTransition]
            Transition reported for each instance

        Raises
        ------
        ProviderError
            If the stop_instances call fails
        """
        with handle_aws_errors():
            response = self.ec2_client.stop_instances(InstanceIds=list(instance_ids))

        return transitions_from_response(response, "StoppingInstances")
