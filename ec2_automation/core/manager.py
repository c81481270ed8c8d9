"""Tag-filtered instance management."""

from __future__ import annotations

import logging

from ec2_automation.constants import Action, InstanceState
from ec2_automation.core.config import Configuration
from ec2_automation.core.errors import ActionError, InvalidConfigurationError, QueryError
from ec2_automation.core.interfaces import ComputeProvider
from ec2_automation.core.models import Instance, ManageResult
from ec2_automation.providers.aws.constants import ACTIVE_INSTANCE_STATES
from ec2_automation.providers.exceptions import ProviderError

LIST_ROW_FORMAT = "{:<20} {:<15} {:<15} {:<30}"
LIST_RULE_WIDTH = 80


class InstanceManager:
    """Execute one action against one tag-filtered set of instances.

    Parameters
    ----------
    compute_provider : ComputeProvider
        Backend used to query, start and stop instances
    logger : logging.Logger | logging.LoggerAdapter | None
        Logger scoped to the current invocation. Defaults to the module logger.
    """

    def __init__(
        self,
        compute_provider: ComputeProvider,
        logger: logging.Logger | logging.LoggerAdapter | None = None,
    ) -> None:
        self.compute_provider = compute_provider
        self.logger = logger or logging.getLogger(__name__)

    def manage(self, config: Configuration) -> ManageResult:
        """Query instances by tag and dispatch the configured action.

        Parameters
        ----------
        config : Configuration
            Validated configuration

        Returns
        -------
        ManageResult
            Matched instances, targeted IDs and reported transitions

        Raises
        ------
        QueryError
            If the instance query fails
        ActionError
            If the start or stop request fails
        InvalidConfigurationError
            If the action is not supported
        """
        self.logger.info(
            "Starting EC2 instance management - Action: %s, Tag: %s=%s, Region: %s",
            config.action,
            config.tag_key,
            config.tag_value,
            config.region,
        )

        result = ManageResult(action=config.action, dry_run=config.dry_run)
        result.matched = self._get_instances_by_tag(config.tag_key, config.tag_value)

        if not result.matched:
            self.logger.info(
                "No instances found with tag %s=%s", config.tag_key, config.tag_value
            )
            return result

        self.logger.info(
            "Found %d instances with tag %s=%s",
            len(result.matched),
            config.tag_key,
            config.tag_value,
        )

        if config.action == Action.LIST:
            self._list_instances(result.matched)
        elif config.action == Action.START:
            self._change_state(result, Action.START, InstanceState.STOPPED)
        elif config.action == Action.STOP:
            self._change_state(result, Action.STOP, InstanceState.RUNNING)
        else:
            raise InvalidConfigurationError(f"Unsupported action: {config.action}")

        return result

    def _get_instances_by_tag(self, tag_key: str, tag_value: str) -> list[Instance]:
        try:
            return self.compute_provider.describe_instances_by_tag(
                tag_key, tag_value, ACTIVE_INSTANCE_STATES
            )
        except ProviderError as e:
            raise QueryError("Failed to get instances", cause=e) from e

    def _list_instances(self, instances: list[Instance]) -> None:
        self.logger.info("Listing instances:")
        print(LIST_ROW_FORMAT.format("Instance ID", "State", "Type", "Name"))
        print("-" * LIST_RULE_WIDTH)

        for instance in instances:
            print(
                LIST_ROW_FORMAT.format(
                    instance.instance_id,
                    instance.state,
                    instance.instance_type,
                    instance.name,
                )
            )

    def _change_state(
        self, result: ManageResult, action: Action, source_state: InstanceState
    ) -> None:
        """Start or stop the matched instances currently in ``source_state``.

        Instances in any other state are ignored.
        """
        verb = action.value
        result.targeted = [
            instance.instance_id
            for instance in result.matched
            if instance.state == source_state
        ]

        if not result.targeted:
            self.logger.info("No %s instances to %s", source_state.value, verb)
            return

        if result.dry_run:
            self.logger.info(
                "DRY RUN: Would %s %d instances: %s",
                verb,
                len(result.targeted),
                ", ".join(result.targeted),
            )
            return

        request = (
            self.compute_provider.start_instances
            if action == Action.START
            else self.compute_provider.stop_instances
        )

        try:
            result.transitions = request(result.targeted)
        except ProviderError as e:
            raise ActionError(f"Failed to {verb} instances", verb, cause=e) from e

        self.logger.info(
            "Successfully initiated %s for %d instances", verb, len(result.transitions)
        )
        for transition in result.transitions:
            self.logger.info(
                "Instance %s: %s -> %s",
                transition.instance_id,
                transition.previous_state,
                transition.current_state,
            )
