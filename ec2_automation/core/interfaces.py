"""Protocols describing the capabilities the core depends on."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol

from ec2_automation.core.models import Instance, StateTransition


class ComputeProvider(Protocol):
    """Compute backend able to query, start and stop instances."""

    region: str

    def describe_instances_by_tag(
        self, tag_key: str, tag_value: str, states: Sequence[str]
    ) -> list[Instance]:
        """Return instances carrying ``tag_key=tag_value`` in one of ``states``."""
        ...

    def start_instances(self, instance_ids: Sequence[str]) -> list[StateTransition]:
        """Request a start of ``instance_ids``."""
        ...

    def stop_instances(self, instance_ids: Sequence[str]) -> list[StateTransition]:
        """Request a stop of ``instance_ids``."""
        ...
