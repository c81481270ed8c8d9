"""Transient data types produced during a single invocation."""

from __future__ import annotations

from dataclasses import dataclass, field

from ec2_automation.constants import NAME_PLACEHOLDER, NAME_TAG_KEY


@dataclass(frozen=True)
class Instance:
    """Read-only projection of a provider instance.

    Attributes
    ----------
    instance_id : str
        Provider instance ID
    state : str
        Lifecycle state name (pending, running, stopping, stopped)
    instance_type : str
        Instance type (e.g. ``t3.micro``)
    tags : dict[str, str]
        Instance tags keyed by tag key
    """

    instance_id: str
    state: str
    instance_type: str
    tags: dict[str, str] = field(default_factory=dict)

    @property
    def name(self) -> str:
        """Display name from the Name tag, or ``N/A`` when absent."""
        return self.tags.get(NAME_TAG_KEY, NAME_PLACEHOLDER)


@dataclass(frozen=True)
class StateTransition:
    """State change reported by a start or stop request."""

    instance_id: str
    previous_state: str
    current_state: str


@dataclass
class ManageResult:
    """Outcome of one manage invocation.

    Attributes
    ----------
    action : str
        Action that was executed
    dry_run : bool
        Whether mutating calls were suppressed
    matched : list[Instance]
        Instances returned by the tag and state query
    targeted : list[str]
        Instance IDs selected for the start/stop request
    transitions : list[StateTransition]
        Transitions returned by the provider (empty for list and dry runs)
    """

    action: str
    dry_run: bool = False
    matched: list[Instance] = field(default_factory=list)
    targeted: list[str] = field(default_factory=list)
    transitions: list[StateTransition] = field(default_factory=list)

    def summary(self) -> dict[str, object]:
        """Serializable summary used in event responses."""
        return {
            "action": self.action,
            "dry_run": self.dry_run,
            "matched": len(self.matched),
            "targeted": list(self.targeted),
            "transitions": [
                {
                    "instance_id": t.instance_id,
                    "previous_state": t.previous_state,
                    "current_state": t.current_state,
                }
                for t in self.transitions
            ],
        }
