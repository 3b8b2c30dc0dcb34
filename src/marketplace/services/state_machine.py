"""Transition tables for every status field the lifecycle services mutate.

Services never assign a status directly; they ask the matching table first.
"""

from collections.abc import Mapping
from enum import Enum
from typing import Generic, TypeVar

from src.marketplace.core.exceptions import InvalidTransitionError
from src.marketplace.models import (
    Decision,
    OrganizationStatus,
    ProjectStatus,
    RequestStatus,
)


S = TypeVar("S", bound=Enum)


class TransitionTable(Generic[S]):
    """Closed set of allowed (current -> target) moves for one status enum."""

    def __init__(self, name: str, state_type: type[S], transitions: Mapping[S, set[S]]):
        self.name = name
        self.state_type = state_type
        self._transitions = {state: frozenset(targets) for state, targets in transitions.items()}

    def _coerce(self, state: S | str) -> S:
        if isinstance(state, self.state_type):
            return state
        try:
            return self.state_type(state)
        except ValueError as e:
            raise InvalidTransitionError(f"Unknown {self.name} status: {state}") from e

    def targets(self, current: S | str) -> frozenset[S]:
        return self._transitions.get(self._coerce(current), frozenset())

    def can(self, current: S | str, target: S | str) -> bool:
        return self._coerce(target) in self.targets(current)

    def is_terminal(self, state: S | str) -> bool:
        return not self.targets(state)

    def ensure(self, current: S | str, target: S | str) -> S:
        """Return the target state, or raise if the move is not in the table."""
        current_state = self._coerce(current)
        target_state = self._coerce(target)
        if target_state not in self.targets(current_state):
            raise InvalidTransitionError(
                f"{self.name.capitalize()} cannot move from "
                f"'{current_state.value}' to '{target_state.value}'"
            )
        return target_state


REQUEST_TRANSITIONS: TransitionTable[RequestStatus] = TransitionTable(
    "request",
    RequestStatus,
    {
        RequestStatus.PENDING: {RequestStatus.APPROVED, RequestStatus.REJECTED},
    },
)

PROJECT_TRANSITIONS: TransitionTable[ProjectStatus] = TransitionTable(
    "project",
    ProjectStatus,
    {
        ProjectStatus.DRAFT: {ProjectStatus.PENDING_PUBLISH, ProjectStatus.PUBLISHED},
        ProjectStatus.PENDING_PUBLISH: {ProjectStatus.PUBLISHED, ProjectStatus.DRAFT},
        ProjectStatus.PUBLISHED: {ProjectStatus.IN_PROGRESS, ProjectStatus.COMPLETED},
        ProjectStatus.IN_PROGRESS: {ProjectStatus.COMPLETED},
    },
)

ORGANIZATION_TRANSITIONS: TransitionTable[OrganizationStatus] = TransitionTable(
    "organization",
    OrganizationStatus,
    {
        OrganizationStatus.PENDING_APPROVAL: {
            OrganizationStatus.ACTIVE,
            OrganizationStatus.REJECTED,
        },
    },
)

# Project statuses that accept new applications.
PROJECT_OPEN_STATUSES = frozenset({ProjectStatus.PUBLISHED, ProjectStatus.IN_PROGRESS})


def parse_decision(decision: Decision | str) -> Decision:
    """Coerce an approve/reject decision, rejecting anything else."""
    if isinstance(decision, Decision):
        return decision
    try:
        return Decision(decision)
    except ValueError as e:
        raise InvalidTransitionError(
            f"Decision must be 'approved' or 'rejected', got '{decision}'"
        ) from e


def request_status_for(decision: Decision) -> RequestStatus:
    return RequestStatus(decision.value)
