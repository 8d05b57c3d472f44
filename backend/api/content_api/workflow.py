from __future__ import annotations

from content_api.models import Status

STATES: list[str] = [s.value for s in Status]


class WorkflowError(Exception):
    """Raised when a status transition is invalid."""


def list_states() -> list[str]:
    return list(STATES)


# Only the publish transition has an entry point. IN_REVIEW, APPROVED and
# ARCHIVED exist for data written by other tools.
_TRANSITIONS: dict[Status, list[Status]] = {
    Status.DRAFT: [Status.PUBLISHED],
    Status.IN_REVIEW: [Status.PUBLISHED],
    Status.APPROVED: [Status.PUBLISHED],
    Status.PUBLISHED: [],
    Status.ARCHIVED: [],
}


def _normalize_state(state: Status | str) -> Status:
    if isinstance(state, Status):
        return state
    try:
        return Status((state or "").strip().upper())
    except ValueError:
        raise WorkflowError(f"Unknown state: {state}")


def allowed_transitions(from_state: Status | str) -> list[str]:
    s = _normalize_state(from_state)
    return [t.value for t in _TRANSITIONS[s]]


def is_published(state: Status | str) -> bool:
    return _normalize_state(state) is Status.PUBLISHED


def validate_publish(from_state: Status | str) -> None:
    """
    Raises WorkflowError if the item cannot move to PUBLISHED.
    Callers treat an already published item as a no-op before asking.
    """
    s = _normalize_state(from_state)
    if Status.PUBLISHED not in _TRANSITIONS[s]:
        raise WorkflowError(
            f"Transition not allowed: {s.value} -> PUBLISHED. Allowed: {allowed_transitions(s)}"
        )
