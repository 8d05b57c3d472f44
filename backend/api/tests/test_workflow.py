import pytest

from content_api.models import Status
from content_api.workflow import (
    WorkflowError,
    allowed_transitions,
    is_published,
    list_states,
    validate_publish,
)


def test_states_cover_every_status():
    assert list_states() == ["DRAFT", "IN_REVIEW", "APPROVED", "PUBLISHED", "ARCHIVED"]


@pytest.mark.parametrize("state", [Status.DRAFT, Status.IN_REVIEW, Status.APPROVED, "draft"])
def test_publishable_states(state):
    validate_publish(state)


def test_archived_cannot_be_published():
    with pytest.raises(WorkflowError):
        validate_publish(Status.ARCHIVED)


def test_published_has_no_outgoing_transitions():
    assert allowed_transitions("PUBLISHED") == []
    assert is_published("PUBLISHED")


def test_unknown_state():
    with pytest.raises(WorkflowError):
        allowed_transitions("RETIRED")
