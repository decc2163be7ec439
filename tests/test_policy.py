"""Unit tests for the remediation policy."""

import pytest

from gce_remediate.core.exceptions import UnsupportedStateError
from gce_remediate.core.models import InstanceState, RemediationAction
from gce_remediate.orchestration import choose_action, require_action


@pytest.mark.parametrize(
    "state, action",
    [
        (InstanceState.RUNNING, RemediationAction.RESET),
        (InstanceState.STOPPED, RemediationAction.START),
        (InstanceState.TERMINATED, RemediationAction.START),
        (InstanceState.OTHER, RemediationAction.NONE),
    ],
)
def test_choose_action(state, action):
    assert choose_action(state) is action
    # Same input, same answer
    assert choose_action(state) is choose_action(state)


@pytest.mark.parametrize("status", ["PROVISIONING", "STAGING", "STOPPING", "SUSPENDING", "SUSPENDED", "REPAIRING", "running", ""])
def test_parse_unknown_status_is_other(status):
    assert InstanceState.parse(status) is InstanceState.OTHER


@pytest.mark.parametrize(
    "status, action",
    [("RUNNING", RemediationAction.RESET), ("STOPPED", RemediationAction.START), ("TERMINATED", RemediationAction.START)],
)
def test_require_action(status, action):
    assert require_action(status, "web-1") is action


def test_require_action_rejects_transitional_state():
    with pytest.raises(UnsupportedStateError) as exc_info:
        require_action("PROVISIONING", "web-1")

    assert exc_info.value.instance_name == "web-1"
    assert exc_info.value.current_state == "PROVISIONING"
    assert exc_info.value.http_status == 500
