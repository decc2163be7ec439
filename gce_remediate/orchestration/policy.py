"""
GCE Remediate - Remediation Policy

Maps an instance's lifecycle state to the one action that heals it:

    RUNNING               -> RESET  (hard reboot, keeps addresses)
    STOPPED / TERMINATED  -> START
    anything else         -> NONE   (transition in flight; do not interfere)
"""

from gce_remediate.core.exceptions import UnsupportedStateError
from gce_remediate.core.models import InstanceState, RemediationAction

ACTIONS = {
    InstanceState.RUNNING: RemediationAction.RESET,
    InstanceState.STOPPED: RemediationAction.START,
    InstanceState.TERMINATED: RemediationAction.START,
}


def choose_action(state: InstanceState) -> RemediationAction:
    """Return the action for `state` (pure, deterministic)."""
    return ACTIONS.get(state, RemediationAction.NONE)


def require_action(status: str, instance_name: str) -> RemediationAction:
    """
    Return the action for a raw Compute Engine status.

    Args:
        status: Status string from instances.get (e.g. 'RUNNING')
        instance_name: Used in the error message

    Raises:
        UnsupportedStateError: If the policy has no action for the state
    """
    action = choose_action(InstanceState.parse(status))
    if action is RemediationAction.NONE:
        raise UnsupportedStateError(instance_name, status)
    return action
