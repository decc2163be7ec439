"""
GCE Remediate - Data Model

Value types that flow through one remediation request:
request -> instance reference -> state -> action -> outcome.
None of these are persisted.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class SignalKind(Enum):
    """Health signals we remediate."""
    NOT_RESPONDING = 'Not Responding'
    REQUEST_TIMEOUT = 'Request Timeout'
    REPORTING_ERROR = 'Reporting Error'


@dataclass(frozen=True)
class HealthSignal:
    """
    A classified health report.

    Attributes:
        kind: Which signal was reported
        reason: Text after the "Reporting Error" prefix (empty otherwise)
    """
    kind: SignalKind
    reason: str = ''

    def __str__(self):
        if self.reason:
            return f"{self.kind.value}: {self.reason}"
        return self.kind.value


@dataclass(frozen=True)
class RemediationRequest:
    """
    An authorized, classified report from the health probe.

    Attributes:
        reported_secret: `secret` field of the JSON payload
        signal: Classified `responseState`
        header_secret: Value of the secret header, if present
    """
    reported_secret: Optional[str]
    signal: HealthSignal
    header_secret: Optional[str] = None

    def __repr__(self):
        return f"RemediationRequest(signal={self.signal!s})"


@dataclass(frozen=True)
class InstanceRef:
    """An instance located by address."""
    name: str
    zone: str

    def __str__(self):
        return f"{self.zone}/{self.name}"


class InstanceState(Enum):
    """Lifecycle states the policy distinguishes."""
    RUNNING = 'RUNNING'
    TERMINATED = 'TERMINATED'
    STOPPED = 'STOPPED'
    OTHER = 'OTHER'

    @classmethod
    def parse(cls, status: str) -> 'InstanceState':
        """Map a Compute Engine status string to a state (unknown -> OTHER)."""
        try:
            state = cls(status)
        except ValueError:
            return cls.OTHER
        return state


class RemediationAction(Enum):
    """Control actions the executor can take."""
    RESET = 'reset'
    START = 'start'
    NONE = 'none'


@dataclass
class RemediationOutcome:
    """
    Terminal result of one remediation request.

    Attributes:
        instance: Instance that was acted on
        action: Action chosen by the policy
        success: True if the action was submitted (or dry-run)
        detail: Human-readable message
        status: Raw Compute Engine status read before acting
        error: Exception that stopped the action, if any
    """
    instance: InstanceRef
    action: RemediationAction
    success: bool
    detail: str
    status: Optional[str] = None
    error: Optional[Exception] = None

    def __str__(self):
        marker = "[OK]" if self.success else "[X]"
        return f"{marker} {self.action.value} {self.instance}: {self.detail}"

    def to_dict(self) -> dict:
        """Response body for the webhook caller."""
        return {
            'instance': self.instance.name,
            'zone': self.instance.zone,
            'action': self.action.value,
            'status': self.status,
            'success': self.success,
            'detail': self.detail,
        }
