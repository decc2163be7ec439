"""
GCE Remediate - Health Signal Validator

Classifies the `responseState` the probe reported. Only failure signals
trigger remediation.
"""

from typing import Optional

from gce_remediate.core.exceptions import SignalValidationError
from gce_remediate.core.models import HealthSignal, SignalKind
from gce_remediate.validators.base import BaseValidator, ValidationResult


def classify_signal(response_state) -> Optional[HealthSignal]:
    """
    Classify a reported response state.

    Accepted:
    - exactly "Not Responding"
    - exactly "Request Timeout"
    - anything starting with "Reporting Error" (e.g. "Reporting Error: 502")

    Args:
        response_state: Raw value of the payload field

    Returns:
        HealthSignal, or None if the state is not remediated
    """
    if not isinstance(response_state, str):
        return None

    if response_state == SignalKind.NOT_RESPONDING.value:
        return HealthSignal(SignalKind.NOT_RESPONDING)

    if response_state == SignalKind.REQUEST_TIMEOUT.value:
        return HealthSignal(SignalKind.REQUEST_TIMEOUT)

    prefix = SignalKind.REPORTING_ERROR.value
    if response_state.startswith(prefix):
        reason = response_state[len(prefix):].lstrip(' :-').strip()
        return HealthSignal(SignalKind.REPORTING_ERROR, reason)

    return None


class HealthSignalValidator(BaseValidator):
    """
    Validates the payload `responseState` field.

    On success the classified HealthSignal is returned in `result.value`.
    """

    @property
    def name(self) -> str:
        """Display name for this validator."""
        return "Health Signal"

    def validate(self) -> ValidationResult:
        """
        Classify `responseState`.

        Returns:
            ValidationResult with pass/fail
        """
        response_state = self.payload.get('responseState')
        signal = classify_signal(response_state)

        if signal is None:
            return ValidationResult(
                validator_name=self.name,
                passed=False,
                message=f"Unrecognized response state: {response_state!r}",
                error=SignalValidationError(response_state)
            )

        return ValidationResult(
            validator_name=self.name,
            passed=True,
            message=f"Signal: {signal}",
            value=signal
        )
