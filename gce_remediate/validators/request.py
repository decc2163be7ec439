"""
GCE Remediate - Request Validator

Gates an inbound report: runs the secret and signal validators and either
returns an authorized RemediationRequest or raises one combined rejection.
"""

from typing import Mapping

from gce_remediate.core.config import RemediationConfig
from gce_remediate.core.exceptions import RequestRejectedError
from gce_remediate.core.models import RemediationRequest
from gce_remediate.validators.base import ValidationRunner
from gce_remediate.validators.health_signal import HealthSignalValidator
from gce_remediate.validators.secret import SecretValidator


class RequestValidator:
    """
    Authenticates and classifies an inbound report.

    Example:
        validator = RequestValidator(config, logger)
        request = validator.validate(payload, headers)  # raises RequestRejectedError
    """

    def __init__(self, config: RemediationConfig, logger=None):
        self.config = config
        self.logger = logger

    def validate(self, payload: Mapping, headers: Mapping = None) -> RemediationRequest:
        """
        Validate a report.

        Args:
            payload: Parsed JSON body (anything that is not a dict is rejected)
            headers: Request headers

        Returns:
            RemediationRequest

        Raises:
            RequestRejectedError: If the secret or the signal check failed
        """
        if not isinstance(payload, Mapping):
            payload = {}
        headers = headers or {}

        runner = ValidationRunner()
        secret_check = SecretValidator(self.config, payload, headers)
        signal_check = HealthSignalValidator(self.config, payload, headers)
        runner.add(secret_check)
        runner.add(signal_check)

        results = runner.run_all(self.logger)

        if not results.all_passed():
            failures = results.get_failures()
            if self.logger:
                names = ', '.join(r.validator_name for r in failures)
                self.logger.warning(f"Report rejected (failed checks: {names})")
            raise RequestRejectedError([r.error for r in failures])

        signal = results.get(signal_check.name).value
        return RemediationRequest(
            reported_secret=payload.get('secret'),
            signal=signal,
            header_secret=secret_check.header(self.config.secret_header),
        )
