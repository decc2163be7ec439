"""
GCE Remediate - Shared Secret Validator

Checks that the report carries the configured shared secret, either in the
secret header or in the payload `secret` field.
"""

import hmac

from gce_remediate.core.exceptions import AuthorizationError
from gce_remediate.validators.base import BaseValidator, ValidationResult


def secrets_match(expected: str, candidate) -> bool:
    """
    Constant-time comparison; non-string candidates never match.

    JSON bodies may carry lone surrogates (e.g. "\\ud800"), which plain UTF-8
    cannot encode. Both sides are encoded with surrogatepass so such a value
    is simply a mismatch.
    """
    if not isinstance(candidate, str) or not expected:
        return False
    return hmac.compare_digest(
        expected.encode('utf-8', 'surrogatepass'),
        candidate.encode('utf-8', 'surrogatepass')
    )


class SecretValidator(BaseValidator):
    """
    Validates the shared secret.

    Either channel suffices:
    - header (default `x-custom-secret`)
    - payload field `secret`

    The secret values themselves never appear in the result message.
    """

    @property
    def name(self) -> str:
        """Display name for this validator."""
        return "Shared Secret"

    def validate(self) -> ValidationResult:
        """
        Check the header and payload secrets against configuration.

        Returns:
            ValidationResult with pass/fail
        """
        expected = self.config.secret
        header_secret = self.header(self.config.secret_header)
        payload_secret = self.payload.get('secret')

        if secrets_match(expected, header_secret):
            return ValidationResult(
                validator_name=self.name,
                passed=True,
                message=f"Secret matched via header {self.config.secret_header}"
            )

        if secrets_match(expected, payload_secret):
            return ValidationResult(
                validator_name=self.name,
                passed=True,
                message="Secret matched via payload"
            )

        return ValidationResult(
            validator_name=self.name,
            passed=False,
            message=(
                "Secret did not match "
                f"(header present: {header_secret is not None}, "
                f"payload present: {payload_secret is not None})"
            ),
            error=AuthorizationError()
        )
