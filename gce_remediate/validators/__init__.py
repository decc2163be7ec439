"""
GCE Remediate - Validators Module

This module provides the checks every report must pass before any
Compute Engine call is made.

Usage:
    from gce_remediate.validators import RequestValidator

    validator = RequestValidator(config, logger)
    request = validator.validate(payload, headers)
"""

from gce_remediate.validators.base import (
    BaseValidator,
    ValidationResult,
    ValidationResults,
    ValidationRunner
)
from gce_remediate.validators.secret import SecretValidator, secrets_match
from gce_remediate.validators.health_signal import HealthSignalValidator, classify_signal
from gce_remediate.validators.request import RequestValidator

__all__ = [
    # Base classes
    'BaseValidator',
    'ValidationResult',
    'ValidationResults',
    'ValidationRunner',

    # Validators
    'SecretValidator',
    'HealthSignalValidator',
    'RequestValidator',

    # Helpers
    'secrets_match',
    'classify_signal',
]
