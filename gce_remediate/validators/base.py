"""
GCE Remediate - Base Validator

This module provides the base class for all report validators.
Each validator checks one thing about an inbound report and returns pass/fail.
No validator makes a remote call.

Pattern: Create a new validator by inheriting from BaseValidator
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List, Mapping, Optional

from gce_remediate.core.config import RemediationConfig


@dataclass
class ValidationResult:
    """
    Result from a single validation check.

    Attributes:
        validator_name: Name of the validator (for display)
        passed: True if validation passed, False if failed
        message: Human-readable message about the result
        error: Exception describing the failure (None when passed)
        value: Parsed value produced by the check, if any
    """
    validator_name: str
    passed: bool
    message: str
    error: Optional[Exception] = None
    value: object = None

    def __str__(self):
        """String representation of result."""
        status = "[OK]" if self.passed else "[X]"
        return f"{status} {self.validator_name}: {self.message}"


class ValidationResults:
    """
    Collection of validation results.
    """

    def __init__(self):
        """Initialize empty results."""
        self.results: List[ValidationResult] = []

    def add(self, result: ValidationResult):
        """Add a validation result."""
        self.results.append(result)

    def all_passed(self) -> bool:
        """Check if all validations passed."""
        return all(r.passed for r in self.results)

    def get_failures(self) -> List[ValidationResult]:
        """Get only failed validations."""
        return [r for r in self.results if not r.passed]

    def get(self, validator_name: str) -> Optional[ValidationResult]:
        """Get the result of a validator by name."""
        for result in self.results:
            if result.validator_name == validator_name:
                return result
        return None


class BaseValidator(ABC):
    """
    Base class for all report validators.

    To create a new validator:
    1. Inherit from this class
    2. Implement the validate() method
    3. Implement the name property

    Example:
        class MyValidator(BaseValidator):
            @property
            def name(self):
                return "My Check"

            def validate(self):
                if self.payload.get('field'):
                    return ValidationResult(
                        validator_name=self.name,
                        passed=True,
                        message="Field present"
                    )
                return ValidationResult(
                    validator_name=self.name,
                    passed=False,
                    message="Field missing"
                )
    """

    def __init__(self, config: RemediationConfig, payload: Mapping, headers: Mapping = None):
        """
        Initialize validator.

        Args:
            config: Process configuration
            payload: Parsed JSON body of the report
            headers: Request headers (case-insensitive mapping preferred)
        """
        self.config = config
        self.payload = payload
        self.headers = headers or {}

    @abstractmethod
    def validate(self) -> ValidationResult:
        """
        Run the validation check.

        Returns:
            ValidationResult with pass/fail and message
        """
        pass

    @property
    @abstractmethod
    def name(self) -> str:
        """
        Human-readable name of this validator.
        """
        pass

    def header(self, name: str) -> Optional[str]:
        """Read a header regardless of the mapping's key case."""
        value = self.headers.get(name)
        if value is not None:
            return value
        lowered = name.lower()
        for key, candidate in self.headers.items():
            if str(key).lower() == lowered:
                return candidate
        return None


class ValidationRunner:
    """
    Runs multiple validators and collects results.

    Every validator runs even after a failure, so a rejected report takes
    the same path whichever check failed.

    Example:
        runner = ValidationRunner()
        runner.add(SecretValidator(config, payload, headers))
        runner.add(HealthSignalValidator(config, payload, headers))

        results = runner.run_all(logger)
        if not results.all_passed():
            ...
    """

    def __init__(self):
        """Initialize empty validator list."""
        self.validators: List[BaseValidator] = []

    def add(self, validator: BaseValidator):
        """
        Add a validator to the chain.

        Args:
            validator: A validator instance
        """
        self.validators.append(validator)

    def run_all(self, logger=None) -> ValidationResults:
        """
        Run all validators and collect results.

        Args:
            logger: Optional logger for debug output

        Returns:
            ValidationResults with all results
        """
        results = ValidationResults()

        for validator in self.validators:
            if logger:
                logger.debug(f"Running validator: {validator.name}")

            result = validator.validate()

            if logger:
                status = "PASS" if result.passed else "FAIL"
                logger.debug(f"  {status}: {result.message}")

            results.add(result)

        return results
