"""
GCE Remediate - Configuration Management

This module manages the process-wide configuration of the webhook.
Configuration is read once at startup and never mutated afterwards.
"""

import os
from dataclasses import dataclass, replace
from typing import Mapping, Optional

from gce_remediate.core.exceptions import ConfigurationError

# Version for usage tracking
VERSION = '1.0.0'

DEFAULT_SECRET_HEADER = 'x-custom-secret'

_TRUE_VALUES = ('1', 'true', 'yes', 'on')
_FALSE_VALUES = ('0', 'false', 'no', 'off', '')


@dataclass(frozen=True)
class RemediationConfig:
    """
    Configuration for the remediation webhook.

    Holds the shared secret, the project to search and the external address
    that identifies the machine to heal. Frozen so it can be shared by every
    request without locking.

    Example:
        config = RemediationConfig(
            secret='s3cr3t',
            target_address='203.0.113.10',
            project='my-project'
        )
    """

    # Required
    secret: str
    target_address: str
    project: Optional[str] = None  # None: use project from credentials

    # Request settings
    secret_header: str = DEFAULT_SECRET_HEADER

    # Behavior settings
    dry_run: bool = False  # Decide the action but never call reset/start
    wait_for_completion: bool = False  # Poll the zone operation until DONE
    operation_timeout: int = 300  # 5 minutes, only used when waiting

    # Logging settings
    log_level: str = 'INFO'
    log_file: Optional[str] = None
    debug: bool = False

    def __post_init__(self):
        if not self.secret:
            raise ConfigurationError(
                "Shared secret is empty",
                fix="Set the SECRET environment variable"
            )
        if not self.target_address:
            raise ConfigurationError(
                "Target address is empty",
                fix="Set the TARGET_IP environment variable"
            )
        if self.operation_timeout <= 0:
            raise ConfigurationError(
                f"operation_timeout must be positive, got {self.operation_timeout}"
            )

    def with_project(self, project: str) -> 'RemediationConfig':
        """Return a copy bound to `project` (used when resolved from credentials)."""
        return replace(self, project=project)

    def __repr__(self):
        # Never print the shared secret
        return (
            f"RemediationConfig(project={self.project!r}, "
            f"target_address={self.target_address!r}, "
            f"secret_header={self.secret_header!r}, dry_run={self.dry_run}, "
            f"wait_for_completion={self.wait_for_completion})"
        )

    @classmethod
    def from_env(cls, environ: Mapping[str, str] = None) -> 'RemediationConfig':
        """
        Build configuration from environment variables.

        Variables:
            SECRET (or secret): Shared secret the probe sends
            TARGET_IP: External address of the machine to heal
            PROJECT_ID (or GOOGLE_CLOUD_PROJECT): Project to search
            SECRET_HEADER: Header that may carry the secret
            DRY_RUN, WAIT_FOR_COMPLETION, DEBUG: Booleans
            OPERATION_TIMEOUT: Seconds to wait for an operation
            LOG_LEVEL, LOG_FILE: Logging settings

        Args:
            environ: Mapping to read from (defaults to os.environ)

        Returns:
            RemediationConfig

        Raises:
            ConfigurationError: If a required value is missing or malformed
        """
        env = os.environ if environ is None else environ

        return cls(
            secret=env.get('SECRET') or env.get('secret', ''),
            target_address=env.get('TARGET_IP', '').strip(),
            project=env.get('PROJECT_ID') or env.get('GOOGLE_CLOUD_PROJECT') or None,
            secret_header=env.get('SECRET_HEADER', DEFAULT_SECRET_HEADER),
            dry_run=_parse_bool('DRY_RUN', env.get('DRY_RUN')),
            wait_for_completion=_parse_bool('WAIT_FOR_COMPLETION', env.get('WAIT_FOR_COMPLETION')),
            operation_timeout=_parse_int('OPERATION_TIMEOUT', env.get('OPERATION_TIMEOUT'), 300),
            log_level=env.get('LOG_LEVEL', 'INFO'),
            log_file=env.get('LOG_FILE') or None,
            debug=_parse_bool('DEBUG', env.get('DEBUG')),
        )


def _parse_bool(name: str, value: Optional[str]) -> bool:
    if value is None:
        return False
    normalized = value.strip().lower()
    if normalized in _TRUE_VALUES:
        return True
    if normalized in _FALSE_VALUES:
        return False
    raise ConfigurationError(f"{name} must be a boolean, got {value!r}")


def _parse_int(name: str, value: Optional[str], default: int) -> int:
    if value is None or not value.strip():
        return default
    try:
        return int(value)
    except ValueError:
        raise ConfigurationError(f"{name} must be an integer, got {value!r}")


def create_remediation_config(**kwargs) -> RemediationConfig:
    """
    Create a remediation configuration with custom options.

    Args:
        **kwargs: Configuration options (any field from RemediationConfig)

    Returns:
        RemediationConfig: Configuration object

    Example:
        config = create_remediation_config(
            secret='s3cr3t',
            target_address='203.0.113.10',
            dry_run=True
        )
    """
    return RemediationConfig(**kwargs)
