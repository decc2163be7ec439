"""Utils package."""

from gce_remediate.utils.logger import setup_logging, redact_payload, print_header

__all__ = [
    'print_header',
    'setup_logging',
    'redact_payload',
]
