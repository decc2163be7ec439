"""
GCE Remediate - Orchestration Module

Coordinates the remediation workflow.
"""

from gce_remediate.orchestration.policy import choose_action, require_action
from gce_remediate.orchestration.executor import RemediationExecutor
from gce_remediate.orchestration.remediate import RemediationOrchestrator

__all__ = [
    'choose_action',
    'require_action',
    'RemediationExecutor',
    'RemediationOrchestrator',
]
