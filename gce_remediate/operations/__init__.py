"""
GCE Remediate - Operations Module

Mutating control-plane operations, one class per Compute Engine call.

Usage:
    from gce_remediate.operations import ResetVMOperation

    result = ResetVMOperation(inventory, zone, logger=logger).execute('my-vm')
"""

from gce_remediate.operations.base import BaseOperation, OperationResult
from gce_remediate.operations.reset_vm import ResetVMOperation
from gce_remediate.operations.start_vm import StartVMOperation

__all__ = [
    'BaseOperation',
    'OperationResult',
    'ResetVMOperation',
    'StartVMOperation',
]
