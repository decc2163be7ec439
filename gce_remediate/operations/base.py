"""
GCE Remediate - Base Operation

This module provides the base class for the mutating operations.
Each operation does ONE thing: submit a control-plane call for one
instance and confirm the submission was accepted.

Operations never retry. Failures come back as an OperationResult with
success=False and the exception in `error`.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional, Dict, Any
import time

from gce_remediate.core.exceptions import RemoteCallError


@dataclass
class OperationResult:
    """
    Result from an operation.

    Attributes:
        operation_name: Name of the operation (for display)
        success: True if the call was accepted (and finished, when waiting)
        message: Human-readable message about the result
        operation: Operation resource returned by Compute Engine
        error: Exception if the operation failed
    """
    operation_name: str
    success: bool
    message: str
    operation: Optional[Dict[str, Any]] = None
    error: Optional[Exception] = None

    def __str__(self):
        """String representation."""
        status = "[OK]" if self.success else "[X]"
        return f"{status} {self.operation_name}: {self.message}"


class BaseOperation(ABC):
    """
    Base class for all operations.

    Every operation must:
    1. Inherit from this class
    2. Implement _submit() (issue the API call)
    3. Implement the name property

    Example usage:
        operation = ResetVMOperation(inventory, zone, logger=logger)
        result = operation.execute(vm_name='my-instance')

        if not result.success:
            print(f"Failed: {result.message}")
    """

    # Seconds between zone operation polls
    poll_interval = 5

    def __init__(self, inventory, zone: str, wait_for_completion: bool = False,
                 timeout: int = 300, logger=None):
        """
        Initialize operation.

        Args:
            inventory: InventoryClient bound to the project
            zone: GCP zone of the instance
            wait_for_completion: Poll the zone operation until DONE
            timeout: Maximum seconds to wait when polling
            logger: Optional logger for debug output
        """
        self.inventory = inventory
        self.zone = zone
        self.wait_for_completion = wait_for_completion
        self.timeout = timeout
        self.logger = logger

    @property
    @abstractmethod
    def name(self) -> str:
        """
        Human-readable name of this operation.
        """
        pass

    @abstractmethod
    def _submit(self, vm_name: str) -> Dict[str, Any]:
        """Issue the API call and return the Operation resource."""
        pass

    def execute(self, vm_name: str) -> OperationResult:
        """
        Submit the operation and confirm it was accepted.

        Args:
            vm_name: Name of the instance

        Returns:
            OperationResult
        """
        self._log_debug(f"Executing {self.name} for {vm_name}")

        try:
            operation = self._submit(vm_name)
            self._check_operation(operation, vm_name)

            if self.wait_for_completion:
                start_time = time.time()
                operation = self._wait_for_operation(operation, vm_name)
                duration = time.time() - start_time
                self._log_debug(f"{self.name} finished in {duration:.2f}s")
                message = f"{self.name} completed on {vm_name} ({duration:.0f}s)"
            else:
                message = f"{self.name} submitted for {vm_name}"

        except RemoteCallError as e:
            self._log_error(f"{self.name} failed: {str(e)}")
            return OperationResult(
                operation_name=self.name,
                success=False,
                message=f"Failed to perform {self.name} on {vm_name}",
                error=e
            )

        return OperationResult(
            operation_name=self.name,
            success=True,
            message=message,
            operation=operation
        )

    def _check_operation(self, operation: Dict[str, Any], vm_name: str):
        """Raise RemoteCallError if the Operation resource reports an error."""
        errors = (operation.get('error') or {}).get('errors')
        if errors:
            reason = '; '.join(
                err.get('message') or err.get('code', 'unknown error') for err in errors
            )
            raise RemoteCallError(self.name, reason, vm_name)

    def _wait_for_operation(self, operation: Dict[str, Any], vm_name: str) -> Dict[str, Any]:
        """
        Poll the zone operation until it is DONE.

        Raises:
            RemoteCallError: On timeout, poll failure or operation error
        """
        operation_name = operation.get('name')
        if not operation_name:
            raise RemoteCallError(self.name, "operation resource has no name", vm_name)

        start_time = time.time()

        while operation.get('status') != 'DONE':
            if time.time() - start_time > self.timeout:
                raise RemoteCallError(
                    self.name,
                    f"timeout waiting for operation {operation_name} (>{self.timeout}s)",
                    vm_name
                )

            self._log_debug(f"Operation {operation_name} status: {operation.get('status')}")
            time.sleep(self.poll_interval)
            operation = self.inventory.get_zone_operation(self.zone, operation_name, vm_name)

        self._check_operation(operation, vm_name)
        return operation

    def _log_debug(self, message: str):
        """Log debug message if logger available."""
        if self.logger:
            self.logger.debug(message)

    def _log_info(self, message: str):
        """Log info message if logger available."""
        if self.logger:
            self.logger.info(message)

    def _log_error(self, message: str):
        """Log error message if logger available."""
        if self.logger:
            self.logger.error(message)
