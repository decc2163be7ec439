"""
GCE Remediate - Remediation Executor

Runs the fixed fetch -> decide -> act sequence for one located instance.
The state is always read fresh right before deciding; the address match
from the locator says nothing about the lifecycle state.
"""

from gce_remediate.core.config import RemediationConfig
from gce_remediate.core.exceptions import RemoteCallError, UnsupportedStateError
from gce_remediate.core.models import InstanceRef, RemediationAction, RemediationOutcome
from gce_remediate.inventory.client import InventoryClient
from gce_remediate.operations import ResetVMOperation, StartVMOperation
from gce_remediate.orchestration.policy import require_action

OPERATIONS = {
    RemediationAction.RESET: ResetVMOperation,
    RemediationAction.START: StartVMOperation,
}


class RemediationExecutor:
    """
    Executes the policy's action on one instance.

    Never raises for remote or state problems: they come back as an
    unsuccessful RemediationOutcome carrying the error, with the instance
    name preserved.

    Example:
        executor = RemediationExecutor(inventory, config, logger)
        outcome = executor.execute(InstanceRef('web-1', 'us-central1-a'))
    """

    def __init__(self, inventory: InventoryClient, config: RemediationConfig, logger=None):
        self.inventory = inventory
        self.config = config
        self.logger = logger

    def _log_info(self, message: str):
        if self.logger:
            self.logger.info(message)

    def _log_warning(self, message: str):
        if self.logger:
            self.logger.warning(message)

    def _log_error(self, message: str):
        if self.logger:
            self.logger.error(message)

    def fetch_status(self, ref: InstanceRef) -> str:
        """
        Read the instance's current status.

        Raises:
            RemoteCallError: If the call fails or the response has no status
        """
        details = self.inventory.get_instance(ref.zone, ref.name)
        status = details.get('status')
        if not isinstance(status, str) or not status:
            raise RemoteCallError(
                'instances.get', "Failed to fetch instance details", ref.name
            )
        return status

    def execute(self, ref: InstanceRef) -> RemediationOutcome:
        """
        Fetch state, decide and act.

        Args:
            ref: Instance returned by the locator

        Returns:
            RemediationOutcome
        """

        # Step 1: Fetch
        try:
            status = self.fetch_status(ref)
        except RemoteCallError as e:
            self._log_error(f"Could not read state of {ref.name}: {e.reason}")
            return RemediationOutcome(
                instance=ref,
                action=RemediationAction.NONE,
                success=False,
                detail='Failed to fetch instance details',
                error=e
            )

        self._log_info(f"Instance {ref.name} status: {status}")

        # Step 2: Decide
        try:
            action = require_action(status, ref.name)
        except UnsupportedStateError as e:
            self._log_warning(f"No action for {ref.name} in state {status}")
            return RemediationOutcome(
                instance=ref,
                action=RemediationAction.NONE,
                success=False,
                detail=f"Instance {ref.name} is in unsupported state {status}; no action taken",
                status=status,
                error=e
            )

        if self.config.dry_run:
            self._log_info(f"Dry run: would {action.value} {ref.name}")
            return RemediationOutcome(
                instance=ref,
                action=action,
                success=True,
                detail=f"Dry run: would {action.value} {ref.name}",
                status=status
            )

        # Step 3: Act
        operation = OPERATIONS[action](
            self.inventory,
            ref.zone,
            wait_for_completion=self.config.wait_for_completion,
            timeout=self.config.operation_timeout,
            logger=self.logger
        )
        result = operation.execute(ref.name)

        if not result.success:
            return RemediationOutcome(
                instance=ref,
                action=action,
                success=False,
                detail=result.message,
                status=status,
                error=result.error
            )

        self._log_info(f"VM instance {ref.name} operation completed.")
        return RemediationOutcome(
            instance=ref,
            action=action,
            success=True,
            detail=f"Operation completed on {ref.name}",
            status=status
        )
