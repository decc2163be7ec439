"""
GCE Remediate - Remediation Orchestrator

Coordinates one report end to end:
1. Validates the report (secret + health signal), no remote calls
2. Locates the instance by external address
3. Fetches its state, decides and acts (RemediationExecutor)

Each report is an independent sequential workflow; nothing is shared
between reports except the frozen configuration and the API client.
"""

from typing import Mapping

from gce_remediate.core.config import RemediationConfig
from gce_remediate.core.models import InstanceRef, RemediationOutcome, RemediationRequest
from gce_remediate.inventory import InstanceLocator, InventoryClient
from gce_remediate.orchestration.executor import RemediationExecutor
from gce_remediate.utils.logger import print_header
from gce_remediate.validators import RequestValidator


class RemediationOrchestrator:
    """
    Orchestrates the remediation workflow.

    Example:
        orchestrator = RemediationOrchestrator(
            inventory=inventory,
            config=config,
            logger=logger
        )

        outcome = orchestrator.run(payload, headers)
        # raises RequestRejectedError, InstanceNotFoundError, RemoteCallError
    """

    def __init__(self, inventory: InventoryClient, config: RemediationConfig, logger=None):
        """
        Initialize remediation orchestrator.

        Args:
            inventory: Inventory client bound to the configured project
            config: Process configuration
            logger: Optional logger
        """
        self.inventory = inventory
        self.config = config
        self.logger = logger

        self.validator = RequestValidator(config, logger)
        self.locator = InstanceLocator(inventory, config.target_address, logger)
        self.executor = RemediationExecutor(inventory, config, logger)

    def _log_info(self, message: str):
        """Log info message."""
        if self.logger:
            self.logger.info(message)

    def validate(self, payload: Mapping, headers: Mapping = None) -> RemediationRequest:
        """
        Authenticate and classify the report.

        Raises:
            RequestRejectedError: If either check failed
        """
        request = self.validator.validate(payload, headers)
        self._log_info(f"Report accepted: {request.signal}")
        return request

    def locate(self) -> InstanceRef:
        """
        Find the instance at the target address.

        Raises:
            InstanceNotFoundError: If no instance matched
            RemoteCallError: If a listing call failed
        """
        self._log_info(
            f"Searching project {self.inventory.project} for {self.config.target_address}"
        )
        return self.locator.locate()

    def remediate(self, ref: InstanceRef) -> RemediationOutcome:
        """Fetch state, decide and act on `ref`."""
        if self.logger:
            print_header(self.logger, f"GCE Remediate - {ref.name} ({ref.zone})")
        outcome = self.executor.execute(ref)
        self._log_info(str(outcome))
        return outcome

    def run(self, payload: Mapping, headers: Mapping = None) -> RemediationOutcome:
        """
        Run the full workflow for one report.

        Args:
            payload: Parsed JSON body
            headers: Request headers

        Returns:
            RemediationOutcome (success or failure of the action step)

        Raises:
            RequestRejectedError: Report failed validation (403)
            InstanceNotFoundError: No instance at the address (404)
            RemoteCallError: Listing failed while locating (500)
        """
        self.validate(payload, headers)
        ref = self.locate()
        return self.remediate(ref)
