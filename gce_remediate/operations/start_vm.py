"""
GCE Remediate - Start VM Operation

Starts a STOPPED or TERMINATED instance.
"""

from gce_remediate.operations.base import BaseOperation


class StartVMOperation(BaseOperation):
    """
    Starts a stopped VM instance.
    """

    @property
    def name(self) -> str:
        """Display name for this operation."""
        return "Start VM"

    def _submit(self, vm_name: str):
        self._log_info(f"Starting {vm_name} in {self.zone}...")
        return self.inventory.start_instance(self.zone, vm_name)
