"""
GCE Remediate - Reset VM Operation

Hard-resets a RUNNING instance. The instance keeps its name, disks and
addresses; the guest OS reboots without a clean shutdown.
"""

from gce_remediate.operations.base import BaseOperation


class ResetVMOperation(BaseOperation):
    """
    Resets a running VM instance.
    """

    @property
    def name(self) -> str:
        """Display name for this operation."""
        return "Reset VM"

    def _submit(self, vm_name: str):
        self._log_info(f"Resetting {vm_name} in {self.zone}...")
        return self.inventory.reset_instance(self.zone, vm_name)
