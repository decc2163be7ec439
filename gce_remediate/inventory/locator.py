"""
GCE Remediate - Instance Locator

Finds the instance whose primary external address equals the target
address. Zones and instances are scanned lazily as (zone, instance) pairs;
the scan stops at the first match, so no further zone or page is fetched
once the instance is found.
"""

from typing import Any, Dict, Iterator, Optional, Tuple

from gce_remediate.core.exceptions import InstanceNotFoundError, RemoteCallError
from gce_remediate.core.models import InstanceRef
from gce_remediate.inventory.client import InventoryClient


def external_address(instance: Dict[str, Any]) -> Optional[str]:
    """
    Primary external address of an instance resource.

    Reads networkInterfaces[0].accessConfigs[0].natIP. Any missing or malformed
    link in that chain gives None.

    Example:
        external_address({'networkInterfaces': [{'accessConfigs': [{'natIP': '203.0.113.10'}]}]})
        # '203.0.113.10'
    """
    if not isinstance(instance, dict):
        return None

    interfaces = instance.get('networkInterfaces')
    if not isinstance(interfaces, list) or not interfaces or not isinstance(interfaces[0], dict):
        return None

    access_configs = interfaces[0].get('accessConfigs')
    if not isinstance(access_configs, list) or not access_configs or not isinstance(access_configs[0], dict):
        return None

    return access_configs[0].get('natIP') or None


class InstanceLocator:
    """
    Locates the target instance by external address.

    Example:
        locator = InstanceLocator(inventory, '203.0.113.10', logger)
        ref = locator.locate()  # raises InstanceNotFoundError
    """

    def __init__(self, inventory: InventoryClient, target_address: str, logger=None):
        """
        Args:
            inventory: Inventory client bound to the project
            target_address: External address to look for
            logger: Optional logger
        """
        self.inventory = inventory
        self.target_address = target_address
        self.logger = logger
        self.zones_searched = 0

    def _log_debug(self, message: str):
        if self.logger:
            self.logger.debug(message)

    def _log_info(self, message: str):
        if self.logger:
            self.logger.info(message)

    def iter_candidates(self) -> Iterator[Tuple[str, Dict[str, Any]]]:
        """Yield (zone, instance) pairs across every zone, in zone order."""
        self.zones_searched = 0
        for zone in self.inventory.iter_zones():
            self.zones_searched += 1
            self._log_debug(f"Searching zone {zone}")
            for instance in self.inventory.iter_instances(zone):
                yield zone, instance

    def find(self) -> Optional[InstanceRef]:
        """
        Return the first instance matching the target address, or None.

        Raises:
            RemoteCallError: If a listing call fails or the match has no name
        """
        candidates = self.iter_candidates()
        try:
            for zone, instance in candidates:
                if external_address(instance) == self.target_address:
                    name = instance.get('name')
                    if not isinstance(name, str) or not name:
                        raise RemoteCallError(
                            'instances.list',
                            f"instance at {self.target_address} in zone {zone} has no name"
                        )
                    return InstanceRef(name=name, zone=zone)
        finally:
            candidates.close()
        return None

    def locate(self) -> InstanceRef:
        """
        Return the instance matching the target address.

        Raises:
            InstanceNotFoundError: If no instance matched after every zone
            RemoteCallError: If a listing call fails
        """
        ref = self.find()

        if ref is None:
            self._log_info(
                f"No instance with address {self.target_address} "
                f"({self.zones_searched} zones searched)"
            )
            raise InstanceNotFoundError(
                self.target_address,
                self.inventory.project,
                self.zones_searched
            )

        self._log_info(f"Located instance {ref.name} in zone {ref.zone}")
        return ref
