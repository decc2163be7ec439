"""
GCE Remediate - Inventory Module

Read and control access to Compute Engine, and address-based lookup.
"""

from gce_remediate.inventory.client import InventoryClient
from gce_remediate.inventory.locator import InstanceLocator, external_address

__all__ = [
    'InventoryClient',
    'InstanceLocator',
    'external_address',
]
