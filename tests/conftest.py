"""Pytest configuration and shared fixtures."""

import logging
from typing import Any, Dict, List, Optional

import pytest

from gce_remediate.core.config import RemediationConfig
from gce_remediate.main import Runtime, create_app

TARGET_IP = "203.0.113.10"
SECRET = "S3CR3T-value"
PROJECT = "test-project"


def make_instance(name: str, nat_ip: Optional[str] = None, **overrides) -> Dict[str, Any]:
    """Build a Compute Engine instance resource with one external address."""
    instance = {"name": name}
    if nat_ip is not None:
        instance["networkInterfaces"] = [
            {"network": "global/networks/default", "accessConfigs": [{"name": "External NAT", "natIP": nat_ip}]}
        ]
    instance.update(overrides)
    return instance


class FakeInventory:
    """In-memory InventoryClient that records every call.

    zones: zone name -> list of instance resources (provider order kept)
    statuses: instance name -> status returned by get_instance
    failures: method name -> exception to raise
    """

    MUTATING = ("reset_instance", "start_instance")

    def __init__(self, zones=None, statuses=None, failures=None, project=PROJECT):
        self.project = project
        self.zones: Dict[str, List[Dict[str, Any]]] = zones if zones is not None else {}
        self.statuses: Dict[str, Any] = statuses or {}
        self.failures: Dict[str, Exception] = failures or {}
        self.operation_responses: Dict[str, Dict[str, Any]] = {}
        self.operation_polls: List[Dict[str, Any]] = []
        self.calls: List[tuple] = []

    def _record(self, method, *args):
        self.calls.append((method,) + args)
        if method in self.failures:
            raise self.failures[method]

    def calls_to(self, method):
        return [call for call in self.calls if call[0] == method]

    @property
    def mutating_calls(self):
        return [call for call in self.calls if call[0] in self.MUTATING]

    def iter_zones(self):
        self._record("iter_zones")
        for zone in self.zones:
            yield zone

    def iter_instances(self, zone):
        self._record("iter_instances", zone)
        for instance in self.zones[zone]:
            yield instance

    def get_instance(self, zone, name):
        self._record("get_instance", zone, name)
        status = self.statuses.get(name)
        return {} if status is None else {"name": name, "status": status}

    def reset_instance(self, zone, name):
        self._record("reset_instance", zone, name)
        return self.operation_responses.get("reset", {"name": "operation-reset", "status": "RUNNING"})

    def start_instance(self, zone, name):
        self._record("start_instance", zone, name)
        return self.operation_responses.get("start", {"name": "operation-start", "status": "RUNNING"})

    def get_zone_operation(self, zone, operation_name, instance_name=None):
        self._record("get_zone_operation", zone, operation_name)
        return self.operation_polls.pop(0)


@pytest.fixture
def config() -> RemediationConfig:
    """Configuration used by most tests."""
    return RemediationConfig(secret=SECRET, target_address=TARGET_IP, project=PROJECT)


@pytest.fixture
def logger() -> logging.Logger:
    """Package logger; propagates to caplog."""
    return logging.getLogger("gce_remediate")


@pytest.fixture
def single_running_inventory() -> FakeInventory:
    """Three zones, the target in the second one, RUNNING."""
    return FakeInventory(
        zones={
            "us-central1-a": [make_instance("db-1", "198.51.100.1"), make_instance("no-ip")],
            "us-central1-b": [make_instance("web-1", TARGET_IP)],
            "us-east1-b": [make_instance("web-2", "198.51.100.2")],
        },
        statuses={"web-1": "RUNNING"},
    )


@pytest.fixture
def runtime(config, single_running_inventory, logger) -> Runtime:
    return Runtime(config=config, inventory=single_running_inventory, logger=logger)


@pytest.fixture
def client(runtime):
    """Flask test client bound to the fake runtime."""
    app = create_app(runtime)
    app.config["TESTING"] = True
    return app.test_client()


@pytest.fixture
def restore_logger():
    """Undo setup_logging() changes to the package logger."""
    package_logger = logging.getLogger("gce_remediate")
    handlers, level = list(package_logger.handlers), package_logger.level
    yield
    for handler in package_logger.handlers:
        if handler not in handlers:
            handler.close()
    package_logger.handlers[:] = handlers
    package_logger.setLevel(level)
