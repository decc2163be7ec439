"""
GCE Remediate - Inventory Client

Thin wrapper around the Compute Engine discovery client. It is the only
module that talks to the API, and it turns every failure (HTTP error,
transport error, malformed response) into RemoteCallError.

Listing calls are generators that follow `nextPageToken`, so a caller that
stops iterating also stops fetching pages.
"""

from typing import Dict, Iterator, Any

import httplib2
from google.auth.exceptions import GoogleAuthError
from googleapiclient.errors import Error as GoogleApiClientError

from gce_remediate.core.exceptions import RemoteCallError
from gce_remediate.utils.logger import (
    log_api_call,
    log_api_response,
    log_operation_start,
    log_operation_end,
)


class InventoryClient:
    """
    Compute Engine inventory and control-plane operations for one project.

    Example:
        compute, project = AuthManager().get_client()
        inventory = InventoryClient(compute, project, logger)

        for zone in inventory.iter_zones():
            for instance in inventory.iter_instances(zone):
                print(instance['name'])
    """

    def __init__(self, compute, project: str, logger=None):
        """
        Args:
            compute: GCP compute client (from google-api-python-client)
            project: GCP project ID
            logger: Optional logger for debug output
        """
        self.compute = compute
        self.project = project
        self.logger = logger

    def _execute(self, method_name: str, request, instance_name: str = None, **params) -> Dict[str, Any]:
        """Execute one API request and validate it returned a dict."""
        if self.logger:
            log_api_call(self.logger, method_name, **params)
            start_time = log_operation_start(self.logger, method_name)

        try:
            response = request.execute()
        except (GoogleApiClientError, GoogleAuthError, httplib2.HttpLib2Error, OSError) as e:
            if self.logger:
                self.logger.error(f"{method_name} failed: {str(e)}")
            raise RemoteCallError(method_name, str(e), instance_name) from e

        if self.logger:
            log_api_response(self.logger, response)
            log_operation_end(self.logger, method_name, start_time)

        if not isinstance(response, dict):
            raise RemoteCallError(method_name, "empty or malformed response", instance_name)

        return response

    def iter_zones(self) -> Iterator[str]:
        """
        Yield zone names in provider order.

        Raises:
            RemoteCallError: If the call fails, the project lists no zones
                or a zone entry has no name
        """
        request = self.compute.zones().list(project=self.project)
        first_page = True

        while request is not None:
            response = self._execute('zones.list', request, project=self.project)

            if first_page and response.get('items') is None:
                raise RemoteCallError('zones.list', "response contained no zones")
            first_page = False

            for zone in response.get('items') or []:
                if not isinstance(zone, dict) or not zone.get('name'):
                    raise RemoteCallError('zones.list', "zone entry without a name")
                yield zone['name']

            request = self.compute.zones().list_next(
                previous_request=request,
                previous_response=response
            )

    def iter_instances(self, zone: str) -> Iterator[Dict[str, Any]]:
        """
        Yield instance resources in a zone.

        A zone without instances yields nothing.

        Raises:
            RemoteCallError: If the call fails
        """
        request = self.compute.instances().list(project=self.project, zone=zone)

        while request is not None:
            response = self._execute('instances.list', request, project=self.project, zone=zone)

            for instance in response.get('items') or []:
                yield instance

            request = self.compute.instances().list_next(
                previous_request=request,
                previous_response=response
            )

    def get_instance(self, zone: str, name: str) -> Dict[str, Any]:
        """Fetch one instance resource (fresh, never cached)."""
        request = self.compute.instances().get(
            project=self.project,
            zone=zone,
            instance=name
        )
        return self._execute(
            'instances.get', request, name,
            project=self.project, zone=zone, instance=name
        )

    def reset_instance(self, zone: str, name: str) -> Dict[str, Any]:
        """Submit a reset; returns the zone Operation resource."""
        request = self.compute.instances().reset(
            project=self.project,
            zone=zone,
            instance=name
        )
        return self._execute(
            'instances.reset', request, name,
            project=self.project, zone=zone, instance=name
        )

    def start_instance(self, zone: str, name: str) -> Dict[str, Any]:
        """Submit a start; returns the zone Operation resource."""
        request = self.compute.instances().start(
            project=self.project,
            zone=zone,
            instance=name
        )
        return self._execute(
            'instances.start', request, name,
            project=self.project, zone=zone, instance=name
        )

    def get_zone_operation(self, zone: str, operation_name: str, instance_name: str = None) -> Dict[str, Any]:
        """Fetch a zone Operation resource (used to wait for completion)."""
        request = self.compute.zoneOperations().get(
            project=self.project,
            zone=zone,
            operation=operation_name
        )
        return self._execute(
            'zoneOperations.get', request, instance_name,
            project=self.project, zone=zone, operation=operation_name
        )
