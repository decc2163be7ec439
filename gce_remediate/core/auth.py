"""
GCE Remediate - Authentication Manager

This module handles Google Cloud authentication and Compute Engine client
creation. Credentials are scoped for cloud-platform management.
"""

import google.auth
from google.auth.exceptions import DefaultCredentialsError, RefreshError
from google.auth.transport.requests import Request
from googleapiclient import discovery
import googleapiclient.http
import google_auth_httplib2
import httplib2

from gce_remediate.core.exceptions import AuthenticationError
from gce_remediate.core.config import VERSION

CLOUD_PLATFORM_SCOPE = 'https://www.googleapis.com/auth/cloud-platform'


class AuthManager:
    """
    Manages Google Cloud authentication and API client creation.

    This class:
    1. Gets credentials using Application Default Credentials (ADC)
    2. Validates and refreshes credentials if needed
    3. Creates an authenticated Compute Engine API client
    4. Provides clear error messages when authentication fails

    Usage:
        auth = AuthManager()
        compute, project = auth.get_client()
    """

    def __init__(self, scopes=None):
        """
        Initialize the authentication manager.

        Args:
            scopes: OAuth scopes to request (default: cloud-platform)
        """
        self.scopes = list(scopes or [CLOUD_PLATFORM_SCOPE])
        self._credentials = None
        self._project = None
        self._compute = None

    def get_credentials(self):
        """
        Get and validate Google Cloud credentials.

        On Cloud Functions this resolves to the function's service account
        through the metadata server. Locally it honours
        GOOGLE_APPLICATION_CREDENTIALS and gcloud application-default login.

        Returns:
            tuple: (credentials, project_id)

        Raises:
            AuthenticationError: If credentials not found or invalid
        """

        try:
            credentials, project = google.auth.default(scopes=self.scopes)
        except DefaultCredentialsError:
            raise AuthenticationError(
                "No credentials found. You need to authenticate first.",
                fix="gcloud auth application-default login"
            )

        # Metadata-server credentials start without a token; only refresh
        # user credentials that have actually expired.
        if credentials.expired and getattr(credentials, 'refresh_token', None):
            try:
                credentials.refresh(Request())
            except RefreshError:
                raise AuthenticationError(
                    "Credentials expired and refresh failed",
                    fix="gcloud auth application-default login"
                )

        return credentials, project

    def get_client(self, project=None):
        """
        Get authenticated Google Compute Engine API client.

        Args:
            project: GCP project ID (optional). If not provided, uses the
                    project from credentials.

        Returns:
            tuple: (compute_client, project_id)

        Raises:
            AuthenticationError: If authentication fails or no project
                                 can be determined
        """

        if not self._credentials:
            self._credentials, self._project = self.get_credentials()

        project = project or self._project
        if not project:
            raise AuthenticationError(
                "No project configured and none found in credentials",
                fix="Set the PROJECT_ID environment variable"
            )

        if not self._compute:
            try:
                def _request_builder(http, *args, **kwargs):
                    """Inject User-Agent header for usage tracking."""
                    headers = kwargs.setdefault('headers', {})
                    headers['user-agent'] = f'gce_remediate-{VERSION}'
                    auth_http = google_auth_httplib2.AuthorizedHttp(
                        self._credentials,
                        http=httplib2.Http()
                    )
                    return googleapiclient.http.HttpRequest(auth_http, *args, **kwargs)

                self._compute = discovery.build(
                    'compute',
                    'v1',
                    credentials=self._credentials,
                    cache_discovery=False,
                    requestBuilder=_request_builder
                )
            except Exception as e:
                raise AuthenticationError(
                    f"Failed to create GCP API client: {str(e)}"
                )

        return self._compute, project
