"""
GCE Remediate - Custom Exception Classes

This module defines all custom exceptions used in GCE Remediate.
Each exception carries the HTTP status the webhook answers with, so the
HTTP layer never has to guess how to report a failure.
"""


class GCERemediateError(Exception):
    """
    Base exception for all GCE Remediate errors.

    All custom exceptions inherit from this, making it easy to catch
    any GCE Remediate-specific error with a single except clause.
    """
    http_status = 500


class ConfigurationError(GCERemediateError):
    """
    Raised when process configuration is missing or invalid.

    Common causes:
    - SECRET or TARGET_IP environment variable not set
    - Non-numeric OPERATION_TIMEOUT
    """

    def __init__(self, message: str, fix: str = None):
        """
        Args:
            message: Error description
            fix: Suggested fix (e.g., "set TARGET_IP")
        """
        self.fix = fix
        full_message = f"{message}"
        if fix:
            full_message += f"\n\nFix: {fix}"
        super().__init__(full_message)


class AuthenticationError(GCERemediateError):
    """
    Raised when Google Cloud authentication fails.

    Common causes:
    - No credentials configured
    - Credentials expired
    - Invalid credentials
    """

    def __init__(self, message: str, fix: str = None):
        """
        Args:
            message: Error description
            fix: Suggested fix command (e.g., "gcloud auth login")
        """
        self.fix = fix
        full_message = f"{message}"
        if fix:
            full_message += f"\n\nFix: {fix}"
        super().__init__(full_message)


class AuthorizationError(GCERemediateError):
    """
    Raised when neither the header nor the payload secret matches.
    """
    http_status = 403

    def __init__(self, message: str = "Shared secret did not match"):
        super().__init__(message)


class SignalValidationError(GCERemediateError):
    """
    Raised when the reported health state is not one we remediate.
    """
    http_status = 403

    def __init__(self, response_state):
        self.response_state = response_state
        super().__init__(f"Unrecognized response state: {response_state!r}")


class RequestRejectedError(GCERemediateError):
    """
    Raised when a report fails authorization or signal validation.

    The message is the same whichever check failed. The individual
    failures are kept on `causes` for logging.
    """
    http_status = 403

    def __init__(self, causes: list = None):
        """
        Args:
            causes: The AuthorizationError / SignalValidationError instances
        """
        self.causes = causes or []
        super().__init__(
            "Forbidden or Not Reporting Error/Not Responding/Request Timeout"
        )


class InstanceNotFoundError(GCERemediateError):
    """
    Raised when no instance in the project has the target external address.

    This is a normal, reportable outcome after every zone was searched.
    """
    http_status = 404

    def __init__(self, address: str, project: str, zones_searched: int = 0):
        """
        Args:
            address: External address we looked for
            project: Project where we looked
            zones_searched: How many zones were enumerated
        """
        self.address = address
        self.project = project
        self.zones_searched = zones_searched

        message = (
            f"No matching instance found for address {address} "
            f"(project: {project}, zones searched: {zones_searched})"
        )
        super().__init__(message)


class UnsupportedStateError(GCERemediateError):
    """
    Raised when the instance is in a state we do not act on.

    Examples:
    - PROVISIONING or STAGING (being created)
    - STOPPING or SUSPENDING (transition in flight)
    - SUSPENDED
    """

    def __init__(self, instance_name: str, current_state: str):
        """
        Args:
            instance_name: Name of the instance
            current_state: State reported by Compute Engine
        """
        self.instance_name = instance_name
        self.current_state = current_state

        message = f"Instance '{instance_name}' is in unsupported state: {current_state}"
        message += "\nRequired state: RUNNING, STOPPED or TERMINATED"
        super().__init__(message)


class RemoteCallError(GCERemediateError):
    """
    Raised when a Compute Engine API call fails or returns something unusable.
    """

    def __init__(self, operation_name: str, reason: str, instance_name: str = None):
        """
        Args:
            operation_name: API method that failed (e.g., 'instances.reset')
            reason: Why it failed
            instance_name: Instance involved, if already resolved
        """
        self.operation_name = operation_name
        self.reason = reason
        self.instance_name = instance_name

        message = f"Remote call '{operation_name}' failed: {reason}"
        if instance_name:
            message += f" (instance: {instance_name})"
        super().__init__(message)
