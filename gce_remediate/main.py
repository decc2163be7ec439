"""
GCE Remediate - HTTP Entry Point

Cloud Function that receives health-probe reports and heals the instance
behind the configured external address.

Deploy:
    gcloud functions deploy restartVM --gen2 --runtime=python312 \\
        --entry-point=restart_vm --trigger-http \\
        --set-env-vars=PROJECT_ID=my-project,TARGET_IP=203.0.113.10 \\
        --set-secrets=SECRET=probe-secret:latest

Run locally:
    functions-framework --source=gce_remediate/main.py --target=restart_vm

Responses:
    200  action submitted (body names the instance and the action)
    403  bad secret or a response state we do not remediate
    404  no instance has the target address
    500  Compute Engine call failed or instance in an unsupported state
"""

from dataclasses import dataclass
from typing import Any, Dict, Mapping, Tuple

import functions_framework
from flask import Flask, request as current_request

from gce_remediate.core.auth import AuthManager
from gce_remediate.core.config import RemediationConfig
from gce_remediate.core.exceptions import GCERemediateError
from gce_remediate.inventory import InventoryClient
from gce_remediate.orchestration import RemediationOrchestrator
from gce_remediate.utils.logger import redact_payload, setup_logging


@dataclass(frozen=True)
class Runtime:
    """Process-wide state built once at cold start."""
    config: RemediationConfig
    inventory: InventoryClient
    logger: Any = None


_runtime = None


def build_runtime(config: RemediationConfig = None, auth: AuthManager = None) -> Runtime:
    """
    Load configuration, set up logging and build the Compute Engine client.

    Args:
        config: Configuration (default: RemediationConfig.from_env())
        auth: AuthManager to use (default: a new one)

    Returns:
        Runtime

    Raises:
        ConfigurationError: If required settings are missing
        AuthenticationError: If credentials or project cannot be resolved
    """
    if config is None:
        config = RemediationConfig.from_env()

    logger = setup_logging(
        level=config.log_level,
        log_file=config.log_file,
        debug=config.debug
    )

    auth = auth or AuthManager()
    compute, project = auth.get_client(config.project)
    if project != config.project:
        config = config.with_project(project)
        logger.debug(f"Using project from credentials: {project}")

    logger.debug(f"Loaded {config!r}")

    return Runtime(
        config=config,
        inventory=InventoryClient(compute, project, logger),
        logger=logger
    )


def _get_runtime() -> Runtime:
    global _runtime
    if _runtime is None:
        _runtime = build_runtime()
    return _runtime


def handle_report(payload: Mapping, headers: Mapping, runtime: Runtime) -> Tuple[Dict[str, Any], int]:
    """
    Handle one report and map the result to a response.

    Args:
        payload: Parsed JSON body (None if the body was not JSON)
        headers: Request headers
        runtime: Configuration, inventory client and logger

    Returns:
        tuple: (response body, HTTP status)
    """
    logger = runtime.logger
    if logger:
        logger.info(f"Request body: {redact_payload(payload)}")

    orchestrator = RemediationOrchestrator(
        inventory=runtime.inventory,
        config=runtime.config,
        logger=logger
    )

    try:
        outcome = orchestrator.run(payload or {}, headers)
    except GCERemediateError as e:
        if logger and e.http_status >= 500:
            logger.error(f"Remediation failed: {str(e)}")
        return {'error': str(e)}, e.http_status

    body = outcome.to_dict()
    if outcome.success:
        return body, 200

    body['error'] = str(outcome.error) if outcome.error else outcome.detail
    status = getattr(outcome.error, 'http_status', 500)
    return body, status


@functions_framework.http
def restart_vm(request):
    """
    HTTP Cloud Function.

    Args:
        request: flask.Request carrying {"secret", "responseState"} and
                 optionally the secret header

    Returns:
        tuple: (JSON body, HTTP status)
    """
    if request.method != 'POST':
        return {'error': 'Method not allowed'}, 405

    payload = request.get_json(silent=True)
    return handle_report(payload, request.headers, _get_runtime())


def create_app(runtime: Runtime = None) -> Flask:
    """
    Create a Flask app serving the webhook at POST /.

    Args:
        runtime: Prebuilt runtime (default: built lazily from the environment)

    Returns:
        Flask app
    """
    app = Flask(__name__)

    @app.route('/', methods=['POST'])
    def webhook():
        payload = current_request.get_json(silent=True)
        return handle_report(
            payload,
            current_request.headers,
            runtime or _get_runtime()
        )

    @app.route('/health', methods=['GET'])
    def health():
        return {'status': 'ok'}

    return app
