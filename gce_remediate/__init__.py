"""GCE Remediate - Heal a Compute Engine instance when a health probe reports it down.

A health probe POSTs a report to the webhook. If the report carries the
shared secret and a failure state, the instance whose external address
matches the configured one is reset (RUNNING) or started
(STOPPED/TERMINATED).

Example usage:
    >>> from gce_remediate.main import build_runtime, handle_report
    >>> runtime = build_runtime()
    >>> handle_report({'secret': 's3cr3t', 'responseState': 'Not Responding'}, {}, runtime)
    ({'instance': 'web-1', 'zone': 'us-central1-a', 'action': 'reset', ...}, 200)
"""

__version__ = "1.0.0"

__all__ = ['__version__']
