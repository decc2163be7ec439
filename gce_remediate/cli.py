"""
GCE Remediate - Command Line Interface

Runs the same workflow as the webhook, from a terminal. Useful to test a
deployment's configuration or to heal the machine by hand.

Usage:
    gce-remediate locate --target-ip=203.0.113.10 --project=my-project
    gce-remediate report --state="Not Responding" --target-ip=203.0.113.10

The shared secret for `report` comes from --secret or the SECRET
environment variable.
"""

import argparse
import json
import os
import sys
from dataclasses import replace
from typing import Any, Dict

import yaml

from gce_remediate.core.config import RemediationConfig, VERSION
from gce_remediate.core.exceptions import GCERemediateError
from gce_remediate.core.models import InstanceState
from gce_remediate.main import build_runtime, handle_report as handle_webhook_report
from gce_remediate.orchestration import RemediationExecutor, RemediationOrchestrator, choose_action

EXIT_CODES = {
    200: 0,
    403: 3,
    404: 4,
}


class OutputFormatter:
    """
    Handle output formatting similar to gcloud.

    Supports: json, yaml, table, value(field)
    """

    @staticmethod
    def format_output(data: Dict[str, Any], format_type: str = 'table'):
        """Format output based on format type."""
        if format_type == 'json':
            return json.dumps(data, indent=2)
        elif format_type == 'yaml':
            return yaml.safe_dump(data, default_flow_style=False)
        elif format_type == 'table':
            return OutputFormatter._format_table(data)
        elif format_type.startswith('value(') and format_type.endswith(')'):
            field = format_type[6:-1]
            return str(data.get(field, ''))
        else:
            return str(data)

    @staticmethod
    def _format_table(data: Dict[str, Any]) -> str:
        """Format as a two-column table."""
        lines = []
        lines.append("+-" + "-" * 50 + "-+")
        for key, value in data.items():
            lines.append(f"| {key:20} | {str(value):27} |")
        lines.append("+-" + "-" * 50 + "-+")
        return "\n".join(lines)


def create_parser() -> argparse.ArgumentParser:
    """
    Create argument parser.

    Returns:
        Configured ArgumentParser
    """
    parser = argparse.ArgumentParser(
        prog='gce-remediate',
        description='Heal the Compute Engine instance behind an external address',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
EXAMPLES
    To see which instance would be healed and how:
        $ gce-remediate locate --target-ip=203.0.113.10

    To heal it as if the probe reported it down:
        $ SECRET=... gce-remediate report --state="Not Responding" \\
            --target-ip=203.0.113.10
"""
    )
    parser.add_argument('--version', action='version', version=f'%(prog)s {VERSION}')

    subparsers = parser.add_subparsers(dest='command', metavar='COMMAND')
    subparsers.required = True

    locate_parser = subparsers.add_parser(
        'locate',
        help='Find the instance and show the planned action (read-only)'
    )
    _add_common_args(locate_parser)

    report_parser = subparsers.add_parser(
        'report',
        help='Submit a health report and remediate'
    )
    _add_common_args(report_parser)
    report_parser.add_argument(
        '--state',
        required=True,
        help='Response state to report (e.g. "Not Responding")'
    )
    report_parser.add_argument(
        '--secret',
        help='Shared secret (default: $SECRET)'
    )
    report_parser.add_argument(
        '--dry-run',
        action='store_true',
        help='Decide the action but do not reset or start'
    )
    report_parser.add_argument(
        '--wait',
        action='store_true',
        help='Wait for the Compute Engine operation to finish'
    )
    report_parser.add_argument(
        '--timeout',
        type=int,
        help='Seconds to wait with --wait (default: 300)'
    )

    return parser


def _add_common_args(parser: argparse.ArgumentParser):
    """Add flags shared by every command."""
    parser.add_argument(
        '--target-ip',
        help='External address of the instance (default: $TARGET_IP)'
    )
    parser.add_argument(
        '--project',
        help='GCP project ID (default: $PROJECT_ID or credentials project)'
    )
    parser.add_argument(
        '--format',
        default='table',
        help='Output format: json, yaml, table, value(FIELD)'
    )
    parser.add_argument(
        '--verbosity',
        default='warning',
        choices=['debug', 'info', 'warning', 'error', 'critical'],
        help='Log level'
    )


def args_to_config(args: argparse.Namespace, environ=None) -> RemediationConfig:
    """
    Build configuration from the environment, overridden by flags.

    `locate` never checks a secret, so a placeholder is used when none is set.
    """
    env = dict(os.environ if environ is None else environ)

    if args.target_ip:
        env['TARGET_IP'] = args.target_ip
    if args.project:
        env['PROJECT_ID'] = args.project
    if getattr(args, 'secret', None):
        env['SECRET'] = args.secret
    if args.command == 'locate' and not (env.get('SECRET') or env.get('secret')):
        env['SECRET'] = 'unused'

    config = RemediationConfig.from_env(env)

    overrides = {
        'log_level': args.verbosity.upper(),
        'debug': args.verbosity == 'debug',
    }
    if getattr(args, 'dry_run', False):
        overrides['dry_run'] = True
    if getattr(args, 'wait', False):
        overrides['wait_for_completion'] = True
    if getattr(args, 'timeout', None):
        overrides['operation_timeout'] = args.timeout

    return replace(config, **overrides)


def handle_locate(args: argparse.Namespace) -> int:
    """Locate the instance and print its state and the planned action."""
    runtime = build_runtime(args_to_config(args))
    orchestrator = RemediationOrchestrator(runtime.inventory, runtime.config, runtime.logger)

    ref = orchestrator.locate()
    status = RemediationExecutor(runtime.inventory, runtime.config).fetch_status(ref)
    action = choose_action(InstanceState.parse(status))

    print(OutputFormatter.format_output({
        'instance': ref.name,
        'zone': ref.zone,
        'status': status,
        'action': action.value,
    }, args.format))
    return 0


def handle_report(args: argparse.Namespace) -> int:
    """Run one report through the webhook handler."""
    config = args_to_config(args)
    runtime = build_runtime(config)

    body, status = handle_webhook_report(
        {'secret': config.secret, 'responseState': args.state},
        {},
        runtime
    )
    body = dict(body, http_status=status)

    print(OutputFormatter.format_output(body, args.format))
    return EXIT_CODES.get(status, 1)


def main(argv=None) -> int:
    """Main entry point."""
    parser = create_parser()
    args = parser.parse_args(argv)

    try:
        if args.command == 'locate':
            return handle_locate(args)
        return handle_report(args)
    except GCERemediateError as e:
        print(f"ERROR: {str(e)}", file=sys.stderr)
        return EXIT_CODES.get(e.http_status, 1)
    except KeyboardInterrupt:
        print("\nInterrupted", file=sys.stderr)
        return 130


if __name__ == '__main__':
    sys.exit(main())
