"""Unit tests for the command line interface."""

import json
from unittest.mock import patch

import pytest
import yaml

from gce_remediate.cli import OutputFormatter, args_to_config, create_parser, main
from gce_remediate.main import Runtime
from tests.conftest import SECRET, TARGET_IP, FakeInventory, make_instance

ENV = {"SECRET": SECRET, "TARGET_IP": TARGET_IP, "PROJECT_ID": "env-project"}


class TestOutputFormatter:
    """Tests for OutputFormatter."""

    DATA = {"instance": "web-1", "action": "reset"}

    def test_json(self):
        assert json.loads(OutputFormatter.format_output(self.DATA, "json")) == self.DATA

    def test_yaml(self):
        assert yaml.safe_load(OutputFormatter.format_output(self.DATA, "yaml")) == self.DATA

    def test_value(self):
        assert OutputFormatter.format_output(self.DATA, "value(action)") == "reset"

    def test_table(self):
        output = OutputFormatter.format_output(self.DATA, "table")
        assert "web-1" in output
        assert output.startswith("+-")


class TestArgsToConfig:
    """Tests for flag/environment merging."""

    def test_flags_override_environment(self):
        args = create_parser().parse_args(
            ["report", "--state", "Not Responding", "--target-ip", "198.51.100.9", "--project", "flag-project", "--dry-run"]
        )

        config = args_to_config(args, ENV)

        assert config.target_address == "198.51.100.9"
        assert config.project == "flag-project"
        assert config.dry_run is True

    def test_locate_needs_no_secret(self):
        args = create_parser().parse_args(["locate", "--target-ip", TARGET_IP])

        config = args_to_config(args, {})

        assert config.target_address == TARGET_IP

    def test_wait_and_timeout(self):
        args = create_parser().parse_args(["report", "--state", "Request Timeout", "--wait", "--timeout", "45"])

        config = args_to_config(args, ENV)

        assert config.wait_for_completion is True
        assert config.operation_timeout == 45

    def test_report_requires_state(self):
        with pytest.raises(SystemExit):
            create_parser().parse_args(["report"])


class TestMain:
    """Tests for the command handlers with a fake runtime."""

    @pytest.fixture
    def fake_runtime(self):
        inventory = FakeInventory(
            zones={"us-central1-a": [make_instance("web-1", TARGET_IP)]}, statuses={"web-1": "TERMINATED"}
        )

        def build(config):
            return Runtime(config=config, inventory=inventory, logger=None)

        with patch.dict("os.environ", ENV, clear=True), patch("gce_remediate.cli.build_runtime", side_effect=build):
            yield inventory

    def test_locate_is_read_only(self, fake_runtime, capsys):
        exit_code = main(["locate", "--format", "json"])

        output = json.loads(capsys.readouterr().out)
        assert exit_code == 0
        assert output == {"instance": "web-1", "zone": "us-central1-a", "status": "TERMINATED", "action": "start"}
        assert fake_runtime.mutating_calls == []

    def test_report_remediates(self, fake_runtime, capsys):
        exit_code = main(["report", "--state", "Not Responding", "--format", "json"])

        output = json.loads(capsys.readouterr().out)
        assert exit_code == 0
        assert output["action"] == "start"
        assert output["http_status"] == 200
        assert len(fake_runtime.calls_to("start_instance")) == 1

    def test_report_rejected_state(self, fake_runtime, capsys):
        exit_code = main(["report", "--state", "Up", "--format", "value(http_status)"])

        assert exit_code == 3
        assert capsys.readouterr().out.strip() == "403"
        assert fake_runtime.calls == []

    def test_locate_not_found(self, fake_runtime, capsys):
        exit_code = main(["locate", "--target-ip", "198.51.100.99"])

        assert exit_code == 4
        assert "No matching instance found" in capsys.readouterr().err
