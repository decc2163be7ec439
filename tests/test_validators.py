"""Unit tests for the report validators."""

import pytest

from gce_remediate.core.exceptions import (
    AuthorizationError,
    RequestRejectedError,
    SignalValidationError,
)
from gce_remediate.core.models import SignalKind
from gce_remediate.validators import (
    HealthSignalValidator,
    RequestValidator,
    SecretValidator,
    classify_signal,
    secrets_match,
)
from tests.conftest import SECRET

ACCEPTED_STATES = ["Not Responding", "Request Timeout", "Reporting Error", "Reporting Error: HTTP 502"]
REJECTED_STATES = ["ok", "Up", "not responding", "Request Timeout ", " Reporting Error", "", None, 42, ["Not Responding"]]


class TestClassifySignal:
    """Tests for classify_signal."""

    def test_not_responding(self):
        signal = classify_signal("Not Responding")
        assert signal.kind is SignalKind.NOT_RESPONDING
        assert signal.reason == ""

    def test_request_timeout(self):
        assert classify_signal("Request Timeout").kind is SignalKind.REQUEST_TIMEOUT

    def test_reporting_error_keeps_reason(self):
        signal = classify_signal("Reporting Error: HTTP 502")
        assert signal.kind is SignalKind.REPORTING_ERROR
        assert signal.reason == "HTTP 502"
        assert str(signal) == "Reporting Error: HTTP 502"

    def test_bare_reporting_error(self):
        signal = classify_signal("Reporting Error")
        assert signal.kind is SignalKind.REPORTING_ERROR
        assert signal.reason == ""

    @pytest.mark.parametrize("state", REJECTED_STATES)
    def test_rejected_states(self, state):
        assert classify_signal(state) is None


class TestSecretValidator:
    """Tests for SecretValidator."""

    def test_payload_secret_accepted(self, config):
        result = SecretValidator(config, {"secret": SECRET}).validate()
        assert result.passed

    def test_header_secret_accepted(self, config):
        result = SecretValidator(config, {"secret": "wrong"}, {"x-custom-secret": SECRET}).validate()
        assert result.passed
        assert "header" in result.message

    def test_header_lookup_ignores_case(self, config):
        result = SecretValidator(config, {}, {"X-Custom-Secret": SECRET}).validate()
        assert result.passed

    def test_neither_matches(self, config):
        result = SecretValidator(config, {"secret": "wrong"}, {"x-custom-secret": "also-wrong"}).validate()
        assert not result.passed
        assert isinstance(result.error, AuthorizationError)
        assert SECRET not in result.message
        assert "wrong" not in result.message

    def test_missing_secret(self, config):
        result = SecretValidator(config, {}).validate()
        assert not result.passed

    def test_non_string_secret_never_matches(self):
        assert not secrets_match(SECRET, None)
        assert not secrets_match(SECRET, 12345)
        assert not secrets_match("", "")

    @pytest.mark.parametrize("candidate", ["\ud800", "S3CR3T-\udfff"])
    def test_lone_surrogate_is_a_mismatch(self, config, candidate):
        assert not secrets_match(SECRET, candidate)

        result = SecretValidator(config, {"secret": candidate}).validate()
        assert not result.passed
        assert isinstance(result.error, AuthorizationError)


class TestHealthSignalValidator:
    """Tests for HealthSignalValidator."""

    def test_value_holds_signal(self, config):
        result = HealthSignalValidator(config, {"responseState": "Request Timeout"}).validate()
        assert result.passed
        assert result.value.kind is SignalKind.REQUEST_TIMEOUT

    def test_missing_state(self, config):
        result = HealthSignalValidator(config, {}).validate()
        assert not result.passed
        assert isinstance(result.error, SignalValidationError)


class TestRequestValidator:
    """Tests for the combined request gate."""

    @pytest.mark.parametrize("state", ACCEPTED_STATES)
    def test_accepts_valid_report(self, config, state):
        request = RequestValidator(config).validate({"secret": SECRET, "responseState": state})
        assert request.signal == classify_signal(state)
        assert request.reported_secret == SECRET
        assert request.header_secret is None

    def test_header_secret_kept_on_request(self, config):
        request = RequestValidator(config).validate(
            {"responseState": "Not Responding"}, {"x-custom-secret": SECRET}
        )
        assert request.header_secret == SECRET
        assert SECRET not in repr(request)

    @pytest.mark.parametrize("state", ACCEPTED_STATES + REJECTED_STATES)
    def test_bad_secret_rejected_regardless_of_state(self, config, state):
        with pytest.raises(RequestRejectedError):
            RequestValidator(config).validate({"secret": "nope", "responseState": state})

    @pytest.mark.parametrize("state", REJECTED_STATES)
    def test_bad_state_rejected_regardless_of_secret(self, config, state):
        with pytest.raises(RequestRejectedError):
            RequestValidator(config).validate(
                {"secret": SECRET, "responseState": state}, {"x-custom-secret": SECRET}
            )

    def test_rejection_does_not_reveal_which_check_failed(self, config):
        with pytest.raises(RequestRejectedError) as bad_secret:
            RequestValidator(config).validate({"secret": "nope", "responseState": "Not Responding"})
        with pytest.raises(RequestRejectedError) as bad_state:
            RequestValidator(config).validate({"secret": SECRET, "responseState": "ok"})

        assert str(bad_secret.value) == str(bad_state.value)
        assert bad_secret.value.http_status == bad_state.value.http_status == 403

    def test_both_failures_recorded(self, config):
        with pytest.raises(RequestRejectedError) as exc_info:
            RequestValidator(config).validate({"secret": "nope", "responseState": "ok"})

        kinds = {type(cause) for cause in exc_info.value.causes}
        assert kinds == {AuthorizationError, SignalValidationError}

    @pytest.mark.parametrize("payload", [None, [], "Not Responding"])
    def test_non_object_payload_rejected(self, config, payload):
        with pytest.raises(RequestRejectedError):
            RequestValidator(config).validate(payload)

    def test_rejection_logged_without_secret(self, config, logger, caplog):
        caplog.set_level("DEBUG", logger="gce_remediate")

        with pytest.raises(RequestRejectedError):
            RequestValidator(config, logger).validate({"secret": "nope", "responseState": "ok"})

        assert "Shared Secret" in caplog.text
        assert SECRET not in caplog.text
