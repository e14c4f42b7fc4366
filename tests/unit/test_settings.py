"""Tests for settings validation and error types."""

import pytest
from pydantic import ValidationError

from support_dispatch.config.settings import Settings
from support_dispatch.errors import (
    DispatchError,
    DuplicateRequestIDError,
    ErrorCode,
    OverloadError,
    RequestTimeoutError,
)


def test_defaults():
    settings = Settings(_env_file=None)
    assert settings.dispatcher_workers == 5
    assert settings.intake_queue_capacity == 100
    assert settings.escalation_queue_capacity == 50
    assert settings.request_timeout == 3.0
    assert settings.escalation_handling_delay == 0.5


def test_log_level_is_upper_cased():
    assert Settings(_env_file=None, log_level="debug").log_level == "DEBUG"


def test_invalid_log_level_rejected():
    with pytest.raises(ValidationError):
        Settings(_env_file=None, log_level="verbose")


@pytest.mark.parametrize(
    "field_name",
    ["dispatcher_workers", "intake_queue_capacity", "escalation_queue_capacity"],
)
def test_sizes_must_be_positive(field_name):
    with pytest.raises(ValidationError):
        Settings(_env_file=None, **{field_name: 0})


@pytest.mark.parametrize("field_name", ["request_timeout", "shutdown_timeout", "worker_poll_interval"])
def test_timeouts_must_be_positive(field_name):
    with pytest.raises(ValidationError):
        Settings(_env_file=None, **{field_name: 0})


def test_negative_escalation_delay_rejected():
    with pytest.raises(ValidationError):
        Settings(_env_file=None, escalation_handling_delay=-1)


def test_env_overrides(monkeypatch):
    monkeypatch.setenv("DISPATCHER_WORKERS", "8")
    monkeypatch.setenv("REQUEST_TIMEOUT", "1.5")
    settings = Settings(_env_file=None)
    assert settings.dispatcher_workers == 8
    assert settings.request_timeout == 1.5


class TestErrors:
    def test_timeout_error_is_builtin_timeout(self):
        error = RequestTimeoutError(query_id="q1")
        assert isinstance(error, TimeoutError)
        assert isinstance(error, DispatchError)
        assert error.code == ErrorCode.TIMEOUT

    def test_overload_error_is_recoverable(self):
        error = OverloadError(query_id="q1")
        assert error.recoverable
        assert error.to_dict() == {
            "code": "OVERLOADED",
            "message": error.message,
            "query_id": "q1",
            "recoverable": True,
        }

    def test_duplicate_id_is_not_recoverable(self):
        error = DuplicateRequestIDError(query_id="q1")
        assert not error.recoverable
        assert "q1" in str(error)

    def test_custom_message(self):
        assert OverloadError("busy").message == "busy"
