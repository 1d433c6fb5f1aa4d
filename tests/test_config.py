"""Tests for settings validation."""

import pytest
from pydantic import ValidationError

from app.config import EXPO_PUSH_SEND_URL, Settings


def _settings(**overrides):
    values = {"database_url": "sqlite://", "secret_key": "k", **overrides}
    return Settings(_env_file=None, **values)


def test_defaults():
    settings = _settings()

    assert settings.expo_push_url == EXPO_PUSH_SEND_URL
    assert settings.push_batch_size == 100
    assert settings.booking_status_policy == "strict"


@pytest.mark.parametrize("batch_size", [0, 101])
def test_batch_size_is_bounded_by_the_relay_limit(batch_size):
    with pytest.raises(ValidationError):
        _settings(push_batch_size=batch_size)


def test_relay_url_must_be_http():
    with pytest.raises(ValidationError):
        _settings(expo_push_url="ftp://exp.host/push")


def test_blank_secrets_are_treated_as_unset():
    settings = _settings(expo_access_token="  ", trigger_secret="")

    assert settings.expo_access_token is None
    assert settings.trigger_secret is None


def test_unknown_policy_is_rejected():
    with pytest.raises(ValidationError):
        _settings(booking_status_policy="lenient")
