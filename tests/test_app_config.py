"""Tests for configuration loading."""

import json

import pytest

from notif_api.lib import app_config
from notif_api.lib.app_config import RelayConfig, get_config_value, get_firebase_config, load_relay_config

ENV_VARS = [
    "FIREBASE_CREDENTIALS",
    "GOOGLE_APPLICATION_CREDENTIALS",
    "GCP_PROJECT",
    "PROJECT_ID",
    "RELAY_USERS_COLLECTION",
    "RELAY_TOKEN_FIELD",
    "RELAY_NOTIFICATION_TITLE",
    "RELAY_ECHO_USER_DATA",
    "RELAY_INCLUDE_STACK",
    "RELAY_DRY_RUN",
]


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setattr(app_config, "APP_CONFIG_PATH", tmp_path / "app_config.json")
    app_config.reload_config()
    yield tmp_path / "app_config.json"
    monkeypatch.setattr(app_config, "_config_cache", None)


def test_defaults_without_env_or_file() -> None:
    assert load_relay_config() == RelayConfig()


def test_environment_overrides(monkeypatch) -> None:
    monkeypatch.setenv("FIREBASE_CREDENTIALS", "/secrets/firebase.json")
    monkeypatch.setenv("GCP_PROJECT", "notif-prod")
    monkeypatch.setenv("RELAY_USERS_COLLECTION", "people")
    monkeypatch.setenv("RELAY_ECHO_USER_DATA", "false")
    monkeypatch.setenv("RELAY_INCLUDE_STACK", "0")
    monkeypatch.setenv("RELAY_DRY_RUN", "yes")

    config = load_relay_config()

    assert config.credentials_path == "/secrets/firebase.json"
    assert config.project_id == "notif-prod"
    assert config.users_collection == "people"
    assert config.echo_user_data is False
    assert config.include_stack is False
    assert config.dry_run is True


def test_app_config_file_section(isolated_config, monkeypatch) -> None:
    isolated_config.write_text(json.dumps({
        "relay": {"token_field": "pushToken", "include_stack": False},
        "firebase": {"apiKey": "abc", "projectId": "demo"},
    }))
    app_config.reload_config()
    monkeypatch.setenv("RELAY_TOKEN_FIELD", "deviceToken")

    config = load_relay_config()

    assert config.token_field == "deviceToken"
    assert config.include_stack is False
    assert get_firebase_config() == {"apiKey": "abc", "projectId": "demo"}
    assert get_config_value("token_field", section="relay") == "pushToken"


def test_invalid_boolean_falls_back_to_default(monkeypatch) -> None:
    monkeypatch.setenv("RELAY_DRY_RUN", "sometimes")

    assert load_relay_config().dry_run is False


def test_unparseable_file_is_ignored(isolated_config) -> None:
    isolated_config.write_text("{broken")

    assert app_config.reload_config() == {}
    assert load_relay_config() == RelayConfig()
