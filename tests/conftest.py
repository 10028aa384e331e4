"""Shared fixtures: mocked Firestore store and FCM messenger, a relay and a Flask client."""

from unittest.mock import MagicMock

import pytest

from notif_api.app import create_app
from notif_api.lib.app_config import RelayConfig
from notif_api.relay import NotificationRelay
from tests.fixtures import InMemoryStore


@pytest.fixture
def store() -> InMemoryStore:
    return InMemoryStore({"u1": {"fcmToken": "TOK", "name": "Ada"}})


@pytest.fixture
def messenger() -> MagicMock:
    messenger = MagicMock()
    messenger.send.return_value = "projects/demo/messages/1"
    return messenger


@pytest.fixture
def config() -> RelayConfig:
    return RelayConfig()


@pytest.fixture
def relay(store, messenger, config) -> NotificationRelay:
    return NotificationRelay(store, messenger, config)


@pytest.fixture
def client(relay):
    app = create_app(relay=relay)
    app.config["TESTING"] = True
    return app.test_client()
