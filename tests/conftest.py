import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from gita_connect.app import create_app
from gita_connect.lib.app_config import NotificationSettings


class FakeMessagingClient:
    """Records sent messages; fails every send when given an error"""

    def __init__(self, message_id="msg123", error=None):
        self.message_id = message_id
        self.error = error
        self.dry_run = False
        self.sent = []

    def send(self, message):
        self.sent.append(message)
        if self.error is not None:
            raise self.error
        return self.message_id


@pytest.fixture
def settings():
    return NotificationSettings()


@pytest.fixture
def messaging_client():
    return FakeMessagingClient()


@pytest.fixture
def failing_client():
    return FakeMessagingClient(error=RuntimeError("Requested entity was not found."))


@pytest.fixture
def app(messaging_client):
    flask_app = create_app(messaging_client)
    flask_app.config["TESTING"] = True
    return flask_app


@pytest.fixture
def http(app):
    return app.test_client()
