import firebase_admin
from firebase_admin import messaging

from gita_connect.services import messaging_service
from gita_connect.services.messaging_service import MessagingClient, is_dry_run_from_env


def test_dry_run_from_env(monkeypatch):
    monkeypatch.setenv("FCM_DRY_RUN", "true")
    assert is_dry_run_from_env() is True
    assert MessagingClient().dry_run is True
    monkeypatch.setenv("FCM_DRY_RUN", "0")
    assert is_dry_run_from_env() is False
    monkeypatch.delenv("FCM_DRY_RUN")
    assert MessagingClient().dry_run is False


def test_explicit_dry_run_wins(monkeypatch):
    monkeypatch.setenv("FCM_DRY_RUN", "true")
    assert MessagingClient(dry_run=False).dry_run is False


def test_send_passes_app_and_dry_run(monkeypatch):
    calls = []
    app = object()

    def fake_send(message, dry_run=False, app=None):
        calls.append((message, dry_run, app))
        return "projects/gita/messages/1"

    monkeypatch.setattr(messaging_service.messaging, "send", fake_send)
    message = messaging.Message(topic="daily_krishna_reminders")
    client = MessagingClient(app=app, dry_run=True)

    assert client.send(message) == "projects/gita/messages/1"
    assert calls == [(message, True, app)]


def test_default_app_initialized_once(monkeypatch):
    initialized = []
    default_app = object()

    def fake_initialize_app():
        initialized.append(True)
        monkeypatch.setitem(firebase_admin._apps, "[DEFAULT]", default_app)
        return default_app

    monkeypatch.setattr(firebase_admin, "_apps", {})
    monkeypatch.setattr(firebase_admin, "initialize_app", fake_initialize_app)
    monkeypatch.setattr(firebase_admin, "get_app", lambda: firebase_admin._apps["[DEFAULT]"])

    client = MessagingClient(dry_run=False)
    assert client.get_app() is default_app
    assert client.get_app() is default_app
    assert MessagingClient(dry_run=False).get_app() is default_app
    assert initialized == [True]
