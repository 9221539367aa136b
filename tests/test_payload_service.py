from datetime import datetime, timedelta, timezone

import pytest

from gita_connect.lib.app_config import NotificationSettings
from gita_connect.services.payload_service import (
    ADMIN_NOTIFICATION, DAILY_REMINDER, TEST_NOTIFICATION, build_admin_payload,
    build_daily_reminder_payload, build_test_payload, describe_schedule,
    utc_now_iso
)

FIXED_NOW = datetime(2026, 10, 19, 17, 10, tzinfo=timezone.utc)


def test_utc_now_iso_converts_to_utc():
    ist = timezone(timedelta(hours=5, minutes=30))
    assert utc_now_iso(datetime(2026, 10, 19, 22, 40, tzinfo=ist)) == "2026-10-19T17:10:00+00:00"


def test_daily_reminder_payload(settings):
    payload = build_daily_reminder_payload(settings, now=FIXED_NOW)
    assert payload.title == "Hare Krishna! 🙏"
    assert payload.body == "Start your day with Krishna consciousness"
    assert payload.topic == "daily_krishna_reminders"
    assert payload.data == {"type": DAILY_REMINDER, "timestamp": "2026-10-19T17:10:00+00:00"}
    assert payload.notification_type == DAILY_REMINDER


def test_test_payload_is_tagged(settings):
    payload = build_test_payload(settings, now=FIXED_NOW)
    assert payload.title.startswith("Test - ")
    assert payload.data["type"] == TEST_NOTIFICATION
    assert payload.topic == settings.topic


def test_admin_payload_carries_audience(settings):
    payload = build_admin_payload(settings, "Ekadashi", "Fast today", "devotees")
    assert payload.title == "Ekadashi"
    assert payload.body == "Fast today"
    assert payload.data["type"] == ADMIN_NOTIFICATION
    assert payload.data["targetAudience"] == "devotees"
    assert "timestamp" in payload.data


@pytest.mark.parametrize("title, body", [("", "Hello"), ("Test", ""), (None, None)])
def test_admin_payload_requires_title_and_body(settings, title, body):
    with pytest.raises(ValueError, match="Title and body are required"):
        build_admin_payload(settings, title, body)


def test_to_message_sets_platform_hints(settings):
    message = build_daily_reminder_payload(settings).to_message()
    assert message.topic == "daily_krishna_reminders"
    assert message.notification.title == "Hare Krishna! 🙏"
    assert message.data["type"] == DAILY_REMINDER
    assert message.android.priority == "high"
    assert message.android.notification.channel_id == "krishna_reminders"
    assert message.android.notification.sound == "default"
    assert message.android.notification.priority == "high"
    assert message.apns.payload.aps.sound == "default"
    assert message.apns.payload.aps.content_available is True


def test_to_message_uses_configured_channel():
    settings = NotificationSettings(topic="weekly", channel_id="weekly_channel", sound="bell.wav")
    message = build_test_payload(settings).to_message()
    assert message.topic == "weekly"
    assert message.android.notification.channel_id == "weekly_channel"
    assert message.apns.payload.aps.sound == "bell.wav"


def test_to_message_copies_data(settings):
    payload = build_test_payload(settings)
    message = payload.to_message()
    message.data["type"] = "changed"
    assert payload.data["type"] == TEST_NOTIFICATION


def test_describe_daily_schedule():
    assert describe_schedule("40 22 * * *", "UTC") == "Daily at 22:40 UTC"
    assert describe_schedule("5 7 * * *", "UTC") == "Daily at 07:05 UTC"


def test_describe_schedule_uses_zone_abbreviation():
    description = describe_schedule("40 22 * * *", "Asia/Kolkata")
    assert description.startswith("Daily at 22:40 ")
    assert description.endswith(("IST", "Asia/Kolkata"))


def test_describe_schedule_follows_daylight_saving_at_now():
    summer = datetime(2026, 7, 1, 12, 0, tzinfo=timezone.utc)
    winter = datetime(2026, 1, 15, 12, 0, tzinfo=timezone.utc)
    assert describe_schedule("0 9 * * *", "America/New_York", summer) == "Daily at 09:00 EDT"
    assert describe_schedule("0 9 * * *", "America/New_York", winter) == "Daily at 09:00 EST"


def test_describe_non_daily_schedule_echoes_cron():
    assert describe_schedule("0 9 * * 5", "UTC") == "Cron '0 9 * * 5' (UTC)"
    assert describe_schedule("every day 00:00", "UTC") == "Cron 'every day 00:00' (UTC)"


def test_describe_schedule_unknown_zone():
    assert describe_schedule("40 22 * * *", "Mars/Olympus") == "Daily at 22:40 Mars/Olympus"
