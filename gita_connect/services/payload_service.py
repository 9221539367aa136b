#!/usr/bin/env python3
"""
Notification payload construction

Builds the NotificationPayload value object for each notification type and
converts it to a firebase_admin.messaging.Message. Also holds the small
time helpers shared by the dispatchers.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Dict, Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from firebase_admin import messaging

from ..lib.app_config import NotificationSettings

# Create logger for this module
logger = logging.getLogger(__name__)

DAILY_REMINDER = 'daily_reminder'
TEST_NOTIFICATION = 'test_notification'
ADMIN_NOTIFICATION = 'admin_notification'

TEST_TITLE = 'Test - Hare Krishna! 🙏'
TEST_BODY = 'This is a test notification from Cloud Functions'

DEFAULT_TARGET_AUDIENCE = 'all'
HIGH_PRIORITY = 'high'


def utc_now_iso(now: Optional[datetime] = None) -> str:
    """ISO-8601 timestamp in UTC"""
    if now is None:
        now = datetime.now(timezone.utc)
    return now.astimezone(timezone.utc).isoformat()


def describe_schedule(schedule: str, tz_name: str, now: Optional[datetime] = None) -> str:
    """
    Human readable form of a cron expression, e.g. 'Daily at 22:40 IST'.
    Anything other than a plain daily 'M H * * *' expression is echoed back.
    The zone abbreviation is the one in effect at `now` (default: current time).
    """
    if now is None:
        now = datetime.now(timezone.utc)
    try:
        tz_label = now.astimezone(ZoneInfo(tz_name)).strftime('%Z')
    except (ZoneInfoNotFoundError, ValueError):
        tz_label = tz_name

    fields = schedule.split()
    if len(fields) == 5 and fields[2:] == ['*', '*', '*']:
        minute, hour = fields[0], fields[1]
        if minute.isdigit() and hour.isdigit() and int(hour) < 24 and int(minute) < 60:
            return f"Daily at {int(hour):02d}:{int(minute):02d} {tz_label}"

    return f"Cron '{schedule}' ({tz_label})"


@dataclass(frozen=True)
class NotificationPayload:
    """A single topic notification, built per invocation and sent once"""
    title: str
    body: str
    topic: str
    data: Dict[str, str] = field(default_factory=dict)
    channel_id: str = 'krishna_reminders'
    sound: str = 'default'
    priority: str = HIGH_PRIORITY

    @property
    def notification_type(self) -> Optional[str]:
        return self.data.get('type')

    def to_message(self) -> messaging.Message:
        """Convert to the FCM message with Android and APNs delivery hints"""
        return messaging.Message(
            notification=messaging.Notification(title=self.title, body=self.body),
            data=dict(self.data),
            topic=self.topic,
            android=messaging.AndroidConfig(
                priority=self.priority,
                notification=messaging.AndroidNotification(
                    channel_id=self.channel_id,
                    sound=self.sound,
                    priority=self.priority,
                ),
            ),
            apns=messaging.APNSConfig(
                payload=messaging.APNSPayload(
                    aps=messaging.Aps(sound=self.sound, content_available=True),
                ),
            ),
        )


def _build_payload(settings: NotificationSettings, title: str, body: str,
                   notification_type: str, now: Optional[datetime] = None,
                   **extra_data: str) -> NotificationPayload:
    data = {'type': notification_type, 'timestamp': utc_now_iso(now)}
    data.update(extra_data)
    return NotificationPayload(
        title=title,
        body=body,
        topic=settings.topic,
        data=data,
        channel_id=settings.channel_id,
        sound=settings.sound,
    )


def build_daily_reminder_payload(settings: NotificationSettings,
                                 now: Optional[datetime] = None) -> NotificationPayload:
    return _build_payload(settings, settings.daily_title, settings.daily_body, DAILY_REMINDER, now)


def build_test_payload(settings: NotificationSettings,
                       now: Optional[datetime] = None) -> NotificationPayload:
    return _build_payload(settings, TEST_TITLE, TEST_BODY, TEST_NOTIFICATION, now)


def build_admin_payload(settings: NotificationSettings, title: str, body: str,
                        target_audience: str = DEFAULT_TARGET_AUDIENCE,
                        now: Optional[datetime] = None) -> NotificationPayload:
    """
    Admin notifications reuse the daily reminder topic and delivery hints,
    with caller supplied text. Title and body must be non-empty.
    """
    if not title or not body:
        raise ValueError("Title and body are required")
    return _build_payload(settings, title, body, ADMIN_NOTIFICATION, now,
                          targetAudience=target_audience)
