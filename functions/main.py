"""
Cloud Functions for Firebase entry points for Gita Connect notifications

- sendDailyKrishnaReminders: scheduled daily reminder to the topic
- testKrishnaNotification: HTTP, sends a test notification
- sendAdminNotification: HTTP POST, sends an admin-authored notification
- getNotificationStats: HTTP, static status document
"""

import json
import logging
import sys
from pathlib import Path

# Add parent directory to path
PROJECT_ROOT = Path(__file__).parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

# The Cloud Functions for Firebase SDK to set up triggers and options.
from firebase_functions import https_fn, options, scheduler_fn

from gita_connect.lib.app_config import get_notification_settings
from gita_connect.lib.logging_config import setup_logging
from gita_connect.notification_dispatcher import (
    METHOD_NOT_ALLOWED_ERROR, error_response, get_notification_stats,
    get_request_data, send_admin_notification, send_daily_reminder,
    send_test_notification
)
from gita_connect.services.messaging_service import MessagingClient

setup_logging()

# Create logger for this module
logger = logging.getLogger(__name__)

# Cost control
options.set_global_options(max_instances=10)

settings = get_notification_settings()

# Firebase Admin is initialized on the first send
messaging_client = MessagingClient()

CORS = options.CorsOptions(cors_origins="*", cors_methods=["get", "post"])


def _json_response(body, status):
    return https_fn.Response(
        json.dumps(body, ensure_ascii=False),
        status=status,
        mimetype="application/json"
    )


@scheduler_fn.on_schedule(
    schedule=settings.schedule,
    timezone=settings.timezone,
    memory=options.MemoryOption.MB_256,
    max_instances=1,
)
def sendDailyKrishnaReminders(event: scheduler_fn.ScheduledEvent) -> None:
    """
    Send the daily Krishna consciousness reminder to all topic subscribers.
    Send failures are re-raised so Cloud Scheduler records the failed run.
    """
    result = send_daily_reminder(messaging_client, settings)
    logger.info(f"[Daily Reminder] Run for {event.schedule_time} completed: {result['messageId']}")


@https_fn.on_request(cors=CORS, memory=options.MemoryOption.MB_256)
def testKrishnaNotification(req: https_fn.Request) -> https_fn.Response:
    """Manually trigger a test notification"""
    body, status = send_test_notification(messaging_client, settings)
    return _json_response(body, status)


@https_fn.on_request(cors=CORS, memory=options.MemoryOption.MB_256)
def sendAdminNotification(req: https_fn.Request) -> https_fn.Response:
    """Send a custom notification with a title and body from the request"""
    if req.method != "POST":
        body, status = error_response(METHOD_NOT_ALLOWED_ERROR, 405)
        return _json_response(body, status)

    body, status = send_admin_notification(messaging_client, get_request_data(req), settings)
    return _json_response(body, status)


@https_fn.on_request(cors=CORS, memory=options.MemoryOption.MB_128)
def getNotificationStats(req: https_fn.Request) -> https_fn.Response:
    """Status document for monitoring"""
    body, status = get_notification_stats(settings)
    return _json_response(body, status)
