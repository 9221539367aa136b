#!/usr/bin/env python3
"""
Notification dispatchers for the daily reminder, test and admin notifications.
These functions are called by the Firebase function entry points and by the
Flask routes. Each one builds a payload, sends it once through the injected
messaging client and maps the outcome to a response.

HTTP dispatchers return a (body, status) tuple; the scheduled dispatcher
returns a success record and re-raises send failures so the scheduler's own
retry and alerting apply.
"""

import logging
from datetime import datetime
from typing import Any, Dict, Optional, Tuple

from .lib.app_config import NotificationSettings, get_notification_settings
from .services.payload_service import (
    DEFAULT_TARGET_AUDIENCE, NotificationPayload, build_admin_payload,
    build_daily_reminder_payload, build_test_payload, describe_schedule,
    utc_now_iso
)

# Create logger for this module
logger = logging.getLogger(__name__)

Response = Tuple[Dict[str, Any], int]

MISSING_FIELDS_ERROR = "Title and body are required"
INVALID_FIELDS_ERROR = "Title, body and targetAudience must be strings"
METHOD_NOT_ALLOWED_ERROR = "Method not allowed"


def error_message(error: Exception) -> str:
    """Message for an error envelope, never empty"""
    return str(error) or type(error).__name__


def error_response(error: str, status: int) -> Response:
    return {
        'success': False,
        'error': error,
        'timestamp': utc_now_iso()
    }, status


def get_request_data(req) -> Optional[Dict[str, Any]]:
    """JSON body of a Flask request, or its form fields for form-encoded posts"""
    data = req.get_json(silent=True)
    if data is None and req.form:
        data = req.form.to_dict()
    return data


def _send(client, payload: NotificationPayload) -> str:
    logger.debug(f"[Dispatch] Sending {payload.notification_type} to topic '{payload.topic}'")
    return client.send(payload.to_message())


def send_daily_reminder(client, settings: Optional[NotificationSettings] = None) -> Dict[str, Any]:
    """
    Send the daily reminder to every subscriber of the topic.

    Returns:
        dict: {'success': True, 'messageId': ..., 'timestamp': ...}

    Raises:
        Whatever the messaging client raised; the failure is logged first.
    """
    settings = settings or get_notification_settings()
    logger.info(f"[Daily Reminder] Triggered at {utc_now_iso()} ({settings.timezone})")

    try:
        message_id = _send(client, build_daily_reminder_payload(settings))
    except Exception as e:
        logger.error(f"[Daily Reminder] Error sending daily reminder: {e}", exc_info=True)
        raise

    logger.info(f"[Daily Reminder] Sent successfully: messageId={message_id}, topic={settings.topic}")
    return {
        'success': True,
        'messageId': message_id,
        'timestamp': utc_now_iso()
    }


def trigger_daily_reminder(client, settings: Optional[NotificationSettings] = None) -> Response:
    """HTTP variant of send_daily_reminder for Cloud Scheduler HTTP jobs"""
    try:
        return send_daily_reminder(client, settings), 200
    except Exception as e:
        return error_response(error_message(e), 500)


def send_test_notification(client, settings: Optional[NotificationSettings] = None) -> Response:
    """
    Send a test notification to the reminder topic. Consumes no caller input.
    """
    settings = settings or get_notification_settings()
    logger.info("[Test Notification] Manual test notification triggered")

    try:
        message_id = _send(client, build_test_payload(settings))
    except Exception as e:
        logger.error(f"[Test Notification] Error sending test notification: {e}", exc_info=True)
        return error_response(error_message(e), 500)

    logger.info(f"[Test Notification] Sent successfully: messageId={message_id}")
    return {
        'success': True,
        'message': 'Test notification sent successfully',
        'messageId': message_id,
        'timestamp': utc_now_iso()
    }, 200


def send_admin_notification(client, request_data: Optional[Dict[str, Any]],
                            settings: Optional[NotificationSettings] = None) -> Response:
    """
    Send an admin-authored notification to the reminder topic.

    Args:
        client: Messaging client with a send(message) -> message_id method
        request_data: Parsed JSON body with 'title', 'body' and an optional
                      'targetAudience' (defaults to 'all'); None when the
                      request had no JSON body

    Returns:
        (body, status): 400 without sending when validation fails, 200 on
        success, 500 when the send fails
    """
    logger.info("[Admin Notification] Request received")

    if not isinstance(request_data, dict):
        request_data = {}

    title = request_data.get('title')
    body = request_data.get('body')
    target_audience = request_data.get('targetAudience')
    if target_audience is None:
        target_audience = DEFAULT_TARGET_AUDIENCE

    if not title or not body:
        logger.warning("[Admin Notification] Rejected: missing title or body")
        return error_response(MISSING_FIELDS_ERROR, 400)

    if not all(isinstance(value, str) for value in (title, body, target_audience)):
        logger.warning("[Admin Notification] Rejected: non-string title, body or targetAudience")
        return error_response(INVALID_FIELDS_ERROR, 400)

    settings = settings or get_notification_settings()

    try:
        message_id = _send(client, build_admin_payload(settings, title, body, target_audience))
    except Exception as e:
        logger.error(f"[Admin Notification] Error sending admin notification: {e}", exc_info=True)
        return error_response(error_message(e), 500)

    logger.info(
        f"[Admin Notification] Sent successfully: messageId={message_id}, "
        f"title={title!r}, targetAudience={target_audience}"
    )
    return {
        'success': True,
        'message': 'Admin notification sent successfully',
        'messageId': message_id,
        'title': title,
        'targetAudience': target_audience,
        'timestamp': utc_now_iso()
    }, 200


def get_notification_stats(settings: Optional[NotificationSettings] = None,
                           now: Optional[datetime] = None) -> Response:
    """Static description of the notification service. Never sends."""
    settings = settings or get_notification_settings()
    return {
        'service': settings.service_name,
        'status': 'active',
        'schedule': describe_schedule(settings.schedule, settings.timezone, now),
        'topic': settings.topic,
        'message': settings.daily_title,
        'lastChecked': utc_now_iso(now)
    }, 200
