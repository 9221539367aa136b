#!/usr/bin/env python3
"""
Notification routes
HTTP endpoints for the test, admin and status handlers, plus the daily
reminder endpoint that Cloud Scheduler HTTP jobs can call.
"""

import logging

from flask import Blueprint, current_app, jsonify, request

from ..notification_dispatcher import (
    get_notification_stats, get_request_data, send_admin_notification,
    send_test_notification, trigger_daily_reminder
)

# Create logger for this module
logger = logging.getLogger(__name__)

bp = Blueprint('notifications', __name__)


def get_messaging_client():
    """Messaging client registered on the app by create_app()"""
    return current_app.extensions['messaging_client']


@bp.route('/scheduled/daily-reminder', methods=['GET', 'POST'])
def scheduled_daily_reminder():
    """
    Send the daily reminder.
    Called by Cloud Scheduler when the HTTP deployment is used instead of
    the Firebase scheduled function.
    """
    logger.info("[Daily Reminder] /scheduled/daily-reminder endpoint called")
    body, status = trigger_daily_reminder(get_messaging_client())
    return jsonify(body), status


@bp.route('/notifications/test', methods=['GET', 'POST'])
def test_notification():
    """Send a test notification to the reminder topic"""
    body, status = send_test_notification(get_messaging_client())
    return jsonify(body), status


@bp.route('/notifications/admin', methods=['POST'])
def admin_notification():
    """Send an admin notification with a title and body from the JSON or form body"""
    body, status = send_admin_notification(
        get_messaging_client(),
        get_request_data(request)
    )
    return jsonify(body), status


@bp.route('/notifications/stats', methods=['GET'])
def notification_stats():
    body, status = get_notification_stats()
    return jsonify(body), status
