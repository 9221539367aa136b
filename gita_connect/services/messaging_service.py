#!/usr/bin/env python3
"""
Firebase Cloud Messaging client used by every dispatcher.

The Firebase Admin app is initialized lazily on the first send, once per
process, so importing the functions never needs credentials.
"""

import logging
import os

import firebase_admin
from firebase_admin import messaging

# Create logger for this module
logger = logging.getLogger(__name__)

TRUTHY_VALUES = ('1', 'true', 'yes', 'on')


def is_dry_run_from_env() -> bool:
    """True when FCM_DRY_RUN asks for validation-only sends"""
    return os.environ.get('FCM_DRY_RUN', '').strip().lower() in TRUTHY_VALUES


class MessagingClient:
    """
    Thin wrapper over firebase_admin.messaging.send

    Args:
        app: Optional firebase_admin App; the default app is used (and
             initialized if needed) when omitted
        dry_run: Validate messages without delivering them. Defaults to the
                 FCM_DRY_RUN environment variable.
    """

    def __init__(self, app=None, dry_run=None):
        self._app = app
        self.dry_run = is_dry_run_from_env() if dry_run is None else dry_run

    def get_app(self):
        if self._app is None:
            if not firebase_admin._apps:
                logger.info("[Messaging] Initializing Firebase Admin app")
                firebase_admin.initialize_app()
            self._app = firebase_admin.get_app()
        return self._app

    def send(self, message: messaging.Message) -> str:
        """
        Send a message and return the provider-issued message id.
        Raises firebase_admin.exceptions.FirebaseError or ValueError on failure.
        """
        message_id = messaging.send(message, dry_run=self.dry_run, app=self.get_app())
        if self.dry_run:
            logger.info(f"[Messaging] Dry run accepted by FCM: {message_id}")
        return message_id
