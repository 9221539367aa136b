#!/usr/bin/env python3
"""
Centralized configuration management for app_config.json
Handles loading the deploy-time notification constants (topic, schedule,
time zone, Android channel, sound and the daily reminder texts).
"""

import json
import logging
from dataclasses import dataclass
from pathlib import Path

# Create logger for this module
logger = logging.getLogger(__name__)

# Get the project root directory
PROJECT_ROOT = Path(__file__).parent.parent.parent
APP_CONFIG_PATH = PROJECT_ROOT / 'app_config.json'

NOTIFICATIONS_SECTION = 'notifications'

# Cache for the loaded config
_config_cache = None


@dataclass(frozen=True)
class NotificationSettings:
    """Constants shared by every dispatcher. Changing them requires a redeploy."""
    service_name: str = 'Gita Connect Notifications'
    topic: str = 'daily_krishna_reminders'
    schedule: str = '40 22 * * *'
    timezone: str = 'Asia/Kolkata'
    channel_id: str = 'krishna_reminders'
    sound: str = 'default'
    daily_title: str = 'Hare Krishna! 🙏'
    daily_body: str = 'Start your day with Krishna consciousness'


# Maps app_config.json keys to NotificationSettings fields
_SETTINGS_KEYS = {
    'serviceName': 'service_name',
    'topic': 'topic',
    'schedule': 'schedule',
    'timezone': 'timezone',
    'channelId': 'channel_id',
    'sound': 'sound',
    'dailyTitle': 'daily_title',
    'dailyBody': 'daily_body',
}


def get_app_config(reload=False):
    """
    Load and return the application configuration from app_config.json

    Args:
        reload: If True, force reload from file (default: False, uses cache)

    Returns:
        dict: Configuration dictionary, empty dict if file doesn't exist or can't be loaded
    """
    global _config_cache

    if _config_cache is None or reload:
        try:
            if APP_CONFIG_PATH.exists():
                with open(APP_CONFIG_PATH, 'r', encoding='utf-8') as f:
                    _config_cache = json.load(f)
                    logger.debug(f"Loaded app config from {APP_CONFIG_PATH}")
                if not isinstance(_config_cache, dict):
                    logger.error("app_config.json must contain a JSON object, ignoring it")
                    _config_cache = {}
            else:
                logger.warning(f"app_config.json not found at {APP_CONFIG_PATH}")
                _config_cache = {}
        except json.JSONDecodeError as e:
            logger.error(f"Failed to parse app_config.json: {e}")
            _config_cache = {}
        except OSError as e:
            logger.warning(f"Could not load app_config.json: {e}")
            _config_cache = {}

    return _config_cache.copy() if _config_cache else {}


def get_config_value(key, default=None, section=None):
    """
    Get a configuration value from app_config.json

    Args:
        key: The configuration key to retrieve
        default: Default value if key is not found
        section: Optional section name (e.g., 'notifications') to look within

    Returns:
        The configuration value or default if not found

    Examples:
        get_config_value('topic', section='notifications')
    """
    config = get_app_config()

    if section:
        section_config = config.get(section, {})
        if not isinstance(section_config, dict):
            logger.warning(f"Section '{section}' in app_config.json is not an object, ignoring it")
            return default
        return section_config.get(key, default)

    return config.get(key, default)


def get_notification_settings() -> NotificationSettings:
    """
    Build the notification settings from the 'notifications' section of
    app_config.json, falling back to the built-in defaults for missing keys.
    Non-string values, and a section that is not an object, are ignored
    with a warning.
    """
    if not isinstance(get_config_value(NOTIFICATIONS_SECTION, default={}), dict):
        logger.warning(f"Section '{NOTIFICATIONS_SECTION}' in app_config.json is not an object, using defaults")
        return NotificationSettings()

    overrides = {}
    for key, field_name in _SETTINGS_KEYS.items():
        value = get_config_value(key, section=NOTIFICATIONS_SECTION)
        if value is None:
            continue
        if not isinstance(value, str) or not value:
            logger.warning(f"Ignoring invalid value for notifications.{key}: {value!r}")
            continue
        overrides[field_name] = value
    return NotificationSettings(**overrides)


def reload_config():
    """
    Force reload of configuration from file (clears cache)
    """
    global _config_cache
    _config_cache = None
    return get_app_config(reload=True)
