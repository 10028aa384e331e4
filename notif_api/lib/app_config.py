#!/usr/bin/env python3
"""
Configuration for the relay.

Values come from environment variables first and fall back to the optional
app_config.json at the project root ("relay" and "firebase" sections).
"""

import json
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

# Create logger for this module
logger = logging.getLogger(__name__)

PROJECT_ROOT = Path(__file__).parent.parent.parent
APP_CONFIG_PATH = PROJECT_ROOT / 'app_config.json'

_TRUE_VALUES = ('1', 'true', 'yes', 'on')
_FALSE_VALUES = ('0', 'false', 'no', 'off')

# Cache for the loaded config
_config_cache = None


def get_app_config(reload=False):
    """
    Load and return the contents of app_config.json

    Args:
        reload: If True, force reload from file (default: False, uses cache)

    Returns:
        dict: Configuration dictionary, empty dict if file doesn't exist or can't be parsed
    """
    global _config_cache

    if _config_cache is None or reload:
        if APP_CONFIG_PATH.exists():
            try:
                with open(APP_CONFIG_PATH, 'r', encoding='utf-8') as f:
                    _config_cache = json.load(f)
                logger.debug(f"Loaded app config from {APP_CONFIG_PATH}")
            except json.JSONDecodeError as e:
                logger.error(f"Failed to parse {APP_CONFIG_PATH}: {e}")
                _config_cache = {}
        else:
            logger.debug(f"app_config.json not found at {APP_CONFIG_PATH}")
            _config_cache = {}

    return _config_cache.copy() if _config_cache else {}


def get_config_value(key, default=None, section=None):
    """
    Get a value from app_config.json, optionally within a section

    Examples:
        get_config_value('users_collection', section='relay')
        get_config_value('apiKey', section='firebase')
    """
    config = get_app_config()

    if section:
        return config.get(section, {}).get(key, default)

    return config.get(key, default)


def get_firebase_config() -> Dict[str, Any]:
    """Web (client-side) Firebase config, used by the service worker"""
    return get_app_config().get('firebase', {})


def reload_config():
    """Force reload of configuration from file (clears cache)"""
    global _config_cache
    _config_cache = None
    return get_app_config(reload=True)


def _parse_bool(name: str, raw: Any, default: bool) -> bool:
    if isinstance(raw, bool):
        return raw
    value = str(raw).strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    logger.warning(f"Invalid boolean value '{raw}' for {name}, using default {default}")
    return default


def _setting(key: str, default: Any) -> Any:
    env_value = os.environ.get(f'RELAY_{key.upper()}')
    if env_value is not None:
        return env_value
    return get_config_value(key, default, section='relay')


@dataclass(frozen=True)
class RelayConfig:
    """Settings resolved once at process startup and handed to the relay's collaborators."""

    credentials_path: Optional[str] = None
    project_id: Optional[str] = None
    users_collection: str = 'users'
    token_field: str = 'fcmToken'
    notification_title: str = 'New Message'
    echo_user_data: bool = True
    include_stack: bool = True
    dry_run: bool = False


def load_relay_config() -> RelayConfig:
    """
    Build a RelayConfig from the environment and app_config.json.

    FIREBASE_CREDENTIALS (or GOOGLE_APPLICATION_CREDENTIALS) points at a
    service-account JSON file; when neither is set, application default
    credentials are used. GCP_PROJECT is set automatically by Cloud Functions.
    """
    defaults = RelayConfig()

    credentials_path = (
        os.environ.get('FIREBASE_CREDENTIALS')
        or os.environ.get('GOOGLE_APPLICATION_CREDENTIALS')
        or get_config_value('credentials_path', section='relay')
    )
    project_id = os.environ.get('GCP_PROJECT') or os.environ.get('PROJECT_ID')

    return RelayConfig(
        credentials_path=credentials_path or None,
        project_id=project_id or None,
        users_collection=str(_setting('users_collection', defaults.users_collection)),
        token_field=str(_setting('token_field', defaults.token_field)),
        notification_title=str(_setting('notification_title', defaults.notification_title)),
        echo_user_data=_parse_bool(
            'echo_user_data', _setting('echo_user_data', defaults.echo_user_data), defaults.echo_user_data
        ),
        include_stack=_parse_bool(
            'include_stack', _setting('include_stack', defaults.include_stack), defaults.include_stack
        ),
        dry_run=_parse_bool('dry_run', _setting('dry_run', defaults.dry_run), defaults.dry_run),
    )
