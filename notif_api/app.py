#!/usr/bin/env python3
"""
Flask app serving the notification relay
"""

import logging
import time
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

from flask import Flask, Response, current_app, jsonify, render_template

from .db import RecipientStore
from .firebase_init import initialize_firebase_admin
from .lib.app_config import RelayConfig, get_firebase_config, load_relay_config
from .relay import NotificationRelay
from .services.messaging_service import PushMessenger

# Create logger for this module
logger = logging.getLogger(__name__)

BASE_DIR = Path(__file__).parent

SERVICE_WORKER_ICON = '/icons/Icon-192.png'


def build_relay(config: RelayConfig) -> NotificationRelay:
    """Initialize Firebase Admin and wire the relay to Firestore and FCM"""
    firebase_app = initialize_firebase_admin(config)
    store = RecipientStore.from_app(firebase_app, config.users_collection)
    messenger = PushMessenger(app=firebase_app, dry_run=config.dry_run)
    return NotificationRelay(store, messenger, config)


def create_app(relay: Optional[NotificationRelay] = None, config: Optional[RelayConfig] = None) -> Flask:
    """
    Create the Flask app.

    When no relay is given, one is built from config (or from the environment),
    which initializes Firebase Admin; any credential error propagates.
    """
    if relay is None:
        relay = build_relay(config or load_relay_config())

    app = Flask(__name__, template_folder=str(BASE_DIR / 'templates'))
    app.extensions['notification_relay'] = relay

    from .routes.notification_routes import bp as notifications_bp
    app.register_blueprint(notifications_bp)

    app.add_url_rule('/health', 'health_check', health_check, methods=['GET'])
    app.add_url_rule('/firebase-messaging-sw.js', 'service_worker', service_worker, methods=['GET'])

    return app


def health_check():
    """
    Report whether Firestore is reachable.
    Returns 200 when healthy, 503 otherwise.
    """
    relay = current_app.extensions['notification_relay']
    db_available = False
    db_response_time_ms = None
    db_error = None

    try:
        start_time = time.time()
        relay.store.ping()
        db_response_time_ms = round((time.time() - start_time) * 1000, 2)
        db_available = True
    except Exception as e:
        logger.warning(f"[Health] Firestore check failed: {e}")
        db_error = str(e)

    status = 'healthy' if db_available else 'unhealthy'
    response = {
        'status': status,
        'timestamp': datetime.now(timezone.utc).isoformat(),
        'services': {
            'database': {
                'status': status,
                'available': db_available,
                'response_time_ms': db_response_time_ms,
                'error': db_error,
            }
        },
    }
    return jsonify(response), 200 if db_available else 503


def service_worker():
    """Background message handler for the web client, with the web Firebase config filled in"""
    script = render_template(
        'firebase-messaging-sw.js',
        firebase_config=get_firebase_config(),
        icon=SERVICE_WORKER_ICON,
    )
    return Response(script, mimetype='application/javascript')
