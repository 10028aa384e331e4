#!/usr/bin/env python3
"""
Notification relay route
"""

from flask import Blueprint, Response, current_app, request

bp = Blueprint('notifications', __name__)

# Every method reaches the relay, which answers OPTIONS itself
RELAY_METHODS = ['GET', 'POST', 'PUT', 'PATCH', 'DELETE', 'OPTIONS']


def get_relay():
    return current_app.extensions['notification_relay']


@bp.route('/', methods=RELAY_METHODS)
@bp.route('/notify', methods=RELAY_METHODS)
def relay_notification():
    """Look up the recipient's FCM token and forward the notification"""
    relay_response = get_relay().handle(request.method, request.get_data())
    return Response(
        relay_response.body,
        status=relay_response.status_code,
        headers=relay_response.headers,
    )
