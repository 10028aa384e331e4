#!/usr/bin/env python3
"""
Notification relay

Turns an incoming HTTP request into at most one Firestore read and one FCM send,
and always answers with a RelayResponse:

    OPTIONS                      -> 200, empty body, CORS headers
    recipient document missing   -> 404 "User not found"
    document has no push token   -> 404 "FCM token not found"
    message accepted by FCM      -> 200 "Notification sent successfully"
    malformed body, Firestore or
    FCM failure                  -> 500 with the error message and traceback
"""

import enum
import json
import logging
import traceback
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Union

from .lib.app_config import RelayConfig
from .services.messaging_service import PushMessage

# Create logger for this module
logger = logging.getLogger(__name__)

CORS_HEADERS = {
    'Access-Control-Allow-Origin': '*',
    'Access-Control-Allow-Headers': 'Content-Type',
    'Access-Control-Allow-Methods': 'POST, OPTIONS',
    'Content-Type': 'application/json',
}

# 500 responses only carry the origin and content-type headers
ERROR_HEADERS = {
    'Access-Control-Allow-Origin': '*',
    'Content-Type': 'application/json',
}


class RequestParseError(ValueError):
    """The request body is not a valid notification request"""


@dataclass(frozen=True)
class NotificationRequest:
    recipient_id: str
    content: Optional[str] = None

    @classmethod
    def from_body(cls, body: Union[str, bytes, None]) -> 'NotificationRequest':
        """
        Parse a JSON body of the form {"recipientId": "...", "content": "..."}

        Raises:
            RequestParseError: body is not JSON, not an object, or lacks a usable field
        """
        if isinstance(body, bytes):
            try:
                body = body.decode('utf-8')
            except UnicodeDecodeError as e:
                raise RequestParseError(f"Request body is not valid UTF-8: {e}") from e

        try:
            payload = json.loads(body)
        except (TypeError, ValueError) as e:
            raise RequestParseError(f"Request body is not valid JSON: {e}") from e

        if not isinstance(payload, dict):
            raise RequestParseError("Request body must be a JSON object")

        recipient_id = payload.get('recipientId')
        if not isinstance(recipient_id, str) or not recipient_id:
            raise RequestParseError("recipientId must be a non-empty string")

        # A missing content is relayed as a notification without a body
        content = payload.get('content')
        if content is not None and not isinstance(content, str):
            raise RequestParseError("content must be a string")

        return cls(recipient_id=recipient_id, content=content)


@dataclass(frozen=True)
class RelayResponse:
    status_code: int
    headers: Dict[str, str]
    body: str

    def json(self) -> Any:
        return json.loads(self.body) if self.body else None


class OutcomeKind(enum.Enum):
    SENT = 'sent'
    RECIPIENT_NOT_FOUND = 'recipient_not_found'
    TOKEN_NOT_FOUND = 'token_not_found'
    FAILED = 'failed'


@dataclass(frozen=True)
class RelayOutcome:
    kind: OutcomeKind
    recipient_id: Optional[str] = None
    user_data: Optional[Dict[str, Any]] = None
    error: Optional[BaseException] = field(default=None, compare=False)

    @classmethod
    def failed(cls, error: BaseException, recipient_id: Optional[str] = None) -> 'RelayOutcome':
        return cls(OutcomeKind.FAILED, recipient_id=recipient_id, error=error)


def _format_stack(error: BaseException) -> str:
    return ''.join(traceback.format_exception(type(error), error, error.__traceback__))


def _error_message(error: BaseException) -> str:
    return str(error) or type(error).__name__


class NotificationRelay:
    """
    Relay handler bound to a recipient store and a push messenger.

    store must provide get(recipient_id) -> dict | None and messenger must
    provide send(PushMessage). Neither call is retried.
    """

    def __init__(self, store, messenger, config: Optional[RelayConfig] = None):
        self.store = store
        self.messenger = messenger
        self.config = config or RelayConfig()

    def handle(self, method: Optional[str], body: Union[str, bytes, None]) -> RelayResponse:
        """Answer one request. Never raises."""
        if (method or '').upper() == 'OPTIONS':
            return RelayResponse(200, dict(CORS_HEADERS), '')

        try:
            outcome = self.relay(body)
            return self.to_response(outcome)
        except Exception as e:
            # Last resort, e.g. a record that cannot be JSON encoded
            return self.to_response(RelayOutcome.failed(e))

    def relay(self, body: Union[str, bytes, None]) -> RelayOutcome:
        """Run parse, lookup and send, stopping at the first step that does not succeed"""
        try:
            request = NotificationRequest.from_body(body)
        except RequestParseError as e:
            return RelayOutcome.failed(e)

        logger.debug(f"[Relay] Received message for recipient {request.recipient_id}")

        try:
            record = self.store.get(request.recipient_id)
        except Exception as e:
            return RelayOutcome.failed(e, recipient_id=request.recipient_id)

        if record is None:
            return RelayOutcome(OutcomeKind.RECIPIENT_NOT_FOUND, recipient_id=request.recipient_id)

        token = record.get(self.config.token_field)
        if not token:
            return RelayOutcome(OutcomeKind.TOKEN_NOT_FOUND, recipient_id=request.recipient_id, user_data=record)

        message = PushMessage(title=self.config.notification_title, body=request.content, token=token)
        try:
            self.messenger.send(message)
        except Exception as e:
            return RelayOutcome.failed(e, recipient_id=request.recipient_id)

        return RelayOutcome(OutcomeKind.SENT, recipient_id=request.recipient_id)

    def to_response(self, outcome: RelayOutcome) -> RelayResponse:
        """Map an outcome to its HTTP status, headers and JSON body"""
        if outcome.kind is OutcomeKind.SENT:
            logger.info(f"[Relay] Notification sent to recipient {outcome.recipient_id}")
            return self._json(200, {
                'message': 'Notification sent successfully',
                'recipientId': outcome.recipient_id,
            })

        if outcome.kind is OutcomeKind.RECIPIENT_NOT_FOUND:
            logger.info(f"[Relay] User document not found: {outcome.recipient_id}")
            return self._json(404, {
                'message': 'User not found',
                'recipientId': outcome.recipient_id,
            })

        if outcome.kind is OutcomeKind.TOKEN_NOT_FOUND:
            logger.info(f"[Relay] FCM token not found for recipient {outcome.recipient_id}")
            body = {'message': 'FCM token not found'}
            if self.config.echo_user_data:
                body['userData'] = outcome.user_data
            return self._json(404, body)

        error = outcome.error or RuntimeError('Unknown relay failure')
        logger.error(
            f"[Relay] Error relaying notification (recipient: {outcome.recipient_id}): {error}",
            exc_info=(type(error), error, error.__traceback__),
        )
        body = {'error': _error_message(error)}
        if self.config.include_stack:
            body['stack'] = _format_stack(error)
        return RelayResponse(500, dict(ERROR_HEADERS), json.dumps(body, default=str))

    @staticmethod
    def _json(status_code: int, body: Dict[str, Any]) -> RelayResponse:
        # Firestore timestamps and references fall back to str()
        return RelayResponse(status_code, dict(CORS_HEADERS), json.dumps(body, default=str))
