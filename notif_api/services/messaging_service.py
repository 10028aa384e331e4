#!/usr/bin/env python3
"""
Messaging service for delivering push notifications through Firebase Cloud Messaging
"""

import logging
from dataclasses import dataclass
from typing import Optional

from firebase_admin import messaging

# Create logger for this module
logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PushMessage:
    title: str
    body: Optional[str]
    token: str

    def to_fcm_message(self) -> messaging.Message:
        return messaging.Message(
            notification=messaging.Notification(title=self.title, body=self.body),
            token=self.token,
        )


class PushMessenger:
    """
    Sends single push messages via FCM.

    Each call makes exactly one attempt; failures from the FCM API
    (firebase_admin.exceptions.FirebaseError and subclasses) propagate to the caller.
    """

    def __init__(self, app=None, dry_run: bool = False):
        self.app = app
        self.dry_run = dry_run

    def send(self, message: PushMessage) -> str:
        """
        Send a message and wait for FCM to accept it.

        Returns:
            The FCM message id
        """
        message_id = messaging.send(message.to_fcm_message(), dry_run=self.dry_run, app=self.app)
        if self.dry_run:
            logger.info(f"[Messaging] Dry run accepted message {message_id}")
        else:
            logger.debug(f"[Messaging] Sent message {message_id}")
        return message_id
