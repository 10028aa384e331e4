#!/usr/bin/env python3
"""
Firestore access for recipient documents
"""

import logging
from typing import Any, Dict, Optional

from firebase_admin import firestore

# Create logger for this module
logger = logging.getLogger(__name__)


class RecipientStore:
    """Read-only view over the collection holding one document per recipient."""

    def __init__(self, client, collection_name: str = 'users'):
        self.client = client
        self.collection_name = collection_name

    @classmethod
    def from_app(cls, app, collection_name: str = 'users') -> 'RecipientStore':
        return cls(firestore.client(app), collection_name)

    @property
    def collection(self):
        return self.client.collection(self.collection_name)

    def get(self, recipient_id: str) -> Optional[Dict[str, Any]]:
        """
        Fetch a recipient document.

        Returns:
            The document data, or None when no document exists for recipient_id
        """
        snapshot = self.collection.document(str(recipient_id)).get()
        if not snapshot.exists:
            logger.debug(f"No document {self.collection_name}/{recipient_id}")
            return None
        return snapshot.to_dict() or {}

    def ping(self) -> None:
        """Lightweight query used by the health check; raises if Firestore is unreachable"""
        list(self.collection.limit(1).stream())
