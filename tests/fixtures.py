"""
tests/fixtures.py

Test doubles and request builders shared across the test modules.
"""

import json
from unittest.mock import MagicMock


class InMemoryStore:
    """Stand-in for RecipientStore backed by a dict of documents."""

    def __init__(self, documents=None):
        self.documents = dict(documents or {})
        self.get = MagicMock(side_effect=self._get)
        self.ping = MagicMock()

    def _get(self, recipient_id):
        return self.documents.get(recipient_id)


def notification_body(recipient_id="u1", content="hi") -> str:
    return json.dumps({"recipientId": recipient_id, "content": content})
