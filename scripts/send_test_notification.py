#!/usr/bin/env python3
"""
Send a single test notification straight through FCM, bypassing Firestore

Usage:
    python scripts/send_test_notification.py --token FCM_TOKEN [--dry-run]

Examples:
    python scripts/send_test_notification.py --token dRRhf3Cl...
    TEST_FCM_TOKEN=dRRhf3Cl... python scripts/send_test_notification.py --dry-run
"""

import argparse
import logging
import os
import sys
from pathlib import Path
from typing import Optional

# Add project root to path
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from dotenv import load_dotenv

from notif_api.firebase_init import initialize_firebase_admin
from notif_api.lib.app_config import load_relay_config
from notif_api.lib.logging_config import setup_logging
from notif_api.services.messaging_service import PushMessage, PushMessenger

logger = logging.getLogger('send_test_notification')

TEST_TITLE = 'Test Notification'
TEST_BODY = 'Hello from local test!'


def send_test_notification(token: str, dry_run: bool = False, messenger: Optional[PushMessenger] = None) -> bool:
    """
    Send the test message to token.

    Returns:
        bool: True if FCM accepted the message
    """
    if messenger is None:
        firebase_app = initialize_firebase_admin(load_relay_config())
        messenger = PushMessenger(app=firebase_app, dry_run=dry_run)

    message = PushMessage(title=TEST_TITLE, body=TEST_BODY, token=token)

    logger.info("Sending test notification...")
    try:
        message_id = messenger.send(message)
    except Exception as e:
        logger.error(f"Error sending notification: {e}", exc_info=True)
        return False

    logger.info(f"Successfully sent notification: {message_id}")
    return True


def main(argv=None):
    load_dotenv(PROJECT_ROOT / '.env')
    setup_logging()

    parser = argparse.ArgumentParser(
        description="Send a test push notification via FCM",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument(
        '--token',
        default=os.environ.get('TEST_FCM_TOKEN'),
        help="Device FCM token (default: $TEST_FCM_TOKEN)",
    )
    parser.add_argument(
        '--dry-run',
        action='store_true',
        help="Ask FCM to validate the message without delivering it",
    )
    args = parser.parse_args(argv)

    if not args.token:
        parser.error("an FCM token is required (--token or TEST_FCM_TOKEN)")

    return 0 if send_test_notification(args.token, dry_run=args.dry_run) else 1


if __name__ == '__main__':
    sys.exit(main())
