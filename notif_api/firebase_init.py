#!/usr/bin/env python3
"""
One-time Firebase Admin initialization
"""

import logging

import firebase_admin
from firebase_admin import credentials

from .lib.app_config import RelayConfig

# Create logger for this module
logger = logging.getLogger(__name__)


def initialize_firebase_admin(config: RelayConfig) -> firebase_admin.App:
    """
    Initialize the default Firebase Admin app, or return it if it already exists.

    Errors (missing or invalid service-account file, bad credentials) are not
    caught: without credentials the relay cannot serve any request.
    """
    try:
        app = firebase_admin.get_app()
        logger.debug("Firebase Admin already initialized, reusing default app")
        return app
    except ValueError:
        pass

    if config.credentials_path:
        credential = credentials.Certificate(config.credentials_path)
        logger.info(f"Initializing Firebase Admin with service account {config.credentials_path}")
    else:
        credential = credentials.ApplicationDefault()
        logger.info("Initializing Firebase Admin with application default credentials")

    options = {'projectId': config.project_id} if config.project_id else None
    return firebase_admin.initialize_app(credential, options)
