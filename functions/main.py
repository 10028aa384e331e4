"""
Cloud Functions entry point for notif-api
Uses functions-framework to serve the relay's Flask app as an HTTP function
"""

import sys
from pathlib import Path

# Deployed from the project root; make notif_api importable without installation
PROJECT_ROOT = Path(__file__).parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from dotenv import load_dotenv

# Local development reads FIREBASE_CREDENTIALS etc. from .env
load_dotenv(PROJECT_ROOT / '.env')

from notif_api.lib.logging_config import setup_logging

setup_logging()

from notif_api.app import create_app

# Firebase Admin is initialized here, once per instance. A credential error
# aborts the import so the runtime reports the function as failed to start.
app = create_app()

# functions-framework detects the Flask app and serves it on $PORT.
# Deploy with: gcloud functions deploy send-notification --entry-point send_notification ...
send_notification = app
