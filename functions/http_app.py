"""
Cloud Functions entry point for the Flask app
Uses functions-framework to run the notification routes as a single HTTP
function (deploy with --entry-point=gitaconnect).
"""

import sys
from pathlib import Path

# Add parent directory to path
PROJECT_ROOT = Path(__file__).parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

import functions_framework

from gita_connect.app import app


@functions_framework.http
def gitaconnect(request):
    """Dispatch the incoming request through the Flask app's routing"""
    with app.request_context(request.environ):
        return app.full_dispatch_request()
