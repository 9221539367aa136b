#!/usr/bin/env python3
"""
Flask app exposing the notification handlers over HTTP
"""

from pathlib import Path

from dotenv import load_dotenv
from flask import Flask, jsonify

from .lib.app_config import get_notification_settings
from .lib.logging_config import setup_logging
from .notification_dispatcher import METHOD_NOT_ALLOWED_ERROR, error_response
from .routes.notification_routes import bp as notifications_bp
from .services.messaging_service import MessagingClient
from .services.payload_service import utc_now_iso

# Get the directory where this file is located
BASE_DIR = Path(__file__).parent
PROJECT_ROOT = BASE_DIR.parent

# Load environment variables from .env file
load_dotenv(PROJECT_ROOT / '.env')

setup_logging()


def create_app(messaging_client=None):
    """
    Create the Flask app.

    Args:
        messaging_client: Object with send(message) -> message_id. Defaults
                          to a MessagingClient backed by Firebase Admin.
    """
    app = Flask(__name__)
    app.extensions['messaging_client'] = messaging_client or MessagingClient()

    @app.route('/health', methods=['GET'])
    def health_check():
        """
        Health check endpoint. Reports the messaging configuration without
        sending anything, so it is always 200.
        """
        client = app.extensions['messaging_client']
        settings = get_notification_settings()
        return jsonify({
            'status': 'healthy',
            'timestamp': utc_now_iso(),
            'services': {
                'messaging': {
                    'status': 'healthy',
                    'topic': settings.topic,
                    'dry_run': bool(getattr(client, 'dry_run', False))
                }
            }
        }), 200

    @app.errorhandler(404)
    def page_not_found(e):
        return jsonify({'success': False, 'error': 'Not found', 'timestamp': utc_now_iso()}), 404

    @app.errorhandler(405)
    def method_not_allowed(e):
        body, status = error_response(METHOD_NOT_ALLOWED_ERROR, 405)
        return jsonify(body), status

    app.register_blueprint(notifications_bp)
    return app


app = create_app()
