from datetime import tzinfo
from typing import List, Optional

from flask import Flask

from .handlers import WebhookHandler, build_handlers


def create_app(handlers: Optional[List[WebhookHandler]] = None, timezone: Optional[tzinfo] = None):
    app = Flask(__name__)
    if handlers is None:
        handlers = build_handlers(timezone)

    @app.route('/health', methods=['GET'])
    def health():
        return {'status': 'ok', 'service': 'circonus-webhook-proxy'}, 200

    for handler in handlers:
        handler.register(app)

    return app
