"""
Flask Example Application
Serves links generated with url_for so the configured rewrites can be inspected.
"""
import logging
import os
from typing import Any, Optional, Sequence

from flask import Flask, jsonify, request, url_for

from error_handler import register_error_handlers
from external_uri import ExternalURI

DEFAULT_ASSETS = ('css/main.css', 'js/app.js', 'img/logo.png')


def create_app(rules: Optional[Sequence[Any]] = None) -> Flask:
    """
    Create the example application.

    Args:
        rules: Rule objects to use instead of app config / environment

    Returns:
        The configured Flask app
    """
    app = Flask(__name__)
    ExternalURI(app, rules=rules)
    register_error_handlers(app)

    @app.route('/', methods=['GET'])
    def index():
        return jsonify({'message': 'Hello World', 'links': url_for('links')})

    @app.route('/links', methods=['GET'])
    def links():
        """
        Return the URLs generated for static assets.
        Extra assets can be requested with ?asset=<filename> (repeatable).
        """
        assets = request.args.getlist('asset') or list(DEFAULT_ASSETS)
        return jsonify({asset: url_for('static', filename=asset) for asset in assets})

    return app


if __name__ == '__main__':
    logging.basicConfig(level=os.environ.get('LOG_LEVEL', 'INFO'))
    app = create_app()
    app.run(host='0.0.0.0', port=int(os.environ.get('PORT', 5000)), debug=False)
