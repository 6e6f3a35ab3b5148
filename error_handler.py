"""
Error Handler module.
Turns rewrite configuration errors into error responses.
"""
import logging

from flask import Flask, Response, jsonify

from errors import ExternalURIError

logger = logging.getLogger(__name__)


def handle_error(status_code: int, message: str = '') -> Response:
    """
    Create an error response with the given status code.

    Args:
        status_code: HTTP status code
        message: Error message returned in the JSON payload

    Returns:
        Flask Response with the status code and a JSON error payload
    """
    response = jsonify({'error': message})
    response.status_code = status_code
    return response


def handle_external_uri_error(error: ExternalURIError) -> Response:
    """Log a rewrite configuration error and answer with a 500."""
    logger.error("URL rewriting failed: %s", error)
    return handle_error(500, str(error))


def register_error_handlers(app: Flask) -> None:
    """Register the rewrite error handlers on the app."""
    app.register_error_handler(ExternalURIError, handle_external_uri_error)
