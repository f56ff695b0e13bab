"""JSON error responses for the API."""

from flask import Blueprint, current_app, jsonify
from werkzeug.exceptions import HTTPException

from .errors import AppError

error_handlers_bp = Blueprint("error_handlers", __name__)


def _error_response(message, status_code):
    return jsonify({"success": False, "error": message}), status_code


@error_handlers_bp.app_errorhandler(AppError)
def handle_app_error(error):
    """Map an application error to its status code."""
    message = f"{type(error).__name__}: {error.message}"
    if error.status_code >= 500:
        current_app.logger.error(message)
    else:
        current_app.logger.warning(message)
    return _error_response(error.message, error.status_code)


@error_handlers_bp.app_errorhandler(HTTPException)
def handle_http_exception(error):
    """Unknown routes, wrong methods and other HTTP-level failures."""
    if error.code == 404:
        return _error_response("Page Not Found", 404)
    return _error_response(error.description, error.code)


@error_handlers_bp.app_errorhandler(500)
def handle_500(e):
    """Handles unexpected server errors."""
    current_app.logger.error(f"Internal Server Error: {e}")
    return _error_response("An unexpected error occurred. Please try again.", 500)
