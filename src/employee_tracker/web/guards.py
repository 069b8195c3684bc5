from __future__ import annotations

import logging
from functools import wraps

from flask import Flask, current_app, jsonify

from ..core.exceptions import AuthenticationError, AuthorizationError, StorageError, ValidationError
from ..core.enums import Role
from ..container import Container

logger = logging.getLogger(__name__)


def error_response(message: str, status: int):
    return jsonify({"success": False, "message": message}), status


def list_response(key: str, items: list, empty_message: str):
    payload = {"success": True, key: items}
    if not items:
        payload["empty_message"] = empty_message
    return jsonify(payload)


def make_guards(container: Container):
    def login_required(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            if not container.session.is_authenticated:
                return error_response("Please log in to continue", 401)
            return view(*args, **kwargs)

        return wrapper

    def admin_required(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            user = container.session.current_user
            if user is None:
                return error_response("Please log in to continue", 401)
            if user.role != Role.ADMIN:
                return error_response("You do not have permission", 403)
            return view(*args, **kwargs)

        return wrapper

    return login_required, admin_required


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(ValidationError)
    def on_validation(e: ValidationError):
        return error_response(str(e), 400)

    @app.errorhandler(AuthenticationError)
    def on_authentication(e: AuthenticationError):
        return error_response(str(e), 401)

    @app.errorhandler(AuthorizationError)
    def on_authorization(e: AuthorizationError):
        return error_response(str(e), 403)

    @app.errorhandler(StorageError)
    def on_storage(e: StorageError):
        logger.exception("Storage failure while handling request")
        if current_app.config.get("DEBUG", False):
            return error_response(f"Database error: {e}", 500)
        return error_response("Database error, please try again", 500)
