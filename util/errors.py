import logging

from flask import jsonify
from werkzeug.exceptions import HTTPException

from database_init import db

logger = logging.getLogger(__name__)


class CampusTraderError(Exception):
    """Base class cho mọi lỗi nghiệp vụ."""

    status_code = 400

    def __init__(self, message=None):
        super().__init__(message)
        self.message = message

    def to_dict(self):
        return {"success": False, "message": self.message}


class FieldValidationError(CampusTraderError):
    """Lỗi theo từng field, người dùng có thể sửa rồi gửi lại."""

    def __init__(self, field_errors):
        super().__init__("Invalid form data")
        self.field_errors = dict(field_errors)

    def to_dict(self):
        return {"success": False, "fieldErrors": self.field_errors}


class AuthorizationError(CampusTraderError):
    status_code = 403


class InvalidRequestError(CampusTraderError):
    """Request thiếu định danh bắt buộc (intent, orderId, status...)."""


class InvalidTransitionError(CampusTraderError):
    status_code = 409


class ResourceNotFoundError(CampusTraderError):
    status_code = 404


def register_error_handlers(app):
    @app.errorhandler(CampusTraderError)
    def handle_campus_trader_error(error):
        db.session.rollback()
        if error.status_code >= 403:
            logger.warning("%s: %s", type(error).__name__, error.message)
        return jsonify(error.to_dict()), error.status_code

    @app.errorhandler(HTTPException)
    def handle_http_error(error):
        return (
            jsonify({"success": False, "message": error.description}),
            error.code,
        )

    @app.errorhandler(500)
    def internal_server_error(error):
        db.session.rollback()
        logger.error(
            "Unhandled error while processing request: %s",
            getattr(error, "original_exception", error),
        )
        return jsonify({"success": False, "message": "Internal Server Error"}), 500
