from flask import jsonify
from werkzeug.exceptions import HTTPException
from marshmallow import ValidationError
from sqlalchemy.exc import IntegrityError
import logging

from models.schemas.common import flatten_messages, stringify_keys
from utils.exceptions import AppError, InternalFailure

logger = logging.getLogger(__name__)

HTTP_CODES = {
    400: "BAD_REQUEST",
    401: "UNAUTHENTICATED",
    403: "FORBIDDEN",
    404: "NOT_FOUND",
    405: "METHOD_NOT_ALLOWED",
    409: "CONFLICT",
    415: "UNSUPPORTED_MEDIA_TYPE",
    422: "VALIDATION_ERROR",
}


def error_response(error: str, message: str, status: int, details: dict | None = None, **extra):
    payload = {"error": error, "message": message, "status": status}
    if details:
        payload["details"] = details
    payload.update(extra)
    return jsonify(payload), status


def register_error_handlers(app):
    # Domain errors carry their own status and public message.
    # exc.reason is internal and only goes to the log.
    @app.errorhandler(AppError)
    def handle_app_error(err: AppError):
        if err.status >= 500:
            logger.error("%s: %s", err.__class__.__name__, err.reason or err.message)
        elif err.reason:
            logger.info("%s (%s)", err.__class__.__name__, err.reason)
        return error_response(err.code, err.message, err.status)

    # Marshmallow validation errors: every violated field, not just the first
    @app.errorhandler(ValidationError)
    def handle_validation_error(err: ValidationError):
        messages = err.normalized_messages()
        return error_response(
            "VALIDATION_ERROR",
            "Invalid input",
            400,
            details=stringify_keys(messages),
            fields=flatten_messages(messages),
        )

    # Integrity errors: the storage-level constraints rejected the write
    @app.errorhandler(IntegrityError)
    def handle_integrity_error(err: IntegrityError):
        message = str(getattr(err, "orig", err))
        lower_msg = message.lower()
        logger.warning("integrity error: %s", message)
        if "unique constraint" in lower_msg or "unique violation" in lower_msg or "duplicate key" in lower_msg:
            return error_response("CONFLICT", "Unique constraint violated.", 409)
        if "foreign key" in lower_msg:
            return error_response("CONFLICT", "Resource is referenced by other records.", 409)
        return error_response("BAD_REQUEST", "Constraint failed.", 400)

    # Werkzeug HTTPExceptions map to their status codes
    @app.errorhandler(HTTPException)
    def handle_http_exception(err: HTTPException):
        status = err.code or 400
        if status >= 500:
            logger.error("HTTP %s: %s", status, err.description)
            failure = InternalFailure()
            return error_response(failure.code, failure.message, status)
        return error_response(HTTP_CODES.get(status, "BAD_REQUEST"), err.description, status)

    # 500 Internal Error (catch-all): full detail in the log, nothing in the body
    @app.errorhandler(Exception)
    def internal_error(err: Exception):
        logger.exception("Unhandled exception", exc_info=err)
        failure = InternalFailure()
        return error_response(failure.code, failure.message, failure.status)
