from flask import jsonify, current_app
from sqlalchemy.exc import SQLAlchemyError
from werkzeug.exceptions import HTTPException

from .extensions import db
from .services.improvement import PlanConflictError


class ValidationError(Exception):
    """Request payload failed validation; ``errors`` maps field -> messages."""

    def __init__(self, errors):
        super().__init__("validation failed")
        self.errors = errors


def _error(status, code, message, **extra):
    body = {"error": code, "message": message}
    body.update(extra)
    return jsonify(body), status


def register_error_handlers(app):
    @app.errorhandler(ValidationError)
    def handle_validation(e):
        return _error(400, "validation_error", "Invalid request", errors=e.errors)

    @app.errorhandler(PlanConflictError)
    def handle_conflict(e):
        current_app.logger.warning('%s', e)
        return _error(409, "conflict", str(e))

    @app.errorhandler(SQLAlchemyError)
    def handle_db_error(e):
        db.session.rollback()
        current_app.logger.exception('Database error')
        return _error(500, "server_error", "Server error")

    @app.errorhandler(HTTPException)
    def handle_http(e):
        code = (e.name or "error").lower().replace(" ", "_")
        return _error(e.code, code, e.description)
