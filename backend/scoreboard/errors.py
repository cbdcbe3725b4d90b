"""Error taxonomy shared by the services and the HTTP layer."""

from flask import jsonify


class ScoreboardError(Exception):
    status_code = 500
    default_message = 'Internal error'

    def __init__(self, message=None):
        super().__init__(message or self.default_message)
        self.message = message or self.default_message


class NotFound(ScoreboardError):
    status_code = 404
    default_message = 'Not found'


class Forbidden(ScoreboardError):
    status_code = 403
    default_message = 'Forbidden'


class ValidationError(ScoreboardError):
    status_code = 400
    default_message = 'Invalid input'


class Transient(ScoreboardError):
    """Persistence is temporarily unavailable; the caller may retry."""
    status_code = 503
    default_message = 'Storage temporarily unavailable'


def register_error_handlers(app):
    @app.errorhandler(ScoreboardError)
    def handle_scoreboard_error(exc):
        if isinstance(exc, Transient):
            app.logger.warning(f"[request-transient] {exc.message}")
        return jsonify({'success': False, 'message': exc.message}), exc.status_code
