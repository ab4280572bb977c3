from flask import jsonify
from slugwiki.domain.exceptions import (
    ConflictError,
    DecodeError,
    StoreError,
    ValidationError,
)
from slugwiki.normalizers.article import normalize_article_revision


def _error_response(error, status_code):
    response = jsonify({
        "error": type(error).__name__,
        "message": str(error)
    })
    response.status_code = status_code
    return response


def register_error_handlers(app):
    @app.errorhandler(ValidationError)
    def handle_validation_error(error):
        return _error_response(error, 400)

    @app.errorhandler(DecodeError)
    def handle_decode_error(error):
        return _error_response(error, 400)

    @app.errorhandler(ConflictError)
    def handle_conflict(error):
        response = jsonify({
            "error": "ConflictError",
            "message": str(error),
            "current": normalize_article_revision(error.current),
        })
        response.status_code = 409
        return response

    @app.errorhandler(StoreError)
    def handle_store_error(error):
        app.logger.exception("Store failure: %s", error)
        return _error_response(error, 500)
