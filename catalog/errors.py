from flask import jsonify, render_template
from werkzeug.exceptions import HTTPException
import logging

from utils.exceptions import AuthorizationError, NotFoundError, StoreFault

logger = logging.getLogger(__name__)


def error_page(message: str, status: int):
    return render_template("error.html", title="Error", message=message, status=status), status


def register_error_handlers(app):
    # 403: bad admin password, answered as JSON
    @app.errorhandler(AuthorizationError)
    def handle_authorization_error(err: AuthorizationError):
        return jsonify({"error": err.message}), err.status_code

    # 404: target id absent
    @app.errorhandler(NotFoundError)
    def handle_not_found(err: NotFoundError):
        return error_page(err.message, err.status_code)

    # 500: connectivity or constraint failure reported by the store
    @app.errorhandler(StoreFault)
    def handle_store_fault(err: StoreFault):
        logger.exception("Store fault on %s", err.entity, exc_info=err)
        return error_page(err.message, err.status_code)

    # Werkzeug HTTPExceptions map to their status codes
    @app.errorhandler(HTTPException)
    def handle_http_exception(err: HTTPException):
        return error_page(err.description, err.code or 400)

    # 500 Internal Error (catch-all)
    @app.errorhandler(Exception)
    def internal_error(err: Exception):
        logger.exception("Unhandled exception", exc_info=err)
        return error_page("Something went wrong", 500)
