from __future__ import annotations
import logging
from functools import wraps
from flask import request, current_app
from utils.exceptions import AuthorizationError

logger = logging.getLogger(__name__)


def submitted_password():
    """`password` from a form body, falling back to a JSON body."""
    if "password" in request.form:
        return request.form.get("password")
    payload = request.get_json(silent=True) or {}
    return payload.get("password")


def admin_password_required(fn):
    """
    Let the request through only if the configured auth policy accepts the
    submitted password. Denial raises AuthorizationError (403) before the view
    runs, so nothing is written.
    """
    @wraps(fn)
    def wrapper(*args, **kwargs):
        policy = current_app.extensions["auth_policy"]
        if not policy.authorize(submitted_password()):
            logger.warning("Rejected %s %s: bad admin password", request.method, request.path)
            raise AuthorizationError("Incorrect password")
        return fn(*args, **kwargs)

    return wrapper
