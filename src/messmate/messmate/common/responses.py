from __future__ import annotations

from flask import jsonify, request

from ..core.exceptions import (
    AlreadyExistsError,
    AuthenticationError,
    AuthorizationError,
    DomainError,
    NotFoundError,
)


def ok(status: int = 200, **payload):
    return jsonify({"success": True, **payload}), status


def fail(message: str, status: int = 400):
    return jsonify({"success": False, "message": message}), status


def domain_error(e: DomainError):
    """Map a domain exception to a JSON failure with its HTTP status."""

    if isinstance(e, AlreadyExistsError):
        return fail(str(e), 409)
    if isinstance(e, NotFoundError):
        return fail(str(e), 404)
    if isinstance(e, AuthenticationError):
        return fail(str(e), 401)
    if isinstance(e, AuthorizationError):
        return fail(str(e), 403)
    return fail(str(e), 400)


def json_body() -> dict:
    """Request JSON object; anything else (missing, malformed, a list) reads as empty."""

    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}
