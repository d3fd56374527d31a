from __future__ import annotations

import logging
from functools import wraps
from typing import Any, Mapping, Optional

from flask import current_app, g, request, session

from ..core.exceptions import AuthenticationError, ValidationError
from ..core.policy import Principal

logger = logging.getLogger(__name__)

EXTENSION_KEY = "staffdesk"


def login_required(view):
    """Resolve the session user into ``g.principal`` or answer 401.

    The user row is re-read on every request so role or company changes take
    effect immediately.
    """

    @wraps(view)
    def wrapper(*args, **kwargs):
        container = current_app.extensions[EXTENSION_KEY]
        try:
            g.principal = container.auth_service.load_principal(session.get("user_id"))
        except AuthenticationError:
            session.clear()
            raise
        return view(*args, **kwargs)

    return wrapper


def current_principal() -> Principal:
    principal = g.get("principal")
    if principal is None:
        raise AuthenticationError("Unauthorized")
    return principal


def json_body() -> Optional[Mapping[str, Any]]:
    """Request JSON; a body that is not valid JSON counts as missing."""
    return request.get_json(silent=True)


def query_int(name: str) -> Optional[int]:
    raw = request.args.get(name)
    if raw is None or raw == "":
        return None
    try:
        return int(raw)
    except ValueError:
        raise ValidationError("Validation failed", [{"field": name, "message": "Expected an integer"}])
