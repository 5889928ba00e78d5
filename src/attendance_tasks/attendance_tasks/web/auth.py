from __future__ import annotations

from functools import wraps

from flask import g, request

from ..core.enums import Role
from ..users.gate import AuthGate, require_role
from ..users.model import AuthUser


def login_required(gate: AuthGate):
    """Decorator factory: authenticate the bearer token and expose the user as `g.current_user`."""

    def decorator(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            g.current_user = gate.authenticate(request.headers.get("Authorization"))
            return view(*args, **kwargs)

        return wrapper

    return decorator


def role_required(*roles: Role):
    """Must be applied beneath `login_required`."""

    def decorator(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            require_role(current_user(), roles)
            return view(*args, **kwargs)

        return wrapper

    return decorator


def current_user() -> AuthUser:
    return g.current_user
