"""
Authentication helpers for this application.

Clients authenticate with a JWT bearer token issued by ``/api/auth/login``
or ``/api/auth/register``. Flask-Login's request loader turns the token into
an :class:`AuthenticatedUser` whose permission set comes straight from the
token's ``permissions`` claim; no database lookup happens per request.

Protected routes declare the permission route name they require::

    @buildings_bp.route("/<int:building_id>", methods=["DELETE"])
    @require_permission("buildings.destroy")
    def delete_building(building_id):
        ...

Every name passed to :func:`require_permission` is recorded in
``PERMISSION_REGISTRY`` so the seeder can create matching Permission rows.
"""

from functools import wraps
from typing import Iterable, Optional, Set

from flask import current_app
from flask_login import UserMixin, current_user

from hms.core.exceptions import AuthenticationError, PermissionDeniedError
from hms.core.security import get_user_from_token

PERMISSION_REGISTRY: Set[str] = set()


class AuthenticatedUser(UserMixin):
    """Request-scoped user built from verified token claims."""

    def __init__(
        self, user_id: int, name: str, email: str, permissions: Iterable[str]
    ) -> None:
        self.id = user_id
        self.name = name
        self.email = email
        self.permissions = frozenset(permissions)

    def has_permission(self, route_name: str) -> bool:
        return route_name in self.permissions


def load_user_from_request(request) -> Optional[AuthenticatedUser]:
    """Flask-Login request loader: resolve ``Authorization: Bearer <token>``."""
    auth_header = request.headers.get("Authorization", "")
    if not auth_header.startswith("Bearer "):
        return None

    token = auth_header.split(" ", 1)[1].strip()
    user_data = get_user_from_token(token)
    if not user_data:
        return None

    return AuthenticatedUser(
        user_id=user_data["user_id"],
        name=user_data["name"],
        email=user_data["email"],
        permissions=user_data["permissions"],
    )


def require_permission(route_name: str):
    """Decorator gating a route on a permission route name.

    Raises:
        AuthenticationError: no valid bearer token (401)
        PermissionDeniedError: token lacks ``route_name`` (403)
    """
    PERMISSION_REGISTRY.add(route_name)

    def decorator(f):
        @wraps(f)
        def decorated_function(*args, **kwargs):
            if current_app.config.get("LOGIN_DISABLED", False):
                return f(*args, **kwargs)

            if not current_user or not current_user.is_authenticated:
                raise AuthenticationError("Authentication required.")

            if not current_user.has_permission(route_name):
                raise PermissionDeniedError(
                    f"Missing permission '{route_name}' for this resource."
                )

            return f(*args, **kwargs)

        decorated_function.permission_name = route_name  # type: ignore[attr-defined]
        return decorated_function

    return decorator
