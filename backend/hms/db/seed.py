"""
Database seeding and initialization functions.

Permissions are not hand-maintained: every route guarded with
``require_permission`` registers its route name, and :func:`seed_permissions`
mirrors that registry into the ``permissions`` table and grants all of them
to the admin role. All functions here are idempotent.
"""

import logging
from typing import Optional

from sqlalchemy import select

from hms.core.config import ADMIN_ROLE
from hms.db.base import Permission, Role, User

logger = logging.getLogger(__name__)


def _registered_route_names():
    # Importing the controllers populates the registry as a side effect
    from hms import controllers  # noqa: F401
    from hms.core.auth_decorators import PERMISSION_REGISTRY

    return sorted(PERMISSION_REGISTRY)


def ensure_role(db, name: str) -> Role:
    """Return the role called ``name``, creating it when missing (no commit)."""
    role: Optional[Role] = db.execute(
        select(Role).where(Role.name == name)
    ).scalar_one_or_none()
    if role is None:
        role = Role(name=name)
        db.add(role)
        db.flush()
        logger.info("Role created", extra={"context": {"role": name}})
    return role


def seed_permissions(db) -> int:
    """Create missing Permission rows and attach every permission to the admin role.

    Returns the number of permissions created.
    """
    existing = {p.route_name: p for p in db.execute(select(Permission)).scalars()}
    created = 0
    for route_name in _registered_route_names():
        if route_name not in existing:
            permission = Permission(route_name=route_name)
            db.add(permission)
            existing[route_name] = permission
            created += 1

    admin = ensure_role(db, ADMIN_ROLE)
    granted = {p.route_name for p in admin.permissions}
    for route_name, permission in existing.items():
        if route_name not in granted:
            admin.permissions.append(permission)

    db.commit()
    logger.info(
        "Permissions seeded",
        extra={"context": {"created": created, "total": len(existing)}},
    )
    return created


def ensure_admin(db, email: str) -> bool:
    """Grant the admin role to the user with ``email``.

    Returns False when no such user exists.
    """
    user: Optional[User] = db.execute(
        select(User).where(User.email == email)
    ).scalar_one_or_none()
    if user is None:
        logger.warning("Admin promotion skipped", extra={"context": {"email": email}})
        return False

    admin = ensure_role(db, ADMIN_ROLE)
    if admin not in user.roles:
        user.roles.append(admin)
    db.commit()
    logger.info(
        "Admin role granted",
        extra={"context": {"user_id": user.id, "email": email}},
    )
    return True
