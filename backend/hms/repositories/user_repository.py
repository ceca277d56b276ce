from typing import List, Optional

from sqlalchemy import select

from hms.db.base import Permission, Role, role_permissions, user_roles
from hms.db.base import User as DbUser
from hms.db.seed import ensure_role
from hms.domain.entities import User as DomainUser
from hms.domain.interfaces import IUserRepository

from .base_repository import SqlAlchemyRepository


class UserRepository(SqlAlchemyRepository, IUserRepository):
    """Repository for User persistence; maps role rows to role names."""

    model = DbUser
    entity = DomainUser

    def get_by_email(self, email: str) -> Optional[DomainUser]:
        row = self.db.execute(
            select(DbUser).where(DbUser.email == email)
        ).scalar_one_or_none()
        return self._to_domain(row) if row else None

    def get_password_hash(self, email: str) -> Optional[str]:
        return self.db.execute(
            select(DbUser.password_hash).where(DbUser.email == email)
        ).scalar_one_or_none()

    def create_with_role(self, user: DomainUser, role_name: str) -> DomainUser:
        with self._atomic(f"Email {user.email} is already registered"):
            row = DbUser(**self._to_columns(user))
            row.roles.append(ensure_role(self.db, role_name))
            self.db.add(row)
            self.db.flush()
        self.db.refresh(row)
        return self._to_domain(row)

    def get_permissions(self, user_id: int) -> List[str]:
        stmt = (
            select(Permission.route_name)
            .join(role_permissions, role_permissions.c.permission_id == Permission.id)
            .join(Role, Role.id == role_permissions.c.role_id)
            .join(user_roles, user_roles.c.role_id == Role.id)
            .where(user_roles.c.user_id == user_id)
            .distinct()
            .order_by(Permission.route_name)
        )
        return list(self.db.execute(stmt).scalars())

    def _conflict_message(self, entity) -> str:
        return f"Email {entity.email} is already registered"

    def _to_domain(self, row) -> DomainUser:
        user = super()._to_domain(row)
        user.roles = sorted(role.name for role in row.roles)
        return user
