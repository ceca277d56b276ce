"""
Registration and login.

Both operations answer with a signed bearer token whose ``permissions``
claim is the union of the route names granted to the user's roles.
"""

import logging
from typing import Any, Dict

from hms.core.config import DEFAULT_USER_ROLE
from hms.core.exceptions import NotFoundError, ValidationError
from hms.core.security import create_user_token, hash_password, verify_password
from hms.domain.entities import User as DomainUser
from hms.domain.interfaces import IUserRepository
from hms.schemas.dtos import AuthTokenResponse, build_entity

logger = logging.getLogger(__name__)


class AuthService:
    def __init__(self, repo: IUserRepository, default_role: str = DEFAULT_USER_ROLE) -> None:
        self.repo = repo
        self.default_role = default_role

    def register(self, password: str, profile: Dict[str, Any]) -> AuthTokenResponse:
        """Create a user with the default role and issue a token.

        Raises:
            ValidationError: email already registered or profile invalid
        """
        email = profile.get("email", "")
        if self.repo.get_by_email(email) is not None:
            logger.warning(
                "Registration with existing email", extra={"context": {"email": email}}
            )
            raise ValidationError(f"Email {email} is already registered")

        user = build_entity(
            DomainUser, password_hash=hash_password(password), **profile
        )
        created = self.repo.create_with_role(user, self.default_role)
        logger.info(
            "User registered",
            extra={"context": {"user_id": created.id, "role": self.default_role}},
        )
        return self._issue_token(created)

    def login(self, email: str, password: str) -> AuthTokenResponse:
        """Verify credentials and issue a token.

        Raises:
            NotFoundError: no user with that email
            ValidationError: wrong password
        """
        user = self.repo.get_by_email(email)
        if user is None:
            logger.warning("Login for unknown email", extra={"context": {"email": email}})
            raise NotFoundError(f"User with email {email} not found")

        if not verify_password(password, self.repo.get_password_hash(email)):
            logger.warning(
                "Login with wrong password", extra={"context": {"user_id": user.id}}
            )
            raise ValidationError("Invalid email or password")

        logger.info("User logged in", extra={"context": {"user_id": user.id}})
        return self._issue_token(user)

    def get_user(self, user_id: int) -> DomainUser:
        user = self.repo.get_by_id(user_id)
        if user is None:
            raise NotFoundError(f"User {user_id} not found")
        return user

    def _issue_token(self, user: DomainUser) -> AuthTokenResponse:
        permissions = self.repo.get_permissions(user.id)
        token = create_user_token(user.id, user.name, user.email, permissions)
        return AuthTokenResponse(token=token, permissions=permissions)
