"""
Auth endpoints: registration, login and user lookup.

Register and login both answer 201 with ``{"token": ..., "permissions": [...]}``
inside the envelope. The token goes in ``Authorization: Bearer <token>``.
"""

from flask import Blueprint, request

from hms.controllers.crud_routes import ID_CONVERTER
from hms.core.api_utils import api_response
from hms.core.auth_decorators import require_permission
from hms.core.limiter_config import limiter
from hms.db.session import SessionLocal
from hms.schemas.dtos import LoginRequest, RegisterRequest, UserResponse
from hms.services import factories

auth_bp = Blueprint("auth", __name__, url_prefix="/api/auth")


@auth_bp.route("/register", methods=["POST"])
@limiter.limit("10 per minute;50 per hour")
def register():
    """Create an account with the default role.

    Expected JSON: {"name": str, "email": str, "password": str, ...profile}
    """
    dto = RegisterRequest.from_payload(request.get_json(silent=True))
    db = SessionLocal()
    try:
        result = factories.auth_service(db).register(dto.password, dto.profile())
        return api_response(True, "User registered successfully", result.to_dict(), 201)
    finally:
        db.close()


@auth_bp.route("/login", methods=["POST"])
@limiter.limit("5 per minute;20 per hour")
def login():
    """Email/password login.

    Expected JSON: {"email": str, "password": str}
    """
    dto = LoginRequest.from_payload(request.get_json(silent=True))
    db = SessionLocal()
    try:
        result = factories.auth_service(db).login(dto.email, dto.password)
        return api_response(True, "Login successful", result.to_dict(), 201)
    finally:
        db.close()


@auth_bp.route(f"/<{ID_CONVERTER}:user_id>", methods=["GET"])
@require_permission("users.show")
def get_user(user_id: int):
    db = SessionLocal()
    try:
        user = factories.auth_service(db).get_user(user_id)
        return api_response(
            True, "User retrieved", UserResponse.from_domain(user).to_dict()
        )
    finally:
        db.close()
