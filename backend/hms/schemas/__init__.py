"""
Schemas package - Data Transfer Objects and validation.

Request DTOs define the API input contracts; ``to_response`` renders domain
entities for the JSON envelope.
"""

from .dtos import (
    AuthTokenResponse,
    LoginRequest,
    RegisterRequest,
    RequestDTO,
    UserResponse,
    build_entity,
    to_response,
)

__all__ = [
    "AuthTokenResponse",
    "LoginRequest",
    "RegisterRequest",
    "RequestDTO",
    "UserResponse",
    "build_entity",
    "to_response",
]
