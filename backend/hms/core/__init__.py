# Core package initialization
# Configuration, security, logging and cross-cutting HTTP helpers

from . import auth_decorators, config, exceptions, security

__all__ = [
    "auth_decorators",
    "config",
    "exceptions",
    "security",
]
