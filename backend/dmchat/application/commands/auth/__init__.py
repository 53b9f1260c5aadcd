"""Account commands."""

from .register_user import RegisterUserCommand, RegisterUserHandler, AuthResult
from .login_user import LoginUserCommand, LoginUserHandler

__all__ = [
    "RegisterUserCommand",
    "RegisterUserHandler",
    "LoginUserCommand",
    "LoginUserHandler",
    "AuthResult",
]
