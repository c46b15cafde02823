from .dto import LoginIn, RegisterIn, RegisterOut, UserOut
from .service import AuthService

__all__ = ["AuthService", "LoginIn", "RegisterIn", "RegisterOut", "UserOut"]
