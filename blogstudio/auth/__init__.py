from .models import UserCreate, UserLogin, Token, UserResponse
from .service import AuthService
from .dependencies import get_current_user, get_optional_user

__all__ = [
    "UserCreate", "UserLogin", "Token", "UserResponse",
    "AuthService", "get_current_user", "get_optional_user",
]
