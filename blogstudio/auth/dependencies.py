from fastapi import Depends, HTTPException
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import JWTError

from .service import AuthService

security = HTTPBearer(auto_error=False)


def _identity(payload: dict) -> dict:
    return {"user_id": int(payload["sub"]), "username": payload["username"]}


async def get_current_user(
    credentials: HTTPAuthorizationCredentials = Depends(security),
) -> dict:
    if credentials is None:
        raise HTTPException(status_code=401, detail="Unauthorized")
    try:
        return _identity(AuthService.decode_token(credentials.credentials))
    except (JWTError, KeyError, ValueError):
        raise HTTPException(status_code=401, detail="Invalid or expired token")


async def get_optional_user(
    credentials: HTTPAuthorizationCredentials = Depends(security),
) -> dict | None:
    if credentials is None:
        return None
    try:
        return _identity(AuthService.decode_token(credentials.credentials))
    except (JWTError, KeyError, ValueError):
        return None
