from typing import Optional

from fastapi import Depends, Request
from fastapi.security import OAuth2PasswordBearer
from pydantic import BaseModel

from neocoffee.shared.errors import AuthenticationError

from .jwt_handler import verify_access_token

# Defines the expected header format (Bearer <token>)
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/admin/login", auto_error=False)


class AdminIdentity(BaseModel):
    id: str
    felhasznalonev: str


def decode_admin_token(request: Request, token: str) -> Optional[AdminIdentity]:
    settings = request.app.state.settings
    payload = verify_access_token(token, settings.jwt_secret_key, settings.jwt_algorithm)
    if payload is None:
        return None

    admin_id = payload.get("sub")
    username = payload.get("felhasznalonev")
    if admin_id is None or username is None:
        return None
    return AdminIdentity(id=admin_id, felhasznalonev=username)


async def get_current_admin(
    request: Request, token: Optional[str] = Depends(oauth2_scheme)
) -> AdminIdentity:
    """Dependency guarding admin routes; resolves the bearer token to an admin identity."""
    if not token:
        raise AuthenticationError("Missing or invalid token")

    admin = decode_admin_token(request, token)
    if admin is None:
        raise AuthenticationError("Invalid or expired token")

    return admin
