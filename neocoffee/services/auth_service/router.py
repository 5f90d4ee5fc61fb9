"""
Admin authentication endpoints.

Tokens are stateless: logout only tells the client to discard its token.
There is no revocation list, so a token issued before logout stays valid
until it expires.
"""
from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from neocoffee.shared.config.database import get_db
from neocoffee.shared.security import AdminIdentity, get_current_admin, limiter, login_rate_limit

from .schemas import AdminSummary, LoginRequest, LoginResponse, MessageResponse, VerifyResponse
from .service import AuthService

router = APIRouter(prefix="/admin", tags=["Authentication"])


@router.post(
    "/login",
    response_model=LoginResponse,
    summary="Authenticate and receive a bearer token",
)
@limiter.limit(login_rate_limit)
async def login(request: Request, payload: LoginRequest, db: AsyncSession = Depends(get_db)):
    return await AuthService.login(db, payload, request.app.state.settings)


@router.post("/logout", response_model=MessageResponse, summary="Client-side logout acknowledgement")
async def logout():
    return MessageResponse(message="Logged out")


@router.get("/verify", response_model=VerifyResponse, summary="Check a bearer token")
async def verify(admin: AdminIdentity = Depends(get_current_admin)):
    return VerifyResponse(admin=AdminSummary(id=admin.id, felhasznalonev=admin.felhasznalonev))
