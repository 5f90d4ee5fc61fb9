from datetime import timedelta

import structlog
from passlib.context import CryptContext
from sqlalchemy.ext.asyncio import AsyncSession

from neocoffee.shared.config.database import new_id, utcnow
from neocoffee.shared.config.settings import Settings
from neocoffee.shared.errors import AuthenticationError
from neocoffee.shared.observability import neocoffee_login_attempts_total
from neocoffee.shared.security.jwt_handler import create_access_token

from .models import Admin
from .repository import AdminRepository
from .schemas import AdminResponse, LoginRequest, LoginResponse

logger = structlog.get_logger(__name__)

_pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

# Same message for unknown user and wrong password
INVALID_CREDENTIALS = "Invalid username or password"


class AuthService:

    @staticmethod
    def hash_password(password: str) -> str:
        return _pwd_context.hash(password)

    @staticmethod
    def verify_password(plain: str, hashed: str) -> bool:
        return _pwd_context.verify(plain, hashed)

    @staticmethod
    async def ensure_admin(db: AsyncSession, username: str, password: str) -> Admin:
        """Creates the admin, or re-hashes the password of an existing one."""
        admin = await AdminRepository.get_by_username(db, username)
        if admin is None:
            admin = Admin(
                id=new_id(),
                felhasznalonev=username,
                jelszo_hash=AuthService.hash_password(password),
                letrehozva=utcnow(),
            )
            logger.info("admin_created", felhasznalonev=username)
        else:
            admin.jelszo_hash = AuthService.hash_password(password)
            logger.info("admin_password_updated", felhasznalonev=username)
        return await AdminRepository.save(db, admin)

    @staticmethod
    async def login(db: AsyncSession, data: LoginRequest, settings: Settings) -> LoginResponse:
        admin = await AdminRepository.get_by_username(db, data.felhasznalonev)
        if admin is None:
            # Keep response timing close to the wrong-password path
            _pwd_context.dummy_verify()
            valid = False
        else:
            valid = AuthService.verify_password(data.jelszo, admin.jelszo_hash)

        if not valid:
            neocoffee_login_attempts_total.labels(outcome="failed").inc()
            logger.warning("admin_login_failed", felhasznalonev=data.felhasznalonev)
            raise AuthenticationError(INVALID_CREDENTIALS)

        token = create_access_token(
            data={"sub": admin.id, "felhasznalonev": admin.felhasznalonev},
            secret_key=settings.jwt_secret_key,
            expires_delta=timedelta(minutes=settings.jwt_expire_minutes),
            algorithm=settings.jwt_algorithm,
        )
        neocoffee_login_attempts_total.labels(outcome="success").inc()
        logger.info("admin_logged_in", admin_id=admin.id)
        return LoginResponse(token=token, admin=AdminResponse.model_validate(admin))
