from .jwt_handler import create_access_token, verify_access_token
from .dependencies import AdminIdentity, get_current_admin
from .rate_limiter import configure_rate_limits, limiter, login_rate_limit

__all__ = [
    "create_access_token",
    "verify_access_token",
    "AdminIdentity",
    "get_current_admin",
    "configure_rate_limits",
    "limiter",
    "login_rate_limit",
]
