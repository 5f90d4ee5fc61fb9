from fastapi import Request
from slowapi import Limiter
from slowapi.util import get_remote_address

_login_rate_limit = "10/minute"


def client_ip(request: Request) -> str:
    """
    Key function for SlowAPI.
    Only the unauthenticated login route is limited, so the client's IP
    address is the only identity available.
    """
    return f"ip:{get_remote_address(request)}"


def login_rate_limit() -> str:
    return _login_rate_limit


def configure_rate_limits(enabled: bool, login_limit: str) -> None:
    global _login_rate_limit
    limiter.enabled = enabled
    _login_rate_limit = login_limit


limiter = Limiter(key_func=client_ip)
