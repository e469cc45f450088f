from slowapi import Limiter
from slowapi.util import get_remote_address
from core.config import settings

# Sessions are not real, so the client address is the only stable key.
limiter = Limiter(
    key_func=get_remote_address,
    enabled=settings.ENV != "testing",
)

# Limits for the credential endpoints
REGISTER_LIMIT = "5/minute"
LOGIN_LIMIT = "10/minute"
