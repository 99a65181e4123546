"""Auth settings: token signing, session cookie, and login throttling."""

from pydantic import Field
from pydantic_settings import BaseSettings


class AuthSettings(BaseSettings):
    model_config = {"env_prefix": "AUTH_"}

    # HMAC secret for session tokens -- required, no default.
    # The application fails to start if AUTH_JWT_SECRET is not set.
    jwt_secret: str = Field(min_length=32)

    # Cookie Secure flag -- True in production, False for local dev (HTTP)
    cookie_secure: bool = False

    # "bcrypt" in production; "simple" is for tests only
    password_hasher: str = "bcrypt"

    # Per-client budget for register and login, stricter than the API-wide limit
    rate_limit_requests: int = Field(default=10, ge=1)
    rate_limit_window_seconds: float = Field(default=60.0, gt=0)
