# tenthouse/core/security.py
from datetime import datetime, timedelta, timezone
from typing import Optional

from jose import jwt, JWTError
from passlib.context import CryptContext

from tenthouse.core.config import settings
from tenthouse.core.errors import AuthenticationError, ConfigurationError

# Password hashing
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

def hash_password(password: str) -> str:
    return pwd_context.hash(password)

def verify_password(plain_password: str, password_hash: Optional[str]) -> bool:
    if not password_hash:
        return False
    return pwd_context.verify(plain_password, password_hash)

def authenticate_admin(username: str, password: str) -> str:
    """
    Check the configured admin credentials. Returns the username on success,
    raises AuthenticationError otherwise.
    """
    if not settings.ADMIN_PASSWORD_HASH:
        # no admin configured -> nobody can log in
        raise AuthenticationError("Admin login is not configured")
    if username != settings.ADMIN_USERNAME or not verify_password(password, settings.ADMIN_PASSWORD_HASH):
        raise AuthenticationError("Invalid credentials")
    return username

# JWT helpers
# - "type" claim keeps the door open for refresh tokens later
def create_token(subject: str, expires_delta: timedelta, token_type: str = "access") -> str:
    if not settings.SECRET_KEY:
        raise ConfigurationError("SECRET_KEY is not set")
    now = datetime.now(timezone.utc)
    payload = {
        "sub": subject,
        "type": token_type,
        "iat": int(now.timestamp()),
        "exp": int((now + expires_delta).timestamp()),
    }
    return jwt.encode(payload, settings.SECRET_KEY, algorithm=settings.JWT_ALGO)

def create_admin_token(username: str) -> str:
    return create_token(username, timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES), "access")

def decode_token(token: str, token_type: Optional[str] = None) -> dict:
    """
    Decode and validate a JWT. If token_type is provided, also checks the 'type' claim.
    Raises AuthenticationError on any validation problem.
    """
    if not settings.SECRET_KEY:
        raise ConfigurationError("SECRET_KEY is not set")
    try:
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.JWT_ALGO])
    except JWTError as e:
        raise AuthenticationError("Invalid or expired token") from e

    if token_type is not None and payload.get("type") != token_type:
        raise AuthenticationError("Invalid token type")

    if "sub" not in payload:
        raise AuthenticationError("Invalid token payload")

    return payload
