import secrets
from datetime import datetime, timedelta, timezone
from typing import Optional, Tuple
from jose import ExpiredSignatureError, JWTError, jwt
from passlib.context import CryptContext
from app.core.config import settings

# Sign-in link tokens are random, so a fast salted hash is enough at rest
token_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")


def generate_signin_token() -> str:
    return secrets.token_urlsafe(32)


def get_token_hash(token: str) -> str:
    return token_context.hash(token)


def verify_signin_token(plain_token: str, hashed_token: str) -> bool:
    try:
        return token_context.verify(plain_token, hashed_token)
    except ValueError:
        return False


def as_utc(value: datetime) -> datetime:
    # SQLite drops tzinfo on the way back out
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def create_access_token(data: dict, expires_delta: Optional[timedelta] = None):
    to_encode = data.copy()
    if expires_delta:
        expire = datetime.now(timezone.utc) + expires_delta
    else:
        expire = datetime.now(timezone.utc) + timedelta(
            minutes=settings.access_token_expire_minutes
        )
    to_encode.update({"exp": expire})
    encoded_jwt = jwt.encode(to_encode, settings.secret_key, algorithm=settings.algorithm)
    return encoded_jwt


def verify_token(token: str) -> Tuple[Optional[dict], Optional[str]]:
    """Decode an access token, returning ``(payload, error)``.

    ``error`` is ``"expired"`` or ``"invalid"`` when decoding fails.
    """
    try:
        payload = jwt.decode(token, settings.secret_key, algorithms=[settings.algorithm])
        return payload, None
    except ExpiredSignatureError:
        return None, "expired"
    except JWTError:
        return None, "invalid"
