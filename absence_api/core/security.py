# absence_api/core/security.py
from datetime import datetime, timedelta, timezone

from jose import jwt, JWTError
from passlib.context import CryptContext
from pydantic import EmailStr, TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from absence_api.core.config import settings
from absence_api.core.errors import InvalidToken, ValidationError

pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    try:
        return pwd_context.verify(plain_password, hashed_password)
    except (ValueError, TypeError):
        # hash corrompu ou dans un format inconnu
        return False


def get_password_hash(password: str) -> str:
    return pwd_context.hash(password)


def normalize_email(email: str | None) -> str:
    return (email or "").strip().lower()


_email_adapter = TypeAdapter(EmailStr)


def check_email_format(email: str) -> str:
    try:
        return _email_adapter.validate_python(email)
    except PydanticValidationError:
        raise ValidationError("Veuillez fournir un email valide.")


def create_access_token(data: dict, expires_delta: timedelta | None = None):
    to_encode = data.copy()
    expire = datetime.now(timezone.utc) + (
        expires_delta or timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    )
    to_encode.update({"exp": expire})
    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def decode_access_token(token: str) -> dict:
    """Décode le JWT et renvoie le payload (signature et expiration vérifiées)."""
    try:
        return jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
    except JWTError:
        raise InvalidToken()
