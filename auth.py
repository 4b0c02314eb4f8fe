"""
Password hashing and JWT helpers.
"""
import uuid
from datetime import datetime, timedelta
from typing import Optional

from jose import JWTError, jwt
from passlib.context import CryptContext

from config import JWT_SECRET, JWT_ALGORITHM, ACCESS_TOKEN_EXPIRE_MINUTES

# Bcrypt
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def hash_password(password: str) -> str:
     return pwd_context.hash(password)


def verify_password(password: str, hashed: str) -> bool:
     return pwd_context.verify(password, hashed)


def new_session_id() -> str:
     return str(uuid.uuid4())


def create_access_token(
     user_id: int,
     session_id: str,
     is_provider: bool,
     issued_at: datetime,
     expires_minutes: Optional[int] = None,
) -> tuple[str, datetime]:
     """
     Sign a bearer token for a session.

     Returns:
          (token, expires_at) with expires_at as a naive UTC datetime
     """
     expires_at = issued_at + timedelta(minutes=expires_minutes or ACCESS_TOKEN_EXPIRE_MINUTES)
     payload = {
          "id": user_id,
          "jti": session_id,
          "provider": is_provider,
          "exp": int((expires_at - datetime(1970, 1, 1)).total_seconds()),
     }
     return jwt.encode(payload, JWT_SECRET, algorithm=JWT_ALGORITHM), expires_at


def decode_token(token: str) -> Optional[dict]:
     """Return the token payload, or None if the signature or expiry is invalid."""
     try:
          return jwt.decode(token, JWT_SECRET, algorithms=[JWT_ALGORITHM])
     except JWTError:
          return None


def bearer_token(authorization: Optional[str]) -> Optional[str]:
     """Extract the token from an ``Authorization: Bearer <token>`` header value."""
     if not authorization or not authorization.startswith("Bearer "):
          return None
     return authorization.split(" ", 1)[1].strip() or None
