"""
Authentication and Authorization utilities.
"""

import uuid
from functools import lru_cache
from datetime import datetime, timedelta, timezone
from typing import Optional
from jose import JWTError, jwt
import bcrypt
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.database import get_db
from app.models.admin import Admin


# HTTP Bearer token security; missing header is reported as 401 below
security = HTTPBearer(auto_error=False)


def verify_password(plain_password: str, hashed_password_in_db: str) -> bool:
    """
    Verify plain password against stored bcrypt hash in database.

    Args:
        plain_password: Plain text password from the login form
        hashed_password_in_db: Bcrypt hash stored in database

    Returns:
        True if password matches hash, False otherwise
    """
    try:
        return bcrypt.checkpw(
            plain_password.encode('utf-8'),
            hashed_password_in_db.encode('utf-8')
        )
    except ValueError:
        # Stored value is not a bcrypt hash
        return False


def get_password_hash(plain_password: str) -> str:
    """
    Hash a plain password using Bcrypt.

    The salt is generated per call and stored inside the hash,
    format: $2b$[cost]$[22 character salt][31 character hash]

    Args:
        plain_password: Plain text password to hash

    Returns:
        Bcrypt hash of the password
    """
    salt = bcrypt.gensalt(rounds=12)
    hashed = bcrypt.hashpw(plain_password.encode('utf-8'), salt)
    return hashed.decode('utf-8')


def create_access_token(data: dict, expires_delta: Optional[timedelta] = None) -> str:
    """
    Create a JWT access token.

    JWT Algorithm: HS256 (HMAC with SHA-256) unless configured otherwise.

    Args:
        data: Dictionary containing token claims (sub, username)
        expires_delta: Optional expiration time delta

    Returns:
        JWT token string
    """
    to_encode = data.copy()
    now = datetime.now(timezone.utc)

    if expires_delta:
        expire = now + expires_delta
    else:
        expire = now + timedelta(hours=settings.JWT_EXPIRATION_HOURS)

    to_encode.update({
        "exp": expire,
        "iat": now,
        "type": "access"
    })

    encoded_jwt = jwt.encode(
        to_encode,
        settings.JWT_SECRET,
        algorithm=settings.JWT_ALGORITHM
    )

    return encoded_jwt


def decode_access_token(token: str) -> dict:
    """
    Decode and validate a JWT access token.

    Args:
        token: JWT token string

    Returns:
        Dictionary with decoded token data

    Raises:
        HTTPException: If token is invalid or expired
    """
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )

    try:
        payload = jwt.decode(
            token,
            settings.JWT_SECRET,
            algorithms=[settings.JWT_ALGORITHM]
        )

        return payload

    except JWTError:
        raise credentials_exception


@lru_cache(maxsize=1)
def _dummy_password_hash() -> str:
    return get_password_hash("dummy-password-for-unknown-users")


def authenticate_admin(db: Session, username: str, password: str) -> Optional[Admin]:
    """Return the admin when the username/password pair is valid, else None."""
    admin = db.query(Admin).filter(Admin.username == username).first()
    if admin is None:
        # Unknown users pay the same bcrypt cost as a wrong password
        verify_password(password, _dummy_password_hash())
        return None
    if verify_password(password, admin.password):
        return admin
    return None


def get_current_admin(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    db: Session = Depends(get_db),
) -> Admin:
    """
    Resolve the authenticated admin from the bearer token.

    Raises:
        HTTPException 401: If the header is missing, the token is invalid
            or the admin no longer exists
    """
    if credentials is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )

    payload = decode_access_token(credentials.credentials)
    admin_id = payload.get("sub")

    try:
        if payload.get("type") != "access":
            raise ValueError("not an access token")
        admin_uuid = uuid.UUID(str(admin_id))
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token: subject not found",
            headers={"WWW-Authenticate": "Bearer"},
        )

    admin = db.query(Admin).filter(Admin.id == admin_uuid).first()
    if not admin:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Could not validate credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )

    return admin
