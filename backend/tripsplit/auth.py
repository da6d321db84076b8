"""Auth: shared admin password guarding destructive operations."""
import logging
from typing import Optional

from passlib.context import CryptContext
from fastapi import Depends, HTTPException, status
from fastapi.security import APIKeyHeader

from tripsplit.config import ADMIN_PASSWORD

logger = logging.getLogger(__name__)

# Use pbkdf2_sha256 to avoid local bcrypt backend issues and 72‑byte limits.
pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")
admin_password_header = APIKeyHeader(name="X-Admin-Password", auto_error=False)


def verify_password(plain: str, hashed: str) -> bool:
    return pwd_context.verify(plain, hashed)


def get_password_hash(password: str) -> str:
    return pwd_context.hash(password)


_admin_password_hash = get_password_hash(ADMIN_PASSWORD)


def require_admin(password: Optional[str] = Depends(admin_password_header)) -> None:
    if not password:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Admin password required",
        )
    if not verify_password(password, _admin_password_hash):
        logger.warning("Rejected destructive request: invalid admin password")
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Invalid admin password",
        )
