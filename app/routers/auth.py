"""
Admin authentication API endpoints.

This module provides login for admins and admin account creation.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.core.auth import (
    authenticate_admin,
    create_access_token,
    get_current_admin,
    get_password_hash,
)
from app.models.admin import Admin
from app.schemas.auth import AdminCreate, AdminOut, LoginRequest, LoginResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/login", response_model=LoginResponse)
def login(login_data: LoginRequest, db: Session = Depends(get_db)):
    """
    Authenticate an admin and return an access token.

    Args:
        login_data: Login credentials (username and plain text password)
        db: Database session

    Returns:
        Access token and admin information

    Raises:
        HTTPException 401: If credentials are invalid. The message is the
            same for an unknown username and a wrong password.
    """
    admin = authenticate_admin(db, login_data.username, login_data.password)
    if not admin:
        logger.warning(f"Failed login attempt for username '{login_data.username}'")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid username or password",
            headers={"WWW-Authenticate": "Bearer"},
        )

    access_token = create_access_token(data={
        "sub": str(admin.id),
        "username": admin.username,
    })

    return LoginResponse(
        access_token=access_token,
        token_type="bearer",
        user=AdminOut.model_validate(admin)
    )


@router.get("/me", response_model=AdminOut)
def read_current_admin(current_admin: Admin = Depends(get_current_admin)):
    """Return the admin that owns the bearer token."""
    return current_admin


@router.post("/admins", response_model=AdminOut, status_code=status.HTTP_201_CREATED)
def create_admin(
    admin_data: AdminCreate,
    db: Session = Depends(get_db),
    _: Admin = Depends(get_current_admin),
):
    """
    Create a new admin user.

    Raises:
        HTTPException 400: If the username is already taken
    """
    existing_admin = db.query(Admin).filter(Admin.username == admin_data.username).first()
    if existing_admin:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Username already registered"
        )

    new_admin = Admin(
        username=admin_data.username,
        password=get_password_hash(admin_data.password)
    )

    db.add(new_admin)
    db.commit()
    db.refresh(new_admin)

    logger.info(f"Created admin '{new_admin.username}'")
    return new_admin
