"""Account registration and login endpoints."""

from __future__ import annotations

import logging
import re
from datetime import datetime, timezone

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from hikewise import db_models
from hikewise.config import settings
from hikewise.db import get_db
from hikewise.models import AuthResponse, LoginRequest, RegisterRequest
from hikewise.security import (
    MIN_PASSWORD_LENGTH,
    hash_password,
    verify_password,
)

router = APIRouter(prefix="/auth", tags=["auth"])

logger = logging.getLogger("hikewise.auth")


def _bad_request(message: str) -> HTTPException:
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail={"message": message})


def _email_pattern() -> re.Pattern[str]:
    return re.compile(rf"^[a-zA-Z0-9._%+-]+@{re.escape(settings.allowed_email_domain)}$")


def _check_pepper() -> str:
    if not settings.password_pepper:
        logger.error("Password pepper is not configured; rejecting request")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={"message": "Password hashing is not configured"},
        )
    return settings.password_pepper


def _validate_credentials(email: str, password: str) -> None:
    if not _email_pattern().match(email):
        raise _bad_request(
            f"Invalid email format. Only @{settings.allowed_email_domain} allowed!"
        )
    if len(password) < MIN_PASSWORD_LENGTH:
        raise _bad_request(
            f"Password length must be at least {MIN_PASSWORD_LENGTH} characters!"
        )


@router.post(
    "/register",
    response_model=AuthResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register a new account",
)
def register(request: RegisterRequest, db: Session = Depends(get_db)) -> AuthResponse:
    """Create an account keyed by email with a peppered bcrypt hash."""

    if not request.email or not request.password or not request.confirm_password:
        raise _bad_request(
            "All parameters (email, password, confirm password) are required!"
        )
    _validate_credentials(request.email, request.password)
    if request.password != request.confirm_password:
        raise _bad_request("Confirm password doesn't match the password above!")

    if db.get(db_models.User, request.email) is not None:
        raise _bad_request("Email already registered")

    pepper = _check_pepper()
    user = db_models.User(
        email=request.email,
        password_hash=hash_password(
            request.password, pepper, rounds=settings.bcrypt_rounds
        ),
        created_at=datetime.now(timezone.utc),
    )
    db.add(user)
    db.commit()
    logger.info("Registered account %s", request.email)
    return AuthResponse(message="User registered successfully")


@router.post("/login", response_model=AuthResponse, summary="Verify account credentials")
def login(request: LoginRequest, db: Session = Depends(get_db)) -> AuthResponse:
    """Check an email/password pair against the stored hash."""

    if not request.email or not request.password:
        raise _bad_request("Email & password are required!")
    _validate_credentials(request.email, request.password)

    pepper = _check_pepper()
    user = db.get(db_models.User, request.email)
    if user is None or not verify_password(
        request.password, pepper, user.password_hash
    ):
        logger.info("Rejected login for %s", request.email)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail={"message": "Wrong email or password!"},
        )

    try:  # best effort; do not block logins on bookkeeping updates
        user.last_login_at = datetime.now(timezone.utc)
        db.commit()
    except Exception:  # pragma: no cover - fail soft
        db.rollback()
        logger.debug("Failed to update last login timestamp", exc_info=True)

    return AuthResponse(message="Login successful")
