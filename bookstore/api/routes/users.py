"""
Account API Routes

Handles:
- User registration
- Credential verification (login)
- User lookup by ID
"""

from fastapi import APIRouter, Depends, status
from loguru import logger

from bookstore.api.dependencies import Settings, get_app_settings, get_user_repository
from bookstore.api.schemas import (
    ErrorResponse,
    LoginRequest,
    LoginResponse,
    UserCreate,
    UserResponse,
)
from bookstore.exceptions import (
    ConflictError,
    InvalidCredentialsError,
    InvalidInputError,
    NotFoundError,
)
from bookstore.security import burn_password_check, get_password_hash, verify_password
from bookstore.storage.user_repository import DuplicateEmailError

router = APIRouter(tags=["users"])

LOGIN_SUCCESS_MESSAGE = "Connexion réussie"


@router.post(
    "/register",
    response_model=UserResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"model": ErrorResponse, "description": "Missing or invalid fields"},
        409: {"model": ErrorResponse, "description": "Email already registered"},
    },
)
def register(
    user: UserCreate,
    repo = Depends(get_user_repository),
    settings: Settings = Depends(get_app_settings),
):
    """Register a new user."""
    logger.info(f"Registering user: {user.email}")

    try:
        hashed_password = get_password_hash(user.password, rounds=settings.bcrypt_rounds)
    except ValueError as e:
        raise InvalidInputError("Password cannot be hashed", detail=str(e))

    try:
        created = repo.create(
            email=user.email,
            hashed_password=hashed_password,
            name=user.name,
        )
    except DuplicateEmailError:
        raise ConflictError("Email already registered")

    logger.info(f"User registered: {created.id}")
    return created.to_public()


@router.post(
    "/login",
    response_model=LoginResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Missing email or password"},
        401: {"model": ErrorResponse, "description": "Invalid email or password"},
    },
)
def login(
    credentials: LoginRequest,
    repo = Depends(get_user_repository),
    settings: Settings = Depends(get_app_settings),
):
    """
    Verify an email/password pair.

    Unknown email and wrong password produce the same 401.
    """
    user = repo.get_by_email(credentials.email)

    if user is None:
        burn_password_check(credentials.password, rounds=settings.bcrypt_rounds)
        logger.info(f"Login failed (unknown email): {credentials.email}")
        raise InvalidCredentialsError()

    if not verify_password(credentials.password, user.password):
        logger.info(f"Login failed (wrong password): {credentials.email}")
        raise InvalidCredentialsError()

    logger.info(f"Login successful: {credentials.email}")
    return {"message": LOGIN_SUCCESS_MESSAGE, "user": user.to_public()}


@router.get(
    "/users/{user_id}",
    response_model=UserResponse,
    responses={
        404: {"model": ErrorResponse, "description": "User not found"},
    },
)
def get_user(
    user_id: int,
    repo = Depends(get_user_repository),
):
    """Get a user by ID (without password)."""
    logger.info(f"Fetching user: {user_id}")

    user = repo.get(user_id)
    if user is None:
        raise NotFoundError("User", user_id)
    return user.to_public()
