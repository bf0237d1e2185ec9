import logging
from fastapi import APIRouter, Depends, status, Response
from sqlalchemy.orm import Session
from lookin.database import get_db
from lookin.schemas import (
    UserCreate,
    UserLogin,
    Token,
    UserResponse,
    SignUpResponse,
    EmailConfirm,
    ResendConfirmation,
)
from lookin.services.auth_service import AuthService
from lookin.utils.security import get_current_user
from lookin.models.user import User

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/auth", tags=["Authentication"])


@router.post("/register", response_model=SignUpResponse, status_code=status.HTTP_201_CREATED)
async def register(
    user_data: UserCreate,
    db: Session = Depends(get_db)
):
    """
    Register a new account.

    - **email**: Unique email address
    - **password**: Password (min 6 chars)
    - **full_name**: Optional display name

    When email confirmation is enabled no token is returned until the
    address is confirmed.
    """
    logger.info(f"API request: Register {user_data.email}")
    return AuthService.register_user(db, user_data)


@router.post("/confirm", response_model=Token)
async def confirm_email(
    payload: EmailConfirm,
    db: Session = Depends(get_db)
):
    """Confirm an email address and sign in."""
    return AuthService.confirm_email(db, payload.token)


@router.post("/resend-confirmation", status_code=status.HTTP_202_ACCEPTED)
async def resend_confirmation(
    payload: ResendConfirmation,
    db: Session = Depends(get_db)
):
    """
    Send a fresh confirmation link.

    Always accepted, so the response does not reveal which emails are registered.
    """
    AuthService.resend_confirmation(db, payload.email)
    return {"detail": "If the account exists and is unconfirmed, a new link has been sent"}


@router.post("/login", response_model=Token)
async def login(
    credentials: UserLogin,
    db: Session = Depends(get_db)
):
    """
    Authenticate user and receive access token.

    - **email**: Your email
    - **password**: Your password
    """
    return AuthService.authenticate_user(db, credentials)


@router.post("/logout", status_code=status.HTTP_204_NO_CONTENT)
async def logout(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    Logout current user.
    """
    AuthService.logout_user(db, current_user)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/me", response_model=UserResponse)
async def get_current_user_info(
    current_user: User = Depends(get_current_user)
):
    """
    Get current authenticated user information.
    """
    return UserResponse.from_orm(current_user)
