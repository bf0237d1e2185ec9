import logging
import secrets
from sqlalchemy.orm import Session
from fastapi import HTTPException, status
from datetime import datetime
from lookin.config import get_settings
from lookin.models.user import User
from lookin.schemas import UserCreate, UserLogin, Token, UserResponse, SignUpResponse
from lookin.utils.security import verify_password, get_password_hash, create_access_token

logger = logging.getLogger(__name__)
settings = get_settings()


class AuthService:
    """Service for authentication operations."""

    @staticmethod
    def register_user(db: Session, user_data: UserCreate) -> SignUpResponse:
        """Register a new user, auto-confirming when confirmation is disabled."""
        existing_email = db.query(User).filter(User.email == user_data.email).first()
        if existing_email:
            logger.warning(f"Registration rejected: {user_data.email} already registered")
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Email already registered"
            )

        new_user = User(
            email=user_data.email,
            full_name=user_data.full_name,
            hashed_password=get_password_hash(user_data.password)
        )

        if settings.EMAIL_CONFIRMATION_REQUIRED:
            new_user.confirmation_token = AuthService._new_confirmation_token()
        else:
            new_user.email_confirmed_at = datetime.utcnow()

        db.add(new_user)
        db.commit()
        db.refresh(new_user)

        logger.info(
            f"Registered user {new_user.id} "
            f"(confirmation_required={settings.EMAIL_CONFIRMATION_REQUIRED})"
        )

        if not new_user.email_confirmed:
            AuthService._deliver_confirmation(new_user)
            return SignUpResponse(
                user=UserResponse.from_orm(new_user),
                confirmation_required=True
            )

        return SignUpResponse(
            user=UserResponse.from_orm(new_user),
            confirmation_required=False,
            access_token=create_access_token(data={"sub": new_user.email})
        )

    @staticmethod
    def confirm_email(db: Session, token: str) -> Token:
        """Confirm the email behind a confirmation token and log the user in."""
        user = db.query(User).filter(User.confirmation_token == token).first()
        if not user:
            logger.warning("Email confirmation failed: unknown token")
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Invalid or expired confirmation token"
            )

        user.email_confirmed_at = datetime.utcnow()
        user.confirmation_token = None
        user.last_seen = datetime.utcnow()
        db.commit()
        db.refresh(user)

        logger.info(f"User {user.id} confirmed their email")
        return Token(
            access_token=create_access_token(data={"sub": user.email}),
            user=UserResponse.from_orm(user)
        )

    @staticmethod
    def resend_confirmation(db: Session, email: str) -> None:
        """Issue a fresh confirmation token if the account is still unconfirmed."""
        user = db.query(User).filter(User.email == email.lower()).first()
        if not user or user.email_confirmed:
            logger.debug("Resend confirmation ignored: no pending confirmation for address")
            return

        user.confirmation_token = AuthService._new_confirmation_token()
        db.commit()
        AuthService._deliver_confirmation(user)

    @staticmethod
    def authenticate_user(db: Session, credentials: UserLogin) -> Token:
        """Authenticate user and return token."""
        user = db.query(User).filter(User.email == credentials.email).first()

        if not user or not verify_password(credentials.password, user.hashed_password):
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Incorrect email or password"
            )

        if not user.is_active:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="User account is inactive"
            )

        if not user.email_confirmed:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Email not confirmed"
            )

        user.last_seen = datetime.utcnow()
        db.commit()

        logger.info(f"User {user.id} signed in")
        return Token(
            access_token=create_access_token(data={"sub": user.email}),
            user=UserResponse.from_orm(user)
        )

    @staticmethod
    def logout_user(db: Session, user: User):
        """Record the sign-out time."""
        user.last_seen = datetime.utcnow()
        db.commit()
        logger.info(f"User {user.id} signed out")

    @staticmethod
    def _new_confirmation_token() -> str:
        return secrets.token_urlsafe(32)

    @staticmethod
    def _deliver_confirmation(user: User):
        # No mail transport is configured; the link is written to the log
        logger.info(
            f"Confirmation link for user {user.id}: "
            f"/auth/confirm?token={user.confirmation_token}"
        )
