import logging
from sqlalchemy.orm import Session
from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError
from fastapi import HTTPException, status
from typing import List, Optional, Tuple
from lookin.models.conversation import Conversation
from lookin.models.message import Message
from lookin.models.profile import Profile
from lookin.models.user import User
from lookin.schemas import ConversationResponse
from lookin.services.message_service import MessageService
from lookin.services.profile_service import ProfileService
from lookin.utils.timefmt import format_relative_time

logger = logging.getLogger(__name__)


def conversation_pair(user_a: int, user_b: int) -> Tuple[int, int]:
    """Canonical (smaller, larger) id pair identifying a conversation."""
    return (user_a, user_b) if user_a < user_b else (user_b, user_a)


class ConversationService:
    """Service for conversation operations."""

    @staticmethod
    def create_conversation(
        db: Session,
        other_user_id: int,
        creator: User
    ) -> ConversationResponse:
        """Start a conversation with another user, reusing an existing one."""
        conversation = ConversationService.get_or_create(db, other_user_id, creator)
        return ConversationService._conversation_to_response(db, conversation, creator.id)

    @staticmethod
    def get_or_create(db: Session, other_user_id: int, creator: User) -> Conversation:
        logger.info(f"Creating conversation between user {creator.id} and user {other_user_id}")

        if other_user_id == creator.id:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="You cannot start a conversation with yourself"
            )

        other_user = db.query(User).filter(
            User.id == other_user_id,
            User.is_active == True
        ).first()
        if not other_user:
            logger.warning(f"Failed to create conversation: user {other_user_id} not found")
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="User not found"
            )

        user1_id, user2_id = conversation_pair(creator.id, other_user_id)
        existing = ConversationService._find_existing_conversation(db, user1_id, user2_id)
        if existing:
            logger.info(f"Found existing conversation {existing.id}, returning it")
            return existing

        new_conversation = Conversation(user1_id=user1_id, user2_id=user2_id)
        db.add(new_conversation)
        try:
            db.commit()
        except IntegrityError:
            # Another request created the pair first
            db.rollback()
            existing = ConversationService._find_existing_conversation(db, user1_id, user2_id)
            if existing:
                return existing
            raise
        db.refresh(new_conversation)

        logger.info(
            f"Successfully created conversation {new_conversation.id}: "
            f"participants={[user1_id, user2_id]}"
        )
        return new_conversation

    @staticmethod
    def get_user_conversations(
        db: Session,
        user: User,
        search: Optional[str] = None
    ) -> List[ConversationResponse]:
        """Get the user's conversations, most recently active first."""
        logger.debug(f"Fetching conversations for user {user.id}")
        conversations = db.query(Conversation).filter(
            or_(Conversation.user1_id == user.id, Conversation.user2_id == user.id)
        ).order_by(Conversation.updated_at.desc(), Conversation.id.desc()).all()

        responses = [
            ConversationService._conversation_to_response(db, conv, user.id)
            for conv in conversations
        ]

        if search and search.strip():
            needle = search.strip().lower()
            responses = [conv for conv in responses if needle in conv.other_user_name.lower()]

        logger.info(f"Retrieved {len(responses)} conversation(s) for user {user.id}")
        return responses

    @staticmethod
    def get_conversation(
        db: Session,
        conversation_id: int,
        user: User
    ) -> ConversationResponse:
        """Get a specific conversation."""
        conversation = MessageService.get_participant_conversation(db, conversation_id, user)
        return ConversationService._conversation_to_response(db, conversation, user.id)

    @staticmethod
    def _find_existing_conversation(
        db: Session,
        user1_id: int,
        user2_id: int
    ) -> Optional[Conversation]:
        """Find the conversation for an already ordered pair."""
        return db.query(Conversation).filter(
            Conversation.user1_id == user1_id,
            Conversation.user2_id == user2_id
        ).first()

    @staticmethod
    def _conversation_to_response(
        db: Session,
        conversation: Conversation,
        user_id: int
    ) -> ConversationResponse:
        """Convert Conversation model to response."""
        other_user_id = conversation.other_user_id(user_id)

        other_name = ProfileService.display_name(db, other_user_id)
        profile = db.query(Profile).filter(Profile.user_id == other_user_id).first()
        other_photo = profile.profile_photo if profile else None
        if not other_photo:
            other_user = db.query(User).filter(User.id == other_user_id).first()
            other_photo = other_user.avatar_url if other_user else None

        last_msg = db.query(Message).filter(
            Message.conversation_id == conversation.id
        ).order_by(Message.created_at.desc(), Message.id.desc()).first()

        last_message = None
        last_message_time = ""
        if last_msg:
            last_message = MessageService._message_to_response(last_msg)
            last_message_time = format_relative_time(last_msg.created_at)

        return ConversationResponse(
            id=conversation.id,
            user1_id=conversation.user1_id,
            user2_id=conversation.user2_id,
            created_at=conversation.created_at,
            updated_at=conversation.updated_at,
            other_user_id=other_user_id,
            other_user_name=other_name or "Unknown",
            other_user_photo=other_photo,
            last_message=last_message,
            last_message_time=last_message_time,
            unread_count=MessageService.count_unread(db, conversation.id, user_id)
        )
