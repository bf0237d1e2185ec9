import logging
from sqlalchemy.orm import Session
from fastapi import HTTPException, status
from typing import List
from datetime import datetime
from lookin.models.message import Message
from lookin.models.conversation import Conversation
from lookin.models.user import User
from lookin.schemas import MessageCreate, MessageResponse
from lookin.utils.encryption import message_encryption

logger = logging.getLogger(__name__)


class MessageService:
    """Service for message operations."""

    @staticmethod
    def create_message(
        db: Session,
        conversation_id: int,
        message_data: MessageCreate,
        sender: User
    ) -> MessageResponse:
        """Create a new message with encryption."""
        conversation = MessageService.get_participant_conversation(db, conversation_id, sender)

        new_message = Message(
            content=message_encryption.encrypt(message_data.content),
            conversation_id=conversation.id,
            sender_id=sender.id
        )
        db.add(new_message)

        # Keep the conversation list ordered by latest activity
        conversation.updated_at = datetime.utcnow()

        db.commit()
        db.refresh(new_message)

        logger.info(f"User {sender.id} sent message {new_message.id} in conversation {conversation.id}")
        return MessageService._message_to_response(new_message)

    @staticmethod
    def get_conversation_messages(
        db: Session,
        conversation_id: int,
        user: User
    ) -> List[MessageResponse]:
        """Get all messages of a conversation in chronological order."""
        MessageService.get_participant_conversation(db, conversation_id, user)

        messages = db.query(Message).filter(
            Message.conversation_id == conversation_id
        ).order_by(Message.created_at.asc(), Message.id.asc()).all()

        return [MessageService._message_to_response(msg) for msg in messages]

    @staticmethod
    def mark_messages_as_read(db: Session, conversation_id: int, user: User) -> int:
        """Flag every unread message from the other participant as read."""
        MessageService.get_participant_conversation(db, conversation_id, user)

        updated = db.query(Message).filter(
            Message.conversation_id == conversation_id,
            Message.sender_id != user.id,
            Message.is_read == False
        ).update({"is_read": True}, synchronize_session=False)
        db.commit()

        logger.info(f"User {user.id} marked {updated} message(s) read in conversation {conversation_id}")
        return updated

    @staticmethod
    def count_unread(db: Session, conversation_id: int, user_id: int) -> int:
        """Unread messages in a conversation, not counting the user's own."""
        return db.query(Message).filter(
            Message.conversation_id == conversation_id,
            Message.sender_id != user_id,
            Message.is_read == False
        ).count()

    @staticmethod
    def get_participant_conversation(db: Session, conversation_id: int, user: User) -> Conversation:
        """Load a conversation, requiring the user to be one of its two participants."""
        conversation = db.query(Conversation).filter(
            Conversation.id == conversation_id
        ).first()

        if not conversation:
            logger.warning(f"Conversation {conversation_id} not found (requested by user {user.id})")
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Conversation not found"
            )

        if user.id not in conversation.participant_ids:
            logger.warning(
                f"User {user.id} denied access to conversation {conversation_id}: not a participant"
            )
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="You are not a participant in this conversation"
            )

        return conversation

    @staticmethod
    def _message_to_response(message: Message) -> MessageResponse:
        """Convert Message model to response with decryption."""
        return MessageResponse(
            id=message.id,
            content=message_encryption.decrypt(message.content),
            conversation_id=message.conversation_id,
            sender_id=message.sender_id,
            is_read=bool(message.is_read),
            created_at=message.created_at
        )
