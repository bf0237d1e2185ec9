import logging
from fastapi import APIRouter, Depends, status, HTTPException, Query
from sqlalchemy.orm import Session
from typing import List, Optional
from lookin.database import get_db
from lookin.schemas import (
    ConversationCreate,
    ConversationResponse,
    MessageCreate,
    MessageResponse
)
from lookin.services.conversation_service import ConversationService
from lookin.services.message_service import MessageService
from lookin.api.websocket import manager, message_event
from lookin.utils.security import get_current_user
from lookin.models.user import User

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/conversations", tags=["Conversations"])


@router.post("/", response_model=ConversationResponse, status_code=status.HTTP_201_CREATED)
async def create_conversation(
    conversation_data: ConversationCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    Start a conversation with another user.

    - **other_user_id**: The user to talk to

    If the two of you already have a conversation, that one is returned.
    """
    logger.info(
        f"API request: Create conversation by user {current_user.id} "
        f"with user {conversation_data.other_user_id}"
    )
    try:
        result = ConversationService.create_conversation(db, conversation_data.other_user_id, current_user)
        logger.info(f"API response: Conversation {result.id} for user {current_user.id}")
        return result
    except HTTPException as e:
        logger.error(
            f"API error: Failed to create conversation for user {current_user.id}: "
            f"{e.status_code} - {e.detail}"
        )
        raise
    except Exception as e:
        logger.exception(f"API unexpected error: Failed to create conversation for user {current_user.id}: {str(e)}")
        raise


@router.get("/", response_model=List[ConversationResponse])
async def get_conversations(
    q: Optional[str] = Query(None, max_length=100),
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    Get all conversations for the current user, most recent first.

    - **q**: Optional search on the other participant's name
    """
    logger.info(f"API request: Get all conversations for user {current_user.id}")
    try:
        result = ConversationService.get_user_conversations(db, current_user, q)
        logger.info(f"API response: Returning {len(result)} conversation(s) for user {current_user.id}")
        return result
    except Exception as e:
        logger.exception(f"API unexpected error: Failed to get conversations for user {current_user.id}: {str(e)}")
        raise


@router.get("/{conversation_id}", response_model=ConversationResponse)
async def get_conversation(
    conversation_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    Get a specific conversation by ID.
    """
    logger.info(f"API request: Get conversation {conversation_id} for user {current_user.id}")
    try:
        return ConversationService.get_conversation(db, conversation_id, current_user)
    except HTTPException as e:
        logger.error(
            f"API error: Failed to get conversation {conversation_id} for user {current_user.id}: "
            f"{e.status_code} - {e.detail}"
        )
        raise


@router.post("/{conversation_id}/read", status_code=status.HTTP_200_OK)
async def mark_conversation_as_read(
    conversation_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    Mark every message from the other participant as read.
    """
    logger.info(f"API request: Mark conversation {conversation_id} as read by user {current_user.id}")
    try:
        updated = MessageService.mark_messages_as_read(db, conversation_id, current_user)
    except HTTPException as e:
        logger.error(
            f"API error: Failed to mark conversation {conversation_id} as read: "
            f"{e.status_code} - {e.detail}"
        )
        raise

    conversation = MessageService.get_participant_conversation(db, conversation_id, current_user)
    await manager.broadcast_to_conversation(
        {"type": "messages_read", "conversation_id": conversation_id, "user_id": current_user.id},
        conversation_id,
        conversation.participant_ids
    )
    return {"conversation_id": conversation_id, "marked_read": updated}


@router.get("/{conversation_id}/messages", response_model=List[MessageResponse])
async def get_conversation_messages(
    conversation_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    Get the messages of a conversation, oldest first.
    """
    logger.info(f"API request: Get messages for conversation {conversation_id} by user {current_user.id}")
    try:
        result = MessageService.get_conversation_messages(db, conversation_id, current_user)
        logger.info(
            f"API response: Returning {len(result)} message(s) from conversation {conversation_id} "
            f"for user {current_user.id}"
        )
        return result
    except HTTPException as e:
        logger.error(
            f"API error: Failed to get messages for conversation {conversation_id}: "
            f"{e.status_code} - {e.detail}"
        )
        raise


@router.post("/{conversation_id}/messages", response_model=MessageResponse, status_code=status.HTTP_201_CREATED)
async def send_message(
    conversation_id: int,
    message_data: MessageCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    Send a message in a conversation.

    - **content**: Message text (1-5000 chars, surrounding whitespace removed)
    """
    logger.info(
        f"API request: Send message in conversation {conversation_id} by user {current_user.id} "
        f"(content_length={len(message_data.content)})"
    )
    try:
        result = MessageService.create_message(db, conversation_id, message_data, current_user)
        logger.info(
            f"API response: Created message {result.id} in conversation {conversation_id} "
            f"by user {current_user.id}"
        )
    except HTTPException as e:
        logger.error(
            f"API error: Failed to send message in conversation {conversation_id}: "
            f"{e.status_code} - {e.detail}"
        )
        raise
    except Exception as e:
        logger.exception(
            f"API unexpected error: Failed to send message in conversation {conversation_id}: {str(e)}"
        )
        raise

    conversation = MessageService.get_participant_conversation(db, conversation_id, current_user)
    await manager.broadcast_to_conversation(
        message_event(result),
        conversation_id,
        conversation.participant_ids
    )
    return result
