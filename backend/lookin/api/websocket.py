from fastapi import APIRouter, WebSocket, WebSocketDisconnect, Depends, Query, HTTPException
from pydantic import ValidationError
from sqlalchemy.orm import Session
from sqlalchemy.exc import SQLAlchemyError
from typing import Dict, List, Set
from datetime import datetime
import logging
from lookin.database import get_db
from lookin.schemas import MessageCreate, MessageResponse, WSMessage
from lookin.services.message_service import MessageService
from lookin.utils.security import get_user_from_token

logger = logging.getLogger(__name__)
router = APIRouter()


class ConnectionManager:
    """Manage WebSocket connections and per-socket conversation subscriptions."""

    def __init__(self):
        # user_id -> open sockets (one per tab/device)
        self.active_connections: Dict[int, List[WebSocket]] = {}
        # socket -> subscribed conversation ids
        self.subscriptions: Dict[WebSocket, Set[int]] = {}

    async def connect(self, user_id: int, websocket: WebSocket):
        """Accept and store WebSocket connection."""
        await websocket.accept()
        self.active_connections.setdefault(user_id, []).append(websocket)

    def disconnect(self, user_id: int, websocket: WebSocket):
        """Remove WebSocket connection and its subscriptions."""
        connections = self.active_connections.get(user_id, [])
        if websocket in connections:
            connections.remove(websocket)
        if not connections:
            self.active_connections.pop(user_id, None)
        self.subscriptions.pop(websocket, None)

    def subscribe(self, websocket: WebSocket, conversation_id: int):
        self.subscriptions.setdefault(websocket, set()).add(conversation_id)

    def unsubscribe(self, websocket: WebSocket, conversation_id: int):
        self.subscriptions.get(websocket, set()).discard(conversation_id)

    def is_subscribed(self, websocket: WebSocket, conversation_id: int) -> bool:
        return conversation_id in self.subscriptions.get(websocket, set())

    async def _send(self, message: dict, user_id: int, websocket: WebSocket):
        try:
            await websocket.send_json(message)
        except Exception as e:
            logger.error(f"Error sending message to user {user_id}: {e}")
            self.disconnect(user_id, websocket)

    async def send_personal_message(self, message: dict, user_id: int):
        """Send message to every socket of a specific user."""
        for websocket in list(self.active_connections.get(user_id, [])):
            await self._send(message, user_id, websocket)

    async def broadcast_to_conversation(
        self,
        message: dict,
        conversation_id: int,
        participant_ids: list,
        exclude_user_id: int = None
    ):
        """Send message to the participants' sockets subscribed to a conversation."""
        for user_id in participant_ids:
            if user_id == exclude_user_id:
                continue
            for websocket in list(self.active_connections.get(user_id, [])):
                if self.is_subscribed(websocket, conversation_id):
                    await self._send(message, user_id, websocket)


manager = ConnectionManager()


def message_event(message: MessageResponse) -> dict:
    """Realtime payload for a newly stored message."""
    payload = message.model_dump(mode="json")
    payload["type"] = "message"
    return payload


@router.websocket("/ws")
async def websocket_endpoint(
    websocket: WebSocket,
    token: str = Query(...),
    db: Session = Depends(get_db)
):
    """
    WebSocket endpoint for real-time messaging.

    Connect with: ws://localhost:8000/ws?token=YOUR_JWT_TOKEN

    Client events:
    {"type": "subscribe", "conversation_id": 1}
    {"type": "unsubscribe", "conversation_id": 1}
    {"type": "message", "conversation_id": 1, "content": "Hello!"}
    {"type": "mark_read", "conversation_id": 1}
    {"type": "typing", "conversation_id": 1}

    Server events: "subscribed", "message", "messages_read", "typing", "error".
    """
    current_user = get_user_from_token(db, token)
    if not current_user:
        logger.warning("WebSocket authentication failed")
        await websocket.close(code=1008, reason="Authentication failed")
        return

    user_id = current_user.id
    await manager.connect(user_id, websocket)
    logger.info(f"WebSocket connected for user {user_id}")

    try:
        while True:
            data = await websocket.receive_json()
            try:
                event = WSMessage.model_validate(data)
            except ValidationError:
                await websocket.send_json({"type": "error", "message": "Malformed event"})
                continue

            if event.conversation_id is None:
                await websocket.send_json({"type": "error", "message": "conversation_id is required"})
                continue

            try:
                if event.type == "subscribe":
                    MessageService.get_participant_conversation(db, event.conversation_id, current_user)
                    manager.subscribe(websocket, event.conversation_id)
                    await websocket.send_json({
                        "type": "subscribed",
                        "conversation_id": event.conversation_id
                    })

                elif event.type == "unsubscribe":
                    manager.unsubscribe(websocket, event.conversation_id)

                elif event.type == "message":
                    try:
                        message_data = MessageCreate(content=event.content or "")
                    except ValidationError as e:
                        await websocket.send_json({"type": "error", "message": str(e.errors()[0]["msg"])})
                        continue

                    message_response = MessageService.create_message(
                        db, event.conversation_id, message_data, current_user
                    )
                    conversation = MessageService.get_participant_conversation(
                        db, event.conversation_id, current_user
                    )
                    await manager.broadcast_to_conversation(
                        message_event(message_response),
                        event.conversation_id,
                        conversation.participant_ids
                    )

                elif event.type == "mark_read":
                    MessageService.mark_messages_as_read(db, event.conversation_id, current_user)
                    conversation = MessageService.get_participant_conversation(
                        db, event.conversation_id, current_user
                    )
                    await manager.broadcast_to_conversation(
                        {
                            "type": "messages_read",
                            "conversation_id": event.conversation_id,
                            "user_id": user_id
                        },
                        event.conversation_id,
                        conversation.participant_ids
                    )

                elif event.type == "typing":
                    conversation = MessageService.get_participant_conversation(
                        db, event.conversation_id, current_user
                    )
                    await manager.broadcast_to_conversation(
                        {
                            "type": "typing",
                            "conversation_id": event.conversation_id,
                            "user_id": user_id
                        },
                        event.conversation_id,
                        conversation.participant_ids,
                        exclude_user_id=user_id
                    )

                else:
                    await websocket.send_json({"type": "error", "message": f"Unknown event type '{event.type}'"})

            except HTTPException as e:
                await websocket.send_json({"type": "error", "message": e.detail})
            except SQLAlchemyError as e:
                logger.error(f"Database error processing '{event.type}' for user {user_id}: {e}")
                db.rollback()
                await websocket.send_json({"type": "error", "message": "Failed to process event"})

    except WebSocketDisconnect:
        logger.info(f"WebSocket disconnected for user {user_id}")

    except Exception as e:
        logger.exception(f"Unexpected WebSocket error for user {user_id}: {e}")
        if websocket.client_state.name == "CONNECTED":
            await websocket.close(code=1011, reason="Internal error")

    finally:
        manager.disconnect(user_id, websocket)
        try:
            current_user.last_seen = datetime.utcnow()
            db.commit()
        except SQLAlchemyError as e:
            logger.error(f"Failed to update last_seen for user {user_id}: {e}")
            db.rollback()
