"""
Messages API Router - conversation history between the caller and another user.

Endpoints:
- GET    /api/messages/{other_id}?limit=N - history, oldest first
- DELETE /api/messages/{other_id}         - delete the whole conversation
- DELETE /api/contacts/{contact_id}       - no-op; clients hide the contact locally

Sending is realtime only (see presentation/realtime/websocket.py).
"""

from fastapi import APIRouter, Depends, HTTPException, Query, status
from dishka.integrations.fastapi import FromDishka, inject
from pydantic import BaseModel

from dmchat.application.commands.messages import (
    DeleteConversationCommand,
    DeleteConversationHandler,
)
from dmchat.application.dto.message import MessageDTO
from dmchat.application.queries.messages import (
    GetConversationHistoryHandler,
    GetConversationHistoryQuery,
)
from dmchat.config.settings import Config
from dmchat.domain.value_objects.user_id import UserId
from dmchat.presentation.dependencies.auth import AuthUser, get_current_user


# ==================== REQUEST/RESPONSE MODELS ====================


class HistoryResponse(BaseModel):
    messages: list[MessageDTO]


class DeleteConversationResponse(BaseModel):
    success: bool
    deleted: int


class DeleteContactResponse(BaseModel):
    success: bool


def _parse_user_id(raw: str, name: str) -> UserId:
    try:
        return UserId.from_reference(raw)
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail=f"{name} invalid"
        ) from e


# ==================== ROUTERS ====================

messages_router = APIRouter(prefix="/api/messages", tags=["messages"])
contacts_router = APIRouter(prefix="/api/contacts", tags=["contacts"])


# ==================== ENDPOINTS ====================


@messages_router.get("/{other_id}", response_model=HistoryResponse)
@inject
async def get_history(
    other_id: str,
    handler: FromDishka[GetConversationHistoryHandler],
    current_user: AuthUser = Depends(get_current_user),
    limit: int = Query(Config.HISTORY_LIMIT, ge=1, le=Config.HISTORY_MAX_LIMIT),
):
    query = GetConversationHistoryQuery(
        user_id=current_user.id,
        other_user_id=_parse_user_id(other_id, "otherId"),
        limit=limit,
    )
    messages = await handler.execute(query)
    return HistoryResponse(messages=[MessageDTO.from_entity(m) for m in messages])


@messages_router.delete("/{other_id}", response_model=DeleteConversationResponse)
@inject
async def delete_history(
    other_id: str,
    handler: FromDishka[DeleteConversationHandler],
    current_user: AuthUser = Depends(get_current_user),
):
    command = DeleteConversationCommand(
        user_id=current_user.id,
        other_user_id=_parse_user_id(other_id, "otherId"),
    )
    deleted = await handler.execute(command)
    return DeleteConversationResponse(success=True, deleted=deleted)


@contacts_router.delete("/{contact_id}", response_model=DeleteContactResponse)
async def delete_contact(
    contact_id: str,
    current_user: AuthUser = Depends(get_current_user),
):
    """There is no contacts table; the id is only validated."""
    _parse_user_id(contact_id, "contactId")
    return DeleteContactResponse(success=True)
