"""Users API Router - directory of other registered users."""

from fastapi import APIRouter, Depends
from dishka.integrations.fastapi import FromDishka, inject
from pydantic import BaseModel

from dmchat.application.dto.user import UserDTO
from dmchat.application.queries.users import ListOtherUsersHandler, ListOtherUsersQuery
from dmchat.presentation.dependencies.auth import AuthUser, get_current_user


class ListUsersResponse(BaseModel):
    users: list[UserDTO]


router = APIRouter(prefix="/api/users", tags=["users"])


@router.get("", response_model=ListUsersResponse)
@inject
async def list_users(
    handler: FromDishka[ListOtherUsersHandler],
    current_user: AuthUser = Depends(get_current_user),
):
    """Every registered user except the caller, ordered by username."""
    users = await handler.execute(ListOtherUsersQuery(user_id=current_user.id))
    return ListUsersResponse(users=[UserDTO.from_entity(u) for u in users])
