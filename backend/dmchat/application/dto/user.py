"""User DTOs for API responses."""

from pydantic import BaseModel

from dmchat.domain.entities.user import User


class UserDTO(BaseModel):
    """Public view of a user (never includes the password hash)."""

    id: int
    username: str

    @classmethod
    def from_entity(cls, user: User) -> "UserDTO":
        return cls(id=user.id.value, username=user.username)
