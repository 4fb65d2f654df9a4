from pydantic import ConfigDict, Field

from eventboard.schemas.base import CamelModel


class UserCreate(CamelModel):
    """The user object required during creation; created_at is generated server-side"""

    username: str = Field(..., json_schema_extra={"example": "alice"})


class UserResponse(CamelModel):
    username: str
    created_at: int

    model_config = ConfigDict(from_attributes=True)
