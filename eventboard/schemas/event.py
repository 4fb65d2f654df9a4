# Pydantic schemas

from pydantic import ConfigDict, Field, field_validator

from eventboard.schemas.base import CamelModel, Float32, UnixTimestamp


class EventCreate(CamelModel):
    """Schema for creating an event; id and timestamps are assigned server-side"""

    title: str = Field(..., json_schema_extra={"example": "Big Mike"})
    description: str | None = None
    color: str | None = Field(default=None, json_schema_extra={"example": "#87d45d"})
    start_date: UnixTimestamp
    end_date: UnixTimestamp
    location_lng: Float32 | None = None
    location_lat: Float32 | None = None


class EventUpdate(CamelModel):
    """
    Sparse patch for an event.

    Every field is independently absent, explicitly null, or set. Which ones
    the client sent is tracked in `model_fields_set`, so "absent" and "null"
    stay distinguishable. Unknown and server-managed fields (id, createdAt,
    editedAt) are dropped.
    """

    title: str | None = None
    description: str | None = None
    color: str | None = None
    start_date: UnixTimestamp | None = None
    end_date: UnixTimestamp | None = None
    location_lng: Float32 | None = None
    location_lat: Float32 | None = None

    model_config = ConfigDict(extra="ignore")

    @field_validator("title", "start_date", "end_date")
    @classmethod
    def validate_not_null(cls, v):
        # Only runs for fields the client actually sent
        if v is None:
            raise ValueError("Field cannot be null")
        return v


class EventResponse(CamelModel):
    """Response schema for event operations"""

    id: int
    title: str
    description: str | None
    color: str | None
    start_date: int
    end_date: int
    location_lng: float | None
    location_lat: float | None
    created_at: int
    edited_at: int | None

    model_config = ConfigDict(from_attributes=True)
