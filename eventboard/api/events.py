from typing import Annotated

from fastapi import APIRouter, Depends, Path, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from eventboard.core.database import get_db
from eventboard.repositories.event_repository import EventRepository
from eventboard.schemas.base import INT64_MAX, INT64_MIN
from eventboard.schemas.event import EventCreate, EventResponse, EventUpdate

router = APIRouter(prefix="/api/event", tags=["events"])

EventId = Annotated[int, Path(ge=INT64_MIN, le=INT64_MAX, description="Identifier of the event")]


@router.get("", response_model=list[EventResponse])
async def get_all(db: AsyncSession = Depends(get_db)):
    """Get a list of all events"""
    return await EventRepository(db).list_all()


@router.get("/{event_id}", response_model=EventResponse)
async def get_by_id(event_id: EventId, db: AsyncSession = Depends(get_db)):
    """Get an event by its id"""
    return await EventRepository(db).get_by_id(event_id)


@router.post("", response_model=EventResponse, status_code=status.HTTP_201_CREATED)
async def post(event: EventCreate, db: AsyncSession = Depends(get_db)):
    """
    Create a new event.

    - **id**, **createdAt** are assigned by the server
    - **editedAt** stays null until the first update
    """
    return await EventRepository(db).create(event)


@router.put("/{event_id}", response_model=EventResponse)
async def put(event_id: EventId, patch: EventUpdate, db: AsyncSession = Depends(get_db)):
    """
    Update an event with the fields given.

    Omitted fields keep their value; fields sent as null are cleared.
    """
    return await EventRepository(db).update_by_id(event_id, patch)


@router.delete("/{event_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_by_id(event_id: EventId, db: AsyncSession = Depends(get_db)):
    """Delete an event; succeeds whether or not it existed"""
    await EventRepository(db).delete_by_id(event_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
