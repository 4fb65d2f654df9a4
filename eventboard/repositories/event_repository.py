from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession
import structlog

from eventboard.core import clock
from eventboard.core.errors import NotFound, storage_errors
from eventboard.core.validation import check_event_fields
from eventboard.models.event import EVENT_WRITABLE_FIELDS, Event
from eventboard.schemas.base import INT64_MAX, INT64_MIN
from eventboard.schemas.event import EventCreate, EventUpdate
from eventboard.services.patch import merge_patch

logger = structlog.get_logger()


def _is_storable_id(event_id: int) -> bool:
    # SQLite rejects integers outside signed 64-bit; no such row can exist
    return INT64_MIN <= event_id <= INT64_MAX


class EventRepository:
    """Data access for the events table"""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def list_all(self) -> list[Event]:
        logger.debug("loading_events")
        with storage_errors("load events"):
            result = await self.db.execute(select(Event))
            events = list(result.scalars().all())

        logger.debug("events_loaded", count=len(events))
        return events

    async def get_by_id(self, event_id: int) -> Event:
        """
        Raises:
            NotFound: no event has this id
        """
        if not _is_storable_id(event_id):
            raise NotFound("event", event_id)

        with storage_errors("query event", event_id=event_id):
            result = await self.db.execute(select(Event).where(Event.id == event_id))
            event = result.scalar_one_or_none()

        if event is None:
            logger.debug("event_not_found", event_id=event_id)
            raise NotFound("event", event_id)

        return event

    async def create(self, data: EventCreate) -> Event:
        """
        Insert a new event.

        The id comes from storage and created_at is set here; edited_at stays
        empty until the first update.
        """
        fields = data.model_dump()
        check_event_fields(fields)

        event = Event(**fields, created_at=clock.unix_now(), edited_at=None)
        self.db.add(event)

        with storage_errors("insert event"):
            await self.db.commit()

        logger.info("event_created", event_id=event.id)
        return event

    async def update_by_id(self, event_id: int, patch: EventUpdate) -> Event:
        """
        Apply a sparse patch to an existing event.

        edited_at is bumped on every successful update, even when the patch
        is empty.

        Raises:
            NotFound: no event has this id
            ValidationError: the merged state breaks a field constraint
        """
        event = await self.get_by_id(event_id)

        current = {field: getattr(event, field) for field in EVENT_WRITABLE_FIELDS}
        merged = merge_patch(current, patch, EVENT_WRITABLE_FIELDS)
        check_event_fields(merged)

        for field, value in merged.items():
            setattr(event, field, value)
        last_written = event.created_at if event.edited_at is None else event.edited_at
        event.edited_at = clock.next_edit_timestamp(last_written)

        with storage_errors("update event", event_id=event_id):
            await self.db.commit()

        logger.info("event_updated", event_id=event_id, edited_at=event.edited_at)
        return event

    async def delete_by_id(self, event_id: int) -> None:
        """Delete an event; deleting an id that does not exist is not an error"""
        if not _is_storable_id(event_id):
            logger.info("event_deleted", event_id=event_id, deleted=0)
            return

        with storage_errors("delete event", event_id=event_id):
            result = await self.db.execute(delete(Event).where(Event.id == event_id))
            await self.db.commit()

        logger.info("event_deleted", event_id=event_id, deleted=result.rowcount)
