# SQLAlchemy models

from sqlalchemy import BigInteger, Column, Float, Integer, Text

from eventboard.models.base import Base

# SQLite only auto-assigns ids to an INTEGER PRIMARY KEY (the rowid alias),
# which is 64-bit there anyway.
EventId = BigInteger().with_variant(Integer, "sqlite")


class Event(Base):
    __tablename__ = "events"

    id = Column(EventId, primary_key=True, autoincrement=True)
    title = Column(Text, nullable=False)
    description = Column(Text, nullable=True)
    color = Column(Text, nullable=True)
    start_date = Column(BigInteger, nullable=False)  # unix ts
    end_date = Column(BigInteger, nullable=False)  # unix ts
    location_lng = Column(Float, nullable=True)
    location_lat = Column(Float, nullable=True)
    created_at = Column(BigInteger, nullable=False)  # unix ts
    edited_at = Column(BigInteger, nullable=True)  # unix ts

    def __repr__(self):
        return f"<Event {self.id} {self.title!r}>"


# Columns a client may write; everything else is assigned by the repository
EVENT_WRITABLE_FIELDS = frozenset({
    "title",
    "description",
    "color",
    "start_date",
    "end_date",
    "location_lng",
    "location_lat",
})
