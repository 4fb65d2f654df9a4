from sqlalchemy import BigInteger, Column, Text

from eventboard.models.base import Base


class User(Base):
    __tablename__ = "users"

    # NOCASE: usernames are unique regardless of case
    username = Column(Text(collation="NOCASE"), primary_key=True)
    created_at = Column(BigInteger, nullable=False)  # unix ts

    def __repr__(self):
        return f"<User {self.username!r}>"
