from sqlalchemy import literal, select
from sqlalchemy.ext.asyncio import AsyncSession
import structlog

from eventboard.core import clock
from eventboard.core.errors import NotFound, UserExists, storage_errors
from eventboard.core.validation import check_username
from eventboard.models.user import User

logger = structlog.get_logger()


class UserRepository:
    """Data access for the users table"""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def list_all(self) -> list[User]:
        logger.debug("loading_users")
        with storage_errors("load users"):
            result = await self.db.execute(select(User))
            users = list(result.scalars().all())

        logger.debug("users_loaded", count=len(users))
        return users

    async def get_by_username(self, username: str) -> User:
        """
        Raises:
            NotFound: no user has this name
        """
        with storage_errors("query user", username=username):
            result = await self.db.execute(select(User).where(User.username == username))
            user = result.scalar_one_or_none()

        if user is None:
            logger.debug("user_not_found", username=username)
            raise NotFound("user", username)

        return user

    async def exists(self, username: str) -> bool:
        with storage_errors("check for existing user", username=username):
            result = await self.db.execute(
                select(literal(1)).where(User.username == username).limit(1)
            )
            return result.scalar_one_or_none() is not None

    async def create(self, username: str) -> None:
        """
        Create a user unless the name is taken.

        The existence check is only an early exit: another request can insert
        the same name between it and the insert. The primary key is what
        actually guarantees one winner, and its violation is reported as
        UserExists as well.

        Raises:
            UserExists: the username is already taken
            ValidationError: the username is empty or too long
        """
        check_username(username)

        exists = await self.exists(username)
        logger.debug("checked_for_existing_user", username=username, exists=exists)
        if exists:
            raise UserExists(username)

        created_at = clock.unix_now()
        self.db.add(User(username=username, created_at=created_at))

        with storage_errors("insert user", conflict=UserExists(username), username=username):
            await self.db.commit()

        logger.info("user_created", username=username, created_at=created_at)
