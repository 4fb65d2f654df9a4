# Error taxonomy and storage error mapping

from contextlib import contextmanager
from typing import Iterator

from fastapi import status
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
import structlog

logger = structlog.get_logger()


class AppError(Exception):
    """
    Base for every failure that crosses a component boundary.

    `detail` is the only text the client ever sees.
    """

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    detail: str = "internal server error"

    def __init__(self, detail: str | None = None):
        if detail is not None:
            self.detail = detail
        super().__init__(self.detail)


class NotFound(AppError):
    status_code = status.HTTP_404_NOT_FOUND

    def __init__(self, entity: str, key: object = None):
        self.entity = entity
        self.key = key
        super().__init__(f"{entity} not found")


class UserExists(AppError):
    status_code = status.HTTP_409_CONFLICT

    def __init__(self, username: str):
        self.username = username
        super().__init__("user already exists")


class ValidationError(AppError):
    """Malformed input rejected before it reaches storage"""

    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, detail: str, field: str | None = None):
        self.field = field
        super().__init__(detail)


class InternalError(AppError):
    """Internal fault; the client only gets a generic message"""

    def __init__(self):
        super().__init__()


class StorageError(InternalError):
    pass


class PoolExhausted(InternalError):
    pass


class ConnectFailed(InternalError):
    pass


class MigrationFailed(InternalError):
    pass


def is_unique_violation(exc: IntegrityError) -> bool:
    """True when the database rejected a row for a duplicate key"""
    message = str(exc.orig) if exc.orig is not None else str(exc)
    return "UNIQUE constraint failed" in message or "PRIMARY KEY" in message


def classify_storage_error(exc: Exception, conflict: AppError | None = None) -> AppError:
    """Map a lower-level fault to exactly one taxonomy kind"""
    if isinstance(exc, AppError):
        return exc

    if conflict is not None and isinstance(exc, IntegrityError) and is_unique_violation(exc):
        return conflict

    return StorageError()


@contextmanager
def storage_errors(action: str, conflict: AppError | None = None, **context) -> Iterator[None]:
    """
    Run a storage call, classifying anything it raises.

    A uniqueness violation becomes `conflict` when one is given; other
    SQLAlchemy failures become an opaque StorageError, logged with full detail.
    """
    try:
        yield
    except AppError:
        raise
    except SQLAlchemyError as e:
        error = classify_storage_error(e, conflict)
        if isinstance(error, InternalError):
            logger.error("storage_error", action=action, error=str(e), **context)
        raise error from e
