# Field-level input checks applied before anything reaches storage

from eventboard.core.errors import ValidationError

MAX_USERNAME_LENGTH = 64
MAX_TITLE_LENGTH = 256
MAX_DESCRIPTION_LENGTH = 4096
MAX_COLOR_LENGTH = 32


def check_length(field_name: str, value: str | None, maximum_length: int) -> None:
    """Reject `value` if its UTF-8 encoding is longer than `maximum_length` bytes"""
    if value is not None and len(value.encode("utf-8")) > maximum_length:
        raise ValidationError(
            f"{field_name} may not exceed {maximum_length} bytes",
            field=field_name
        )


def check_not_blank(field_name: str, value: str | None) -> None:
    if value is None or not value.strip():
        raise ValidationError(f"{field_name} may not be empty", field=field_name)


def check_event_fields(fields: dict) -> None:
    """Validate the writable fields of an event (full state, not a patch)"""
    check_not_blank("title", fields.get("title"))
    check_length("title", fields.get("title"), MAX_TITLE_LENGTH)
    check_length("description", fields.get("description"), MAX_DESCRIPTION_LENGTH)
    check_length("color", fields.get("color"), MAX_COLOR_LENGTH)

    for field in ("start_date", "end_date"):
        if fields.get(field) is None:
            raise ValidationError(f"{field} is required", field=field)


def check_username(username: str) -> None:
    check_not_blank("username", username)
    check_length("username", username, MAX_USERNAME_LENGTH)
