import struct

import pydantic
import pytest

from eventboard.schemas.base import to_float32
from eventboard.schemas.event import EventCreate, EventResponse
from eventboard.schemas.user import UserResponse


def test_event_create_accepts_camel_case():
    event = EventCreate.model_validate({
        "title": "Trip",
        "startDate": 1691226000,
        "endDate": 1691830800,
        "locationLng": 7.4142,
    })

    assert event.start_date == 1691226000
    assert event.end_date == 1691830800
    assert event.description is None
    assert event.location_lat is None


@pytest.mark.parametrize("missing", ["title", "startDate", "endDate"])
def test_event_create_requires_fields(missing):
    data = {"title": "Trip", "startDate": 1, "endDate": 2}
    del data[missing]

    with pytest.raises(pydantic.ValidationError):
        EventCreate.model_validate(data)


def test_timestamps_must_fit_signed_64_bit():
    with pytest.raises(pydantic.ValidationError):
        EventCreate.model_validate({"title": "Trip", "startDate": 2 ** 63, "endDate": 1})


def test_coordinates_are_single_precision():
    event = EventCreate.model_validate({
        "title": "Trip", "startDate": 1, "endDate": 2, "locationLat": 60.0520,
    })

    expected = struct.unpack("f", struct.pack("f", 60.0520))[0]
    assert event.location_lat == expected
    assert event.location_lat != 60.0520


def test_to_float32_rejects_out_of_range():
    with pytest.raises(ValueError):
        to_float32(1e300)
    with pytest.raises(ValueError):
        to_float32(3.5e38)
    with pytest.raises(ValueError):
        to_float32(float("nan"))


def test_event_response_serializes_camel_case():
    response = EventResponse(
        id=1,
        title="Trip",
        description=None,
        color=None,
        start_date=1691226000,
        end_date=1691830800,
        location_lng=None,
        location_lat=None,
        created_at=1700000000,
        edited_at=None,
    )

    assert response.model_dump(by_alias=True) == {
        "id": 1,
        "title": "Trip",
        "description": None,
        "color": None,
        "startDate": 1691226000,
        "endDate": 1691830800,
        "locationLng": None,
        "locationLat": None,
        "createdAt": 1700000000,
        "editedAt": None,
    }


def test_user_response_serializes_camel_case():
    assert UserResponse(username="alice", created_at=5).model_dump(by_alias=True) == {
        "username": "alice",
        "createdAt": 5,
    }
