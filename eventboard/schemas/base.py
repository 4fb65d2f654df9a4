# Shared pydantic building blocks

import math
import struct
from typing import Annotated

from pydantic import AfterValidator, BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

INT64_MIN = -(2 ** 63)
INT64_MAX = 2 ** 63 - 1

# Unix epoch seconds, signed 64-bit
UnixTimestamp = Annotated[int, Field(ge=INT64_MIN, le=INT64_MAX)]


def to_float32(value: float) -> float:
    """Round a float to the nearest single precision value"""
    if not math.isfinite(value):
        raise ValueError("Coordinate must be a finite number")
    # Depending on the interpreter, packing an out-of-range value either
    # raises OverflowError or yields inf
    try:
        rounded = struct.unpack("f", struct.pack("f", value))[0]
    except OverflowError:
        rounded = math.inf
    if not math.isfinite(rounded):
        raise ValueError("Coordinate is out of range for single precision")
    return rounded


Float32 = Annotated[float, AfterValidator(to_float32)]


class CamelModel(BaseModel):
    """JSON uses camelCase names; snake_case is accepted on input too"""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True
    )
