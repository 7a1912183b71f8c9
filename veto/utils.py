# Copyright (c) 2023 - 2025, HaiyangLi <quantocean.li at gmail dot com>
#
# SPDX-License-Identifier: Apache-2.0

import math
from collections.abc import Mapping, Sized
from enum import Enum
from typing import Any

__all__ = (
    "ValueKind",
    "classify",
    "parse_float",
    "read_attribute",
)


class ValueKind(str, Enum):
    """How a check should treat an attribute value."""

    ABSENT = "absent"
    TEXT = "text"
    CONTAINER = "container"
    SCALAR = "scalar"


def classify(value: Any) -> ValueKind:
    if value is None:
        return ValueKind.ABSENT
    if isinstance(value, str):
        return ValueKind.TEXT
    if isinstance(value, Sized):
        return ValueKind.CONTAINER
    return ValueKind.SCALAR


def parse_float(value: Any) -> float | None:
    """Parse the text form of ``value`` as a float.

    Returns None when the text is not a finite number, so callers can
    branch on the result instead of catching. Infinity and NaN spellings
    count as not a number.
    """
    try:
        number = float("" if value is None else str(value))
    except (TypeError, ValueError, OverflowError):
        return None
    return number if math.isfinite(number) else None


def read_attribute(entity: Any, attribute: str) -> Any:
    """Read a named attribute from an entity.

    Mappings are read by key and a missing key reads as None. Any other
    object is read with attribute lookup, so a misspelled attribute name
    surfaces as AttributeError.
    """
    if isinstance(entity, Mapping):
        return entity.get(attribute)
    return getattr(entity, attribute)
