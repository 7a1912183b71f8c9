from .base import (
    BoundaryOptions,
    Check,
    CheckOptions,
    check_kinds,
    get_check,
    register_check,
)
from .max_length import MaxLengthCheck, MaxLengthOptions
from .number import GreaterThanOrEqualToCheck
from .presence import PresenceCheck

__all__ = [
    # Base classes
    "Check",
    "CheckOptions",
    "BoundaryOptions",
    # Registry
    "register_check",
    "get_check",
    "check_kinds",
    # Built-in checks
    "PresenceCheck",
    "MaxLengthCheck",
    "MaxLengthOptions",
    "GreaterThanOrEqualToCheck",
]
