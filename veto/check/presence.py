from typing import Any

from ..errors import Errors
from ..utils import ValueKind, classify
from .base import Check, CheckOptions, register_check

# Unicode spaces such as NBSP count as content.
BLANK = " \t\n\r\f\v"


@register_check
class PresenceCheck(Check):
    """
    Fails when the value is None, an empty container, or text that is
    empty once whitespace is stripped.
    """

    kind = "presence"
    default_message = "presence"

    def check(
        self, attribute: str, value: Any, errors: Errors, options: CheckOptions
    ) -> None:
        match classify(value):
            case ValueKind.ABSENT:
                missing = True
            case ValueKind.TEXT:
                missing = not value.strip(BLANK)
            case ValueKind.CONTAINER:
                missing = len(value) == 0
            case _:
                missing = False

        if missing:
            self.fail(attribute, errors, options)
