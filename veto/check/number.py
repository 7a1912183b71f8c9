from typing import Any

from ..errors import Errors
from ..utils import parse_float
from .base import BoundaryOptions, Check, register_check


@register_check
class GreaterThanOrEqualToCheck(Check):
    """
    Fails unless the value's text form parses as a number that is at
    least ``with``.

    Text that is not a number is recorded exactly like a number that is
    too small: same message key, same boundary argument.
    """

    kind = "greater_than_or_equal_to"
    default_message = "greater_than_or_equal_to"
    Options = BoundaryOptions

    def check(
        self, attribute: str, value: Any, errors: Errors, options: BoundaryOptions
    ) -> None:
        boundary = options.with_
        number = parse_float(value)
        if number is None or not number >= boundary:
            self.fail(attribute, errors, options, boundary)
