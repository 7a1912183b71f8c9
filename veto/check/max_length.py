from typing import Any

from pydantic import Field

from ..errors import Errors
from ..utils import ValueKind, classify
from .base import BoundaryOptions, Check, register_check


class MaxLengthOptions(BoundaryOptions):
    with_: int = Field(alias="with", ge=0)


@register_check
class MaxLengthCheck(Check):
    """
    Fails when the value is None, has no length, or is longer than
    ``with``. The maximum is recorded as the error argument.
    """

    kind = "max_length"
    default_message = "max_length"
    Options = MaxLengthOptions

    def check(
        self, attribute: str, value: Any, errors: Errors, options: MaxLengthOptions
    ) -> None:
        maximum = options.with_
        if classify(value) in (ValueKind.ABSENT, ValueKind.SCALAR):
            self.fail(attribute, errors, options, maximum)
        elif len(value) > maximum:
            self.fail(attribute, errors, options, maximum)
