from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import Any, ClassVar, TypeVar

from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError

from .._errors import ConfigurationError, OptionNotFoundError
from ..errors import Errors

__all__ = (
    "CheckOptions",
    "BoundaryOptions",
    "Check",
    "register_check",
    "get_check",
    "check_kinds",
)

C = TypeVar("C", bound=type["Check"])


class CheckOptions(BaseModel):
    """Options every check understands.

    Unknown keys are kept so custom checks can read their own settings
    through ``options.model_extra``.
    """

    model_config = ConfigDict(
        frozen=True,
        extra="allow",
        populate_by_name=True,
    )

    message: str | None = Field(
        default=None,
        description="Message key recorded on failure, defaults per check",
    )
    on: str | None = Field(
        default=None,
        description="Error key to record under, defaults to the attribute",
    )


class BoundaryOptions(CheckOptions):
    with_: int | float = Field(alias="with")


class Check(ABC):
    """
    Stateless validation logic for one kind of rule.

    A single instance is shared by every rule of its kind, so subclasses
    must not keep per-call state. Invalid data is reported by adding to
    ``errors``; only malformed options raise.
    """

    kind: ClassVar[str]
    default_message: ClassVar[str]
    Options: ClassVar[type[CheckOptions]] = CheckOptions

    def build_options(
        self, options: Mapping[str, Any] | None = None, *, attribute: str | None = None
    ) -> CheckOptions:
        """Validate raw options into this check's options model.

        Raises:
            OptionNotFoundError: If a required option is missing.
            ConfigurationError: If an option has an unusable value.
        """
        try:
            return self.Options.model_validate(dict(options or {}))
        except PydanticValidationError as e:
            for err in e.errors(include_url=False):
                if err["type"] == "missing":
                    raise OptionNotFoundError.from_option(
                        str(err["loc"][0]),
                        check=self.kind,
                        attribute=attribute,
                        cause=e,
                    ) from e
            raise ConfigurationError(
                f"Invalid options for check '{self.kind}'",
                details={
                    "attribute": attribute,
                    "errors": [
                        {"loc": list(err["loc"]), "msg": err["msg"]}
                        for err in e.errors(include_url=False)
                    ],
                },
                cause=e,
            ) from e

    def error_key(self, attribute: str, options: CheckOptions) -> str:
        return options.on or attribute

    def message(self, options: CheckOptions) -> str:
        return options.message or self.default_message

    def fail(
        self, attribute: str, errors: Errors, options: CheckOptions, *args: Any
    ) -> None:
        """Record a failure with the resolved error key and message."""
        errors.add(self.error_key(attribute, options), self.message(options), *args)

    @abstractmethod
    def check(
        self, attribute: str, value: Any, errors: Errors, options: CheckOptions
    ) -> None:
        """Inspect ``value`` and record any failure into ``errors``.

        Args:
            attribute: Name of the attribute the value was read from.
            value: The attribute value.
            errors: Shared accumulator for the current validation run.
            options: Options validated by ``build_options``.
        """

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(kind={self.kind!r})"


_CHECKS: dict[str, Check] = {}


def register_check(check_cls: C) -> C:
    """Register a check class under its ``kind``. Usable as a decorator.

    Registering a kind again replaces the earlier check for rules
    registered afterwards.
    """
    kind = getattr(check_cls, "kind", None)
    if not kind:
        raise ConfigurationError(
            f"{check_cls.__name__} must define a 'kind' to be registered"
        )
    _CHECKS[kind] = check_cls()
    return check_cls


def get_check(kind: str) -> Check:
    try:
        return _CHECKS[kind]
    except KeyError as e:
        raise ConfigurationError(
            f"Unknown check '{kind}'",
            details={"available": sorted(_CHECKS)},
            cause=e,
        ) from e


def check_kinds() -> list[str]:
    return list(_CHECKS)
