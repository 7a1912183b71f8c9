# Copyright (c) 2023 - 2025, HaiyangLi <quantocean.li at gmail dot com>
#
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

from typing import TYPE_CHECKING, Any, ClassVar

if TYPE_CHECKING:
    from .errors import Errors

__all__ = (
    "VetoError",
    "ConfigurationError",
    "OptionNotFoundError",
    "InvalidEntity",
)


class VetoError(Exception):
    default_message: ClassVar[str] = "Veto error"
    status_code: ClassVar[int] = 500

    def __init__(
        self,
        message: str | None = None,
        *,
        details: dict[str, Any] | None = None,
        status_code: int | None = None,
        cause: Exception | None = None,
    ):
        super().__init__(message or self.default_message)
        if cause:
            self.__cause__ = cause  # preserves traceback
        self.message = message or self.default_message
        self.details = details or {}
        self.status_code = status_code or self.status_code

    def __str__(self) -> str:
        return self.message

    def to_dict(self, *, include_cause: bool = False) -> dict[str, Any]:
        data = {
            "error": self.__class__.__name__,
            "message": self.message,
            "status_code": self.status_code,
            **({"details": self.details} if self.details else {}),
        }
        if include_cause and (cause := self.get_cause()):
            data["cause"] = repr(cause)
        return data

    def get_cause(self) -> Exception | None:
        """Get the cause of this error, if any."""
        return self.__cause__


class ConfigurationError(VetoError):
    """Raised when a rule definition is malformed."""

    default_message = "Invalid validation rule configuration"


class OptionNotFoundError(ConfigurationError, KeyError):
    """Raised when a check is registered without a required option."""

    default_message = "Required check option missing"

    @classmethod
    def from_option(
        cls,
        option: str,
        *,
        check: str | None = None,
        attribute: str | None = None,
        cause: Exception | None = None,
    ):
        """Create an OptionNotFoundError naming the missing option."""
        where = f" for check '{check}'" if check else ""
        if attribute:
            where += f" on attribute '{attribute}'"
        details = {
            "option": option,
            **({"check": check} if check else {}),
            **({"attribute": attribute} if attribute else {}),
        }
        return cls(
            f"Missing required option '{option}'{where}",
            details=details,
            cause=cause,
        )


class InvalidEntity(VetoError):
    """Raised by ``validate_or_raise`` when an entity fails validation."""

    default_message = "Entity is invalid"
    status_code = 422  # Unprocessable Entity

    def __init__(self, errors: Errors, message: str | None = None):
        if message is None and errors is not None:
            keys = ", ".join(errors.keys())
            message = f"{self.default_message}: {keys}" if keys else None
        super().__init__(
            message,
            details=errors.to_dict() if errors is not None else None,
        )
        self.errors = errors
