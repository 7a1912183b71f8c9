# Copyright (c) 2023 - 2025, HaiyangLi <quantocean.li at gmail dot com>
#
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

import dataclasses
import inspect
import logging
import weakref
from collections.abc import Callable, Iterable, Mapping
from contextlib import AbstractContextManager
from typing import Any, ClassVar

from ._errors import InvalidEntity
from .checker import CheckContext, Checker, Child, Rule
from .config import VetoSettings, settings
from .errors import Errors

logger = logging.getLogger(__name__)

__all__ = (
    "Validator",
    "build_checker",
    "checker_for",
)

_MISSING = object()

# One checker per validator class, released with the class.
_CHECKERS: weakref.WeakKeyDictionary[type, Checker] = (
    weakref.WeakKeyDictionary()
)


def build_checker(children: Iterable[Child] = ()) -> Checker:
    return Checker.from_children(children)


def checker_for(validator_cls: type) -> Checker:
    """Return the checker registered for ``validator_cls``, creating it on first use."""
    checker = _CHECKERS.get(validator_cls)
    if checker is None:
        checker = _CHECKERS[validator_cls] = build_checker()
    return checker


def _accepts_errors(entity: Any, name: str) -> bool:
    """Whether ``entity`` exposes an assignable attribute called ``name``."""
    if isinstance(entity, Mapping):
        return False
    if dataclasses.is_dataclass(entity) and entity.__dataclass_params__.frozen:
        return False

    attr = inspect.getattr_static(type(entity), name, _MISSING)
    if isinstance(attr, property):
        return attr.fset is not None
    if attr is not _MISSING:
        if hasattr(attr, "__set__"):
            return True
        return not callable(attr)

    return name in getattr(entity, "__dict__", {})


class Validator:
    """
    Declarative validation for entities.

    Subclass and register rules on the class. Every subclass starts with
    a copy of its parents' rules and may only add to them; rules added to
    a subclass are never seen by its parents or siblings.

    Examples:
        class PersonValidator(Validator):
            pass

        PersonValidator.validates("name", presence=True, max_length=20)
        with PersonValidator.with_options(on="age"):
            PersonValidator.validates("age_text", greater_than_or_equal_to=0)

        class EmployeeValidator(PersonValidator):
            pass

        EmployeeValidator.validates("employee_id", presence=True)

        validator = EmployeeValidator()
        validator.is_valid(employee)  # False
        validator.errors["employee_id"]  # [ErrorEntry("presence", ())]
        validator.validate_or_raise(employee)  # raises InvalidEntity
    """

    settings: ClassVar[VetoSettings] = settings

    def __init_subclass__(cls, **kwargs: Any) -> None:
        """Give each subclass its own checker seeded with its parents' rules."""
        super().__init_subclass__(**kwargs)
        inherited: list[Child] = []
        for base in cls.__bases__:
            if not (isinstance(base, type) and issubclass(base, Validator)):
                continue
            for child in checker_for(base).children:
                if not any(child is c for c in inherited):
                    inherited.append(child)
        cls.check_with(build_checker(inherited))

    # class level ------------------------------------------------------

    @classmethod
    def checker(cls) -> Checker:
        return checker_for(cls)

    @classmethod
    def check_with(cls, checker: Checker) -> None:
        """Replace the checker used by this class."""
        _CHECKERS[cls] = checker

    @classmethod
    def validates(cls, attribute: str, **check_options: Any) -> list[Rule]:
        return cls.checker().validates(attribute, **check_options)

    @classmethod
    def validate(
        cls, target: str | Callable[..., Any] | Rule | Checker, **options: Any
    ) -> Child:
        return cls.checker().validate(target, **options)

    @classmethod
    def with_options(cls, **shared: Any) -> AbstractContextManager[Checker]:
        return cls.checker().with_options(**shared)

    # instance level ---------------------------------------------------

    @property
    def errors(self) -> Errors:
        """Errors from the current or most recent validation run."""
        if getattr(self, "_errors", None) is None:
            self._errors = Errors()
        return self._errors

    def clear_errors(self) -> None:
        self._errors = None

    def is_valid(self, entity: Any) -> bool:
        """Run every rule against ``entity`` and report whether all passed."""
        self._run(entity)
        return self.errors.empty

    def validate_or_raise(self, entity: Any) -> None:
        """
        Validate ``entity``, raising when any rule fails.

        Raises:
            InvalidEntity: Carrying the same Errors object as ``self.errors``.
        """
        if not self.is_valid(entity):
            raise InvalidEntity(self.errors)

    def _run(self, entity: Any) -> None:
        self.clear_errors()
        checker = type(self).checker()
        checker(CheckContext(entity=entity, validator=self, errors=self.errors))
        self._populate_entity_errors(entity)
        logger.debug(
            f"{type(self).__name__} ran {len(checker)} rules on "
            f"{type(entity).__name__}, failing: {self.errors.keys()}"
        )

    def _populate_entity_errors(self, entity: Any) -> None:
        if not self.settings.POPULATE_ENTITY_ERRORS:
            return
        name = self.settings.ERRORS_ATTRIBUTE
        if _accepts_errors(entity, name):
            setattr(entity, name, self.errors)
