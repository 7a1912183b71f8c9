# Copyright (c) 2023 - 2025, HaiyangLi <quantocean.li at gmail dot com>
#
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Iterator, Mapping
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any, Union

from ._errors import ConfigurationError
from .check import Check, CheckOptions, get_check
from .errors import Errors
from .utils import read_attribute

logger = logging.getLogger(__name__)

__all__ = (
    "CheckContext",
    "Rule",
    "MethodRule",
    "Checker",
)

COMMON_OPTIONS = frozenset(CheckOptions.model_fields)


@dataclass(slots=True, frozen=True)
class CheckContext:
    """Everything a rule needs for one validation run."""

    entity: Any
    validator: Any
    errors: Errors


@dataclass(slots=True, frozen=True)
class Rule:
    """A check bound to one attribute with fixed, validated options."""

    attribute: str
    check: Check
    options: CheckOptions

    @classmethod
    def build(
        cls, attribute: str, check: Check, options: Mapping[str, Any] | None = None
    ) -> Rule:
        return cls(
            attribute=attribute,
            check=check,
            options=check.build_options(options, attribute=attribute),
        )

    def __call__(self, context: CheckContext) -> None:
        value = read_attribute(context.entity, self.attribute)
        self.check.check(self.attribute, value, context.errors, self.options)


@dataclass(slots=True, frozen=True)
class MethodRule:
    """
    Ad-hoc validation delegated to the validator.

    ``target`` is either the name of a validator method, called as
    ``method(entity, **options)``, or a function called as
    ``target(validator, entity, **options)``. Either one records failures
    through ``validator.errors``.
    """

    target: str | Callable[[Any, Any], Any]
    options: Mapping[str, Any]

    def __call__(self, context: CheckContext) -> None:
        if isinstance(self.target, str):
            getattr(context.validator, self.target)(context.entity, **self.options)
        else:
            self.target(context.validator, context.entity, **self.options)


Child = Union[Rule, MethodRule, "Checker"]


def _normalize(value: Any) -> Mapping[str, Any] | None:
    if value is None or value is False:
        return None
    if value is True:
        return {}
    if isinstance(value, Mapping):
        return value
    return {"with": value}


class Checker:
    """
    Ordered collection of rules, run as one unit.

    Children are rules, method rules, or nested checkers. Calling the
    checker runs every child in registration order against the same
    context; a failing rule never stops the ones after it.

    Examples:
        checker = Checker()
        checker.validates("name", presence=True, max_length={"with": 10})
        with checker.with_options(on="title"):
            checker.validates("raw_title", presence=True)

        errors = Errors()
        checker(CheckContext(entity, validator, errors))
    """

    def __init__(self, children: Iterable[Child] | None = None):
        self._children: list[Child] = list(children or ())
        self._overlays: list[dict[str, Any]] = []

    @classmethod
    def from_children(cls, children: Iterable[Child]) -> Checker:
        """Create a checker holding its own copy of ``children``."""
        return cls(children)

    @property
    def children(self) -> tuple[Child, ...]:
        return tuple(self._children)

    def _shared_options(self) -> dict[str, Any]:
        shared: dict[str, Any] = {}
        for overlay in self._overlays:
            shared.update(overlay)
        return shared

    def validates(self, attribute: str, **check_options: Any) -> list[Rule]:
        """
        Register checks for one attribute.

        Each keyword naming a registered check kind adds one rule. The
        value may be ``True`` (default options), a mapping of options,
        or a bare value used as ``with``; ``False`` or ``None`` skips the
        check. Keywords naming common options such as ``message`` or
        ``on`` apply to every check in the call.

        Args:
            attribute: Attribute to read from the entity.
            **check_options: Check kinds and common options.

        Returns:
            list[Rule]: The rules added, in registration order.

        Raises:
            ConfigurationError: For an unknown keyword or bad option value.
            OptionNotFoundError: When a check is missing a required option.
        """
        common = {k: v for k, v in check_options.items() if k in COMMON_OPTIONS}
        shared = {**self._shared_options(), **common}

        rules = []
        for kind, value in check_options.items():
            if kind in COMMON_OPTIONS:
                continue
            check = get_check(kind)
            options = _normalize(value)
            if options is None:
                continue
            rules.append(Rule.build(attribute, check, {**shared, **options}))

        self._children.extend(rules)
        logger.debug(
            f"Registered {[r.check.kind for r in rules]} for '{attribute}'"
        )
        return rules

    def validate(
        self, target: str | Callable[[Any, Any], Any] | Rule | Checker, **options: Any
    ) -> Child:
        """
        Register custom validation.

        Args:
            target: A validator method name, a ``func(validator, entity)``
                callable, a prebuilt ``Rule``, or a nested ``Checker``.
            **options: Keyword arguments for the method or callable, merged
                over any active ``with_options`` overlay.
        """
        if isinstance(target, (Rule, Checker)):
            child = target
        elif isinstance(target, str) or callable(target):
            child = MethodRule(target, {**self._shared_options(), **options})
        else:
            raise ConfigurationError(
                f"Cannot validate with {target!r}",
                details={"type": type(target).__name__},
            )
        self._children.append(child)
        return child

    @contextmanager
    def with_options(self, **shared: Any) -> Iterator[Checker]:
        """
        Apply ``shared`` options to every rule registered inside the block.

        Options given explicitly to ``validates`` win over shared ones.
        Blocks nest, the innermost taking precedence.

        Examples:
            with checker.with_options(on="public_name"):
                checker.validates("internal_name", presence=True)
        """
        self._overlays.append(dict(shared))
        try:
            yield self
        finally:
            self._overlays.pop()

    def __call__(self, context: CheckContext) -> None:
        for child in self._children:
            child(context)

    def __len__(self) -> int:
        return len(self._children)

    def __iter__(self) -> Iterator[Child]:
        return iter(self.children)

    def __repr__(self) -> str:
        return f"Checker(children={len(self._children)})"
