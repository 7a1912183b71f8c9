# Copyright (c) 2023 - 2025, HaiyangLi <quantocean.li at gmail dot com>
#
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

from collections.abc import Callable, Iterator
from dataclasses import dataclass
from typing import Any

__all__ = ("ErrorEntry", "Errors")


@dataclass(slots=True, frozen=True)
class ErrorEntry:
    """A single recorded failure: message key plus interpolation args."""

    message: str
    args: tuple[Any, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {"message": self.message, "args": list(self.args)}


def _default_render(key: str, message: str, args: tuple[Any, ...]) -> str:
    return f"{key} {message}"


class Errors:
    """
    Append-only collection of validation failures keyed by error key.

    Each key maps to the ordered list of entries recorded under it. A key
    is only present once something has been added to it, so an empty
    collection means every rule passed.

    Examples:
        errors = Errors()
        errors.add("name", "presence").add("name", "max_length", 10)
        assert errors["name"][1].args == (10,)
        assert not errors.empty
    """

    def __init__(self):
        self._entries: dict[str, list[ErrorEntry]] = {}

    def add(self, key: str, message: str, *args: Any) -> Errors:
        """Record a failure under ``key``. Returns self for chaining."""
        self._entries.setdefault(key, []).append(ErrorEntry(message, args))
        return self

    @property
    def empty(self) -> bool:
        """True when no failure has been recorded."""
        return not self._entries

    def get(self, key: str) -> list[ErrorEntry]:
        return list(self._entries.get(key, ()))

    def keys(self) -> list[str]:
        return list(self._entries)

    def items(self) -> list[tuple[str, list[ErrorEntry]]]:
        return [(k, list(v)) for k, v in self._entries.items()]

    def count(self) -> int:
        """Total number of entries across all keys."""
        return sum(len(v) for v in self._entries.values())

    def to_dict(self) -> dict[str, list[dict[str, Any]]]:
        return {
            k: [entry.to_dict() for entry in v]
            for k, v in self._entries.items()
        }

    def full_messages(
        self,
        render: Callable[[str, str, tuple[Any, ...]], str] | None = None,
    ) -> list[str]:
        """
        Render every entry to a string, in recording order.

        Args:
            render: Called as ``render(key, message, args)``. Message lookup
                and interpolation belong to the caller; the default simply
                joins the key and message key.
        """
        render = render or _default_render
        return [
            render(k, entry.message, entry.args)
            for k, v in self._entries.items()
            for entry in v
        ]

    def __getitem__(self, key: str) -> list[ErrorEntry]:
        return self.get(key)

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._entries))

    def __len__(self) -> int:
        return len(self._entries)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Errors):
            return NotImplemented
        return self._entries == other._entries

    __hash__ = None

    def __repr__(self) -> str:
        return f"Errors({self.to_dict()!r})"
