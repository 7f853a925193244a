from __future__ import annotations

from typing import Hashable, Iterable

from reel_catalog.domain.errors import ValidationError


class Validator:
    """
    Accumulates field-keyed validation failures.

    Each key holds a single message: the first failing check for a key wins,
    later failures against the same key are ignored.
    """

    def __init__(self) -> None:
        self.errors: dict[str, str] = {}

    def valid(self) -> bool:
        return not self.errors

    def add_error(self, key: str, message: str) -> None:
        if key not in self.errors:
            self.errors[key] = message

    def check(self, ok: bool, key: str, message: str) -> None:
        if not ok:
            self.add_error(key, message)

    def raise_if_invalid(self) -> None:
        """
        Raises:
            ValidationError: Carrying every recorded field/message pair
        """
        if not self.valid():
            raise ValidationError.from_field_errors(self.errors)


def permitted_value(value: Hashable, *permitted: Hashable) -> bool:
    return value in permitted


def unique(values: Iterable[Hashable]) -> bool:
    """True when no value appears more than once."""
    items = list(values)
    return len(set(items)) == len(items)
