"""Walk the elements of an array or the members of an object with their keys."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator

from jsontree.value import MAX_UINT, Value, ValueType


@dataclass(frozen=True)
class Entry:
    """One element of an array or member of an object.

    value is the stored node itself, so changing it changes the container.
    """

    value: Value
    position: int | str

    def key(self) -> Value:
        """The index or member name as a Value."""
        return Value(self.position)

    def index(self) -> int:
        """The array index, or MAX_UINT for an object member."""
        return self.position if isinstance(self.position, int) else MAX_UINT

    def member_name(self) -> str:
        """The member name, or "" for an array element."""
        return self.position if isinstance(self.position, str) else ""


def entries(value: Value) -> Iterator[Entry]:
    """Array elements in order, or object members by name; nothing otherwise."""
    kind = value.type()
    if kind is ValueType.ARRAY:
        for position, item in enumerate(value):
            yield Entry(item, position)
    elif kind is ValueType.OBJECT:
        for name, item in zip(value.member_names(), value):
            yield Entry(item, name)


__all__ = ["Entry", "entries"]