"""Paths that address a node inside a Value tree.

Syntax:

- ``.`` is the root node
- ``.[n]`` is the element at index ``n`` of the root array
- ``.name`` is the member ``name`` of the root object
- ``.name1.name2.name3`` and ``.[0][1][2].name1[3]`` chain steps
- ``.%`` takes a member name from the arguments
- ``.[%]`` takes an index from the arguments
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from jsontree.value import JsonError, Value


class _Kind(Enum):
    NONE = 0
    INDEX = 1
    KEY = 2


class PathArgument:
    """One step of a path: an array index, a member name, or nothing."""

    __slots__ = ("kind", "index", "key")

    def __init__(self, value: int | str | None = None) -> None:
        self.index = 0
        self.key = ""
        if value is None:
            self.kind = _Kind.NONE
        elif isinstance(value, bool) or not isinstance(value, (int, str)):
            raise TypeError("a path argument is an int index or a str member name")
        elif isinstance(value, int):
            if value < 0:
                raise IndexError("array index cannot be negative")
            self.kind = _Kind.INDEX
            self.index = value
        else:
            self.kind = _Kind.KEY
            self.key = value

    @property
    def is_index(self) -> bool:
        return self.kind is _Kind.INDEX

    @property
    def is_key(self) -> bool:
        return self.kind is _Kind.KEY

    def _step(self) -> int | str:
        return self.index if self.kind is _Kind.INDEX else self.key

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PathArgument):
            return NotImplemented
        return self.kind is other.kind and self._step() == other._step()

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        if self.kind is _Kind.NONE:
            return "PathArgument()"
        return f"PathArgument({self._step()!r})"


def _as_argument(value: Any) -> PathArgument:
    return value if isinstance(value, PathArgument) else PathArgument(value)


class Path:
    """A parsed path; resolve() reads along it and make() creates it."""

    __slots__ = ("arguments",)

    def __init__(self, path: str, *args: Any) -> None:
        supplied = iter(_as_argument(arg) for arg in args)
        self.arguments: tuple[PathArgument, ...] = tuple(self._parse(path, supplied))

    @staticmethod
    def _take(path: str, supplied, kind: _Kind, position: int) -> PathArgument:
        argument = next(supplied, None)
        if argument is None:
            raise ValueError(f"missing argument for '%' at position {position} in path {path!r}")
        if argument.kind is not kind:
            wanted = "an index" if kind is _Kind.INDEX else "a member name"
            raise TypeError(f"'%' at position {position} in path {path!r} needs {wanted}")
        return argument

    @classmethod
    def _parse(cls, path: str, supplied):
        current = 0
        end = len(path)
        while current != end:
            char = path[current]
            if char == "[":
                current += 1
                if current != end and path[current] == "%":
                    yield cls._take(path, supplied, _Kind.INDEX, current)
                    current += 1
                else:
                    start = current
                    while current != end and path[current].isdigit() and path[current].isascii():
                        current += 1
                    yield PathArgument(int(path[start:current]) if current > start else 0)
                if current == end or path[current] != "]":
                    raise ValueError(f"invalid path {path!r} at position {current}")
                current += 1
            elif char == "%":
                yield cls._take(path, supplied, _Kind.KEY, current)
                current += 1
            elif char == ".":
                current += 1
            else:
                start = current
                while current != end and path[current] not in "[.":
                    current += 1
                yield PathArgument(path[start:current])

    def resolve(self, root: Value, *args: Any) -> Value:
        """The node the path leads to.

        With no default, a missing element or member gives null and a node of
        the wrong type raises JsonError. With a default, any failure returns it.
        """
        if len(args) > 1:
            raise TypeError("resolve() takes at most one default value")
        has_default = bool(args)
        node = root
        for argument in self.arguments:
            if argument.kind is _Kind.NONE:
                continue
            if has_default:
                wrong_type = (
                    not node.is_array() if argument.is_index else not node.is_object()
                )
                if wrong_type:
                    return Value(args[0])
                found = node._lookup(argument._step())
                if found is None:
                    return Value(args[0])
                node = found
            else:
                found = node._lookup(argument._step())
                if found is None:
                    return Value()
                node = found
        return node

    def make(self, root: Value) -> Value:
        """Create every node along the path and return the last one."""
        node = root
        for argument in self.arguments:
            if argument.kind is _Kind.NONE:
                continue
            node = node[argument._step()]
        return node

    def __repr__(self) -> str:
        return f"Path({list(self.arguments)!r})"


__all__ = ["JsonError", "Path", "PathArgument"]