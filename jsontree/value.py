"""The JSON value tree: a tagged union of null, numbers, strings, booleans,
arrays and objects, with comments attached to each node."""

from __future__ import annotations

from enum import IntEnum
from typing import Any, Iterator

MIN_INT = -(2**31)
MAX_INT = 2**31 - 1
MAX_UINT = 2**32 - 1


class ValueType(IntEnum):
    """Type of the value held by a Value; the order is used for sorting."""

    NULL = 0
    INT = 1
    UINT = 2
    REAL = 3
    STRING = 4
    BOOLEAN = 5
    ARRAY = 6
    OBJECT = 7


class CommentPlacement(IntEnum):
    """Where a comment sits relative to the value it belongs to."""

    BEFORE = 0
    AFTER_ON_SAME_LINE = 1
    AFTER = 2


class JsonError(RuntimeError):
    """Raised when a value is used in a way its type does not allow."""


def _default_payload(value_type: ValueType) -> Any:
    if value_type is ValueType.INT or value_type is ValueType.UINT:
        return 0
    if value_type is ValueType.REAL:
        return 0.0
    if value_type is ValueType.BOOLEAN:
        return False
    if value_type is ValueType.ARRAY:
        return []
    if value_type is ValueType.OBJECT:
        return {}
    return None


def _from_python(value: Any) -> tuple[ValueType, Any]:
    if value is None:
        return ValueType.NULL, None
    if isinstance(value, ValueType):
        return value, _default_payload(value)
    if isinstance(value, bool):
        return ValueType.BOOLEAN, value
    if isinstance(value, int):
        if MIN_INT <= value <= MAX_INT:
            return ValueType.INT, value
        if 0 <= value <= MAX_UINT:
            return ValueType.UINT, value
        raise OverflowError(f"integer {value} does not fit a JSON value")
    if isinstance(value, float):
        return ValueType.REAL, value
    if isinstance(value, str):
        return ValueType.STRING, value
    if isinstance(value, (list, tuple)):
        return ValueType.ARRAY, [Value(item) for item in value]
    if isinstance(value, dict):
        members = {}
        for key, item in value.items():
            if not isinstance(key, str):
                raise TypeError("object member names must be strings")
            members[key] = Value(item)
        return ValueType.OBJECT, members
    raise TypeError(f"cannot build a JSON value from {type(value).__name__}")


def _coerce(value: Any) -> Value:
    return value if isinstance(value, Value) else Value(value)


class Value:
    """A JSON value.

    Indexing with an int treats the value as an array and with a str as an
    object; indexing a null value turns it into that container, and missing
    entries are created as null. Use get() to read without creating.
    """

    __slots__ = ("_type", "_value", "_comments")
    __hash__ = None  # type: ignore[assignment]

    def __init__(self, value: Any = None) -> None:
        self._comments: dict[CommentPlacement, str] = {}
        if isinstance(value, Value):
            self._type = value._type
            self._value = value._copy_payload()
            self._comments = dict(value._comments)
        else:
            self._type, self._value = _from_python(value)

    # -- identity and copying -------------------------------------------

    def type(self) -> ValueType:
        """The type of the held value."""
        return self._type

    def _copy_payload(self) -> Any:
        if self._type is ValueType.ARRAY:
            return [item.copy() for item in self._value]
        if self._type is ValueType.OBJECT:
            return {key: item.copy() for key, item in self._value.items()}
        return self._value

    def copy(self) -> Value:
        """A deep copy, comments included."""
        return Value(self)

    def swap(self, other: Value) -> None:
        """Exchange contents with other; comments stay where they are."""
        self._type, other._type = other._type, self._type
        self._value, other._value = other._value, self._value

    def _become(self, value_type: ValueType) -> None:
        self._type = value_type
        self._value = _default_payload(value_type)

    def __repr__(self) -> str:
        return f"Value({self._type.name}, {self._value!r})"

    # -- comparison -----------------------------------------------------

    def __eq__(self, other: object) -> bool:
        try:
            other = _coerce(other)
        except (TypeError, OverflowError):
            return NotImplemented
        if self._type is not other._type:
            return False
        return self._value == other._value

    def __lt__(self, other: Any) -> bool:
        other = _coerce(other)
        if self._type is not other._type:
            return self._type < other._type
        kind = self._type
        if kind is ValueType.NULL:
            return False
        if kind is ValueType.STRING:
            if self._value is None:
                return other._value is not None
            return other._value is not None and self._value < other._value
        if kind in (ValueType.ARRAY, ValueType.OBJECT):
            if len(self._value) != len(other._value):
                return len(self._value) < len(other._value)
            if kind is ValueType.ARRAY:
                return self._value < other._value
            return sorted(self._value.items()) < sorted(other._value.items())
        return self._value < other._value

    def __le__(self, other: Any) -> bool:
        return not _coerce(other) < self

    def __gt__(self, other: Any) -> bool:
        return _coerce(other) < self

    def __ge__(self, other: Any) -> bool:
        return not self < other

    def compare(self, other: Any) -> int:
        """Three-way comparison: -1, 0 or 1."""
        other = _coerce(other)
        if self < other:
            return -1
        if other < self:
            return 1
        return 0

    # -- conversions ----------------------------------------------------

    def as_string(self) -> str:
        kind = self._type
        if kind is ValueType.NULL:
            return ""
        if kind is ValueType.STRING:
            return self._value or ""
        if kind is ValueType.BOOLEAN:
            return "true" if self._value else "false"
        raise JsonError("Type is not convertible to string")

    def as_int(self) -> int:
        kind = self._type
        if kind is ValueType.NULL:
            return 0
        if kind is ValueType.INT:
            return self._value
        if kind is ValueType.UINT:
            if not self._value < MAX_INT:
                raise JsonError("integer out of signed integer range")
            return self._value
        if kind is ValueType.REAL:
            if not MIN_INT <= self._value <= MAX_INT:
                raise JsonError("Real out of signed integer range")
            return int(self._value)
        if kind is ValueType.BOOLEAN:
            return 1 if self._value else 0
        raise JsonError("Type is not convertible to int")

    def as_uint(self) -> int:
        kind = self._type
        if kind is ValueType.NULL:
            return 0
        if kind is ValueType.INT:
            if self._value < 0:
                raise JsonError(
                    "Negative integer can not be converted to unsigned integer"
                )
            return self._value
        if kind is ValueType.UINT:
            return self._value
        if kind is ValueType.REAL:
            if not 0 <= self._value <= MAX_UINT:
                raise JsonError("Real out of unsigned integer range")
            return int(self._value)
        if kind is ValueType.BOOLEAN:
            return 1 if self._value else 0
        raise JsonError("Type is not convertible to uint")

    def as_float(self) -> float:
        kind = self._type
        if kind is ValueType.NULL:
            return 0.0
        if kind in (ValueType.INT, ValueType.UINT, ValueType.REAL):
            return float(self._value)
        if kind is ValueType.BOOLEAN:
            return 1.0 if self._value else 0.0
        raise JsonError("Type is not convertible to double")

    def as_bool(self) -> bool:
        kind = self._type
        if kind is ValueType.NULL:
            return False
        if kind is ValueType.STRING:
            return bool(self._value)
        if kind in (ValueType.ARRAY, ValueType.OBJECT):
            return len(self._value) != 0
        return bool(self._value)

    # -- type predicates ------------------------------------------------

    def is_null(self) -> bool:
        return self._type is ValueType.NULL

    def is_bool(self) -> bool:
        return self._type is ValueType.BOOLEAN

    def is_int(self) -> bool:
        return self._type is ValueType.INT

    def is_uint(self) -> bool:
        return self._type is ValueType.UINT

    def is_integral(self) -> bool:
        return self._type in (ValueType.INT, ValueType.UINT, ValueType.BOOLEAN)

    def is_double(self) -> bool:
        return self._type is ValueType.REAL

    def is_numeric(self) -> bool:
        return self.is_integral() or self.is_double()

    def is_string(self) -> bool:
        return self._type is ValueType.STRING

    def is_array(self) -> bool:
        """True for arrays and for null, which can become an array."""
        return self._type in (ValueType.NULL, ValueType.ARRAY)

    def is_object(self) -> bool:
        """True for objects and for null, which can become an object."""
        return self._type in (ValueType.NULL, ValueType.OBJECT)

    def is_convertible_to(self, other: ValueType) -> bool:
        kind = self._type
        v = self._value
        if kind is ValueType.NULL:
            return True
        if kind is ValueType.INT:
            return (
                (other is ValueType.NULL and v == 0)
                or (other is ValueType.UINT and v >= 0)
                or other
                in (ValueType.INT, ValueType.REAL, ValueType.STRING, ValueType.BOOLEAN)
            )
        if kind is ValueType.UINT:
            return (
                (other is ValueType.NULL and v == 0)
                or (other is ValueType.INT and v <= MAX_INT)
                or other
                in (ValueType.UINT, ValueType.REAL, ValueType.STRING, ValueType.BOOLEAN)
            )
        if kind is ValueType.REAL:
            return (
                (other is ValueType.NULL and v == 0.0)
                or (other is ValueType.INT and MIN_INT <= v <= MAX_INT)
                or (other is ValueType.UINT and 0 <= v <= MAX_UINT)
                or other in (ValueType.REAL, ValueType.STRING, ValueType.BOOLEAN)
            )
        if kind is ValueType.BOOLEAN:
            return (other is ValueType.NULL and not v) or other is not ValueType.NULL
        if kind is ValueType.STRING:
            return other is ValueType.STRING or (other is ValueType.NULL and not v)
        return other is kind or (other is ValueType.NULL and len(v) == 0)

    # -- containers -----------------------------------------------------

    def __len__(self) -> int:
        if self._type in (ValueType.ARRAY, ValueType.OBJECT):
            return len(self._value)
        return 0

    def __bool__(self) -> bool:
        return not self.is_null()

    def empty(self) -> bool:
        """True for null and for an empty array or object."""
        if self.is_null() or self.is_array() or self.is_object():
            return len(self) == 0
        return False

    def _require(self, *kinds: ValueType) -> None:
        if self._type not in kinds:
            names = " or ".join(kind.name.lower() for kind in kinds)
            raise JsonError(f"operation requires a {names} value, not {self._type.name.lower()}")

    def clear(self) -> None:
        """Remove all elements or members; the type is unchanged."""
        self._require(ValueType.NULL, ValueType.ARRAY, ValueType.OBJECT)
        if self._type is not ValueType.NULL:
            self._value.clear()

    def resize(self, size: int) -> None:
        """Resize an array, padding with null; a null value becomes an array."""
        self._require(ValueType.NULL, ValueType.ARRAY)
        if size < 0:
            raise ValueError("array size cannot be negative")
        if self._type is ValueType.NULL:
            self._become(ValueType.ARRAY)
        items = self._value
        if size < len(items):
            del items[size:]
        else:
            items.extend(Value() for _ in range(size - len(items)))

    @staticmethod
    def _check_key(key: Any) -> None:
        if isinstance(key, bool) or not isinstance(key, (int, str)):
            raise TypeError("key must be an int index or a str member name")
        if isinstance(key, int) and key < 0:
            raise IndexError("array index cannot be negative")

    def __getitem__(self, key: int | str) -> Value:
        self._check_key(key)
        if isinstance(key, int):
            self._require(ValueType.NULL, ValueType.ARRAY)
            if self._type is ValueType.NULL:
                self._become(ValueType.ARRAY)
            items = self._value
            if key >= len(items):
                items.extend(Value() for _ in range(key + 1 - len(items)))
            return items[key]
        self._require(ValueType.NULL, ValueType.OBJECT)
        if self._type is ValueType.NULL:
            self._become(ValueType.OBJECT)
        return self._value.setdefault(key, Value())

    def __setitem__(self, key: int | str, value: Any) -> None:
        target = self[key]
        replacement = Value(value)
        target.swap(replacement)

    def _lookup(self, key: int | str) -> Value | None:
        self._check_key(key)
        if isinstance(key, int):
            self._require(ValueType.NULL, ValueType.ARRAY)
            if self._type is ValueType.NULL or key >= len(self._value):
                return None
            return self._value[key]
        self._require(ValueType.NULL, ValueType.OBJECT)
        if self._type is ValueType.NULL:
            return None
        return self._value.get(key)

    def __contains__(self, key: object) -> bool:
        if isinstance(key, str):
            return self.is_member(key)
        if isinstance(key, int) and not isinstance(key, bool):
            return self.is_valid_index(key)
        return False

    def __iter__(self) -> Iterator[Value]:
        """Yield array elements in order, or object values by member name."""
        if self._type is ValueType.ARRAY:
            yield from self._value
        elif self._type is ValueType.OBJECT:
            for name in sorted(self._value):
                yield self._value[name]

    def get(self, key: int | str, default: Any = None) -> Value:
        """The stored element or member, or default if there is none."""
        found = self._lookup(key)
        return found if found is not None else _coerce(default)

    def get_string(self, key: str, default: str = "") -> str:
        return self.get(key, default).as_string()

    def get_int(self, key: str, default: int = 0) -> int:
        return self.get(key, default).as_int()

    def get_uint(self, key: str, default: int = 0) -> int:
        return self.get(key, default).as_uint()

    def get_bool(self, key: str, default: bool = False) -> bool:
        return self.get(key, default).as_bool()

    def get_float(self, key: str, default: float = 0.0) -> float:
        return self.get(key, default).as_float()

    def is_valid_index(self, index: int) -> bool:
        return 0 <= index < len(self)

    def append(self, value: Any) -> Value:
        """Add value at the end of the array and return the stored element."""
        index = len(self)
        self[index] = value
        return self._value[index]

    def remove_member(self, key: str) -> Value:
        """Remove and return the named member, or null if it is absent."""
        self._require(ValueType.NULL, ValueType.OBJECT)
        if self._type is ValueType.NULL:
            return Value()
        removed = self._value.pop(key, None)
        return removed if removed is not None else Value()

    def is_member(self, key: str) -> bool:
        return self._lookup(key) is not None

    def member_names(self) -> list[str]:
        """Member names in sorted order; empty for null."""
        self._require(ValueType.NULL, ValueType.OBJECT)
        if self._type is ValueType.NULL:
            return []
        return sorted(self._value)

    # -- comments -------------------------------------------------------

    def set_comment(self, comment: str, placement: CommentPlacement) -> None:
        """Attach a comment; it must be empty or start with '/'."""
        if comment and not comment.startswith("/"):
            raise JsonError("Comments must start with /")
        self._comments[CommentPlacement(placement)] = comment

    def has_comment(self, placement: CommentPlacement) -> bool:
        return CommentPlacement(placement) in self._comments

    def get_comment(self, placement: CommentPlacement) -> str:
        return self._comments.get(CommentPlacement(placement), "")

    def to_styled_string(self) -> str:
        """The value written by StyledWriter."""
        from jsontree.styled import StyledWriter

        return StyledWriter().write(self)