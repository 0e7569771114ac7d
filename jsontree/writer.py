"""Serialise a Value tree as compact JSON text."""

from __future__ import annotations

from abc import ABC, abstractmethod

from jsontree.value import Value, ValueType

_ESCAPES = {
    '"': '\\"',
    "\\": "\\\\",
    "\b": "\\b",
    "\f": "\\f",
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
}


def _float_to_string(value: float) -> str:
    text = "%#.6g" % value
    if not text.endswith("0"):
        return text
    last_nonzero = len(text.rstrip("0")) - 1
    position = last_nonzero
    while position >= 0:
        char = text[position]
        if char.isdigit():
            position -= 1
            continue
        if char == ".":
            # Drop trailing zeros but keep one after the last significant digit.
            return text[: last_nonzero + 2]
        return text
    return text


def value_to_string(value: bool | int | float) -> str:
    """The JSON text of a boolean, integer or real number."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        return _float_to_string(value)
    raise TypeError(f"cannot write {type(value).__name__} as a JSON scalar")


def value_to_quoted_string(value: str) -> str:
    """value in double quotes, with quotes, backslashes and control escapes."""
    return '"' + "".join(_ESCAPES.get(char, char) for char in value) + '"'


def _scalar_text(value: Value) -> str:
    """The text of a non-container value."""
    kind = value.type()
    if kind is ValueType.NULL:
        return "null"
    if kind is ValueType.INT:
        return value_to_string(value.as_int())
    if kind is ValueType.UINT:
        return value_to_string(value.as_uint())
    if kind is ValueType.REAL:
        return value_to_string(value.as_float())
    if kind is ValueType.STRING:
        return value_to_quoted_string(value.as_string())
    if kind is ValueType.BOOLEAN:
        return value_to_string(value.as_bool())
    raise TypeError(f"{kind.name.lower()} is not a scalar value")


class Writer(ABC):
    """Turns a Value into a JSON document."""

    @abstractmethod
    def write(self, root: Value) -> str:
        """The document for root."""


class FastWriter(Writer):
    """Writes a whole document on a single line, without formatting."""

    def __init__(self) -> None:
        self._yaml_compatible = False

    def enable_yaml_compatibility(self) -> None:
        """Put a space after each member-name colon."""
        self._yaml_compatible = True

    def write(self, root: Value) -> str:
        parts: list[str] = []
        self._write_value(root, parts)
        parts.append("\n")
        return "".join(parts)

    def _write_value(self, value: Value, parts: list[str]) -> None:
        kind = value.type()
        if kind is ValueType.ARRAY:
            parts.append("[")
            for position, item in enumerate(value):
                if position:
                    parts.append(",")
                self._write_value(item, parts)
            parts.append("]")
        elif kind is ValueType.OBJECT:
            separator = ": " if self._yaml_compatible else ":"
            parts.append("{")
            for position, name in enumerate(value.member_names()):
                if position:
                    parts.append(",")
                parts.append(value_to_quoted_string(name))
                parts.append(separator)
                self._write_value(value.get(name), parts)
            parts.append("}")
        else:
            parts.append(_scalar_text(value))


__all__ = ["FastWriter", "Writer", "value_to_quoted_string", "value_to_string"]