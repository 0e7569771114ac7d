"""Serialise a Value tree as indented, human friendly JSON text.

Objects put one member per line. Arrays stay on one line when they hold
no non-empty container and fit within the right margin; otherwise they put
one element per line. Comments are written back where they were attached.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import IO

from jsontree.value import CommentPlacement, Value, ValueType
from jsontree.writer import Writer, _scalar_text, value_to_quoted_string

_RIGHT_MARGIN = 74


def _normalize_eol(text: str) -> str:
    return text.replace("\r\n", "\n").replace("\r", "\n")


def _has_comment_for_value(value: Value) -> bool:
    return any(value.has_comment(placement) for placement in CommentPlacement)


class _StyledFormatter(ABC):
    """Layout rules shared by the string and the stream writers."""

    def __init__(self, indentation: str) -> None:
        self._indentation = indentation
        self._indent_string = ""
        self._child_values: list[str] = []
        self._add_child_values = False

    @abstractmethod
    def _emit(self, text: str) -> None:
        """Append text to the document."""

    @abstractmethod
    def _write_indent(self) -> None:
        """Start a new line at the current indentation."""

    def _write_root(self, root: Value) -> None:
        self._indent_string = ""
        self._child_values = []
        self._add_child_values = False
        self._write_comment_before(root)
        self._write_value(root)
        self._write_comment_after(root)
        self._emit("\n")

    def _push_value(self, text: str) -> None:
        if self._add_child_values:
            self._child_values.append(text)
        else:
            self._emit(text)

    def _write_with_indent(self, text: str) -> None:
        self._write_indent()
        self._emit(text)

    def _indent(self) -> None:
        self._indent_string += self._indentation

    def _unindent(self) -> None:
        self._indent_string = self._indent_string[: len(self._indent_string) - len(self._indentation)]

    def _write_value(self, value: Value) -> None:
        kind = value.type()
        if kind is ValueType.ARRAY:
            self._write_array(value)
        elif kind is ValueType.OBJECT:
            self._write_object(value)
        else:
            self._push_value(_scalar_text(value))

    def _write_object(self, value: Value) -> None:
        names = value.member_names()
        if not names:
            self._push_value("{}")
            return
        self._write_with_indent("{")
        self._indent()
        last = len(names) - 1
        for position, name in enumerate(names):
            child = value.get(name)
            self._write_comment_before(child)
            self._write_with_indent(value_to_quoted_string(name))
            self._emit(" : ")
            self._write_value(child)
            if position != last:
                self._emit(",")
            self._write_comment_after(child)
        self._unindent()
        self._write_with_indent("}")

    def _write_array(self, value: Value) -> None:
        items = list(value)
        if not items:
            self._push_value("[]")
            return
        if self._is_multiline(items):
            self._write_with_indent("[")
            self._indent()
            rendered = list(self._child_values)
            last = len(items) - 1
            for position, child in enumerate(items):
                self._write_comment_before(child)
                if rendered:
                    self._write_with_indent(rendered[position])
                else:
                    self._write_indent()
                    self._write_value(child)
                if position != last:
                    self._emit(",")
                self._write_comment_after(child)
            self._unindent()
            self._write_with_indent("]")
        else:
            self._emit("[ " + ", ".join(self._child_values) + " ]")

    def _is_multiline(self, items: list[Value]) -> bool:
        size = len(items)
        multiline = size * 3 >= _RIGHT_MARGIN
        self._child_values = []
        if not multiline:
            multiline = any(
                (child.is_array() or child.is_object()) and len(child) > 0 for child in items
            )
        if not multiline:
            self._add_child_values = True
            for child in items:
                self._write_value(child)
            self._add_child_values = False
            line_length = 4 + (size - 1) * 2 + sum(len(text) for text in self._child_values)
            multiline = line_length >= _RIGHT_MARGIN
        return multiline

    def _write_comment_before(self, value: Value) -> None:
        if not value.has_comment(CommentPlacement.BEFORE):
            return
        self._emit(_normalize_eol(value.get_comment(CommentPlacement.BEFORE)))
        self._emit("\n")

    def _write_comment_after(self, value: Value) -> None:
        if value.has_comment(CommentPlacement.AFTER_ON_SAME_LINE):
            self._emit(" " + _normalize_eol(value.get_comment(CommentPlacement.AFTER_ON_SAME_LINE)))
        if value.has_comment(CommentPlacement.AFTER):
            self._emit("\n")
            self._emit(_normalize_eol(value.get_comment(CommentPlacement.AFTER)))
            self._emit("\n")


class StyledWriter(_StyledFormatter, Writer):
    """Writes a document as a string, indenting by three spaces per level."""

    def __init__(self) -> None:
        super().__init__(" " * 3)
        self._parts: list[str] = []
        self._last = ""

    def write(self, root: Value) -> str:
        self._parts = []
        self._last = ""
        self._write_root(root)
        return "".join(self._parts)

    def _emit(self, text: str) -> None:
        if text:
            self._parts.append(text)
            self._last = text[-1]

    def _write_indent(self) -> None:
        if self._last:
            if self._last == " ":
                return
            if self._last != "\n":
                self._emit("\n")
        self._emit(self._indent_string)


class StyledStreamWriter(_StyledFormatter):
    """Writes a document to a text stream with a chosen indentation."""

    def __init__(self, indentation: str = "\t") -> None:
        super().__init__(indentation)
        self._out: IO[str] | None = None

    def write(self, out: IO[str], root: Value) -> None:
        self._out = out
        try:
            self._write_root(root)
        finally:
            self._out = None

    def _emit(self, text: str) -> None:
        assert self._out is not None
        self._out.write(text)

    def _write_indent(self) -> None:
        self._emit("\n" + self._indent_string)


def dump(stream: IO[str], root: Value) -> None:
    """Write root to stream with a tab-indenting StyledStreamWriter."""
    StyledStreamWriter().write(stream, root)


__all__ = ["StyledStreamWriter", "StyledWriter", "dump"]