"""Parse JSON text into a Value tree, keeping comments if asked to."""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum, auto
from typing import IO

from jsontree.value import CommentPlacement, JsonError, Value, MAX_UINT, MIN_INT


class ParseError(JsonError):
    """Raised when a document cannot be parsed.

    The message lists every error with its line and column.
    """

    def __init__(self, messages: str) -> None:
        super().__init__(messages)
        self.messages = messages


class _TokenType(Enum):
    END_OF_STREAM = auto()
    OBJECT_BEGIN = auto()
    OBJECT_END = auto()
    ARRAY_BEGIN = auto()
    ARRAY_END = auto()
    STRING = auto()
    NUMBER = auto()
    TRUE = auto()
    FALSE = auto()
    NULL = auto()
    ARRAY_SEPARATOR = auto()
    MEMBER_SEPARATOR = auto()
    COMMENT = auto()
    ERROR = auto()


@dataclass
class _Token:
    type: _TokenType = _TokenType.ERROR
    start: int = 0
    end: int = 0


@dataclass
class _ErrorInfo:
    token: _Token
    message: str
    extra: int | None = None


_SIMPLE_TOKENS = {
    "{": _TokenType.OBJECT_BEGIN,
    "}": _TokenType.OBJECT_END,
    "[": _TokenType.ARRAY_BEGIN,
    "]": _TokenType.ARRAY_END,
    ",": _TokenType.ARRAY_SEPARATOR,
    ":": _TokenType.MEMBER_SEPARATOR,
    "\0": _TokenType.END_OF_STREAM,
}

_KEYWORDS = {
    "t": (_TokenType.TRUE, "rue"),
    "f": (_TokenType.FALSE, "alse"),
    "n": (_TokenType.NULL, "ull"),
}

_ESCAPES = {
    '"': '"',
    "/": "/",
    "\\": "\\",
    "b": "\b",
    "f": "\f",
    "n": "\n",
    "r": "\r",
    "t": "\t",
}

_DIGITS = "0123456789"
_HEX_DIGITS = "0123456789abcdefABCDEF"
_SPACES = " \t\r\n"
_FLOAT_PREFIX = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")


class Reader:
    """Reads a JSON document into a Value."""

    def __init__(self) -> None:
        self._document = ""
        self._end = 0
        self._current = 0
        self._errors: list[_ErrorInfo] = []
        self._nodes: list[Value] = []
        self._last_value_end: int | None = None
        self._last_value: Value | None = None
        self._comments_before = ""
        self._collect = True

    def parse(self, document: str | bytes, collect_comments: bool = True) -> Value:
        """Parse document and return its root value.

        Raises ParseError if the document is not valid; the same text is
        then available from formatted_error_messages().
        """
        if isinstance(document, (bytes, bytearray)):
            document = bytes(document).decode("utf-8")
        self._document = document
        self._end = len(document)
        self._current = 0
        self._last_value_end = None
        self._last_value = None
        self._comments_before = ""
        self._collect = collect_comments
        self._errors = []
        root = Value()
        self._nodes = [root]

        successful = self._read_value()
        self._skip_comment_tokens()
        if self._collect and self._comments_before:
            root.set_comment(self._comments_before, CommentPlacement.AFTER)
        if not successful:
            raise ParseError(self.formatted_error_messages())
        return root

    def formatted_error_messages(self) -> str:
        """Every error of the last parse with its location; "" if none."""
        parts = []
        for error in self._errors:
            parts.append(f"* {self._location_text(error.token.start)}\n")
            parts.append(f"  {error.message}\n")
            if error.extra is not None:
                parts.append(f"See {self._location_text(error.extra)} for detail.\n")
        return "".join(parts)

    # -- values ---------------------------------------------------------

    def _current_value(self) -> Value:
        return self._nodes[-1]

    def _assign(self, value) -> None:
        self._current_value().swap(Value(value))

    def _read_value(self) -> bool:
        token = self._skip_comment_tokens()
        successful = True

        if self._collect and self._comments_before:
            self._current_value().set_comment(self._comments_before, CommentPlacement.BEFORE)
            self._comments_before = ""

        kind = token.type
        if kind is _TokenType.OBJECT_BEGIN:
            successful = self._read_object()
        elif kind is _TokenType.ARRAY_BEGIN:
            successful = self._read_array()
        elif kind is _TokenType.NUMBER:
            successful = self._decode_number(token)
        elif kind is _TokenType.STRING:
            decoded = self._decode_string(token)
            successful = decoded is not None
            if successful:
                self._assign(decoded)
        elif kind is _TokenType.TRUE:
            self._assign(True)
        elif kind is _TokenType.FALSE:
            self._assign(False)
        elif kind is _TokenType.NULL:
            self._assign(None)
        else:
            return self._add_error("Syntax error: value, object or array expected.", token)

        if self._collect:
            self._last_value_end = self._current
            self._last_value = self._current_value()
        return successful

    def _read_child(self, child: Value) -> bool:
        self._nodes.append(child)
        try:
            return self._read_value()
        finally:
            self._nodes.pop()

    def _read_object(self) -> bool:
        name = ""
        self._assign(Value(_object_type()))
        while True:
            token_name = self._read_token()
            while token_name.type is _TokenType.COMMENT:
                token_name = self._read_token()
            if token_name.type is _TokenType.OBJECT_END and not name:
                return True
            if token_name.type is not _TokenType.STRING:
                break

            decoded = self._decode_string(token_name)
            if decoded is None:
                return self._recover_from_error(_TokenType.OBJECT_END)
            name = decoded

            colon = self._read_token()
            if colon.type is not _TokenType.MEMBER_SEPARATOR:
                return self._add_error_and_recover(
                    "Missing ':' after object member name", colon, _TokenType.OBJECT_END
                )
            if not self._read_child(self._current_value()[name]):
                return self._recover_from_error(_TokenType.OBJECT_END)

            comma = self._read_token()
            if comma.type not in (
                _TokenType.OBJECT_END,
                _TokenType.ARRAY_SEPARATOR,
                _TokenType.COMMENT,
            ):
                return self._add_error_and_recover(
                    "Missing ',' or '}' in object declaration", comma, _TokenType.OBJECT_END
                )
            while comma.type is _TokenType.COMMENT:
                comma = self._read_token()
            if comma.type is _TokenType.OBJECT_END:
                return True
        return self._add_error_and_recover(
            "Missing '}' or object member name", token_name, _TokenType.OBJECT_END
        )

    def _read_array(self) -> bool:
        self._assign(Value(_array_type()))
        self._skip_spaces()
        if self._peek() == "]":
            self._read_token()
            return True
        index = 0
        while True:
            child = self._current_value()[index]
            index += 1
            if not self._read_child(child):
                return self._recover_from_error(_TokenType.ARRAY_END)
            token = self._read_token()
            if token.type not in (_TokenType.ARRAY_SEPARATOR, _TokenType.ARRAY_END):
                return self._add_error_and_recover(
                    "Missing ',' or ']' in array declaration", token, _TokenType.ARRAY_END
                )
            if token.type is _TokenType.ARRAY_END:
                return True

    def _decode_number(self, token: _Token) -> bool:
        text = self._document[token.start:token.end]
        is_double = any(c in ".eE+" for c in text) or "-" in text[1:]
        if is_double:
            return self._decode_double(token)
        is_negative = text.startswith("-")
        digits = text[1:] if is_negative else text
        threshold = (-MIN_INT if is_negative else MAX_UINT) // 10
        value = 0
        for c in digits:
            if c not in _DIGITS:
                return self._add_error(f"'{text}' is not a number.", token)
            if value >= threshold:
                return self._decode_double(token)
            value = value * 10 + int(c)
        self._assign(-value if is_negative else value)
        return True

    def _decode_double(self, token: _Token) -> bool:
        text = self._document[token.start:token.end]
        match = _FLOAT_PREFIX.match(text)
        if match is None:
            return self._add_error(f"'{text}' is not a number.", token)
        self._assign(float(match.group()))
        return True

    def _decode_string(self, token: _Token) -> str | None:
        document = self._document
        decoded = []
        current = token.start + 1
        end = token.end - 1
        while current != end:
            c = document[current]
            current += 1
            if c == '"':
                break
            if c != "\\":
                decoded.append(c)
                continue
            if current == end:
                self._add_error("Empty escape sequence in string", token, current)
                return None
            escape = document[current]
            current += 1
            if escape == "u":
                # The sequence is checked but its character is not kept.
                current = self._decode_unicode_escape(token, current, end)
                if current is None:
                    return None
            elif escape in _ESCAPES:
                decoded.append(_ESCAPES[escape])
            else:
                self._add_error("Bad escape sequence in string", token, current)
                return None
        return "".join(decoded)

    def _decode_unicode_escape(self, token: _Token, current: int, end: int) -> int | None:
        if end - current < 4:
            self._add_error(
                "Bad unicode escape sequence in string: four digits expected.", token, current
            )
            return None
        for _ in range(4):
            c = self._document[current]
            current += 1
            if c not in _HEX_DIGITS:
                self._add_error(
                    "Bad unicode escape sequence in string: hexadecimal digit expected.",
                    token,
                    current,
                )
                return None
        return current

    # -- tokens ---------------------------------------------------------

    def _peek(self) -> str:
        return self._document[self._current] if self._current < self._end else "\0"

    def _next_char(self) -> str:
        if self._current == self._end:
            return "\0"
        c = self._document[self._current]
        self._current += 1
        return c

    def _skip_spaces(self) -> None:
        while self._current != self._end and self._document[self._current] in _SPACES:
            self._current += 1

    def _skip_comment_tokens(self) -> _Token:
        token = self._read_token()
        while token.type is _TokenType.COMMENT:
            token = self._read_token()
        return token

    def _read_token(self) -> _Token:
        self._skip_spaces()
        token = _Token(start=self._current)
        c = self._next_char()
        ok = True
        if c in _SIMPLE_TOKENS:
            token.type = _SIMPLE_TOKENS[c]
        elif c == '"':
            token.type = _TokenType.STRING
            ok = self._read_string()
        elif c == "/":
            token.type = _TokenType.COMMENT
            ok = self._read_comment()
        elif c in _DIGITS or c == "-":
            token.type = _TokenType.NUMBER
            self._read_number()
        elif c in _KEYWORDS:
            token.type, rest = _KEYWORDS[c]
            ok = self._match(rest)
        else:
            ok = False
        if not ok:
            token.type = _TokenType.ERROR
        token.end = self._current
        return token

    def _match(self, pattern: str) -> bool:
        length = len(pattern)
        if self._end - self._current < length:
            return False
        if self._document[self._current:self._current + length] != pattern:
            return False
        self._current += length
        return True

    def _read_string(self) -> bool:
        c = "\0"
        while self._current != self._end:
            c = self._next_char()
            if c == "\\":
                self._next_char()
            elif c == '"':
                break
        return c == '"'

    def _read_number(self) -> None:
        while self._current != self._end:
            c = self._document[self._current]
            if c not in _DIGITS and c not in ".eE+-":
                break
            self._current += 1

    def _read_comment(self) -> bool:
        comment_begin = self._current - 1
        c = self._next_char()
        if c == "*":
            successful = self._read_c_style_comment()
        elif c == "/":
            successful = self._read_cpp_style_comment()
        else:
            successful = False
        if not successful:
            return False

        if self._collect:
            placement = CommentPlacement.BEFORE
            if self._last_value_end is not None and not self._contains_newline(
                self._last_value_end, comment_begin
            ):
                if c != "*" or not self._contains_newline(comment_begin, self._current):
                    placement = CommentPlacement.AFTER_ON_SAME_LINE
            self._add_comment(comment_begin, self._current, placement)
        return True

    def _read_c_style_comment(self) -> bool:
        while self._current != self._end:
            c = self._next_char()
            if c == "*" and self._peek() == "/":
                break
        return self._next_char() == "/"

    def _read_cpp_style_comment(self) -> bool:
        while self._current != self._end:
            if self._next_char() in "\r\n":
                break
        return True

    def _contains_newline(self, begin: int, end: int) -> bool:
        segment = self._document[begin:end]
        return "\n" in segment or "\r" in segment

    def _add_comment(self, begin: int, end: int, placement: CommentPlacement) -> None:
        text = self._document[begin:end]
        if placement is CommentPlacement.AFTER_ON_SAME_LINE:
            assert self._last_value is not None
            self._last_value.set_comment(text, placement)
        else:
            if self._comments_before:
                self._comments_before += "\n"
            self._comments_before += text

    # -- errors ---------------------------------------------------------

    def _add_error(self, message: str, token: _Token, extra: int | None = None) -> bool:
        self._errors.append(_ErrorInfo(_Token(token.type, token.start, token.end), message, extra))
        return False

    def _recover_from_error(self, skip_until: _TokenType) -> bool:
        error_count = len(self._errors)
        while True:
            skip = self._read_token()
            if skip.type is skip_until or skip.type is _TokenType.END_OF_STREAM:
                break
        del self._errors[error_count:]
        return False

    def _add_error_and_recover(
        self, message: str, token: _Token, skip_until: _TokenType
    ) -> bool:
        self._add_error(message, token)
        return self._recover_from_error(skip_until)

    def _line_and_column(self, location: int) -> tuple[int, int]:
        document = self._document
        current = 0
        last_line_start = 0
        line = 0
        while current < location and current != self._end:
            c = document[current]
            current += 1
            if c == "\r":
                if current < self._end and document[current] == "\n":
                    current += 1
                last_line_start = current
                line += 1
            elif c == "\n":
                last_line_start = current
                line += 1
        return line + 1, location - last_line_start + 1

    def _location_text(self, location: int) -> str:
        line, column = self._line_and_column(location)
        return f"Line {line}, Column {column}"


def _object_type():
    from jsontree.value import ValueType

    return ValueType.OBJECT


def _array_type():
    from jsontree.value import ValueType

    return ValueType.ARRAY


def parse(document: str | bytes, collect_comments: bool = True) -> Value:
    """Parse a JSON document and return its root value."""
    return Reader().parse(document, collect_comments)


def read(stream: IO[str]) -> Value:
    """Read a whole JSON document from a text stream, keeping comments."""
    return Reader().parse(stream.read(), True)


__all__ = ["ParseError", "Reader", "parse", "read"]