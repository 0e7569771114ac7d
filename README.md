# jsontree

`jsontree` holds a JSON document as a tree of `Value` nodes. It reads
documents that carry `//` and `/* */` comments. It writes them back in one of
two layouts: compact, or indented and easy to read with the comments kept
where they were.

## Installing

```
pip install .
```

## Reading

```python
from jsontree.reader import Reader, ParseError, parse

reader = Reader()
root = reader.parse('{ "name": "demo", // the name\n "sizes": [1, 2, 3] }', True)
print(root["name"].as_string())     # demo
print(len(root["sizes"]))           # 3
```

`Reader.parse` raises `ParseError` when a document cannot be parsed.
`Reader.formatted_error_messages()` then lists every error found, each with
its line and column. The text is also on the exception's `messages`
attribute. There are two shortcuts:

- `parse(document, collect_comments)` does the same in one call.
- `read(stream)` parses everything a text stream holds and keeps comments.

Pass `False` as `collect_comments` to drop comments.

Points to know about the reader:

- A `\uXXXX` escape in a string is checked for four hexadecimal digits, but
  the character is not added to the decoded string.
- An integer that does not fit a 32-bit signed value, or a 32-bit unsigned
  value when it is positive, is stored as a real number.

## Building values

```python
from jsontree.value import Value, ValueType, CommentPlacement

root = Value(ValueType.OBJECT)
root["count"] = 3
root["items"].append("first")
root["items"].append("second")
root.set_comment("// generated", CommentPlacement.BEFORE)

print(root.member_names())            # ['count', 'items']
print(root.get_int("missing", 7))     # 7
```

You can build a `Value` from `None`, a `bool`, an `int`, a `float`, a `str`,
a list or tuple, a dict with string keys, a `ValueType` (the empty value of
that type), or another `Value`, which is copied deeply. Integers must fit
the 32-bit signed range or the 32-bit unsigned range. Other integers raise
`OverflowError`.

Reading with `[]` creates what is missing. On a null, object or array value,
a missing object member or array slot is created as null. `get` and the typed
helpers `get_string`, `get_int`, `get_uint`, `get_bool` and `get_float`
return a default instead.

The conversions `as_int`, `as_uint`, `as_float` and `as_string` raise
`JsonError` when the stored type or value cannot be converted. Using an
index or a member name on the wrong kind of value also raises `JsonError`.

Iterating over a value yields the elements of an array in order. For an
object it yields the member values in member-name order.
`jsontree.iteration.entries(value)` yields `Entry` objects that also carry
the position. `Entry.key()`, `Entry.index()` and `Entry.member_name()` give
that position.

## Paths

```python
from jsontree.path import Path

node = Path(".items[1]").resolve(root)
Path(".settings.depth").make(root)     # creates the nodes along the way
```

A `%` in a path takes the next argument given to the constructor:

- `.%` takes a member name.
- `.[%]` takes an index.

The arguments may be plain `int`/`str` values or `PathArgument` objects.
`Path` raises these errors:

- `ValueError` for a malformed path or a missing argument.
- `TypeError` when an argument is of the wrong kind.

`resolve(root, default)` returns the default when the path cannot be
followed.

## Writing

```python
from jsontree.writer import FastWriter
from jsontree.styled import StyledWriter, StyledStreamWriter, dump

print(FastWriter().write(root))        # single line
print(StyledWriter().write(root))      # indented by three spaces, comments kept
```

`FastWriter.enable_yaml_compatibility()` puts a space after each colon.
`StyledStreamWriter(indentation)` writes the styled layout to a text stream,
indenting with the string it is given. `dump(stream, root)` writes the same
layout with a tab as the indentation. `Value.to_styled_string()` returns what
`StyledWriter` writes.

Real numbers are written with six significant digits, and trailing zeros are
trimmed. For example, `1.5` is written as `1.5` and `2.0` as `2.0`.
`value_to_string` and `value_to_quoted_string` give the text of single
scalars.

## Round-trip checker

```
jsontree-testrunner data/sample.json
```

The path must end in `.json`. The command does the following:

1. Parses the file and writes a flat listing of every node to
   `sample.actual`.
2. Writes the styled rewrite to `sample.rewrite`.
3. Parses that rewrite and lists it in `sample.actual-rewrite`.

The exit status is:

- 0 on success.
- 1 when parsing fails.
- 2 when an output file cannot be created.
- 3 for bad usage or unreadable input.

The command does not compare these files with expected results. It only
writes them.