"""Parse a .json file, dump its value tree, rewrite it styled and check the rewrite.

Given ``name.json`` it writes ``name.actual`` (the value tree), ``name.rewrite``
(the styled document) and ``name.actual-rewrite`` (the tree of the rewrite).
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import IO

from jsontree.reader import ParseError, Reader
from jsontree.styled import StyledWriter
from jsontree.value import Value, ValueType


def print_value_tree(out: IO[str], value: Value, path: str = ".") -> None:
    """Write one 'path=value' line per node, object members sorted by name."""
    kind = value.type()
    if kind is ValueType.NULL:
        out.write(f"{path}=null\n")
    elif kind is ValueType.INT:
        out.write(f"{path}={value.as_int()}\n")
    elif kind is ValueType.UINT:
        out.write(f"{path}={value.as_uint()}\n")
    elif kind is ValueType.REAL:
        out.write("%s=%.16g\n" % (path, value.as_float()))
    elif kind is ValueType.STRING:
        out.write(f'{path}="{value.as_string()}"\n')
    elif kind is ValueType.BOOLEAN:
        out.write(f"{path}={'true' if value.as_bool() else 'false'}\n")
    elif kind is ValueType.ARRAY:
        out.write(f"{path}=[]\n")
        for index, child in enumerate(value):
            print_value_tree(out, child, f"{path}[{index}]")
    elif kind is ValueType.OBJECT:
        out.write(f"{path}={{}}\n")
        suffix = "" if path.endswith(".") else "."
        for name in value.member_names():
            print_value_tree(out, value.get(name), path + suffix + name)


def remove_suffix(path: str, extension: str) -> str:
    """path without extension, or "" if it does not end with it."""
    if len(extension) >= len(path) or not path.endswith(extension):
        return ""
    return path[: len(path) - len(extension)]


def _read_input(path: str) -> str:
    try:
        return Path(path).read_bytes().decode("utf-8", errors="replace")
    except OSError:
        return ""


def _parse_and_save(text: str, actual_path: str, kind: str) -> tuple[int, Value | None]:
    try:
        root = Reader().parse(text)
    except ParseError as error:
        print(f"Failed to parse {kind} file: \n{error.messages}")
        return 1, None
    try:
        with open(actual_path, "w", encoding="utf-8") as actual:
            print_value_tree(actual, root)
    except OSError:
        print(f"Failed to create {kind} actual file.")
        return 2, None
    return 0, root


def main(argv: list[str] | None = None) -> int:
    """Run the check on one input file; returns the exit code."""
    if argv is None:
        argv = sys.argv[1:]
    if len(argv) != 1:
        print("Usage: testrunner input-json-file")
        return 3
    input_path = argv[0]

    text = _read_input(input_path)
    if not text:
        print(f"Failed to read input or empty input: {input_path}")
        return 3

    base_path = remove_suffix(input_path, ".json")
    if not base_path:
        print(f"Bad input path. Path does not end with '.expected':\n{input_path}")
        return 3

    code, root = _parse_and_save(text, base_path + ".actual", "input")
    if code != 0 or root is None:
        return code

    rewrite = StyledWriter().write(root)
    rewrite_path = base_path + ".rewrite"
    try:
        with open(rewrite_path, "w", encoding="utf-8") as out:
            out.write(rewrite + "\n")
    except OSError:
        print(f"Failed to create rewrite file: {rewrite_path}")
        return 2

    code, _ = _parse_and_save(rewrite, base_path + ".actual-rewrite", "rewrite")
    return code


if __name__ == "__main__":
    sys.exit(main())


__all__ = ["main", "print_value_tree", "remove_suffix"]