import io

import pytest

from jsontree.reader import parse
from jsontree.styled import StyledStreamWriter, StyledWriter, dump
from jsontree.value import CommentPlacement, Value


def test_simple_object_layout():
    assert StyledWriter().write(Value({"a": 1})) == '{\n   "a" : 1\n}\n'


def test_short_array_on_one_line():
    assert StyledWriter().write(Value([1, 2, 3])) == "[ 1, 2, 3 ]\n"


@pytest.mark.parametrize("value,text", [({}, "{}"), ([], "[]")])
def test_empty_containers(value, text):
    assert StyledWriter().write(Value(value)).strip() == text


def test_long_array_goes_multiline():
    root = Value(list(range(30)))
    lines = StyledWriter().write(root).splitlines()
    assert lines[0] == "["
    assert lines[-1] == "]"
    assert all(line.startswith("   ") for line in lines[1:-1])
    assert parse(StyledWriter().write(root)) == root


def test_array_with_nested_container_is_multiline():
    root = Value([[1], 2])
    text = StyledWriter().write(root)
    assert len(text.splitlines()) > 1
    assert parse(text) == root


@pytest.mark.parametrize(
    "data",
    [
        {"name": "x", "list": [1, 2.5, True, None], "nested": {"k": [], "o": {}}},
        [{"a": 1}, {"b": [1, [2, 3]]}],
        "plain \"quoted\" \\ text",
        -17,
        ["word" * 10, "word" * 10],
    ],
)
def test_round_trip(data):
    root = Value(data)
    assert parse(StyledWriter().write(root)) == root


def test_comments_survive_round_trip():
    first = parse('// head\n{ "a" : 1 // tail\n}')
    second = parse(StyledWriter().write(first))
    assert second == first
    assert second.get_comment(CommentPlacement.BEFORE) == first.get_comment(CommentPlacement.BEFORE)
    assert second.get("a").get_comment(CommentPlacement.AFTER_ON_SAME_LINE) == first.get(
        "a"
    ).get_comment(CommentPlacement.AFTER_ON_SAME_LINE)


def test_comment_line_endings_normalised():
    root = Value(1)
    root.set_comment("/* a\r\nb\rc */", CommentPlacement.BEFORE)
    text = StyledWriter().write(root)
    assert "\r" not in text
    assert "/* a\nb\nc */" in text


def test_to_styled_string_matches_writer():
    root = Value({"x": [1, 2], "y": {"z": "w"}})
    assert root.to_styled_string() == StyledWriter().write(root)


def test_stream_writer_uses_indentation():
    out = io.StringIO()
    StyledStreamWriter("\t").write(out, Value({"a": 1}))
    assert '\t"a" : 1' in out.getvalue().splitlines()


def test_stream_writer_round_trip():
    root = Value({"a": [1, {"b": None}], "c": "d"})
    out = io.StringIO()
    StyledStreamWriter("  ").write(out, root)
    assert parse(out.getvalue()) == root


def test_dump_matches_default_stream_writer():
    root = Value({"k": [True, False]})
    expected = io.StringIO()
    StyledStreamWriter().write(expected, root)
    got = io.StringIO()
    dump(got, root)
    assert got.getvalue() == expected.getvalue()