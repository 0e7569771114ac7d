import io

import pytest

from jsontree.reader import ParseError, Reader, parse, read
from jsontree.value import CommentPlacement, JsonError, Value


def test_parse_nested_document():
    root = parse('{"a": [1, 2, {"b": null}], "c": "text", "d": true, "e": false}')
    assert root == Value({"a": [1, 2, {"b": None}], "c": "text", "d": True, "e": False})


def test_parse_empty_containers():
    assert parse("[]") == Value([])
    assert parse("{}") == Value({})
    assert parse("[ ]").is_array()


def test_integer_kinds():
    assert parse("-5").is_int()
    assert parse("-5").as_int() == -5
    big = parse("2147483648")
    assert big.is_uint()
    assert big.as_uint() == 2147483648


def test_real_numbers():
    assert parse("1.5") == Value(1.5)
    assert parse("-0.25").as_float() == -0.25
    assert parse("1.2.3") == Value(1.2)


def test_string_escapes():
    assert parse('"a\\nb\\t\\"c\\"\\/\\\\"').as_string() == 'a\nb\t"c"/\\'


def test_unicode_escape_is_checked_but_dropped():
    assert parse('"x\\u0041y"').as_string() == "xy"
    with pytest.raises(ParseError) as info:
        parse('"\\u00zz"')
    assert "hexadecimal digit expected" in str(info.value)


def test_duplicate_member_last_wins():
    assert parse('{"a": 1, "a": 2}') == Value({"a": 2})


def test_trailing_garbage_is_ignored():
    assert parse("1 x") == Value(1)


def test_bytes_document():
    assert parse(b'["ok"]') == Value(["ok"])


def test_missing_separator_in_array_message():
    reader = Reader()
    with pytest.raises(ParseError) as info:
        reader.parse("[1 2]")
    expected = "* Line 1, Column 4\n  Missing ',' or ']' in array declaration\n"
    assert reader.formatted_error_messages() == expected
    assert info.value.messages == expected
    assert isinstance(info.value, JsonError)


def test_error_location_counts_lines():
    with pytest.raises(ParseError) as info:
        parse("[\n1\n x]")
    assert "Line 3, Column 2" in str(info.value)


def test_crlf_counts_as_one_line_break():
    reader_crlf = Reader()
    reader_lf = Reader()
    with pytest.raises(ParseError):
        reader_crlf.parse("[\r\n\r\nx]")
    with pytest.raises(ParseError):
        reader_lf.parse("[\n\nx]")
    assert reader_crlf.formatted_error_messages() == reader_lf.formatted_error_messages()
    assert "Line 3, Column 1" in reader_lf.formatted_error_messages()


def test_empty_document_is_an_error():
    with pytest.raises(ParseError) as info:
        parse("")
    assert "Syntax error: value, object or array expected." in str(info.value)


@pytest.mark.parametrize(
    "document, message",
    [
        ('{"a" 1}', "Missing ':' after object member name"),
        ('{"a": 1 "b": 2}', "Missing ',' or '}' in object declaration"),
        ("{1: 2}", "Missing '}' or object member name"),
        ("[1, 2", "Missing ',' or ']' in array declaration"),
        ("tru", "Syntax error: value, object or array expected."),
        ('"open', "Syntax error: value, object or array expected."),
    ],
)
def test_error_messages(document, message):
    with pytest.raises(ParseError) as info:
        parse(document)
    assert message in str(info.value)


def test_bad_escape_points_at_detail():
    with pytest.raises(ParseError) as info:
        parse('"\\q"')
    text = str(info.value)
    assert "Bad escape sequence in string" in text
    assert "See Line 1, Column" in text


def test_errors_cleared_by_successful_parse():
    reader = Reader()
    with pytest.raises(ParseError):
        reader.parse("[")
    assert reader.formatted_error_messages() != ""
    assert reader.parse("[1]") == Value([1])
    assert reader.formatted_error_messages() == ""


def test_comment_before_root():
    root = parse("// head\n1")
    assert root.get_comment(CommentPlacement.BEFORE) == "// head\n"
    assert root == Value(1)


def test_consecutive_comments_are_joined():
    root = parse("/* a */\n/* b */\n1")
    assert root.get_comment(CommentPlacement.BEFORE) == "/* a */\n/* b */"


def test_comment_on_same_line_goes_to_previous_value():
    root = parse("[1, // one\n 2]")
    assert root[0].get_comment(CommentPlacement.AFTER_ON_SAME_LINE) == "// one\n"
    assert not root[1].has_comment(CommentPlacement.BEFORE)
    assert root[1] == Value(2)


def test_trailing_comment_on_same_line():
    root = parse("1 /* tail */")
    assert root.get_comment(CommentPlacement.AFTER_ON_SAME_LINE) == "/* tail */"


def test_comment_after_root_on_new_line():
    root = parse("1\n// end")
    assert root.get_comment(CommentPlacement.AFTER) == "// end"


def test_comments_can_be_discarded():
    root = parse("// head\n[1, /* x */ 2]", collect_comments=False)
    assert root == Value([1, 2])
    assert not root.has_comment(CommentPlacement.BEFORE)
    assert not root[0].has_comment(CommentPlacement.AFTER_ON_SAME_LINE)


def test_comments_inside_object():
    root = parse('{\n  // note\n  "a": 1\n}')
    assert root["a"].get_comment(CommentPlacement.BEFORE) == "// note\n"
    assert root == Value({"a": 1})


def test_read_from_stream():
    assert read(io.StringIO("[true, null]")) == Value([True, None])


def test_read_raises_on_bad_input():
    with pytest.raises(ParseError):
        read(io.StringIO("{"))