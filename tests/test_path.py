import pytest

from jsontree.path import Path, PathArgument
from jsontree.value import JsonError, Value, ValueType


def test_path_argument_kinds():
    assert PathArgument(3).is_index
    assert PathArgument("name").is_key
    none = PathArgument()
    assert not none.is_index and not none.is_key


def test_path_argument_rejects_bad_types():
    with pytest.raises(TypeError):
        PathArgument(1.5)
    with pytest.raises(TypeError):
        PathArgument(True)
    with pytest.raises(IndexError):
        PathArgument(-1)


def test_root_path_has_no_steps():
    assert Path(".").arguments == ()
    assert Path("").arguments == ()


def test_parse_names_and_indexes():
    path = Path(".name1.name2[3]")
    assert path.arguments == (
        PathArgument("name1"),
        PathArgument("name2"),
        PathArgument(3),
    )


def test_parse_chained_indexes():
    path = Path(".[0][1][2].name1[3]")
    assert path.arguments == (
        PathArgument(0),
        PathArgument(1),
        PathArgument(2),
        PathArgument("name1"),
        PathArgument(3),
    )


def test_parse_placeholders():
    path = Path(".%[%]", "key", 4)
    assert path.arguments == (PathArgument("key"), PathArgument(4))


def test_placeholder_missing_argument():
    with pytest.raises(ValueError):
        Path(".%")


def test_placeholder_wrong_kind():
    with pytest.raises(TypeError):
        Path(".[%]", "key")
    with pytest.raises(TypeError):
        Path(".%", 2)


def test_unterminated_index_is_invalid():
    with pytest.raises(ValueError):
        Path(".[12")
    with pytest.raises(ValueError):
        Path(".[ab]")


def test_make_creates_nested_nodes():
    root = Value()
    node = Path(".a.b[2]").make(root)
    assert node.is_null()
    assert root.type() is ValueType.OBJECT
    assert root["a"]["b"].type() is ValueType.ARRAY
    assert len(root["a"]["b"]) == 3


def test_make_returns_live_node():
    root = Value()
    Path(".config.level").make(root)["x"] = 7
    assert root["config"]["level"]["x"].as_int() == 7


def test_make_on_wrong_type_raises():
    root = Value({"a": 1})
    with pytest.raises(JsonError):
        Path(".a.b").make(root)


def test_resolve_existing_node():
    root = Value({"items": [10, {"name": "x"}]})
    assert Path(".items[1].name").resolve(root).as_string() == "x"
    assert Path(".items[0]").resolve(root).as_int() == 10


def test_resolve_root():
    root = Value([1, 2])
    assert Path(".").resolve(root) is root


def test_resolve_missing_gives_null_without_changing_root():
    root = Value({"a": {}})
    before = root.copy()
    assert Path(".a.missing").resolve(root).is_null()
    assert Path(".a.missing[5]").resolve(root).is_null()
    assert root == before


def test_resolve_wrong_type_without_default_raises():
    root = Value({"a": "text"})
    with pytest.raises(JsonError):
        Path(".a.b").resolve(root)


def test_resolve_with_default():
    root = Value({"a": [1, 2], "s": "text"})
    assert Path(".a[5]").resolve(root, 42) == Value(42)
    assert Path(".missing").resolve(root, "d").as_string() == "d"
    assert Path(".s.x").resolve(root, None).is_null()
    assert Path(".a.x").resolve(root, False) == Value(False)
    assert Path(".a[1]").resolve(root, 0).as_int() == 2


def test_resolve_rejects_several_defaults():
    with pytest.raises(TypeError):
        Path(".a").resolve(Value(), 1, 2)


def test_make_then_resolve_round_trip():
    root = Value()
    Path(".%[%]", "list", 1).make(root)["v"] = "hello"
    assert Path(".list[1].v").resolve(root).as_string() == "hello"
    assert Path(".list[0]").resolve(root, "d").is_null()
    assert len(Path(".list").resolve(root)) == 2