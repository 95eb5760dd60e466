import types

from pocovcard.model import (
    Complex,
    ComplexList,
    Scalar,
    ScalarList,
    is_truthy,
    to_record,
    to_value,
)


def test_to_value_scalars():
    assert to_value("a") == Scalar("a")
    assert to_value(7) == Scalar("7")
    assert to_value(True) == Scalar("true")
    assert to_value(None) is None


def test_to_value_object_drops_none_subfields():
    value = to_value({"value": "x", "type": None})
    assert isinstance(value, Complex)
    assert value.has("value")
    assert not value.has("type")


def test_to_value_nested_object():
    value = to_value({"outer": {"inner": "x"}})
    assert isinstance(value.get("outer"), Complex)
    assert value.text("outer") is None


def test_to_value_lists():
    assert to_value(["a", "b"]) == ScalarList((Scalar("a"), Scalar("b")))
    objs = to_value([{"value": "a"}, types.SimpleNamespace(value="b")])
    assert isinstance(objs, ComplexList)
    assert [c.text("value") for c in objs.items] == ["a", "b"]
    assert to_value([]) == ScalarList(())


def test_mixed_list_keeps_every_entry():
    value = to_value(["a", {"value": "b", "type": "work"}, None, 3])
    assert isinstance(value, ComplexList)
    assert [c.text("value") for c in value.items] == ["a", "b", "3"]
    assert value.items[1].text("type") == "work"
    assert value.items[0] == Complex({"value": Scalar("a")})


def test_values_pass_through():
    value = Scalar("x")
    assert to_value(value) is value


def test_complex_is_read_only():
    raw = {"value": "x"}
    value = to_value(raw)
    raw["value"] = "changed"
    assert value.text("value") == "x"


def test_is_truthy():
    assert is_truthy(Scalar("true"))
    assert is_truthy(Scalar("yes"))
    assert not is_truthy(Scalar("false"))
    assert not is_truthy(Scalar("0"))
    assert not is_truthy(Scalar(""))
    assert not is_truthy(None)


def test_is_truthy_does_not_trim():
    assert is_truthy(Scalar(" 0 "))
    assert is_truthy(Scalar(" false"))


def test_to_record_preserves_order_and_skips_none():
    record = to_record({"b": "1", "a": None, "c": ["x"]})
    assert list(record) == ["b", "c"]
