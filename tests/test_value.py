"""Value model construction, extraction and rendering"""
import dataclasses

import pytest

from jelly_config import Config, TypeMismatch, Value, ValueType


def test_factories_set_matching_type() -> None:
    """Test each factory tags its variant"""
    assert Value.string("x").type == ValueType.STRING
    assert Value.number(1).type == ValueType.NUMBER
    assert Value.list().type == ValueType.LIST
    assert Value.object().type == ValueType.OBJECT


def test_payloads_are_normalized() -> None:
    """Test ints, lists and dicts are converted on construction"""
    number = Value.number(3)
    assert isinstance(number.data, float)

    items = Value.list([Value.number(1), Value.string("a")])
    assert isinstance(items.data, tuple)

    obj = Value.object({"a": Value.number(1)})
    assert isinstance(obj.data, Config)


@pytest.mark.parametrize("value_type, data", [
    (ValueType.STRING, 1),
    (ValueType.NUMBER, "1"),
    (ValueType.NUMBER, True),
    (ValueType.LIST, "abc"),
    (ValueType.LIST, [1, 2]),
    (ValueType.LIST, {"a": Value.number(1)}),
    (ValueType.OBJECT, [Value.number(1)]),
    ("string", "x"),
])
def test_mismatched_payload_rejected(value_type, data) -> None:
    """Test a tag never disagrees with its payload"""
    with pytest.raises(TypeMismatch):
        Value(value_type, data)


def test_non_finite_numbers_rejected() -> None:
    """Test numbers the grammar cannot spell are refused"""
    with pytest.raises(ValueError):
        Value.number(float("inf"))
    with pytest.raises(ValueError):
        Value.number(float("nan"))


def test_values_are_immutable() -> None:
    """Test values cannot be changed after construction"""
    value = Value.string("x")
    with pytest.raises(dataclasses.FrozenInstanceError):
        value.data = "y"

    obj = Value.object({"a": Value.number(1)})
    with pytest.raises(TypeError):
        obj.data["a"] = Value.number(2)


def test_typed_extraction() -> None:
    """Test as_* return payloads of the matching variant"""
    assert Value.string("x").as_string() == "x"
    assert Value.number(2).as_number() == 2.0
    assert Value.list([Value.number(1)]).as_list() == (Value.number(1),)
    assert Value.object({"a": Value.number(1)}).as_object().get_number("a") == 1.0


@pytest.mark.parametrize("value, accessor", [
    (Value.string("x"), "as_number"),
    (Value.number(1), "as_string"),
    (Value.number(1), "as_list"),
    (Value.list(), "as_object"),
    (Value.object(), "as_list"),
])
def test_typed_extraction_mismatch(value: Value, accessor: str) -> None:
    """Test asking for the wrong variant raises TypeMismatch"""
    with pytest.raises(TypeMismatch) as exc_info:
        getattr(value, accessor)()
    assert f"found {value.type.value}" in str(exc_info.value)
    assert isinstance(exc_info.value, TypeError)


def test_to_text_rendering() -> None:
    """Test canonical rendering of every variant"""
    assert Value.string("Jelly").to_text() == '"Jelly"'
    assert Value.number(1).to_text() == "1.0"
    assert Value.number(0.1).to_text() == "0.1"
    assert Value.number(-2.5).to_text() == "-2.5"
    assert Value.list().to_text() == "[]"
    assert Value.object().to_text() == "{}"
    assert Value.list([Value.number(1), Value.string("a")]).to_text() == '[1.0, "a"]'
    nested = Value.object({"a": Value.number(1), "b": Value.list([Value.object()])})
    assert nested.to_text() == "{a = 1.0, b = [{}]}"
    assert str(nested) == nested.to_text()


def test_exponent_numbers_render_positionally() -> None:
    """Test very large and small numbers avoid exponent notation"""
    assert Value.number(1e20).to_text() == "100000000000000000000"
    assert Value.number(1.5e-7).to_text() == "0.00000015"
    assert Value.number(-1e22).to_text() == "-10000000000000000000000"


def test_from_python_and_back() -> None:
    """Test conversion from and to plain Python data"""
    data = {"name": "Jelly", "size": [800, 600], "nested": {"flag": 1}}
    value = Value.from_python(data)
    assert value.type == ValueType.OBJECT
    assert value.as_object().get_list("size")[0] == Value.number(800)
    assert value.to_python() == {"name": "Jelly", "size": [800.0, 600.0], "nested": {"flag": 1.0}}


@pytest.mark.parametrize("data", [True, None, b"bytes", {1, 2}])
def test_from_python_rejects_unsupported(data) -> None:
    """Test values outside the model are refused"""
    with pytest.raises(TypeMismatch):
        Value.from_python(data)


def test_object_values_are_hashable() -> None:
    """Test values of every variant can be hashed and used in sets"""
    obj = Value.object({"a": Value.number(1), "b": Value.list([Value.object()])})
    same = Value.from_python({"a": 1, "b": [{}]})
    assert hash(obj) == hash(same)
    assert len({obj, same, Value.string("x")}) == 2
