"""Tests for the JSONValue model."""

import copy

import pytest

from json_value import (
    IndexOutOfRange,
    JSONType,
    JSONValue,
    KeyNotFound,
    new_array,
    new_object,
)


class TestConstruction:
    """Tests for building values from Python literals."""

    def test_default_is_null(self):
        """Test that a default value is null."""
        value = JSONValue()

        assert value.is_null()
        assert value.json_type() == JSONType.NULL

    def test_scalar_literals(self):
        """Test tag selection for scalar literals."""
        assert JSONValue(True).json_type() == JSONType.BOOLEAN
        assert JSONValue(7).json_type() == JSONType.INTEGRAL
        assert JSONValue(2.5).json_type() == JSONType.FLOATING
        assert JSONValue("text").json_type() == JSONType.STRING
        assert JSONValue(None).json_type() == JSONType.NULL

    def test_bool_is_not_integral(self):
        """Test that bool is checked before int."""
        value = JSONValue(False)

        assert value.is_boolean()
        assert not value.is_integral()

    def test_containers(self):
        """Test construction from lists and dicts."""
        value = JSONValue({"list": [1, "two", None], "flag": True})

        assert value.is_object()
        assert value.at("list").is_array()
        assert value.at("list").length() == 3
        assert value.at("list").at(1).to_unescaped_string() == "two"

    def test_unsupported_type(self):
        """Test that unsupported types are rejected."""
        with pytest.raises(TypeError, match="Cannot convert"):
            JSONValue(object())

    def test_non_string_object_key(self):
        """Test that dict keys must be strings."""
        with pytest.raises(TypeError, match="Object keys must be str"):
            JSONValue({1: "x"})

    def test_integer_range(self):
        """Test the signed 64-bit range of integral values."""
        assert JSONValue(2 ** 63 - 1).to_int() == 2 ** 63 - 1
        assert JSONValue(-(2 ** 63)).to_int() == -(2 ** 63)

        with pytest.raises(OverflowError):
            JSONValue(2 ** 63)

    def test_make(self):
        """Test empty values of each tag."""
        assert JSONValue.make(JSONType.STRING).to_unescaped_string() == ""
        assert JSONValue.make(JSONType.INTEGRAL).to_int() == 0
        assert JSONValue.make(JSONType.FLOATING).to_float() == 0.0
        assert JSONValue.make(JSONType.BOOLEAN).to_bool() is False
        assert JSONValue.make(JSONType.ARRAY).length() == 0
        assert JSONValue.make(JSONType.OBJECT).size() == 0
        assert JSONValue.make(JSONType.NULL).is_null()

    def test_from_pairs(self):
        """Test building an object from alternating keys and values."""
        value = JSONValue.from_pairs("name", "Alice", "age", 30, 1, "one")

        assert value.is_object()
        assert value.at("name") == "Alice"
        assert value.at("age") == 30
        assert value.at("1") == "one"

    def test_from_pairs_duplicate_keys(self):
        """Test that later pairs overwrite earlier ones."""
        value = JSONValue.from_pairs("k", 1, "k", 2)

        assert value.size() == 1
        assert value.at("k") == 2

    def test_from_pairs_odd_arguments(self):
        """Test that an odd number of arguments is rejected."""
        with pytest.raises(ValueError, match="even number"):
            JSONValue.from_pairs("a", 1, "b")

    def test_factories(self):
        """Test the array and object factories."""
        assert new_array().length() == 0
        assert new_array(1, "a", None).dump_minified() == '[1,"a",null]'
        assert new_object().is_object()
        assert new_object().size() == 0


class TestMutableAccess:
    """Tests for auto-vivifying keyed and indexed access."""

    def test_nested_auto_vivification(self):
        """Test that keyed access on null builds nested objects."""
        value = JSONValue()
        value["a"]["b"]

        assert value.dump_minified() == '{"a":{"b":null}}'

    def test_assignment_through_slots(self):
        """Test that assignment through returned slots mutates the tree."""
        value = JSONValue()
        value["a"]["b"] = 1
        value["a"]["c"] = "x"

        assert value.dump_minified() == '{"a":{"b":1,"c":"x"}}'

    def test_array_padding(self):
        """Test that indexing past the end pads with null."""
        value = JSONValue()
        value[3]

        assert value.is_array()
        assert value.length() == 4
        for i in range(3):
            assert value.at(i).is_null()

    def test_index_assignment(self):
        """Test assignment into an existing array slot."""
        value = JSONValue([1, 2, 3])
        value[1] = "two"

        assert value.dump_minified() == '[1,"two",3]'

    def test_keyed_access_discards_payload(self):
        """Test that keyed access coerces non-objects."""
        value = JSONValue([1, 2])
        value["k"] = True

        assert value.is_object()
        assert value.dump_minified() == '{"k":true}'

    def test_indexed_access_discards_payload(self):
        """Test that indexed access coerces non-arrays."""
        value = JSONValue({"a": 1})
        value[0] = 5

        assert value.dump_minified() == "[5]"

    def test_negative_index(self):
        """Test that negative indexes are rejected."""
        value = JSONValue([1])

        with pytest.raises(IndexOutOfRange):
            value[-1]

    def test_invalid_key_types(self):
        """Test that only str and int keys are accepted."""
        value = JSONValue()

        with pytest.raises(TypeError):
            value[1.5]
        with pytest.raises(TypeError):
            value[True]

    def test_assigning_self_copies(self):
        """Test that storing a value inside itself stores a snapshot."""
        value = JSONValue({"a": 1})
        value["self"] = value

        assert value.at("self") == {"a": 1}
        assert not value.at("self").has_key("self")

    def test_stored_values_are_copies(self):
        """Test that containers never alias assigned values."""
        inner = JSONValue([1, 2])
        outer = JSONValue()
        outer["inner"] = inner
        inner.append(3)

        assert outer.at("inner").length() == 2

    def test_append(self):
        """Test appending to an existing array."""
        value = JSONValue([1])
        value.append(2, "three")

        assert value.dump_minified() == '[1,2,"three"]'

    def test_append_coerces(self):
        """Test that append discards non-array payloads."""
        value = JSONValue("text")
        value.append(1)

        assert value.dump_minified() == "[1]"

    def test_append_self(self):
        """Test appending a value to itself."""
        value = JSONValue([1])
        value.append(value)

        assert value.dump_minified() == "[1,[1]]"

    def test_set(self):
        """Test replacing a value's own payload."""
        value = JSONValue({"a": 1})
        value["a"].set(2.5)

        assert value.at("a").is_floating()
        assert value.at("a").to_float() == 2.5


class TestReadOnlyAccess:
    """Tests for at() and introspection."""

    def test_at_missing_key(self):
        """Test that a missing key raises KeyNotFound."""
        value = JSONValue({"a": 1})

        with pytest.raises(KeyNotFound) as exc_info:
            value.at("b")

        assert isinstance(exc_info.value, KeyError)
        assert exc_info.value.key == "b"
        assert not value.has_key("b")

    def test_at_key_on_non_object(self):
        """Test that keyed at() on a non-object fails without coercion."""
        value = JSONValue()

        with pytest.raises(KeyNotFound):
            value.at("a")

        assert value.is_null()

    def test_at_index_out_of_range(self):
        """Test bounds checking of indexed at()."""
        value = JSONValue([1, 2])

        with pytest.raises(IndexOutOfRange) as exc_info:
            value.at(2)

        assert isinstance(exc_info.value, IndexError)
        assert value.length() == 2

    def test_at_index_on_non_array(self):
        """Test that indexed at() on a non-array fails."""
        with pytest.raises(IndexOutOfRange):
            JSONValue("text").at(0)

    def test_length_and_size(self):
        """Test element counts for each tag."""
        assert JSONValue([1, 2, 3]).length() == 3
        assert JSONValue([1, 2, 3]).size() == 3
        assert JSONValue({"a": 1}).length() == -1
        assert JSONValue({"a": 1}).size() == 1
        assert JSONValue("abc").length() == -1
        assert JSONValue("abc").size() == -1
        assert JSONValue().size() == -1

    def test_has_key(self):
        """Test key membership."""
        value = JSONValue({"a": 1})

        assert value.has_key("a")
        assert "a" in value
        assert "z" not in value
        assert not JSONValue("a").has_key("a")

    def test_type_predicates(self):
        """Test the is_* predicates."""
        value = JSONValue(1.0)

        assert value.is_floating()
        assert not value.is_integral()
        assert not value.is_string()
        assert not value.is_array()
        assert not value.is_object()
        assert not value.is_null()
        assert not value.is_boolean()

    def test_object_range_is_sorted(self):
        """Test that objects iterate in ascending key order."""
        value = JSONValue()
        value["b"] = 1
        value["c"] = 2
        value["a"] = 3

        assert [key for key, _ in value.object_range()] == ["a", "b", "c"]
        assert list(value) == ["a", "b", "c"]

    def test_array_range(self):
        """Test array iteration."""
        value = JSONValue([3, 1, 2])

        assert [item.to_int() for item in value.array_range()] == [3, 1, 2]
        assert [item.to_int() for item in value] == [3, 1, 2]

    def test_ranges_on_other_tags(self):
        """Test that ranges over the wrong tag are empty."""
        assert list(JSONValue([1]).object_range()) == []
        assert list(JSONValue({"a": 1}).array_range()) == []
        assert list(JSONValue(5)) == []


class TestCopyAndMove:
    """Tests for ownership semantics."""

    def test_copy_is_deep(self):
        """Test that copies share no containers."""
        original = JSONValue({"x": [1]})
        duplicate = original.copy()
        duplicate["x"][0] = 2

        assert original.at("x").at(0) == 1
        assert duplicate.at("x").at(0) == 2

    def test_copy_module(self):
        """Test copy.copy and copy.deepcopy."""
        original = JSONValue({"x": {"y": 1}})

        shallow = copy.copy(original)
        deep = copy.deepcopy(original)
        shallow["x"]["y"] = 2
        deep["x"]["y"] = 3

        assert original.at("x").at("y") == 1

    def test_copy_constructor(self):
        """Test construction from another value."""
        original = JSONValue([1, [2]])
        duplicate = JSONValue(original)
        duplicate[1][0] = 5

        assert original.dump_minified() == "[1,[2]]"

    def test_take_moves_payload(self):
        """Test that take() leaves the source null."""
        source = JSONValue({"x": [1]})
        moved = source.take()

        assert source.is_null()
        assert moved == {"x": [1]}


class TestEqualityAndConversion:
    """Tests for equality, hashing and Python conversion."""

    def test_structural_equality(self):
        """Test equality of independently built trees."""
        built = JSONValue()
        built["a"] = 1
        built["b"].append(1, 2)

        assert built == JSONValue({"b": [1, 2], "a": 1})

    def test_tags_must_match(self):
        """Test that equal numbers with different tags differ."""
        assert JSONValue(1) != JSONValue(1.0)
        assert JSONValue(True) != JSONValue(1)
        assert JSONValue("1") != JSONValue(1)

    def test_compare_with_python(self):
        """Test comparison against plain Python values."""
        assert JSONValue([1, "a", None]) == [1, "a", None]
        assert JSONValue("x") == "x"
        assert JSONValue() == None  # noqa: E711
        assert JSONValue(1) != object()

    def test_unhashable(self):
        """Test that mutable values cannot be hashed."""
        with pytest.raises(TypeError):
            hash(JSONValue())

    def test_to_python(self, sample_document):
        """Test conversion back to Python data."""
        value = JSONValue(sample_document)

        assert value.to_python() == sample_document
        assert list(value.to_python().keys()) == ["count", "settings", "users"]

    def test_from_python(self, sample_document):
        """Test from_python as an alias of construction."""
        assert JSONValue.from_python(sample_document) == JSONValue(sample_document)

    def test_str_and_repr(self):
        """Test text representations."""
        value = JSONValue({"a": [1, 2]})

        assert str(value) == value.dump()
        assert repr(value) == 'JSONValue({"a":[1,2]})'

    def test_load(self):
        """Test parsing through the value class."""
        assert JSONValue.load('{"a":[true]}') == {"a": [True]}

        value, ok = JSONValue.load_checked("[1,")
        assert not ok
        assert value.is_array()
