"""
Unit tests for reader types.
"""

from dataclasses import FrozenInstanceError
from datetime import datetime, timedelta, timezone

import pytest

import structured_reader
from structured_reader import DeclarationError, WrongTypeError
from structured_reader.schema.types import LiteralReader, NumberReader, ObjectReader, Field, StringReader


def reader(declare, **kwargs):
    return structured_reader.json(declare, **kwargs)


class TestScalarReaders:
    """Test null, literal, string, time, number, boolean and raw readers."""

    def test_read_null(self):
        """Test reading a null."""
        result = reader(lambda o: o.null("nul")).read({"nul": None})

        assert result.nul is None

    def test_null_rejects_values(self):
        """Test that null rejects anything but null."""
        with pytest.raises(WrongTypeError) as exc_info:
            reader(lambda o: o.null("nul")).read({"nul": 0})

        assert exc_info.value.reason == "expected null"

    def test_read_string(self):
        """Test reading a string."""
        result = reader(lambda o: o.string("str")).read({"str": "bar"})

        assert result.str == "bar"

    def test_string_rejects_number(self):
        """Test that a number is not coerced to a string."""
        with pytest.raises(WrongTypeError) as exc_info:
            reader(lambda o: o.string("str")).read({"str": 5})

        assert exc_info.value.path == ".str"
        assert str(exc_info.value) == "expected a String, got a Number (at .str)"

    def test_read_integer_and_float(self):
        """Test that numbers keep their integer/float distinction."""
        rdr = reader(lambda o: o.number("num"))

        integer = rdr.read({"num": 1}).num
        floating = rdr.read({"num": 1.0}).num

        assert integer == 1 and isinstance(integer, int)
        assert floating == 1.0 and isinstance(floating, float)

    def test_number_rejects_boolean(self):
        """Test that booleans are not numbers."""
        with pytest.raises(WrongTypeError):
            reader(lambda o: o.number("num")).read({"num": True})

    def test_read_boolean(self):
        """Test reading a boolean."""
        rdr = reader(lambda o: o.boolean("flag"))

        assert rdr.read({"flag": False}).flag is False

        with pytest.raises(WrongTypeError):
            rdr.read({"flag": 0})

    def test_read_time(self):
        """Test that ISO-8601 strings become datetimes."""
        result = reader(lambda o: o.time("at")).read({"at": "2017-12-24T01:05:00-08:00"})

        assert result.at == datetime(2017, 12, 24, 1, 5, tzinfo=timezone(timedelta(hours=-8)))

    def test_time_rejects_unparseable_string(self):
        """Test that an unparseable time string fails with its own reason."""
        with pytest.raises(WrongTypeError) as exc_info:
            reader(lambda o: o.time("at")).read({"at": "next tuesday"})

        assert exc_info.value.reason == "could not be converted to a datetime"

    def test_read_raw(self):
        """Test that raw returns the fragment unmodified."""
        raw = [{"yep": 1}, {"what_of_it": ["woot"]}, True]

        result = reader(lambda o: o.raw("raw")).read({"raw": raw})

        assert result.raw == raw

    def test_read_literal(self):
        """Test that a literal accepts exactly its value."""
        rdr = reader(lambda o: o.literal("lit", value="yes"))

        assert rdr.read({"lit": "yes"}).lit == "yes"

        with pytest.raises(WrongTypeError) as exc_info:
            rdr.read({"lit": "no"})
        assert exc_info.value.reason == 'expected the literal "yes"'

    def test_literal_does_not_coerce(self):
        """Test that True does not match the literal 1."""
        rdr = reader(lambda o: o.literal("lit", value=1))

        assert rdr.read({"lit": 1}).lit == 1
        with pytest.raises(WrongTypeError):
            rdr.read({"lit": True})
        with pytest.raises(WrongTypeError):
            rdr.read({"lit": "1"})

    def test_literal_must_be_scalar(self):
        """Test that non-scalar literals are rejected at declaration."""
        with pytest.raises(DeclarationError):
            LiteralReader([1, 2])


class TestObjectReader:
    """Test object reading."""

    def test_read_nested_object(self):
        """Test reading a nested object."""
        result = reader(
            lambda o: o.object("obj", lambda o2: o2.string("foo"))
        ).read({"obj": {"foo": "bar"}})

        assert result.obj.foo == "bar"

    def test_source_key_rename(self):
        """Test that key= reads from a differently named input key."""
        result = reader(lambda o: o.string("next_url", key="nextUrl")).read({"nextUrl": "/page/2"})

        assert result.next_url == "/page/2"

    def test_undeclared_keys_are_ignored(self):
        """Test that non-strict objects ignore extra keys."""
        result = reader(lambda o: o.string("foo")).read({"foo": "bar", "baz": "bat"})

        assert result.foo == "bar"
        assert not hasattr(result, "baz")

    def test_strict_object(self):
        """Test that strict objects reject undeclared keys."""
        rdr = reader(lambda o: o.object("obj", lambda obj: obj.string("foo"), strict=True))

        assert rdr.read({"obj": {"foo": "bar"}}).obj.foo == "bar"

        with pytest.raises(WrongTypeError) as exc_info:
            rdr.read({"obj": {"foo": "bar", "baz": "bat"}})
        assert exc_info.value.path == ".obj"

    def test_strict_object_lists_all_excess_keys_once(self):
        """Test that all excess keys are reported in a single error."""
        rdr = reader(lambda o: o.object("obj", lambda obj: obj.string("foo"), strict=True))

        result = rdr.validate({"obj": {"foo": "bar", "baz": "bat", "qux": 1}})

        assert result.errors == [(".obj", "found strictly forbidden keys ['baz', 'qux']")]

    def test_strict_check_runs_after_fields(self):
        """Test that field errors and excess keys are reported together."""
        rdr = reader(lambda o: o.string("foo"), strict=True)

        result = rdr.validate({"foo": 1, "baz": 2})

        assert result.errors == [
            (".foo", "expected a String"),
            ("", "found strictly forbidden keys ['baz']"),
        ]

    def test_object_rejects_non_mapping(self):
        """Test that arrays are not objects."""
        with pytest.raises(WrongTypeError) as exc_info:
            reader(lambda o: o.object("obj", lambda o2: o2.string("foo"))).read({"obj": []})

        assert exc_info.value.reason == "expected an Object"

    def test_records_are_frozen(self):
        """Test that produced records cannot be modified."""
        result = reader(lambda o: o.string("foo")).read({"foo": "bar"})

        with pytest.raises(FrozenInstanceError):
            result.foo = "baz"

    def test_reader_can_be_built_directly(self):
        """Test assembling an ObjectReader without builders."""
        rdr = ObjectReader(fields=(Field("price", "cost", NumberReader()), Field("name", "name", StringReader())))

        result = structured_reader.JSONReader(rdr).read({"cost": 3, "name": "lamp"})

        assert (result.price, result.name) == (3, "lamp")

    def test_first_failing_field_wins(self):
        """Test that read stops at the first failing field in declaration order."""
        rdr = reader(lambda o: o.string("first").string("last"))

        with pytest.raises(WrongTypeError) as exc_info:
            rdr.read({"first": 1, "last": 2})

        assert exc_info.value.path == ".first"


class TestArrayReader:
    """Test array and collection reading."""

    def test_read_array_with_declaration(self):
        """Test reading an array declared with a function."""
        result = reader(lambda o: o.array("ary", lambda a: a.string())).read({"ary": ["foo", "bar", "baz"]})

        assert result.ary == ["foo", "bar", "baz"]

    def test_read_array_of_shorthand(self):
        """Test reading an array declared with of=."""
        result = reader(lambda o: o.array("ary", of="string")).read({"ary": ["c", "a", "b", "a"]})

        assert result.ary == ["c", "a", "b", "a"]

    def test_read_array_of_objects(self):
        """Test reading an array whose members are objects."""
        result = reader(
            lambda o: o.array("ary", lambda a: a.object(lambda o2: o2.string("foo")))
        ).read({"ary": [{"foo": "bar"}]})

        assert result.ary[0].foo == "bar"

    def test_read_collection(self):
        """Test reading a collection."""
        result = reader(lambda o: o.collection("coll", lambda c: c.string("foo"))).read({"coll": [{"foo": "bar"}]})

        assert result.coll[0].foo == "bar"

    def test_array_member_path(self):
        """Test that member failures report their index."""
        with pytest.raises(WrongTypeError) as exc_info:
            reader(lambda o: o.array("ary", of="string")).read({"ary": ["a", 2]})

        assert exc_info.value.path == ".ary[1]"

    def test_array_rejects_string(self):
        """Test that strings are not arrays."""
        with pytest.raises(WrongTypeError) as exc_info:
            reader(lambda o: o.array("ary", of="string")).read({"ary": "abc"})

        assert exc_info.value.reason == "expected an Array"

    def test_array_root(self):
        """Test an array at the document root."""
        result = structured_reader.json(root="array", of="number").read("[1, 2.5]")

        assert result == [1, 2.5]


class TestOneOfReader:
    """Test one_of reading."""

    def test_accepts_any_declared_option(self):
        """Test that each declared option is accepted."""
        rdr = reader(lambda o: o.one_of("vary", lambda v: v.string().number().array(of="string")))

        assert rdr.read({"vary": "foo"}).vary == "foo"
        assert rdr.read({"vary": 1}).vary == 1
        assert rdr.read({"vary": ["hi", "there"]}).vary == ["hi", "there"]

    def test_rejects_undeclared_options(self):
        """Test that a fragment matching no option is rejected."""
        rdr = reader(lambda o: o.one_of("vary", lambda v: v.string()))

        with pytest.raises(WrongTypeError) as exc_info:
            rdr.read({"vary": 1})

        assert exc_info.value.reason == "was not any of the expected options"
        assert exc_info.value.path == ".vary"

    def test_first_matching_option_wins(self):
        """Test that the string "5" stays a string."""
        rdr = reader(lambda o: o.one_of("vary", lambda v: v.string().number()))

        assert rdr.read({"vary": "5"}).vary == "5"

    def test_failed_trials_do_not_leak(self):
        """Test that a rejected option's errors are not raised or recorded."""
        def options(v):
            v.object(lambda o: o.number("a"))
            v.object(lambda o: o.string("a"))

        rdr = reader(lambda o: o.one_of("vary", options))

        assert rdr.read({"vary": {"a": "x"}}).vary.a == "x"
        assert rdr.validate({"vary": {"a": None}}).errors == [(".vary", "was not any of the expected options")]

    def test_nullable(self):
        """Test that nullable fields accept null and the declared type only."""
        rdr = reader(lambda o: o.string("x", nullable=True))

        assert rdr.read({"x": None}).x is None
        assert rdr.read({}).x is None
        assert rdr.read({"x": "a"}).x == "a"
        with pytest.raises(WrongTypeError):
            rdr.read({"x": 5})


class TestCustomReader:
    """Test custom readers."""

    @staticmethod
    def one_to_ten(fragment, traversal):
        if isinstance(fragment, int) and not isinstance(fragment, bool) and 1 <= fragment <= 10:
            return traversal.accept(fragment)
        return traversal.flunk(fragment, "must be a number from 1 to 10")

    def test_delegates_to_callback(self):
        """Test that reading is delegated to the callback."""
        rdr = reader(lambda o: o.custom("cust", self.one_to_ten))

        assert rdr.read({"cust": 7}).cust == 7

        with pytest.raises(WrongTypeError):
            rdr.read({"cust": 11})
        with pytest.raises(WrongTypeError) as exc_info:
            rdr.read({"cust": "7"})
        assert exc_info.value.reason == "must be a number from 1 to 10"

    def test_callback_failures_are_collected(self):
        """Test that callback failures follow the traversal strategy."""
        rdr = reader(lambda o: o.custom("a", self.one_to_ten).custom("b", self.one_to_ten))

        result = rdr.validate({"a": 0, "b": 11})

        assert result.errors == [
            (".a", "must be a number from 1 to 10"),
            (".b", "must be a number from 1 to 10"),
        ]

    def test_custom_needs_callable(self):
        """Test that a custom reader without a callback is rejected."""
        with pytest.raises(DeclarationError):
            reader(lambda o: o.custom("cust", "not callable"))


class TestDiscriminatedUnion:
    """Test one_of over objects tagged by a literal."""

    def test_discriminated_union(self):
        """Test that each record exposes only its own shape's fields."""
        def shape(s):
            s.object(lambda sq: sq.literal("type", value="square").number("length"))
            s.object(lambda rc: rc.literal("type", value="rectangle").number("width").number("height"))
            s.object(lambda cr: cr.literal("type", value="circle").number("diameter"))

        rdr = reader(lambda o: o.array("shapes", lambda a: a.one_of(shape)))

        result = rdr.read({
            "shapes": [
                {"type": "square", "length": 10},
                {"type": "rectangle", "width": 5, "height": 10},
                {"type": "circle", "diameter": 4},
            ]
        })

        assert len(result.shapes) == 3
        assert result.shapes[0].type == "square"
        assert result.shapes[0].length == 10
        assert result.shapes[1].width == 5
        assert result.shapes[2].diameter == 4
        assert not hasattr(result.shapes[0], "diameter")
        assert not hasattr(result.shapes[2], "length")
