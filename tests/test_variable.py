"""Tests for variable definitions.

A variable is pure description: name, type, default, required flag,
and description.  It validates native values and decodes strings, and
knows its own environment key.
"""

import pytest

from py_konf.coercion import FloatCoercer, IntegerCoercer, ListCoercer, StringCoercer
from py_konf.errors import InvalidValueError, SchemaError
from py_konf.variable import Variable


class TestVariableDeclaration:
    """Verify declaration-time checks."""

    def test_defaults(self) -> None:
        """A bare variable is optional, undocumented, and has no default."""
        variable = Variable(name="greeting", type=StringCoercer())
        assert variable.default is None
        assert variable.required is False
        assert variable.description is None

    @pytest.mark.parametrize("name", ["", "with-dash", "with space", "dotted.name"])
    def test_invalid_names_rejected(self, name: str) -> None:
        """Names must be letters, digits, and underscores."""
        with pytest.raises(SchemaError, match="invalid variable name"):
            Variable(name=name, type=StringCoercer())

    def test_default_must_match_type(self) -> None:
        """A default of the wrong type is a declaration error."""
        with pytest.raises(SchemaError, match="expected integer"):
            Variable(name="level", type=IntegerCoercer(), default="zero")

    def test_integer_default_for_float_is_cast(self) -> None:
        """Integer defaults of float variables are stored as floats."""
        variable = Variable(name="happiness", type=FloatCoercer(), default=1)
        assert isinstance(variable.default, float)

    def test_variable_is_frozen(self) -> None:
        """Declared variables cannot be changed afterwards."""
        variable = Variable(name="level", type=IntegerCoercer())
        with pytest.raises(AttributeError):
            variable.required = True  # type: ignore[misc]


class TestVariableValidate:
    """Verify the native-value path and its messages."""

    def test_none_always_passes(self) -> None:
        """None means 'no value' and skips type checks."""
        variable = Variable(name="level", type=IntegerCoercer(), required=True)
        assert variable.validate(None) is None

    def test_string_rejects_integer(self) -> None:
        """Integers are not strings."""
        variable = Variable(name="greeting", type=StringCoercer())
        with pytest.raises(
            InvalidValueError,
            match="^invalid value 42 for variable `greeting`, expected string$",
        ):
            variable.validate(42)

    def test_integer_rejects_string(self) -> None:
        """The rejected string is shown in double quotes."""
        variable = Variable(name="level", type=IntegerCoercer())
        with pytest.raises(
            InvalidValueError,
            match='^invalid value "yolo" for variable `level`, expected integer$',
        ):
            variable.validate("yolo")

    def test_list_message_uses_list_name(self) -> None:
        """Lists report 'expected list'."""
        variable = Variable(name="phrases", type=ListCoercer(StringCoercer()))
        with pytest.raises(
            InvalidValueError,
            match=r"^invalid value \[1, 2\] for variable `phrases`, expected list$",
        ):
            variable.validate([1, 2])

    def test_message_for_int_past_conversion_limit(self) -> None:
        """Ints too long to print are summarised by bit length."""
        variable = Variable(name="happiness", type=FloatCoercer())
        with pytest.raises(
            InvalidValueError,
            match=r"^invalid value <\d+-bit integer> for variable `happiness`, expected float$",
        ):
            variable.validate(10**5000)


class TestVariableDecodeRoundTrip:
    """Decoding a value's string form and validating it gives it back."""

    @pytest.mark.parametrize(
        ("variable", "value", "text"),
        [
            (Variable(name="s", type=StringCoercer()), "hello", "hello"),
            (Variable(name="i", type=IntegerCoercer()), -12, "-12"),
            (Variable(name="f", type=FloatCoercer()), 0.25, "0.25"),
            (Variable(name="l", type=ListCoercer(IntegerCoercer())), [1, 2], "1,2"),
        ],
    )
    def test_round_trip(self, variable: Variable, value: object, text: str) -> None:
        """validate(decode(text)) == value."""
        assert variable.validate(variable.decode(text)) == value


class TestEnvKey:
    """Verify the environment key convention."""

    def test_upper_cased_prefix_and_name(self) -> None:
        """The key is PREFIX_NAME, upper-cased."""
        variable = Variable(name="greeting", type=StringCoercer())
        assert variable.env_key("test") == "TEST_GREETING"
