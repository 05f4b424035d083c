"""Tests for schemas and the declaration builder.

A schema is declared once with a chain of registration calls and then
frozen.  ``desc`` documents only the next variable; duplicates and a
missing prefix are rejected.
"""

import pytest

from py_konf.coercion import BooleanCoercer, ListCoercer, StringCoercer
from py_konf.errors import ConfigError, SchemaError, UnknownVariableError
from py_konf.schema import Schema, SchemaBuilder


def _schema() -> Schema:
    """Build the schema used throughout these tests."""
    return (
        SchemaBuilder()
        .env_prefix("test")
        .string("greeting", required=True)
        .desc("pitch level")
        .integer("level", default=0)
        .desc("whether greeting is enabled")
        .boolean("enabled", default=False)
        .boolean("awesome", default=True)
        .list("phrases", sep=";", items="string")
        .float("happiness", default=1.0)
        .build()
    )


class TestDeclaration:
    """Verify variables are registered in order with their options."""

    def test_names_in_declaration_order(self) -> None:
        """Iteration follows declaration order."""
        schema = _schema()
        assert schema.names() == ["greeting", "level", "enabled", "awesome", "phrases", "happiness"]
        assert [v.name for v in schema] == schema.names()
        assert len(schema) == 6

    def test_options_are_recorded(self) -> None:
        """Required flags, defaults, and types are kept."""
        schema = _schema()
        assert schema.variable("greeting").required is True
        assert isinstance(schema.variable("greeting").type, StringCoercer)
        assert schema.variable("level").default == 0
        assert isinstance(schema.variable("enabled").type, BooleanCoercer)
        assert schema.variable("awesome").default is True

    def test_list_options(self) -> None:
        """List variables carry item type and separator."""
        coercer = _schema().variable("phrases").type
        assert isinstance(coercer, ListCoercer)
        assert isinstance(coercer.item, StringCoercer)
        assert coercer.sep == ";"

    def test_contains(self) -> None:
        """Membership tests declared names."""
        schema = _schema()
        assert "level" in schema
        assert "missing" not in schema

    def test_schema_is_frozen(self) -> None:
        """Neither the prefix nor the variables can be replaced."""
        schema = _schema()
        with pytest.raises(AttributeError):
            schema.prefix = "other"  # type: ignore[misc]
        with pytest.raises(TypeError):
            schema.variables["level"] = schema.variables["greeting"]  # type: ignore[index]


class TestDescriptions:
    """Verify desc() applies only to the next declaration."""

    def test_described_variables(self) -> None:
        """desc attaches to the variable declared right after it."""
        schema = _schema()
        assert schema.description("level") == "pitch level"
        assert schema.description("enabled") == "whether greeting is enabled"

    def test_description_resets(self) -> None:
        """Variables declared without desc have no description."""
        schema = _schema()
        assert schema.description("awesome") is None
        assert schema.description("phrases") is None

    def test_failed_declaration_consumes_description(self) -> None:
        """A rejected declaration does not pass its desc on."""
        builder = SchemaBuilder().env_prefix("test").desc("orphan")
        with pytest.raises(SchemaError):
            builder.integer("level", default="zero")  # type: ignore[arg-type]
        schema = builder.integer("level").build()
        assert schema.description("level") is None


class TestDeclarationErrors:
    """Verify inconsistent declarations are rejected."""

    def test_duplicate_name_rejected(self) -> None:
        """Declaring a name twice is an error."""
        builder = SchemaBuilder().env_prefix("test").string("greeting")
        with pytest.raises(SchemaError, match="^variable `greeting` is already defined$"):
            builder.integer("greeting")

    def test_case_insensitive_duplicate_rejected(self) -> None:
        """Names that share an environment key collide."""
        builder = SchemaBuilder().env_prefix("test").string("greeting")
        with pytest.raises(SchemaError, match="already defined"):
            builder.string("GREETING")

    def test_missing_prefix_rejected(self) -> None:
        """A schema must have an environment prefix."""
        with pytest.raises(SchemaError, match="^no environment prefix defined$"):
            SchemaBuilder().string("greeting").build()

    def test_invalid_prefix_rejected(self) -> None:
        """Prefixes follow the same rules as names."""
        with pytest.raises(SchemaError, match="invalid environment prefix"):
            SchemaBuilder().env_prefix("my-app")

    def test_list_without_items_rejected(self) -> None:
        """Lists need an item type."""
        with pytest.raises(SchemaError):
            SchemaBuilder().add("phrases", "list")

    def test_schema_error_is_config_error(self) -> None:
        """Declaration errors share the ConfigError base."""
        with pytest.raises(ConfigError):
            SchemaBuilder().build()


class TestLookups:
    """Verify name-based lookups."""

    def test_unknown_variable(self) -> None:
        """Unknown names raise UnknownVariableError."""
        with pytest.raises(UnknownVariableError, match="^unknown variable `nope`$"):
            _schema().variable("nope")

    def test_env_key(self) -> None:
        """Environment keys use the upper-cased prefix and name."""
        assert _schema().env_key("phrases") == "TEST_PHRASES"
