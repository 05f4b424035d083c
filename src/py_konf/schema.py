"""Schemas — the declared shape of one configuration.

A schema is built once, at startup, by a sequence of registration calls
on a ``SchemaBuilder``::

    schema = (
        SchemaBuilder()
        .env_prefix("test")
        .string("greeting", required=True)
        .desc("pitch level")
        .integer("level", default=0)
        .list("phrases", items="string", sep=";")
        .build()
    )

``desc`` attaches its text to the *next* declared variable only, so a
description reads directly above the variable it documents.

The result is an immutable ``Schema``: an environment prefix plus an
ordered, read-only mapping of variable names to ``Variable`` objects.
Every ``Config`` built from it shares the same schema.

Two declaration mistakes are rejected outright rather than given
silent semantics:
    - **Duplicate names** — names that collide (case-insensitively,
      since they map to the same environment key) raise ``SchemaError``.
    - **Missing prefix** — a schema without an environment prefix has
      no deterministic environment keys, so ``build`` refuses it.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Self

from py_konf.coercion import DEFAULT_SEPARATOR, VariableType, make_coercer
from py_konf.errors import SchemaError, UnknownVariableError
from py_konf.variable import Variable, check_identifier


@dataclass(frozen=True)
class Schema:
    """An environment prefix and the variables declared under it."""

    prefix: str
    variables: Mapping[str, Variable]

    def __iter__(self) -> Iterator[Variable]:
        """Yield variables in declaration order."""
        return iter(self.variables.values())

    def __contains__(self, name: object) -> bool:
        """Return True if *name* is a declared variable."""
        return name in self.variables

    def __len__(self) -> int:
        """Return the number of declared variables."""
        return len(self.variables)

    def names(self) -> list[str]:
        """Return the declared names in order."""
        return list(self.variables)

    def variable(self, name: str) -> Variable:
        """Look up a variable by name.

        Raises:
            UnknownVariableError: If *name* is not declared.

        """
        try:
            return self.variables[name]
        except KeyError:
            msg = f"unknown variable `{name}`"
            raise UnknownVariableError(msg) from None

    def description(self, name: str) -> str | None:
        """Return the description declared for *name*, if any."""
        return self.variable(name).description

    def env_key(self, name: str) -> str:
        """Return the environment key that sets *name*."""
        return self.variable(name).env_key(self.prefix)


class SchemaBuilder:
    """Collect variable declarations and produce a ``Schema``.

    Every registration method returns the builder, so declarations can
    be chained or written one per statement.
    """

    def __init__(self) -> None:
        """Create an empty builder with no prefix."""
        self._prefix: str | None = None
        self._variables: dict[str, Variable] = {}
        self._pending_description: str | None = None

    def env_prefix(self, prefix: str) -> Self:
        """Set the environment prefix (``test`` → ``TEST_<NAME>``).

        Raises:
            SchemaError: If *prefix* is not an identifier.

        """
        check_identifier(prefix, what="environment prefix")
        self._prefix = prefix
        return self

    def desc(self, text: str) -> Self:
        """Describe the next declared variable."""
        self._pending_description = text
        return self

    def string(self, name: str, *, required: bool = False, default: str | None = None) -> Self:
        """Declare a string variable."""
        return self.add(name, VariableType.STRING, required=required, default=default)

    def integer(self, name: str, *, required: bool = False, default: int | None = None) -> Self:
        """Declare an integer variable."""
        return self.add(name, VariableType.INTEGER, required=required, default=default)

    def float(self, name: str, *, required: bool = False, default: float | None = None) -> Self:
        """Declare a float variable; integer defaults are stored as floats."""
        return self.add(name, VariableType.FLOAT, required=required, default=default)

    def boolean(self, name: str, *, required: bool = False, default: bool | None = None) -> Self:
        """Declare a boolean variable."""
        return self.add(name, VariableType.BOOLEAN, required=required, default=default)

    def list(
        self,
        name: str,
        *,
        items: VariableType | str,
        sep: str = DEFAULT_SEPARATOR,
        required: bool = False,
        default: Any = None,
    ) -> Self:
        """Declare a list variable.

        Args:
            name: The variable name.
            items: The element type (a scalar type).
            sep: The separator used when decoding from a string.
            required: Whether a value must be supplied.
            default: Default list value.

        """
        return self.add(
            name, VariableType.LIST, required=required, default=default, items=items, sep=sep
        )

    def add(
        self,
        name: str,
        variable_type: VariableType | str,
        *,
        required: bool = False,
        default: Any = None,
        items: VariableType | str | None = None,
        sep: str | None = None,
    ) -> Self:
        """Declare a variable of any type.

        The typed helpers above all funnel into this method.  The
        pending ``desc`` text is consumed whether or not the
        declaration succeeds.

        Raises:
            SchemaError: If the name is invalid or already declared, the
                type options are inconsistent, or the default does not
                match the type.

        """
        description, self._pending_description = self._pending_description, None
        if any(existing.lower() == name.lower() for existing in self._variables):
            msg = f"variable `{name}` is already defined"
            raise SchemaError(msg)
        self._variables[name] = Variable(
            name=name,
            type=make_coercer(variable_type, items=items, sep=sep),
            default=default,
            required=required,
            description=description,
        )
        return self

    def build(self) -> Schema:
        """Freeze the declarations into a ``Schema``.

        Raises:
            SchemaError: If no environment prefix was set.

        """
        if self._prefix is None:
            msg = "no environment prefix defined"
            raise SchemaError(msg)
        return Schema(prefix=self._prefix, variables=MappingProxyType(dict(self._variables)))
