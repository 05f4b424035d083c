"""Variable types and the coercion rules behind them.

A configuration value reaches a variable by one of two paths:

1. **Decode** — the value arrives as a string (an environment variable,
   or an explicit ``Config.decode`` call) and must be *parsed* into the
   declared type.  ``"42"`` becomes ``42``; ``"XXX"`` is rejected.
2. **Accept / cast** — the value arrives as a native Python object
   through the object API and only its *shape* is checked.  No parsing
   happens here: assigning the string ``"42"`` to an integer variable is
   an error, not a conversion.

Each type is implemented by a small coercer object that satisfies the
``Coercer`` protocol.  The native-value path is driven by
``ACCEPTED_TYPES``, an explicit table of which runtime types each
variable type admits.  The lookup uses the *exact* runtime type, so
``True`` (a ``bool``, and therefore technically an ``int``) is never
accepted as an integer or a float.
"""

import math
import re
from collections.abc import Callable
from enum import StrEnum
from typing import Any, Protocol

from py_konf.errors import DecodeError, SchemaError, inspect_value


class VariableType(StrEnum):
    """The closed set of types a variable can be declared with."""

    STRING = "string"
    INTEGER = "integer"
    FLOAT = "float"
    BOOLEAN = "boolean"
    LIST = "list"


SCALAR_TYPES = frozenset(
    {VariableType.STRING, VariableType.INTEGER, VariableType.FLOAT, VariableType.BOOLEAN}
)

ACCEPTED_TYPES: dict[VariableType, frozenset[type]] = {
    VariableType.STRING: frozenset({str}),
    VariableType.INTEGER: frozenset({int}),
    VariableType.FLOAT: frozenset({float, int}),
    VariableType.BOOLEAN: frozenset({bool}),
    VariableType.LIST: frozenset({list, tuple}),
}

DEFAULT_SEPARATOR = ","

_INTEGER_PATTERN = re.compile(r"[+-]?[0-9]+")
_FLOAT_PATTERN = re.compile(r"[+-]?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")

TRUE_STRINGS = frozenset({"true", "1"})
FALSE_STRINGS = frozenset({"false", "0"})


class Coercer(Protocol):
    """Interface every variable type implements.

    - name: the type name shown in error messages.
    - decode: parse a raw string into a typed value.
    - accepts: check whether a native value has the right shape.
    - cast: convert an accepted value into its storage form.
    """

    @property
    def name(self) -> str:
        """Return the type name used in messages."""
        ...  # pragma: no cover

    def decode(self, raw: str) -> Any:
        """Parse *raw* or raise ``DecodeError``."""
        ...  # pragma: no cover

    def accepts(self, value: Any) -> bool:
        """Return True if *value* may be stored without decoding."""
        ...  # pragma: no cover

    def cast(self, value: Any) -> Any:
        """Return the storage form of an accepted *value*."""
        ...  # pragma: no cover


def _not_a(raw: str, name: str) -> DecodeError:
    article = "an" if name[0] in "aeiou" else "a"
    return DecodeError(f"{inspect_value(raw)} is not {article} {name}")


class _ScalarCoercer:
    """Shared shape check for the four scalar types."""

    variable_type: VariableType

    @property
    def name(self) -> str:
        """Return the type name used in messages."""
        return self.variable_type.value

    def accepts(self, value: Any) -> bool:
        """Look the exact runtime type of *value* up in ``ACCEPTED_TYPES``."""
        return type(value) in ACCEPTED_TYPES[self.variable_type]

    def cast(self, value: Any) -> Any:
        """Scalars are stored as given."""
        return value

    def __repr__(self) -> str:
        """Return a readable representation."""
        return f"{type(self).__name__}()"


class StringCoercer(_ScalarCoercer):
    """Strings decode to themselves; nothing can fail."""

    variable_type = VariableType.STRING

    def decode(self, raw: str) -> str:
        """Return *raw* unchanged."""
        return raw


class IntegerCoercer(_ScalarCoercer):
    """Base-10 integers with an optional sign and nothing else."""

    variable_type = VariableType.INTEGER

    def decode(self, raw: str) -> int:
        """Parse a base-10 integer literal.

        Unlike ``int()``, surrounding whitespace and ``_`` digit
        separators are rejected.

        Raises:
            DecodeError: If *raw* is not an integer literal.

        """
        if _INTEGER_PATTERN.fullmatch(raw) is None:
            raise _not_a(raw, self.name)
        try:
            return int(raw)
        except ValueError:
            # Past the interpreter's int string conversion limit.
            raise _not_a(raw, self.name) from None


class FloatCoercer(_ScalarCoercer):
    """Decimal floating-point numbers; integers are welcome too."""

    variable_type = VariableType.FLOAT

    def decode(self, raw: str) -> float:
        """Parse a decimal float literal (``"0"`` gives ``0.0``).

        ``inf`` and ``nan`` are not configuration values.  They are
        rejected whether spelled out or reached by overflow (``"1e400"``).

        Raises:
            DecodeError: If *raw* is not a float literal.

        """
        if _FLOAT_PATTERN.fullmatch(raw) is None:
            raise _not_a(raw, self.name)
        value = float(raw)
        if not math.isfinite(value):
            raise _not_a(raw, self.name)
        return value

    def accepts(self, value: Any) -> bool:
        """Accept floats, and integers small enough to become one."""
        if not super().accepts(value):
            return False
        try:
            float(value)
        except OverflowError:
            return False
        return True

    def cast(self, value: Any) -> float:
        """Store integers as floats."""
        return float(value)


class BooleanCoercer(_ScalarCoercer):
    """Case-insensitive ``true`` / ``false`` (plus ``1`` / ``0``)."""

    variable_type = VariableType.BOOLEAN

    def decode(self, raw: str) -> bool:
        """Parse a boolean.

        Raises:
            DecodeError: If *raw* is not one of the known spellings.

        """
        lowered = raw.lower()
        if lowered in TRUE_STRINGS:
            return True
        if lowered in FALSE_STRINGS:
            return False
        raise _not_a(raw, self.name)


class ListCoercer:
    """A separator-delimited sequence of scalar items.

    The raw string is split on ``sep`` and every piece is decoded with
    the item coercer.  Pieces are *not* stripped, so ``"a, b"`` split on
    ``","`` yields ``["a", " b"]`` for a string list and fails for an
    integer list.
    """

    def __init__(self, item: Coercer, *, sep: str = DEFAULT_SEPARATOR) -> None:
        """Create a list coercer.

        Args:
            item: Coercer applied to each element.
            sep: The separator between elements.

        """
        self._item = item
        self._sep = sep

    @property
    def name(self) -> str:
        """Return the type name used in messages."""
        return VariableType.LIST.value

    @property
    def item(self) -> Coercer:
        """Return the coercer used for each element."""
        return self._item

    @property
    def sep(self) -> str:
        """Return the element separator."""
        return self._sep

    def decode(self, raw: str) -> list[Any]:
        """Split *raw* and decode each piece in order.

        The empty string is the empty list.

        Raises:
            DecodeError: If any piece fails to decode.

        """
        if not raw:
            return []
        return [self._item.decode(piece) for piece in raw.split(self._sep)]

    def accepts(self, value: Any) -> bool:
        """Accept a list or tuple whose every element the item type accepts."""
        if type(value) not in ACCEPTED_TYPES[VariableType.LIST]:
            return False
        return all(self._item.accepts(element) for element in value)

    def cast(self, value: Any) -> list[Any]:
        """Return a fresh list of cast elements."""
        return [self._item.cast(element) for element in value]

    def __repr__(self) -> str:
        """Return a readable representation."""
        return f"ListCoercer({self._item!r}, sep={self._sep!r})"


_SCALAR_COERCERS: dict[VariableType, Callable[[], Coercer]] = {
    VariableType.STRING: StringCoercer,
    VariableType.INTEGER: IntegerCoercer,
    VariableType.FLOAT: FloatCoercer,
    VariableType.BOOLEAN: BooleanCoercer,
}


def _as_type(value: VariableType | str) -> VariableType:
    try:
        return VariableType(value)
    except ValueError:
        msg = f"unknown variable type {inspect_value(str(value))}"
        raise SchemaError(msg) from None


def make_coercer(
    variable_type: VariableType | str,
    *,
    items: VariableType | str | None = None,
    sep: str | None = None,
) -> Coercer:
    """Build the coercer for a declared type.

    Args:
        variable_type: The declared type.
        items: Element type; required for lists, forbidden otherwise.
        sep: Element separator for lists (defaults to ``","``).

    Returns:
        A coercer implementing the type's decode and accept rules.

    Raises:
        SchemaError: If the combination of arguments is invalid.

    """
    kind = _as_type(variable_type)
    if kind is not VariableType.LIST:
        if items is not None or sep is not None:
            msg = f"items and sep only apply to list variables, not {kind}"
            raise SchemaError(msg)
        return _SCALAR_COERCERS[kind]()

    if items is None:
        msg = "list variables must declare an item type"
        raise SchemaError(msg)
    item_kind = _as_type(items)
    if item_kind not in SCALAR_TYPES:
        msg = f"list items must be a scalar type, not {item_kind}"
        raise SchemaError(msg)
    if sep is None:
        sep = DEFAULT_SEPARATOR
    if not sep:
        msg = "list separator must not be empty"
        raise SchemaError(msg)
    return ListCoercer(_SCALAR_COERCERS[item_kind](), sep=sep)
