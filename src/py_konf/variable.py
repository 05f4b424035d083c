"""Variable definitions — one named, typed slot in a schema.

A ``Variable`` is pure description: it knows its name, how to coerce
values of its type, its default, whether it is required, and an
optional human-readable description.  It never holds the *current*
value; that lives in a ``Config`` instance.

Variables are frozen so a schema can be shared between any number of
configuration instances without one of them changing the rules for the
others.
"""

import re
from dataclasses import dataclass
from typing import Any

from py_konf.coercion import Coercer
from py_konf.errors import InvalidValueError, SchemaError, inspect_value

_NAME_PATTERN = re.compile(r"[A-Za-z0-9_]+")


def check_identifier(name: str, *, what: str) -> None:
    """Reject names that cannot be part of an environment key.

    Raises:
        SchemaError: If *name* has characters other than letters,
            digits, and underscores.

    """
    if _NAME_PATTERN.fullmatch(name) is None:
        msg = f"invalid {what} {inspect_value(name)}"
        raise SchemaError(msg)


@dataclass(frozen=True)
class Variable:
    """A declared configuration variable.

    Attributes:
        name: Identifier used by ``Config.get`` / ``Config.set``.
        type: Coercer implementing the declared type.
        default: Value used when the environment does not supply one.
        required: Whether ``Config.validate`` insists on a value.
        description: Optional human-readable documentation.

    """

    name: str
    type: Coercer
    default: Any = None
    required: bool = False
    description: str | None = None

    def __post_init__(self) -> None:
        """Check the name and normalise the default through ``validate``."""
        check_identifier(self.name, what="variable name")
        try:
            default = self.validate(self.default)
        except InvalidValueError as exc:
            raise SchemaError(str(exc)) from exc
        # Frozen: bypass __setattr__ to store the cast default.
        object.__setattr__(self, "default", default)

    def decode(self, raw: str) -> Any:
        """Parse a raw string into this variable's type.

        Raises:
            DecodeError: If *raw* is not valid for the type.

        """
        return self.type.decode(raw)

    def validate(self, value: Any) -> Any:
        """Check a native value and return its storage form.

        ``None`` always passes and means "no value".

        Raises:
            InvalidValueError: If *value* has the wrong shape.

        """
        if value is None:
            return None
        if not self.type.accepts(value):
            msg = (
                f"invalid value {inspect_value(value)} for variable "
                f"`{self.name}`, expected {self.type.name}"
            )
            raise InvalidValueError(msg)
        return self.type.cast(value)

    def env_key(self, prefix: str) -> str:
        """Return the environment key for this variable under *prefix*."""
        return f"{prefix}_{self.name}".upper()
