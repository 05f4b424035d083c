"""Configuration errors — one family, distinguished by message.

Every failure the library reports is a ``ConfigError``.  Callers that
only care whether configuration loaded can catch that single class; the
subclasses exist for callers that want to react to one kind of failure:

- **DecodeError** — a string could not be parsed into the declared type.
- **InvalidValueError** — a native value has the wrong shape for the
  variable it was assigned to.
- **UnknownVariableError** — a name (or environment key) does not match
  any declared variable.
- **MissingVariableError** — a required variable has no value.
- **SchemaError** — the schema declaration itself is inconsistent.

The message text is part of the public contract, so it is built by the
raising code and never reformatted here.
"""

import json
from typing import Any


class ConfigError(Exception):
    """Raise when configuration cannot be loaded, decoded, or validated."""


class DecodeError(ConfigError):
    """Raise when a raw string cannot be decoded into a variable's type."""


class InvalidValueError(ConfigError):
    """Raise when a native value does not match a variable's type."""


class UnknownVariableError(ConfigError):
    """Raise when a variable name or environment key is not declared."""


class MissingVariableError(ConfigError):
    """Raise when a required variable is still undefined."""


class SchemaError(ConfigError):
    """Raise when a schema declaration is invalid."""


def inspect_value(value: Any) -> str:
    """Render *value* the way error messages show it.

    Strings are double-quoted with escapes, booleans are ``true`` /
    ``false``, ``None`` is ``nil``, and lists are rendered element by
    element.

    Examples::

        >>> inspect_value("yolo")
        '"yolo"'
        >>> inspect_value(42)
        '42'
        >>> inspect_value([True, None])
        '[true, nil]'

    """
    if value is None:
        return "nil"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, str):
        return json.dumps(value, ensure_ascii=False)
    if isinstance(value, list | tuple):
        return "[" + ", ".join(inspect_value(item) for item in value) + "]"
    try:
        return repr(value)
    except ValueError:
        # int beyond the interpreter's string conversion limit
        return f"<{value.bit_length()}-bit integer>"
