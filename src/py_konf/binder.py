"""Environment binding — turn a snapshot into initial variable values.

Given a schema with prefix ``test`` and a snapshot, binding works key
by key:

1. Keys that start with ``TEST_`` (any case) belong to this schema; the
   prefix is stripped and the rest lower-cased, so ``TEST_LEVEL``
   becomes the candidate name ``level``.
2. A candidate that names no declared variable is an error for the
   whole snapshot.  A typo such as ``TEST_LEVLE`` would otherwise be
   silently ignored and the default used instead.
3. A known candidate is decoded with the variable's type.
4. Variables that no key mentions get their default.

Keys outside the prefix belong to other programs and are skipped.
"""

from collections.abc import Mapping
from typing import Any

from py_konf.env import Environment
from py_konf.errors import ConfigError, UnknownVariableError
from py_konf.logging import Logger, LogLevel
from py_konf.schema import Schema

_SOURCE = "env"


def bind_environment(
    schema: Schema,
    env: Mapping[str, str],
    *,
    logger: Logger | None = None,
) -> dict[str, Any]:
    """Compute initial values for every variable of *schema*.

    Args:
        schema: The declared variables and prefix.
        env: The environment snapshot.
        logger: Optional event log for decoded keys and failures.

    Returns:
        A mapping of every declared name to its value (or ``None``),
        in schema order.

    Raises:
        UnknownVariableError: If a prefixed key names no variable.
        DecodeError: If a value cannot be decoded.

    """
    snapshot = env if isinstance(env, Environment) else Environment(env)
    by_lower_name = {variable.name.lower(): variable for variable in schema}
    head_length = len(schema.prefix) + 1

    decoded: dict[str, Any] = {}
    for key, raw in snapshot.with_prefix(schema.prefix):
        variable = by_lower_name.get(key[head_length:].lower())
        try:
            if variable is None:
                msg = f"unknown environment variable {key}"
                raise UnknownVariableError(msg)
            decoded[variable.name] = variable.decode(raw)
        except ConfigError as exc:
            if logger is not None:
                logger.log(LogLevel.ERROR, str(exc), source=_SOURCE)
            raise
        if logger is not None:
            logger.log(LogLevel.DEBUG, f"decoded from {key}", source=_SOURCE, variable=variable.name)

    # validate() casts, so list defaults are copied per instance.
    return {
        variable.name: (
            decoded[variable.name]
            if variable.name in decoded
            else variable.validate(variable.default)
        )
        for variable in schema
    }
