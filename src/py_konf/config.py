"""Configuration instances — typed values for one schema.

A ``Config`` is created in one shot from an environment snapshot and
then read and written through a small typed API:

- ``get(name)`` / ``set(name, value)`` — the object API.  ``set``
  checks the *shape* of a native value; it never parses strings.
- ``decode(name, raw)`` — the string API, the same path environment
  values take.
- ``is_enabled(name)`` — predicate reader for boolean variables.
- ``validate()`` — fail if a required variable is still undefined.

Declared names are also reachable as attributes, so ``config.level``
and ``config.level = 99`` are shorthand for ``get`` and ``set``.  A
variable whose name collides with a method (``get``, ``schema``, ...)
is still reachable through ``get`` and ``set``.

Required-ness is checked only when ``validate`` is called.  This lets
a host build a config from the environment, fill in values from other
sources, and only then insist that everything required is present.

A ``Config`` is a plain mutable object with no locking; share it
between threads only as read-only.
"""

from collections.abc import Mapping
from typing import Any

from py_konf.binder import bind_environment
from py_konf.coercion import VariableType
from py_konf.env import Environment
from py_konf.errors import ConfigError, MissingVariableError
from py_konf.logging import Logger, LogLevel
from py_konf.schema import Schema

_SOURCE = "config"


class Config:
    """Current values for every variable of a ``Schema``."""

    _schema: Schema
    _logger: Logger
    _values: dict[str, Any]

    def __init__(
        self,
        schema: Schema,
        env: Mapping[str, str] | None = None,
        *,
        logger: Logger | None = None,
    ) -> None:
        """Build a configuration from an environment snapshot.

        Args:
            schema: The declared variables.
            env: The snapshot to bind; ``None`` snapshots the process
                environment.  Pass ``{}`` for defaults only.
            logger: Event log to record into; a fresh one by default.

        Raises:
            UnknownVariableError: If a prefixed key names no variable.
            DecodeError: If an environment value cannot be decoded.

        """
        logger = logger if logger is not None else Logger()
        if env is None:
            env = Environment.from_process()
        values = bind_environment(schema, env, logger=logger)
        object.__setattr__(self, "_schema", schema)
        object.__setattr__(self, "_logger", logger)
        object.__setattr__(self, "_values", values)

    @classmethod
    def from_environ(cls, schema: Schema, *, logger: Logger | None = None) -> "Config":
        """Build a configuration from the current process environment.

        Same as ``Config(schema)``; spelled out for hosts that want the
        source to be explicit at the call site.
        """
        return cls(schema, Environment.from_process(), logger=logger)

    @property
    def schema(self) -> Schema:
        """Return the shared schema."""
        return self._schema

    @property
    def logger(self) -> Logger:
        """Return the event log."""
        return self._logger

    def get(self, name: str) -> Any:
        """Return the current value of *name*, or ``None``.

        Raises:
            UnknownVariableError: If *name* is not declared.

        """
        self._schema.variable(name)
        return self._values[name]

    def set(self, name: str, value: Any) -> None:
        """Assign a native value to *name*.

        ``None`` clears the variable, even a required one.  On failure
        the previous value is kept.

        Raises:
            UnknownVariableError: If *name* is not declared.
            InvalidValueError: If *value* has the wrong type.

        """
        variable = self._schema.variable(name)
        try:
            self._values[name] = variable.validate(value)
        except ConfigError as exc:
            self._logger.log(LogLevel.ERROR, str(exc), source=_SOURCE, variable=name)
            raise
        self._logger.log(LogLevel.INFO, "set", source=_SOURCE, variable=name)

    def decode(self, name: str, raw: str) -> None:
        """Assign *name* from its string form.

        Raises:
            UnknownVariableError: If *name* is not declared.
            DecodeError: If *raw* is not valid for the variable's type.

        """
        variable = self._schema.variable(name)
        try:
            self._values[name] = variable.decode(raw)
        except ConfigError as exc:
            self._logger.log(LogLevel.ERROR, str(exc), source=_SOURCE, variable=name)
            raise
        self._logger.log(LogLevel.INFO, "decoded", source=_SOURCE, variable=name)

    def is_enabled(self, name: str) -> bool:
        """Return the value of boolean variable *name* (unset is False).

        Raises:
            ConfigError: If *name* is not a boolean variable.

        """
        variable = self._schema.variable(name)
        if variable.type.name != VariableType.BOOLEAN:
            msg = f"variable `{name}` is not a boolean"
            raise ConfigError(msg)
        return self._values[name] is True

    def description(self, name: str) -> str | None:
        """Return the declared description of *name*, if any."""
        return self._schema.description(name)

    def validate(self) -> None:
        """Check that every required variable has a value.

        Variables are checked in declaration order and the first
        missing one is reported.

        Raises:
            MissingVariableError: If a required variable is ``None``.

        """
        for variable in self._schema:
            if variable.required and self._values[variable.name] is None:
                msg = f"required variable `{variable.name}` is not defined"
                self._logger.log(LogLevel.ERROR, msg, source=_SOURCE, variable=variable.name)
                raise MissingVariableError(msg)

    def to_dict(self) -> dict[str, Any]:
        """Return a copy of all current values in declaration order."""
        return {
            name: list(value) if isinstance(value, list) else value
            for name, value in self._values.items()
        }

    def __getattr__(self, name: str) -> Any:
        """Read declared variables as attributes."""
        # Only reached when normal lookup fails; guard the private slots
        # so a half-built instance (copy, pickle) does not recurse.
        if name.startswith("_") or name not in self._schema:
            msg = f"{type(self).__name__!r} object has no attribute {name!r}"
            raise AttributeError(msg)
        return self._values[name]

    def __setattr__(self, name: str, value: Any) -> None:
        """Write declared variables as attributes through ``set``."""
        if name not in self._schema:
            msg = f"unknown variable `{name}`"
            raise AttributeError(msg)
        self.set(name, value)

    def __repr__(self) -> str:
        """Return a readable representation (values are not shown)."""
        return f"Config(prefix={self._schema.prefix!r}, variables={len(self._schema)})"
