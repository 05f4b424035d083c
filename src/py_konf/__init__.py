"""Typed configuration loaded from environment variables.

Declare a schema, then build a config from an environment snapshot::

    from py_konf import Config, SchemaBuilder

    schema = (
        SchemaBuilder()
        .env_prefix("app")
        .string("greeting", required=True)
        .integer("level", default=0)
        .build()
    )
    config = Config(schema, {"APP_GREETING": "hello", "APP_LEVEL": "42"})
    config.validate()
    config.level  # 42

Re-exports public symbols so callers can write::

    from py_konf import Config, ConfigError
"""

from py_konf.binder import bind_environment
from py_konf.coercion import VariableType, make_coercer
from py_konf.config import Config
from py_konf.env import Environment
from py_konf.errors import (
    ConfigError,
    DecodeError,
    InvalidValueError,
    MissingVariableError,
    SchemaError,
    UnknownVariableError,
)
from py_konf.logging import LogEntry, Logger, LogLevel
from py_konf.schema import Schema, SchemaBuilder
from py_konf.variable import Variable

__all__ = [
    "Config",
    "ConfigError",
    "DecodeError",
    "Environment",
    "InvalidValueError",
    "LogEntry",
    "LogLevel",
    "Logger",
    "MissingVariableError",
    "Schema",
    "SchemaBuilder",
    "SchemaError",
    "UnknownVariableError",
    "Variable",
    "VariableType",
    "bind_environment",
    "make_coercer",
]
