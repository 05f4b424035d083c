"""Flask application factory for inspecting a configuration.

The ``create_app`` function wraps an existing ``Config`` and returns a
Flask app with three endpoints:

- ``GET /api/variables`` — the declared variables, in schema order.
- ``GET /api/status`` — whether every required variable is defined.
- ``POST /api/decode`` — assign a variable from its string form.

Neither current values nor declared defaults are served: configuration
routinely holds credentials, and a default can be one.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from flask import Flask, Response, jsonify, request

from py_konf.coercion import ListCoercer
from py_konf.errors import ConfigError

if TYPE_CHECKING:
    from py_konf.config import Config
    from py_konf.variable import Variable

_HTTP_BAD_REQUEST = 400
_HTTP_UNPROCESSABLE = 422


def describe_variable(variable: Variable, prefix: str) -> dict[str, Any]:
    """Return a JSON-ready description of one variable."""
    info: dict[str, Any] = {
        "name": variable.name,
        "type": variable.type.name,
        "env_key": variable.env_key(prefix),
        "required": variable.required,
        "has_default": variable.default is not None,
        "description": variable.description,
    }
    if isinstance(variable.type, ListCoercer):
        info["items"] = variable.type.item.name
        info["sep"] = variable.type.sep
    return info


def create_app(config: Config) -> Flask:
    """Create a Flask application serving *config*.

    Args:
        config: The configuration to inspect.  ``POST /api/decode``
            mutates it in place.

    Returns:
        A configured Flask application ready to serve.

    """
    app = Flask(__name__)
    schema = config.schema

    @app.route("/api/variables")
    def variables() -> Response:  # pyright: ignore[reportUnusedFunction]
        """Return every declared variable."""
        return jsonify([describe_variable(v, schema.prefix) for v in schema])

    @app.route("/api/status")
    def status() -> Response:  # pyright: ignore[reportUnusedFunction]
        """Return validation status.

        Returns:
            JSON with ``valid`` and ``error`` fields.

        """
        try:
            config.validate()
        except ConfigError as exc:
            return jsonify({"valid": False, "error": str(exc)})
        return jsonify({"valid": True, "error": None})

    @app.route("/api/decode", methods=["POST"])
    def decode() -> tuple[Response, int] | Response:  # pyright: ignore[reportUnusedFunction]
        """Decode a string value into a variable.

        Expects JSON body: ``{"name": "...", "value": "..."}``

        Returns:
            JSON with the variable ``name``, or an ``error``.

        """
        data = request.get_json(silent=True)
        if (
            not isinstance(data, dict)
            or not isinstance(data.get("name"), str)
            or not isinstance(data.get("value"), str)
        ):
            return jsonify({"error": "Expected string 'name' and 'value' fields"}), _HTTP_BAD_REQUEST

        try:
            config.decode(data["name"], data["value"])
        except ConfigError as exc:
            return jsonify({"error": str(exc)}), _HTTP_UNPROCESSABLE
        return jsonify({"name": data["name"]})

    return app
