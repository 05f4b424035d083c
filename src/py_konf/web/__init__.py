"""Browser-facing inspection API for py-konf configurations.

This package provides a Flask application that exposes a ``Config``
over HTTP.  It is an **optional** extra — install with::

    pip install py-konf[web]

The ``create_app`` factory in ``app.py`` wraps a config and serves:

- ``GET /api/variables`` — declared variables.
- ``GET /api/status`` — required-variable check.
- ``POST /api/decode`` — assign a variable from a string.
"""
