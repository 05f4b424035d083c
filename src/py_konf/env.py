"""Environment snapshots — the raw input configuration is built from.

In Unix, every process has an environment: a set of ``KEY=VALUE`` string
pairs inherited from its parent.  Configuration is read from a
*snapshot* of such pairs taken at one point in time.

Key design properties:
    - **Copied, not referenced** — a snapshot copies the mapping it is
      given, so later changes to ``os.environ`` (or to a test's dict)
      never leak into configuration that was already loaded.
    - **Strings only** — both keys and values are strings; typing them
      is the job of the variable coercers.
    - **Read-only** — a snapshot is input, not state.  There is no
      ``set`` or ``delete``.

``Environment.from_process`` is the one place the real process
environment is read; everything else takes an explicit mapping.
"""

import os
from collections.abc import Iterator, Mapping


class Environment(Mapping[str, str]):
    """An immutable key-value snapshot of environment variables."""

    def __init__(self, initial: Mapping[str, str] | None = None) -> None:
        """Create a snapshot, optionally pre-populated.

        Args:
            initial: Starting variables (copied, not referenced).

        """
        self._vars: dict[str, str] = dict(initial) if initial else {}

    @classmethod
    def from_process(cls) -> "Environment":
        """Snapshot the current process environment."""
        return cls(os.environ)

    def __getitem__(self, key: str) -> str:
        """Return the value for *key*.

        Raises:
            KeyError: If *key* does not exist.

        """
        return self._vars[key]

    def __iter__(self) -> Iterator[str]:
        """Iterate over keys in insertion order."""
        return iter(self._vars)

    def __len__(self) -> int:
        """Return the number of variables."""
        return len(self._vars)

    def with_prefix(self, prefix: str) -> list[tuple[str, str]]:
        """Return the (key, value) pairs whose key starts with ``PREFIX_``.

        The comparison ignores case, so ``test`` matches ``TEST_LEVEL``
        as well as ``test_level``.

        Args:
            prefix: The namespace to select, without the underscore.

        Returns:
            Matching pairs with their original keys, in insertion order.

        """
        head = f"{prefix}_".lower()
        return [(key, value) for key, value in self._vars.items() if key.lower().startswith(head)]

    def __repr__(self) -> str:
        """Return a short representation (values are not shown)."""
        return f"Environment({len(self._vars)} variables)"
