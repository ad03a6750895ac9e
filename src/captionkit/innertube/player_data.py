"""Typed path queries over the player endpoint's JSON response."""

from collections.abc import Iterator
from types import UnionType
from typing import Any, TypeAlias, TypeVar, Union, get_origin

PathKey: TypeAlias = str | int
T = TypeVar("T")


class PlayerData:
    """A read-only view over a nested JSON object.

    The player response is unpublished and its shape changes without notice,
    so every lookup is a path query that yields ``None`` when any step is
    missing or has an unexpected type. Callers decide which absences are
    errors.

    Attributes:
        _data: The underlying JSON object.
    """

    def __init__(self, data: dict[str, Any]):
        self._data = data

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PlayerData):
            return NotImplemented
        return self._data == other._data

    def _walk(self, path: tuple[PathKey, ...]) -> Any | None:
        current: Any = self._data
        for key in path:
            match key, current:
                case int(), list() if -len(current) <= key < len(current):
                    current = current[key]
                case str(), dict() if key in current:
                    current = current[key]
                case _:
                    return None
        return current

    def get(self, *path: PathKey, tpe: type[T] | tuple[type[T], ...]) -> T | None:
        """Retrieve the value at ``path`` if it exists and matches ``tpe``.

        Args:
            *path: Dictionary keys and list indices to follow.
            tpe: The expected type or a tuple of expected types.

        Returns:
            The value, or None if the path is absent or the type differs.
        """
        value = self._walk(path)
        if value is None:
            return None

        origin = get_origin(tpe)
        # parameterized generics (list[str]) can only be checked by their origin
        check_type = origin if origin not in (None, Union, UnionType) else tpe
        if isinstance(value, check_type):
            return value
        return None

    def has(self, *path: PathKey) -> bool:
        """Whether anything is present at ``path``."""
        return self._walk(path) is not None

    def section(self, *path: PathKey) -> "PlayerData | None":
        """Return the object at ``path`` wrapped in a ``PlayerData``."""
        value = self.get(*path, tpe=dict)
        if value is None:
            return None
        return PlayerData(value)

    def sections(self, *path: PathKey) -> Iterator["PlayerData"]:
        """Yield every object in the list at ``path``, skipping non-objects."""
        for item in self.get(*path, tpe=list) or []:
            if isinstance(item, dict):
                yield PlayerData(item)

    def text(self, *path: PathKey) -> str | None:
        """Return the string at ``path``."""
        return self.get(*path, tpe=str)

    def run_texts(self, *path: PathKey) -> list[str]:
        """Collect ``runs[*].text`` strings of the formatted text at ``path``."""
        return [
            text
            for run in self.sections(*path, "runs")
            if (text := run.text("text")) is not None
        ]
