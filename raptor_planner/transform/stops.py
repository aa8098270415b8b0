"""Stop id assignment."""

import logging

logger = logging.getLogger(__name__)


def normalize_stop_name(name: str) -> str:
    return name.strip().upper()


class StopRegistry:
    """Assign dense stop ids in first-seen order."""

    def __init__(self) -> None:
        self._ids: dict[str, int] = {}
        self._names: list[str] = []

    def __len__(self) -> int:
        return len(self._names)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and normalize_stop_name(name) in self._ids

    def add(self, name: str) -> int:
        """Return the id for name, creating it on first sight."""
        key = normalize_stop_name(name)
        if not key:
            raise ValueError("Stop name must not be empty")

        stop_id = self._ids.get(key)
        if stop_id is None:
            stop_id = len(self._names)
            self._ids[key] = stop_id
            self._names.append(key)
        return stop_id

    def get(self, name: str) -> int | None:
        return self._ids.get(normalize_stop_name(name))

    def freeze(self) -> tuple[str, ...]:
        """Stop names indexed by id."""
        logger.debug(f"Registered {len(self._names)} stops")
        return tuple(self._names)
