from __future__ import annotations

from typing import Iterable


class GameError(Exception):
    """Base class for client-facing game errors (mapped to 4xx by the routers)."""


class InvalidLevel(GameError):
    def __init__(self, level: int, available: Iterable[int]):
        self.level = level
        self.available = sorted(set(available))
        super().__init__(
            f"Invalid level: {level}. Available: {', '.join(str(x) for x in self.available)}"
        )


class MalformedInput(GameError):
    """Answer text or serialized session state could not be parsed."""
