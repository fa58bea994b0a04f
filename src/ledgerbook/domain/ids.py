"""Client-side identifier generation.

Transaction and asset ids are produced here rather than by the database, so
the same code works against schemas whose id column cannot auto-increment.
"""

import random
import time
import uuid
from abc import ABC, abstractmethod


class IdGenerator(ABC):
    """Source of unique, stable string identifiers."""

    @abstractmethod
    def new_id(self) -> str:
        """Return a fresh identifier."""
        pass


class NumericIdGenerator(IdGenerator):
    """Millisecond timestamp followed by three random digits.

    Yields 16-digit values that fit a signed 64-bit integer column.
    """

    def __init__(self, rng: random.Random | None = None):
        self._rng = rng or random.SystemRandom()
        self._last = 0

    def new_id(self) -> str:
        value = int(time.time() * 1000) * 1000 + self._rng.randrange(1000)
        # Ids minted in the same millisecond must still differ
        if value <= self._last:
            value = self._last + 1
        self._last = value
        return str(value)


class UUIDIdGenerator(IdGenerator):
    """Random UUID4 identifiers."""

    def new_id(self) -> str:
        return str(uuid.uuid4())


ID_SCHEMES = {
    "numeric": NumericIdGenerator,
    "uuid": UUIDIdGenerator,
}


def create_id_generator(scheme: str = "numeric") -> IdGenerator:
    """Create an id generator by scheme name ('numeric' or 'uuid')."""
    try:
        return ID_SCHEMES[scheme.strip().lower()]()
    except KeyError:
        raise ValueError(
            f"Unknown id scheme '{scheme}'. Supported schemes: {', '.join(ID_SCHEMES)}"
        ) from None
