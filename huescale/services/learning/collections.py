"""
Fixed-size collections keyed by the ten canonical stop positions.

Every pattern-keyed collection holds exactly one value per stop, stored in a
ten-slot tuple indexed by StopIndex.
"""

from enum import IntEnum
from typing import Callable, Generic, Iterable, Iterator, Tuple, TypeVar

from huescale.errors import HuescaleError

T = TypeVar("T")
U = TypeVar("U")


class CollectionError(HuescaleError):
    """A stop-keyed lookup or construction failed."""
    kind = "CollectionError"


class StopIndex(IntEnum):
    """Ordinal of a canonical stop position."""
    S100 = 0
    S200 = 1
    S300 = 2
    S400 = 3
    S500 = 4
    S600 = 5
    S700 = 6
    S800 = 7
    S900 = 8
    S1000 = 9

    @property
    def position(self) -> int:
        return STOP_POSITIONS[self.value]


STOP_POSITIONS: Tuple[int, ...] = (100, 200, 300, 400, 500, 600, 700, 800, 900, 1000)
STOP_COUNT = len(STOP_POSITIONS)

LIGHTEST_STOP = 100
REFERENCE_STOP = 500
DARKEST_STOP = 1000

_INDEX_BY_POSITION = {position: StopIndex(i) for i, position in enumerate(STOP_POSITIONS)}


def is_stop_position(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value in _INDEX_BY_POSITION


def position_to_index(position: int) -> StopIndex:
    """
    Map a stop position to its ordinal.

    Raises:
        CollectionError: If position is not one of 100, 200, ..., 1000
    """
    if not is_stop_position(position):
        raise CollectionError(f"Invalid stop position {position!r}; expected one of {STOP_POSITIONS}")
    return _INDEX_BY_POSITION[position]


class StopArray(Generic[T]):
    """Immutable array of exactly ten values, one per canonical stop."""

    __slots__ = ("_values",)

    def __init__(self, values: Iterable[T]):
        values = tuple(values)
        if len(values) != STOP_COUNT:
            raise CollectionError(f"Expected {STOP_COUNT} stop values, got {len(values)}")
        self._values = values

    @classmethod
    def build(cls, fn: Callable[[int], T]) -> "StopArray[T]":
        """Build an array by calling fn for every stop position."""
        return cls(fn(position) for position in STOP_POSITIONS)

    @classmethod
    def from_mapping(cls, mapping) -> "StopArray[T]":
        """
        Build an array from a position-keyed mapping.

        Raises:
            CollectionError: If any canonical position is missing or an extra key is present
        """
        extra = [key for key in mapping if not is_stop_position(key)]
        if extra:
            raise CollectionError(f"Unexpected stop positions in mapping: {sorted(map(str, extra))}")
        missing = [position for position in STOP_POSITIONS if position not in mapping]
        if missing:
            raise CollectionError(f"Missing stop positions {missing} in mapping")
        return cls(mapping[position] for position in STOP_POSITIONS)

    def get(self, position: int) -> T:
        """Value for a stop position."""
        return self._values[position_to_index(position)]

    def __getitem__(self, position: int) -> T:
        return self.get(position)

    def at(self, index: StopIndex) -> T:
        return self._values[index]

    def items(self) -> Iterator[Tuple[int, T]]:
        return zip(STOP_POSITIONS, self._values)

    def values(self) -> Tuple[T, ...]:
        return self._values

    def map(self, fn: Callable[[T], U]) -> "StopArray[U]":
        return StopArray(fn(value) for value in self._values)

    def to_dict(self) -> dict:
        return dict(self.items())

    def __iter__(self) -> Iterator[T]:
        return iter(self._values)

    def __len__(self) -> int:
        return STOP_COUNT

    def __eq__(self, other) -> bool:
        if not isinstance(other, StopArray):
            return NotImplemented
        return self._values == other._values

    def __hash__(self) -> int:
        return hash(self._values)

    def __repr__(self) -> str:
        return f"StopArray({self.to_dict()!r})"
