"""Finalized concealed hand (手牌) handed out as a problem."""

from collections import Counter
from typing import Dict, Iterable, List

from .pool import MAX_COPIES
from .tile import Tile, tiles_to_34_array, tiles_to_string

HAND_SIZE = 13


class Hand:
    """Immutable 13-tile concealed hand, kept sorted.

    Raises ValueError when the tile count is wrong or an identity appears
    more than four times.
    """
    __slots__ = ('_tiles',)

    def __init__(self, tiles: Iterable[Tile]):
        tiles = tuple(sorted(tiles))
        if len(tiles) != HAND_SIZE:
            raise ValueError(f"a hand holds {HAND_SIZE} tiles, got {len(tiles)}")
        for tile, count in Counter(tiles).items():
            if count > MAX_COPIES:
                raise ValueError(f"{tile.name} appears {count} times")
        self._tiles = tiles

    @property
    def tiles(self) -> tuple:
        return self._tiles

    def to_34_array(self) -> List[int]:
        """Convert tiles to 34-length count array (red fives merged)."""
        return tiles_to_34_array(self._tiles)

    def counts(self) -> Dict[Tile, int]:
        """Copies held per tile identity."""
        return dict(Counter(self._tiles))

    def without(self, tile: Tile) -> List[Tile]:
        """The other twelve tiles after taking one copy of ``tile`` out."""
        rest = list(self._tiles)
        rest.remove(tile)
        return rest

    @property
    def has_honors(self) -> bool:
        return any(t.is_honor for t in self._tiles)

    def __iter__(self):
        return iter(self._tiles)

    def __len__(self):
        return len(self._tiles)

    def __contains__(self, tile):
        return tile in self._tiles

    def __eq__(self, other):
        if isinstance(other, Hand):
            return self._tiles == other._tiles
        return NotImplemented

    def __hash__(self):
        return hash(self._tiles)

    def __str__(self):
        return tiles_to_string(list(self._tiles))

    def __repr__(self):
        return f"Hand({self})"
