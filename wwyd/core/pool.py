"""Tile pool (牌山) - remaining physical copies per tile identity."""

from typing import Dict, Iterable, List

from .tile import Tile

MAX_COPIES = 4


class PoolInvariantError(RuntimeError):
    """Pool bookkeeping went wrong. Always a programming error, never retried."""


class TilePool:
    """Multiset of drawable tiles for one generation attempt.

    Every identity starts at four copies. Counts stay within 0..4: a draw of
    an exhausted tile fails without touching the pool, a return above four
    raises PoolInvariantError.
    """

    def __init__(self, tiles: Iterable[Tile], copies: int = MAX_COPIES):
        if not (0 <= copies <= MAX_COPIES):
            raise PoolInvariantError(f"copies must be 0..{MAX_COPIES}, got {copies}")
        self._counts: Dict[Tile, int] = {tile: copies for tile in tiles}
        self._initial_total = sum(self._counts.values())

    def draw(self, tile: Tile) -> bool:
        """Take one copy of ``tile``. Returns False and changes nothing if none is left."""
        count = self._counts.get(tile, 0)
        if count <= 0:
            return False
        self._counts[tile] = count - 1
        return True

    def return_tile(self, tile: Tile):
        """Put one copy of ``tile`` back."""
        if tile not in self._counts:
            raise PoolInvariantError(f"{tile.name} was never part of this pool")
        count = self._counts[tile]
        if count >= MAX_COPIES:
            raise PoolInvariantError(f"returning {tile.name} would exceed {MAX_COPIES} copies")
        self._counts[tile] = count + 1

    def remaining(self, tile: Tile) -> int:
        return self._counts.get(tile, 0)

    def remaining_for_key(self, index34: int) -> int:
        """Copies left across every identity sharing a shape key."""
        return sum(c for t, c in self._counts.items() if t.index34 == index34)

    def total_remaining(self) -> int:
        return sum(self._counts.values())

    @property
    def initial_total(self) -> int:
        return self._initial_total

    @property
    def drawn(self) -> int:
        """Net tiles taken out of the pool so far."""
        return self._initial_total - self.total_remaining()

    def available(self, tiles: Iterable[Tile] = None) -> List[Tile]:
        """Identities that still have at least one copy, sorted."""
        if tiles is None:
            tiles = self._counts
        return sorted(t for t in tiles if self._counts.get(t, 0) > 0)

    def __contains__(self, tile) -> bool:
        return tile in self._counts

    def __len__(self) -> int:
        return len(self._counts)

    def __repr__(self):
        return f"TilePool(remaining={self.total_remaining()}/{self._initial_total})"
