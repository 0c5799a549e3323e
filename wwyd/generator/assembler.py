"""Group assembler - draws one structural group at a time from the pool."""

import random
from typing import Iterable, List, Optional, Tuple

from wwyd.core.group import GroupType, StructuralGroup, make_group
from wwyd.core.pool import PoolInvariantError, TilePool
from wwyd.core.tile import Tile
from wwyd.generator.errors import PoolExhausted
from wwyd.generator.universe import TileUniverse


class GroupAssembler:
    """Builds groups out of a pool, choosing uniformly among legal candidates.

    Red and plain copies of a tile share a shape key, so a triplet of fives
    may mix them. Every candidate is checked against the pool before any
    tile is drawn: a failed assembly leaves the pool untouched.
    """

    def __init__(self, pool: TilePool, universe: TileUniverse,
                 rng: random.Random):
        self.pool = pool
        self.universe = universe
        self.rng = rng
        self._variants = universe.variants_by_key()

    def assemble(self, group_type: GroupType,
                 exclude_keys: Iterable[int] = ()) -> StructuralGroup:
        """Assemble one group or raise PoolExhausted."""
        group = self.try_assemble(group_type, exclude_keys)
        if group is None:
            raise PoolExhausted(f"no {group_type.value} left in the pool")
        return group

    def try_assemble(self, group_type: GroupType,
                     exclude_keys: Iterable[int] = ()) -> Optional[StructuralGroup]:
        """Assemble one group, or return None when no candidate has supply."""
        excluded = frozenset(exclude_keys)
        if group_type is GroupType.RUN:
            candidates = self.run_candidates(excluded)
            if not candidates:
                return None
            start = self.rng.choice(candidates)
            keys = [start, start + 1, start + 2]
        else:
            candidates = self.identical_candidates(group_type.size, excluded)
            if not candidates:
                return None
            keys = [self.rng.choice(candidates)] * group_type.size

        tiles = [self._draw_variant(key) for key in keys]
        return make_group(group_type, tiles)

    def identical_candidates(self, size: int,
                             excluded: frozenset = frozenset()) -> List[int]:
        """Shape keys with at least ``size`` copies left."""
        return [key for key in sorted(self._variants)
                if key not in excluded and self._supply(key) >= size]

    def run_candidates(self, excluded: frozenset = frozenset()) -> List[int]:
        """Starting keys of runs whose three tiles are all legal and in supply."""
        starts = []
        for key in sorted(self._variants):
            if key >= 27 or key % 9 > 6:
                continue
            run = (key, key + 1, key + 2)
            if any(k in excluded or k not in self._variants for k in run):
                continue
            if all(self._supply(k) >= 1 for k in run):
                starts.append(key)
        return starts

    def _supply(self, key: int) -> int:
        return self.pool.remaining_for_key(key)

    def _draw_variant(self, key: int) -> Tile:
        choices: Tuple[Tile, ...] = tuple(
            t for t in self._variants[key] if self.pool.remaining(t) > 0)
        tile = self.rng.choice(choices)
        if not self.pool.draw(tile):
            # Supply was checked for the whole group before drawing
            raise PoolInvariantError(f"pool refused {tile.name} after supply check")
        return tile
