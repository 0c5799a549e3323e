"""Shanten adjuster - walks a complete hand back to a target shanten."""

import random
from typing import List, Optional

from wwyd.core.pool import PoolInvariantError, TilePool
from wwyd.core.restrictions import Restrictions
from wwyd.core.tile import Tile
from wwyd.generator.errors import ShantenUnreachable
from wwyd.generator.universe import TileUniverse
from wwyd.logging_config import get_logger
from wwyd.rules.shanten import ShantenEvaluator

logger = get_logger(__name__)

# Swaps tried per degrade call, backtracked ones included
DEFAULT_ADJUST_ATTEMPTS = 256


class ShantenAdjuster:
    """Degrades a complete hand one shanten step at a time.

    The first step drops the winning tile back into the pool, which always
    leaves a tenpai hand. Every later step swaps one hand tile for a pool
    tile that raises shanten by exactly one. The steps form a depth-first
    search: when a hand has no usable swap left, the previous swap is undone
    and the next candidate tried, until ``max_attempts`` swaps have been spent.
    """

    def __init__(self, evaluator: ShantenEvaluator, pool: TilePool,
                 restrictions: Restrictions, universe: TileUniverse,
                 rng: random.Random,
                 max_attempts: int = DEFAULT_ADJUST_ATTEMPTS):
        self.evaluator = evaluator
        self.pool = pool
        self.restrictions = restrictions
        self.universe = universe
        self.rng = rng
        self.max_attempts = max_attempts
        self._swaps_left = 0

    def degrade(self, tiles: List[Tile], target: int) -> List[Tile]:
        """Return a 13-tile hand at exactly ``target`` shanten.

        On ShantenUnreachable every swap has been undone; the pool holds the
        tiles it held after the winning tile went back.
        """
        hand = self.try_degrade(tiles, target)
        if hand is None:
            raise ShantenUnreachable(
                f"shanten {target} not reached within {self.max_attempts} swaps")
        return hand

    def try_degrade(self, tiles: List[Tile], target: int) -> Optional[List[Tile]]:
        """Like degrade(), but returns None when the target is out of reach."""
        if target < 0:
            raise ValueError(f"target shanten must be >= 0, got {target}")
        hand = list(tiles)
        current = self.evaluator.shanten(hand)
        if current != -1:
            raise ValueError(f"degrade expects a complete hand, got shanten {current}")

        hand = self._drop_winning_tile(hand)
        if hand is None:
            logger.debug("no_tile_to_drop", target=target)
            return None
        self._swaps_left = self.max_attempts
        return self._search(hand, 0, target)

    def _drop_winning_tile(self, hand: List[Tile]) -> Optional[List[Tile]]:
        """Tenpai remainder after one tile goes back to the pool."""
        order = list(range(len(hand)))
        self.rng.shuffle(order)
        for idx in order:
            rest = hand[:idx] + hand[idx + 1:]
            if not self.restrictions.satisfies_requirements(rest):
                continue
            if self.evaluator.shanten(rest) != 0:
                continue
            self.pool.return_tile(hand[idx])
            return rest
        return None

    def _search(self, hand: List[Tile], current: int,
                target: int) -> Optional[List[Tile]]:
        """Depth-first swaps from ``hand``; None once every branch failed."""
        if current == target:
            return hand

        order = list(range(len(hand)))
        self.rng.shuffle(order)
        tried = set()
        for idx in order:
            removed = hand[idx]
            # Copies of one tile leave the same remainder
            if removed in tried:
                continue
            tried.add(removed)
            rest = hand[:idx] + hand[idx + 1:]
            candidates = self.replacement_candidates(rest, removed, current + 1)
            self.rng.shuffle(candidates)
            for replacement in candidates:
                if self._swaps_left <= 0:
                    return None
                self._swaps_left -= 1
                self._swap(removed, replacement)
                logger.debug("shanten_step", shanten=current + 1, target=target,
                             out=removed.name, into=replacement.name)
                found = self._search(rest + [replacement], current + 1, target)
                if found is not None:
                    return found
                self._swap(replacement, removed)
                logger.debug("shanten_backtrack", shanten=current, target=target)
        return None

    def _swap(self, out: Tile, into: Tile):
        self.pool.return_tile(out)
        if not self.pool.draw(into):
            raise PoolInvariantError(f"pool refused {into.name} after supply check")

    def replacement_candidates(self, rest: List[Tile], removed: Tile,
                               wanted: int) -> List[Tile]:
        """Pool tiles that bring ``rest`` to exactly ``wanted`` shanten."""
        candidates = []
        for tile in self.pool.available(self.universe.tiles):
            if tile == removed:
                continue
            swapped = rest + [tile]
            if not self.restrictions.satisfies_requirements(swapped):
                continue
            if self.evaluator.shanten(swapped) == wanted:
                candidates.append(tile)
        return candidates
