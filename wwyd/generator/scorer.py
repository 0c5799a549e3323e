"""Discard scorer - ranks hand tiles by the ukeire (受け入れ) they leave."""

from dataclasses import dataclass, replace
from typing import Dict, List, Tuple

from wwyd.core.hand import Hand
from wwyd.core.pool import TilePool
from wwyd.core.tile import Tile
from wwyd.generator.universe import TileUniverse
from wwyd.rules.shanten import ShantenEvaluator

# Exceeds the largest possible ukeire
SHANTEN_PENALTY = 1000


@dataclass(frozen=True)
class DiscardCandidate:
    """One hand tile with the effect of discarding it.

    Attributes:
        tile: The tile to discard
        score: Ukeire, minus SHANTEN_PENALTY per shanten step the discard
            gives up against the best discard; higher is better
        shanten_after: Shanten of the twelve tiles left after the discard
        waits: Tile kinds that improve the remaining hand, sorted
        ukeire: Physical copies left in the pool that improve the remaining hand
    """
    tile: Tile
    score: int
    shanten_after: int
    waits: Tuple[Tile, ...] = ()
    ukeire: int = 0

    def to_dict(self) -> dict:
        return {
            "tile": self.tile.name,
            "score": self.score,
            "ukeire": self.ukeire,
            "shanten_after": self.shanten_after,
            "waits": [t.name for t in self.waits],
        }


class DiscardScorer:
    """Scores every tile of a finalized hand; never touches hand or pool."""

    def __init__(self, evaluator: ShantenEvaluator, pool: TilePool,
                 universe: TileUniverse):
        self.evaluator = evaluator
        self.pool = pool
        self.universe = universe

    def score(self, hand: Hand) -> List[DiscardCandidate]:
        """One candidate per hand tile, descending by score, then tile order."""
        by_identity: Dict[Tile, DiscardCandidate] = {}
        for tile in hand:
            if tile not in by_identity:
                by_identity[tile] = self.score_tile(hand, tile)

        best = min(c.shanten_after for c in by_identity.values())
        for tile, candidate in by_identity.items():
            lost = candidate.shanten_after - best
            if lost:
                by_identity[tile] = replace(
                    candidate, score=candidate.ukeire - SHANTEN_PENALTY * lost)

        ranked = [by_identity[tile] for tile in hand]
        ranked.sort(key=lambda c: (-c.score, c.tile))
        return ranked

    def score_tile(self, hand: Hand, tile: Tile) -> DiscardCandidate:
        """Ukeire of the hand once ``tile`` is gone, weighted by pool supply.

        On its own a discard scores its ukeire; score() docks the ones that
        lose shape against the rest of the hand.
        """
        rest = hand.without(tile)
        base = self.evaluator.shanten(rest)
        waits = []
        ukeire = 0
        for draw in self.pool.available(self.universe.tiles):
            if self.evaluator.shanten(rest + [draw]) < base:
                waits.append(draw)
                ukeire += self.pool.remaining(draw)
        return DiscardCandidate(tile, ukeire, base, tuple(waits), ukeire)
