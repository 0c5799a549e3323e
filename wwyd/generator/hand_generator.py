"""Hand generator - turns restrictions and a shanten target into a WWYD problem.

Pipeline: restrictions -> tile universe -> pool -> composed complete hand ->
degraded hand at the target shanten -> ranked discards.
"""

import random
from dataclasses import dataclass
from typing import Optional, Tuple

from wwyd.core.group import GroupType
from wwyd.core.hand import Hand
from wwyd.core.restrictions import HandShape, Restrictions, TileRequirement
from wwyd.core.tile import Tile
from wwyd.generator.adjuster import DEFAULT_ADJUST_ATTEMPTS, ShantenAdjuster
from wwyd.generator.composer import (
    COMPLETE_HAND_SIZE, DEFAULT_COMPOSE_ATTEMPTS, ComposedHand, HandComposer,
)
from wwyd.generator.errors import RestrictionConflict, ShantenUnreachable
from wwyd.generator.scorer import DiscardCandidate, DiscardScorer
from wwyd.generator.universe import TileUniverse, resolve_universe
from wwyd.logging_config import get_logger
from wwyd.rules.shanten import ShantenEvaluator

logger = get_logger(__name__)

# Composed hands tried per problem before ShantenUnreachable
DEFAULT_HAND_ATTEMPTS = 8


@dataclass(frozen=True)
class GeneratedProblem:
    """A finished what-would-you-discard problem.

    Attributes:
        hand: The 13-tile hand
        shanten: Shanten the hand was built for (and has)
        discards: Every hand tile with its score, best first
        shape: Whether the hand was composed as a regular or irregular hand
        reserved: Quad tiles taken out of the pool but not held in hand
    """
    hand: Hand
    shanten: int
    discards: Tuple[DiscardCandidate, ...]
    shape: HandShape = HandShape.REGULAR
    reserved: Tuple[Tile, ...] = ()

    @property
    def best_discard(self) -> Tile:
        return self.discards[0].tile

    def to_dict(self) -> dict:
        return {
            "hand": str(self.hand),
            "tiles": [t.name for t in self.hand],
            "shanten": self.shanten,
            "shape": self.shape.value,
            "reserved": [t.name for t in self.reserved],
            "discards": [c.to_dict() for c in self.discards],
        }


def _regular_conflict(restrictions: Restrictions, universe: TileUniverse) -> Optional[str]:
    shapes = restrictions.regular_shapes()
    if GroupType.PAIR not in shapes:
        return "regular hands need a pair (jantou)"
    body = restrictions.body_types()
    if not body:
        return "regular hands need runs, triplets or quads"
    if body == (GroupType.RUN,) and not universe.suited:
        return "runs need suited tiles"
    return None


def _irregular_conflict(restrictions: Restrictions, universe: TileUniverse) -> Optional[str]:
    groups = restrictions.irregular_groups()
    if not groups:
        return "irregular hand shape has no group list"
    if GroupType.RUN in groups:
        return "irregular shapes are built from identical-tile groups"
    size = restrictions.irregular_hand_size()
    if size != COMPLETE_HAND_SIZE:
        return f"irregular groups hold {size} tiles, a complete hand holds {COMPLETE_HAND_SIZE}"
    if len(groups) > len(universe.shape_keys):
        return (f"{len(groups)} irregular groups need as many distinct tile kinds, "
                f"only {len(universe.shape_keys)} are allowed")
    return None


def check_feasibility(restrictions: Restrictions,
                      universe: TileUniverse) -> Tuple[HandShape, ...]:
    """Return the hand shapes that can be built.

    Raises RestrictionConflict when no hand can satisfy the restrictions.
    Under HandShape.BOTH one buildable shape is enough.
    """
    if restrictions.honor_tiles == TileRequirement.REQUIRED and not universe.honors:
        raise RestrictionConflict("honor tiles are required but none are allowed")
    if restrictions.suit_tiles == TileRequirement.REQUIRED and not universe.suited:
        raise RestrictionConflict("suited tiles are required but none are allowed")

    checks = {HandShape.REGULAR: _regular_conflict,
              HandShape.IRREGULAR: _irregular_conflict}
    shapes = []
    conflicts = []
    for shape in restrictions.shapes_to_build():
        reason = checks[shape](restrictions, universe)
        if reason is None:
            shapes.append(shape)
        else:
            conflicts.append(reason)
    if not shapes:
        raise RestrictionConflict("; ".join(conflicts))
    return tuple(shapes)


class HandGenerator:
    """Generates problems for one set of restrictions.

    The generator owns its random.Random; separate generators share no state
    and may run in parallel. When a composed hand cannot be degraded to the
    target, a new hand is composed, up to ``max_hand_attempts`` hands.
    """

    def __init__(self, restrictions: Restrictions,
                 rng: Optional[random.Random] = None,
                 seed: Optional[int] = None,
                 max_compose_attempts: int = DEFAULT_COMPOSE_ATTEMPTS,
                 max_adjust_attempts: int = DEFAULT_ADJUST_ATTEMPTS,
                 max_hand_attempts: int = DEFAULT_HAND_ATTEMPTS):
        if rng is not None and seed is not None:
            raise ValueError("pass either rng or seed, not both")
        self.restrictions = restrictions
        self.rng = rng if rng is not None else random.Random(seed)
        self.max_compose_attempts = max_compose_attempts
        self.max_adjust_attempts = max_adjust_attempts
        self.max_hand_attempts = max_hand_attempts

        self.universe = resolve_universe(restrictions)
        self.shapes = check_feasibility(restrictions, self.universe)
        self.evaluator = ShantenEvaluator.for_restrictions(restrictions, self.universe,
                                                           self.shapes)

    def generate(self, shanten: int) -> GeneratedProblem:
        """Build one problem at exactly ``shanten``."""
        if isinstance(shanten, bool) or not isinstance(shanten, int) or shanten < 0:
            raise ValueError(f"shanten must be a non-negative integer, got {shanten!r}")

        composer = HandComposer(self.restrictions, self.universe, self.rng,
                                self.max_compose_attempts, self.shapes)
        for attempt in range(1, self.max_hand_attempts + 1):
            composed = composer.compose()
            adjuster = ShantenAdjuster(self.evaluator, composed.pool, self.restrictions,
                                       self.universe, self.rng, self.max_adjust_attempts)
            tiles = adjuster.try_degrade(composed.tiles, shanten)
            if tiles is not None:
                return self._finish(Hand(tiles), shanten, composed)
            logger.debug("degrade_failed", attempt=attempt, shanten=shanten)

        raise ShantenUnreachable(
            f"shanten {shanten} not reached from {self.max_hand_attempts} composed hands")

    def _finish(self, hand: Hand, shanten: int, composed: ComposedHand) -> GeneratedProblem:
        scorer = DiscardScorer(self.evaluator, composed.pool, self.universe)
        discards = tuple(scorer.score(hand))

        logger.info("problem_generated", hand=str(hand), shanten=shanten,
                    shape=composed.shape, best_discard=discards[0].tile.name)
        return GeneratedProblem(hand, shanten, discards, composed.shape,
                                tuple(composed.reserved))


def generate(restrictions: Restrictions, shanten: int,
             rng: Optional[random.Random] = None) -> GeneratedProblem:
    """Generate one problem with a throwaway generator."""
    return HandGenerator(restrictions, rng=rng).generate(shanten)
