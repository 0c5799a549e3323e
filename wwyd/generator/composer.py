"""Hand composer - builds a complete (和了) hand from structural groups."""

import random
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple

from wwyd.core.group import GroupType, StructuralGroup
from wwyd.core.pool import TilePool
from wwyd.core.restrictions import HandShape, Restrictions
from wwyd.core.tile import Tile
from wwyd.generator.assembler import GroupAssembler
from wwyd.generator.errors import GenerationInfeasible
from wwyd.generator.universe import TileUniverse
from wwyd.logging_config import get_logger

logger = get_logger(__name__)

COMPLETE_HAND_SIZE = 14
REGULAR_BODY_COUNT = 4
DEFAULT_COMPOSE_ATTEMPTS = 64


@dataclass
class ComposedHand:
    """A complete 14-tile hand and the pool it was drawn from.

    Attributes:
        tiles: The 14 concealed tiles
        pool: Pool after every group was drawn
        groups: Groups in assembly order
        reserved: Quad tiles kept out of the concealed hand
        shape: REGULAR or IRREGULAR, whichever was built
    """
    tiles: List[Tile]
    pool: TilePool
    groups: List[StructuralGroup] = field(default_factory=list)
    reserved: List[Tile] = field(default_factory=list)
    shape: HandShape = HandShape.REGULAR


class HandComposer:
    """Fills the slots of the selected hand shape, one group at a time.

    Every attempt draws from a fresh pool, so a failed attempt leaves
    nothing behind. Running out of attempts raises GenerationInfeasible.
    """

    def __init__(self, restrictions: Restrictions, universe: TileUniverse,
                 rng: random.Random,
                 max_attempts: int = DEFAULT_COMPOSE_ATTEMPTS,
                 shapes: Optional[Sequence[HandShape]] = None):
        self.restrictions = restrictions
        self.universe = universe
        self.rng = rng
        self.max_attempts = max_attempts
        if shapes is None:
            shapes = restrictions.shapes_to_build()
        if not shapes:
            raise ValueError("composer needs at least one hand shape")
        self.shapes: Tuple[HandShape, ...] = tuple(shapes)

    def compose(self) -> ComposedHand:
        """Build a complete hand or raise GenerationInfeasible."""
        if self.universe.total_copies < COMPLETE_HAND_SIZE:
            raise GenerationInfeasible(
                f"only {self.universe.total_copies} tiles are reachable, "
                f"a hand needs {COMPLETE_HAND_SIZE}")

        for attempt in range(1, self.max_attempts + 1):
            shape = self._choose_shape()
            pool = self.universe.new_pool()
            composed = self._attempt(shape, pool)
            if composed is not None:
                logger.debug("hand_composed", attempt=attempt, shape=shape,
                             groups=[str(g) for g in composed.groups])
                return composed
            logger.debug("composition_attempt_failed", attempt=attempt, shape=shape)

        raise GenerationInfeasible(
            f"no complete hand after {self.max_attempts} attempts")

    def _choose_shape(self) -> HandShape:
        if len(self.shapes) == 1:
            return self.shapes[0]
        return self.rng.choice(self.shapes)

    def _attempt(self, shape: HandShape, pool: TilePool) -> Optional[ComposedHand]:
        assembler = GroupAssembler(pool, self.universe, self.rng)
        if shape == HandShape.REGULAR:
            groups = self._regular_groups(assembler)
        else:
            groups = self._irregular_groups(assembler)
        if groups is None:
            return None

        tiles: List[Tile] = []
        reserved: List[Tile] = []
        for group in groups:
            tiles.extend(group.hand_tiles)
            reserved.extend(group.reserved_tiles)

        if len(tiles) != COMPLETE_HAND_SIZE:
            return None
        if not self.restrictions.satisfies_requirements(tiles):
            return None
        return ComposedHand(sorted(tiles), pool, groups, reserved, shape)

    def _regular_groups(self, assembler: GroupAssembler) -> Optional[List[StructuralGroup]]:
        """Four complete sets (面子) plus one pair (雀頭)."""
        body_types = list(self.restrictions.body_types())
        groups = []
        for _ in range(REGULAR_BODY_COUNT):
            # Random type first, the others as fallbacks
            order = list(body_types)
            self.rng.shuffle(order)
            group = None
            for group_type in order:
                group = assembler.try_assemble(group_type)
                if group is not None:
                    break
            if group is None:
                return None
            groups.append(group)

        pair = assembler.try_assemble(GroupType.PAIR)
        if pair is None:
            return None
        groups.append(pair)
        return groups

    def _irregular_groups(self, assembler: GroupAssembler) -> Optional[List[StructuralGroup]]:
        """The explicit group list, every group on its own tile kind."""
        plan: Tuple[GroupType, ...] = tuple(sorted(
            self.restrictions.irregular_groups(), key=lambda g: -g.size))
        used_keys = set()
        groups = []
        for group_type in plan:
            group = assembler.try_assemble(group_type, exclude_keys=used_keys)
            if group is None:
                return None
            used_keys.add(group.tile_index34)
            groups.append(group)
        return groups
