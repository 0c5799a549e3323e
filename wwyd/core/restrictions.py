"""Hand restrictions - which tiles and shapes a generated hand may use."""

from dataclasses import dataclass
from enum import Enum
from typing import FrozenSet, Iterable, Optional, Tuple

from .group import BODY_GROUP_TYPES, GroupType
from .tile import DragonColor, Tile, TileSuit, WindDirection


class TileRequirement(Enum):
    REQUIRED = "required"
    OPTIONAL = "optional"
    FORBIDDEN = "forbidden"


class HandShape(Enum):
    REGULAR = "regular"      # 4 面子 + 1 雀頭
    IRREGULAR = "irregular"  # fixed group list (七対子, 国士無双, ...)
    BOTH = "both"


DEFAULT_SHAPES_ALLOWED = frozenset({
    GroupType.RUN, GroupType.TRIPLET, GroupType.QUAD, GroupType.PAIR,
})


@dataclass(frozen=True)
class ShapeGroup:
    """One entry of an irregular hand shape: ``count`` groups of ``group_type``."""
    group_type: GroupType
    count: int

    @property
    def hand_size(self) -> int:
        return self.group_type.hand_size * self.count


@dataclass(frozen=True)
class Restrictions:
    """Resolved, read-only restrictions for one generation call.

    ``None`` on an allow-set means every variant of that axis is allowed.
    The configuration layer expands wildcards before building this object.
    """
    honor_tiles: TileRequirement = TileRequirement.OPTIONAL
    wind_directions: Optional[FrozenSet[WindDirection]] = None
    dragon_colors: Optional[FrozenSet[DragonColor]] = None
    suit_tiles: TileRequirement = TileRequirement.OPTIONAL
    suits: Optional[FrozenSet[TileSuit]] = None
    numbers: Optional[FrozenSet[int]] = None
    red_tiles: bool = False
    shapes_allowed: Optional[FrozenSet[GroupType]] = None
    hand_shape: HandShape = HandShape.REGULAR
    irregular_shape: Tuple[ShapeGroup, ...] = ()

    @property
    def can_contain_honors(self) -> bool:
        return self.honor_tiles != TileRequirement.FORBIDDEN

    @property
    def can_contain_suits(self) -> bool:
        return self.suit_tiles != TileRequirement.FORBIDDEN

    def wind_directions_allowed(self) -> FrozenSet[WindDirection]:
        if not self.can_contain_honors:
            return frozenset()
        if self.wind_directions is None:
            return frozenset(WindDirection)
        return frozenset(self.wind_directions)

    def dragon_colors_allowed(self) -> FrozenSet[DragonColor]:
        if not self.can_contain_honors:
            return frozenset()
        if self.dragon_colors is None:
            return frozenset(DragonColor)
        return frozenset(self.dragon_colors)

    def suits_allowed(self) -> FrozenSet[TileSuit]:
        if not self.can_contain_suits:
            return frozenset()
        if self.suits is None:
            return frozenset((TileSuit.MAN, TileSuit.PIN, TileSuit.SOU))
        return frozenset(self.suits)

    def numbers_allowed(self) -> FrozenSet[int]:
        if not self.can_contain_suits:
            return frozenset()
        if self.numbers is None:
            return frozenset(range(1, 10))
        return frozenset(self.numbers)

    def regular_shapes(self) -> FrozenSet[GroupType]:
        """Group types a regular hand may be built from."""
        if self.shapes_allowed is None:
            return DEFAULT_SHAPES_ALLOWED
        return frozenset(self.shapes_allowed)

    def body_types(self) -> Tuple[GroupType, ...]:
        """Allowed complete-set types for regular hands, in a stable order."""
        allowed = self.regular_shapes()
        return tuple(g for g in BODY_GROUP_TYPES if g in allowed)

    @property
    def allows_regular(self) -> bool:
        return self.hand_shape in (HandShape.REGULAR, HandShape.BOTH)

    @property
    def allows_irregular(self) -> bool:
        return self.hand_shape in (HandShape.IRREGULAR, HandShape.BOTH)

    def shapes_to_build(self) -> Tuple[HandShape, ...]:
        """REGULAR and/or IRREGULAR, as the hand shape selector allows."""
        shapes = []
        if self.allows_regular:
            shapes.append(HandShape.REGULAR)
        if self.allows_irregular:
            shapes.append(HandShape.IRREGULAR)
        return tuple(shapes)

    def irregular_groups(self) -> Tuple[GroupType, ...]:
        """The irregular shape flattened into one entry per group."""
        groups = []
        for entry in self.irregular_shape:
            groups.extend([entry.group_type] * entry.count)
        return tuple(groups)

    def irregular_hand_size(self) -> int:
        return sum(entry.hand_size for entry in self.irregular_shape)

    def satisfies_requirements(self, tiles: Iterable[Tile]) -> bool:
        """Whether a hand meets the REQUIRED tile categories."""
        tiles = list(tiles)
        if self.honor_tiles == TileRequirement.REQUIRED:
            if not any(t.is_honor for t in tiles):
                return False
        if self.suit_tiles == TileRequirement.REQUIRED:
            if not any(t.is_number_tile for t in tiles):
                return False
        return True
