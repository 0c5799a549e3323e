"""Tile universe - the concrete tile identities a set of restrictions allows."""

from dataclasses import dataclass
from typing import Dict, FrozenSet, Tuple

from wwyd.core.pool import MAX_COPIES, TilePool
from wwyd.core.restrictions import Restrictions
from wwyd.core.tile import NUMBER_SUITS, RED_NUMBERS, Tile
from wwyd.generator.errors import RestrictionConflict


@dataclass(frozen=True)
class TileUniverse:
    """Legal tile identities, split into suited and honor tiles."""
    suited: FrozenSet[Tile]
    honors: FrozenSet[Tile]

    @property
    def tiles(self) -> Tuple[Tile, ...]:
        return tuple(sorted(self.suited | self.honors))

    @property
    def shape_keys(self) -> FrozenSet[int]:
        return frozenset(t.index34 for t in self.suited | self.honors)

    def variants_by_key(self) -> Dict[int, Tuple[Tile, ...]]:
        result: Dict[int, list] = {}
        for tile in self.tiles:
            result.setdefault(tile.index34, []).append(tile)
        return {k: tuple(v) for k, v in result.items()}

    @property
    def total_copies(self) -> int:
        return (len(self.suited) + len(self.honors)) * MAX_COPIES

    def new_pool(self) -> TilePool:
        """A fresh pool holding four copies of every identity."""
        return TilePool(self.tiles)

    def __contains__(self, tile) -> bool:
        return tile in self.suited or tile in self.honors


def resolve_universe(restrictions: Restrictions) -> TileUniverse:
    """Expand the restrictions into explicit tile identities.

    Red fives are added as separate identities, with their own four copies,
    only when ``red_tiles`` is set.
    """
    if not restrictions.can_contain_honors and not restrictions.can_contain_suits:
        raise RestrictionConflict("both honor and suited tiles are forbidden")

    suited = set()
    numbers = restrictions.numbers_allowed()
    for suit in restrictions.suits_allowed():
        if suit not in NUMBER_SUITS:
            raise RestrictionConflict(f"{suit.name} is not a numbered suit")
        for number in numbers:
            if not (1 <= number <= 9):
                raise RestrictionConflict(f"tile number out of range: {number}")
            suited.add(Tile(suit, number))
            if restrictions.red_tiles and number in RED_NUMBERS:
                suited.add(Tile(suit, number, is_red=True))

    honors = set()
    for direction in restrictions.wind_directions_allowed():
        honors.add(Tile.wind(direction))
    for color in restrictions.dragon_colors_allowed():
        honors.add(Tile.dragon(color))

    if not suited and not honors:
        raise RestrictionConflict("restrictions leave no legal tile")

    return TileUniverse(frozenset(suited), frozenset(honors))
