"""Shanten (向聴数) calculation, scoped to the shapes a hand may take.

Shanten = minimum number of tile exchanges needed to reach tenpai.
-1 means already a complete hand (和了).
0 means tenpai (one tile away).

Every form is measured as the number of tiles still missing from a complete
14-tile hand; shanten is that count minus one. This keeps 12, 13 and 14 tile
hands on one scale, which the discard scorer relies on.
"""

from typing import Dict, FrozenSet, Iterable, List, Optional, Sequence, Tuple

from wwyd.core.group import GroupType
from wwyd.core.restrictions import HandShape
from wwyd.core.tile import YAOCHU_INDICES, Tile, tiles_to_34_array

# (head, mentsu, partial, mentsu seeds, any seeds)
Option = Tuple[int, int, int, int, int]

# Seed counts above this never change the result
_SEED_CAP = 5
_MAX_MENTSU = 4
_MAX_PARTIAL = 7

# (first index, length, is number suit)
_SEGMENTS = ((0, 9, True), (9, 9, True), (18, 9, True), (27, 7, False))

_ALL_KEYS = frozenset(range(34))

CHIITOI_GROUPS = (GroupType.PAIR,) * 7
KOKUSHI_GROUPS = (GroupType.PAIR,) + (GroupType.SINGLE,) * 12


def _pareto(options: Iterable[tuple], fixed: int = 0) -> FrozenSet:
    """Drop outcomes another outcome beats or matches on every count.

    More mentsu, partials or seeds never cost tiles, so only the frontier
    matters. The first ``fixed`` fields (the head flag) must match exactly.
    """
    ordered = sorted(set(options), reverse=True)
    kept = []
    for opt in ordered:
        dominated = False
        for other in kept:
            if other[:fixed] == opt[:fixed] and all(
                    a >= b for a, b in zip(other[fixed:], opt[fixed:])):
                dominated = True
                break
        if not dominated:
            kept.append(opt)
    return frozenset(kept)


class _Segment:
    """Mentsu/partial search over one suit (or the honors), memoized."""

    def __init__(self, suited: bool, legal: Tuple[bool, ...],
                 allow_runs: bool, allow_triplets: bool):
        self.suited = suited
        self.legal = legal
        self.allow_runs = allow_runs and suited
        self.allow_triplets = allow_triplets
        self.seedable = tuple(self._can_seed(i) for i in range(len(legal)))
        self._suffix_cache: Dict[Tuple[int, Tuple[int, ...]], FrozenSet] = {}
        self._options_cache: Dict[Tuple[int, ...], FrozenSet[Option]] = {}

    def _can_seed(self, pos: int) -> bool:
        """Whether a lone tile here can grow into a complete set."""
        if not self.legal[pos]:
            return False
        if self.allow_triplets:
            return True
        if not self.allow_runs:
            return False
        for start in range(max(0, pos - 2), min(pos, 6) + 1):
            if all(self.legal[start:start + 3]):
                return True
        return False

    def _partial_adjacent_useful(self, pos: int) -> bool:
        # 12 waits on 3, 89 waits on 7
        below = pos - 1 >= 0 and self.legal[pos - 1]
        above = pos + 2 <= 8 and self.legal[pos + 2]
        return below or above

    def options(self, counts: Tuple[int, ...]) -> FrozenSet[Option]:
        """Every (head, mentsu, partial, seeds) outcome for this segment."""
        cached = self._options_cache.get(counts)
        if cached is not None:
            return cached
        results = set()
        for m, p, sm, st in self._suffix(0, counts):
            results.add((0, m, p, sm, st))
        for pos, count in enumerate(counts):
            if count >= 2:
                rest = list(counts)
                rest[pos] -= 2
                for m, p, sm, st in self._suffix(0, tuple(rest)):
                    results.add((1, m, p, sm, st))
        frozen = _pareto(results, fixed=1)
        self._options_cache[counts] = frozen
        return frozen

    def _suffix(self, idx: int, counts: Tuple[int, ...]) -> FrozenSet:
        """Backtrack mentsu and partial groups from ``idx`` onwards."""
        n = len(counts)
        while idx < n and counts[idx] == 0:
            idx += 1
        if idx >= n:
            return frozenset({(0, 0, 0, 0)})

        key = (idx, counts)
        cached = self._suffix_cache.get(key)
        if cached is not None:
            return cached

        results = set()
        tiles = list(counts)

        def take(positions, mentsu, partial):
            for pos in positions:
                tiles[pos] -= 1
            for m, p, sm, st in self._suffix(idx, tuple(tiles)):
                results.add((min(m + mentsu, _MAX_MENTSU), min(p + partial, _MAX_PARTIAL),
                             sm, st))
            for pos in positions:
                tiles[pos] += 1

        # Koutsu (triplet)
        if self.allow_triplets and tiles[idx] >= 3:
            take((idx, idx, idx), 1, 0)

        # Shuntsu (sequence)
        if self.allow_runs and idx <= 6 and tiles[idx + 1] >= 1 and tiles[idx + 2] >= 1:
            take((idx, idx + 1, idx + 2), 1, 0)

        # Pair as a partial triplet
        if self.allow_triplets and tiles[idx] >= 2:
            take((idx, idx), 0, 1)

        # Adjacent partial (e.g., 23)
        if (self.allow_runs and idx <= 7 and tiles[idx + 1] >= 1
                and self._partial_adjacent_useful(idx)):
            take((idx, idx + 1), 0, 1)

        # Gap partial (e.g., 24)
        if (self.allow_runs and idx <= 6 and tiles[idx + 2] >= 1
                and self.legal[idx + 1]):
            take((idx, idx + 2), 0, 1)

        # Leave the remaining copies as loose tiles
        loose = tiles[idx]
        seeds = loose if self.seedable[idx] else 0
        tiles[idx] = 0
        for m, p, sm, st in self._suffix(idx + 1, tuple(tiles)):
            results.add((m, p, min(sm + seeds, _SEED_CAP), min(st + loose, _SEED_CAP)))
        tiles[idx] = loose

        frozen = _pareto(results)
        self._suffix_cache[key] = frozen
        return frozen


def _combine(left: Iterable[Option], right: Iterable[Option]) -> FrozenSet[Option]:
    combined = set()
    for h1, m1, p1, sm1, st1 in left:
        for h2, m2, p2, sm2, st2 in right:
            if h1 + h2 > 1:
                continue
            combined.add((h1 + h2,
                          min(m1 + m2, _MAX_MENTSU),
                          min(p1 + p2, _MAX_PARTIAL),
                          min(sm1 + sm2, _SEED_CAP),
                          min(st1 + st2, _SEED_CAP)))
    return _pareto(combined, fixed=1)


def _missing_for_option(option: Option, mentsu_needed: int) -> int:
    """Tiles missing from a complete hand for one decomposition outcome."""
    head, mentsu, partial, seeds_mentsu, seeds_any = option
    mentsu = min(mentsu, mentsu_needed)
    usable = min(partial, mentsu_needed - mentsu)
    # Partials beyond the slot count break up into loose tiles
    extra = (partial - usable) * 2
    seeds_mentsu += extra
    seeds_any += extra
    unfilled = mentsu_needed - mentsu - usable

    if head:
        head_cost = 0
        head_seed = 0
    else:
        head_seed = 1 if seeds_any > 0 else 0
        head_cost = 2 - head_seed
    grown = min(unfilled, seeds_mentsu, seeds_any - head_seed)
    return usable + 3 * unfilled - grown + head_cost


def _irregular_missing(tiles_34: Sequence[int], group_sizes: Sequence[int],
                       keys: Iterable[int]) -> Optional[int]:
    """Tiles missing for a fixed group list, each group on a distinct kind.

    Pairing the largest groups with the most-held kinds is optimal because
    the per-group cost max(0, size - held) is convex in the difference.
    """
    held = sorted((tiles_34[k] for k in keys), reverse=True)
    sizes = sorted(group_sizes, reverse=True)
    if len(held) < len(sizes):
        return None
    return sum(max(0, size - count) for size, count in zip(sizes, held))


class ShantenEvaluator:
    """Shanten restricted to a tile universe and a set of hand shapes.

    Args:
        shape_keys: Legal 34 indices (None means all 34)
        allow_runs: Whether shuntsu count as complete sets
        allow_triplets: Whether koutsu (or kantsu) count as complete sets
        regular: Whether the 4 mentsu + 1 head form is a target
        irregular_groups: Group list of an irregular target form, if any

    Results are memoized on the instance only.
    """

    def __init__(self, shape_keys: Optional[Iterable[int]] = None,
                 allow_runs: bool = True, allow_triplets: bool = True,
                 regular: bool = True,
                 irregular_groups: Sequence[GroupType] = ()):
        self.shape_keys = frozenset(_ALL_KEYS if shape_keys is None else shape_keys)
        self.allow_runs = allow_runs
        self.allow_triplets = allow_triplets
        self.regular = regular
        self.irregular_groups = tuple(irregular_groups)
        if not regular and not self.irregular_groups:
            raise ValueError("evaluator needs at least one target form")
        self._irregular_sizes = tuple(g.hand_size for g in self.irregular_groups)
        self._segments = []
        for start, length, suited in _SEGMENTS:
            legal = tuple((start + i) in self.shape_keys for i in range(length))
            self._segments.append(
                (start, length, _Segment(suited, legal, allow_runs, allow_triplets)))
        self._cache: Dict[Tuple[int, ...], int] = {}

    @classmethod
    def for_restrictions(cls, restrictions, universe,
                         shapes: Optional[Iterable[HandShape]] = None) -> 'ShantenEvaluator':
        """Evaluator for the shapes and tiles a set of restrictions allows.

        ``shapes`` narrows the target forms to the ones that can actually be
        built; by default every form the hand shape selector names counts.
        """
        if shapes is None:
            shapes = restrictions.shapes_to_build()
        shapes = frozenset(shapes)
        regular_shapes = restrictions.regular_shapes()
        return cls(
            shape_keys=universe.shape_keys,
            allow_runs=GroupType.RUN in regular_shapes,
            allow_triplets=(GroupType.TRIPLET in regular_shapes
                            or GroupType.QUAD in regular_shapes),
            regular=HandShape.REGULAR in shapes,
            irregular_groups=(restrictions.irregular_groups()
                              if HandShape.IRREGULAR in shapes else ()),
        )

    def shanten(self, tiles: Iterable[Tile]) -> int:
        """Shanten of a list of tiles."""
        return self.shanten_34(tiles_to_34_array(list(tiles)))

    def shanten_34(self, tiles_34: Sequence[int]) -> int:
        """Shanten of a 34-length count array."""
        key = tuple(tiles_34)
        cached = self._cache.get(key)
        if cached is not None:
            return cached
        best = []
        if self.regular:
            best.append(self.regular_shanten(key))
        if self.irregular_groups:
            best.append(self.irregular_shanten(key))
        result = min(best)
        self._cache[key] = result
        return result

    def regular_shanten(self, tiles_34: Sequence[int]) -> int:
        """Shanten for the standard form (4 mentsu + 1 jantai).

        With N melds already called only 3*(4-N)+2 tiles stay closed, so
        smaller arrays need fewer mentsu.
        """
        total = sum(tiles_34)
        if total > 14 or total < 1:
            return 8  # Invalid
        mentsu_needed = _MAX_MENTSU - (14 - total) // 3

        options: FrozenSet[Option] = frozenset({(0, 0, 0, 0, 0)})
        for start, length, segment in self._segments:
            counts = tuple(tiles_34[start:start + length])
            if any(counts):
                options = _combine(options, segment.options(counts))

        missing = min(_missing_for_option(opt, mentsu_needed) for opt in options)
        return missing - 1

    def irregular_shanten(self, tiles_34: Sequence[int]) -> int:
        """Shanten for the irregular group list, 99 when it cannot be built."""
        if not self.irregular_groups:
            return 99
        missing = _irregular_missing(tiles_34, self._irregular_sizes, self.shape_keys)
        if missing is None:
            return 99
        return missing - 1


def _unrestricted() -> ShantenEvaluator:
    # Fresh per call, so no cache outlives the caller
    return ShantenEvaluator()


def shanten(tiles_34: List[int]) -> int:
    """Calculate minimum shanten number across all hand forms."""
    return min(
        shanten_standard(tiles_34),
        shanten_chiitoi(tiles_34),
        shanten_kokushi(tiles_34),
    )


def shanten_standard(tiles_34: List[int]) -> int:
    """Shanten for standard form (4 mentsu + 1 jantai), no restrictions."""
    return _unrestricted().regular_shanten(tiles_34)


def shanten_chiitoi(tiles_34: List[int]) -> int:
    """Shanten for seven pairs (七対子), seven distinct kinds.

    Only valid when total=13 or 14 (no melds).
    """
    if sum(tiles_34) not in (13, 14):
        return 99  # Not applicable with melds
    sizes = [g.hand_size for g in CHIITOI_GROUPS]
    return _irregular_missing(tiles_34, sizes, _ALL_KEYS) - 1


def shanten_kokushi(tiles_34: List[int]) -> int:
    """Shanten for thirteen orphans (国士無双).

    Only valid when total=13 or 14 (no melds).
    """
    if sum(tiles_34) not in (13, 14):
        return 99
    sizes = [g.hand_size for g in KOKUSHI_GROUPS]
    return _irregular_missing(tiles_34, sizes, YAOCHU_INDICES) - 1
