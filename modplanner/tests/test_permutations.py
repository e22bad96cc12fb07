"""Tests for the five-slot permutation generator (permutations.py)."""
import itertools

from modplanner import EnergyType, generate_permutations_of_five, placed_count, stringify_mods
from helpers import COMBAT_EMBER, GENERAL, make_mod


def _brute_force_keys(mods) -> set[str]:
    """Keys of every placement, built from the raw cartesian product."""
    keys = set()
    for choice in itertools.product(range(-1, len(mods)), repeat=5):
        picked = [c for c in choice if c >= 0]
        if len(picked) != len(set(picked)):
            continue
        keys.add(stringify_mods([mods[c] if c >= 0 else None for c in choice]))
    return keys


class TestShape:
    def test_empty_yields_single_all_none(self) -> None:
        assert generate_permutations_of_five([]) == [(None,) * 5]

    def test_every_arrangement_has_five_positions(self) -> None:
        mods = [make_mod(GENERAL, EnergyType.ARC, 1), make_mod(GENERAL, EnergyType.VOID, 2)]
        assert all(len(p) == 5 for p in generate_permutations_of_five(mods))

    def test_no_mod_placed_twice(self) -> None:
        mods = [make_mod(GENERAL, EnergyType.ANY, 1) for _ in range(3)]
        for perm in generate_permutations_of_five(mods):
            placed = [id(m) for m in perm if m is not None]
            assert len(placed) == len(set(placed))

    def test_placed_count_bounded_by_five(self) -> None:
        mods = [make_mod(GENERAL, t, a) for t, a in
                [(EnergyType.ARC, 1), (EnergyType.VOID, 2), (EnergyType.SOLAR, 3),
                 (EnergyType.STASIS, 4), (EnergyType.ANY, 5), (EnergyType.ARC, 6)]]
        perms = generate_permutations_of_five(mods)
        assert max(placed_count(p) for p in perms) == 5
        assert min(placed_count(p) for p in perms) == 0

    def test_first_arrangement_fills_leading_slots(self) -> None:
        a = make_mod(GENERAL, EnergyType.ARC, 1)
        b = make_mod(GENERAL, EnergyType.VOID, 2)
        assert generate_permutations_of_five([a, b])[0] == (a, b, None, None, None)


class TestCounts:
    def test_single_mod(self) -> None:
        # nothing placed, or the mod in one of five slots
        assert len(generate_permutations_of_five([make_mod(GENERAL, EnergyType.ARC, 1)])) == 6

    def test_two_distinct_mods(self) -> None:
        mods = [make_mod(GENERAL, EnergyType.ARC, 1), make_mod(GENERAL, EnergyType.VOID, 1)]
        # 1 empty + 5*2 singles + 5*4 ordered pairs
        assert len(generate_permutations_of_five(mods)) == 31

    def test_matches_brute_force(self) -> None:
        mods = [make_mod(GENERAL, EnergyType.ARC, 1), make_mod(GENERAL, EnergyType.ARC, 1),
                make_mod(COMBAT_EMBER, EnergyType.SOLAR, 5)]
        keys = {stringify_mods(p) for p in generate_permutations_of_five(mods)}
        assert keys == _brute_force_keys(mods)


class TestDeduplication:
    def test_identical_mods_collapse_swaps(self) -> None:
        a = make_mod(COMBAT_EMBER, EnergyType.SOLAR, 5)
        b = make_mod(COMBAT_EMBER, EnergyType.SOLAR, 5)
        perms = generate_permutations_of_five([a, b])
        # 1 empty + 5 singles + C(5,2) unordered pairs
        assert len(perms) == 16
        keys = [stringify_mods(p) for p in perms]
        assert len(keys) == len(set(keys))

    def test_identical_mods_same_single_placements_as_one_mod(self) -> None:
        a = make_mod(COMBAT_EMBER, EnergyType.SOLAR, 5)
        b = make_mod(COMBAT_EMBER, EnergyType.SOLAR, 5)
        single = {stringify_mods(p) for p in generate_permutations_of_five([a])}
        pair = {stringify_mods(p) for p in generate_permutations_of_five([a, b])
                if placed_count(p) <= 1}
        assert single == pair

    def test_key_ignores_mod_hash_and_name(self) -> None:
        a = make_mod(GENERAL, EnergyType.ARC, 2, name="first")
        b = make_mod(GENERAL, EnergyType.ARC, 2, name="second")
        assert stringify_mods([a, None, None, None, None]) == \
            stringify_mods([b, None, None, None, None])

    def test_key_distinguishes_category(self) -> None:
        a = make_mod(GENERAL, EnergyType.ARC, 2)
        b = make_mod(COMBAT_EMBER, EnergyType.ARC, 2)
        assert stringify_mods([a] + [None] * 4) != stringify_mods([b] + [None] * 4)

    def test_key_distinguishes_free_from_zero_any(self) -> None:
        free = make_mod(GENERAL, None)
        zero = make_mod(GENERAL, EnergyType.ANY, 0)
        assert stringify_mods([free] + [None] * 4) != stringify_mods([zero] + [None] * 4)

    def test_custom_key(self) -> None:
        mods = [make_mod(GENERAL, EnergyType.ARC, 1), make_mod(GENERAL, EnergyType.VOID, 9)]
        by_occupancy = generate_permutations_of_five(
            mods, key=lambda p: "".join("x" if m else "." for m in p))
        # occupancy patterns with at most two filled slots: 1 + 5 + 10
        assert len(by_occupancy) == 16

    def test_all_none_key(self) -> None:
        assert stringify_mods([None] * 5) == ",,,,,"
