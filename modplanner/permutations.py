"""Deduplicated placements of a category's mods across the five armor slots."""
from typing import Callable, Optional, Sequence

from modplanner.constants import PERMUTATION_KEY_SEPARATOR, SLOT_COUNT
from modplanner.models import Mod, Permutation

PermutationKey = Callable[[Sequence[Optional[Mod]]], str]


def stringify_mods(permutation: Sequence[Optional[Mod]]) -> str:
    """Key two placements the search cannot tell apart to the same string.

    Only (energy type, energy cost, plug category) matter to the constraint
    checks, so mods agreeing on those are interchangeable.
    """
    parts = []
    for mod in permutation:
        if mod is not None:
            cost = mod.energy_cost
            parts.append(f"({int(cost.energy_type) if cost else None},"
                         f"{cost.amount if cost else None},{mod.plug_category_hash})")
        parts.append(PERMUTATION_KEY_SEPARATOR)
    return "".join(parts)


def placed_count(permutation: Sequence[Optional[Mod]]) -> int:
    return sum(1 for m in permutation if m is not None)


def generate_permutations_of_five(mods: Sequence[Mod],
                                  key: PermutationKey = stringify_mods) -> list[Permutation]:
    """Every distinct way to place 0..min(5, len(mods)) of `mods` into five slots.

    Unused positions hold None and no mod instance is placed twice. Placements
    with equal `key` are collapsed to the first one generated. Order is
    depth-first, trying the mods (in input order) before None, so the first
    placement fills the leading slots.
    """
    results: list[Permutation] = []
    seen: set[str] = set()
    current: list[Optional[Mod]] = [None] * SLOT_COUNT
    used = [False] * len(mods)

    def place(position: int) -> None:
        if position == SLOT_COUNT:
            k = key(current)
            if k not in seen:
                seen.add(k)
                results.append(tuple(current))
            return

        for idx, mod in enumerate(mods):
            if used[idx]:
                continue
            used[idx] = True
            current[position] = mod
            place(position + 1)
            used[idx] = False

        current[position] = None
        place(position + 1)

    place(0)
    return results
