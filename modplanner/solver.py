"""Mod assignment solver — partition, permute, then a pruned Combat/General/Raid search."""
import logging
from typing import Callable, Iterable, Iterator, Optional, Sequence

from modplanner.constants import SLOT_COUNT, energy_types_compatible
from modplanner.data import ModDataHandler
from modplanner.energy import build_energy_states
from modplanner.models import (
    JointAssignment, Mod, ModCategories, Permutation, Slot, SlotEnergyState, SolveResult,
)
from modplanner.permutations import generate_permutations_of_five, placed_count
from modplanner.policy import EnergyPolicy, UpgradeTier

logger = logging.getLogger("modplanner.solver")

States = tuple[Optional[SlotEnergyState], ...]
Triple = tuple[Permutation, Permutation, Permutation]
TagLookup = Callable[[int], Optional[str]]


# ---------------------------------------------------------------------------
# Partitioning
# ---------------------------------------------------------------------------

def partition_mods(mods: Iterable[Mod], slots: Sequence[Slot],
                   data_source: ModDataHandler) -> ModCategories:
    """Split mods into General / Combat / Raid buckets.

    Anything else is committed straight to the first slot whose bucket takes
    its plug category, or dropped if no slot does.
    """
    result = ModCategories(slot_specific={s.id: [] for s in slots})
    for mod in mods:
        pch = mod.plug_category_hash
        if data_source.is_general(pch):
            result.general.append(mod)
        elif data_source.is_combat(pch):
            result.combat.append(mod)
        elif data_source.is_raid(pch):
            result.raid.append(mod)
        else:
            slot = next((s for s in slots
                         if data_source.category_for_bucket(s.bucket_hash) == pch), None)
            if slot is None:
                result.dropped.append(mod)
            else:
                result.slot_specific[slot.id].append(mod)
    if result.dropped:
        logger.debug("Dropped %d mod(s) with no category or slot: %s",
                     len(result.dropped), [m.hash for m in result.dropped])
    return result


# ---------------------------------------------------------------------------
# Search
# ---------------------------------------------------------------------------

def _layer_fits(perm: Permutation, states: States,
                below: Sequence[Permutation] = (),
                socket_tags: Optional[Sequence[frozenset[str]]] = None,
                mod_tag: Optional[TagLookup] = None) -> bool:
    """True if every mod of `perm` fits its slot on top of the layers below.

    Stops at the first slot that fails; a permutation is all or nothing.
    """
    for i, mod in enumerate(perm):
        if mod is None:
            continue
        state = states[i]
        if state is None or not state.fits(mod):
            return False
        for other in below:
            if other[i] is not None and not energy_types_compatible(
                    mod.energy_type, other[i].energy_type):
                return False
        if socket_tags is not None:
            tag = mod_tag(mod.plug_category_hash)
            if tag is None or tag not in socket_tags[i]:
                return False
    return True


def _advance(states: States, perm: Permutation) -> States:
    return tuple(s.with_mod(m) if s is not None else None for s, m in zip(states, perm))


def iter_joint_assignments(combat_perms: Sequence[Permutation],
                           general_perms: Sequence[Permutation],
                           raid_perms: Sequence[Permutation],
                           states: States,
                           socket_tags: Sequence[frozenset[str]],
                           mod_tag: TagLookup) -> Iterator[Triple]:
    """Yield every (combat, general, raid) triple that fits all five slots.

    Combat and Raid mods must also match a specialty socket tag; General
    mods only need energy. A failing permutation is dropped before anything
    below it is tried. A slot without an energy state (None) takes no mod at
    all, not even a free one; it is not treated as an ANY slot.

    A raid permutation that fails against the starting states never fits
    deeper in the search, because used energy only grows. Those are
    filtered out once, on first use.
    """
    viable_raids: Optional[list[Permutation]] = None
    for combat in combat_perms:
        if not _layer_fits(combat, states, (), socket_tags, mod_tag):
            continue
        after_combat = _advance(states, combat)
        for general in general_perms:
            if not _layer_fits(general, after_combat, (combat,)):
                continue
            after_general = _advance(after_combat, general)
            if viable_raids is None:
                viable_raids = [r for r in raid_perms
                                if _layer_fits(r, states, (), socket_tags, mod_tag)]
            for raid in viable_raids:
                if _layer_fits(raid, after_general, (combat, general), socket_tags, mod_tag):
                    yield combat, general, raid


# ---------------------------------------------------------------------------
# Selection
# ---------------------------------------------------------------------------

def _triple_key(triple: Triple) -> tuple[int, int]:
    placed = 0
    cost = 0
    for perm in triple:
        for mod in perm:
            if mod is not None:
                placed += 1
                cost += mod.cost
    return placed, cost


def _key_ceiling(categories: Sequence[Sequence[Mod]]) -> tuple[int, int]:
    """Best (placed, cost) any triple could reach."""
    placed = 0
    cost = 0
    for mods in categories:
        top = sorted((m.cost for m in mods), reverse=True)[:SLOT_COUNT]
        placed += len(top)
        cost += sum(top)
    return placed, cost


def select_best(candidates: Iterable[Triple],
                ceiling: Optional[tuple[int, int]] = None) -> tuple[Optional[Triple], int]:
    """Pick the triple placing the most mods, then spending the most energy.

    Ties go to the earliest candidate. Stops early once `ceiling` is reached.
    Returns (best, number of candidates seen).
    """
    best: Optional[Triple] = None
    best_key = (-1, -1)
    seen = 0
    for triple in candidates:
        seen += 1
        key = _triple_key(triple)
        if key > best_key:
            best, best_key = triple, key
            if ceiling is not None and best_key >= ceiling:
                break
    return best, seen


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------

class ModAssigner:
    """Finds a valid placement of general, combat and raid mods on five armor pieces."""

    def __init__(self, data_source: ModDataHandler, policy: EnergyPolicy):
        self.data_source = data_source
        self.policy = policy

    @staticmethod
    def _validate_slots(slots: Sequence[Slot]) -> None:
        if len(slots) != SLOT_COUNT:
            raise ValueError(f"Expected exactly {SLOT_COUNT} slots, got {len(slots)}")
        ids = [s.id for s in slots]
        if len(set(ids)) != len(ids):
            raise ValueError(f"Duplicate slot ids: {ids}")

    def _permutations(self, mods: list[Mod], allow_partial: bool) -> list[Permutation]:
        perms = generate_permutations_of_five(mods)
        if allow_partial:
            return perms
        required = min(SLOT_COUNT, len(mods))
        return [p for p in perms if placed_count(p) == required]

    def solve(self, slots: Sequence[Slot], mods: Iterable[Mod],
              tier: UpgradeTier = UpgradeTier.NOTHING,
              allow_partial: bool = False) -> SolveResult:
        """Assign mods to slots.

        With allow_partial=False every category mod has to be placed (any
        five when a category has more); otherwise the best partial
        placement is returned. A missing solution is reported as
        `found=False`, never raised.
        """
        slots = list(slots)
        self._validate_slots(slots)

        categories = partition_mods(mods, slots, self.data_source)
        states = build_energy_states(slots, categories.slot_specific, self.policy, tier)
        socket_tags = tuple(self.data_source.get_socket_tags(s) for s in slots)

        combat_perms  = self._permutations(categories.combat, allow_partial)
        general_perms = self._permutations(categories.general, allow_partial)
        raid_perms    = self._permutations(categories.raid, allow_partial)
        logger.debug("Permutations: %d combat, %d general, %d raid",
                     len(combat_perms), len(general_perms), len(raid_perms))

        best, seen = select_best(
            iter_joint_assignments(combat_perms, general_perms, raid_perms,
                                   states, socket_tags, self.data_source.classify_mod_tag),
            ceiling=_key_ceiling((categories.combat, categories.general, categories.raid)),
        )
        logger.debug("Search saw %d valid candidate(s); best=%s",
                     seen, _triple_key(best) if best else None)

        assignments = {s.id: list(categories.slot_specific[s.id]) for s in slots}
        if best is None:
            return SolveResult(
                assignments=assignments,
                candidates=seen,
                unassigned=categories.searched,
                dropped=categories.dropped,
            )

        joint = JointAssignment(combat=best[0], general=best[1], raid=best[2])
        for i, slot in enumerate(slots):
            assignments[slot.id].extend(
                m for m in (best[0][i], best[1][i], best[2][i]) if m is not None)

        return SolveResult(
            assignments=assignments,
            best=joint,
            candidates=seen,
            unassigned=self._unplaced(categories.searched, best),
            dropped=categories.dropped,
        )

    @staticmethod
    def _unplaced(searched: list[Mod], best: Triple) -> list[Mod]:
        # Match by identity: equal-valued mods are distinct requests.
        placed = [m for perm in best for m in perm if m is not None]
        unplaced: list[Mod] = []
        for mod in searched:
            idx = next((j for j, p in enumerate(placed) if p is mod), None)
            if idx is None:
                unplaced.append(mod)
            else:
                placed.pop(idx)
        return unplaced


def get_mod_assignments(slots: Sequence[Slot], mods: Iterable[Mod],
                        data_source: ModDataHandler, policy: EnergyPolicy,
                        tier: UpgradeTier = UpgradeTier.NOTHING,
                        allow_partial: bool = False) -> dict[str, list[Mod]]:
    """Slot id -> assigned mods. Only slot-specific mods when nothing fits."""
    return ModAssigner(data_source, policy).solve(slots, mods, tier, allow_partial).assignments
