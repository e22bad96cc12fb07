"""Energy compatibility checks and per-slot energy state seeding."""
from typing import Iterable, Mapping, Optional, Sequence

from modplanner.constants import EnergyType, energy_types_compatible
from modplanner.models import Mod, Slot, SlotEnergyState
from modplanner.policy import EnergyPolicy, UpgradeTier

__all__ = [
    "compatible_energy", "has_elemental_requirement",
    "energy_types_compatible", "build_energy_states",
]


def compatible_energy(slot: Slot, mod: Mod, policy: EnergyPolicy,
                      tier: UpgradeTier) -> bool:
    """Checks that:
        1. The slot has an energy descriptor at all.
        2. The mod is free, ANY-typed, matches the slot's energy, or the
           policy lets the slot swap its energy type at this tier.
    """
    if slot.energy is None:
        return False
    return (mod.energy_cost is None
            or mod.energy_type == EnergyType.ANY
            or mod.energy_type == slot.energy.energy_type
            or policy.can_swap_energy(slot, tier))


def has_elemental_requirement(mods: Iterable[Mod]) -> bool:
    """True if some mod has a cost with a non-ANY energy type."""
    return any(m.energy_cost is not None and m.energy_cost.energy_type != EnergyType.ANY
               for m in mods)


def build_energy_states(slots: Sequence[Slot],
                        committed: Mapping[str, Sequence[Mod]],
                        policy: EnergyPolicy,
                        tier: UpgradeTier) -> tuple[Optional[SlotEnergyState], ...]:
    """Seed one SlotEnergyState per slot from already committed slot-specific mods.

    Slots without an energy descriptor get None and accept nothing.
    """
    states: list[Optional[SlotEnergyState]] = []
    for slot in slots:
        if slot.energy is None:
            states.append(None)
            continue
        energy_type = (EnergyType.ANY if policy.can_swap_energy(slot, tier)
                       else slot.energy.energy_type)
        states.append(SlotEnergyState(
            used=sum(m.cost for m in committed.get(slot.id, ())),
            capacity=policy.max_energy(slot, tier),
            energy_type=energy_type,
        ))
    return tuple(states)
