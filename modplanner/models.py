"""Pydantic models for armor slots, mods, energy state and solver results.

Slots and mods are caller-owned inputs and frozen; every solve builds its own
SlotEnergyState snapshots from scratch.
"""
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, computed_field

from modplanner.constants import EnergyType, SLOT_COUNT, energy_types_compatible


# ---------------------------------------------------------------------------
# Energy
# ---------------------------------------------------------------------------

class EnergyCost(BaseModel):
    """Energy a mod consumes once socketed."""
    model_config = ConfigDict(frozen=True)

    energy_type: EnergyType = EnergyType.ANY
    amount: int = Field(default=0, ge=0)


class SlotEnergy(BaseModel):
    """Current energy descriptor of an armor piece."""
    model_config = ConfigDict(frozen=True)

    energy_type: EnergyType
    capacity: int = Field(ge=0)


# ---------------------------------------------------------------------------
# Slots and mods
# ---------------------------------------------------------------------------

class Slot(BaseModel):
    """One of the five armor pieces receiving mods."""
    model_config = ConfigDict(frozen=True)

    id: str
    name: str = ""
    bucket_hash: int
    energy: Optional[SlotEnergy] = None
    is_exotic: bool = False
    specialty_sockets: list[int] = Field(default_factory=list)  # socket plug category hashes


class Mod(BaseModel):
    """An armor mod. No energy_cost means it is free and type-agnostic."""
    model_config = ConfigDict(frozen=True)

    hash: int
    name: str = ""
    plug_category_hash: int
    energy_cost: Optional[EnergyCost] = None

    @property
    def cost(self) -> int:
        return self.energy_cost.amount if self.energy_cost else 0

    @property
    def energy_type(self) -> EnergyType:
        return self.energy_cost.energy_type if self.energy_cost else EnergyType.ANY


# A single category's placement across the five slots
Permutation = tuple[Optional[Mod], ...]


class SlotEnergyState(BaseModel):
    """Energy bookkeeping for one slot at one point of the search."""
    model_config = ConfigDict(frozen=True)

    used: int = Field(ge=0)
    capacity: int = Field(ge=0)
    energy_type: EnergyType

    @property
    def remaining(self) -> int:
        return self.capacity - self.used

    def fits(self, mod: Mod) -> bool:
        """True if mod's cost fits the remaining energy and its type matches."""
        return (self.used + mod.cost <= self.capacity
                and energy_types_compatible(self.energy_type, mod.energy_type))

    def with_mod(self, mod: Optional[Mod]) -> "SlotEnergyState":
        if mod is None or mod.cost == 0:
            return self
        return self.model_copy(update={"used": self.used + mod.cost})


# ---------------------------------------------------------------------------
# Partitioning
# ---------------------------------------------------------------------------

class ModCategories(BaseModel):
    """Mods split into the buckets the search consumes."""
    general: list[Mod] = Field(default_factory=list)
    combat: list[Mod] = Field(default_factory=list)
    raid: list[Mod] = Field(default_factory=list)
    slot_specific: dict[str, list[Mod]] = Field(default_factory=dict)
    dropped: list[Mod] = Field(default_factory=list)

    @property
    def searched(self) -> list[Mod]:
        return self.combat + self.general + self.raid


# ---------------------------------------------------------------------------
# Solver results
# ---------------------------------------------------------------------------

class JointAssignment(BaseModel):
    """One valid (Combat, General, Raid) placement across all five slots."""
    model_config = ConfigDict(frozen=True)

    combat: Permutation = (None,) * SLOT_COUNT
    general: Permutation = (None,) * SLOT_COUNT
    raid: Permutation = (None,) * SLOT_COUNT

    def mods_for_slot(self, index: int) -> list[Mod]:
        """Combat, General then Raid mod placed in slot `index` (Nones skipped)."""
        return [m for m in (self.combat[index], self.general[index], self.raid[index])
                if m is not None]

    def placed_mods(self) -> list[Mod]:
        return [m for i in range(SLOT_COUNT) for m in self.mods_for_slot(i)]

    @computed_field
    @property
    def placed_count(self) -> int:
        return len(self.placed_mods())

    @computed_field
    @property
    def total_cost(self) -> int:
        return sum(m.cost for m in self.placed_mods())


class SolveResult(BaseModel):
    """Outcome of one solve. `found` is False when no joint assignment exists."""
    assignments: dict[str, list[Mod]]
    best: Optional[JointAssignment] = None
    candidates: int = 0
    unassigned: list[Mod] = Field(default_factory=list)
    dropped: list[Mod] = Field(default_factory=list)

    @computed_field
    @property
    def found(self) -> bool:
        return self.best is not None
