"""modplanner — armor mod assignment solver."""

from modplanner.constants import EnergyType, SLOT_COUNT, energy_types_compatible
from modplanner.models import (
    EnergyCost, SlotEnergy, Slot, Mod, Permutation,
    SlotEnergyState, ModCategories,
    JointAssignment, SolveResult,
)
from modplanner.data import ModDataHandler
from modplanner.policy import EnergyPolicy, UpgradeTier, UpgradeTierPolicy
from modplanner.energy import (
    compatible_energy, has_elemental_requirement, build_energy_states,
)
from modplanner.permutations import (
    generate_permutations_of_five, stringify_mods, placed_count,
)
from modplanner.solver import (
    ModAssigner, get_mod_assignments,
    partition_mods, iter_joint_assignments, select_best,
)

__all__ = [
    # Constants
    "EnergyType", "SLOT_COUNT", "energy_types_compatible",
    # Models
    "EnergyCost", "SlotEnergy", "Slot", "Mod", "Permutation",
    "SlotEnergyState", "ModCategories",
    "JointAssignment", "SolveResult",
    # Static tables
    "ModDataHandler",
    # Energy policy
    "EnergyPolicy", "UpgradeTier", "UpgradeTierPolicy",
    "compatible_energy", "has_elemental_requirement", "build_energy_states",
    # Permutations
    "generate_permutations_of_five", "stringify_mods", "placed_count",
    # Solver
    "ModAssigner", "get_mod_assignments",
    "partition_mods", "iter_joint_assignments", "select_best",
]
