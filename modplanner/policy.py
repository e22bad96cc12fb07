"""Upgrade-tier energy policy: slot capacity and energy-type swapping."""
from enum import IntEnum, unique
from pathlib import Path
from typing import Optional, Protocol

import pandas as pd

from modplanner.constants import UPGRADE_TIERS_FILE
from modplanner.models import Slot


@unique
class UpgradeTier(IntEnum):
    """How far the player is willing to upgrade armor energy."""
    NOTHING                            = 0
    LEGENDARY_SHARDS                   = 1
    ENHANCEMENT_PRISMS                 = 2
    ASCENDANT_SHARDS_NOT_EXOTIC        = 3
    ASCENDANT_SHARDS                   = 4
    ASCENDANT_SHARDS_NOT_MASTERWORKED  = 5
    ASCENDANT_SHARDS_LOCK_ENERGY_TYPE  = 6


class EnergyPolicy(Protocol):
    """What the solver needs to know about upgrade tiers."""

    def can_swap_energy(self, slot: Slot, tier: UpgradeTier) -> bool: ...

    def max_energy(self, slot: Slot, tier: UpgradeTier) -> int: ...


_FLAG_VALUES = {"true": True, "false": False, "1": True, "0": False}


def _parse_flag(column: str, cell) -> bool:
    """Read a yes/no cell. Blank or unrecognised cells are an error, not False."""
    if isinstance(cell, str):
        key = cell.strip().lower()
    elif pd.isna(cell):
        raise ValueError(f"{UPGRADE_TIERS_FILE}: blank value in column {column!r}")
    else:
        key = str(int(cell)) if cell in (0, 1) else None
    if key not in _FLAG_VALUES:
        raise ValueError(f"{UPGRADE_TIERS_FILE}: bad value {cell!r} in column {column!r}")
    return _FLAG_VALUES[key]


class UpgradeTierPolicy:
    """Table-driven EnergyPolicy.

    Each tier row gives a capacity ceiling (-1 = keep the slot's current
    capacity) and whether the energy type may be swapped, separately for
    exotic armor. A slot never loses capacity it already has.
    """

    COLUMNS = ["tier", "max_energy", "can_swap", "can_swap_exotic"]

    def __init__(self, table: Optional[pd.DataFrame] = None,
                 resources_dir: Path | None = None):
        if table is None:
            if resources_dir is None:
                resources_dir = Path(__file__).parent / "resources"
            path = Path(resources_dir) / UPGRADE_TIERS_FILE
            if not path.exists():
                raise FileNotFoundError(f"Upgrade tier table not found: {path}")
            table = pd.read_csv(path)
        missing = [c for c in self.COLUMNS if c not in table.columns]
        if missing:
            raise ValueError(f"{UPGRADE_TIERS_FILE}: missing column(s) {missing}")
        table = table.astype({"tier": int, "max_energy": int})
        for column in ("can_swap", "can_swap_exotic"):
            table[column] = [_parse_flag(column, cell) for cell in table[column]]
        if not table["tier"].is_unique:
            dupes = sorted({int(t) for t in table.loc[table["tier"].duplicated(), "tier"]})
            raise ValueError(f"{UPGRADE_TIERS_FILE}: duplicate tier row(s) {dupes}")
        self._table = table.set_index("tier")

    def _row(self, tier: UpgradeTier) -> pd.Series:
        try:
            return self._table.loc[int(tier)]
        except KeyError:
            raise ValueError(f"Upgrade tier {tier!r} not in policy table") from None

    def can_swap_energy(self, slot: Slot, tier: UpgradeTier) -> bool:
        row = self._row(tier)
        return bool(row["can_swap_exotic"] if slot.is_exotic else row["can_swap"])

    def max_energy(self, slot: Slot, tier: UpgradeTier) -> int:
        current = slot.energy.capacity if slot.energy else 0
        ceiling = int(self._row(tier)["max_energy"])
        return current if ceiling < 0 else max(current, ceiling)
