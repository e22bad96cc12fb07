"""Solver constants — no mutable state."""
from enum import IntEnum, unique


@unique
class EnergyType(IntEnum):
    """Armor/mod energy affinity. ANY is the wildcard."""
    ANY    = 0
    ARC    = 1
    SOLAR  = 2
    VOID   = 3
    STASIS = 6


# Number of armor slots taking part in one solve (helmet .. class item)
SLOT_COUNT = 5

# Trailing separator after every position in a permutation key
PERMUTATION_KEY_SEPARATOR = ","

# Bundled table file names (modplanner/resources)
MOD_CATEGORIES_FILE    = "mod_categories.json"
BUCKET_CATEGORIES_FILE = "bucket_categories.csv"
MOD_TAGS_FILE          = "mod_tags.csv"
SPECIALTY_SOCKETS_FILE = "specialty_sockets.csv"
UPGRADE_TIERS_FILE     = "upgrade_tiers.csv"

# Separator for multi-valued cells in the CSV tables
TAG_LIST_SEPARATOR = "|"


def energy_types_compatible(a: EnergyType, b: EnergyType) -> bool:
    """Return True if two energy types may share a slot (ANY matches everything)."""
    return a == b or a == EnergyType.ANY or b == EnergyType.ANY
