"""Hand-built plug categories and builders shared by the solver tests."""
from modplanner import EnergyCost, EnergyType, Mod, Slot, SlotEnergy

# Plug categories of the hand-built tables
GENERAL = 100
COMBAT_EMBER = 200
COMBAT_WELL = 201
RAID_WISH = 300
RAID_VOG = 301

# Armor buckets and their slot-specific plug categories
HELMET_BUCKET, HELMET_MODS = 1, 11
ARMS_BUCKET, ARMS_MODS = 2, 12
CHEST_BUCKET, CHEST_MODS = 3, 13
LEGS_BUCKET, LEGS_MODS = 4, 14
CLASS_BUCKET, CLASS_MODS = 5, 15

BUCKETS = [HELMET_BUCKET, ARMS_BUCKET, CHEST_BUCKET, LEGS_BUCKET, CLASS_BUCKET]

# Specialty socket plug categories
SOCKET_EMBER = 900
SOCKET_COMBAT = 901
SOCKET_WISH = 902

_next_hash = iter(range(1, 1_000_000))


def make_mod(plug_category_hash: int,
             energy_type: EnergyType | None = EnergyType.ANY,
             amount: int = 0,
             name: str = "") -> Mod:
    """A mod; energy_type=None builds a mod without any energy cost."""
    cost = None if energy_type is None else EnergyCost(energy_type=energy_type, amount=amount)
    return Mod(hash=next(_next_hash), name=name, plug_category_hash=plug_category_hash,
               energy_cost=cost)


def make_slot(index: int,
              energy_type: EnergyType | None = EnergyType.ANY,
              capacity: int = 10,
              sockets: list[int] | None = None,
              is_exotic: bool = False) -> Slot:
    """Slot `index` (0-4) in its usual bucket; energy_type=None means no energy."""
    energy = None if energy_type is None else SlotEnergy(energy_type=energy_type,
                                                         capacity=capacity)
    return Slot(id=f"slot-{index}", name=f"Slot {index}", bucket_hash=BUCKETS[index],
                energy=energy, is_exotic=is_exotic, specialty_sockets=sockets or [])


def make_slots(**overrides) -> list[Slot]:
    """Five ANY/10 slots; overrides map 'sN' to a replacement Slot."""
    return [overrides.get(f"s{i}", make_slot(i)) for i in range(5)]
