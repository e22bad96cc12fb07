"""Shared fixtures for modplanner unit tests.

`ds` loads the bundled category tables from modplanner/resources once per run.
`small_ds` is a hand-built handler with tiny, readable plug category ids (see
helpers.py) used by the solver scenarios so expectations stay independent of
the bundled data.
"""
import pytest

from modplanner import ModDataHandler, UpgradeTierPolicy
from helpers import (
    ARMS_BUCKET, ARMS_MODS, CHEST_BUCKET, CHEST_MODS, CLASS_BUCKET, CLASS_MODS,
    COMBAT_EMBER, COMBAT_WELL, GENERAL, HELMET_BUCKET, HELMET_MODS,
    LEGS_BUCKET, LEGS_MODS, RAID_VOG, RAID_WISH,
    SOCKET_COMBAT, SOCKET_EMBER, SOCKET_WISH,
)


@pytest.fixture(scope="session")
def ds() -> ModDataHandler:
    """Real ModDataHandler using bundled resources. Loaded once per run."""
    return ModDataHandler()


@pytest.fixture(scope="session")
def policy() -> UpgradeTierPolicy:
    """Bundled upgrade tier table."""
    return UpgradeTierPolicy()


@pytest.fixture(scope="session")
def small_ds() -> ModDataHandler:
    return ModDataHandler.from_tables(
        general_plug_category=GENERAL,
        combat_plug_categories=[COMBAT_EMBER, COMBAT_WELL],
        raid_plug_categories=[RAID_WISH, RAID_VOG],
        bucket_to_category={
            HELMET_BUCKET: HELMET_MODS,
            ARMS_BUCKET: ARMS_MODS,
            CHEST_BUCKET: CHEST_MODS,
            LEGS_BUCKET: LEGS_MODS,
            CLASS_BUCKET: CLASS_MODS,
        },
        mod_tags={
            COMBAT_EMBER: "ember",
            COMBAT_WELL: "elementalwell",
            RAID_WISH: "lastwish",
            RAID_VOG: "vaultofglass",
        },
        socket_tags={
            SOCKET_EMBER: ["ember"],
            SOCKET_COMBAT: ["elementalwell", "ember"],
            SOCKET_WISH: ["lastwish"],
        },
    )
