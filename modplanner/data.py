"""
Mod category data loader — reads the bundled CSV/JSON tables into lookups.

All methods are read-only. Constructor takes an optional resources_dir so
the tables can be swapped for another manifest version (or test fixtures).
"""
import logging
from pathlib import Path
from typing import Iterable, Optional

import orjson
import pandas as pd

from modplanner.constants import (
    BUCKET_CATEGORIES_FILE, MOD_CATEGORIES_FILE, MOD_TAGS_FILE,
    SPECIALTY_SOCKETS_FILE, TAG_LIST_SEPARATOR,
)
from modplanner.models import Slot

logger = logging.getLogger("modplanner.data")


def _require_columns(df: pd.DataFrame, fname: str, columns: Iterable[str]) -> None:
    missing = [c for c in columns if c not in df.columns]
    if missing:
        raise ValueError(f"{fname}: missing column(s) {missing}")


def _split_tags(cell) -> frozenset[str]:
    if pd.isna(cell) or cell == "":
        return frozenset()
    return frozenset(t.strip() for t in str(cell).split(TAG_LIST_SEPARATOR) if t.strip())


class ModDataHandler:
    """Static mod-category tables: General tag, Combat/Raid sets, bucket and tag maps."""

    def __init__(self, resources_dir: Path | None = None):
        if resources_dir is None:
            resources_dir = Path(__file__).parent / "resources"
        self._resources_dir = Path(resources_dir)

        categories = self._read_json(MOD_CATEGORIES_FILE)
        try:
            general = int(categories["general"])
            combat = [int(h) for h in categories.get("combat_compatible", [])]
            raid = [int(h) for h in categories.get("raid", [])]
        except (KeyError, TypeError, ValueError) as e:
            raise ValueError(f"{MOD_CATEGORIES_FILE}: malformed category table ({e})") from e

        buckets = self._read_csv(BUCKET_CATEGORIES_FILE,
                                 ["bucket_hash", "plug_category_hash"])
        tags = self._read_csv(MOD_TAGS_FILE, ["plug_category_hash", "tag"])
        sockets = self._read_csv(SPECIALTY_SOCKETS_FILE,
                                 ["socket_plug_category_hash", "compatible_tags"])

        self._init_tables(
            general_plug_category=general,
            combat_plug_categories=combat,
            raid_plug_categories=raid,
            bucket_to_category=dict(zip(buckets["bucket_hash"].astype(int),
                                        buckets["plug_category_hash"].astype(int))),
            mod_tags={int(h): str(t) for h, t in zip(tags["plug_category_hash"], tags["tag"])
                      if not pd.isna(t)},
            socket_tags={int(h): _split_tags(t) for h, t in
                         zip(sockets["socket_plug_category_hash"], sockets["compatible_tags"])},
        )
        logger.debug("Loaded mod tables from %s: %d combat, %d raid, %d buckets, %d sockets",
                     self._resources_dir, len(self.combat_plug_categories),
                     len(self.raid_plug_categories), len(self.bucket_to_category),
                     len(self.socket_tags))

    # ------------------------------------------------------------------
    # Construction helpers
    # ------------------------------------------------------------------

    def _read_json(self, fname: str) -> dict:
        path = self._resources_dir / fname
        if not path.exists():
            raise FileNotFoundError(f"Mod table not found: {path}")
        return orjson.loads(path.read_bytes())

    def _read_csv(self, fname: str, columns: list[str]) -> pd.DataFrame:
        path = self._resources_dir / fname
        if not path.exists():
            raise FileNotFoundError(f"Mod table not found: {path}")
        df = pd.read_csv(path)
        _require_columns(df, fname, columns)
        return df

    def _init_tables(self, general_plug_category: int,
                     combat_plug_categories: Iterable[int],
                     raid_plug_categories: Iterable[int],
                     bucket_to_category: dict[int, int],
                     mod_tags: dict[int, str],
                     socket_tags: dict[int, frozenset[str]]) -> None:
        self.general_plug_category = general_plug_category
        self.combat_plug_categories: frozenset[int] = frozenset(combat_plug_categories)
        self.raid_plug_categories: frozenset[int] = frozenset(raid_plug_categories)
        self.bucket_to_category = dict(bucket_to_category)
        self.mod_tags = dict(mod_tags)
        self.socket_tags = {k: frozenset(v) for k, v in socket_tags.items()}

    @classmethod
    def from_tables(cls, general_plug_category: int,
                    combat_plug_categories: Iterable[int] = (),
                    raid_plug_categories: Iterable[int] = (),
                    bucket_to_category: dict[int, int] | None = None,
                    mod_tags: dict[int, str] | None = None,
                    socket_tags: dict[int, Iterable[str]] | None = None) -> "ModDataHandler":
        """Construct directly from in-memory tables (skip resource loading)."""
        instance = cls.__new__(cls)
        instance._resources_dir = None
        instance._init_tables(
            general_plug_category,
            combat_plug_categories,
            raid_plug_categories,
            bucket_to_category or {},
            mod_tags or {},
            {k: frozenset(v) for k, v in (socket_tags or {}).items()},
        )
        return instance

    # ------------------------------------------------------------------
    # Category membership
    # ------------------------------------------------------------------

    def is_general(self, plug_category_hash: int) -> bool:
        return plug_category_hash == self.general_plug_category

    def is_combat(self, plug_category_hash: int) -> bool:
        return plug_category_hash in self.combat_plug_categories

    def is_raid(self, plug_category_hash: int) -> bool:
        return plug_category_hash in self.raid_plug_categories

    def category_for_bucket(self, bucket_hash: int) -> Optional[int]:
        """Plug category of the slot-specific mods an armor bucket accepts."""
        return self.bucket_to_category.get(bucket_hash)

    # ------------------------------------------------------------------
    # Socket compatibility
    # ------------------------------------------------------------------

    def classify_mod_tag(self, plug_category_hash: int) -> Optional[str]:
        """Normalized mod tag used for specialty socket checks, or None."""
        return self.mod_tags.get(plug_category_hash)

    def get_socket_tags(self, slot: Slot) -> frozenset[str]:
        """Union of the mod tags all of a slot's specialty sockets accept."""
        tags: set[str] = set()
        for socket_category in slot.specialty_sockets:
            tags.update(self.socket_tags.get(socket_category, ()))
        return frozenset(tags)
