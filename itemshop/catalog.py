# itemshop/catalog.py
"""Remote cosmetic catalog: fetch, validate and index.

The feed is untyped JSON. Records are parsed into ``CosmeticItem`` at the
boundary; anything malformed or not eligible for the configured season is
dropped without raising.
"""

from __future__ import annotations

import asyncio
import json
import logging
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Iterable, Optional

import aiohttp

from itemshop import config
from itemshop.errors import CatalogFetchError

log = logging.getLogger("itemshop.catalog")


@dataclass(frozen=True)
class CosmeticType:
    backend_value: str
    value: str = ""
    text: str = ""


@dataclass(frozen=True)
class SetRef:
    backend_value: str
    value: str = ""
    text: str = ""


@dataclass(frozen=True)
class CosmeticItem:
    id: str
    type: CosmeticType
    set_ref: Optional[SetRef]
    season: Optional[int]
    shop_history: tuple[str, ...] = ()
    rarity: str = ""
    preview_hero_path: str = ""

    @property
    def template_id(self) -> str:
        return f"{self.type.backend_value}:{self.id}"

    def is_eligible(self, current_season: int) -> bool:
        if self.season is None or self.season == 0 or self.season > current_season:
            return False
        if self.set_ref is None:
            return False
        return len(self.shop_history) > 0

    @classmethod
    def from_dict(cls, data: Any) -> "CosmeticItem | None":
        """Parse one feed record; ``None`` when the record is unusable."""
        if not isinstance(data, dict):
            return None

        item_id = data.get("id")
        if not isinstance(item_id, str) or not item_id.strip():
            return None

        raw_type = data.get("type")
        if not isinstance(raw_type, dict) or not isinstance(raw_type.get("backendValue"), str):
            return None
        if not raw_type["backendValue"]:
            return None
        ctype = CosmeticType(
            backend_value=raw_type["backendValue"],
            value=str(raw_type.get("value") or ""),
            text=str(raw_type.get("text") or ""),
        )

        set_ref = None
        raw_set = data.get("set")
        if isinstance(raw_set, dict) and isinstance(raw_set.get("backendValue"), str) and raw_set["backendValue"]:
            set_ref = SetRef(
                backend_value=raw_set["backendValue"],
                value=str(raw_set.get("value") or ""),
                text=str(raw_set.get("text") or ""),
            )

        season = None
        intro = data.get("introduction")
        if isinstance(intro, dict):
            try:
                season = int(intro.get("backendValue"))
            except (TypeError, ValueError):
                season = None

        history = data.get("shopHistory")
        shop_history = tuple(str(x) for x in history) if isinstance(history, list) else ()

        hero = data.get("itemPreviewHeroPath")

        return cls(
            id=item_id,
            type=ctype,
            set_ref=set_ref,
            season=season,
            shop_history=shop_history,
            rarity=_parse_rarity(data.get("rarity")),
            preview_hero_path=hero if isinstance(hero, str) else "",
        )


def _parse_rarity(raw: Any) -> str:
    # EFortRarity::Legendary -> legendary
    if not isinstance(raw, dict):
        return ""
    backend = raw.get("backendValue")
    if isinstance(backend, str) and backend:
        return backend.split("::")[-1].strip().lower()
    value = raw.get("value")
    return str(value).strip().lower() if value else ""


@dataclass(frozen=True)
class CosmeticSet:
    backend_value: str
    value: str
    text: str
    members: tuple[str, ...]


@dataclass(frozen=True)
class CatalogIndex:
    """Lookups for one generation cycle. Not mutated once built."""

    items: dict[str, CosmeticItem] = field(default_factory=dict)
    sets: dict[str, CosmeticSet] = field(default_factory=dict)
    backpacks: dict[str, CosmeticItem] = field(default_factory=dict)
    types: dict[str, CosmeticType] = field(default_factory=dict)

    def backpack_for(self, item_id: str) -> Optional[CosmeticItem]:
        return self.backpacks.get(item_id)

    def set_members(self, set_id: str) -> list[CosmeticItem]:
        cset = self.sets.get(set_id)
        if cset is None:
            return []
        return [self.items[iid] for iid in cset.members if iid in self.items]


def _hero_id(path: str) -> str:
    # /BRCosmetics/Athena/Items/Cosmetics/Characters/CID_028_Athena_Commando_F[.CID_...]
    tail = path.rstrip("/").split("/")[-1]
    return tail.split(".")[0]


def build_index(records: Iterable[Any], current_season: int) -> CatalogIndex:
    types: dict[str, CosmeticType] = {}
    items: dict[str, CosmeticItem] = {}
    members: dict[str, list[str]] = {}
    set_refs: dict[str, SetRef] = {}

    total = 0
    for raw in records:
        total += 1
        item = CosmeticItem.from_dict(raw)
        if item is None or not item.is_eligible(current_season):
            continue
        if item.id in items:
            continue

        # every item of a type code shares the first-seen CosmeticType
        canonical = types.setdefault(item.type.backend_value, item.type)
        if canonical is not item.type:
            item = replace(item, type=canonical)

        set_id = item.set_ref.backend_value
        if set_id not in set_refs:
            set_refs[set_id] = item.set_ref
            members[set_id] = []
        members[set_id].append(item.id)
        items[item.id] = item

    sets = {
        set_id: CosmeticSet(
            backend_value=set_id,
            value=ref.value,
            text=ref.text,
            members=tuple(members[set_id]),
        )
        for set_id, ref in set_refs.items()
    }

    backpacks: dict[str, CosmeticItem] = {}
    for item in items.values():
        if config.TYPE_BACKPACK not in item.type.backend_value or not item.preview_hero_path:
            continue
        hero_id = _hero_id(item.preview_hero_path)
        if hero_id and hero_id in items:
            backpacks[hero_id] = item

    log.info(
        "Catalog indexed: %s of %s records, %s sets, %s backpack links (season %s)",
        len(items), total, len(sets), len(backpacks), current_season,
    )
    return CatalogIndex(items=items, sets=sets, backpacks=backpacks, types=types)


def extract_records(payload: Any, source: str) -> list[Any]:
    # fortnite-api wraps the array as {"status": 200, "data": [...]}
    if isinstance(payload, dict):
        payload = payload.get("data")
    if not isinstance(payload, list):
        raise CatalogFetchError(source, "response has no cosmetic array")
    return payload


async def fetch_catalog(url: str | None = None, timeout_sec: int | None = None) -> list[Any]:
    url = url or config.CATALOG_URL
    timeout = aiohttp.ClientTimeout(total=timeout_sec or config.CATALOG_TIMEOUT_SEC)
    try:
        async with aiohttp.ClientSession(timeout=timeout) as session:
            async with session.get(url) as resp:
                resp.raise_for_status()
                payload = await resp.json(content_type=None)
    except (aiohttp.ClientError, asyncio.TimeoutError, ValueError) as e:
        raise CatalogFetchError(url, str(e) or type(e).__name__) from e
    return extract_records(payload, url)


def load_catalog_file(path: Path) -> list[Any]:
    try:
        with open(path, "r", encoding="utf-8") as f:
            payload = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise CatalogFetchError(str(path), str(e)) from e
    return extract_records(payload, str(path))
