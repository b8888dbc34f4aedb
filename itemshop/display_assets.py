# itemshop/display_assets.py
from __future__ import annotations

import json
import logging
import re
from pathlib import Path
from typing import Any, Mapping

from itemshop import config
from itemshop.catalog import CatalogIndex, CosmeticItem

log = logging.getLogger("itemshop.display_assets")

# CID_028_Athena_Commando_F, CID_A_112_Athena_Commando_M_Ruckus
CHARACTER_KEY_RE = re.compile(r"^CID_(?:[A-Z]_)?\d{3}_Athena_Commando_[FMU](?:_\w+)?$", re.IGNORECASE)


def load_display_assets(path: Path) -> dict[str, str]:
    """Read the curated asset table. A missing or broken file means no assets."""
    try:
        with open(path, "r", encoding="utf-8") as f:
            raw = json.load(f) or {}
    except FileNotFoundError:
        log.warning("Display asset table not found: %s", path)
        return {}
    except (OSError, json.JSONDecodeError) as e:
        log.warning("Display asset table unreadable (%s): %s", path, e)
        return {}

    if not isinstance(raw, dict):
        log.warning("Display asset table is not an object: %s", path)
        return {}
    return {str(k): v for k, v in raw.items() if isinstance(v, str) and v}


def _first_character(index: CatalogIndex) -> CosmeticItem | None:
    for item in index.items.values():
        if config.TYPE_CHARACTER in item.type.backend_value:
            return item
    return None


def resolve_display_assets(index: CatalogIndex, table: Mapping[str, Any]) -> dict[str, str]:
    """Map item id -> display asset name.

    Asset names look like ``<Prefix>_<ItemKey>``. Keys that are not in the
    index but look like a character id fall back to the first indexed
    character. Unmatched assets are skipped.
    """
    resolved: dict[str, str] = {}
    fallback = _first_character(index)
    unmatched = 0

    for asset in table.values():
        if not isinstance(asset, str):
            continue
        parts = asset.split("_")[1:]
        if not parts:
            unmatched += 1
            continue

        item_key = "_".join(parts)
        item = index.items.get(item_key)
        if item is None and "CID" in parts[0] and CHARACTER_KEY_RE.match(item_key):
            item = fallback

        if item is None:
            unmatched += 1
            continue
        resolved[item.id] = asset

    log.debug("Display assets: %s resolved, %s unmatched", len(resolved), unmatched)
    return resolved
