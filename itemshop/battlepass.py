# itemshop/battlepass.py
from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from itemshop import config
from itemshop.errors import BattlePassLoadError


def battlepass_path(season: int, storefront_dir: Path | None = None) -> Path:
    base = storefront_dir or config.STOREFRONT_DIR
    return Path(base) / f"{config.battlepass_storefront_name(season)}.json"


def load_battlepass_entries(path: Path) -> list[dict[str, Any]]:
    """Pre-authored season offers, returned exactly as written."""
    try:
        with open(path, "r", encoding="utf-8") as f:
            raw = json.load(f)
    except FileNotFoundError as e:
        raise BattlePassLoadError(str(path), "file not found") from e
    except (OSError, json.JSONDecodeError) as e:
        raise BattlePassLoadError(str(path), str(e)) from e

    entries = raw.get("catalogEntries") if isinstance(raw, dict) else None
    if not isinstance(entries, list):
        raise BattlePassLoadError(str(path), "catalogEntries must be a list")
    if not all(isinstance(e, dict) for e in entries):
        raise BattlePassLoadError(str(path), "catalogEntries must contain objects")
    return entries
