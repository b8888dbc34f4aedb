# itemshop/storage.py
import json
import logging
import os
from pathlib import Path
from typing import Optional

from itemshop import config
from itemshop.shop import Shop

log = logging.getLogger("itemshop.storage")


def load_shop(path: Optional[Path] = None) -> Optional[Shop]:
    path = Path(path or config.SHOP_STATE_PATH)
    if not path.exists():
        return None

    try:
        with open(path, "r", encoding="utf-8") as f:
            raw = json.load(f) or {}
    except (OSError, json.JSONDecodeError) as e:
        log.warning("Persisted shop unreadable (%s): %s", path, e)
        return None

    if not isinstance(raw, dict) or not isinstance(raw.get("storefronts"), list):
        log.warning("Persisted shop has no storefronts: %s", path)
        return None
    try:
        return Shop.from_dict(raw)
    except (TypeError, ValueError) as e:
        log.warning("Persisted shop malformed (%s): %s", path, e)
        return None


def save_shop(shop: Shop, path: Optional[Path] = None) -> None:
    path = Path(path or config.SHOP_STATE_PATH)
    os.makedirs(path.parent, exist_ok=True)

    tmp = str(path) + ".tmp"
    with open(tmp, "w", encoding="utf-8") as f:
        json.dump(shop.to_dict(), f, ensure_ascii=False, indent=2)
    os.replace(tmp, path)
