# itemshop/prices.py
# V-Bucks prices by cosmetic type and rarity.

from __future__ import annotations

from typing import Optional

from itemshop.catalog import CosmeticItem

# Series rarities price like the base rarity they replace in the shop.
RARITY_ALIASES = {
    "mythic": "legendary",
    "marvel": "epic",
    "dc": "epic",
    "icon": "epic",
    "starwars": "epic",
    "gaminglegends": "epic",
    "dark": "epic",
    "frozen": "epic",
    "lava": "legendary",
    "shadow": "epic",
    "slurp": "epic",
}

PRICES: dict[str, dict[str, int]] = {
    "AthenaCharacter": {"legendary": 2000, "epic": 1500, "rare": 1200, "uncommon": 800},
    "AthenaGlider": {"legendary": 2000, "epic": 1200, "rare": 800, "uncommon": 500},
    "AthenaPickaxe": {"legendary": 1500, "epic": 1200, "rare": 800, "uncommon": 500},
    "AthenaBackpack": {"legendary": 800, "epic": 500, "rare": 400, "uncommon": 200},
    "AthenaDance": {"legendary": 800, "epic": 800, "rare": 500, "uncommon": 200},
    "AthenaItemWrap": {"legendary": 700, "epic": 700, "rare": 500, "uncommon": 300},
    "AthenaSkyDiveContrail": {"legendary": 500, "epic": 500, "rare": 500, "uncommon": 200},
}

# Same price whatever the rarity.
FLAT_PRICES: dict[str, int] = {
    "AthenaMusicPack": 200,
    "AthenaLoadingScreen": 200,
    "AthenaToy": 500,
}


def get_price(item: CosmeticItem) -> Optional[int]:
    """Price for ``item`` or ``None`` when it is not sold."""
    ctype = item.type.backend_value
    if ctype in FLAT_PRICES:
        return FLAT_PRICES[ctype]

    table = PRICES.get(ctype)
    if not table:
        return None
    rarity = RARITY_ALIASES.get(item.rarity, item.rarity)
    return table.get(rarity)
