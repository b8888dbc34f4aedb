from __future__ import annotations

import json
from pathlib import Path


def make_record(
    item_id: str,
    ctype: str = "AthenaCharacter",
    set_id: str | None = "SetA",
    season: int | None = 5,
    rarity: str | None = "Epic",
    history: list | None = None,
    hero: str | None = None,
) -> dict:
    """One fortnite-api style cosmetic record."""
    rec = {
        "id": item_id,
        "type": {"value": ctype.lower(), "displayValue": ctype, "backendValue": ctype},
        "rarity": {"value": rarity.lower(), "backendValue": f"EFortRarity::{rarity}"} if rarity else None,
        "set": {"value": set_id, "text": f"Part of the {set_id} set.", "backendValue": set_id} if set_id else None,
        "introduction": (
            {"chapter": "1", "season": str(season), "text": "", "backendValue": season}
            if season is not None else None
        ),
        "shopHistory": history if history is not None else ["2019-05-01T00:00:00Z"],
    }
    if hero:
        rec["itemPreviewHeroPath"] = hero
    return rec


def hero_path(item_id: str) -> str:
    return f"/BRCosmetics/Athena/Items/Cosmetics/Characters/{item_id}"


def full_set(set_id: str, n: int = 3) -> list[dict]:
    """Priced members: a character, a pickaxe and a glider."""
    types = ["AthenaCharacter", "AthenaPickaxe", "AthenaGlider", "AthenaDance"]
    return [
        make_record(f"{set_id}_{i}", ctype=types[i % len(types)], set_id=set_id)
        for i in range(n)
    ]


def write_json(path: Path, data) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


BATTLEPASS_DOC = {
    "catalogEntries": [
        {
            "offerId": "BRSeason10BattlePass",
            "devName": "BR.Season10.BattlePass.01",
            "offerType": "StaticPrice",
            "prices": [{"currencyType": "MtxCurrency", "basePrice": 950, "regularPrice": 950, "finalPrice": 950}],
            "requirements": [],
            "itemGrants": [],
        },
        {
            "offerId": "BRSeason10.SingleTier",
            "devName": "BR.Season10.SingleTier.01",
            "offerType": "StaticPrice",
            "prices": [{"currencyType": "MtxCurrency", "basePrice": 150, "regularPrice": 150, "finalPrice": 150}],
            "requirements": [],
            "itemGrants": [],
        },
    ]
}
