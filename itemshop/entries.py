# itemshop/entries.py
"""Catalog entries as the game client reads them."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from typing import Any, Optional

from itemshop import config
from itemshop.catalog import CosmeticItem
from itemshop.context import GenerationContext
from itemshop.prices import get_price

DENY_ON_ITEM_OWNERSHIP = "DenyOnItemOwnership"
MTX_CURRENCY = "MtxCurrency"
SALE_EXPIRATION = "9999-12-31T23:59:59.999Z"

OFFER_ID_PREFIX = {
    config.SECTION_DAILY: ":/",
    config.SECTION_FEATURED: "v2:/",
}

DISPLAY_ASSET_PREFIX = {
    config.SECTION_DAILY: "DA_Daily",
    config.SECTION_FEATURED: "DA_Featured",
}


def display_asset_path(name: str) -> str:
    return f"/Game/Catalog/DisplayAssets/{name}.{name}"


@dataclass
class Requirement:
    required_id: str
    requirement_type: str = DENY_ON_ITEM_OWNERSHIP
    min_quantity: int = 1

    def to_dict(self) -> dict[str, Any]:
        return {
            "requirementType": self.requirement_type,
            "requiredId": self.required_id,
            "minQuantity": self.min_quantity,
        }


@dataclass
class Price:
    amount: int
    currency_type: str = MTX_CURRENCY
    currency_sub_type: str = "Currency"

    def to_dict(self) -> dict[str, Any]:
        return {
            "currencyType": self.currency_type,
            "currencySubType": self.currency_sub_type,
            "dynamicRegularPrice": -1,
            "saleExpiration": SALE_EXPIRATION,
            "basePrice": self.amount,
            "regularPrice": self.amount,
            "finalPrice": self.amount,
        }


@dataclass
class ItemGrant:
    template_id: str
    quantity: int = 1

    def to_dict(self) -> dict[str, Any]:
        return {"templateId": self.template_id, "quantity": self.quantity}


@dataclass
class GiftInfo:
    purchase_requirements: list[Requirement] = field(default_factory=list)
    enabled: bool = True
    forced_gift_box_template_id: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {
            "bIsEnabled": self.enabled,
            "forcedGiftBoxTemplateId": self.forced_gift_box_template_id,
            "purchaseRequirements": [r.to_dict() for r in self.purchase_requirements],
            "giftRecordIds": [],
        }


@dataclass
class CatalogEntry:
    offer_id: str
    dev_name: str = ""
    offer_type: str = "StaticPrice"
    requirements: list[Requirement] = field(default_factory=list)
    prices: list[Price] = field(default_factory=list)
    item_grants: list[ItemGrant] = field(default_factory=list)
    gift_info: GiftInfo = field(default_factory=GiftInfo)
    categories: list[str] = field(default_factory=list)
    meta: dict[str, str] = field(default_factory=dict)
    refundable: bool = True

    @property
    def display_asset_path(self) -> str:
        return self.meta.get("DisplayAssetPath", "")

    @property
    def new_display_asset_path(self) -> str:
        return self.meta.get("NewDisplayAssetPath", "")

    def to_dict(self) -> dict[str, Any]:
        # meta and metaInfo are both read by clients; keep them identical.
        return {
            "offerId": self.offer_id,
            "offerType": self.offer_type,
            "devName": self.dev_name,
            "fulfillmentIds": [],
            "dailyLimit": -1,
            "weeklyLimit": -1,
            "monthlyLimit": -1,
            "categories": list(self.categories),
            "prices": [p.to_dict() for p in self.prices],
            "meta": dict(self.meta),
            "metaInfo": [{"key": k, "value": v} for k, v in self.meta.items()],
            "matchFilter": "",
            "filterWeight": 0.0,
            "appStoreId": [],
            "requirements": [r.to_dict() for r in self.requirements],
            "giftInfo": self.gift_info.to_dict(),
            "refundable": self.refundable,
            "displayAssetPath": self.display_asset_path,
            "NewDisplayAssetPath": self.new_display_asset_path,
            "itemGrants": [g.to_dict() for g in self.item_grants],
            "additionalGrants": [],
            "sortPriority": 0,
            "catalogGroupPriority": 0,
        }


def _choose_display_asset(item: CosmeticItem, section: str, resolved: Optional[str]) -> str:
    prefix = DISPLAY_ASSET_PREFIX.get(section, DISPLAY_ASSET_PREFIX[config.SECTION_FEATURED])
    if resolved and prefix in resolved:
        return resolved if resolved.startswith("/") else display_asset_path(resolved)
    return display_asset_path(f"{prefix}_{item.id}")


def build_entry(
    ctx: GenerationContext,
    item: CosmeticItem,
    section: str,
    tile_size: str,
) -> Optional[CatalogEntry]:
    """Offer for one item, or ``None`` when the item has no price."""
    price = get_price(item)
    if not price:
        return None

    resolved = ctx.display_assets.get(item.id)
    entry = CatalogEntry(offer_id=f"{OFFER_ID_PREFIX.get(section, 'v2:/')}{uuid.uuid4()}")
    entry.meta = {
        "DisplayAssetPath": _choose_display_asset(item, section, resolved),
        "NewDisplayAssetPath": resolved or "",
        "TileSize": tile_size,
        "SectionId": section,
    }

    entry.requirements.append(Requirement(required_id=item.template_id))
    entry.prices.append(Price(amount=price))
    entry.item_grants.append(ItemGrant(template_id=item.template_id))
    entry.dev_name = f"[VIRTUAL] 1x {item.template_id} for {price} {MTX_CURRENCY}"

    backpack = ctx.index.backpack_for(item.id)
    if backpack is not None:
        entry.item_grants.append(ItemGrant(template_id=backpack.template_id))
        entry.requirements.append(Requirement(required_id=backpack.template_id))

    entry.gift_info = GiftInfo(purchase_requirements=list(entry.requirements))
    return entry
