# itemshop/shop.py
from __future__ import annotations

import asyncio
import logging
import random
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Any, Awaitable, Callable, Optional, Union

from itemshop import config
from itemshop.battlepass import battlepass_path, load_battlepass_entries
from itemshop.catalog import build_index, fetch_catalog
from itemshop.context import GenerationContext
from itemshop.display_assets import load_display_assets, resolve_display_assets
from itemshop.entries import CatalogEntry
from itemshop.rotation import select_daily, select_weekly

log = logging.getLogger("itemshop")

EntryLike = Union[CatalogEntry, dict]


@dataclass
class Storefront:
    name: str
    catalog_entries: list[EntryLike] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "catalogEntries": [
                e.to_dict() if isinstance(e, CatalogEntry) else e for e in self.catalog_entries
            ],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Storefront":
        entries = data.get("catalogEntries") or []
        return cls(
            name=str(data.get("name", "")),
            catalog_entries=[e for e in entries if isinstance(e, dict)],
        )


@dataclass
class Shop:
    expiration: str
    refresh_interval_hrs: int = config.REFRESH_INTERVAL_HRS
    daily_purchase_hrs: int = config.DAILY_PURCHASE_HRS
    storefronts: list[Storefront] = field(default_factory=list)

    def storefront(self, name: str) -> Optional[Storefront]:
        for sf in self.storefronts:
            if sf.name == name:
                return sf
        return None

    def to_dict(self) -> dict[str, Any]:
        return {
            "expiration": self.expiration,
            "refreshIntervalHrs": self.refresh_interval_hrs,
            "dailyPurchaseHrs": self.daily_purchase_hrs,
            "storefronts": [sf.to_dict() for sf in self.storefronts],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Shop":
        storefronts = data.get("storefronts") or []
        return cls(
            expiration=str(data.get("expiration", "")),
            refresh_interval_hrs=int(data.get("refreshIntervalHrs", config.REFRESH_INTERVAL_HRS)),
            daily_purchase_hrs=int(data.get("dailyPurchaseHrs", config.DAILY_PURCHASE_HRS)),
            storefronts=[Storefront.from_dict(sf) for sf in storefronts if isinstance(sf, dict)],
        )


def next_utc_midnight(now: datetime | None = None) -> datetime:
    now = now or datetime.now(timezone.utc)
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    today = now.astimezone(timezone.utc).replace(hour=0, minute=0, second=0, microsecond=0)
    return today + timedelta(days=1)


def iso_utc(dt: datetime) -> str:
    # 2024-05-01T00:00:00.000Z, the format the client parses
    return dt.astimezone(timezone.utc).strftime("%Y-%m-%dT%H:%M:%S.") + f"{dt.microsecond // 1000:03d}Z"


def create_shop(now: datetime | None = None) -> Shop:
    return Shop(expiration=iso_utc(next_utc_midnight(now)))


def push_storefront(shop: Shop, storefront: Storefront) -> None:
    """Append ``storefront``; a storefront with the same name is replaced in place."""
    for i, sf in enumerate(shop.storefronts):
        if sf.name == storefront.name:
            shop.storefronts[i] = storefront
            return
    shop.storefronts.append(storefront)


class ShopPublisher:
    """Holds the shop clients are served. Passes swap it only when complete."""

    def __init__(self) -> None:
        self._current: Optional[Shop] = None
        self.lock = asyncio.Lock()

    @property
    def current(self) -> Optional[Shop]:
        return self._current

    def publish(self, shop: Shop) -> None:
        self._current = shop

    def snapshot(self) -> Optional[dict[str, Any]]:
        shop = self._current
        return shop.to_dict() if shop is not None else None


PUBLISHER = ShopPublisher()

CatalogFetcher = Callable[[], Awaitable[list]]


async def generate(
    publisher: ShopPublisher | None = None,
    *,
    season: int | None = None,
    fetch: CatalogFetcher | None = None,
    display_assets_path: Path | None = None,
    storefront_dir: Path | None = None,
    rng: random.Random | None = None,
    now: datetime | None = None,
    max_attempts: int | None = None,
) -> Shop:
    """Run one generation pass and publish the result.

    Any exception leaves the previously published shop in place.
    """
    publisher = publisher or PUBLISHER
    season = int(season if season is not None else config.CURRENT_SEASON)
    fetch = fetch or fetch_catalog
    assets_path = display_assets_path or config.DISPLAY_ASSETS_PATH
    bp_path = battlepass_path(season, storefront_dir)

    async with publisher.lock:
        started = now or datetime.now(timezone.utc)
        log.info("Shop generation started (season %s)", season)

        records, asset_table, bp_entries = await asyncio.gather(
            fetch(),
            asyncio.to_thread(load_display_assets, assets_path),
            asyncio.to_thread(load_battlepass_entries, bp_path),
        )

        index = build_index(records, season)
        ctx = GenerationContext(
            index=index,
            display_assets=resolve_display_assets(index, asset_table),
            season=season,
            rng=rng or random.Random(),
            max_attempts=max_attempts or config.MAX_SELECTION_ATTEMPTS,
        )

        shop = create_shop(started)
        push_storefront(shop, Storefront(config.DAILY_STOREFRONT, select_daily(ctx)))
        push_storefront(shop, Storefront(config.WEEKLY_STOREFRONT, select_weekly(ctx)))
        push_storefront(shop, Storefront(config.battlepass_storefront_name(season), list(bp_entries)))

        publisher.publish(shop)
        log.info(
            "Shop published: expires %s, %s",
            shop.expiration,
            ", ".join(f"{sf.name}={len(sf.catalog_entries)}" for sf in shop.storefronts),
        )
        return shop
