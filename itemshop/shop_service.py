# itemshop/shop_service.py
from __future__ import annotations

import asyncio
import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Optional

from itemshop import config, history, storage
from itemshop.shop import PUBLISHER, Shop, ShopPublisher, generate

log = logging.getLogger("itemshop.service")


async def notify_admins(bot, text: str) -> None:
    if bot is None:
        return
    for admin_id in config.ADMIN_IDS:
        try:
            await bot.send_message(admin_id, text)
        except Exception:
            log.warning("Admin alert failed admin_id=%s", admin_id)


def restore_published_shop(publisher: ShopPublisher | None = None) -> Optional[Shop]:
    """Serve the last persisted shop until the first pass of this process succeeds."""
    publisher = publisher or PUBLISHER
    shop = storage.load_shop()
    if shop is not None and publisher.current is None:
        publisher.publish(shop)
        log.info("Restored persisted shop (expires %s)", shop.expiration)
    return shop


def _count(shop: Shop, name: str) -> int:
    sf = shop.storefront(name)
    return len(sf.catalog_entries) if sf else 0


async def refresh_shop(bot=None, publisher: ShopPublisher | None = None, **kwargs: Any) -> Shop:
    """One pass: generate, persist, record. Failures alert operators and re-raise."""
    season = int(kwargs.get("season") or config.CURRENT_SEASON)
    try:
        shop = await generate(publisher, **kwargs)
    except Exception as e:
        log.exception("Shop generation failed; keeping the previous shop")
        try:
            history.record_pass("failed", season, error=f"{type(e).__name__}: {e}")
        except Exception:
            log.exception("Could not record failed pass")
        await notify_admins(bot, f"⚠️ Shop generation failed (season {season}): {type(e).__name__}: {e}")
        raise

    try:
        storage.save_shop(shop)
    except OSError:
        log.exception("Could not persist shop to %s", config.SHOP_STATE_PATH)

    try:
        history.record_pass(
            "ok",
            season,
            expiration=shop.expiration,
            daily=_count(shop, config.DAILY_STOREFRONT),
            weekly=_count(shop, config.WEEKLY_STOREFRONT),
            battlepass=_count(shop, config.battlepass_storefront_name(season)),
        )
    except Exception:
        log.exception("Could not record pass")
    return shop


def next_refresh_at(now: datetime | None = None) -> datetime:
    now = now or datetime.now(timezone.utc)
    target = now.replace(
        hour=config.SHOP_REFRESH_HOUR_UTC,
        minute=config.SHOP_REFRESH_MINUTE_UTC,
        second=0,
        microsecond=0,
    )
    if target <= now:
        target += timedelta(days=1)
    return target


async def shop_refresh_loop(bot=None):
    """Generates at startup when nothing is live, then daily at the configured UTC time."""
    due_now = PUBLISHER.current is None

    while True:
        try:
            if not due_now:
                now = datetime.now(timezone.utc)
                await asyncio.sleep(max(1.0, (next_refresh_at(now) - now).total_seconds()))
            await refresh_shop(bot)
            due_now = False
        except asyncio.CancelledError:
            raise
        except Exception:
            # logged and alerted in refresh_shop
            await asyncio.sleep(config.RETRY_AFTER_FAILURE_SEC)
            due_now = True
