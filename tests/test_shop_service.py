import asyncio
import random
from datetime import datetime, timezone

import pytest

from itemshop import config, history, shop_service
from itemshop.errors import BattlePassLoadError
from itemshop.shop import ShopPublisher
from itemshop.storage import load_shop


class FakeBot:
    def __init__(self):
        self.sent = []

    async def send_message(self, chat_id, text):
        self.sent.append((chat_id, text))


@pytest.fixture
def service_paths(tmp_path, monkeypatch):
    monkeypatch.setattr(config, "SHOP_STATE_PATH", tmp_path / "shop.json")
    monkeypatch.setattr(config, "HISTORY_DB_PATH", tmp_path / "itemshop.db")
    monkeypatch.setattr(config, "ADMIN_IDS", [101, 202])
    return tmp_path


def _refresh(bot, publisher, records, data_dir, season=10):
    async def fetch():
        return records

    return asyncio.run(
        shop_service.refresh_shop(
            bot,
            publisher,
            season=season,
            fetch=fetch,
            display_assets_path=data_dir / "display_assets.json",
            storefront_dir=data_dir / "storefront",
            rng=random.Random(5),
        )
    )


def test_refresh_persists_and_records(service_paths, catalog_records, data_dir):
    publisher = ShopPublisher()
    bot = FakeBot()

    shop = _refresh(bot, publisher, catalog_records, data_dir)

    assert load_shop().to_dict() == shop.to_dict()
    (row,) = history.load_history()
    assert row["status"] == "ok"
    assert row["battlepass"] == 2
    assert row["daily"] == len(shop.storefront("BRDailyStorefront").catalog_entries)
    assert bot.sent == []


def test_failed_refresh_alerts_and_keeps_shop(service_paths, catalog_records, data_dir):
    publisher = ShopPublisher()
    bot = FakeBot()
    previous = _refresh(bot, publisher, catalog_records, data_dir)

    with pytest.raises(BattlePassLoadError):
        _refresh(bot, publisher, catalog_records, data_dir, season=11)

    assert publisher.current is previous
    assert load_shop().to_dict() == previous.to_dict()
    assert [chat for chat, _ in bot.sent] == [101, 202]
    assert "season 11" in bot.sent[0][1]
    assert history.load_history()[0]["status"] == "failed"


def test_restore_published_shop(service_paths, catalog_records, data_dir):
    saved = _refresh(None, ShopPublisher(), catalog_records, data_dir)
    fresh = ShopPublisher()

    shop_service.restore_published_shop(fresh)

    assert fresh.snapshot() == saved.to_dict()


def test_next_refresh_rolls_over_to_tomorrow(monkeypatch):
    monkeypatch.setattr(config, "SHOP_REFRESH_HOUR_UTC", 0)
    monkeypatch.setattr(config, "SHOP_REFRESH_MINUTE_UTC", 0)

    now = datetime(2024, 5, 1, 0, 0, tzinfo=timezone.utc)

    assert shop_service.next_refresh_at(now) == datetime(2024, 5, 2, tzinfo=timezone.utc)
