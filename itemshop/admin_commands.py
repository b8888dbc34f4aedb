# itemshop/admin_commands.py

from datetime import datetime, timezone

from aiogram import Router
from aiogram.filters import Command
from aiogram.types import Message

from itemshop import config, history
from itemshop.shop import PUBLISHER
from itemshop.shop_service import refresh_shop

router = Router()


def is_admin(uid: int) -> bool:
    try:
        return int(uid) in {int(x) for x in config.ADMIN_IDS}
    except (TypeError, ValueError):
        return False


def shop_summary() -> str:
    shop = PUBLISHER.current
    if shop is None:
        return "🛒 Shop is not generated yet."

    lines = [f"🛒 Shop (season {config.CURRENT_SEASON})", f"Expires: {shop.expiration}"]
    for sf in shop.storefronts:
        lines.append(f"• {sf.name}: {len(sf.catalog_entries)} entries")
    return "\n".join(lines)


@router.message(Command("shop"))
async def cmd_shop(m: Message):
    if not m.from_user or not is_admin(m.from_user.id):
        return
    await m.answer(shop_summary())


@router.message(Command("regen"))
async def cmd_regen(m: Message):
    if not m.from_user or not is_admin(m.from_user.id):
        return

    await m.answer("⏳ Generating shop...")
    try:
        await refresh_shop(m.bot)
    except Exception as e:
        await m.answer(f"❌ Generation failed, previous shop kept: {type(e).__name__}: {e}")
        return
    await m.answer("✅ " + shop_summary())


@router.message(Command("shophistory"))
async def cmd_shop_history(m: Message):
    if not m.from_user or not is_admin(m.from_user.id):
        return

    parts = (m.text or "").split()
    try:
        limit = int(parts[1]) if len(parts) > 1 else 5
    except ValueError:
        await m.answer("Usage: /shophistory [count]")
        return

    rows = history.load_history(limit=max(1, min(limit, 20)))
    if not rows:
        await m.answer("No generation passes recorded yet.")
        return

    text = "📜 Last generation passes:\n"
    for row in rows:
        when = datetime.fromtimestamp(int(row["ts"]), tz=timezone.utc).strftime("%Y-%m-%d %H:%M")
        if row["status"] == "ok":
            text += f"✅ {when} S{row['season']}: daily {row['daily']}, weekly {row['weekly']}, bp {row['battlepass']}\n"
        else:
            text += f"❌ {when} S{row['season']}: {row['error']}\n"
    await m.answer(text)
