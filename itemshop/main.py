# itemshop/main.py
from __future__ import annotations

import asyncio
import logging
from contextlib import suppress
from pathlib import Path

from dotenv import load_dotenv
from aiogram import Bot, Dispatcher
from aiogram.client.default import DefaultBotProperties
from aiogram.types import ErrorEvent

# Shop server (FastAPI)
import uvicorn


def _load_env() -> None:
    """Load .env from project root reliably."""
    root_env = Path(__file__).resolve().parents[1] / ".env"
    load_dotenv(dotenv_path=root_env)


# config reads the environment at import time
_load_env()

from itemshop import config  # noqa: E402
from itemshop.logging_setup import setup_logging  # noqa: E402
from itemshop.admin_commands import router as admin_router  # noqa: E402
from itemshop.shop_service import restore_published_shop, shop_refresh_loop  # noqa: E402
from itemshop.webapp import create_app  # noqa: E402


async def _run_http_server() -> None:
    """Serve the published shop document."""
    app = create_app()
    host = (config.WEBHOOK_HOST or "0.0.0.0").strip()
    port = int(config.WEBHOOK_PORT or 8080)
    log = logging.getLogger("itemshop")

    while True:
        try:
            uv_cfg = uvicorn.Config(app=app, host=host, port=port, log_level="info", reload=False)
            server = uvicorn.Server(uv_cfg)
            log.info("Shop server: http://%s:%s", host, port)
            await server.serve()
            log.warning("Shop server stopped; restarting in 3s")
            await asyncio.sleep(3)
        except asyncio.CancelledError:
            raise
        except BaseException:
            log.exception("Shop server crashed; restarting in 5s")
            await asyncio.sleep(5)


async def _polling_loop(dp: Dispatcher, bot: Bot, log: logging.Logger) -> None:
    while True:
        try:
            log.info("Starting polling...")
            await dp.start_polling(bot)
            log.warning("Polling stopped; restarting in 3s")
            await asyncio.sleep(3)
        except asyncio.CancelledError:
            raise
        except Exception:
            log.exception("Polling crashed; retrying in 5s")
            await asyncio.sleep(5)


async def main() -> None:
    setup_logging()
    log = logging.getLogger("itemshop")
    log.info("Starting item shop service")
    log.info(
        "Config: season=%s catalog=%s data_dir=%s BOT_TOKEN=%s admins=%s port=%s",
        config.CURRENT_SEASON,
        config.CATALOG_URL,
        config.DATA_DIR,
        "set" if config.BOT_TOKEN else "missing",
        len(config.ADMIN_IDS),
        config.WEBHOOK_PORT,
    )

    restore_published_shop()

    bot = None
    polling_task = None
    if config.BOT_TOKEN:
        bot = Bot(token=config.BOT_TOKEN, default=DefaultBotProperties())
        dp = Dispatcher()

        @dp.error()
        async def on_dispatch_error(event: ErrorEvent):
            upd = event.update
            msg_text = getattr(getattr(upd, "message", None), "text", None)
            log.exception(
                "Unhandled update error update_id=%s message_text=%s",
                getattr(upd, "update_id", None),
                msg_text,
                exc_info=event.exception,
            )
            return True

        dp.include_router(admin_router)
        polling_task = asyncio.create_task(_polling_loop(dp, bot, log))
    else:
        log.warning("BOT_TOKEN missing: operator commands and alerts disabled")

    # background tasks
    refresh_task = asyncio.create_task(shop_refresh_loop(bot))

    try:
        await _run_http_server()
    finally:
        for task in (refresh_task, polling_task):
            if task is None:
                continue
            task.cancel()
            with suppress(asyncio.CancelledError):
                await task


if __name__ == "__main__":
    asyncio.run(main())
