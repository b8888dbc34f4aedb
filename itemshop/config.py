# itemshop/config.py
import os
from pathlib import Path

_ROOT = Path(__file__).resolve().parent.parent
_ENV_PATH = _ROOT / ".env"


def _read_env_file() -> dict[str, str]:
    vals: dict[str, str] = {}
    if not _ENV_PATH.exists():
        return vals
    for line in _ENV_PATH.read_text(encoding="utf-8").splitlines():
        line = line.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        k, v = line.split("=", 1)
        vals[k.strip()] = v.strip().strip('"').strip("'")
    return vals


_ENV_FILE_VALUES = _read_env_file()


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    if v is not None and str(v).strip() != "":
        return str(v)
    return _ENV_FILE_VALUES.get(name, default)


def _env_int(name: str, default: int) -> int:
    try:
        return int(_env(name, str(default)))
    except ValueError:
        return default


# ================== OPERATOR BOT ==================
# Optional: without a token the generator, scheduler and HTTP server still run.
BOT_TOKEN = _env("BOT_TOKEN", "").strip()

ADMIN_IDS: list[int] = []
_admin_env = _env("ADMIN_IDS", "").strip()
if _admin_env:
    try:
        ADMIN_IDS = [int(x.strip()) for x in _admin_env.split(",") if x.strip()]
    except ValueError:
        ADMIN_IDS = []

# ================== SEASON / FEED ==================
CURRENT_SEASON = _env_int("CURRENT_SEASON", 10)

CATALOG_URL = _env("CATALOG_URL", "https://fortnite-api.com/v2/cosmetics/br")
CATALOG_TIMEOUT_SEC = _env_int("CATALOG_TIMEOUT_SEC", 30)

# ================== FILES ==================
DATA_DIR = Path(_env("DATA_DIR", str(_ROOT / "data")))
DISPLAY_ASSETS_PATH = Path(_env("DISPLAY_ASSETS_PATH", str(DATA_DIR / "display_assets.json")))
STOREFRONT_DIR = Path(_env("STOREFRONT_DIR", str(DATA_DIR / "storefront")))
SHOP_STATE_PATH = Path(_env("SHOP_STATE_PATH", str(DATA_DIR / "shop.json")))
HISTORY_DB_PATH = Path(_env("HISTORY_DB_PATH", str(DATA_DIR / "itemshop.db")))

# ================== SCHEDULE ==================
# Shop expires at 00:00 UTC, so the default refresh matches it.
SHOP_REFRESH_HOUR_UTC = _env_int("SHOP_REFRESH_HOUR_UTC", 0)
SHOP_REFRESH_MINUTE_UTC = _env_int("SHOP_REFRESH_MINUTE_UTC", 0)
RETRY_AFTER_FAILURE_SEC = _env_int("RETRY_AFTER_FAILURE_SEC", 300)

# ================== HTTP ==================
WEBHOOK_HOST = _env("WEBHOOK_HOST", "0.0.0.0")
WEBHOOK_PORT = int(_env("PORT", _env("WEBHOOK_PORT", "8080")))

# ================== SHOP DOCUMENT ==================
REFRESH_INTERVAL_HRS = 1
DAILY_PURCHASE_HRS = 24

DAILY_STOREFRONT = "BRDailyStorefront"
WEEKLY_STOREFRONT = "BRWeeklyStorefront"


def battlepass_storefront_name(season: int) -> str:
    return f"BRSeason{int(season)}"


# ================== COSMETIC TYPES ==================
TYPE_CHARACTER = "AthenaCharacter"
TYPE_BACKPACK = "AthenaBackpack"
TYPE_CONTRAIL = "AthenaSkyDiveContrail"
TYPE_MUSIC_PACK = "AthenaMusicPack"
TYPE_TOY = "AthenaToy"

# ================== ROTATIONS ==================
DAILY_ENTRY_COUNT = 6
DAILY_CHARACTER_CAP = 2
DAILY_BLOCKED_TYPES = frozenset({
    TYPE_BACKPACK,
    TYPE_CONTRAIL,
    TYPE_MUSIC_PACK,
    TYPE_TOY,
})

WEEKLY_FULL_SET_TARGET = 3

MAX_SELECTION_ATTEMPTS = _env_int("MAX_SELECTION_ATTEMPTS", 1000)

SECTION_DAILY = "Daily"
SECTION_FEATURED = "Featured"
TILE_SMALL = "Small"
TILE_NORMAL = "Normal"
