# itemshop/history.py
import sqlite3
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

from itemshop import config


def _con(db_path: Optional[Path] = None):
    path = Path(db_path or config.HISTORY_DB_PATH)
    path.parent.mkdir(parents=True, exist_ok=True)
    con = sqlite3.connect(path)
    con.row_factory = sqlite3.Row
    con.execute("PRAGMA journal_mode=WAL;")
    return con


def init_history(db_path: Optional[Path] = None):
    con = _con(db_path)
    try:
        con.execute("""
        CREATE TABLE IF NOT EXISTS generation_history (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            ts INTEGER NOT NULL,
            status TEXT NOT NULL, -- ok/failed
            season INTEGER NOT NULL,
            expiration TEXT NOT NULL DEFAULT '',
            daily INTEGER NOT NULL DEFAULT 0,
            weekly INTEGER NOT NULL DEFAULT 0,
            battlepass INTEGER NOT NULL DEFAULT 0,
            error TEXT NOT NULL DEFAULT ''
        )
        """)
        con.commit()
    finally:
        con.close()


def record_pass(
    status: str,
    season: int,
    expiration: str = "",
    daily: int = 0,
    weekly: int = 0,
    battlepass: int = 0,
    error: str = "",
    db_path: Optional[Path] = None,
) -> None:
    init_history(db_path)
    con = _con(db_path)
    try:
        ts = int(datetime.now(timezone.utc).timestamp())
        con.execute(
            "INSERT INTO generation_history (ts, status, season, expiration, daily, weekly, battlepass, error) "
            "VALUES (?, ?, ?, ?, ?, ?, ?, ?)",
            (ts, str(status), int(season), str(expiration), int(daily), int(weekly), int(battlepass), str(error)[:500]),
        )
        con.commit()
    finally:
        con.close()


def load_history(limit: int = 10, db_path: Optional[Path] = None) -> list[dict]:
    init_history(db_path)
    con = _con(db_path)
    try:
        cur = con.execute(
            "SELECT ts, status, season, expiration, daily, weekly, battlepass, error "
            "FROM generation_history ORDER BY id DESC LIMIT ?",
            (int(limit),),
        )
        return [dict(row) for row in cur.fetchall()]
    finally:
        con.close()
