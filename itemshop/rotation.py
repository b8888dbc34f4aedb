# itemshop/rotation.py
"""Daily and weekly rotations.

Candidates are drawn at random without replacement, so no item (daily) or
set (weekly) appears twice in one pass. Both loops are bounded by the pool
size and by ``ctx.max_attempts``.
"""

from __future__ import annotations

import logging
from collections import defaultdict

from itemshop import config
from itemshop.catalog import CatalogIndex
from itemshop.context import GenerationContext
from itemshop.entries import CatalogEntry, build_entry
from itemshop.errors import InsufficientItemsError

log = logging.getLogger("itemshop.rotation")


def select_daily(
    ctx: GenerationContext,
    size: int = config.DAILY_ENTRY_COUNT,
    character_cap: int = config.DAILY_CHARACTER_CAP,
) -> list[CatalogEntry]:
    order = list(ctx.index.items)
    ctx.rng.shuffle(order)

    entries: list[CatalogEntry] = []
    characters = 0
    attempts = 0

    for key in order:
        if attempts >= ctx.max_attempts:
            log.warning("Daily rotation hit the attempt limit (%s)", ctx.max_attempts)
            break
        attempts += 1

        item = ctx.index.items[key]
        ctype = item.type.backend_value
        if ctype in config.DAILY_BLOCKED_TYPES:
            continue

        entry = build_entry(ctx, item, config.SECTION_DAILY, config.TILE_SMALL)
        if entry is None:
            continue

        entries.append(entry)
        if ctype == config.TYPE_CHARACTER:
            characters += 1

        if len(entries) >= size or characters >= character_cap:
            break

    if not entries:
        raise InsufficientItemsError("daily", size, 0)
    if len(entries) < size and characters < character_cap:
        log.warning("Daily rotation is short: %s of %s entries after %s draws", len(entries), size, attempts)
    return entries


def count_complete_sets(entries: list[CatalogEntry], index: CatalogIndex) -> int:
    """Sets whose every member is granted by some entry tagged with the set id."""
    granted: dict[str, set[str]] = defaultdict(set)
    for entry in entries:
        if not entry.item_grants:
            continue
        for set_id in entry.categories:
            granted[set_id].add(entry.item_grants[0].template_id)

    complete = 0
    for set_id, templates in granted.items():
        members = index.set_members(set_id)
        if members and all(m.template_id in templates for m in members):
            complete += 1
    return complete


def select_weekly(
    ctx: GenerationContext,
    full_sets: int = config.WEEKLY_FULL_SET_TARGET,
) -> list[CatalogEntry]:
    order = list(ctx.index.sets)
    ctx.rng.shuffle(order)

    entries: list[CatalogEntry] = []
    complete = 0
    attempts = 0

    for set_id in order:
        if complete >= full_sets:
            break
        if attempts >= ctx.max_attempts:
            log.warning("Weekly rotation hit the attempt limit (%s)", ctx.max_attempts)
            break
        attempts += 1

        for item in ctx.index.set_members(set_id):
            entry = build_entry(ctx, item, config.SECTION_FEATURED, config.TILE_NORMAL)
            if entry is None:
                continue
            entry.categories.append(set_id)
            entries.append(entry)

        complete = count_complete_sets(entries, ctx.index)

    if complete < full_sets:
        log.warning(
            "Weekly rotation is short: %s of %s complete sets from %s sets tried",
            complete, full_sets, attempts,
        )
        raise InsufficientItemsError("weekly", full_sets, complete)
    return entries
