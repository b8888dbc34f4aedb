# itemshop/context.py
from __future__ import annotations

import random
from dataclasses import dataclass, field

from itemshop import config
from itemshop.catalog import CatalogIndex


@dataclass
class GenerationContext:
    """Everything one generation pass reads. Built fresh for every pass."""

    index: CatalogIndex
    display_assets: dict[str, str] = field(default_factory=dict)
    season: int = config.CURRENT_SEASON
    rng: random.Random = field(default_factory=random.Random)
    max_attempts: int = config.MAX_SELECTION_ATTEMPTS
