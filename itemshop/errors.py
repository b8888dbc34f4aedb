# itemshop/errors.py
"""Failures that abort a generation pass.

Anything raised from here propagates out of ``generate()``; the live shop
is left untouched.
"""

from __future__ import annotations


class GenerationError(RuntimeError):
    pass


class CatalogFetchError(GenerationError):
    def __init__(self, url: str, detail: str) -> None:
        self.url = url
        self.detail = detail
        super().__init__(f"Catalog fetch failed ({url}): {detail}")


class BattlePassLoadError(GenerationError):
    def __init__(self, path: str, detail: str) -> None:
        self.path = path
        self.detail = detail
        super().__init__(f"Battle pass storefront unavailable ({path}): {detail}")


class InsufficientItemsError(GenerationError):
    """A rotation ran out of eligible items or attempts before reaching its target."""

    def __init__(self, rotation: str, target: int, produced: int) -> None:
        self.rotation = rotation
        self.target = target
        self.produced = produced
        super().__init__(
            f"Not enough eligible items for {rotation} rotation: produced {produced} of {target}"
        )
