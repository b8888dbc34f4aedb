from __future__ import annotations

import argparse
import asyncio
import json
import random
import sys
from pathlib import Path

from dotenv import load_dotenv


def run(args: argparse.Namespace) -> int:
    root = Path(__file__).resolve().parents[1]
    if str(root) not in sys.path:
        sys.path.insert(0, str(root))
    load_dotenv(root / ".env")

    from itemshop.catalog import fetch_catalog, load_catalog_file
    from itemshop.errors import GenerationError
    from itemshop.logging_setup import setup_logging
    from itemshop.shop import ShopPublisher, generate

    setup_logging()

    if args.catalog_file:
        catalog_path = Path(args.catalog_file)

        async def fetch():
            return await asyncio.to_thread(load_catalog_file, catalog_path)
    else:
        fetch = fetch_catalog

    try:
        shop = asyncio.run(
            generate(
                ShopPublisher(),
                season=args.season,
                fetch=fetch,
                rng=random.Random(args.seed) if args.seed is not None else None,
            )
        )
    except GenerationError as e:
        print(f"FAILED {e}", file=sys.stderr)
        return 1

    doc = json.dumps(shop.to_dict(), ensure_ascii=False, indent=2)
    if args.out:
        Path(args.out).write_text(doc + "\n", encoding="utf-8")
        for sf in shop.storefronts:
            print(f"OK {sf.name}={len(sf.catalog_entries)}")
    else:
        print(doc)
    return 0


def main() -> None:
    parser = argparse.ArgumentParser(description="Run one shop generation pass and print the shop document.")
    parser.add_argument("--season", type=int, default=None, help="Season to generate for (default: CURRENT_SEASON)")
    parser.add_argument("--catalog-file", default="", help="Read the cosmetic feed from a local JSON file")
    parser.add_argument("--seed", type=int, default=None, help="Seed for reproducible rotations")
    parser.add_argument("--out", default="", help="Write the shop document here instead of stdout")
    args = parser.parse_args()
    sys.exit(run(args))


if __name__ == "__main__":
    main()
