import random

import pytest

from factories import BATTLEPASS_DOC, full_set, hero_path, make_record, write_json

from itemshop.catalog import build_index
from itemshop.context import GenerationContext


@pytest.fixture
def catalog_records():
    """Mixed catalog: five complete sets plus a linked backpack and blocklisted items."""
    records = []
    for n in range(5):
        records.extend(full_set(f"Set{n}"))
    records.append(make_record("BID_001", ctype="AthenaBackpack", set_id="Set0", rarity="Rare", hero=hero_path("Set0_0")))
    records.append(make_record("Contrail_1", ctype="AthenaSkyDiveContrail", set_id="Misc"))
    records.append(make_record("Music_1", ctype="AthenaMusicPack", set_id="Misc"))
    records.append(make_record("Toy_1", ctype="AthenaToy", set_id="Misc"))
    for n in range(6):
        records.append(make_record(f"EID_{n}", ctype="AthenaDance", set_id="Dances", rarity="Rare"))
    return records


@pytest.fixture
def index(catalog_records):
    return build_index(catalog_records, current_season=10)


@pytest.fixture
def ctx(index):
    return GenerationContext(index=index, display_assets={}, season=10, rng=random.Random(7))


@pytest.fixture
def data_dir(tmp_path):
    write_json(tmp_path / "display_assets.json", {"a": "DAv2_Set1_0", "b": "DA_Featured_Set2_1"})
    write_json(tmp_path / "storefront" / "BRSeason10.json", BATTLEPASS_DOC)
    return tmp_path
