import random

from factories import hero_path, make_record

from itemshop.catalog import build_index
from itemshop.context import GenerationContext
from itemshop.entries import build_entry


def _ctx(records, assets=None):
    index = build_index(records, current_season=10)
    return GenerationContext(index=index, display_assets=assets or {}, season=10, rng=random.Random(1))


def test_daily_entry_shape():
    ctx = _ctx([make_record("Pickaxe_1", ctype="AthenaPickaxe", rarity="Rare")])

    entry = build_entry(ctx, ctx.index.items["Pickaxe_1"], "Daily", "Small")
    doc = entry.to_dict()

    assert doc["offerId"].startswith(":/")
    assert doc["offerType"] == "StaticPrice"
    assert doc["refundable"] is True
    assert doc["devName"] == "[VIRTUAL] 1x AthenaPickaxe:Pickaxe_1 for 800 MtxCurrency"
    assert doc["displayAssetPath"] == "/Game/Catalog/DisplayAssets/DA_Daily_Pickaxe_1.DA_Daily_Pickaxe_1"
    assert doc["NewDisplayAssetPath"] == ""
    assert doc["itemGrants"] == [{"templateId": "AthenaPickaxe:Pickaxe_1", "quantity": 1}]
    assert doc["requirements"] == [
        {"requirementType": "DenyOnItemOwnership", "requiredId": "AthenaPickaxe:Pickaxe_1", "minQuantity": 1}
    ]

    (price,) = doc["prices"]
    assert price["currencyType"] == "MtxCurrency"
    assert price["basePrice"] == price["regularPrice"] == price["finalPrice"] == 800


def test_meta_bag_and_meta_info_match():
    ctx = _ctx([make_record("Glider_1", ctype="AthenaGlider")])

    doc = build_entry(ctx, ctx.index.items["Glider_1"], "Featured", "Normal").to_dict()

    assert {m["key"]: m["value"] for m in doc["metaInfo"]} == doc["meta"]
    assert set(doc["meta"]) == {"DisplayAssetPath", "NewDisplayAssetPath", "TileSize", "SectionId"}
    assert doc["meta"]["TileSize"] == "Normal"
    assert doc["meta"]["SectionId"] == "Featured"
    assert doc["offerId"].startswith("v2:/")


def test_backpack_adds_second_grant_and_requirement():
    ctx = _ctx([
        make_record("CID_001"),
        make_record("BID_001", ctype="AthenaBackpack", hero=hero_path("CID_001")),
    ])

    doc = build_entry(ctx, ctx.index.items["CID_001"], "Daily", "Small").to_dict()

    grants = [g["templateId"] for g in doc["itemGrants"]]
    required = [r["requiredId"] for r in doc["requirements"]]
    assert grants == ["AthenaCharacter:CID_001", "AthenaBackpack:BID_001"]
    assert required == grants
    assert doc["giftInfo"]["purchaseRequirements"] == doc["requirements"]
    assert doc["giftInfo"]["bIsEnabled"] is True
    assert doc["giftInfo"]["giftRecordIds"] == []


def test_resolved_asset_is_reused_only_for_matching_section():
    ctx = _ctx([make_record("CID_001")], assets={"CID_001": "DA_Featured_CID_001"})
    item = ctx.index.items["CID_001"]

    weekly = build_entry(ctx, item, "Featured", "Normal")
    daily = build_entry(ctx, item, "Daily", "Small")

    assert weekly.display_asset_path == "/Game/Catalog/DisplayAssets/DA_Featured_CID_001.DA_Featured_CID_001"
    assert daily.display_asset_path == "/Game/Catalog/DisplayAssets/DA_Daily_CID_001.DA_Daily_CID_001"
    assert daily.new_display_asset_path == "DA_Featured_CID_001"


def test_unpriced_item_yields_no_entry():
    ctx = _ctx([make_record("Spray_1", ctype="AthenaSpray")])

    assert build_entry(ctx, ctx.index.items["Spray_1"], "Daily", "Small") is None


def test_offer_ids_are_unique():
    ctx = _ctx([make_record("CID_001")])
    item = ctx.index.items["CID_001"]

    ids = {build_entry(ctx, item, "Daily", "Small").offer_id for _ in range(50)}

    assert len(ids) == 50
