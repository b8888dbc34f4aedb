import pytest

from factories import BATTLEPASS_DOC, write_json

from itemshop.battlepass import battlepass_path, load_battlepass_entries
from itemshop.errors import BattlePassLoadError


def test_path_is_keyed_by_season(tmp_path):
    assert battlepass_path(12, tmp_path) == tmp_path / "BRSeason12.json"


def test_entries_are_returned_verbatim(tmp_path):
    path = write_json(tmp_path / "BRSeason10.json", BATTLEPASS_DOC)

    assert load_battlepass_entries(path) == BATTLEPASS_DOC["catalogEntries"]


def test_missing_file_is_fatal(tmp_path):
    with pytest.raises(BattlePassLoadError) as exc:
        load_battlepass_entries(tmp_path / "BRSeason99.json")
    assert "BRSeason99.json" in exc.value.path


@pytest.mark.parametrize("content", ["{broken", "[]", '{"catalogEntries": {}}', '{"catalogEntries": [1]}'])
def test_corrupt_file_is_fatal(tmp_path, content):
    path = tmp_path / "BRSeason10.json"
    path.write_text(content, encoding="utf-8")

    with pytest.raises(BattlePassLoadError):
        load_battlepass_entries(path)
