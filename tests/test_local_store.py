"""Tests for the JSON score file."""

import json

from santa_rush.config.settings import ScoreSettings, Settings
from santa_rush.scores.models import ScoreEntry
from santa_rush.scores.remote import RemoteScoreStore
from santa_rush.scores.store import LocalScoreStore, create_score_store


class TestHighScore:

    def test_missing_file_is_zero(self, local_store):
        assert local_store.get_high_score() == 0

    def test_only_higher_scores_are_saved(self, local_store):
        assert local_store.save_high_score(10)
        assert not local_store.save_high_score(5)
        assert not local_store.save_high_score(10)
        assert local_store.get_high_score() == 10

    def test_survives_reopen(self, tmp_path):
        path = tmp_path / "nested" / "scores.json"
        LocalScoreStore(path).save_high_score(33)
        assert LocalScoreStore(path).get_high_score() == 33

    def test_corrupt_file_is_replaced(self, local_store):
        local_store.path.write_text("{not json", encoding="utf-8")
        assert local_store.get_high_score() == 0
        assert local_store.save_high_score(3)
        assert json.loads(local_store.path.read_text(encoding="utf-8"))["high_score"] == 3

    def test_non_object_file_is_ignored(self, local_store):
        local_store.path.write_text("[1, 2, 3]", encoding="utf-8")
        assert local_store.get_high_score() == 0


class TestEntries:

    async def test_submit_keeps_best_entries(self, tmp_path):
        store = LocalScoreStore(tmp_path / "scores.json", keep=3)
        for score in [5, 1, 9, 3, 7]:
            result = await store.submit_score("Vixen", score, 1)
            assert result.success
            assert not result.remote

        assert [e.score for e in await store.get_leaderboard(10)] == [9, 7, 5]

    async def test_blank_name_is_anonymous(self, local_store):
        result = await local_store.submit_score("", 4, 0)
        assert result.entry.player_name == "Anonymous"

    def test_bad_rows_are_skipped(self, local_store):
        local_store.path.write_text(json.dumps({
            "high_score": 2,
            "scores": [{"score": "lots"}, {"playerName": "Comet", "score": 4}, "junk"],
        }), encoding="utf-8")

        entries = local_store.top()

        assert [(e.player_name, e.score) for e in entries] == [("Comet", 4)]
        assert local_store.get_high_score() == 2

    def test_file_uses_camel_case(self, local_store):
        local_store.add_entry(ScoreEntry(player_name="Dasher", score=8, followers=2))
        row = json.loads(local_store.path.read_text(encoding="utf-8"))["scores"][0]
        assert row["playerName"] == "Dasher"
        assert row["followers"] == 2
        assert "id" not in row


def test_entry_from_dict_defaults():
    entry = ScoreEntry.from_dict({"score": "12"})
    assert entry.player_name == "Anonymous"
    assert entry.score == 12
    assert entry.followers == 0
    assert entry.id is None


def test_create_score_store(tmp_path):
    settings = Settings(scores=ScoreSettings(local_path=tmp_path / "s.json", api_url="http://example.test/api/"))
    store = create_score_store(settings)
    assert isinstance(store, RemoteScoreStore)
    assert store.fallback.path == tmp_path / "s.json"
    assert not store.backend_available
