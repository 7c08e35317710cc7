"""
Tests for the JSON snapshot store.

Covers:
- Round trip of replace_all / load_all
- Missing snapshot vs corrupt snapshot
- Malformed entries dropped at load time
- Failed writes leave the previous snapshot intact
"""

import json
import os
import stat

import pytest

from ai_server.core.errors import IndexCorrupt
from ai_server.vector.store import EmbeddingIndexStore, EmbeddingRecord


class TestEmbeddingIndexStore:

    def test_missing_snapshot_loads_empty(self, store):
        assert not store.exists()
        assert store.load_all() == []

    def test_round_trip(self, store, records):
        written = store.replace_all(records)
        assert written == 2

        loaded = store.load_all()
        key = lambda r: r.entity_id
        assert sorted(loaded, key=key) == sorted(records, key=key)

    def test_file_format(self, store, records):
        store.replace_all(records)

        raw = json.loads(store.path.read_text(encoding="utf-8"))
        assert isinstance(raw, list)
        assert raw[0] == {
            "id": "1",
            "slug": "cho-ben-thanh",
            "name": "Chợ Bến Thành",
            "description": "market in district 1",
            "embedding": [1.0, 0.0],
        }

    def test_replace_overwrites_wholesale(self, store, records):
        store.replace_all(records)
        store.replace_all(records[:1])

        loaded = store.load_all()
        assert [r.entity_id for r in loaded] == ["1"]

    def test_no_temp_files_left(self, store, records):
        store.replace_all(records)
        leftovers = [p.name for p in store.path.parent.iterdir() if p.name != store.path.name]
        assert leftovers == []

    def test_creates_parent_dir(self, tmp_path, records):
        store = EmbeddingIndexStore(tmp_path / "nested" / "dir" / "embeddings.json")
        store.replace_all(records)
        assert len(store.load_all()) == 2

    def test_invalid_json_is_corrupt(self, store):
        store.path.write_text("[{not json", encoding="utf-8")
        with pytest.raises(IndexCorrupt) as exc_info:
            store.load_all()
        assert str(store.path) in str(exc_info.value)

    def test_non_array_is_corrupt(self, store):
        store.path.write_text('{"id": "1"}', encoding="utf-8")
        with pytest.raises(IndexCorrupt):
            store.load_all()

    def test_malformed_entries_dropped(self, store):
        store.path.write_text(
            json.dumps(
                [
                    {"id": "1", "slug": "a", "name": "A", "description": "x", "embedding": [1, 0]},
                    {"id": "2", "slug": "b", "name": "B", "description": "y"},  # no embedding
                    {"id": "3", "slug": "c", "name": "C", "description": "z", "embedding": []},
                    {"id": "4", "slug": "d", "name": "D", "embedding": ["abc"]},
                    "not an object",
                ]
            ),
            encoding="utf-8",
        )
        loaded = store.load_all()
        assert [r.entity_id for r in loaded] == ["1"]
        assert loaded[0].vector == [1.0, 0.0]

    def test_coerces_numeric_id_and_null_description(self, store):
        store.path.write_text(
            json.dumps([{"id": 42, "slug": "x", "name": "X", "description": None, "embedding": [0.5]}]),
            encoding="utf-8",
        )
        (record,) = store.load_all()
        assert record.entity_id == "42"
        assert record.source_text == ""

    def test_failed_write_keeps_previous_snapshot(self, store, records, monkeypatch):
        store.replace_all(records)
        before = store.path.read_text(encoding="utf-8")

        def boom(*args, **kwargs):
            raise OSError("disk full")

        monkeypatch.setattr("ai_server.vector.store.os.replace", boom)

        with pytest.raises(OSError):
            store.replace_all(records[:1])

        assert store.path.read_text(encoding="utf-8") == before
        leftovers = [p.name for p in store.path.parent.iterdir() if p.name != store.path.name]
        assert leftovers == []


class TestEmbeddingRecord:

    def test_aliases_and_field_names(self):
        by_alias = EmbeddingRecord.model_validate(
            {"id": "7", "slug": "s", "name": "N", "description": "d", "embedding": [1.0]}
        )
        by_name = EmbeddingRecord(
            entity_id="7", slug="s", display_name="N", source_text="d", vector=[1.0]
        )
        assert by_alias == by_name
        assert by_alias.dimension == 1


class TestSnapshotFileHandling:

    def test_unreadable_path_is_corrupt(self, store):
        store.path.mkdir()
        with pytest.raises(IndexCorrupt):
            store.load_all()

    @pytest.mark.skipif(os.name != "posix", reason="POSIX file modes")
    def test_new_snapshot_follows_umask(self, store, records):
        old_umask = os.umask(0o022)
        try:
            store.replace_all(records)
        finally:
            os.umask(old_umask)
        assert stat.S_IMODE(store.path.stat().st_mode) == 0o644

    @pytest.mark.skipif(os.name != "posix", reason="POSIX file modes")
    def test_rebuild_keeps_existing_mode(self, store, records):
        store.replace_all(records)
        store.path.chmod(0o640)

        store.replace_all(records[:1])

        assert stat.S_IMODE(store.path.stat().st_mode) == 0o640
