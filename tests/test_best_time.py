"""Tests for the best-time cache and its stores."""

import json
import tempfile
from pathlib import Path
from unittest.mock import Mock

import pytest

from playzzle.best_time import (
    NO_BEST_TIME,
    BestTimeCache,
    JsonBestTimeStore,
    MemoryBestTimeStore,
    best_time_key,
)


@pytest.fixture
def temp_dir():
    """Create a temporary directory."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


class TestBestTimeKey:
    def test_key_format(self):
        assert best_time_key("slide", 4) == "slide-4"
        assert best_time_key("jigsaw", 12) == "jigsaw-12"


class TestBestTimeCache:
    """Tests for conditional best-time writes."""

    def test_read_without_record(self):
        cache = BestTimeCache(MemoryBestTimeStore())

        assert cache.read("slide", 3) is None
        assert cache.formatted("slide", 3) == NO_BEST_TIME

    def test_first_write_is_accepted(self):
        cache = BestTimeCache(MemoryBestTimeStore())

        assert cache.write("slide", 3, 90)
        assert cache.read("slide", 3) == 90
        assert cache.formatted("slide", 3) == "01:30"

    def test_faster_time_replaces_record(self):
        cache = BestTimeCache(MemoryBestTimeStore())
        cache.write("jigsaw", 4, 120)

        assert cache.write("jigsaw", 4, 100)
        assert cache.read("jigsaw", 4) == 100

    def test_slower_time_is_rejected(self):
        """Test that a rejected write leaves the previous best in place."""
        cache = BestTimeCache(MemoryBestTimeStore())
        cache.write("jigsaw", 4, 100)

        assert not cache.write("jigsaw", 4, 150)
        assert cache.read("jigsaw", 4) == 100

    def test_equal_time_is_rejected(self):
        cache = BestTimeCache(MemoryBestTimeStore())
        cache.write("jigsaw", 4, 100)

        assert not cache.write("jigsaw", 4, 100)

    def test_records_are_per_type_and_difficulty(self):
        cache = BestTimeCache(MemoryBestTimeStore())
        cache.write("slide", 3, 50)

        assert cache.read("slide", 4) is None
        assert cache.read("jigsaw", 3) is None

    def test_zero_seconds_is_a_record(self):
        cache = BestTimeCache(MemoryBestTimeStore())
        cache.write("slide", 3, 0)

        assert cache.read("slide", 3) == 0
        assert not cache.write("slide", 3, 5)

    def test_no_store_degrades_to_no_best_time(self):
        cache = BestTimeCache(None)

        assert cache.read("slide", 3) is None
        assert not cache.write("slide", 3, 10)
        assert cache.formatted("slide", 3) == NO_BEST_TIME

    def test_failing_store_is_swallowed(self):
        """Test that store errors never escape the cache."""
        store = Mock()
        store.read.side_effect = OSError("unavailable")
        store.write.side_effect = OSError("unavailable")
        cache = BestTimeCache(store)

        assert cache.read("slide", 3) is None
        assert not cache.write("slide", 3, 10)


class TestJsonBestTimeStore:
    """Tests for the JSON file store."""

    def test_missing_file_has_no_records(self, temp_dir):
        store = JsonBestTimeStore(temp_dir / "best.json")

        assert store.read("slide", 3) is None

    def test_write_and_read_back(self, temp_dir):
        path = temp_dir / "nested" / "best.json"
        store = JsonBestTimeStore(path)

        store.write("slide", 3, 42)
        store.write("jigsaw", 5, 300)

        with open(path) as f:
            data = json.load(f)

        assert data == {"slide-3": 42, "jigsaw-5": 300}
        assert JsonBestTimeStore(path).read("jigsaw", 5) == 300

    def test_corrupt_file_degrades_through_cache(self, temp_dir):
        path = temp_dir / "best.json"
        path.write_text("not json")
        cache = BestTimeCache(JsonBestTimeStore(path))

        assert cache.read("slide", 3) is None
        assert not cache.write("slide", 3, 10)

    def test_non_object_file_is_rejected(self, temp_dir):
        path = temp_dir / "best.json"
        path.write_text("[1, 2, 3]")

        with pytest.raises(ValueError):
            JsonBestTimeStore(path).read("slide", 3)

    def test_non_numeric_record_is_ignored(self, temp_dir):
        """Test that a hand-edited value is treated as no record and replaced."""
        path = temp_dir / "best.json"
        path.write_text(json.dumps({"slide-3": "fast", "slide-4": True}))
        cache = BestTimeCache(JsonBestTimeStore(path))

        assert cache.read("slide", 3) is None
        assert cache.formatted("slide", 3) == NO_BEST_TIME
        assert cache.read("slide", 4) is None

        assert cache.write("slide", 3, 75)
        assert cache.read("slide", 3) == 75
