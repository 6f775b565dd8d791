"""Tests for the field metadata cache."""

import pytest
from unittest.mock import Mock

from jirakit.adapters.cache import FileMetadataStore
from jirakit.application.metadata import FieldMetadataCache
from jirakit.core.exceptions import FetchError
from jirakit.core.ports.issue_tracker import AuthenticationError

METADATA = {"projects": [{"key": "PROJ", "issuetypes": [{"name": "Story", "fields": {}}]}]}


@pytest.fixture
def tracker():
    tracker = Mock()
    tracker.fetch_createmeta.return_value = METADATA
    return tracker


@pytest.fixture
def store(tmp_path):
    return FileMetadataStore(tmp_path / "cache")


class TestFieldMetadataCache:
    """Tests for FieldMetadataCache.get_metadata."""

    def test_miss_fetches_and_stores(self, tracker, store, tmp_path):
        cache = FieldMetadataCache(tracker, store)

        assert cache.get_metadata("PROJ", "Story") == METADATA
        tracker.fetch_createmeta.assert_called_once_with("PROJ", "Story")
        assert (tmp_path / "cache" / "PROJ-Story.json").exists()

    def test_hit_does_not_fetch(self, tracker, store):
        store.write("PROJ", "Story", {"cached": True})
        cache = FieldMetadataCache(tracker, store)

        assert cache.get_metadata("PROJ", "Story") == {"cached": True}
        tracker.fetch_createmeta.assert_not_called()

    def test_second_call_uses_cache(self, tracker, store):
        cache = FieldMetadataCache(tracker, store)
        cache.get_metadata("PROJ", "Story")
        cache.get_metadata("PROJ", "Story")
        assert tracker.fetch_createmeta.call_count == 1

    def test_force_refresh(self, tracker, store):
        store.write("PROJ", "Story", {"stale": True})
        cache = FieldMetadataCache(tracker, store)

        assert cache.get_metadata("PROJ", "Story", force_refresh=True) == METADATA
        assert store.read("PROJ", "Story") == METADATA

    def test_empty_response(self, tracker, store):
        tracker.fetch_createmeta.return_value = {}
        cache = FieldMetadataCache(tracker, store)

        with pytest.raises(FetchError) as exc_info:
            cache.get_metadata("PROJ", "Story")
        assert "empty response" in str(exc_info.value)
        assert store.read("PROJ", "Story") is None

    def test_tracker_error_wrapped(self, tracker, store):
        tracker.fetch_createmeta.side_effect = AuthenticationError("bad token", status_code=401)
        cache = FieldMetadataCache(tracker, store)

        with pytest.raises(FetchError) as exc_info:
            cache.get_metadata("PROJ", "Story")

        error = exc_info.value
        assert error.status_code == 401
        assert error.project == "PROJ"
        assert error.issue_type == "Story"
        assert isinstance(error.cause, AuthenticationError)

    def test_cache_location(self, tracker, store, tmp_path):
        cache = FieldMetadataCache(tracker, store)
        assert cache.cache_location("PROJ", "Bug") == str(tmp_path / "cache" / "PROJ-Bug.json")
