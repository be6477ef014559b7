"""
Tests for the in-memory settings store.
"""
import threading
from concurrent.futures import ThreadPoolExecutor

import pytest

from userprefs.services.settings_store import (
    DEFAULT_SETTINGS,
    LOCK_STRIPES,
    MergePolicy,
    SettingsStore,
    default_settings,
    merge_with_defaults,
)


class TestSettingsStoreReads:
    """Reads fall back to defaults and never mutate."""

    def test_reads_leave_store_untouched(self, store):
        """Reading many unknown ids stores nothing and adds no locks."""
        for i in range(10000):
            store.get(f"ghost-{i}")

        assert len(store) == 0
        assert len(store._locks) == LOCK_STRIPES

    def test_lock_table_bounded_by_writes(self, store):
        for i in range(500):
            store.set_field(f"user-{i}", "email", "daily", "disabled")

        assert len(store) == 500
        assert len(store._locks) == LOCK_STRIPES

    def test_unknown_user_gets_defaults(self, store):
        assert store.get("42") == DEFAULT_SETTINGS
        assert "42" not in store

    def test_returned_document_is_a_copy(self, store):
        """Mutating what get() returns must not leak into the store or defaults."""
        doc = store.get("1")
        doc["notifications"]["email"]["daily"] = "disabled"
        doc["displayDark"] = True

        assert store.get("1") == DEFAULT_SETTINGS
        assert DEFAULT_SETTINGS["notifications"]["email"]["daily"] == "enabled"


class TestSettingsStorePut:
    """Full-document writes."""

    def test_put_shallow_merges_onto_defaults(self, store):
        result = store.put("1", {"displayDark": True})

        assert result["displayDark"] is True
        assert result["notifications"] == DEFAULT_SETTINGS["notifications"]
        assert store.get("1") == result

    def test_put_does_not_merge_onto_previous_document(self, store):
        """A replace without notifications reverts them to the defaults."""
        store.set_field("1", "email", "daily", "disabled")
        result = store.put("1", {"displayDark": True})

        assert result["notifications"]["email"]["daily"] == "enabled"

    def test_put_replaces_nested_matrix_wholesale(self, store):
        result = store.put("1", {"notifications": {"email": {"weekly": "enabled"}}})

        assert result["displayDark"] is False
        assert result["notifications"] == {"email": {"weekly": "enabled"}}

    def test_put_copies_input(self, store):
        doc = {"notifications": {"email": {"daily": "disabled"}}}
        store.put("1", doc)
        doc["notifications"]["email"]["daily"] = "enabled"

        assert store.get("1")["notifications"]["email"]["daily"] == "disabled"


class TestSettingsStoreSetField:
    """Single notification field writes."""

    def test_set_field_on_fresh_user(self, store):
        result = store.set_field("1", "email", "daily", "disabled")

        expected = default_settings()
        expected["notifications"]["email"]["daily"] = "disabled"
        assert result == expected
        assert store.get("1") == expected

    def test_set_field_keeps_other_fields(self, store):
        store.put("1", {"displayDark": True})
        store.set_field("1", "mobilepush", "app_ads", True)
        result = store.set_field("1", "email", "weekly", "enabled")

        assert result["displayDark"] is True
        assert result["notifications"]["mobilepush"]["app_ads"] is True
        assert result["notifications"]["mobilepush"]["app_dm"] == "disabled"
        assert result["notifications"]["email"] == {"daily": "enabled", "weekly": "enabled"}

    def test_set_field_never_touches_defaults(self, store):
        store.set_field("1", "email", "daily", "disabled")

        assert DEFAULT_SETTINGS["notifications"]["email"]["daily"] == "enabled"
        assert store.get("2") == DEFAULT_SETTINGS

    def test_set_field_is_idempotent(self, store):
        once = store.set_field("1", "mobilepush", "app_dm", "enabled")
        twice = store.set_field("1", "mobilepush", "app_dm", "enabled")

        assert once == twice

    def test_users_are_independent(self, store):
        store.set_field("a", "email", "daily", "disabled")
        store.put("a", {"displayDark": True, "notifications": {"email": {"daily": False}}})

        assert store.get("b") == DEFAULT_SETTINGS
        assert len(store) == 1


class TestSettingsStoreConcurrency:
    """Per-user read-modify-write must be atomic."""

    def test_concurrent_same_user_writes_all_land(self, store):
        modes = [f"mode_{i}" for i in range(50)]
        barrier = threading.Barrier(len(modes))

        def write(mode):
            barrier.wait()
            store.set_field("shared", "email", mode, "enabled")

        with ThreadPoolExecutor(max_workers=len(modes)) as pool:
            list(pool.map(write, modes))

        email = store.get("shared")["notifications"]["email"]
        for mode in modes:
            assert email[mode] == "enabled"
        assert email["daily"] == "enabled"

    def test_concurrent_writes_to_different_users(self, store):
        users = [str(i) for i in range(20)]

        with ThreadPoolExecutor(max_workers=8) as pool:
            list(pool.map(lambda uid: store.set_field(uid, "mobilepush", "owner", uid), users))

        for uid in users:
            assert store.get(uid)["notifications"]["mobilepush"]["owner"] == uid


class TestMergePolicies:
    """The merge policy is explicit and swappable."""

    def test_default_policy_is_shallow(self):
        assert SettingsStore().policy == MergePolicy.SHALLOW

    def test_policy_from_string(self):
        assert SettingsStore("deep").policy == MergePolicy.DEEP

    def test_unknown_policy_rejected(self):
        with pytest.raises(ValueError):
            SettingsStore("sideways")

    def test_deep_merge_keeps_nested_defaults(self):
        merged = merge_with_defaults(
            {"notifications": {"email": {"daily": "disabled"}}},
            MergePolicy.DEEP,
        )

        assert merged["notifications"]["email"]["daily"] == "disabled"
        assert merged["notifications"]["mobilepush"] == {"app_dm": "disabled", "app_ads": "disabled"}
        assert merged["displayDark"] is False

    def test_replace_keeps_document_as_written(self):
        merged = merge_with_defaults(
            {"notifications": {"email": {}}},
            MergePolicy.REPLACE,
        )

        assert merged == {"displayDark": False, "notifications": {"email": {}}}

    def test_deep_store_put(self):
        store = SettingsStore(MergePolicy.DEEP)
        result = store.put("1", {"notifications": {"mobilepush": {"app_ads": "enabled"}}})

        assert result["notifications"]["mobilepush"] == {"app_dm": "disabled", "app_ads": "enabled"}
        assert result["notifications"]["email"] == {"daily": "enabled"}
