"""
In-memory store of per-user settings documents.

Every user id maps to one settings document. Reads of an unknown id return the
defaults; writes are merged onto the defaults according to the store's merge
policy. Each read-modify-write runs under the lock of the user's stripe, so
concurrent writers for the same user never lose each other's changes. Reads
take no lock.
"""
import copy
import threading
from enum import Enum
from typing import Any, Dict, List, Union

SettingsDict = Dict[str, Any]

LOCK_STRIPES = 64

DEFAULT_SETTINGS: SettingsDict = {
    "displayDark": False,
    "notifications": {
        "email": {
            "daily": "enabled",
        },
        "mobilepush": {
            "app_dm": "disabled",
            "app_ads": "disabled",
        },
    },
}


def default_settings() -> SettingsDict:
    """Fresh, independent copy of the default document."""
    return copy.deepcopy(DEFAULT_SETTINGS)


class MergePolicy(str, Enum):
    """How a written document is combined with the defaults.

    SHALLOW: top-level keys of the new document replace the defaults wholesale,
        so a replace without ``notifications`` reverts them to the defaults.
    DEEP: nested mappings are merged key by key onto the defaults.
    REPLACE: the document is kept as written; only missing top-level keys are
        filled from the defaults.
    """
    SHALLOW = "shallow"
    DEEP = "deep"
    REPLACE = "replace"


def _deep_merge(base: SettingsDict, override: SettingsDict) -> SettingsDict:
    merged = dict(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def merge_with_defaults(document: SettingsDict, policy: MergePolicy = MergePolicy.SHALLOW) -> SettingsDict:
    """Combine ``document`` with the defaults, returning a new dict."""
    defaults = default_settings()
    document = copy.deepcopy(document)

    if policy == MergePolicy.DEEP:
        return _deep_merge(defaults, document)

    if policy == MergePolicy.REPLACE:
        merged = dict(document)
        for key, value in defaults.items():
            merged.setdefault(key, value)
        return merged

    return {**defaults, **document}


class SettingsStore:
    """Keyed settings documents with default fallback and merge-on-write."""

    def __init__(self, policy: Union[MergePolicy, str] = MergePolicy.SHALLOW):
        self.policy = MergePolicy(policy)
        self._documents: Dict[str, SettingsDict] = {}
        self._locks: List[threading.Lock] = [threading.Lock() for _ in range(LOCK_STRIPES)]

    def _lock_for(self, user_id: str) -> threading.Lock:
        # Same id always maps to the same stripe
        return self._locks[hash(user_id) % LOCK_STRIPES]

    def _current(self, user_id: str) -> SettingsDict:
        # Stored documents are replaced, never mutated in place
        stored = self._documents.get(user_id)
        if stored is None:
            return default_settings()
        return copy.deepcopy(stored)

    def get(self, user_id: str) -> SettingsDict:
        """Stored document for ``user_id``, or the defaults if none exists."""
        return self._current(user_id)

    def put(self, user_id: str, document: SettingsDict) -> SettingsDict:
        """Merge ``document`` onto the defaults and store it for ``user_id``."""
        merged = merge_with_defaults(document, self.policy)
        with self._lock_for(user_id):
            self._documents[user_id] = merged
            return copy.deepcopy(merged)

    def set_field(self, user_id: str, channel: str, mode: str, value: Union[str, bool]) -> SettingsDict:
        """Set ``notifications[channel][mode]`` and store the whole document."""
        with self._lock_for(user_id):
            current = {**default_settings(), **self._current(user_id)}
            notifications = current.setdefault("notifications", {})
            notifications.setdefault(channel, {})[mode] = value
            self._documents[user_id] = current
            return copy.deepcopy(current)

    def __contains__(self, user_id: str) -> bool:
        return user_id in self._documents

    def __len__(self) -> int:
        return len(self._documents)
