"""Preference and state persistence."""

from .preferences import JsonPreferenceStore, MemoryPreferenceStore, PreferenceStore
from .state import PersistedState

__all__ = [
    "PreferenceStore",
    "MemoryPreferenceStore",
    "JsonPreferenceStore",
    "PersistedState",
]
