"""Persistence for word pairs and preferences."""

from .key_value import KeyValueStore, MemoryStore, JsonFileStore
from .word_store import WordStore
from .preferences import PreferenceStore

__all__ = [
    'KeyValueStore',
    'MemoryStore',
    'JsonFileStore',
    'WordStore',
    'PreferenceStore'
]
