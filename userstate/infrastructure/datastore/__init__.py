"""Preference store and storage adapters."""

from userstate.infrastructure.datastore.file_storage import JsonFilePreferenceStorage
from userstate.infrastructure.datastore.in_memory_storage import InMemoryPreferenceStorage
from userstate.infrastructure.datastore.mongo_storage import MongoPreferenceStorage
from userstate.infrastructure.datastore.preference_store import PreferenceStore

__all__ = [
    "InMemoryPreferenceStorage",
    "JsonFilePreferenceStorage",
    "MongoPreferenceStorage",
    "PreferenceStore",
]
