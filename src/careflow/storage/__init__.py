"""Storage layer for patient, doctor and appointment profiles."""

from careflow.storage.base import ProfileStore
from careflow.storage.memory import InMemoryProfileStore
from careflow.storage.repository import SQLiteProfileStore

__all__ = ["InMemoryProfileStore", "ProfileStore", "SQLiteProfileStore"]
