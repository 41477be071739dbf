"""Haiku record storage."""

from haikubot.store.memory import InMemoryHaikuStore
from haikubot.store.models import HaikuRecord, HaikuStore, StoreError
from haikubot.store.sqlite import SqliteHaikuStore

__all__ = [
    "HaikuRecord",
    "HaikuStore",
    "InMemoryHaikuStore",
    "SqliteHaikuStore",
    "StoreError",
]
