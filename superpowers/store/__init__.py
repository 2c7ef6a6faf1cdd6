"""Record stores for agents, superpowers and knowledge documents."""

from superpowers.store.memory import InMemoryRecordStore
from superpowers.store.protocol import RecordStore
from superpowers.store.sql import InvalidReferenceError, SqlRecordStore

__all__ = [
    "RecordStore",
    "InMemoryRecordStore",
    "SqlRecordStore",
    "InvalidReferenceError",
]
