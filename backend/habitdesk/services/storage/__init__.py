"""
Storage module
Key-value stores holding serialized habit lists, settings and reminder markers
"""
from .store import KeyValueStore, InMemoryStore, JsonFileStore, create_store

__all__ = ['KeyValueStore', 'InMemoryStore', 'JsonFileStore', 'create_store']
