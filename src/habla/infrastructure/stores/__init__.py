# Infrastructure Progress Store Adapters Package
from .json_store import JsonProgressStore
from .memory import InMemoryProgressStore

__all__ = ["InMemoryProgressStore", "JsonProgressStore"]
