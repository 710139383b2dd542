"""
Ports (interfaces) for progress persistence.

These define the contract that infrastructure adapters must implement.
Application services depend on these abstractions, not concrete implementations.
"""

from abc import ABC, abstractmethod

from .models import ProgressRecord


class ProgressStore(ABC):
    """
    Port for reading and writing per-phrase progress records.

    Implementations:
        - InMemoryProgressStore: Dictionary-backed, for tests and throwaway sessions.
        - JsonProgressStore: Persists records to a JSON file.
    """

    @abstractmethod
    async def get_progress(self, phrase_id: int) -> ProgressRecord | None:
        """
        Point lookup of a single record.

        Returns:
            The record, or None if the phrase was never reviewed.
        """
        pass

    @abstractmethod
    async def save_progress(self, record: ProgressRecord) -> None:
        """Insert or replace the record keyed by its phrase_id."""
        pass

    @abstractmethod
    async def get_all_progress(self) -> list[ProgressRecord]:
        """
        Full snapshot of all records.

        Order is not significant; callers sort as needed.
        """
        pass

    @abstractmethod
    async def clear_all(self) -> None:
        """Delete every record."""
        pass
