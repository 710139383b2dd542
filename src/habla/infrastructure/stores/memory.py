from habla.domain.models import ProgressRecord
from habla.domain.ports import ProgressStore


class InMemoryProgressStore(ProgressStore):
    """Dictionary-backed store; contents are lost with the process."""

    def __init__(self, records: list[ProgressRecord] | None = None):
        self._data: dict[int, ProgressRecord] = {r.phrase_id: r for r in records or []}

    async def get_progress(self, phrase_id: int) -> ProgressRecord | None:
        return self._data.get(phrase_id)

    async def save_progress(self, record: ProgressRecord) -> None:
        self._data[record.phrase_id] = record

    async def get_all_progress(self) -> list[ProgressRecord]:
        return list(self._data.values())

    async def clear_all(self) -> None:
        self._data.clear()
