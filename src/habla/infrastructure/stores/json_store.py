"""
JSON Progress Store — Infrastructure adapter for a local JSON file.

Implements ProgressStore by keeping every record in a single file:

    {"version": 1, "progress": {"<phrase_id>": {...record...}}}
"""

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any

from habla.domain.models import ProgressRecord
from habla.domain.ports import ProgressStore

logger = logging.getLogger(__name__)

FORMAT_VERSION = 1


class JsonProgressStore(ProgressStore):
    """
    Persists progress records to a JSON file.

    The file is re-read on every call, so several processes may share it
    as long as reviews are not recorded concurrently. A missing file is an
    empty store; a corrupt file raises json.JSONDecodeError.
    """

    def __init__(self, path: Path):
        self.path = Path(path)

    async def get_progress(self, phrase_id: int) -> ProgressRecord | None:
        raw = self._read().get(str(phrase_id))
        return ProgressRecord.from_dict(raw) if raw else None

    async def save_progress(self, record: ProgressRecord) -> None:
        data = self._read()
        data[str(record.phrase_id)] = record.to_dict()
        self._write(data)

    async def get_all_progress(self) -> list[ProgressRecord]:
        return [ProgressRecord.from_dict(raw) for raw in self._read().values()]

    async def clear_all(self) -> None:
        self._write({})
        logger.info(f"Cleared all progress in {self.path}")

    def _read(self) -> dict[str, Any]:
        if not self.path.exists():
            return {}

        try:
            doc = json.loads(self.path.read_text(encoding="utf-8"))
        except json.JSONDecodeError:
            logger.error(f"Progress file is not valid JSON: {self.path}")
            raise

        if not isinstance(doc, dict):
            raise ValueError(f"Unexpected progress file layout in {self.path}")

        version = doc.get("version", FORMAT_VERSION)
        if version != FORMAT_VERSION:
            logger.warning(f"Progress file {self.path} has version {version}, expected {FORMAT_VERSION}")

        progress = doc.get("progress", {})
        if not isinstance(progress, dict):
            raise ValueError(f"Unexpected progress file layout in {self.path}")
        return progress

    def _write(self, progress: dict[str, Any]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        payload = json.dumps({"version": FORMAT_VERSION, "progress": progress}, indent=2)

        # Write to a sibling temp file and swap it in
        fd, tmp_name = tempfile.mkstemp(dir=self.path.parent, prefix=".progress-", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(payload)
            os.replace(tmp_name, self.path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise
