"""Loading and lookup of the phrase catalog."""

import json
import logging
from collections.abc import Iterable
from pathlib import Path
from typing import Any

import yaml  # type: ignore

from habla.domain.models import Category, Phrase

logger = logging.getLogger(__name__)

_PHRASE_FIELDS = {"id", "text", "english", "category", "emoji", "image"}


class PhraseCatalog:
    """
    Read-only phrase collection in authored order, with id lookup.
    """

    def __init__(self, phrases: Iterable[Phrase], categories: Iterable[Category] = ()):
        self._phrases = list(phrases)
        self._categories = list(categories)
        self._by_id: dict[int, Phrase] = {}
        for phrase in self._phrases:
            if phrase.id in self._by_id:
                raise ValueError(f"Duplicate phrase id: {phrase.id}")
            self._by_id[phrase.id] = phrase
        self._categories_by_id = {c.id: c for c in self._categories}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "PhraseCatalog":
        if not isinstance(data, dict):
            raise ValueError("Phrase data must be a mapping with a 'phrases' list")

        raw_phrases = data.get("phrases") or []
        if not isinstance(raw_phrases, list):
            raise ValueError("'phrases' must be a list")

        phrases = [_parse_phrase(i, raw) for i, raw in enumerate(raw_phrases)]
        categories = [
            Category(id=str(c["id"]), name=c.get("name", str(c["id"])), color=c.get("color"))
            for c in data.get("categories") or []
            if isinstance(c, dict) and "id" in c
        ]
        return cls(phrases, categories)

    @classmethod
    def from_file(cls, path: Path) -> "PhraseCatalog":
        """Load from a JSON file, or YAML for any other suffix."""
        content = path.read_text(encoding="utf-8")
        if path.suffix.lower() == ".json":
            data = json.loads(content)
        else:
            data = yaml.safe_load(content)
        catalog = cls.from_dict(data or {})
        logger.info(f"Loaded {len(catalog)} phrases from {path}")
        return catalog

    def __len__(self) -> int:
        return len(self._phrases)

    @property
    def phrases(self) -> list[Phrase]:
        return self._phrases

    @property
    def categories(self) -> list[Category]:
        return self._categories

    def get(self, phrase_id: int) -> Phrase | None:
        return self._by_id.get(phrase_id)

    def by_category(self, category_id: str) -> list[Phrase]:
        return [p for p in self._phrases if p.category == category_id]

    def get_category(self, category_id: str) -> Category | None:
        return self._categories_by_id.get(category_id)


def _parse_phrase(index: int, raw: Any) -> Phrase:
    if not isinstance(raw, dict):
        raise ValueError(f"Phrase #{index} is not a mapping")
    if "id" not in raw or "text" not in raw:
        raise ValueError(f"Phrase #{index} is missing 'id' or 'text'")

    try:
        phrase_id = int(raw["id"])
    except (TypeError, ValueError) as e:
        raise ValueError(f"Phrase #{index} has a non-integer id: {raw['id']!r}") from e

    return Phrase(
        id=phrase_id,
        text=str(raw["text"]),
        english=raw.get("english"),
        category=raw.get("category"),
        emoji=raw.get("emoji"),
        image=raw.get("image"),
        metadata={k: v for k, v in raw.items() if k not in _PHRASE_FIELDS},
    )
