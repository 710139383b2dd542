import re
import unicodedata

from habla.domain.constants import PUNCTUATION

# ---------- Normalization ----------

_PUNCTUATION_RE = re.compile("[" + re.escape(PUNCTUATION) + "]")
_WHITESPACE_RE = re.compile(r"\s+")
_COMBINING_MARKS_RE = re.compile("[\u0300-\u036f]")


def normalize(text: str | None) -> str:
    """Prepare text for comparison.

    Lowercases, trims, strips punctuation without leaving a gap
    ("don't" -> "dont") and collapses runs of whitespace.
    None is treated as an empty string.
    """
    if not text:
        return ""

    out = text.lower().strip()
    out = _PUNCTUATION_RE.sub("", out)
    out = _WHITESPACE_RE.sub(" ", out)
    return out.strip()


def remove_accents(text: str) -> str:
    """Fold accented letters to their base letter ("adiós" -> "adios", "ñ" -> "n")."""
    decomposed = unicodedata.normalize("NFD", text)
    return _COMBINING_MARKS_RE.sub("", decomposed)
