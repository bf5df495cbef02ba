# moviecat/common/naming/slugger.py
from __future__ import annotations

import re
import unicodedata

_slug_re = re.compile(r"[^a-z0-9]+")
_slug_re_unicode = re.compile(r"\s+")


def slugify(text: str, *, max_len: int = 96, allow_unicode: bool = False) -> str:
    """
    Deterministic, human-readable slug:
      - lowercases
      - NFKD normalize; optionally strip to ASCII if allow_unicode=False
      - collapse separators to single '-'
      - trim leading/trailing '-'
      - truncate to `max_len`
      - returns '' if nothing remains

    Examples:
      "The Matrix" -> "the-matrix"
      "  Amélie!! " -> "amelie"
      "Se7en: Director's Cut" -> "se7en-director-s-cut"
    """
    if text is None:
        return ""

    value = str(text).strip().lower()

    if allow_unicode:
        value = unicodedata.normalize("NFKC", value)
        value = _slug_re_unicode.sub("-", value)
        value = value.strip("-")
    else:
        value = unicodedata.normalize("NFKD", value)
        value = value.encode("ascii", "ignore").decode("ascii")
        value = _slug_re.sub("-", value).strip("-")

    if max_len > 0 and len(value) > max_len:
        value = value[:max_len].rstrip("-")

    return value


def movie_slug(title: str, year_of_release: int) -> str:
    """
    Alternate lookup key for a movie: "<slugified title>-<year>".

      ("Inception", 2010) -> "inception-2010"

    Titles with no ASCII-representable characters fall back to a unicode slug,
    so the result is never just "-<year>".
    """
    base = slugify(title) or slugify(title, allow_unicode=True)
    return f"{base}-{int(year_of_release)}" if base else str(int(year_of_release))
