from __future__ import annotations

import re
from typing import List

# Lucene query syntax characters that must be escaped inside a term
_LUCENE_SPECIAL = re.compile(r'([+\-!(){}\[\]^"~*?:\\/]|&&|\|\|)')
# word boundaries of the standard analyzer; apostrophes stay inside a word
_WORD = re.compile(r"\w+(?:'\w+)*")


def csv_to_list(v: str | List[str] | None) -> List[str]:
    if v is None:
        return []
    if isinstance(v, list):
        return [s.strip() for s in v if s and str(s).strip()]
    return [s.strip() for s in str(v).split(",") if s.strip()]


def normalize_name(s: str | None) -> str:
    # best-effort normalization: lowercase + collapse whitespace
    return " ".join((s or "").lower().split())


def escape_lucene(term: str) -> str:
    return _LUCENE_SPECIAL.sub(r"\\\1", term)


def fulltext_query(q: str | None) -> str:
    """
    Turn free text into a Lucene query for a Neo4j full-text index.

    Lucene does not analyze prefix terms, so the text is split the way the
    standard analyzer splits it (punctuation as well as whitespace). Every
    word becomes a prefix term and all words must match:
      "keanu  REE"    -> "keanu* AND ree*"
      "Carrie-Anne"   -> "carrie* AND anne*"
      "o'brien (jr)"  -> "o'brien* AND jr*"
    Returns '' when nothing remains (caller lists instead of searching).
    """
    tokens = _WORD.findall(normalize_name(q))
    return " AND ".join(f"{escape_lucene(t)}*" for t in tokens)
