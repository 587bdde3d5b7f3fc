from __future__ import annotations

import re

from squadform.taxonomy import TaxonomyProvider

_TOKEN_PATTERN = re.compile(r"[a-z0-9+#]+")
# Phrases never span these separators, so reordering a skills list keeps the token set.
_CHUNK_SPLIT = re.compile(r"[,;|\n]+")
_PHRASE_LENGTHS = (2, 3)


def tokenize_skills(raw: str | None) -> list[str]:
    """Split raw skills text into lower-case word tokens longer than one character."""
    return [
        token
        for token in _TOKEN_PATTERN.findall((raw or "").lower())
        if len(token) > 1 and any(ch.isalnum() for ch in token)
    ]


def _canonical(term: str, taxonomy: TaxonomyProvider) -> str:
    normalized, canonical = taxonomy.normalize_skill(term)
    return canonical or normalized


def normalize_skills(raw: str | None, taxonomy: TaxonomyProvider) -> frozenset[str]:
    """Turn a free-text skills string into a set of canonical skill tokens.

    Every word token is mapped through the synonym table ("js" -> "javascript").
    Adjacent 2- and 3-word runs inside one comma-separated entry are also checked
    so multi-word skills like "machine learning" or "react native" are captured;
    the single words stay in the set as well. Empty or missing text gives an
    empty set.
    """
    if not raw:
        return frozenset()

    tokens: set[str] = set()
    for chunk in _CHUNK_SPLIT.split(raw):
        words = tokenize_skills(chunk)
        for word in words:
            tokens.add(_canonical(word, taxonomy))
        for n in _PHRASE_LENGTHS:
            for idx in range(0, len(words) - n + 1):
                phrase = " ".join(words[idx : idx + n])
                if taxonomy.is_known_phrase(phrase):
                    tokens.add(_canonical(phrase, taxonomy))
    return frozenset(tokens)
