from __future__ import annotations

import json
from collections.abc import Iterable, Mapping
from pathlib import Path
from types import MappingProxyType

from .provider import TaxonomyProvider, TaxonomyUnavailable


class LocalTaxonomy(TaxonomyProvider):
    """Read-only skill taxonomy: category keyword sets plus an alias table.

    The bundled ``skills_taxonomy.json`` has two top-level keys, ``categories``
    (name -> list of keywords) and ``synonyms`` (alias -> canonical token).
    Category order in the file is kept and drives stable iteration elsewhere.
    """

    def __init__(self, taxonomy_path: str | Path | None = None) -> None:
        path = Path(taxonomy_path) if taxonomy_path else Path(__file__).with_name("skills_taxonomy.json")
        raw = self._load(path)
        self._init_tables(raw.get("categories") or {}, raw.get("synonyms") or {})

    @classmethod
    def from_mapping(
        cls,
        *,
        categories: Mapping[str, Iterable[str]],
        synonyms: Mapping[str, str] | None = None,
    ) -> "LocalTaxonomy":
        taxonomy = cls.__new__(cls)
        taxonomy._init_tables(categories, synonyms or {})
        return taxonomy

    @staticmethod
    def _load(path: Path) -> dict:
        try:
            with path.open("r", encoding="utf-8") as handle:
                raw = json.load(handle)
        except (OSError, json.JSONDecodeError) as exc:
            raise TaxonomyUnavailable(f"Unable to load skill taxonomy '{path}': {exc}") from exc
        if not isinstance(raw, dict):
            raise TaxonomyUnavailable(f"Invalid skill taxonomy '{path}': expected a top-level mapping.")
        return raw

    def _init_tables(self, categories: Mapping[str, Iterable[str]], synonyms: Mapping[str, str]) -> None:
        self._synonyms = MappingProxyType(
            {str(key).strip().lower(): str(value).strip().lower() for key, value in synonyms.items()}
        )
        self._categories = MappingProxyType(
            {
                str(name): frozenset(str(keyword).strip().lower() for keyword in keywords)
                for name, keywords in categories.items()
            }
        )
        token_index: dict[str, list[str]] = {}
        for name, keywords in self._categories.items():
            for keyword in keywords:
                token_index.setdefault(keyword, []).append(name)
        self._token_index = MappingProxyType({key: tuple(value) for key, value in token_index.items()})

    @property
    def categories(self) -> Mapping[str, frozenset[str]]:
        return self._categories

    @property
    def synonyms(self) -> Mapping[str, str]:
        return self._synonyms

    def normalize_skill(self, raw: str) -> tuple[str, str | None]:
        normalized = raw.strip().lower()
        canonical = self._synonyms.get(normalized)
        return normalized, canonical

    def is_known_phrase(self, phrase: str) -> bool:
        return phrase in self._synonyms or phrase in self._token_index

    def category_names(self) -> tuple[str, ...]:
        return tuple(self._categories)

    def categories_for(self, token: str) -> tuple[str, ...]:
        return self._token_index.get(token, ())
