from __future__ import annotations

from typing import Protocol


class TaxonomyUnavailable(RuntimeError):
    pass


class TaxonomyProvider(Protocol):
    def normalize_skill(self, raw: str) -> tuple[str, str | None]:
        """Return normalized text and optional canonical skill token."""

    def is_known_phrase(self, phrase: str) -> bool:
        """Return True when a multi-word phrase is an alias or a category keyword."""

    def category_names(self) -> tuple[str, ...]:
        """Return category names in declaration order."""

    def categories_for(self, token: str) -> tuple[str, ...]:
        """Return every category whose keyword set contains ``token``."""
