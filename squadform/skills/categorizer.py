from __future__ import annotations

from collections.abc import Iterable

from squadform.taxonomy import TaxonomyProvider


def categorize_skills(tokens: Iterable[str], taxonomy: TaxonomyProvider) -> frozenset[str]:
    categories: set[str] = set()
    for token in tokens:
        categories.update(taxonomy.categories_for(token))
    return frozenset(categories)
