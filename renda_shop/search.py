"""renda_shop.search – recherche par mot-clé dans le catalogue

Correspondance par sous-chaîne, insensible à la casse, sur le nom, le prix
(texte affiché) et la catégorie. L'ordre du catalogue est conservé.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence

SEARCH_FIELDS = ("name", "price", "category")
SUGGESTION = 'Try searching for products like "scissors", "rulers", or "buckles".'
PROMPT_MESSAGE = "No search term provided. " + SUGGESTION


@dataclass
class SearchOutcome:
    query: Optional[str]
    message: str
    results: List[Dict] = field(default_factory=list)

    def to_dict(self) -> Dict:
        return {
            "query": self.query,
            "message": self.message,
            "count": len(self.results),
            "results": self.results,
        }


def matches(product: Dict, needle: str) -> bool:
    return any(needle in str(product.get(f) or "").lower() for f in SEARCH_FIELDS)


def filter_products(query: str, products: Sequence[Dict]) -> List[Dict]:
    needle = query.lower()
    return [p for p in products if matches(p, needle)]


def search(query: Optional[str], products: Sequence[Dict]) -> SearchOutcome:
    if not query:
        return SearchOutcome(query=None, message=PROMPT_MESSAGE)

    results = filter_products(query, products)
    if not results:
        message = f'No results found for "{query}". {SUGGESTION}'
    else:
        plural = "s" if len(results) > 1 else ""
        message = f'Found {len(results)} result{plural} for "{query}":'
    return SearchOutcome(query=query, message=message, results=results)
