"""
Fuzzy search index for AI Finder.

This module builds an in-memory index over a catalog snapshot and answers
free-text queries with typo-tolerant matching against the configured fields.
Scores are dissimilarities: 0.0 is an exact match at the expected location and
1.0 means no resemblance at all.
"""

import sys
import time
import logging
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Tuple

from rapidfuzz import fuzz

from ..models.catalog_item import CatalogItem
from ..models.config import SearchConfig
from ..models.search_results import CatalogMatch, FieldMatch, SearchResults


logger = logging.getLogger(__name__)

EPSILON = sys.float_info.epsilon


@dataclass(frozen=True)
class IndexedValue:
    """A single searchable field value, normalized at build time."""
    key: str
    value: str
    text: str
    norm: float
    array_index: Optional[int] = None


def field_length_norm(text: str, weight: float = 1.0) -> float:
    """
    Compute the field-length norm for a value.

    Longer fields get a smaller norm, which raises their score exponent less and
    so counts a match in them for less.

    Args:
        text: Field value
        weight: Strength of the norm (0 disables it)

    Returns:
        Norm rounded to three places, in (0, 1]
    """
    token_count = len(text.split())
    if token_count == 0:
        return 1.0
    return round(1 / token_count ** (0.5 * weight), 3)


def score_value(pattern: str, text: str, options: SearchConfig) -> float:
    """
    Score how closely a field text matches the query pattern.

    Args:
        pattern: Normalized query text
        text: Normalized field text
        options: Search options (location, distance, ignore_location)

    Returns:
        Dissimilarity between 0.0 and 1.0
    """
    if not pattern or not text:
        return 1.0

    if pattern == text:
        return 0.0

    if len(pattern) > len(text):
        # The whole field has to be part of the match
        return min(1.0, 1.0 - fuzz.ratio(pattern, text) / 100.0)

    alignment = fuzz.partial_ratio_alignment(pattern, text)
    if alignment is None:
        return 1.0

    accuracy = 1.0 - alignment.score / 100.0
    if options.ignore_location:
        return min(1.0, accuracy)

    proximity = abs(options.location - alignment.dest_start) / options.distance
    return min(1.0, accuracy + proximity)


def combine_scores(matches: Sequence[FieldMatch], weights: Dict[str, float]) -> float:
    """
    Combine matching field scores into one item score.

    Each match contributes ``score ** (weight * norm)``; the product of all
    contributions is the item score, so several matching fields beat one.
    """
    total = 1.0
    for match in matches:
        score = match.score if match.score > 0 else EPSILON
        total *= score ** (weights.get(match.key, 1.0) * match.norm)
    return total


class SearchableCatalog:
    """
    Fuzzy search index over one immutable catalog snapshot.

    The index holds no incremental-update contract: build a new one whenever
    the catalog is replaced.
    """

    def __init__(self, items: Sequence[CatalogItem], options: Optional[SearchConfig] = None):
        """
        Build the index.

        Args:
            items: Catalog snapshot, in display order
            options: Search options; defaults match name, description and tags at 0.4
        """
        self.options = options or SearchConfig()
        self._items: Tuple[CatalogItem, ...] = tuple(items)
        self._weights = self.options.get_normalized_weights()
        self._records: List[List[IndexedValue]] = [self._index_item(item) for item in self._items]
        logger.debug(f"Built search index over {len(self._items)} items "
                     f"(keys: {', '.join(self.options.get_key_names())})")

    @property
    def items(self) -> Tuple[CatalogItem, ...]:
        """The catalog snapshot this index was built from."""
        return self._items

    def __len__(self) -> int:
        return len(self._items)

    def _normalize(self, text: str) -> str:
        return text if self.options.is_case_sensitive else text.lower()

    def _index_item(self, item: CatalogItem) -> List[IndexedValue]:
        """Extract the searchable values of one item."""
        values = []
        for key in self.options.get_key_names():
            raw = item.get_field(key)
            if isinstance(raw, (list, tuple)):
                for i, element in enumerate(raw):
                    values.append(self._index_value(key, str(element), i))
            elif raw is not None:
                values.append(self._index_value(key, str(raw), None))
        return values

    def _index_value(self, key: str, value: str, array_index: Optional[int]) -> IndexedValue:
        return IndexedValue(
            key=key,
            value=value,
            text=self._normalize(value),
            norm=field_length_norm(value, self.options.field_norm_weight),
            array_index=array_index,
        )

    def _match_record(self, pattern: str, record: List[IndexedValue]) -> List[FieldMatch]:
        """Score every value of an item and keep those within the threshold."""
        matches = []
        for indexed in record:
            score = score_value(pattern, indexed.text, self.options)
            if score <= self.options.threshold:
                matches.append(FieldMatch(
                    key=indexed.key,
                    value=indexed.value,
                    score=score,
                    array_index=indexed.array_index,
                    norm=indexed.norm,
                ))
        return matches

    def search(self, query: str) -> SearchResults:
        """
        Search the catalog.

        An empty query returns every item in catalog order. Otherwise items with
        at least one field within the threshold are returned, best first, ties
        kept in catalog order.

        Args:
            query: Free-text query, may be empty

        Returns:
            SearchResults with ranked matches
        """
        start = time.perf_counter()

        if not query:
            matches = [CatalogMatch(item=item, ref_index=i) for i, item in enumerate(self._items)]
        else:
            matches = self._search_pattern(self._normalize(query))
            if self.options.limit is not None:
                matches = matches[:self.options.limit]

        return SearchResults(
            query=query,
            matches=matches,
            total_items=len(self._items),
            execution_time=time.perf_counter() - start,
        )

    def _search_pattern(self, pattern: str) -> List[CatalogMatch]:
        if len(pattern) < self.options.min_match_char_length:
            return []

        matches = []
        for ref_index, record in enumerate(self._records):
            field_matches = self._match_record(pattern, record)
            if not field_matches:
                continue
            matches.append(CatalogMatch(
                item=self._items[ref_index],
                ref_index=ref_index,
                score=combine_scores(field_matches, self._weights),
                matches=field_matches,
            ))

        matches.sort(key=lambda m: (m.score, m.ref_index))
        return matches

    def filter(self, query: str) -> List[CatalogItem]:
        """Get the items to display for a query, in result order."""
        return self.search(query).items()


def filter_catalog(items: Sequence[CatalogItem], query: str,
                   options: Optional[SearchConfig] = None) -> List[CatalogItem]:
    """
    Build an index over items and filter it in one step.

    Args:
        items: Catalog snapshot
        query: Free-text query
        options: Search options

    Returns:
        Matching items, best first
    """
    return SearchableCatalog(items, options).filter(query)
