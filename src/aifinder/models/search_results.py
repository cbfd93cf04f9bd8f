"""
Search results data models for AI Finder.

This module defines the data structures for representing fuzzy search results,
including per-field matches, ranked catalog matches, and complete result sets.
"""

from typing import Dict, List, Optional, Any
from datetime import datetime
from pydantic import BaseModel, Field, model_validator

from .catalog_item import CatalogItem


class FieldMatch(BaseModel):
    """
    A single field value of an item that matched the query.

    Attributes:
        key: Name of the matched field (e.g. 'name', 'tags')
        value: The field text that matched (a single tag for list fields)
        score: Dissimilarity score (0.0 exact, 1.0 no resemblance)
        array_index: Position of the value inside a list field, if any
        norm: Field-length norm applied when combining scores
    """

    key: str = Field(..., min_length=1, description="Name of the matched field")
    value: str = Field(..., description="Field text that matched")
    score: float = Field(..., ge=0.0, le=1.0, description="Dissimilarity score")
    array_index: Optional[int] = Field(None, ge=0, description="Position inside a list field")
    norm: float = Field(1.0, ge=0.0, le=1.0, description="Field-length norm")

    def is_exact(self) -> bool:
        """Check if this field matched without any error or offset."""
        return self.score == 0.0

    def to_dict(self) -> Dict[str, Any]:
        """Convert field match to dictionary representation."""
        return self.model_dump()


class CatalogMatch(BaseModel):
    """
    Represents a single catalog item that matches the query.

    Attributes:
        item: The matched catalog item
        ref_index: Position of the item in the searched catalog
        score: Combined dissimilarity score (lower is a closer match)
        matches: Field values that fell within the threshold
        rank: Optional rank in the result set (1-based)
    """

    item: CatalogItem = Field(..., description="The matched catalog item")
    ref_index: int = Field(..., ge=0, description="Position in the searched catalog")
    score: float = Field(0.0, ge=0.0, le=1.0, description="Combined dissimilarity score")
    matches: List[FieldMatch] = Field(default_factory=list, description="Matching field values")
    rank: Optional[int] = Field(None, ge=1, description="Rank in the result set")

    def get_matched_keys(self) -> List[str]:
        """Get the distinct field names that matched, in match order."""
        keys: List[str] = []
        for match in self.matches:
            if match.key not in keys:
                keys.append(match.key)
        return keys

    def get_best_field_match(self) -> Optional[FieldMatch]:
        """Get the single closest field match, if any."""
        if not self.matches:
            return None
        return min(self.matches, key=lambda m: m.score)

    def to_dict(self) -> Dict[str, Any]:
        """Convert catalog match to dictionary representation."""
        data = self.model_dump()
        data['item'] = self.item.to_dict()
        data['matches'] = [match.to_dict() for match in self.matches]
        data['matched_keys'] = self.get_matched_keys()
        return data

    def __str__(self) -> str:
        """String representation of the catalog match."""
        parts = [f"{self.item.name} (score: {self.score:.3f})"]
        parts.append(f"Index: {self.ref_index}")
        if self.matches:
            parts.append(f"Fields: {', '.join(self.get_matched_keys())}")
        return " | ".join(parts)


class SearchResults(BaseModel):
    """
    Complete results from a catalog search.

    The matches are ordered best first: ascending score, ties broken by the
    original catalog position.

    Attributes:
        query: The query string that produced these results
        matches: Ordered list of catalog matches
        total_items: Number of catalog items that were searched
        execution_time: Time taken to execute the search in seconds
        timestamp: When the search was executed
    """

    query: str = Field("", description="The query string")
    matches: List[CatalogMatch] = Field(default_factory=list, description="Ordered catalog matches")
    total_items: int = Field(0, ge=0, description="Number of items searched")
    execution_time: float = Field(0.0, ge=0.0, description="Time taken to execute the search")
    timestamp: datetime = Field(default_factory=datetime.now, description="When the search was executed")

    @model_validator(mode='after')
    def validate_counts(self):
        """A result set never holds more matches than the catalog it came from."""
        if len(self.matches) > self.total_items:
            raise ValueError("Match count exceeds number of searched items")
        return self

    def model_post_init(self, __context) -> None:
        """Assign ranks to matches after initialization."""
        self._assign_ranks()

    def _assign_ranks(self) -> None:
        """Assign rank numbers to matches based on their order."""
        for i, match in enumerate(self.matches, 1):
            match.rank = i

    def items(self) -> List[CatalogItem]:
        """Get the matched items in result order."""
        return [match.item for match in self.matches]

    def get_match_count(self) -> int:
        """Get the total number of matches."""
        return len(self.matches)

    def is_empty(self) -> bool:
        """Check if nothing matched."""
        return not self.matches

    def get_top_matches(self, n: int = 10) -> List[CatalogMatch]:
        """Get the first N matches."""
        return self.matches[:n]

    def get_matches_by_key(self, key: str) -> List[CatalogMatch]:
        """Get all matches where the given field matched."""
        return [match for match in self.matches if key in match.get_matched_keys()]

    def get_average_score(self) -> float:
        """Get the average dissimilarity score across all matches."""
        if not self.matches:
            return 0.0
        return sum(match.score for match in self.matches) / len(self.matches)

    def limit_results(self, max_results: int) -> None:
        """Limit the number of results to the specified maximum."""
        if max_results > 0:
            self.matches = self.matches[:max_results]
            self._assign_ranks()

    def to_dict(self) -> Dict[str, Any]:
        """Convert search results to dictionary representation."""
        data = self.model_dump()
        data['matches'] = [match.to_dict() for match in self.matches]
        data['match_count'] = self.get_match_count()
        data['timestamp'] = self.timestamp.isoformat()
        data['average_score'] = self.get_average_score()
        return data

    def __str__(self) -> str:
        """String representation of search results."""
        parts = [f"Found {self.get_match_count()} matches"]
        parts.append(f"Searched {self.total_items} items")
        parts.append(f"Took {self.execution_time:.3f}s")
        return " | ".join(parts)
