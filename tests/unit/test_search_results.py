"""
Unit tests for search results data models.

Tests the FieldMatch, CatalogMatch, and SearchResults classes
to ensure proper validation, functionality, and data integrity.
"""

import pytest
from pydantic import ValidationError

from aifinder.models.catalog_item import CatalogItem
from aifinder.models.search_results import CatalogMatch, FieldMatch, SearchResults


def make_item(name, tags=('tag',)):
    return CatalogItem(
        name=name,
        description=f"{name} description",
        image=f"https://example.com/{name}.png",
        tags=list(tags),
        url=f"https://example.com/{name}"
    )


class TestFieldMatch:
    """Test cases for FieldMatch class."""

    def test_basic_creation(self):
        """Test basic field match creation."""
        match = FieldMatch(key='name', value='ChatBot', score=0.0)

        assert match.key == 'name'
        assert match.array_index is None
        assert match.norm == 1.0
        assert match.is_exact()

    def test_list_field_creation(self):
        """Test field match for a tag value."""
        match = FieldMatch(key='tags', value='nlp', score=0.25, array_index=1, norm=1.0)

        assert match.array_index == 1
        assert not match.is_exact()

    def test_score_bounds(self):
        """Test that scores outside 0..1 are rejected."""
        with pytest.raises(ValidationError):
            FieldMatch(key='name', value='x', score=1.5)

        with pytest.raises(ValidationError):
            FieldMatch(key='name', value='x', score=-0.1)

    def test_empty_key_rejected(self):
        """Test that a field match needs a key."""
        with pytest.raises(ValidationError):
            FieldMatch(key='', value='x', score=0.1)


class TestCatalogMatch:
    """Test cases for CatalogMatch class."""

    def test_matched_keys_are_distinct(self):
        """Test that matched keys are listed once in match order."""
        match = CatalogMatch(
            item=make_item('ChatBot', tags=('chat', 'chatbot')),
            ref_index=0,
            score=0.1,
            matches=[
                FieldMatch(key='tags', value='chat', score=0.3, array_index=0),
                FieldMatch(key='name', value='ChatBot', score=0.0),
                FieldMatch(key='tags', value='chatbot', score=0.0, array_index=1),
            ]
        )

        assert match.get_matched_keys() == ['tags', 'name']

    def test_best_field_match(self):
        """Test that the closest field match is returned."""
        match = CatalogMatch(
            item=make_item('ChatBot'),
            ref_index=2,
            score=0.2,
            matches=[
                FieldMatch(key='description', value='ChatBot description', score=0.3),
                FieldMatch(key='name', value='ChatBot', score=0.1),
            ]
        )

        assert match.get_best_field_match().key == 'name'

    def test_best_field_match_without_matches(self):
        """Test that an empty-query match has no field matches."""
        match = CatalogMatch(item=make_item('ChatBot'), ref_index=0)

        assert match.get_best_field_match() is None
        assert match.score == 0.0

    def test_negative_ref_index_rejected(self):
        """Test that catalog positions are non-negative."""
        with pytest.raises(ValidationError):
            CatalogMatch(item=make_item('ChatBot'), ref_index=-1)

    def test_to_dict(self):
        """Test converting a catalog match to dictionary."""
        match = CatalogMatch(
            item=make_item('ChatBot'),
            ref_index=0,
            score=0.1,
            matches=[FieldMatch(key='name', value='ChatBot', score=0.1)]
        )

        data = match.to_dict()
        assert data['item']['name'] == 'ChatBot'
        assert data['item']['tags'] == ['tag']
        assert data['matched_keys'] == ['name']

    def test_string_representation(self):
        """Test string representation of a catalog match."""
        match = CatalogMatch(
            item=make_item('ChatBot'),
            ref_index=3,
            score=0.125,
            matches=[FieldMatch(key='name', value='ChatBot', score=0.1)]
        )

        str_repr = str(match)
        assert 'ChatBot (score: 0.125)' in str_repr
        assert 'Index: 3' in str_repr
        assert 'Fields: name' in str_repr


class TestSearchResults:
    """Test cases for SearchResults class."""

    def setup_method(self):
        """Set up test fixtures."""
        self.items = [make_item('Alpha'), make_item('Beta'), make_item('Gamma')]
        self.matches = [
            CatalogMatch(item=self.items[1], ref_index=1, score=0.1),
            CatalogMatch(item=self.items[0], ref_index=0, score=0.3),
        ]

    def test_ranks_assigned(self):
        """Test that ranks follow match order."""
        results = SearchResults(query='a', matches=self.matches, total_items=3)

        assert [m.rank for m in results.matches] == [1, 2]

    def test_items(self):
        """Test that items are returned in result order."""
        results = SearchResults(query='a', matches=self.matches, total_items=3)

        assert [item.name for item in results.items()] == ['Beta', 'Alpha']

    def test_empty_results(self):
        """Test an empty result set."""
        results = SearchResults(query='zzz', total_items=3)

        assert results.is_empty()
        assert results.get_match_count() == 0
        assert results.get_average_score() == 0.0
        assert results.items() == []

    def test_more_matches_than_items_rejected(self):
        """Test that a result set cannot exceed the searched catalog."""
        with pytest.raises(ValidationError, match="Match count exceeds"):
            SearchResults(query='a', matches=self.matches, total_items=1)

    def test_matches_by_key(self):
        """Test filtering matches by matched field."""
        matches = [
            CatalogMatch(item=self.items[0], ref_index=0, score=0.1,
                         matches=[FieldMatch(key='name', value='Alpha', score=0.1)]),
            CatalogMatch(item=self.items[1], ref_index=1, score=0.2,
                         matches=[FieldMatch(key='tags', value='tag', score=0.2, array_index=0)]),
        ]
        results = SearchResults(query='a', matches=matches, total_items=3)

        assert [m.item.name for m in results.get_matches_by_key('tags')] == ['Beta']

    def test_average_score(self):
        """Test average score calculation."""
        results = SearchResults(query='a', matches=self.matches, total_items=3)

        assert results.get_average_score() == pytest.approx(0.2)

    def test_limit_results(self):
        """Test limiting the number of results."""
        results = SearchResults(query='a', matches=self.matches, total_items=3)
        results.limit_results(1)

        assert results.get_match_count() == 1
        assert results.matches[0].item.name == 'Beta'
        assert results.matches[0].rank == 1

    def test_to_dict(self):
        """Test converting results to dictionary."""
        results = SearchResults(query='a', matches=self.matches, total_items=3)

        data = results.to_dict()
        assert data['query'] == 'a'
        assert data['match_count'] == 2
        assert data['total_items'] == 3
        assert isinstance(data['timestamp'], str)
        assert len(data['matches']) == 2

    def test_string_representation(self):
        """Test string representation of results."""
        results = SearchResults(query='a', matches=self.matches, total_items=3)

        str_repr = str(results)
        assert 'Found 2 matches' in str_repr
        assert 'Searched 3 items' in str_repr
