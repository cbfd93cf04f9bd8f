"""
Unit tests for the CatalogItem data model.
"""

import pytest
from pydantic import ValidationError
from aifinder.models.catalog_item import CatalogItem, catalog_from_dicts, catalog_to_dicts


def make_entry(**overrides):
    entry = {
        'name': 'ChatBot',
        'description': 'conversational AI',
        'image': 'https://example.com/chatbot.png',
        'tags': ['chat', 'nlp'],
        'url': 'https://example.com/chatbot'
    }
    entry.update(overrides)
    return entry


class TestCatalogItem:
    """Test cases for CatalogItem."""

    def test_basic_item_creation(self):
        """Test creating an item with all fields."""
        item = CatalogItem.from_dict(make_entry())

        assert item.name == 'ChatBot'
        assert item.description == 'conversational AI'
        assert item.tags == ('chat', 'nlp')
        assert item.url == 'https://example.com/chatbot'

    def test_missing_field_fails_validation(self):
        """Test that absent fields are rejected at ingestion."""
        for field in ['name', 'description', 'image', 'tags', 'url']:
            entry = make_entry()
            del entry[field]
            with pytest.raises(ValidationError):
                CatalogItem.from_dict(entry)

    def test_blank_name_rejected(self):
        """Test that blank names and links are rejected."""
        with pytest.raises(ValueError, match="Field cannot be empty"):
            CatalogItem.from_dict(make_entry(name='   '))

        with pytest.raises(ValueError, match="Field cannot be empty"):
            CatalogItem.from_dict(make_entry(url=''))

    def test_names_and_links_kept_verbatim(self):
        """Test that surrounding whitespace is preserved, not trimmed."""
        item = CatalogItem.from_dict(make_entry(name=' ChatBot ', url=' https://example.com/chatbot'))

        assert item.name == ' ChatBot '
        assert item.url == ' https://example.com/chatbot'

    def test_empty_description_allowed(self):
        """Test that an empty description is still a valid item."""
        item = CatalogItem.from_dict(make_entry(description=''))
        assert item.description == ''

    def test_tags_must_be_list(self):
        """Test that a bare string is not accepted as tags."""
        with pytest.raises(ValidationError):
            CatalogItem.from_dict(make_entry(tags='chat'))

        with pytest.raises(ValidationError):
            CatalogItem.from_dict(make_entry(tags=['chat', 3]))

    def test_wrong_type_rejected(self):
        """Test that non-string fields are rejected."""
        with pytest.raises(ValidationError):
            CatalogItem.from_dict(make_entry(name=42))

    def test_items_are_immutable(self):
        """Test that items cannot be modified after loading."""
        item = CatalogItem.from_dict(make_entry())

        with pytest.raises(ValidationError):
            item.name = 'Other'

    def test_extra_fields_ignored(self):
        """Test that unknown keys in the payload are dropped."""
        item = CatalogItem.from_dict(make_entry(rating=5))
        assert 'rating' not in item.to_dict()

    def test_has_tag(self):
        """Test case-insensitive tag lookup."""
        item = CatalogItem.from_dict(make_entry())

        assert item.has_tag('NLP')
        assert not item.has_tag('vision')

    def test_get_field(self):
        """Test field lookup by name."""
        item = CatalogItem.from_dict(make_entry())

        assert item.get_field('name') == 'ChatBot'
        assert item.get_field('tags') == ('chat', 'nlp')

        with pytest.raises(KeyError, match="Unknown catalog field"):
            item.get_field('rating')

    def test_to_dict_conversion(self):
        """Test converting item to dictionary."""
        entry = make_entry()
        item = CatalogItem.from_dict(entry)

        assert item.to_dict() == entry

    def test_string_representation(self):
        """Test string representation of item."""
        item = CatalogItem.from_dict(make_entry())

        str_repr = str(item)
        assert 'ChatBot' in str_repr
        assert 'chat, nlp' in str_repr


class TestCatalogHelpers:
    """Test cases for catalog conversion helpers."""

    def test_catalog_from_dicts_keeps_order_and_duplicates(self):
        """Test that duplicates are kept as distinct entries in order."""
        entries = [make_entry(name='A'), make_entry(name='B'), make_entry(name='A')]
        catalog = catalog_from_dicts(entries)

        assert isinstance(catalog, tuple)
        assert [item.name for item in catalog] == ['A', 'B', 'A']

    def test_catalog_from_dicts_rejects_any_invalid_entry(self):
        """Test that one bad entry fails the whole catalog."""
        entries = [make_entry(), {'name': 'Broken'}]

        with pytest.raises(ValidationError):
            catalog_from_dicts(entries)

    def test_catalog_to_dicts(self):
        """Test converting a catalog back to plain dictionaries."""
        entries = [make_entry(name='A'), make_entry(name='B')]
        assert catalog_to_dicts(catalog_from_dicts(entries)) == entries
