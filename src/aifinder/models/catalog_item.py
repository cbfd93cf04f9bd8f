"""
Catalog item data model for AI Finder.

This module defines the record type for a single AI tool entry in the catalog,
including its name, description, image reference, tags, and link target.
"""

from typing import Dict, List, Any, Iterable, Tuple
from pydantic import BaseModel, ConfigDict, Field, field_validator


class CatalogItem(BaseModel):
    """
    A single AI tool entry in the catalog.

    Items are immutable once loaded. Identity is positional: two items with
    identical fields are still distinct entries of the catalog.

    Attributes:
        name: Display name of the tool
        description: Short description shown on the card
        image: Image reference or URL for the card logo
        tags: Ordered list of tag strings
        url: Link target for the card
    """

    model_config = ConfigDict(frozen=True, extra='ignore')

    name: str = Field(..., description="Display name of the tool")
    description: str = Field(..., description="Short description of the tool")
    image: str = Field(..., description="Image reference or URL")
    tags: Tuple[str, ...] = Field(..., description="Ordered tags for the tool")
    url: str = Field(..., description="Link target for the tool")

    @field_validator('name', 'url')
    @classmethod
    def validate_not_blank(cls, v: str) -> str:
        """Reject blank names and links."""
        if not v or not v.strip():
            raise ValueError("Field cannot be empty")
        return v

    @field_validator('tags', mode='before')
    @classmethod
    def validate_tags(cls, v: Any) -> Any:
        """Tags must arrive as a JSON array, never as a bare string."""
        if isinstance(v, str):
            raise ValueError("Tags must be a list of strings")
        return v

    def has_tag(self, tag: str) -> bool:
        """Check whether the item carries a tag (case-insensitive)."""
        wanted = tag.lower()
        return any(t.lower() == wanted for t in self.tags)

    def get_field(self, key: str) -> Any:
        """Get a field value by name, as used by the search index."""
        if key not in type(self).model_fields:
            raise KeyError(f"Unknown catalog field: {key}")
        return getattr(self, key)

    def to_dict(self) -> Dict[str, Any]:
        """Convert the item to its JSON-compatible representation."""
        data = self.model_dump()
        data['tags'] = list(self.tags)
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'CatalogItem':
        """Create a CatalogItem from a dictionary."""
        return cls.model_validate(data)

    def __str__(self) -> str:
        """String representation of the item."""
        parts = [self.name]
        if self.tags:
            parts.append(f"Tags: {', '.join(self.tags)}")
        parts.append(self.url)
        return " | ".join(parts)


def catalog_from_dicts(entries: Iterable[Dict[str, Any]]) -> Tuple[CatalogItem, ...]:
    """
    Validate raw entries into an immutable catalog snapshot.

    Raises:
        pydantic.ValidationError: If any entry is missing a field or has a wrong type
    """
    return tuple(CatalogItem.from_dict(entry) for entry in entries)


def catalog_to_dicts(items: Iterable[CatalogItem]) -> List[Dict[str, Any]]:
    """Convert a catalog snapshot back to plain dictionaries."""
    return [item.to_dict() for item in items]
