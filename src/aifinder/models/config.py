"""
Configuration data models for AI Finder.

This module defines the core data structures for managing application configuration,
including the catalog data source, fuzzy search options, and page presentation text.
"""

from typing import Dict, List, Optional, Any
from pydantic import BaseModel, Field, ValidationError, field_validator, model_validator

from .catalog_item import CatalogItem


DEFAULT_SEARCH_KEYS = ['name', 'description', 'tags']


class DataSourceConfig(BaseModel):
    """
    Configuration for the catalog data endpoint.

    Attributes:
        base_url: Scheme and host of the service serving the catalog
        endpoint: Path of the JSON endpoint
        timeout_seconds: Timeout for a single fetch
        headers: Extra HTTP headers sent with each fetch
    """

    base_url: str = Field("http://localhost:3000", description="Scheme and host of the catalog service")
    endpoint: str = Field("/api/data", description="Path of the JSON endpoint")
    timeout_seconds: float = Field(10.0, gt=0, description="Timeout for a single fetch")
    headers: Dict[str, str] = Field(default_factory=dict, description="Extra HTTP headers")

    @field_validator('base_url')
    @classmethod
    def validate_base_url(cls, v: str) -> str:
        """Require an http(s) URL and drop any trailing slash."""
        v = v.strip()
        if not v.startswith(('http://', 'https://')):
            raise ValueError(f"Base URL must start with http:// or https://: {v}")
        return v.rstrip('/')

    @field_validator('endpoint')
    @classmethod
    def validate_endpoint(cls, v: str) -> str:
        """Endpoint paths are absolute."""
        v = v.strip()
        if not v.startswith('/'):
            raise ValueError(f"Endpoint must start with '/': {v}")
        return v

    def get_url(self) -> str:
        """Get the full URL of the catalog endpoint."""
        return f"{self.base_url}{self.endpoint}"

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation."""
        return self.model_dump()


class SearchKey(BaseModel):
    """
    A catalog field the search index matches against.

    Attributes:
        name: Name of the CatalogItem field
        weight: Relative importance of the field (normalized across keys)
    """

    name: str = Field(..., description="Name of the catalog field")
    weight: float = Field(1.0, gt=0, description="Relative importance of the field")

    @field_validator('name')
    @classmethod
    def validate_name(cls, v: str) -> str:
        """Only real catalog fields can be searched."""
        if v not in CatalogItem.model_fields:
            raise ValueError(f"Unknown search key: {v}")
        return v


class SearchConfig(BaseModel):
    """
    Configuration for fuzzy matching.

    Scores live on a 0.0 (exact) to 1.0 (anything) dissimilarity scale.

    Attributes:
        keys: Fields to match against, with relative weights
        threshold: Maximum dissimilarity at which a field still matches
        location: Expected offset of the match inside a field
        distance: How far from location a match may drift before it scores 1.0
        ignore_location: Score matches regardless of where they occur
        is_case_sensitive: Match without lower-casing
        field_norm_weight: Strength of the penalty for matches in long fields
        min_match_char_length: Minimum query length. A shorter non-empty
            query matches nothing. This bounds the query, not the matched span.
        limit: Optional cap on the number of results
    """

    keys: List[SearchKey] = Field(
        default_factory=lambda: [SearchKey(name=name) for name in DEFAULT_SEARCH_KEYS],
        min_length=1,
        description="Fields to match against"
    )
    threshold: float = Field(0.4, ge=0.0, le=1.0, description="Maximum dissimilarity for a match")
    location: int = Field(0, ge=0, description="Expected offset of the match")
    distance: int = Field(100, gt=0, description="Offset at which proximity scores 1.0")
    ignore_location: bool = Field(False, description="Score matches regardless of offset")
    is_case_sensitive: bool = Field(False, description="Match without lower-casing")
    field_norm_weight: float = Field(1.0, ge=0.0, description="Penalty strength for long fields")
    min_match_char_length: int = Field(1, ge=1, description="Minimum query length")
    limit: Optional[int] = Field(None, gt=0, description="Maximum number of results")

    @field_validator('keys', mode='before')
    @classmethod
    def validate_keys(cls, v) -> List[Any]:
        """Accept plain field names as well as {name, weight} mappings."""
        if not isinstance(v, list):
            v = [v]

        normalized_keys = []
        for key in v:
            if isinstance(key, str):
                normalized_keys.append({'name': key})
            else:
                normalized_keys.append(key)
        return normalized_keys

    @model_validator(mode='after')
    def validate_unique_keys(self):
        """Each field may be listed once."""
        names = [key.name for key in self.keys]
        if len(names) != len(set(names)):
            raise ValueError(f"Duplicate search keys: {names}")
        return self

    def get_key_names(self) -> List[str]:
        """Get the configured field names in order."""
        return [key.name for key in self.keys]

    def get_normalized_weights(self) -> Dict[str, float]:
        """Get key weights scaled to sum to 1."""
        total = sum(key.weight for key in self.keys)
        return {key.name: key.weight / total for key in self.keys}

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation."""
        return self.model_dump()


class PageConfig(BaseModel):
    """
    Text shown on the search page.

    Attributes:
        title: Page and hero heading
        subtitle: Hero subheading, also used as the meta description
        keywords: Meta keywords
        search_placeholder: Placeholder of the search input
        empty_message: Message shown when nothing matches
    """

    title: str = Field("AI Finder: Discover the Perfect AI Tool", min_length=1, description="Page heading")
    subtitle: str = Field(
        "Explore our collection of AI models and tools for various applications.",
        description="Hero subheading"
    )
    keywords: List[str] = Field(
        default_factory=lambda: ["AI models", "AI tools", "machine learning", "artificial intelligence"],
        description="Meta keywords"
    )
    search_placeholder: str = Field("Search AI models, tools or anything...", description="Search input placeholder")
    empty_message: str = Field("No AI models match your criteria.", min_length=1, description="Empty-state message")

    def get_keywords_meta(self) -> str:
        """Get keywords as a single meta tag value."""
        return ", ".join(self.keywords)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation."""
        return self.model_dump()


class FinderConfig(BaseModel):
    """
    Main configuration class for AI Finder.

    Attributes:
        data_source: Catalog endpoint configuration
        search: Fuzzy matching configuration
        page: Page presentation text
    """

    data_source: DataSourceConfig = Field(default_factory=DataSourceConfig, description="Catalog endpoint configuration")
    search: SearchConfig = Field(default_factory=SearchConfig, description="Fuzzy matching configuration")
    page: PageConfig = Field(default_factory=PageConfig, description="Page presentation text")

    def validate_configuration(self) -> List[str]:
        """
        Check for settings that are valid but likely unintended.

        Returns:
            List of warning messages (empty if nothing looks off)
        """
        warnings = []

        if self.search.threshold == 0.0:
            warnings.append("Search threshold is 0.0 - only exact matches will be shown")
        elif self.search.threshold >= 0.8:
            warnings.append(f"Search threshold {self.search.threshold} is very loose - most items will match")

        if self.search.ignore_location and self.search.distance != 100:
            warnings.append("Search distance has no effect while ignore_location is enabled")

        if self.data_source.base_url.startswith('http://') and 'localhost' not in self.data_source.base_url:
            warnings.append(f"Catalog endpoint is not using HTTPS: {self.data_source.base_url}")

        if self.data_source.timeout_seconds > 60:
            warnings.append(f"Very long fetch timeout ({self.data_source.timeout_seconds}s)")

        return warnings

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary representation."""
        return {
            'data_source': self.data_source.to_dict(),
            'search': self.search.to_dict(),
            'page': self.page.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'FinderConfig':
        """Create configuration from dictionary representation."""
        return cls.model_validate(data)

    def __str__(self) -> str:
        """String representation of the configuration."""
        parts = [f"Endpoint: {self.data_source.get_url()}"]
        parts.append(f"Keys: {', '.join(self.search.get_key_names())}")
        parts.append(f"Threshold: {self.search.threshold}")
        return " | ".join(parts)


def validate_config_dict(config_data: Dict[str, Any]) -> Dict[str, Any]:
    """
    Validate a configuration dictionary using Pydantic.

    Args:
        config_data: Dictionary containing configuration data

    Returns:
        Normalized configuration dictionary

    Raises:
        ValueError: If configuration is invalid
    """
    known_sections = set(FinderConfig.model_fields)
    unknown = [key for key in config_data if key not in known_sections]
    if unknown:
        raise ValueError(f"Unknown configuration sections: {', '.join(sorted(unknown))}")

    for section, value in config_data.items():
        if value is not None and not isinstance(value, dict):
            raise ValueError(f"Configuration section '{section}' must be a mapping, got {type(value).__name__}")

    cleaned = {key: value for key, value in config_data.items() if value is not None}

    try:
        return FinderConfig.from_dict(cleaned).to_dict()
    except ValidationError as e:
        raise ValueError(f"Configuration validation failed: {e}") from e
