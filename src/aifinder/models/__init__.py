"""
Data models for AI Finder.

This module contains all the core data structures used throughout the system.
"""

from .catalog_item import CatalogItem
from .search_results import CatalogMatch, FieldMatch, SearchResults

__all__ = ['CatalogItem', 'CatalogMatch', 'FieldMatch', 'SearchResults']
