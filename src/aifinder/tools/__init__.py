"""
Search tools and utilities for AI Finder.

This module contains the fuzzy search index and the catalog data source.
"""
