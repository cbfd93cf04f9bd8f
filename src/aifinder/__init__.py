"""
AI Finder - Core Package

A searchable directory of AI tools: fetches the tool catalog, filters it with
typo-tolerant fuzzy search, and builds the page shown to the user.
"""

__version__ = "0.1.0"
__author__ = "AI Finder Team"
