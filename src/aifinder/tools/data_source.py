"""
Catalog data source for AI Finder.

This module fetches the catalog JSON array from the data endpoint, or reads it
from a local file, and validates every entry into a CatalogItem. A payload is
accepted or rejected as a whole; there is never a partial catalog.
"""

import json
import logging
from pathlib import Path
from typing import Any, Optional, Tuple, Union

import requests
from pydantic import ValidationError

from ..models.catalog_item import CatalogItem, catalog_from_dicts
from ..models.config import DataSourceConfig


logger = logging.getLogger(__name__)


class CatalogFetchError(Exception):
    """Raised when the catalog cannot be fetched, decoded, or validated."""
    pass


def parse_catalog_payload(data: Any) -> Tuple[CatalogItem, ...]:
    """
    Validate a decoded JSON payload into a catalog snapshot.

    Args:
        data: Decoded JSON, expected to be an array of item objects

    Returns:
        Tuple of CatalogItem in payload order

    Raises:
        CatalogFetchError: If the payload is not an array or any entry is invalid
    """
    if not isinstance(data, list):
        raise CatalogFetchError(f"Catalog payload must be a JSON array, got {type(data).__name__}")

    for position, entry in enumerate(data):
        if not isinstance(entry, dict):
            raise CatalogFetchError(f"Catalog entry {position} must be a JSON object, got {type(entry).__name__}")

    try:
        return catalog_from_dicts(data)
    except ValidationError as e:
        raise CatalogFetchError(f"Invalid catalog entry: {e}") from e


def load_catalog_file(path: Union[str, Path]) -> Tuple[CatalogItem, ...]:
    """
    Load a catalog snapshot from a JSON file.

    Args:
        path: Path to a JSON file holding the item array

    Returns:
        Tuple of CatalogItem

    Raises:
        CatalogFetchError: If the file cannot be read, decoded, or validated
    """
    path = Path(path)
    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise CatalogFetchError(f"Invalid JSON in catalog file {path}: {e}") from e
    except (OSError, IOError) as e:
        raise CatalogFetchError(f"Cannot read catalog file {path}: {e}") from e

    items = parse_catalog_payload(data)
    logger.info(f"Loaded {len(items)} catalog items from {path}")
    return items


class CatalogSource:
    """
    HTTP client for the catalog endpoint.

    Performs a single GET per fetch with the configured timeout. There is no
    retry policy; callers decide what to do with a CatalogFetchError.
    """

    def __init__(self, config: Optional[DataSourceConfig] = None,
                 session: Optional[requests.Session] = None):
        """
        Initialize the source.

        Args:
            config: Endpoint configuration
            session: Optional requests session (a new one is created if omitted)
        """
        self.config = config or DataSourceConfig()
        self.session = session or requests.Session()

    @property
    def url(self) -> str:
        return self.config.get_url()

    def fetch(self) -> Tuple[CatalogItem, ...]:
        """
        Fetch and validate the catalog.

        Returns:
            Tuple of CatalogItem in endpoint order

        Raises:
            CatalogFetchError: On network errors, non-2xx responses, or malformed payloads
        """
        logger.debug(f"Fetching catalog from {self.url}")
        try:
            response = self.session.get(
                self.url,
                headers=self.config.headers or None,
                timeout=self.config.timeout_seconds,
            )
            response.raise_for_status()
        except requests.RequestException as e:
            raise CatalogFetchError(f"Error fetching catalog from {self.url}: {e}") from e

        try:
            data = response.json()
        except ValueError as e:
            raise CatalogFetchError(f"Catalog response from {self.url} is not valid JSON: {e}") from e

        items = parse_catalog_payload(data)
        logger.info(f"Fetched {len(items)} catalog items from {self.url}")
        return items

    def close(self) -> None:
        """Close the underlying HTTP session."""
        self.session.close()
