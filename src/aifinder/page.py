"""
Search page state for AI Finder.

CatalogPage is the single owner of the page's mutable state: the current
catalog snapshot, the query, and the index built over that snapshot. The
catalog is only ever replaced as a whole, and the index is rebuilt with it.
"""

import logging
from pathlib import Path
from typing import Iterable, List, Optional, Tuple, Union

from .config.parser import load_config
from .models.catalog_item import CatalogItem
from .models.config import FinderConfig
from .models.page_view import CardView, PageView
from .models.search_results import SearchResults
from .tools.data_source import CatalogFetchError, CatalogSource
from .tools.fuzzy_index import SearchableCatalog


logger = logging.getLogger(__name__)


class CatalogPage:
    """
    State and handlers for the catalog search page.

    Attributes:
        config: Application configuration
        source: Catalog source used for the initial load and refresh
        query: Current query text
    """

    def __init__(self, config: Optional[FinderConfig] = None,
                 source: Optional[CatalogSource] = None,
                 initial_items: Iterable[CatalogItem] = ()):
        """
        Initialize the page.

        Args:
            config: Application configuration
            source: Catalog source; built from config.data_source if omitted
            initial_items: Snapshot to show before any fetch
        """
        self.config = config or FinderConfig()
        self.source = source or CatalogSource(self.config.data_source)
        self.query = ""
        self._index = SearchableCatalog(tuple(initial_items), self.config.search)

    @property
    def catalog(self) -> Tuple[CatalogItem, ...]:
        """The current catalog snapshot."""
        return self._index.items

    @classmethod
    def load_initial(cls, config: Optional[FinderConfig] = None,
                     source: Optional[CatalogSource] = None) -> 'CatalogPage':
        """
        Create a page with the render-time snapshot.

        A failed fetch is logged and the page starts with an empty catalog.
        """
        page = cls(config=config, source=source)
        page.refresh()
        return page

    @classmethod
    def from_config_file(cls, config_path: Optional[Union[str, Path]] = None,
                         strict_mode: bool = False,
                         source: Optional[CatalogSource] = None) -> 'CatalogPage':
        """
        Create a page from a YAML configuration file and load its snapshot.

        Without a path the default configuration files are searched for.
        Configuration warnings are logged, or raised in strict mode.

        Raises:
            ConfigurationError: If the configuration cannot be loaded
        """
        result = load_config(config_path, strict_mode=strict_mode)
        for warning in result.warnings:
            logger.warning(f"Configuration warning: {warning}")

        return cls.load_initial(config=result.config, source=source)

    def replace_catalog(self, items: Iterable[CatalogItem]) -> None:
        """Swap in a new catalog snapshot and rebuild the index."""
        self._index = SearchableCatalog(tuple(items), self.config.search)
        logger.info(f"Catalog replaced with {len(self._index)} items")

    def refresh(self) -> bool:
        """
        Fetch the catalog once and replace the snapshot on success.

        Returns:
            True if the catalog was replaced, False if the previous one was kept
        """
        try:
            items = self.source.fetch()
        except CatalogFetchError as e:
            logger.error(f"Error fetching AI data: {e}")
            return False

        self.replace_catalog(items)
        return True

    def set_query(self, text: str) -> None:
        """Store the latest text of the search input."""
        self.query = text

    def search(self) -> SearchResults:
        """Run the current query against the current snapshot."""
        return self._index.search(self.query)

    def filtered_items(self) -> List[CatalogItem]:
        """Get the items to display for the current query."""
        return self._index.filter(self.query)

    def render(self) -> PageView:
        """Build the presentation model for the current state."""
        page = self.config.page
        return PageView(
            title=page.title,
            subtitle=page.subtitle,
            meta_description=page.subtitle,
            meta_keywords=page.get_keywords_meta(),
            search_placeholder=page.search_placeholder,
            query=self.query,
            cards=[CardView.from_item(item) for item in self.filtered_items()],
            empty_message=page.empty_message,
        )

    def close(self) -> None:
        """Release the catalog source."""
        self.source.close()

    def __enter__(self) -> 'CatalogPage':
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def __str__(self) -> str:
        return f"CatalogPage(items={len(self._index)}, query={self.query!r})"
