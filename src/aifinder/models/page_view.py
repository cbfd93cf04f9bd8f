"""
Presentation models for the AI Finder search page.

These models describe what a view layer shows: the hero text, one card per
matching item, or the empty state when nothing matches.
"""

from typing import Dict, List, Any
from pydantic import BaseModel, Field

from .catalog_item import CatalogItem


class CardView(BaseModel):
    """
    A result card for one catalog item.

    Attributes:
        name: Card heading
        description: Card body text
        image: Logo image reference, alt text is the name
        tags: Tag chips in item order
        href: Link target of the whole card
    """

    name: str
    description: str
    image: str
    tags: List[str] = Field(default_factory=list)
    href: str

    @classmethod
    def from_item(cls, item: CatalogItem) -> 'CardView':
        """Build a card from a catalog item."""
        return cls(
            name=item.name,
            description=item.description,
            image=item.image,
            tags=list(item.tags),
            href=item.url,
        )

    def to_markdown(self) -> str:
        """Render the card as a markdown block."""
        lines = [
            f"### [{self.name}]({self.href})",
            "",
            f"![{self.name}]({self.image})",
            "",
            self.description,
        ]
        if self.tags:
            lines.extend(["", " ".join(f"`{tag}`" for tag in self.tags)])
        return "\n".join(lines)


class PageView(BaseModel):
    """
    Everything the search page renders for the current state.

    Attributes:
        title: Page title and hero heading
        subtitle: Hero subheading
        meta_description: Content of the description meta tag
        meta_keywords: Content of the keywords meta tag
        search_placeholder: Placeholder of the search input
        query: Current query text
        cards: Cards for matching items, in result order
        empty_message: Message shown when there are no cards
    """

    title: str
    subtitle: str
    meta_description: str
    meta_keywords: str
    search_placeholder: str
    query: str = ""
    cards: List[CardView] = Field(default_factory=list)
    empty_message: str

    @property
    def is_empty(self) -> bool:
        """Whether the empty state is shown instead of the grid."""
        return not self.cards

    def to_dict(self) -> Dict[str, Any]:
        """Convert the view to dictionary representation."""
        data = self.model_dump()
        data['is_empty'] = self.is_empty
        return data

    def to_markdown(self) -> str:
        """Render the page as a markdown document."""
        lines = [
            f"# {self.title}",
            "",
            self.subtitle,
            "",
        ]

        if self.query:
            lines.extend([f"**Search:** `{self.query}`", ""])

        if self.is_empty:
            lines.append(f"*{self.empty_message}*")
        else:
            for card in self.cards:
                lines.append(card.to_markdown())
                lines.append("")
            lines.append("---")

        return "\n".join(lines).rstrip() + "\n"
