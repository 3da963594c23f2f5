"""View state for the catalog page.

One ViewState belongs to one rendered view: the search text, which
endpoint cards are open, and which category the sidebar highlights.

Scroll tracking is left to whatever observes the viewport. The rendered
page has no such observer; its sidebar highlight follows clicks, and
section anchors use HEADER_OFFSET for their scroll margin. An observer
(a client-side scroll handler, or anything else that measures section
positions) plugs in through three calls:

- ``active_category_at(sections, scroll_y)`` maps section geometry to the
  category under the sticky header;
- ``ViewState.observe_scroll(sections, scroll_y)`` feeds that result back
  into the view state;
- ``scroll_target(section_top)`` gives the scroll position that puts a
  clicked section just below the header.
"""

from dataclasses import dataclass, field

from api_reference.catalog.base import ApiCategory
from api_reference.search import count_endpoints, filter_categories

# Height of the sticky header, in pixels.
HEADER_OFFSET = 100


@dataclass(frozen=True)
class SectionBounds:
    """Vertical extent of one rendered category section, in page coordinates."""

    category_id: str
    top: float
    height: float

    def contains(self, y: float) -> bool:
        return self.top <= y < self.top + self.height


def active_category_at(
    sections: list[SectionBounds], scroll_y: float, offset: float = HEADER_OFFSET
) -> str | None:
    """Id of the first section containing the point scroll_y + offset."""
    point = scroll_y + offset
    for section in sections:
        if section.contains(point):
            return section.category_id
    return None


def scroll_target(section_top: float, offset: float = HEADER_OFFSET) -> float:
    """Scroll position that puts a section just below the header."""
    return section_top - offset


@dataclass
class ViewState:
    search_query: str = ""
    expanded: set[str] = field(default_factory=set)
    active_category: str | None = None

    def toggle_endpoint(self, endpoint_id: str) -> None:
        if endpoint_id in self.expanded:
            self.expanded.remove(endpoint_id)
        else:
            self.expanded.add(endpoint_id)

    def is_expanded(self, endpoint_id: str) -> bool:
        return endpoint_id in self.expanded

    def select_category(self, category_id: str) -> None:
        self.active_category = category_id

    def observe_scroll(self, sections: list[SectionBounds], scroll_y: float) -> None:
        """Follow the scroll position; keeps the last highlight between sections."""
        found = active_category_at(sections, scroll_y)
        if found is not None:
            self.active_category = found

    def visible_categories(self, categories: list[ApiCategory]) -> list[ApiCategory]:
        return filter_categories(categories, self.search_query)

    def match_count(self, categories: list[ApiCategory]) -> int:
        return count_endpoints(self.visible_categories(categories))
