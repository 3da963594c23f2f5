"""Substring search over the catalog."""

from api_reference.catalog.base import ApiCategory, ApiEndpoint

SEARCH_FIELDS = ("title", "endpoint", "method", "description")


def filter_categories(categories: list[ApiCategory], query: str) -> list[ApiCategory]:
    """Keep endpoints whose title, path, method or description contains query.

    Matching is case-insensitive substring containment. Categories left
    without endpoints are dropped. A blank query returns the input as is.
    """
    if not query.strip():
        return categories

    needle = query.lower()
    result = []
    for category in categories:
        matched = [ep for ep in category.endpoints if _matches(ep, needle)]
        if matched:
            result.append(category.model_copy(update={"endpoints": matched}))
    return result


def _matches(endpoint: ApiEndpoint, needle: str) -> bool:
    # method is matched like any other text field, so "GET" also hits "target"
    return any(needle in getattr(endpoint, f).lower() for f in SEARCH_FIELDS)


def count_endpoints(categories: list[ApiCategory]) -> int:
    return sum(len(c.endpoints) for c in categories)
