"""Read-only lookups over a loaded catalog."""

from api_reference.catalog.base import ApiCategory, Catalog


class CategoryNotFoundError(LookupError):
    def __init__(self, category_id: str):
        super().__init__(f"Category not found: {category_id}")
        self.category_id = category_id


class CatalogService:
    """Serves categories from an immutable catalog."""

    def __init__(self, catalog: Catalog):
        self.catalog = catalog
        self._by_id = {c.id: c for c in catalog.categories}

    @property
    def info(self):
        return self.catalog.info

    def list_categories(self) -> list[ApiCategory]:
        return self.catalog.categories

    def get_category(self, category_id: str) -> ApiCategory:
        """Return the category with this id, or raise CategoryNotFoundError."""
        try:
            return self._by_id[category_id]
        except KeyError:
            raise CategoryNotFoundError(category_id) from None

    def endpoint_count(self) -> int:
        return sum(len(c.endpoints) for c in self.catalog.categories)
