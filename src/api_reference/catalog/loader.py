"""Catalog document loader.

Parses the YAML catalog shipped with the package (or any file with the
same layout) into Catalog models and checks id uniqueness.
"""

import logging
from collections import Counter
from functools import lru_cache
from pathlib import Path

import yaml
from pydantic import ValidationError

from .base import ApiCategory, Catalog

logger = logging.getLogger(__name__)

DATA_DIR = Path(__file__).parent / "data"
DEFAULT_CATALOG_PATH = DATA_DIR / "commonwell-v4.3.yaml"


class CatalogError(ValueError):
    """Raised when a catalog document cannot be turned into a valid Catalog."""


def load_catalog(file_path: Path | None = None) -> Catalog:
    """Load and validate a catalog document.

    Defaults to the bundled CommonWell v4.3 catalog.
    """
    path = Path(file_path) if file_path else DEFAULT_CATALOG_PATH
    try:
        doc = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as e:
        raise CatalogError(f"{path}: invalid YAML: {e}") from e

    if not isinstance(doc, dict):
        raise CatalogError(f"{path}: expected a mapping at the top level")

    try:
        catalog = Catalog.model_validate(doc)
    except ValidationError as e:
        raise CatalogError(f"{path}: {e}") from e

    _check_unique_ids(catalog.categories)
    logger.info(
        "Loaded catalog %s: %d categories, %d endpoints",
        path.name,
        len(catalog.categories),
        sum(len(c.endpoints) for c in catalog.categories),
    )
    return catalog


@lru_cache(maxsize=1)
def default_catalog() -> Catalog:
    """The bundled catalog, loaded once per process."""
    return load_catalog()


def _check_unique_ids(categories: list[ApiCategory]) -> None:
    category_ids = Counter(c.id for c in categories)
    endpoint_ids = Counter(ep.id for c in categories for ep in c.endpoints)

    dupes = sorted(i for i, n in category_ids.items() if n > 1)
    if dupes:
        raise CatalogError(f"Duplicate category ids: {', '.join(dupes)}")

    dupes = sorted(i for i, n in endpoint_ids.items() if n > 1)
    if dupes:
        raise CatalogError(f"Duplicate endpoint ids: {', '.join(dupes)}")
