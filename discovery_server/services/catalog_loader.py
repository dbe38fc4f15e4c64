"""
Catalog Loader

Loads the static style catalog and item pool from a catalog directory.
Each catalog must have styles.json ({"styles": [...]}) and images.json
({"images": [...]}).

Usage:
    loader = CatalogLoader(catalog_dir)
    catalog = loader.load()
    print(f"Loaded {len(catalog.styles)} styles, {len(catalog.items)} items")
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

from discovery.models.catalog import Catalog, StyleCatalogEntry, ensure_items

logger = logging.getLogger(__name__)


class CatalogError(Exception):
    """Catalog files are missing, unreadable, or inconsistent."""

    def __init__(self, message: str, errors: Optional[List[str]] = None):
        super().__init__(message)
        self.errors = errors or []


class CatalogLoader:
    """
    Loads catalogs from a directory.

    Expected directory structure:
        data/catalog/
        ├── styles.json
        └── images.json
    """

    def __init__(self, catalog_dir: Path):
        self.catalog_dir = Path(catalog_dir)
        self._catalog: Optional[Catalog] = None

    def _read(self, filename: str, key: str) -> List[Dict[str, Any]]:
        path = self.catalog_dir / filename
        try:
            with open(path) as f:
                data = json.load(f)
        except (json.JSONDecodeError, IOError) as e:
            raise CatalogError(f"Failed to read {path}: {e}") from e
        records = data.get(key) if isinstance(data, dict) else data
        if not isinstance(records, list):
            raise CatalogError(f'Invalid {filename} structure: "{key}" array not found')
        return records

    def load(self, validate: bool = True) -> Catalog:
        """
        Load (and cache) the catalog.

        Raises:
            CatalogError: If files are missing or malformed, or if validate is
                True and the catalog is inconsistent.
        """
        if self._catalog is not None:
            return self._catalog

        styles = [StyleCatalogEntry.model_validate(s) for s in self._read("styles.json", "styles")]
        items = ensure_items(self._read("images.json", "images"))
        catalog = Catalog(styles=styles, items=items)

        if validate:
            errors = catalog.validate_consistency()
            if errors:
                raise CatalogError(f"Catalog at {self.catalog_dir} is inconsistent", errors)

        logger.info("Loaded catalog: %d styles, %d items", len(styles), len(items))
        self._catalog = catalog
        return catalog
