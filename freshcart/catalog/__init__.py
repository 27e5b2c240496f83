"""Catalog package: seed data and the catalog store."""
from .seed import category_image, category_options, default_products
from .service import CatalogStore, validate_draft

__all__ = [
    "CatalogStore",
    "validate_draft",
    "category_image",
    "category_options",
    "default_products",
]
