"""
FreshCart Core

Catalog and cart state for a small grocery shop:
- catalog: product list, category filter, product creation
- cart: cart lines, quantity rules, aggregates
- services: models, money, durable store, remote cart mirror
- shop: session wiring and read models

Imports are lazy so that ``freshcart.logging`` configures logging before
anything else is loaded.
"""

__all__ = [
    "Shop",
    "create_shop",
    "CatalogStore",
    "CartEngine",
]


def __getattr__(name):
    """Lazy attribute access."""
    if name in ("Shop", "create_shop"):
        from freshcart import shop
        return getattr(shop, name)
    if name == "CatalogStore":
        from freshcart.catalog import CatalogStore
        return CatalogStore
    if name == "CartEngine":
        from freshcart.cart import CartEngine
        return CartEngine
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
