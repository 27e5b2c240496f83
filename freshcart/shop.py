"""
Shop session.

Wires the catalog store and the cart engine to one durable store and one
cart mirror, and builds the read models the presentation layer renders.
"""
from dataclasses import dataclass
from typing import Optional

from freshcart.cart import Cart, CartEngine
from freshcart.catalog import CatalogStore
from freshcart.db import redis_configured
from freshcart.logging import get_logger
from freshcart.services.mirror import CartMirror
from freshcart.services.models import ALL_CATEGORIES, Product
from freshcart.services.money import format_money, to_float
from freshcart.services.storage import KeyValueStore, MemoryStore, RedisStore

logger = get_logger(__name__)


@dataclass(frozen=True)
class ProductView:
    """A catalog product with the quantity currently in the cart."""
    product: Product
    in_cart: int

    @property
    def display_price(self) -> str:
        return format_money(self.product.price)


class Shop:
    """
    One shopping session.

    Usage:
        shop = create_shop()
        await shop.start()
        views = shop.product_views("fruits")
        await shop.add_to_cart("4")
        summary = shop.cart_summary()
        await shop.close()
    """

    def __init__(self, store: KeyValueStore, mirror: Optional[CartMirror] = None):
        self.store = store
        self.mirror = mirror
        self.catalog = CatalogStore(store)
        self.cart_engine = CartEngine(store, mirror)

    @property
    def cart(self) -> Cart:
        """The live session cart. Read it, do not keep it across mutations."""
        return self.cart_engine.cart

    async def start(self) -> None:
        """Load the catalog, then the cart."""
        await self.catalog.load()
        await self.cart_engine.load()

    async def add_to_cart(self, product_id: str) -> Cart:
        """Add one unit of a catalog product. Unknown ids leave the cart unchanged."""
        product = self.catalog.find_by_id(product_id)
        if product is None:
            logger.warning(f"Add to cart ignored, product not in catalog: {product_id!r}")
            return self.cart.copy()
        return await self.cart_engine.add_item(product)

    def product_views(self, category: str = ALL_CATEGORIES) -> list[ProductView]:
        return [
            ProductView(product=product, in_cart=self.cart.quantity_of(product.id))
            for product in self.catalog.list_by_category(category)
        ]

    def badge_count(self) -> int:
        """Number shown on the cart icon."""
        return self.cart.item_count

    def cart_summary(self) -> dict:
        """Cart summary for rendering the cart screen."""
        totals = self.cart_engine.totals()

        if self.cart.is_empty:
            return {
                "is_empty": True,
                "item_count": 0,
                "items": [],
                "total": 0.0,
                "display_total": totals.display_total(),
            }

        return {
            "is_empty": False,
            "item_count": totals.item_count,
            "items": [
                {
                    "id": line.id,
                    "name": line.name,
                    "image": line.image,
                    "quantity": line.quantity,
                    "unit_price": to_float(line.price),
                    "display_price": format_money(line.price),
                    "total": to_float(line.total_price),
                    # Decrement is disabled at quantity 1
                    "can_decrement": line.quantity > 1,
                }
                for line in self.cart.lines
            ],
            "total": to_float(totals.total),
            "display_total": totals.display_total(),
        }

    async def close(self) -> None:
        if self.mirror is not None:
            await self.mirror.aclose()


def create_shop(store: Optional[KeyValueStore] = None, mirror: Optional[CartMirror] = None) -> Shop:
    """Build a Shop from the environment.

    Uses Upstash Redis when credentials are set, otherwise an in-memory store.
    """
    if store is None:
        if redis_configured():
            store = RedisStore()
        else:
            logger.warning("Redis not configured, cart and catalog will not survive a restart")
            store = MemoryStore()
    if mirror is None:
        mirror = CartMirror()
    return Shop(store, mirror)
