"""Cart engine: applies cart intents and keeps the snapshot durable."""
import json
from typing import Optional

from freshcart.db import StoreKeys
from freshcart.errors import ERROR_CORRUPTED_SNAPSHOT, PersistenceError
from freshcart.logging import get_logger, sanitize_id_for_logging, sanitize_string_for_logging
from freshcart.services.mirror import CartMirror
from freshcart.services.models import Product
from freshcart.services.storage import KeyValueStore, WriteResult, log_write_result

from .models import Cart, CartLine, CartTotals

logger = get_logger(__name__)


def aggregate(cart: Cart) -> CartTotals:
    """Item count and total of a cart. Pure; total keeps full precision."""
    return CartTotals(item_count=cart.item_count, total=cart.total)


class CartEngine:
    """
    Owns the session cart.

    Every mutation updates the in-memory cart first, then writes the whole
    line list to the durable store and schedules a remote mirror call.
    Write failures are logged and leave the in-memory cart as it is.

    Operations return a copy of the cart; ``engine.cart`` is the live one.

    Usage:
        engine = CartEngine(store, mirror)
        await engine.load()
        cart = await engine.add_item(product)
        cart = await engine.change_quantity(product.id, -1)
        totals = engine.totals()
    """

    def __init__(self, store: KeyValueStore, mirror: Optional[CartMirror] = None):
        self.store = store
        self.mirror = mirror
        self.cart = Cart()
        self.last_write: Optional[WriteResult] = None

    async def load(self) -> Cart:
        """Load the persisted cart; absent or unreadable snapshots give an empty cart."""
        try:
            raw = await self.store.read(StoreKeys.CART_ITEMS)
        except PersistenceError as e:
            logger.error(f"Error loading cart from storage: {e}")
            self.cart = Cart()
            return self.cart.copy()

        if raw is None:
            self.cart = Cart()
            return self.cart.copy()

        try:
            self.cart = Cart.from_list(json.loads(raw))
        except (json.JSONDecodeError, KeyError, TypeError, ValueError) as e:
            # Corrupted data - clear it and start empty
            logger.warning(f"{ERROR_CORRUPTED_SNAPSHOT} ({StoreKeys.CART_ITEMS}): {e}")
            log_write_result(await self.store.delete(StoreKeys.CART_ITEMS), "cart cleanup")
            self.cart = Cart()
            return self.cart.copy()

        logger.info(f"Loaded cart with {len(self.cart.lines)} lines")
        return self.cart.copy()

    async def add_item(self, product: Product) -> Cart:
        """Add one unit of product, merging with an existing line of the same id."""
        existing = self.cart.find(product.id)
        if existing:
            existing.quantity += 1
        else:
            self.cart.lines.append(CartLine.from_product(product))

        logger.info(
            f"Added to cart: {sanitize_string_for_logging(product.name)} "
            f"(id={sanitize_id_for_logging(product.id)}, qty={self.cart.quantity_of(product.id)})"
        )
        await self._persist()
        return self.cart.copy()

    async def change_quantity(self, product_id: str, delta: int) -> Cart:
        """Shift a line's quantity by delta, never below 1. Unknown ids are ignored."""
        line = self.cart.find(product_id)
        if line is None:
            return self.cart.copy()

        line.quantity = max(1, line.quantity + delta)
        await self._persist()
        return self.cart.copy()

    async def remove_item(self, product_id: str) -> Cart:
        """Drop the line for product_id. Unknown ids are ignored."""
        if self.cart.find(product_id) is None:
            return self.cart.copy()

        self.cart.lines = [line for line in self.cart.lines if line.id != product_id]
        logger.info(f"Removed from cart: id={sanitize_id_for_logging(product_id)}")
        await self._persist()
        return self.cart.copy()

    async def clear(self) -> Cart:
        """Empty the cart (checkout hand-off)."""
        self.cart.lines = []
        await self._persist()
        return self.cart.copy()

    def totals(self) -> CartTotals:
        return aggregate(self.cart)

    async def _persist(self) -> WriteResult:
        snapshot = self.cart.to_list()
        result = await self.store.write(StoreKeys.CART_ITEMS, json.dumps(snapshot))
        self.last_write = log_write_result(result, "cart")
        if self.mirror is not None:
            self.mirror.schedule(snapshot)
        return result
