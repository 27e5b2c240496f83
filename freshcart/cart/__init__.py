"""Cart package: models and the cart engine."""
from .models import Cart, CartLine, CartTotals
from .service import CartEngine, aggregate

__all__ = [
    "Cart",
    "CartLine",
    "CartTotals",
    "CartEngine",
    "aggregate",
]
