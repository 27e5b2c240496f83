"""Cart models with Decimal-based pricing."""
from dataclasses import dataclass, field, replace
from decimal import Decimal
from typing import Optional, List

from freshcart.services.models import Product
from freshcart.services.money import format_money, multiply, parse_stored_price, to_decimal


@dataclass
class CartLine:
    """One product's entry in the cart.

    Name, price, image and category are copied from the product when the line
    is created; later catalog changes do not reach existing lines.
    """
    id: str
    name: str
    price: Decimal
    quantity: int = 1
    image: Optional[str] = None
    category: Optional[str] = None

    def __post_init__(self):
        self.price = to_decimal(self.price)

    @classmethod
    def from_product(cls, product: Product) -> "CartLine":
        return cls(
            id=product.id,
            name=product.name,
            price=product.price,
            quantity=1,
            image=product.image,
            category=product.category,
        )

    @property
    def total_price(self) -> Decimal:
        """Total price for all units (full precision)."""
        return multiply(self.price, self.quantity)

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "id": self.id,
            "name": self.name,
            "price": str(self.price),
            "image": self.image,
            "category": self.category,
            "quantity": self.quantity,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "CartLine":
        """Create from dictionary.

        Raises ValueError for entries that break the line rules, so a bad
        snapshot is rejected whole instead of loading with made-up values.
        """
        line_id = data["id"]
        if isinstance(line_id, bool) or not isinstance(line_id, (str, int)) or not str(line_id).strip():
            raise ValueError(f"invalid line id: {line_id!r}")

        name = data["name"]
        if not isinstance(name, str) or not name.strip():
            raise ValueError(f"invalid name for line {line_id!r}: {name!r}")

        quantity = data["quantity"]
        if isinstance(quantity, bool) or not isinstance(quantity, int):
            raise ValueError(f"quantity must be an integer, got {quantity!r}")
        if quantity < 1:
            raise ValueError(f"quantity must be >= 1, got {quantity}")

        return cls(
            id=str(line_id),
            name=name,
            price=parse_stored_price(data["price"]),
            quantity=quantity,
            image=data.get("image"),
            category=data.get("category"),
        )


@dataclass(frozen=True)
class CartTotals:
    """Aggregates derived from the cart lines."""
    item_count: int
    total: Decimal

    def display_total(self, currency: str = "INR") -> str:
        return format_money(self.total, currency)


@dataclass
class Cart:
    """Ordered cart lines, at most one per product id."""
    lines: List[CartLine] = field(default_factory=list)

    def copy(self) -> "Cart":
        """Independent copy; later changes to either cart do not reach the other."""
        return Cart(lines=[replace(line) for line in self.lines])

    def find(self, product_id: str) -> Optional[CartLine]:
        return next((line for line in self.lines if line.id == product_id), None)

    def quantity_of(self, product_id: str) -> int:
        """Quantity of product_id in the cart, 0 when absent."""
        line = self.find(product_id)
        return line.quantity if line else 0

    @property
    def is_empty(self) -> bool:
        return not self.lines

    @property
    def item_count(self) -> int:
        """Total number of units in cart."""
        return sum(line.quantity for line in self.lines)

    @property
    def total(self) -> Decimal:
        return sum((line.total_price for line in self.lines), Decimal("0"))

    def to_list(self) -> list[dict]:
        """Snapshot written to the ``cartItems`` key and sent to the mirror."""
        return [line.to_dict() for line in self.lines]

    @classmethod
    def from_list(cls, data: list) -> "Cart":
        """Create from a ``cartItems`` snapshot.

        Duplicate ids are folded into the first line so the one-line-per-id
        rule holds even for snapshots written by older clients.
        """
        if not isinstance(data, list):
            raise ValueError(f"expected a JSON array, got {type(data).__name__}")
        cart = cls()
        for item in data:
            line = CartLine.from_dict(item)
            existing = cart.find(line.id)
            if existing:
                existing.quantity += line.quantity
            else:
                cart.lines.append(line)
        return cart
