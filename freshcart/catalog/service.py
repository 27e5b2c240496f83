"""Catalog store: owns the product list and its durable snapshot."""
import json
import uuid
from typing import Optional

from pydantic import ValidationError as PydanticValidationError

from freshcart.db import StoreKeys
from freshcart.errors import PersistenceError, ValidationError
from freshcart.logging import get_logger, sanitize_id_for_logging, sanitize_string_for_logging
from freshcart.services.models import ALL_CATEGORIES, CategoryOption, Product, ProductDraft
from freshcart.services.storage import KeyValueStore, WriteResult, log_write_result

from .seed import category_image, category_options, default_products

logger = get_logger(__name__)


def decode_products(raw: str) -> list[Product]:
    """Parse a ``products`` snapshot. Raises ValueError on any malformed content."""
    data = json.loads(raw)
    if not isinstance(data, list):
        raise ValueError(f"expected a JSON array, got {type(data).__name__}")
    try:
        return [Product(**item) for item in data]
    except (PydanticValidationError, TypeError) as e:
        raise ValueError(str(e)) from e


def encode_products(products: list[Product]) -> str:
    return json.dumps([product.to_dict() for product in products])


class CatalogStore:
    """
    Catalog store.

    Holds the product list in memory and writes the whole list back to the
    durable store on every change. Read failures fall back to the built-in
    seed catalog.

    Usage:
        catalog = CatalogStore(store)
        await catalog.load()
        fruits = catalog.list_by_category("fruits")
        product = await catalog.add(ProductDraft(name="Mango", price="90", category="fruits"))
    """

    def __init__(self, store: KeyValueStore):
        self.store = store
        self.products: list[Product] = []
        self.last_write: Optional[WriteResult] = None

    async def load(self) -> list[Product]:
        """Load the persisted catalog, seeding the defaults when there is none."""
        try:
            raw = await self.store.read(StoreKeys.PRODUCTS)
        except PersistenceError as e:
            logger.error(f"Error loading products, using defaults: {e}")
            self.products = default_products()
            return list(self.products)

        if raw is None:
            self.products = default_products()
            logger.info(f"No saved catalog, seeding {len(self.products)} default products")
            await self._persist()
            return list(self.products)

        try:
            self.products = decode_products(raw)
        except ValueError as e:
            # Keep the unreadable snapshot; the next successful add overwrites it
            logger.warning(f"Corrupted catalog snapshot, using defaults: {e}")
            self.products = default_products()
            return list(self.products)

        logger.info(f"Loaded {len(self.products)} products")
        return list(self.products)

    def list_by_category(self, category: str = ALL_CATEGORIES) -> list[Product]:
        if category == ALL_CATEGORIES:
            return list(self.products)
        return [product for product in self.products if product.category == category]

    def find_by_id(self, product_id: str) -> Optional[Product]:
        return next((product for product in self.products if product.id == product_id), None)

    def categories(self) -> list[CategoryOption]:
        return category_options()

    async def add(self, draft) -> Product:
        """
        Validate a draft and append it to the catalog.

        Args:
            draft: ProductDraft or a mapping with name/price/category/image

        Returns:
            The created product with a fresh id

        Raises:
            ValidationError: If name is blank or price is not a non-negative number
        """
        if not isinstance(draft, ProductDraft):
            draft = validate_draft(draft)

        product = Product(
            id=self._new_id(),
            name=draft.name,
            price=draft.price,
            category=draft.category,
            image=draft.image or category_image(draft.category.value),
        )

        self.products = [*self.products, product]
        logger.info(
            f"Product added: {sanitize_string_for_logging(product.name)} "
            f"(id={sanitize_id_for_logging(product.id)})"
        )
        await self._persist()
        return product

    def _new_id(self) -> str:
        existing = {product.id for product in self.products}
        while True:
            candidate = str(uuid.uuid4())
            if candidate not in existing:
                return candidate

    async def _persist(self) -> WriteResult:
        result = await self.store.write(StoreKeys.PRODUCTS, encode_products(self.products))
        self.last_write = log_write_result(result, "catalog")
        return result


def validate_draft(data) -> ProductDraft:
    """Build a ProductDraft, translating pydantic errors into ValidationError."""
    try:
        return ProductDraft(**dict(data))
    except PydanticValidationError as e:
        error = e.errors()[0]
        field = str(error["loc"][0]) if error.get("loc") else "draft"
        cause = error.get("ctx", {}).get("error")
        raise ValidationError(field, str(cause) if cause else error["msg"]) from None
