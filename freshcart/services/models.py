"""Catalog Models - Pydantic models for products and product drafts."""
from decimal import Decimal
from enum import Enum
from typing import Optional, Union

from pydantic import BaseModel, field_validator

from freshcart.errors import (
    ERROR_INVALID_PRICE,
    ERROR_NAME_REQUIRED,
    ERROR_NEGATIVE_PRICE,
    ERROR_UNKNOWN_CATEGORY,
)
from freshcart.services.money import parse_price, parse_stored_price

ALL_CATEGORIES = "all"


class Category(str, Enum):
    """Product categories offered by the shop."""
    VEGETABLES = "vegetables"
    FRUITS = "fruits"
    GRAINS = "grains"
    DAIRY = "dairy"

    @property
    def label(self) -> str:
        return self.value.capitalize()


class Product(BaseModel):
    """Catalog product. Immutable once created."""
    id: str
    name: str
    price: Decimal
    # Stored as plain text so catalogs written with other categories still load
    category: str
    image: Optional[str] = None

    class Config:
        extra = "ignore"
        frozen = True

    @field_validator("id", "name")
    @classmethod
    def not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("must not be blank")
        return v

    @field_validator("price", mode="before")
    @classmethod
    def convert_price_to_decimal(cls, v):
        return parse_stored_price(v)

    @field_validator("category", mode="before")
    @classmethod
    def normalize_category(cls, v):
        if isinstance(v, Category):
            return v.value
        return v

    def to_dict(self) -> dict:
        """Convert to dictionary for the durable store."""
        return {
            "id": self.id,
            "name": self.name,
            "price": str(self.price),
            "image": self.image,
            "category": self.category,
        }


class ProductDraft(BaseModel):
    """User input for a new product, before an id is assigned.

    ``price`` accepts the raw text typed by the user.
    """
    name: str
    price: Decimal
    category: Category = Category.VEGETABLES
    image: Optional[str] = None

    @field_validator("name", mode="before")
    @classmethod
    def strip_name(cls, v):
        if not isinstance(v, str) or not v.strip():
            raise ValueError(ERROR_NAME_REQUIRED)
        return v.strip()

    @field_validator("price", mode="before")
    @classmethod
    def parse_draft_price(cls, v: Union[str, int, float, Decimal, None]):
        try:
            price = parse_price(v)
        except ValueError:
            raise ValueError(ERROR_INVALID_PRICE)
        if price < 0:
            raise ValueError(ERROR_NEGATIVE_PRICE)
        return price

    @field_validator("category", mode="before")
    @classmethod
    def known_category(cls, v):
        try:
            return Category(v)
        except ValueError:
            raise ValueError(f"{ERROR_UNKNOWN_CATEGORY}: {v!r}")

    @field_validator("image", mode="before")
    @classmethod
    def blank_image_is_none(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v


class CategoryOption(BaseModel):
    """Entry of the category filter bar."""
    id: str
    name: str
    image: Optional[str] = None
