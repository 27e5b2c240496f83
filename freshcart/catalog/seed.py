"""Built-in catalog used when nothing has been persisted yet."""
from freshcart.services.models import ALL_CATEGORIES, Category, CategoryOption, Product

CATEGORY_IMAGES = {
    Category.VEGETABLES: "assets/vegetables.png",
    Category.FRUITS: "assets/fruits.png",
    Category.GRAINS: "assets/grains.png",
    Category.DAIRY: "assets/dairy.png",
}

# (id, name, price, category)
_SEED = [
    ("1", "Tomatoes", 40, Category.VEGETABLES),
    ("2", "Potatoes", 20, Category.VEGETABLES),
    ("3", "Carrots", 60, Category.VEGETABLES),
    ("4", "Apples", 100, Category.FRUITS),
    ("5", "Bananas", 50, Category.FRUITS),
    ("6", "Oranges", 80, Category.FRUITS),
    ("7", "Rice", 70, Category.GRAINS),
    ("8", "Wheat", 45, Category.GRAINS),
    ("9", "Milk", 55, Category.DAIRY),
    ("10", "Cheese", 120, Category.DAIRY),
]


def category_image(category: str) -> str:
    """Image reference for a category; unknown categories get the vegetables image."""
    try:
        return CATEGORY_IMAGES[Category(category)]
    except ValueError:
        return CATEGORY_IMAGES[Category.VEGETABLES]


def default_products() -> list[Product]:
    """Fresh copy of the 10 seed products."""
    return [
        Product(id=pid, name=name, price=price, category=category, image=CATEGORY_IMAGES[category])
        for pid, name, price, category in _SEED
    ]


def category_options() -> list[CategoryOption]:
    """Category filter entries, "all" first."""
    options = [CategoryOption(id=ALL_CATEGORIES, name="All", image=CATEGORY_IMAGES[Category.VEGETABLES])]
    options.extend(
        CategoryOption(id=category.value, name=category.label, image=CATEGORY_IMAGES[category])
        for category in Category
    )
    return options
