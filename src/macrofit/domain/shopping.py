"""Shopping list domain models."""

from dataclasses import dataclass
from typing import Literal

Priority = Literal["high", "medium", "low"]


@dataclass(frozen=True)
class ShoppingItem:
    """Weekly quantity of one ingredient to buy."""

    name: str
    amount: int
    unit: str
    estimated_price: int
    priority: Priority


@dataclass(frozen=True)
class ShoppingCategory:
    """Items of one store section, most important first."""

    name: str
    items: list[ShoppingItem]


@dataclass(frozen=True)
class ShoppingList:
    """Categorized weekly shopping list with a total cost in yen."""

    total_cost: int
    categories: list[ShoppingCategory]
