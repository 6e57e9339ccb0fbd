"""Weekly shopping list synthesis from generated meal patterns."""

import logging
import math
from dataclasses import dataclass

from macrofit.domain.meal_plans import (
    MealIngredient,
    MealPattern,
    MealPatterns,
    WeeklySchedule,
)
from macrofit.domain.shopping import (
    Priority,
    ShoppingCategory,
    ShoppingItem,
    ShoppingList,
)

_logger = logging.getLogger(__name__)

CATEGORY_STAPLES = "主食・穀物"
CATEGORY_MEAT = "肉類"
CATEGORY_FISH = "魚介類"
CATEGORY_EGG_DAIRY = "卵・乳製品"
CATEGORY_DAIRY = "乳製品"
CATEGORY_SOY = "タンパク質・大豆製品"
CATEGORY_VEGETABLES = "野菜"
CATEGORY_FRUIT = "果物"
CATEGORY_OTHER = "その他"

UNIT_GRAMS = "g"
UNIT_ML = "ml"
UNIT_RAW_RICE_GRAMS = "g(生米)"
UNIT_SLICES = "枚"
UNIT_LOAVES = "斤"
PIECE_UNITS = frozenset({"個", "本", "パック", "丁", "玉", "束", UNIT_LOAVES})

COOKED_TO_RAW_RICE = 2.2
GRAMS_PER_SLICE = 57
SLICES_PER_LOAF = 6

MILK_NAME = "牛乳"
MILK_PER_SHAKE_ML = 200
MILK_PRICE_PER_LITRE = 200

BREAKFAST_USES_PER_WEEK = 7
FALLBACK_PRICE_PER_UNIT = 50
DEFAULT_PRICE_PER_100G = 100
DEFAULT_PRICE_PER_LITRE = 200

_SEASONINGS = (
    "塩",
    "胡椒",
    "砂糖",
    "醤油",
    "味噌",
    "みりん",
    "酒",
    "ごま油",
    "オリーブオイル",
    "サラダ油",
    "バター",
)
_PROTEIN_POWDERS = ("プロテイン", "プロテインパウダー", "ホエイプロテイン")

_RICE_KEYWORDS = ("米", "ご飯", "ごはん", "ライス")
_BREAD_KEYWORDS = ("パン",)
_PER_KG_KEYWORDS = (*_RICE_KEYWORDS, "オートミール", "パスタ")

# Checked in order, first match wins. Meat comes before egg and dairy, so
# 鶏卵 and a recipe 牛乳 land in 肉類; seeded shake milk keeps 乳製品.
_CATEGORY_KEYWORDS: tuple[tuple[str, tuple[str, ...]], ...] = (
    (CATEGORY_STAPLES, ("米", "パン", "オートミール", "パスタ", "うどん", "そば")),
    (CATEGORY_MEAT, ("鶏", "豚", "牛", "肉")),
    (CATEGORY_FISH, ("魚", "サーモン", "まぐろ")),
    (CATEGORY_EGG_DAIRY, ("卵",)),
    (CATEGORY_DAIRY, ("牛乳", "チーズ", "ヨーグルト")),
    (CATEGORY_SOY, ("豆腐", "納豆")),
    (CATEGORY_VEGETABLES, ("野菜", "ブロッコリー", "ほうれん草")),
    (CATEGORY_FRUIT, ("果物", "バナナ", "りんご")),
)

_HIGH_PRIORITY_CATEGORIES = frozenset(
    {CATEGORY_STAPLES, CATEGORY_MEAT, CATEGORY_FISH, CATEGORY_EGG_DAIRY, CATEGORY_SOY}
)
_PRIORITY_RANK: dict[Priority, int] = {"high": 0, "medium": 1, "low": 2}

# Yen per kg for grains, per loaf for bread, per 100 g for other foods sold by
# weight, per litre for liquids and per piece for countable items.
PRICE_TABLE: dict[str, int] = {
    "米": 400,
    "白米": 400,
    "玄米": 500,
    "オートミール": 600,
    "パスタ": 400,
    "食パン": 150,
    "パン": 150,
    "うどん": 100,
    "そば": 150,
    "鶏むね肉": 100,
    "鶏もも肉": 120,
    "鶏ささみ": 150,
    "豚肉": 150,
    "牛肉": 250,
    "サーモン": 300,
    "まぐろ": 400,
    "白身魚": 200,
    "エビ": 400,
    "卵": 25,
    "牛乳": 200,
    "豆腐": 80,
    "納豆": 30,
    "ブロッコリー": 150,
    "ほうれん草": 100,
    "バナナ": 30,
    "りんご": 100,
}


@dataclass(frozen=True)
class NormalizedAmount:
    """Ingredient quantity converted to the unit it is bought in."""

    amount: float
    unit: str


@dataclass
class _Accumulated:
    amount: float
    unit: str
    estimated_price: float
    category: str


def _contains_any(name: str, keywords: tuple[str, ...]) -> bool:
    lowered = name.lower()
    return any(keyword in lowered for keyword in keywords)


def is_pantry_staple(name: str) -> bool:
    """Seasonings, oils and protein powders are assumed to be on hand."""
    return _contains_any(name, _SEASONINGS) or _contains_any(name, _PROTEIN_POWDERS)


def is_rice(name: str) -> bool:
    return _contains_any(name, _RICE_KEYWORDS)


def is_bread(name: str) -> bool:
    return _contains_any(name, _BREAD_KEYWORDS)


def categorize_ingredient(name: str) -> str:
    """Return the store section for an ingredient name."""
    for category, keywords in _CATEGORY_KEYWORDS:
        if _contains_any(name, keywords):
            return category
    return CATEGORY_OTHER


def priority_for_category(category: str) -> Priority:
    if category in _HIGH_PRIORITY_CATEGORIES:
        return "high"
    if category == CATEGORY_VEGETABLES:
        return "medium"
    return "low"


def normalize_amount(name: str, amount: float, unit: str) -> NormalizedAmount:
    """Convert cooked rice to raw weight and bread to slices."""
    if is_rice(name) and unit == UNIT_GRAMS:
        return NormalizedAmount(
            amount=round(amount / COOKED_TO_RAW_RICE, 2), unit=UNIT_RAW_RICE_GRAMS
        )
    if is_bread(name):
        if unit == UNIT_GRAMS:
            return NormalizedAmount(
                amount=round(amount / GRAMS_PER_SLICE, 2), unit=UNIT_SLICES
            )
        if unit == UNIT_LOAVES:
            return NormalizedAmount(amount=amount * SLICES_PER_LOAF, unit=UNIT_SLICES)
    return NormalizedAmount(amount=amount, unit=unit)


def canonical_price_key(name: str) -> str | None:
    """Match a name to the price table, exactly or by the longest contained key."""
    if name in PRICE_TABLE:
        return name
    matches = [key for key in PRICE_TABLE if key in name]
    if not matches:
        return None
    return max(matches, key=len)


def estimate_price(name: str, amount: float, unit: str) -> int:
    """Estimate the yen cost of ``amount`` of an ingredient in a normalized unit."""
    key = canonical_price_key(name)
    listed = PRICE_TABLE.get(key) if key is not None else None

    if unit == UNIT_RAW_RICE_GRAMS:
        unit_price = listed or PRICE_TABLE["白米"]
        return math.ceil(amount * unit_price / 1000)
    if unit == UNIT_GRAMS:
        unit_price = listed or DEFAULT_PRICE_PER_100G
        if _contains_any(name, _PER_KG_KEYWORDS):
            return math.ceil(amount * unit_price / 1000)
        return math.ceil(amount * unit_price / 100)
    if unit == UNIT_SLICES:
        loaf_price = listed or PRICE_TABLE["食パン"]
        return math.ceil(amount * loaf_price / SLICES_PER_LOAF)
    if unit == UNIT_ML:
        unit_price = listed or DEFAULT_PRICE_PER_LITRE
        return math.ceil(amount * unit_price / 1000)
    if unit in PIECE_UNITS:
        unit_price = listed or FALLBACK_PRICE_PER_UNIT
        return math.ceil(amount * unit_price)
    return math.ceil(amount * FALLBACK_PRICE_PER_UNIT)


def weekly_usage(schedule: WeeklySchedule) -> list[tuple[str, int]]:
    """Slot names with how many times each is eaten per week."""
    return [
        ("breakfast", BREAKFAST_USES_PER_WEEK),
        ("lunch_a", schedule.count("lunch", "patternA")),
        ("lunch_b", schedule.count("lunch", "patternB")),
        ("dinner_a", schedule.count("dinner", "patternA")),
        ("dinner_b", schedule.count("dinner", "patternB")),
    ]


def build_shopping_list(
    patterns: MealPatterns,
    schedule: WeeklySchedule | None = None,
    protein_intake_frequency: int = 0,
) -> ShoppingList:
    """Aggregate a week of meal patterns into a priced, categorized list."""
    resolved_schedule = schedule or WeeklySchedule.default()
    accumulated: dict[str, _Accumulated] = {}

    if protein_intake_frequency > 0:
        milk_ml = MILK_PER_SHAKE_ML * 7 * protein_intake_frequency
        accumulated[MILK_NAME] = _Accumulated(
            amount=milk_ml,
            unit=UNIT_ML,
            estimated_price=math.ceil(milk_ml * MILK_PRICE_PER_LITRE / 1000),
            category=CATEGORY_DAIRY,
        )

    for slot, uses in weekly_usage(resolved_schedule):
        pattern: MealPattern | None = getattr(patterns, slot)
        if pattern is None or not pattern.has_ingredients:
            _logger.debug("Shopping list: slot %s has no ingredients", slot)
            continue
        for ingredient in pattern.ingredients or []:
            _add_ingredient(accumulated, ingredient, uses)

    return _to_shopping_list(accumulated)


def _add_ingredient(
    accumulated: dict[str, _Accumulated], ingredient: MealIngredient, uses: int
) -> None:
    if is_pantry_staple(ingredient.name):
        return
    normalized = normalize_amount(ingredient.name, ingredient.amount, ingredient.unit)
    weekly_amount = normalized.amount * uses
    price = estimate_price(ingredient.name, weekly_amount, normalized.unit)

    existing = accumulated.get(ingredient.name)
    if existing is None:
        accumulated[ingredient.name] = _Accumulated(
            amount=weekly_amount,
            unit=normalized.unit,
            estimated_price=price,
            category=categorize_ingredient(ingredient.name),
        )
        return
    existing.amount += weekly_amount
    existing.estimated_price += price


def _to_shopping_list(accumulated: dict[str, _Accumulated]) -> ShoppingList:
    grouped: dict[str, list[ShoppingItem]] = {}
    for name, entry in accumulated.items():
        grouped.setdefault(entry.category, []).append(
            ShoppingItem(
                name=name,
                amount=math.ceil(entry.amount),
                unit=entry.unit,
                estimated_price=math.ceil(entry.estimated_price),
                priority=priority_for_category(entry.category),
            )
        )

    categories = [
        ShoppingCategory(
            name=category,
            items=sorted(items, key=lambda item: _PRIORITY_RANK[item.priority]),
        )
        for category, items in grouped.items()
    ]
    total = math.ceil(sum(entry.estimated_price for entry in accumulated.values()))
    return ShoppingList(total_cost=total, categories=categories)
