"""Data models for recipes, products and nutrition facts."""
import math
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, Iterator, List, Mapping, Optional, Tuple, Union


class Nutrition(Enum):
    """Nutrients tracked per 100g. Member order is the display order."""

    ENERGY = "Energy"
    PROTEINS = "Proteins"
    FATS = "Fats"
    CARBOHYDRATES = "Carbohydrates"

    @classmethod
    def from_name(cls, name: str) -> "Nutrition":
        """Look up a nutrient by its document spelling (e.g. "Energy").

        Raises:
            ValueError: If the name is not one of the known nutrients
        """
        try:
            return cls(name)
        except ValueError:
            allowed = ", ".join(n.value for n in cls)
            raise ValueError(f"Unknown nutrient '{name}' (expected one of: {allowed})") from None


@dataclass(frozen=True)
class NutritionFacts:
    """Immutable mapping of nutrient to amount, conventionally per 100g.

    A nutrient missing from the mapping means "no data", not zero.
    """

    amounts: Mapping[Nutrition, float] = field(default_factory=dict)

    def __post_init__(self):
        # Private copy behind a read-only view
        object.__setattr__(self, "amounts", MappingProxyType(dict(self.amounts)))

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> "NutritionFacts":
        """Build facts from a mapping keyed by nutrient spelling.

        Args:
            raw: Mapping like {"Energy": 884, "Fats": 100}

        Returns:
            NutritionFacts instance

        Raises:
            ValueError: On unknown nutrient names or non-numeric amounts
        """
        amounts: Dict[Nutrition, float] = {}
        for name, value in raw.items():
            nutrient = Nutrition.from_name(str(name))
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise ValueError(f"Amount for {nutrient.value} must be a number, got {value!r}")
            try:
                amount = float(value)
            except OverflowError:
                amount = math.inf
            if not math.isfinite(amount):
                raise ValueError(f"Amount for {nutrient.value} must be finite, got {value!r}")
            amounts[nutrient] = amount
        return cls(amounts)

    def get(self, nutrient: Nutrition, default: Optional[float] = None) -> Optional[float]:
        return self.amounts.get(nutrient, default)

    def __contains__(self, nutrient: object) -> bool:
        return nutrient in self.amounts

    def __len__(self) -> int:
        return len(self.amounts)

    def __iter__(self) -> Iterator[Nutrition]:
        return (n for n in Nutrition if n in self.amounts)

    def items(self) -> List[Tuple[Nutrition, float]]:
        """Present nutrients and amounts, in display order."""
        return [(n, self.amounts[n]) for n in self]

    def scaled(self, factor: float) -> "NutritionFacts":
        """Return a new instance with every present amount multiplied by factor."""
        return NutritionFacts({n: amount * factor for n, amount in self.amounts.items()})

    def to_dict(self) -> Dict[str, float]:
        """Return a plain dict keyed by nutrient spelling, in display order."""
        return {n.value: amount for n, amount in self.items()}

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, NutritionFacts):
            return NotImplemented
        return dict(self.amounts) == dict(other.amounts)

    def __repr__(self) -> str:
        return f"NutritionFacts({self.to_dict()!r})"


@dataclass(frozen=True)
class FactsSource:
    """Product nutrition declared directly in the document."""

    facts: NutritionFacts


@dataclass(frozen=True)
class RecipeRef:
    """Product nutrition computed from another recipe document."""

    path: Path  # Relative paths resolve against the referencing document's directory


NutritionSource = Union[FactsSource, RecipeRef]


@dataclass(frozen=True)
class Product:
    """A named nutrition source available to a dish."""

    name: str
    source: NutritionSource


@dataclass(frozen=True)
class Ingredient:
    """A product used in a dish at a given mass."""

    product: str  # Product name, exact match against the pantry
    amount: float  # Grams


@dataclass(frozen=True)
class Dish:
    """Ordered ingredients plus the optional finished weight."""

    ingredients: Tuple[Ingredient, ...] = ()
    weight: Optional[float] = None  # Grams after cooking; None means sum of amounts

    def __post_init__(self):
        object.__setattr__(self, "ingredients", tuple(self.ingredients))


@dataclass(frozen=True)
class Recipe:
    """A pantry of products and the one dish to evaluate against it."""

    products: Tuple[Product, ...]
    dish: Dish
    source: Optional[Path] = None  # Document this recipe was read from, if any

    def __post_init__(self):
        object.__setattr__(self, "products", tuple(self.products))

    def find_product(self, name: str) -> Optional[Product]:
        """Return the first product named exactly ``name``, or None."""
        for product in self.products:
            if product.name == name:
                return product
        return None

    def product_names(self) -> List[str]:
        return [product.name for product in self.products]
