"""Recipe loader for reading recipe documents from YAML."""
import logging
import math
from pathlib import Path
from typing import Any, List, Optional, Union

import yaml

from dish_facts.data_layer.exceptions import LoadError
from dish_facts.data_layer.models import (
    Dish,
    FactsSource,
    Ingredient,
    NutritionFacts,
    Product,
    Recipe,
    RecipeRef,
)

logger = logging.getLogger(__name__)


class RecipeLoader:
    """Loader for recipe documents.

    A document has a ``products`` list (each product carries either a
    ``facts`` mapping or a ``recipe`` path) and a ``dish`` with
    ``ingredients`` and an optional ``weight``.
    """

    def __init__(self, base_dir: Optional[Union[str, Path]] = None, confine: bool = False):
        """Initialize recipe loader.

        Args:
            base_dir: Directory that anchors relative paths for recipes
                with no source document (default: current directory)
            confine: Refuse to load documents outside ``base_dir``
        """
        self.base_dir = Path(base_dir) if base_dir is not None else Path.cwd()
        self.confine = confine

    def load(self, path: Union[str, Path]) -> Recipe:
        """Load a recipe from a YAML file.

        Args:
            path: Path to the recipe document

        Returns:
            Recipe object with ``source`` set to the absolute document path

        Raises:
            LoadError: If the file is missing, unreadable or malformed, or
                lies outside ``base_dir`` on a confined loader
        """
        doc_path = Path(path)
        if not doc_path.is_absolute():
            doc_path = self.base_dir / doc_path
        doc_path = doc_path.resolve()
        if self.confine and not doc_path.is_relative_to(self.base_dir.resolve()):
            raise LoadError(doc_path, f"outside the recipe root {self.base_dir.resolve()}")

        logger.debug("Loading recipe document %s", doc_path)
        try:
            with open(doc_path, "rb") as f:
                data = yaml.safe_load(f)
        except FileNotFoundError:
            raise LoadError(doc_path, "file not found") from None
        except OSError as e:
            raise LoadError(doc_path, f"cannot read file ({e.strerror or e})") from e
        except yaml.YAMLError as e:
            raise LoadError(doc_path, f"invalid YAML: {e}") from e

        return self.parse(data, source=doc_path)

    def parse(self, data: Any, source: Optional[Path] = None) -> Recipe:
        """Build a Recipe from an already decoded document.

        Args:
            data: Decoded document (mapping with ``products`` and ``dish``)
            source: Path the document came from, if any

        Returns:
            Recipe object

        Raises:
            LoadError: If the document structure is invalid
        """
        if not isinstance(data, dict):
            raise LoadError(source, "document must be a mapping with 'products' and 'dish'")
        if "products" not in data:
            raise LoadError(source, "missing 'products'")
        if "dish" not in data:
            raise LoadError(source, "missing 'dish'")

        products_data = data["products"] or []
        if not isinstance(products_data, list):
            raise LoadError(source, "'products' must be a list")

        products: List[Product] = []
        seen = set()
        for index, product_data in enumerate(products_data):
            product = self._parse_product(product_data, index, source)
            if product.name in seen:
                raise LoadError(source, f"duplicate product name '{product.name}'")
            seen.add(product.name)
            products.append(product)

        dish = self._parse_dish(data["dish"], source)
        return Recipe(products=products, dish=dish, source=source)

    def _parse_product(self, product_data: Any, index: int, source: Optional[Path]) -> Product:
        """Parse a single product entry.

        Exactly one of ``facts`` and ``recipe`` must be present.
        """
        if not isinstance(product_data, dict):
            raise LoadError(source, f"product #{index + 1} must be a mapping")
        name = product_data.get("name")
        if not isinstance(name, str) or not name:
            raise LoadError(source, f"product #{index + 1} needs a non-empty 'name'")

        has_facts = "facts" in product_data
        has_recipe = "recipe" in product_data
        if has_facts == has_recipe:
            raise LoadError(
                source,
                f"product '{name}' must have exactly one of 'facts' or 'recipe'"
            )

        if has_facts:
            raw_facts = product_data["facts"]
            if not isinstance(raw_facts, dict):
                raise LoadError(source, f"product '{name}': 'facts' must be a mapping")
            try:
                facts = NutritionFacts.from_dict(raw_facts)
            except ValueError as e:
                raise LoadError(source, f"product '{name}': {e}") from e
            return Product(name=name, source=FactsSource(facts))

        ref = product_data["recipe"]
        if not isinstance(ref, str) or not ref.strip():
            raise LoadError(source, f"product '{name}': 'recipe' must be a path")
        return Product(name=name, source=RecipeRef(Path(ref.strip())))

    def _parse_dish(self, dish_data: Any, source: Optional[Path]) -> Dish:
        if not isinstance(dish_data, dict):
            raise LoadError(source, "'dish' must be a mapping")
        if "ingredients" not in dish_data:
            raise LoadError(source, "dish is missing 'ingredients'")

        ingredients_data = dish_data["ingredients"] or []
        if not isinstance(ingredients_data, list):
            raise LoadError(source, "dish 'ingredients' must be a list")

        ingredients = [
            self._parse_ingredient(ing_data, index, source)
            for index, ing_data in enumerate(ingredients_data)
        ]

        weight = dish_data.get("weight")
        if weight is not None:
            # Zero or negative weights are reported by the normalizer
            if not _is_number(weight):
                raise LoadError(source, f"dish 'weight' must be a number, got {weight!r}")
            weight = _to_float(weight)
            if weight is None:
                raise LoadError(source, "dish 'weight' must be finite")

        return Dish(ingredients=ingredients, weight=weight)

    def _parse_ingredient(self, ing_data: Any, index: int, source: Optional[Path]) -> Ingredient:
        if not isinstance(ing_data, dict):
            raise LoadError(source, f"ingredient #{index + 1} must be a mapping")
        product = ing_data.get("product")
        if not isinstance(product, str) or not product:
            raise LoadError(source, f"ingredient #{index + 1} needs a non-empty 'product'")

        raw_amount = ing_data.get("amount")
        if not _is_number(raw_amount):
            raise LoadError(source, f"ingredient '{product}': 'amount' must be a number, got {raw_amount!r}")
        amount = _to_float(raw_amount)
        if amount is None or not math.isfinite(amount):
            raise LoadError(source, f"ingredient '{product}': 'amount' must be finite")
        if amount < 0:
            raise LoadError(source, f"ingredient '{product}': 'amount' must not be negative")

        return Ingredient(product=product, amount=amount)


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _to_float(value: Any) -> Optional[float]:
    """Convert a YAML number to float, or None if it overflows."""
    try:
        return float(value)
    except OverflowError:
        return None

