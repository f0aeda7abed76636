"""Recursive resolution of recipe nutrition facts.

A recipe's products either declare facts per 100g directly or point at
another recipe document, which is loaded and resolved the same way. Each
ingredient contributes ``per_100g / 100 * amount`` to the dish totals, and
the totals are then normalized to per 100g of the finished dish.

The chain of documents currently being resolved is passed down the
recursion so that a reference back into the chain (or a chain longer than
``max_depth``) is reported as a CyclicReferenceError.
"""
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Dict, Optional, Tuple, Union

from dish_facts.data_layer.exceptions import CyclicReferenceError, ProductNotFoundError
from dish_facts.data_layer.models import (
    FactsSource,
    Nutrition,
    NutritionFacts,
    Product,
    Recipe,
    RecipeRef,
)
from dish_facts.data_layer.recipe_loader import RecipeLoader
from dish_facts.nutrition.normalizer import PER_GRAMS, normalize

logger = logging.getLogger(__name__)

DEFAULT_MAX_DEPTH = 64


@dataclass(frozen=True)
class TraceEvent:
    """One ingredient's contribution to one nutrient."""

    recipe: Optional[Path]  # Source document of the recipe being resolved
    product: str
    nutrient: Nutrition
    per_gram: float  # Product amount per gram (per_100g / 100)
    amount: float  # Ingredient grams
    contribution: float  # per_gram * amount


@dataclass
class DishTotals:
    """Raw accumulated totals for a dish, before normalization."""

    totals: Dict[Nutrition, float] = field(default_factory=dict)
    total_mass: float = 0.0

    def add(self, nutrient: Nutrition, amount: float) -> None:
        self.totals[nutrient] = self.totals.get(nutrient, 0.0) + amount


TraceHook = Callable[[TraceEvent], None]


class RecipeResolver:
    """Resolver computing per-100g nutrition facts for recipes."""

    def __init__(
        self,
        loader: Optional[RecipeLoader] = None,
        on_trace: Optional[TraceHook] = None,
        max_depth: int = DEFAULT_MAX_DEPTH,
    ):
        """Initialize resolver.

        Args:
            loader: Loader used for nested recipe documents
            on_trace: Optional callable receiving a TraceEvent per contribution
            max_depth: Maximum number of recipes on one reference chain,
                root included (in-memory or loaded from a file)

        Raises:
            ValueError: If max_depth is not positive
        """
        if max_depth < 1:
            raise ValueError(f"max_depth must be positive, got {max_depth}")
        self.loader = loader or RecipeLoader()
        self.on_trace = on_trace
        self.max_depth = max_depth

    def resolve(self, recipe: Recipe) -> NutritionFacts:
        """Calculate nutrition facts per 100g of the recipe's dish.

        Args:
            recipe: Recipe to resolve

        Returns:
            NutritionFacts per 100g

        Raises:
            LoadError: If a nested recipe document cannot be loaded
            ProductNotFoundError: If an ingredient names an unknown product
            CyclicReferenceError: If recipe references loop or nest too deep
            InvalidBasisWeightError: If the basis weight is not positive
        """
        chain = (recipe.source,) if recipe.source is not None else ()
        return self._resolve(recipe, chain, 1)

    def resolve_file(self, path: Union[str, Path]) -> NutritionFacts:
        """Load the recipe document at ``path`` and resolve it."""
        recipe = self.loader.load(path)
        return self.resolve(recipe)

    def accumulate(self, recipe: Recipe) -> DishTotals:
        """Sum ingredient contributions without normalizing.

        Args:
            recipe: Recipe to accumulate

        Returns:
            DishTotals with absolute nutrient amounts and total ingredient mass
        """
        chain = (recipe.source,) if recipe.source is not None else ()
        return self._accumulate(recipe, chain, 1)

    def _resolve(self, recipe: Recipe, chain: Tuple[Path, ...], depth: int) -> NutritionFacts:
        dish_totals = self._accumulate(recipe, chain, depth)
        facts = normalize(dish_totals.totals, dish_totals.total_mass, recipe.dish.weight)
        logger.debug(
            "Resolved %s: totals=%s mass=%sg weight=%s -> %s",
            recipe.source or "<memory>",
            {n.value: v for n, v in dish_totals.totals.items()},
            dish_totals.total_mass,
            recipe.dish.weight,
            facts.to_dict(),
        )
        return facts

    def _accumulate(self, recipe: Recipe, chain: Tuple[Path, ...], depth: int) -> DishTotals:
        dish_totals = DishTotals()
        for ingredient in recipe.dish.ingredients:
            product = recipe.find_product(ingredient.product)
            if product is None:
                raise ProductNotFoundError(ingredient.product, recipe.product_names())

            facts = self._product_facts(product, recipe, chain, depth)
            dish_totals.total_mass += ingredient.amount
            for nutrient, per_100g in facts.items():
                per_gram = per_100g / PER_GRAMS
                contribution = per_gram * ingredient.amount
                dish_totals.add(nutrient, contribution)
                if self.on_trace is not None:
                    self.on_trace(TraceEvent(
                        recipe=recipe.source,
                        product=product.name,
                        nutrient=nutrient,
                        per_gram=per_gram,
                        amount=ingredient.amount,
                        contribution=contribution,
                    ))
        return dish_totals

    def _product_facts(
        self, product: Product, recipe: Recipe, chain: Tuple[Path, ...], depth: int
    ) -> NutritionFacts:
        """Return a product's facts per 100g, resolving nested recipes.

        ``depth`` counts the recipes on the current chain, including an
        in-memory root that has no source document.
        """
        if isinstance(product.source, FactsSource):
            return product.source.facts
        if not isinstance(product.source, RecipeRef):
            raise TypeError(f"Unsupported nutrition source for '{product.name}': {product.source!r}")

        path = self._reference_path(product.source, recipe)
        if path in chain:
            raise CyclicReferenceError(chain + (path,))
        if depth >= self.max_depth:
            raise CyclicReferenceError(chain + (path,), max_depth=self.max_depth)

        logger.debug("Product '%s' resolves through recipe %s", product.name, path)
        nested = self.loader.load(path)
        return self._resolve(nested, chain + (path,), depth + 1)

    def _reference_path(self, ref: RecipeRef, recipe: Recipe) -> Path:
        """Absolute path of a referenced document.

        Relative references are anchored at the referencing document's
        directory, or the loader's base directory for in-memory recipes.
        """
        if ref.path.is_absolute():
            return ref.path.resolve()
        anchor = recipe.source.parent if recipe.source is not None else self.loader.base_dir
        return (anchor / ref.path).resolve()
