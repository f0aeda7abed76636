"""Normalization of accumulated dish totals to a per-100g basis."""
import math
from typing import Mapping, Optional

from dish_facts.data_layer.exceptions import InvalidBasisWeightError
from dish_facts.data_layer.models import Nutrition, NutritionFacts

PER_GRAMS = 100.0


def basis_weight(total_mass: float, weight: Optional[float] = None) -> float:
    """Return the weight that accumulated totals are normalized against.

    Args:
        total_mass: Sum of ingredient amounts in grams
        weight: Explicit finished dish weight in grams, if declared

    Returns:
        ``weight`` when given, otherwise ``total_mass``

    Raises:
        InvalidBasisWeightError: If the chosen weight is not a positive finite number
    """
    explicit = weight is not None
    basis = weight if explicit else total_mass
    if not math.isfinite(basis) or basis <= 0:
        raise InvalidBasisWeightError(basis, explicit=explicit)
    return basis


def normalize(
    totals: Mapping[Nutrition, float],
    total_mass: float,
    weight: Optional[float] = None,
) -> NutritionFacts:
    """Scale accumulated nutrient totals to amounts per 100g of the dish.

    Only nutrients present in ``totals`` appear in the result.

    Args:
        totals: Accumulated nutrient amounts (grams or kcal, not per 100g)
        total_mass: Sum of ingredient amounts in grams
        weight: Explicit finished dish weight in grams, if declared

    Returns:
        NutritionFacts per 100g

    Raises:
        InvalidBasisWeightError: If the basis weight is invalid
    """
    factor = PER_GRAMS / basis_weight(total_mass, weight)
    return NutritionFacts({nutrient: amount * factor for nutrient, amount in totals.items()})
