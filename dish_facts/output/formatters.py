"""Formatters for nutrition facts output (text and JSON)."""

import json
from typing import Any, Dict, Optional

from dish_facts.data_layer.models import NutritionFacts
from dish_facts.nutrition.resolver import TraceEvent


def format_facts_text(facts: NutritionFacts, title: Optional[str] = None) -> str:
    """Format nutrition facts as readable lines (e.g. "Energy:  500.00").

    Nutrients are listed in display order; absent nutrients are skipped.

    Args:
        facts: NutritionFacts per 100g
        title: Optional name shown on a "Facts:" header line

    Returns:
        Formatted string
    """
    lines = []
    if title is not None:
        lines.append(f"Facts: {title}")
    for nutrient, amount in facts.items():
        lines.append(f"{nutrient.value}:  {amount:.2f}")
    return "\n".join(lines)


def format_facts_json(facts: NutritionFacts) -> Dict[str, Any]:
    """Format nutrition facts as a JSON-ready dictionary.

    Args:
        facts: NutritionFacts per 100g

    Returns:
        Dictionary ready for JSON serialization
    """
    return {
        "basis": "per_100g",
        "facts": {name: round(amount, 2) for name, amount in facts.to_dict().items()},
    }


def format_facts_json_string(facts: NutritionFacts, indent: int = 2) -> str:
    """Format nutrition facts as a JSON string."""
    return json.dumps(format_facts_json(facts), indent=indent)


def format_trace_event(event: TraceEvent) -> str:
    """Format a single contribution, e.g. "add Oil Energy 10/g x 10g = 100.00"."""
    return (
        f"add {event.product} {event.nutrient.value} "
        f"{event.per_gram:g}/g x {event.amount:g}g = {event.contribution:.2f}"
    )
