"""Structured error types for recipe loading and nutrition resolution.

Every failure in the pipeline is raised as a typed exception carrying a
machine-readable code, a human-readable message and a context dictionary.
The core never prints or exits; callers (CLI, HTTP API) decide how to
report the error.

ERROR FLOW:
    ┌─────────────────────────────────────────────────────┐
    │ Recipe document                                     │
    └─────────────────────────────────────────────────────┘
                              │
                              ▼
    ┌─────────────────────────────────────────────────────┐
    │ Loading / parsing → LoadError                       │
    └─────────────────────────────────────────────────────┘
                              │
                              ▼
    ┌─────────────────────────────────────────────────────┐
    │ Resolution        → ProductNotFoundError            │
    │                   → CyclicReferenceError            │
    └─────────────────────────────────────────────────────┘
                              │
                              ▼
    ┌─────────────────────────────────────────────────────┐
    │ Normalization     → InvalidBasisWeightError         │
    └─────────────────────────────────────────────────────┘
                              │
                              ▼
    ┌─────────────────────────────────────────────────────┐
    │ NutritionFacts per 100g (success)                   │
    └─────────────────────────────────────────────────────┘

A failure in a nested recipe propagates unchanged; there is no partial
result.
"""

import math
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Union


class ErrorCode(Enum):
    """Error codes, one per failure mode."""

    LOAD_ERROR = "LOAD_ERROR"
    PRODUCT_NOT_FOUND = "PRODUCT_NOT_FOUND"
    CYCLIC_REFERENCE = "CYCLIC_REFERENCE"
    INVALID_BASIS_WEIGHT = "INVALID_BASIS_WEIGHT"


class DishFactsError(Exception):
    """Base exception for all loading and resolution errors.

    Attributes:
        code: ErrorCode identifying the error type
        message: Human-readable error description
        context: Dictionary of relevant error context
    """

    def __init__(
        self,
        code: ErrorCode,
        message: str,
        context: Optional[Dict[str, Any]] = None
    ):
        self.code = code
        self.message = message
        self.context = context or {}
        super().__init__(f"[{code.value}] {message}")

    def __str__(self) -> str:
        return f"[{self.code.value}] {self.message}"

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"code={self.code!r}, "
            f"message={self.message!r}, "
            f"context={self.context!r})"
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to dictionary for API responses.

        Returns:
            Dictionary with error code, message, and context
        """
        return {
            "error_code": self.code.value,
            "message": self.message,
            "context": self.context
        }


class LoadError(DishFactsError):
    """Raised when a recipe document is missing, unreadable or malformed.

    Context includes:
        - path: The document path (or "<memory>" for in-memory documents)
        - reason: What went wrong
    """

    def __init__(self, path: Optional[Union[str, Path]], reason: str):
        display_path = str(path) if path is not None else "<memory>"
        super().__init__(
            code=ErrorCode.LOAD_ERROR,
            message=f"Cannot load recipe {display_path}: {reason}",
            context={"path": display_path, "reason": reason}
        )
        self.path = path
        self.reason = reason


class ResolutionError(DishFactsError):
    """Base class for errors raised while resolving a loaded recipe."""


class ProductNotFoundError(ResolutionError):
    """Raised when an ingredient names a product absent from the pantry.

    Context includes:
        - product_name: The ingredient's product name
        - available_products: Pantry names in declaration order
    """

    def __init__(self, product_name: str, available: Sequence[str]):
        available_products: List[str] = list(available)
        super().__init__(
            code=ErrorCode.PRODUCT_NOT_FOUND,
            message=(
                f"Cannot find ingredient in recipe: {product_name} "
                f"possible products: {', '.join(available_products)}"
            ),
            context={
                "product_name": product_name,
                "available_products": available_products,
            }
        )
        self.product_name = product_name
        self.available_products = available_products


class CyclicReferenceError(ResolutionError):
    """Raised when a recipe reference chain loops back on itself.

    Also raised when the chain grows past the configured maximum depth,
    in which case ``max_depth`` is present in the context.
    """

    def __init__(self, chain: Sequence[Union[str, Path]], max_depth: Optional[int] = None):
        chain_strs = [str(p) for p in chain]
        joined = " -> ".join(chain_strs)
        if max_depth is None:
            message = f"Cyclic recipe reference: {joined}"
        else:
            message = (
                f"Recipe reference chain exceeds maximum depth of {max_depth}: {joined}"
            )
        context: Dict[str, Any] = {"chain": chain_strs}
        if max_depth is not None:
            context["max_depth"] = max_depth
        super().__init__(
            code=ErrorCode.CYCLIC_REFERENCE,
            message=message,
            context=context
        )
        self.chain = chain_strs
        self.max_depth = max_depth


class InvalidBasisWeightError(ResolutionError):
    """Raised when the basis weight is zero, negative or not finite."""

    def __init__(self, weight: float, explicit: bool):
        source = "dish weight" if explicit else "sum of ingredient amounts"
        super().__init__(
            code=ErrorCode.INVALID_BASIS_WEIGHT,
            message=f"Invalid basis weight {weight!r} ({source}); must be a positive number",
            context={
                "weight": weight if math.isfinite(weight) else str(weight),
                "explicit": explicit,
            }
        )
        self.weight = weight
        self.explicit = explicit
