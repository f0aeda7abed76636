"""FastAPI server for computing dish nutrition facts."""

from typing import Any, Dict, List, Optional

import uvicorn
from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field

from dish_facts.app_logging import configure_logging
from dish_facts.config import Settings
from dish_facts.data_layer.exceptions import DishFactsError
from dish_facts.data_layer.recipe_loader import RecipeLoader
from dish_facts.nutrition.resolver import RecipeResolver
from dish_facts.output.formatters import format_facts_json, format_facts_text


class ProductModel(BaseModel):
    name: str
    facts: Optional[Dict[str, float]] = None
    recipe: Optional[str] = None


class IngredientModel(BaseModel):
    product: str
    amount: float


class DishModel(BaseModel):
    ingredients: List[IngredientModel] = Field(default_factory=list)
    weight: Optional[float] = None


class RecipeRequest(BaseModel):
    products: List[ProductModel] = Field(default_factory=list)
    dish: DishModel


def _request_to_document(request: RecipeRequest) -> Dict[str, Any]:
    """Convert the request into the document shape the loader parses.

    Unset ``facts``/``recipe`` fields are left out so the loader's
    exactly-one-source check sees the same keys a YAML document would have.
    """
    products = [
        product.model_dump(exclude_none=True) for product in request.products
    ]
    dish = request.dish.model_dump(exclude_none=True)
    return {"products": products, "dish": dish}


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Build the FastAPI application.

    Args:
        settings: Settings to use (default: read from environment)

    Returns:
        FastAPI app
    """
    settings = settings or Settings.from_env()
    app = FastAPI(title="Dish Facts API")

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],  # Local development
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.post("/api/facts")
    def compute_facts(request: RecipeRequest) -> Dict[str, Any]:
        loader = RecipeLoader(base_dir=settings.recipe_root, confine=True)
        resolver = RecipeResolver(loader=loader, max_depth=settings.max_depth)
        try:
            recipe = loader.parse(_request_to_document(request))
            facts = resolver.resolve(recipe)
        except DishFactsError as exc:
            raise HTTPException(status_code=422, detail=exc.to_dict()) from exc

        response = format_facts_json(facts)
        response["display"] = format_facts_text(facts)
        return response

    return app


def run(settings: Optional[Settings] = None) -> None:
    """Serve the API with uvicorn."""
    settings = settings or Settings.from_env()
    configure_logging(settings.log_level)
    uvicorn.run(create_app(settings), host=settings.host, port=settings.port)


if __name__ == "__main__":
    run()
