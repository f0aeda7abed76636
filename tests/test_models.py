"""Tests for data models."""
import pytest

from dish_facts.data_layer.models import (
    Dish,
    FactsSource,
    Ingredient,
    Nutrition,
    NutritionFacts,
    Product,
    Recipe,
)


class TestNutrition:
    """Tests for the Nutrition enum."""

    def test_display_order(self):
        """Test that members iterate in display order."""
        assert [n.value for n in Nutrition] == ["Energy", "Proteins", "Fats", "Carbohydrates"]

    def test_from_name(self):
        assert Nutrition.from_name("Fats") is Nutrition.FATS

    def test_from_name_unknown(self):
        """Test that unknown names list the allowed nutrients."""
        with pytest.raises(ValueError, match="Unknown nutrient 'Sugar'") as exc_info:
            Nutrition.from_name("Sugar")
        assert "Energy, Proteins, Fats, Carbohydrates" in str(exc_info.value)

    def test_from_name_is_case_sensitive(self):
        with pytest.raises(ValueError):
            Nutrition.from_name("energy")


class TestNutritionFacts:
    """Tests for NutritionFacts."""

    def test_from_dict(self):
        """Test parsing facts keyed by document spelling."""
        facts = NutritionFacts.from_dict({"Energy": 884, "Fats": 100.0})

        assert facts.get(Nutrition.ENERGY) == 884.0
        assert facts.get(Nutrition.FATS) == 100.0
        assert Nutrition.PROTEINS not in facts
        assert len(facts) == 2

    def test_from_dict_rejects_non_numeric(self):
        with pytest.raises(ValueError, match="must be a number"):
            NutritionFacts.from_dict({"Energy": "lots"})

    def test_from_dict_rejects_bool(self):
        with pytest.raises(ValueError, match="must be a number"):
            NutritionFacts.from_dict({"Energy": True})

    def test_from_dict_rejects_infinite(self):
        with pytest.raises(ValueError, match="must be finite"):
            NutritionFacts.from_dict({"Energy": float("inf")})

    def test_from_dict_rejects_integer_too_large_for_float(self):
        with pytest.raises(ValueError, match="must be finite"):
            NutritionFacts.from_dict({"Energy": 10 ** 400})

    def test_immutable(self):
        """Test that the source dict is copied and the view is read-only."""
        source = {Nutrition.ENERGY: 100.0}
        facts = NutritionFacts(source)
        source[Nutrition.FATS] = 5.0

        assert Nutrition.FATS not in facts
        with pytest.raises(TypeError):
            facts.amounts[Nutrition.FATS] = 1.0  # type: ignore[index]

    def test_items_in_display_order(self):
        """Test that items follow enum order, not insertion order."""
        facts = NutritionFacts({
            Nutrition.CARBOHYDRATES: 3.0,
            Nutrition.ENERGY: 1.0,
            Nutrition.FATS: 2.0,
        })
        assert [n for n, _ in facts.items()] == [
            Nutrition.ENERGY, Nutrition.FATS, Nutrition.CARBOHYDRATES
        ]
        assert list(facts.to_dict()) == ["Energy", "Fats", "Carbohydrates"]

    def test_scaled_keeps_absent_nutrients_absent(self):
        facts = NutritionFacts({Nutrition.ENERGY: 200.0})
        scaled = facts.scaled(0.5)

        assert scaled.get(Nutrition.ENERGY) == 100.0
        assert Nutrition.PROTEINS not in scaled
        assert len(scaled) == 1
        # Original untouched
        assert facts.get(Nutrition.ENERGY) == 200.0

    def test_equality(self):
        a = NutritionFacts({Nutrition.ENERGY: 1.0})
        b = NutritionFacts.from_dict({"Energy": 1})
        assert a == b
        assert a != NutritionFacts({Nutrition.ENERGY: 1.0, Nutrition.FATS: 0.0})

    def test_absent_is_not_zero(self):
        facts = NutritionFacts({})
        assert facts.get(Nutrition.ENERGY) is None


class TestRecipe:
    """Tests for Recipe and Dish."""

    def _recipe(self):
        oil = Product(name="Oil", source=FactsSource(NutritionFacts({Nutrition.ENERGY: 1000.0})))
        milk = Product(name="Milk", source=FactsSource(NutritionFacts({Nutrition.ENERGY: 64.0})))
        return Recipe(
            products=[oil, milk],
            dish=Dish(ingredients=[Ingredient(product="Oil", amount=10.0)]),
        )

    def test_find_product_exact_match(self):
        recipe = self._recipe()
        assert recipe.find_product("Oil").name == "Oil"
        assert recipe.find_product("oil") is None

    def test_product_names_in_declaration_order(self):
        assert self._recipe().product_names() == ["Oil", "Milk"]

    def test_sequences_become_tuples(self):
        recipe = self._recipe()
        assert isinstance(recipe.products, tuple)
        assert isinstance(recipe.dish.ingredients, tuple)

    def test_dish_weight_defaults_to_none(self):
        assert Dish().weight is None
        assert Dish().ingredients == ()
