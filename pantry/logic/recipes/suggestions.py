"""Recipe feasibility against the current inventory, and cooking."""
from __future__ import annotations
from typing import Iterable, List, Optional

from pantry.domain.PantryItem import PantryItem
from pantry.domain.Recipe import Recipe

__all__ = ["RecipeSuggestion", "RecipeNotCookable", "find_ingredient", "missing_ingredients",
           "get_recipe_suggestions", "consume_ingredients"]


class RecipeNotCookable(ValueError):
    def __init__(self, recipe: Recipe, missing: List[str]):
        super().__init__(f"Cannot cook '{recipe.name}', missing: {', '.join(missing)}")
        self.recipe = recipe
        self.missing = missing


class RecipeSuggestion:
    def __init__(self, recipe: Recipe, missing: List[str]):
        self.recipe = recipe
        self.missing = missing

    @property
    def cookable(self) -> bool:
        return not self.missing

    def to_dict(self):
        return {
            "recipe": self.recipe.to_dict(),
            "missing": list(self.missing),
            "cookable": self.cookable,
        }

    def __repr__(self) -> str:
        return f"RecipeSuggestion({self.recipe.name!r}, missing={self.missing!r})"


def find_ingredient(items: Iterable[PantryItem], ingredient: str) -> Optional[PantryItem]:
    """First inventory item whose name equals the ingredient, ignoring case."""
    return next((item for item in items if item.matches(ingredient)), None)


def missing_ingredients(recipe: Recipe, items: Iterable[PantryItem]) -> List[str]:
    items = list(items)
    missing = []
    for ingredient in recipe.ingredients:
        found = find_ingredient(items, ingredient)
        if found is None or found.quantity <= 0:
            missing.append(ingredient)
    return missing


def get_recipe_suggestions(recipes: Iterable[Recipe], items: Iterable[PantryItem]) -> List[RecipeSuggestion]:
    """One suggestion per recipe, in catalogue order, with its missing ingredients."""
    items = list(items)
    return [RecipeSuggestion(recipe, missing_ingredients(recipe, items)) for recipe in recipes]


def consume_ingredients(recipe: Recipe, items: Iterable[PantryItem], *, step: int = 1) -> List[PantryItem]:
    """Return a new item list with each ingredient of a cookable recipe decremented.

    Every ingredient takes ``step`` from its first matching item, never going
    below zero. Raises RecipeNotCookable when an ingredient is missing.
    """
    updated = list(items)
    missing = missing_ingredients(recipe, updated)
    if missing:
        raise RecipeNotCookable(recipe, missing)
    for ingredient in recipe.ingredients:
        for idx, item in enumerate(updated):
            if item.matches(ingredient):
                if item.quantity > 0:
                    updated[idx] = item.with_quantity(max(item.quantity - step, 0))
                break
    return updated
