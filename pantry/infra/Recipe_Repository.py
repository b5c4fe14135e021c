import json
import logging
from typing import Dict, List

from pantry.domain.PriceEntry import PriceEntry
from pantry.domain.Recipe import Recipe
from pantry.infra.paths import PRICES_FILE, RECIPES_FILE

logger = logging.getLogger(__name__)


def reading_from_recipes(path=RECIPES_FILE) -> List[Recipe]:
    """Read the static recipe catalogue with proper error handling."""
    try:
        with open(path, 'r', encoding='utf-8') as f:
            recipes_data = json.load(f)
        return [Recipe.from_dict(entry) for entry in recipes_data]
    except FileNotFoundError:
        logger.warning(f"Recipes file not found: {path}. Returning empty list.")
        return []
    except json.JSONDecodeError as e:
        logger.error(f"Invalid JSON in recipes file: {e}")
        return []


def reading_from_prices(path=PRICES_FILE) -> Dict[str, List[PriceEntry]]:
    """Read the static price table, keyed by lowercase item name."""
    try:
        with open(path, 'r', encoding='utf-8') as f:
            prices_data = json.load(f)
        return {
            name.lower(): [PriceEntry.from_dict(entry) for entry in entries]
            for name, entries in prices_data.items()
        }
    except FileNotFoundError:
        logger.warning(f"Prices file not found: {path}. Returning empty table.")
        return {}
    except json.JSONDecodeError as e:
        logger.error(f"Invalid JSON in prices file: {e}")
        return {}


def find_recipe(recipes: List[Recipe], name: str):
    """Case-insensitive lookup of a recipe by name."""
    wanted = (name or '').strip().lower()
    return next((r for r in recipes if r.name.lower() == wanted), None)
