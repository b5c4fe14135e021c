from pathlib import Path

# Centralized paths for the bundled reference data (single source of truth)
DATA_DIR = (Path(__file__).parent.parent / 'data').resolve()
RECIPES_FILE = DATA_DIR / 'recipes.json'
PRICES_FILE = DATA_DIR / 'prices.json'

__all__ = ['DATA_DIR', 'RECIPES_FILE', 'PRICES_FILE']
