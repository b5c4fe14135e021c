"""Core business logic layer.

Subpackages:
- reminders: soon-to-expire and restock derivations
- recipes: recipe feasibility and cooking
- prices: cheapest-store lookup
- state: pure update functions over PantryState
"""
__all__ = ["reminders", "recipes", "prices", "state"]
