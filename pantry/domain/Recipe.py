"""Recipe reference data: name, ordered ingredient names, free-text instructions."""
from typing import Iterable, Optional


class Recipe:
    def __init__(self, name: str = "", ingredients: Optional[Iterable[str]] = None, instructions: str = ""):
        self.name = name
        self.ingredients = tuple(ingredients or ())
        self.instructions = instructions

    @property
    def instruction_lines(self):
        return [line for line in self.instructions.split("\n") if line.strip()]

    def __eq__(self, other) -> bool:
        if not isinstance(other, Recipe):
            return NotImplemented
        return (self.name, self.ingredients, self.instructions) == (other.name, other.ingredients, other.instructions)

    def __hash__(self):
        return hash((self.name, self.ingredients))

    def __str__(self) -> str:
        return f"{self.name} - Ingredients: {', '.join(self.ingredients)}"

    __repr__ = __str__

    @staticmethod
    def from_dict(data):
        return Recipe(
            name=data.get("name", ""),
            ingredients=[str(i) for i in data.get("ingredients", [])],
            instructions=data.get("instructions", ""),
        )

    def to_dict(self):
        return {
            "name": self.name,
            "ingredients": list(self.ingredients),
            "instructions": self.instructions,
        }
