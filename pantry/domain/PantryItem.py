"""PantryItem domain entity: id, name, quantity, optional expiration date and barcode, regular flag."""
from datetime import date, datetime
from typing import Optional
from uuid import uuid4

from pantry.utilities.constants import DATE_FORMAT, DISPLAY_DATE_FORMAT


def generate_id() -> str:
    '''Returns a fresh opaque item identifier.'''
    return uuid4().hex


class PantryItem:
    def __init__(self, id: str = "", name: str = "", quantity: int = 0,
                 expiration_date: Optional[date] = None, barcode: Optional[str] = None,
                 regular: bool = False):
        self.id = id or generate_id()
        self.name = name
        self.quantity = quantity
        self.expiration_date = expiration_date
        self.barcode = barcode
        self.regular = regular

    def with_quantity(self, quantity: int) -> "PantryItem":
        '''Returns a copy of this item holding the given quantity.'''
        return PantryItem(self.id, self.name, quantity, self.expiration_date, self.barcode, self.regular)

    def matches(self, ingredient: str) -> bool:
        '''Case-insensitive name match against a recipe ingredient.'''
        return self.name.lower() == ingredient.lower()

    @property
    def expiration_display(self) -> str:
        return self.expiration_date.strftime(DISPLAY_DATE_FORMAT) if self.expiration_date else ""

    def __eq__(self, other) -> bool:
        if not isinstance(other, PantryItem):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def __str__(self) -> str:
        parts = [f"{self.name} - {self.quantity}"]
        if self.expiration_date:
            parts.append(f"Exp: {self.expiration_date.strftime(DATE_FORMAT)}")
        if self.barcode:
            parts.append(f"Barcode: {self.barcode}")
        if self.regular:
            parts.append("regular")
        return " - ".join(parts)

    __repr__ = __str__

    @staticmethod
    def from_dict(data):
        '''Creates a PantryItem from its stored dictionary. Raises ValueError on malformed entries.'''
        if not isinstance(data, dict):
            raise ValueError(f"Pantry item must be an object, got {type(data).__name__}")
        exp = data.get("expirationDate")
        if exp and not isinstance(exp, date):
            # Stored values may carry a time part (ISO timestamp)
            exp = datetime.strptime(str(exp)[:10], DATE_FORMAT).date()
        try:
            quantity = int(data.get("quantity") or 0)
        except (TypeError, ValueError):
            raise ValueError(f"Invalid quantity: {data.get('quantity')!r}")
        return PantryItem(
            id=str(data.get("id") or ""),
            name=str(data.get("name") or ""),
            quantity=quantity,
            expiration_date=exp or None,
            barcode=data.get("barcode") or None,
            regular=bool(data.get("regular", False)),
        )

    def to_dict(self):
        '''Converts the item to the dictionary persisted in storage.'''
        return {
            "id": self.id,
            "name": self.name,
            "quantity": self.quantity,
            "expirationDate": self.expiration_date.strftime(DATE_FORMAT) if self.expiration_date else None,
            "barcode": self.barcode,
            "regular": self.regular,
        }
