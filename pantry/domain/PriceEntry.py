"""PriceEntry reference data: a store and the price it asks for an item."""


class PriceEntry:
    def __init__(self, store: str, price: float):
        self.store = store
        self.price = float(price)

    @property
    def price_display(self) -> str:
        return f"${self.price:.2f}"

    def __eq__(self, other) -> bool:
        if not isinstance(other, PriceEntry):
            return NotImplemented
        return (self.store, self.price) == (other.store, other.price)

    def __str__(self) -> str:
        return f"{self.store} ({self.price_display})"

    __repr__ = __str__

    @staticmethod
    def from_dict(data):
        return PriceEntry(data["store"], data["price"])

    def to_dict(self):
        return {"store": self.store, "price": self.price}
