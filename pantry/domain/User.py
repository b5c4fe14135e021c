"""Signed-in user record taken from the identity token payload."""
from typing import Optional


class User:
    def __init__(self, name: Optional[str] = None, email: Optional[str] = None, sub: Optional[str] = None):
        self.name = name
        self.email = email
        self.sub = sub

    @property
    def display_name(self) -> str:
        return self.name or self.email or "User"

    def __eq__(self, other) -> bool:
        if not isinstance(other, User):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def __str__(self) -> str:
        return f"{self.display_name} <{self.email or ''}>"

    __repr__ = __str__

    @staticmethod
    def from_dict(data):
        if not isinstance(data, dict):
            raise ValueError(f"User record must be an object, got {type(data).__name__}")
        return User(name=data.get("name"), email=data.get("email"), sub=data.get("sub"))

    def to_dict(self):
        return {"name": self.name, "email": self.email, "sub": self.sub}
