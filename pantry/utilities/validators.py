"""
Input validation schemas using Pydantic for the pantry forms and JSON API.
"""
import re
from datetime import date
from typing import Optional

from pydantic import BaseModel, Field, field_validator

_LEADING_INT = re.compile(r'^\s*([+-]?\d+)')


class ItemInput(BaseModel):
    """Schema for a new pantry item (add form or POST /api/inventory).

    Parsing is lenient on purpose: an unparseable quantity becomes 0 and an
    empty name is accepted here and ignored by the update function.
    """
    name: str = ""
    quantity: int = 1
    expirationDate: Optional[date] = None
    barcode: Optional[str] = None
    regular: bool = False

    @field_validator('name', mode='before')
    @classmethod
    def strip_whitespace(cls, v):
        """Remove leading/trailing whitespace."""
        if v is None:
            return ""
        return str(v).strip()

    @field_validator('quantity', mode='before')
    @classmethod
    def parse_quantity(cls, v):
        """Take the leading integer of the input, 0 when there is none."""
        if isinstance(v, bool) or v is None:
            return 0
        if isinstance(v, int):
            return v
        if isinstance(v, float):
            return int(v)
        match = _LEADING_INT.match(str(v))
        return int(match.group(1)) if match else 0

    @field_validator('expirationDate', 'barcode', mode='before')
    @classmethod
    def blank_to_none(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator('regular', mode='before')
    @classmethod
    def checkbox_value(cls, v):
        """HTML checkboxes submit 'on' when ticked and nothing otherwise."""
        if isinstance(v, str):
            return v.strip().lower() in ('on', 'true', '1', 'yes')
        return bool(v)


class CredentialInput(BaseModel):
    """Schema for the Google Identity Services credential callback."""
    credential: str = Field(..., min_length=1)
    g_csrf_token: Optional[str] = None
