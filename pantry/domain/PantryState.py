"""Application state: pantry items, the optional signed-in user and the barcode scan session.

State objects are treated as values. Update functions in
``pantry.logic.state.updates`` build new instances with ``replace`` instead of
mutating the lists held here.
"""
from typing import Dict, List, Optional, Tuple

from pantry.domain.PantryItem import PantryItem
from pantry.domain.User import User
from pantry.utilities.constants import SCAN_PROMPT


class ScanSession:
    def __init__(self, panel_open: bool = False, scanning: bool = False,
                 status: str = SCAN_PROMPT, code: Optional[str] = None,
                 draft: Optional[Dict[str, str]] = None):
        self.panel_open = panel_open
        self.scanning = scanning
        self.status = status
        self.code = code  # last decoded value, pre-fills the add form
        # add-form fields typed before the scan started
        self.draft: Dict[str, str] = dict(draft or {})

    def replace(self, **changes) -> "ScanSession":
        values = {
            "panel_open": self.panel_open,
            "scanning": self.scanning,
            "status": self.status,
            "code": self.code,
            "draft": self.draft,
        }
        values.update(changes)
        return ScanSession(**values)

    def __eq__(self, other) -> bool:
        if not isinstance(other, ScanSession):
            return NotImplemented
        return (self.panel_open, self.scanning, self.status, self.code, self.draft) == \
            (other.panel_open, other.scanning, other.status, other.code, other.draft)

    def __repr__(self) -> str:
        return (f"ScanSession(panel_open={self.panel_open}, scanning={self.scanning}, "
                f"status={self.status!r}, code={self.code!r}, draft={self.draft!r})")


class PantryState:
    def __init__(self, items: Optional[List[PantryItem]] = None, user: Optional[User] = None,
                 scan: Optional[ScanSession] = None):
        self.items: Tuple[PantryItem, ...] = tuple(items or ())
        self.user = user
        self.scan = scan or ScanSession()

    def replace(self, **changes) -> "PantryState":
        values = {"items": self.items, "user": self.user, "scan": self.scan}
        values.update(changes)
        return PantryState(**values)

    def get_item(self, item_id: str) -> Optional[PantryItem]:
        '''
        Returns the item with the given identifier, or None.
        '''
        return next((item for item in self.items if item.id == item_id), None)

    def __str__(self) -> str:
        items_str = ",\n\t".join(str(item) for item in self.items)
        return f"User: {self.user}\nItems:\n\t{items_str}"

    def __repr__(self) -> str:
        return self.__str__()
