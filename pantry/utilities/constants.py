from typing import Final

# Persisted dates use the HTML date input format; the UI shows the day first.
DATE_FORMAT: Final[str] = "%Y-%m-%d"
DISPLAY_DATE_FORMAT: Final[str] = "%d.%m.%Y"

# Key-value storage keys
INVENTORY_KEY: Final[str] = "inventory"
USER_KEY: Final[str] = "googleUser"

# Scan panel messages
SCAN_PROMPT: Final[str] = "Scanning… align the barcode within the frame."
SCAN_FAILED: Final[str] = "Scanning cancelled or failed."
SCAN_UNSUPPORTED: Final[str] = "Barcode scanner not supported in this browser."
SCAN_SUCCESS_TEMPLATE: Final[str] = "Scanned code: {code}. Populating name field."
