"""
Typed errors raised by the inventory services.

Every rejection leaves the store, the ledger and the directory unchanged.
The HTTP layer maps each class to a status code (see ``chemlab.app.main``).
"""

from __future__ import annotations

from decimal import Decimal


class InventoryError(Exception):
    code = "inventory_error"

    def __init__(self, detail: str):
        super().__init__(detail)
        self.detail = detail


class NotFound(InventoryError):
    code = "not_found"


class InsufficientStock(InventoryError):
    code = "insufficient_stock"

    def __init__(self, available: Decimal):
        # 3 or 0.7, never 3.0 or 1E+2
        shown = f"{Decimal(str(available)).normalize():f}"
        super().__init__(f"Insufficient stock (available={shown})")
        self.available = available


class InvalidInput(InventoryError):
    code = "invalid_input"


class InvalidLevel(InvalidInput):
    code = "invalid_level"

    def __init__(self, level):
        super().__init__(f"Invalid unit level {level!r} (allowed: 25, 50, 75, 100)")
        self.level = level


class LastUserError(InventoryError):
    code = "last_user"

    def __init__(self):
        super().__init__("Cannot delete the last user")
