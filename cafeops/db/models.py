"""Every mapped table, imported in one place so metadata is complete."""

from .daily_flag import DailyFlag
from .inventory.history import InventoryHistory
from .inventory.item import InventoryItem
from .notice import Notice
from .shift import Shift

__all__ = ["DailyFlag", "InventoryHistory", "InventoryItem", "Notice", "Shift"]
