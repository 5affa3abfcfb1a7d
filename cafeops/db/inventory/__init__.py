"""
Shop inventory (single location).

Models:
- InventoryItem (stock counters, category, reorder status)
- InventoryHistory (append-only in/out ledger, one row per stock change)

Category buckets used by the clients: "sweets", "roasted_beans", and "other"
(null or anything else).
"""

STATUS_IN_STOCK = "in_stock"
STATUS_NEEDS_REORDER = "needs_reorder"
ITEM_STATUSES = (STATUS_NEEDS_REORDER, STATUS_IN_STOCK)

CATEGORY_SWEETS = "sweets"
CATEGORY_ROASTED_BEANS = "roasted_beans"
CATEGORY_OTHER = "other"
NAMED_CATEGORIES = (CATEGORY_SWEETS, CATEGORY_ROASTED_BEANS)

DEFAULT_UNIT = "piece"

# Largest value an INTEGER stock column holds on every supported backend
MAX_STOCK = 2**31 - 1
