"""
Create the tables and insert a few sample shifts, inventory items and notices.

Usage:
  DATABASE_URL=sqlite+aiosqlite:///./cafeops.db cafeops-seed
  python -m cafeops.scripts.seed_sample_data --reset
"""

from __future__ import annotations

import argparse
import asyncio
import logging
from datetime import date

from sqlalchemy import delete

from cafeops.core.config import settings
from cafeops.core.logging import configure_logging
from cafeops.db.database import Database
from cafeops.db.inventory import CATEGORY_ROASTED_BEANS, CATEGORY_SWEETS
from cafeops.db.models import DailyFlag, InventoryHistory, InventoryItem, Notice, Shift

logger = logging.getLogger("cafeops.seed")

SAMPLE_SHIFTS = [
    {
        "employee_name": "Taro",
        "date": date(2024, 1, 15),
        "start_time": "09:00",
        "end_time": "17:00",
        "position": "floor",
        "notes": "In training",
    },
    {
        "employee_name": "Hanako",
        "date": date(2024, 1, 15),
        "start_time": "13:00",
        "end_time": "21:00",
        "position": "register",
        "notes": None,
    },
]

SAMPLE_INVENTORY = [
    {
        "item_name": "House blend",
        "current_stock": 12,
        "minimum_stock": 5,
        "unit": "bag",
        "category": CATEGORY_ROASTED_BEANS,
        "notes": "500g bags",
    },
    {
        "item_name": "Cheesecake",
        "current_stock": 3,
        "minimum_stock": 6,
        "unit": "slice",
        "category": CATEGORY_SWEETS,
        "notes": None,
    },
    {
        "item_name": "Paper cups",
        "current_stock": 50,
        "minimum_stock": 10,
        "unit": "sleeve",
        "category": None,
        "notes": "12oz",
    },
]

SAMPLE_NOTICES = [
    {
        "title": "New season training",
        "content": "Training for the new menu starts next month. Details to follow.",
        "priority": "high",
        "author": "Manager",
    },
    {
        "title": "Register maintenance",
        "content": "The POS terminal will be serviced this weekend.",
        "priority": "normal",
        "author": "IT",
    },
]


async def main(reset: bool) -> None:
    configure_logging(settings.log_level)
    db = Database(settings.database_url, echo=settings.database_echo)
    try:
        await db.create_all()
        async with db.session_maker() as session:
            if reset:
                for model in (InventoryHistory, InventoryItem, Shift, Notice, DailyFlag):
                    await session.execute(delete(model))

            session.add_all(Shift(**row) for row in SAMPLE_SHIFTS)
            session.add_all(InventoryItem(**row) for row in SAMPLE_INVENTORY)
            session.add_all(Notice(**row) for row in SAMPLE_NOTICES)
            await session.commit()

        logger.info(
            "Seeded %d shifts, %d inventory items, %d notices",
            len(SAMPLE_SHIFTS), len(SAMPLE_INVENTORY), len(SAMPLE_NOTICES),
        )
    finally:
        await db.dispose()


def cli() -> None:
    parser = argparse.ArgumentParser(description=__doc__.strip().splitlines()[0])
    parser.add_argument("--reset", action="store_true", help="Delete existing rows first")
    args = parser.parse_args()
    asyncio.run(main(reset=args.reset))


if __name__ == "__main__":
    cli()
