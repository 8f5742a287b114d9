#!/usr/bin/env python3
"""
Database management script.
Creates, drops, resets, checks and seeds the listing database.
"""

import asyncio
import sys
import argparse
import logging

from estate_api.config import settings
from estate_api.database import (
    AsyncSessionLocal,
    check_database_connection,
    close_db_connection,
    create_tables,
    drop_tables
)
from estate_api.models.listing import ListingType
from estate_api.repositories.listing import ListingRepository
from estate_api.repositories.user import UserRepository

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

DEMO_EMAIL = "demo@example.com"


async def seed_database() -> None:
    """Create a demo user with one listing unless it already exists."""
    async with AsyncSessionLocal() as session:
        user_repo = UserRepository(session)

        if await user_repo.get_by_email(DEMO_EMAIL):
            logger.info("Demo data already present, skipping seed")
            return

        user = await user_repo.create_user({
            "username": "demo",
            "email": DEMO_EMAIL,
            "password": "demopassword123"
        })

        await ListingRepository(session).create_listing({
            "name": "Sunny two bedroom apartment",
            "description": "Quiet street, close to shops and the park.",
            "address": "1 Demo Street, Springfield",
            "regular_price": 1500,
            "discount_price": 1250,
            "bathrooms": 1,
            "bedrooms": 2,
            "furnished": True,
            "parking": True,
            "offer": True,
            "type": ListingType.RENT,
            "image_urls": ["https://example.com/images/demo-cover.jpg"],
            "owner_ref": user.id
        })

        logger.info(f"Seeded demo user {DEMO_EMAIL} with one listing")


async def run(command: str) -> bool:
    try:
        if command == "check":
            return await check_database_connection()

        if command == "create":
            await create_tables()
        elif command == "drop":
            await drop_tables()
        elif command == "reset":
            await drop_tables()
            await create_tables()
        elif command == "seed":
            await seed_database()
        return True
    finally:
        await close_db_connection()


def main():
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(description="Database management for the Estate Listing API")
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    subparsers.add_parser("create", help="Create all tables")
    subparsers.add_parser("check", help="Check database connectivity")
    subparsers.add_parser("seed", help="Seed a demo user and listing")

    drop_parser = subparsers.add_parser("drop", help="Drop all tables (development only)")
    drop_parser.add_argument("--confirm", action="store_true", help="Confirm dropping tables")

    reset_parser = subparsers.add_parser("reset", help="Drop and recreate all tables (development only)")
    reset_parser.add_argument("--confirm", action="store_true", help="Confirm database reset")

    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        return

    if args.command in ("drop", "reset") and not args.confirm:
        print(f"Database {args.command} requires --confirm flag")
        return

    logger.info(f"Running '{args.command}' against {settings.environment} database")

    try:
        ok = asyncio.run(run(args.command))
    except Exception as e:
        logger.error(f"Command failed: {e}")
        sys.exit(1)

    if not ok:
        sys.exit(1)


if __name__ == "__main__":
    main()
