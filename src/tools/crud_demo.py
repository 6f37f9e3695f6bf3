#!/usr/bin/env python3
"""
Command-line CRUD tool for the user records table
"""

import os
import sys
import argparse
import asyncio

# Add src to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from config.settings import (
    DATABASE_URL,
    DB_POOL_MIN_SIZE,
    DB_POOL_MAX_SIZE,
    DB_COMMAND_TIMEOUT,
    USERS_TABLE,
)
from database.connection import Database
from database.errors import RecordStoreError
from database.record_store import RecordStore


class CrudDemo:
    """Runs record store operations and prints their outcome"""

    def __init__(self, store: RecordStore):
        self.store = store

    async def show_all(self):
        print(f"📋 Records in {self.store.table}:")
        count = 0
        async for record in self.store.list_records():
            print(f"   {record.id}\t{record.name}")
            count += 1
        if count == 0:
            print("   (none)")
        return count

    async def create(self, record_id: int, name: str):
        new_id = await self.store.create(record_id, name)
        print(f"✅ Inserted record: {new_id}")
        return new_id

    async def update(self, record_id: int, name: str):
        affected = await self.store.update(record_id, name)
        print(f"✏️  Updated rows: {affected}")
        return affected

    async def delete(self, record_id: int):
        affected = await self.store.delete(record_id)
        print(f"🗑️  Deleted rows: {affected}")
        return affected

    async def scenario(self, record_id: int = 3, name: str = "peter", new_name: str = "zhangqi"):
        """Insert, list, rename, list, delete, list"""
        await self.create(record_id, name)
        await self.show_all()
        await self.update(record_id, new_name)
        await self.show_all()
        await self.delete(record_id)
        await self.show_all()


async def run(args, database) -> None:
    """Open the database, run the requested command and always close it"""
    print("🔌 Opening the database")
    await database.connect()
    try:
        demo = CrudDemo(RecordStore(database, table=args.table or USERS_TABLE, timeout=DB_COMMAND_TIMEOUT))

        if args.command == "scenario":
            await demo.scenario()
        elif args.command == "list":
            await demo.show_all()
        elif args.command == "create":
            await demo.create(args.id, args.name)
        elif args.command == "update":
            await demo.update(args.id, args.name)
        elif args.command == "delete":
            await demo.delete(args.id)
    finally:
        await database.close()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Run CRUD operations against the user records table")
    parser.add_argument("--table", help="Table name (defaults to USERS_TABLE)")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    subparsers.add_parser("scenario", help="Insert, rename and delete record 3, listing after each step")
    subparsers.add_parser("list", help="List all records")

    create_parser = subparsers.add_parser("create", help="Insert a record")
    create_parser.add_argument("id", type=int, help="Record id")
    create_parser.add_argument("name", help="Record name")

    update_parser = subparsers.add_parser("update", help="Rename a record")
    update_parser.add_argument("id", type=int, help="Record id")
    update_parser.add_argument("name", help="New name")

    delete_parser = subparsers.add_parser("delete", help="Delete a record")
    delete_parser.add_argument("id", type=int, help="Record id")

    return parser


def main(argv=None, database=None):
    """Main CLI interface"""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return

    if database is None:
        database = Database(
            DATABASE_URL,
            min_size=DB_POOL_MIN_SIZE,
            max_size=DB_POOL_MAX_SIZE,
            command_timeout=DB_COMMAND_TIMEOUT
        )

    try:
        asyncio.run(run(args, database))
    except RecordStoreError as e:
        print(f"❌ Error: {str(e)}")
        sys.exit(1)


if __name__ == "__main__":
    main()
