#!/usr/bin/env python3
"""
User management command line tool.

Works directly against the configured database, e.g. to create the first
administrator before anyone can log in.

Usage:
    python -m cli.manage_users create --username admin --role Admin
"""
import argparse
import asyncio
import getpass
import sys

from pydantic import ValidationError

from core.config import settings
from core.constants import Roles
from core.exceptions import GatewayError
from db.database import DatabaseManager
from models.users import UserCreateRequest
from repositories.user_repository import SqlAlchemyUserRepository
from services.user_service import user_service

db_manager = DatabaseManager.from_settings(settings)


async def create_user(args) -> None:
    password = args.password or getpass.getpass("Password: ")
    request = UserCreateRequest(
        username=args.username,
        password=password,
        full_name=args.full_name,
        role=args.role,
    )
    async with db_manager.session() as session:
        profile = await user_service.create_user(SqlAlchemyUserRepository(session), request)
    print("✅ User created")
    print(f"ID: {profile.id}")
    print(f"Username: {profile.username}")
    print(f"Role: {profile.role}")


async def list_users(args) -> None:
    async with db_manager.session() as session:
        users = await user_service.list_users(SqlAlchemyUserRepository(session), not args.show_all)
    print(f"📋 Users: {len(users)}")
    for user in users:
        state = "active" if user.is_active else "inactive"
        print(f"  {user.id}  {user.username:<20} {user.role:<8} {state}  {user.full_name}")


async def deactivate_user(args) -> None:
    async with db_manager.session() as session:
        await user_service.deactivate_user(SqlAlchemyUserRepository(session), args.id)
    print(f"🔒 User {args.id} deactivated")


COMMANDS = {
    "create": create_user,
    "list": list_users,
    "deactivate": deactivate_user,
}


async def run(args) -> None:
    await db_manager.init_db()
    try:
        await COMMANDS[args.command](args)
    finally:
        await db_manager.close()


def main():
    parser = argparse.ArgumentParser(description="Gateway user management")
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    create_parser = subparsers.add_parser("create", help="Create a user")
    create_parser.add_argument("--username", required=True)
    create_parser.add_argument("--password", help="Prompted for when omitted")
    create_parser.add_argument("--full-name", default="")
    create_parser.add_argument("--role", default=Roles.USER, choices=[Roles.ADMIN, Roles.USER])

    list_parser = subparsers.add_parser("list", help="List users")
    list_parser.add_argument("--show-all", action="store_true", help="Include inactive users")

    deactivate_parser = subparsers.add_parser("deactivate", help="Deactivate a user")
    deactivate_parser.add_argument("--id", required=True, help="User id")

    args = parser.parse_args()
    if not args.command:
        parser.print_help()
        return

    try:
        asyncio.run(run(args))
    except GatewayError as e:
        print(f"❌ Error: {e.message}")
        sys.exit(1)
    except ValidationError as e:
        print(f"❌ Invalid input: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
