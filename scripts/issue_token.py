#!/usr/bin/env python3
"""
Issue a development access token for calling the wallet API.

Example:
    python scripts/issue_token.py --id 42 --username alice
    python scripts/issue_token.py --id 1 --role admin --init-db
"""

from __future__ import annotations

import argparse
import asyncio
from datetime import timedelta

from transactions_service.core.config import get_settings
from transactions_service.core.security import create_access_token, create_refresh_token
from transactions_service.infrastructure.database.session import dispose_engine, init_db
from transactions_service.schemas import TokenPayload


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Issue a signed token for the wallet API")
    parser.add_argument("--id", type=int, required=True, help="owner id carried by the token")
    parser.add_argument("--username", default="", help="username claim")
    parser.add_argument("--iin", default="", help="iin claim")
    parser.add_argument("--role", default="user", help="role claim, use the admin role for /list_wallets")
    parser.add_argument("--minutes", type=int, default=None, help="lifetime override in minutes")
    parser.add_argument("--refresh", action="store_true", help="sign with the refresh secret instead")
    parser.add_argument("--init-db", action="store_true", help="create tables in the configured database first")
    return parser.parse_args()


async def _init_db() -> None:
    await init_db()
    await dispose_engine()


def main() -> None:
    args = parse_args()
    settings = get_settings()
    if args.init_db:
        asyncio.run(_init_db())

    payload = TokenPayload(id=args.id, iin=args.iin, username=args.username, role=args.role)
    delta = timedelta(minutes=args.minutes) if args.minutes else None
    issue = create_refresh_token if args.refresh else create_access_token
    print(issue(payload, expires_delta=delta, settings=settings))


if __name__ == "__main__":
    main()
