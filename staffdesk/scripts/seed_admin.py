# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Create the bootstrap administrator account."""

from __future__ import annotations

import argparse
import getpass
import sys

from staffdesk.container import Container
from staffdesk.infrastructure.admin_setup import AdminSetupError, setup_admin_user
from staffdesk.infrastructure.db import init_db
from staffdesk.shared.config import load_config
from staffdesk.shared.logging import setup_logging

DEFAULT_PASSWORD = "admin123"


def main(argv: list[str] | None = None) -> int:
    config = load_config()
    parser = argparse.ArgumentParser(description="Create the admin user if it is missing")
    parser.add_argument(
        "--username",
        default=config.admin.username,
        help="Admin username (default: ADMIN_USERNAME or 'admin')",
    )
    parser.add_argument(
        "--password",
        default=config.admin.password,
        help="Admin password (default: ADMIN_PASSWORD, else prompt)",
    )
    parser.add_argument(
        "--database-url",
        default=None,
        help="Override DATABASE_URL",
    )
    args = parser.parse_args(argv)

    password = args.password
    if not password:
        password = getpass.getpass(f"Password for {args.username} [{DEFAULT_PASSWORD}]: ")
        password = password or DEFAULT_PASSWORD

    updates: dict[str, object] = {
        "admin": config.admin.model_copy(update={"username": args.username, "password": password})
    }
    if args.database_url:
        updates["database"] = config.database.model_copy(update={"url": args.database_url})
    config = config.model_copy(update=updates)

    setup_logging(config.log_level, config.log_file)
    container = Container(config)
    init_db(container.engine)

    existing = container.user_repository.find_by_username(args.username)
    try:
        setup_admin_user(container.seed_admin_use_case, config.admin)
    except AdminSetupError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    if existing:
        print(f"Admin user '{args.username}' already exists")
    else:
        print(f"Admin user '{args.username}' created")
    return 0


if __name__ == "__main__":
    sys.exit(main())
