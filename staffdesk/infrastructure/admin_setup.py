# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from staffdesk.application.use_cases.users.seed_admin import SeedAdminUseCase
from staffdesk.domain.users.entities import Role, User
from staffdesk.shared.config import AdminConfig
from staffdesk.shared.logging import logger


class AdminSetupError(Exception):
    pass


def setup_admin_user(use_case: SeedAdminUseCase, config: AdminConfig) -> User | None:
    """Ensure the configured administrator exists. No-op without ``ADMIN_PASSWORD``."""

    if not config.password:
        logger.info("admin_setup: no ADMIN_PASSWORD configured, skipping")
        return None

    user, created = use_case.execute(config.username, config.password)
    if created:
        logger.info(f"admin_setup: created admin user_id={user.id}")
    elif user.role is not Role.ADMIN:
        # Never promote silently; the name belongs to a regular account.
        raise AdminSetupError(
            f"ADMIN_USERNAME '{config.username}' exists without the admin role"
        )
    else:
        logger.info(f"admin_setup: admin already exists user_id={user.id}")
    return user


__all__ = ["AdminSetupError", "setup_admin_user"]
