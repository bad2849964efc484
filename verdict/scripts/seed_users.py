# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Create a handful of sample accounts for local development."""

from __future__ import annotations

import argparse

from verdict.domain.users.exceptions import DuplicateEmailError
from verdict.infrastructure.container import Container
from verdict.infrastructure.db import init_db
from verdict.shared.logging import logger, setup_logging

SAMPLE_USERS = [
    ("john.smith@email.com", "John Smith"),
    ("sarah.johnson@email.com", "Sarah Johnson"),
    ("michael.chen@email.com", "Michael Chen"),
    ("emma.rodriguez@email.com", "Emma Rodriguez"),
    ("david.kim@email.com", "David Kim"),
]


def seed_users(container: Container, password: str) -> int:
    created = 0
    for email, name in SAMPLE_USERS:
        try:
            container.register_user_use_case.execute(email, password, name)
        except DuplicateEmailError:
            logger.info(f"seed: {email} already exists, skipping")
            continue
        created += 1
    return created


def main() -> None:
    parser = argparse.ArgumentParser(description="Seed sample users")
    parser.add_argument(
        "--password",
        default="password123",
        help="Password given to every sample account",
    )
    args = parser.parse_args()

    setup_logging()
    init_db()
    created = seed_users(Container(), args.password)
    logger.info(f"seed: created {created} users")


if __name__ == "__main__":
    main()
