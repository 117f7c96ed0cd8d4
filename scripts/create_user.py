"""Create a user in the directory (Postgres only).

Usage:
    python -m scripts.create_user <name> <email> [user|admin]
Prints the new user id; pass it to scripts.issue_dev_token to get a bearer token.
"""

import asyncio
import sys

from app.core.config import get_settings
from app.domain.enums import UserRole
from app.infrastructure.persistence import database
from app.infrastructure.persistence.models import User


async def main() -> None:
    if len(sys.argv) < 3:
        print(
            "Usage: python -m scripts.create_user <name> <email> [user|admin]",
            file=sys.stderr,
        )
        sys.exit(1)
    name, email = sys.argv[1], sys.argv[2]
    role = sys.argv[3] if len(sys.argv) > 3 else UserRole.USER.value
    if role not in UserRole.values():
        print(f"Role must be one of {UserRole.values()}, got {role!r}", file=sys.stderr)
        sys.exit(1)

    get_settings()
    database.ensure_engine()
    if database.AsyncSessionLocal is None:
        print("AsyncSessionLocal not configured", file=sys.stderr)
        sys.exit(1)

    async with database.AsyncSessionLocal() as session:
        async with session.begin():
            user = User(name=name, email=email, role=role)
            session.add(user)
            await session.flush()
            print(user.id)


if __name__ == "__main__":
    asyncio.run(main())
