"""Recipient resolver: derives notification audiences from the user directory.

Two separate policies:
- resolve(): task lifecycle audience; assignees minus admins.
- admin_audience(): progress-start audience; every admin.
"""

from __future__ import annotations

from app.application.interfaces.repositories import IUserDirectory
from app.domain.enums import UserRole
from app.shared.telemetry.logging import get_logger

logger = get_logger(__name__)


class RecipientResolver:
    """Resolves recipient ids with one batched directory lookup per call."""

    def __init__(self, user_directory: IUserDirectory) -> None:
        self.user_directory = user_directory

    async def resolve(self, candidate_ids: set[str]) -> set[str]:
        """Return the candidates whose role is not admin.

        Ids unknown to the directory are dropped. Empty input returns an
        empty set without touching the directory.
        """
        if not candidate_ids:
            return set()
        users = await self.user_directory.get_many_by_ids(set(candidate_ids))
        eligible = {
            u.id for u in users if u.id in candidate_ids and u.role != UserRole.ADMIN
        }
        logger.debug(
            "Resolved %d of %d candidates as notification recipients",
            len(eligible),
            len(candidate_ids),
        )
        return eligible

    async def admin_audience(self) -> set[str]:
        """Return the ids of all admins."""
        admins = await self.user_directory.find_by_role(UserRole.ADMIN)
        return {u.id for u in admins}
