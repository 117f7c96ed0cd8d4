"""DTOs for the user directory (read-only from this service)."""

from dataclasses import dataclass

from app.domain.enums import UserRole


@dataclass(frozen=True)
class UserResult:
    """User read-model resolved by the directory. No credentials."""

    id: str
    role: UserRole
    name: str
    email: str
    image: str | None = None
    job_title: str | None = None
    is_active: bool = True

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN
