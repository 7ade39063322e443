"""Domain entity representing a care-team user."""

from dataclasses import dataclass


@dataclass
class User:
    """Contact details and role of a staff member or caregiver."""

    id: int | None
    first_name: str
    last_name: str
    email: str
    mobile_number: str | None = None
    push_token: str | None = None
    user_type: str = ""

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    def has_type(self, *aliases: str) -> bool:
        """Return ``True`` when the user's role matches any of ``aliases``."""

        current = (self.user_type or "").strip().lower()
        return current in {alias.lower() for alias in aliases}


__all__ = ["User"]
