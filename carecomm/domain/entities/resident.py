"""Domain entity representing a resident of a facility."""

from dataclasses import dataclass

from .facility import Facility


@dataclass
class Resident:
    """A person receiving care at a facility."""

    id: int | None
    first_name: str
    last_name: str
    facility_id: int
    facility: Facility | None = None

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()


__all__ = ["Resident"]
