"""Domain entity representing a care facility."""

from dataclasses import dataclass


@dataclass
class Facility:
    """A care facility housing residents."""

    id: int | None
    name: str
    address: str | None = None
    city: str | None = None
    state: str | None = None
    zip_code: str | None = None


__all__ = ["Facility"]
