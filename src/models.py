"""Data classes for family tree entities."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Member:
    id: str
    name: str
    father_id: str | None = None
    is_deceased: bool = False
    death_date: str | None = None  # ISO format YYYY-MM-DD or None

    # Certificate-only fields, set on manually entered ("outsider") records
    father_name: str | None = None
    is_outsider: bool = False
    generation: int | None = None  # cached for documents, never read by the engine
    ancestors: tuple[str, ...] = ()  # names, nearest first

    @property
    def is_root(self) -> bool:
        return self.father_id is None


@dataclass(frozen=True)
class Relative:
    member: Member
    generation: int
    distance: int
    is_ancestor: bool
    label: str
