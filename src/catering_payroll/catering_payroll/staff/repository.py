from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..core.enums import Skill
from .model import Staff


class StaffRepository(Protocol):
    """Repository interface for the staff roster.

    Services depend on this Protocol, never on a concrete database class.
    """

    def get_by_id(self, staff_id: int) -> Optional[Staff]:
        raise NotImplementedError

    def list_all(self) -> Sequence[Staff]:
        """Every staff member regardless of status (import name matching)."""

        raise NotImplementedError

    def list_active(self, *, skill: Optional[Skill] = None) -> Sequence[Staff]:
        """Active staff ordered by name, optionally filtered by skill."""

        raise NotImplementedError
