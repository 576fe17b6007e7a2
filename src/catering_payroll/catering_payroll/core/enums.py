from __future__ import annotations

from enum import Enum


class StaffStatus(str, Enum):
    """Roster status of a staff member."""

    ACTIVE = "ACTIVE"
    INACTIVE = "INACTIVE"


class Skill(str, Enum):
    """Station a staff member can work (front of house, hot station, or both)."""

    FRONT = "FRONT"
    HOT = "HOT"
    BOTH = "BOTH"


class WorkLogSource(str, Enum):
    """Origin of a persisted payroll record."""

    IMPORT = "IMPORT"
    MANUAL = "MANUAL"
    SYSTEM = "SYSTEM"


class GroupBy(str, Enum):
    STAFF = "staff"
    DATE = "date"
    MONTH = "month"


class RowErrorCode(str, Enum):
    """Row-level failures; any of these blocks a confirmed import."""

    MISSING_STAFF_NAME = "MISSING_STAFF_NAME"
    UNKNOWN_STAFF = "UNKNOWN_STAFF"
    AMBIGUOUS_STAFF = "AMBIGUOUS_STAFF"
    INVALID_DATE = "INVALID_DATE"
    INVALID_TIME = "INVALID_TIME"
    MISSING_SHIFT_START = "MISSING_SHIFT_START"
    INVALID_AMOUNT = "INVALID_AMOUNT"


class RowWarningCode(str, Enum):
    """Informational notes that never block persistence."""

    NO_MATCHING_SCHEDULE = "NO_MATCHING_SCHEDULE"
    NO_ASSEMBLY_TIME = "NO_ASSEMBLY_TIME"


class RowStatus(str, Enum):
    """Lifecycle of one import row: PENDING until evaluated, then VALID or ERROR."""

    PENDING = "PENDING"
    VALID = "VALID"
    ERROR = "ERROR"
