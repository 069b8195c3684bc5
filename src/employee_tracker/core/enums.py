from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """User role used for routing and permission checks."""

    ADMIN = "admin"
    EMPLOYEE = "employee"


class TaskPriority(str, Enum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"
    CRITICAL = "Critical"


class TaskStatus(str, Enum):
    """Task lifecycle. No transition order is enforced."""

    PENDING = "Pending"
    ACTIVE = "Active"
    DONE = "Done"


class TaskFilter(str, Enum):
    """Filters offered on the task boards."""

    ALL = "All"
    HIGH_PRIORITY = "High Priority"
    DUE_TODAY = "Due Today"
    PENDING = "Pending"
    ACTIVE = "Active"
    DONE = "Done"


class AttendanceStatus(str, Enum):
    PRESENT = "Present"
    ABSENT = "Absent"
    HALF_DAY = "Half Day"
    LEAVE = "Leave"


class AttendancePolicy(str, Enum):
    """How a new attendance mark treats an existing row for the same day."""

    APPEND = "append"
    UPSERT = "upsert"
