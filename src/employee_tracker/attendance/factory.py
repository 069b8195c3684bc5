from __future__ import annotations

from dataclasses import dataclass

from ..core.enums import AttendancePolicy
from .strategies.append_strategy import AppendStrategy
from .strategies.base import AttendanceWriteStrategy
from .strategies.upsert_strategy import UpsertStrategy


@dataclass
class AttendanceStrategyFactory:
    """Factory Pattern: choose the write strategy for a policy."""

    def for_policy(self, policy: AttendancePolicy) -> AttendanceWriteStrategy:
        if policy == AttendancePolicy.UPSERT:
            return UpsertStrategy()
        if policy == AttendancePolicy.APPEND:
            return AppendStrategy()
        raise ValueError(f"Unsupported attendance policy: {policy!r}")
