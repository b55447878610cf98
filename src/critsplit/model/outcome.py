"""Outcome model: per-stylesheet and per-asset results."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Status(Enum):
    """How processing of one stylesheet or asset ended."""

    SUCCESS = "success"
    FAIL = "fail"
    SKIPPED = "skipped"


@dataclass
class Outcome:
    """Result of processing a single named stylesheet or asset."""

    name: str
    status: Status
    notes: str = ""
    failure_reason: str = ""
    size_before: int = 0
    size_after: int = 0

    @property
    def succeeded(self) -> bool:
        """True unless the status is FAIL."""
        return self.status is not Status.FAIL

    @property
    def failed(self) -> bool:
        return self.status is Status.FAIL
