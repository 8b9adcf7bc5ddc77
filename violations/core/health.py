"""Health report records.

A health report is a 0-100 score plus a human readable description.
Lower is worse. Several reports are folded into one with ``min_health``.
"""

from dataclasses import dataclass
from typing import Iterable, Optional

from .constants import (
    HEALTH_00_TO_19,
    HEALTH_20_TO_39,
    HEALTH_40_TO_59,
    HEALTH_60_TO_79,
    HEALTH_80_PLUS,
)


@dataclass(frozen=True)
class HealthReport:
    """Score and description for a single category (or a whole build)."""

    score: int  # 0..100
    description: str

    @property
    def icon(self) -> str:
        """Icon name for the score band."""
        if self.score < 20:
            return HEALTH_00_TO_19
        if self.score < 40:
            return HEALTH_20_TO_39
        if self.score < 60:
            return HEALTH_40_TO_59
        if self.score < 80:
            return HEALTH_60_TO_79
        return HEALTH_80_PLUS

    def to_dict(self) -> dict:
        return {"score": self.score, "description": self.description, "icon": self.icon}


def min_health(
    a: Optional[HealthReport], b: Optional[HealthReport]
) -> Optional[HealthReport]:
    """Return the lower scoring report, ignoring None. Ties keep ``a``."""
    if a is None:
        return b
    if b is None:
        return a
    return a if a.score <= b.score else b


def worst_health(reports: Iterable[Optional[HealthReport]]) -> Optional[HealthReport]:
    """Fold reports with ``min_health``; None if nothing was reported."""
    ret = None
    for report in reports:
        ret = min_health(ret, report)
    return ret
