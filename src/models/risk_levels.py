"""
Flood Risk Levels and Classification

Maps a numeric score (nominally 0-100) onto one of four ordered risk levels
and exposes the static display metadata used by map legends and badges.

A single threshold table drives both the risk-prediction path (composite
probability) and the precipitation-intensity path (rainfall in mm, taken 1:1
as percentage units), so the two can never disagree on where a level starts.

Author: Flood Risk Engine Team
"""

import math
from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Tuple

from src.utils.logger import get_logger

logger = get_logger(__name__)


class RiskLevel(str, Enum):
    """Flood risk severity levels, ordered LOW < MODERATE < HIGH < SEVERE"""
    LOW = "low"
    MODERATE = "moderate"
    HIGH = "high"
    SEVERE = "severe"

    @property
    def rank(self) -> int:
        """Position in the severity ordering (LOW == 0)"""
        return list(type(self)).index(self)

    def __lt__(self, other):
        if isinstance(other, RiskLevel):
            return self.rank < other.rank
        return NotImplemented

    def __le__(self, other):
        if isinstance(other, RiskLevel):
            return self.rank <= other.rank
        return NotImplemented

    def __gt__(self, other):
        if isinstance(other, RiskLevel):
            return self.rank > other.rank
        return NotImplemented

    def __ge__(self, other):
        if isinstance(other, RiskLevel):
            return self.rank >= other.rank
        return NotImplemented


@dataclass(frozen=True)
class RiskLevelInfo:
    """
    Static display metadata for a risk level

    Attributes:
        level: The risk level this entry describes
        label: Short human-readable label
        color: Primary (stroke) color as hex
        fill_color: Fill color as hex
        description: One-sentence description for legends and popups
    """
    level: RiskLevel
    label: str
    color: str
    fill_color: str
    description: str

    def to_dict(self) -> Dict[str, str]:
        """Convert to dictionary for API responses"""
        return {
            "level": self.level.value,
            "label": self.label,
            "color": self.color,
            "fill_color": self.fill_color,
            "description": self.description,
        }


# Inclusive lower bounds; anything below the first bound is LOW
RISK_THRESHOLDS: Tuple[Tuple[float, RiskLevel], ...] = (
    (75.0, RiskLevel.SEVERE),
    (50.0, RiskLevel.HIGH),
    (25.0, RiskLevel.MODERATE),
)

RISK_LEVEL_INFO: Dict[RiskLevel, RiskLevelInfo] = {
    RiskLevel.LOW: RiskLevelInfo(
        level=RiskLevel.LOW,
        label="Low Risk",
        color="#16a34a",
        fill_color="#86efac",
        description="Minimal flooding expected; normal conditions.",
    ),
    RiskLevel.MODERATE: RiskLevelInfo(
        level=RiskLevel.MODERATE,
        label="Moderate Risk",
        color="#ca8a04",
        fill_color="#fde047",
        description="Localized flooding possible in low-lying areas.",
    ),
    RiskLevel.HIGH: RiskLevelInfo(
        level=RiskLevel.HIGH,
        label="High Risk",
        color="#ea580c",
        fill_color="#fdba74",
        description="Significant flooding likely; prepare to act.",
    ),
    RiskLevel.SEVERE: RiskLevelInfo(
        level=RiskLevel.SEVERE,
        label="Severe Risk",
        color="#dc2626",
        fill_color="#fca5a5",
        description="Dangerous widespread flooding; evacuation may be required.",
    ),
}


def classify(score: float) -> RiskLevel:
    """
    Classify a numeric score into a risk level

    Total over the reals: values below 0 land in LOW, values above 100 in
    SEVERE. Boundary values (25, 50, 75) belong to the upper bucket. NaN
    compares false against every bound and therefore classifies as LOW.

    Args:
        score: Risk score, nominally 0-100

    Returns:
        RiskLevel for the score
    """
    for lower_bound, level in RISK_THRESHOLDS:
        if score >= lower_bound:
            return level
    return RiskLevel.LOW


def classify_precipitation(precipitation_mm: float) -> RiskLevel:
    """
    Classify a precipitation reading (mm) with the shared threshold table

    Args:
        precipitation_mm: Precipitation in millimetres

    Returns:
        RiskLevel for the reading
    """
    return classify(precipitation_mm)


def risk_legend() -> List[RiskLevelInfo]:
    """Ordered metadata for every level, LOW first"""
    return [RISK_LEVEL_INFO[level] for level in RiskLevel]


class RiskClassifier:
    """
    Stateless facade over the classification functions

    Kept as a class so callers can inject it alongside the other engine
    components.
    """

    THRESHOLDS = RISK_THRESHOLDS

    def classify(self, score: float) -> RiskLevel:
        level = classify(score)
        if isinstance(score, float) and math.isnan(score):
            logger.warning("NaN score classified as LOW")
        return level

    def classify_precipitation(self, precipitation_mm: float) -> RiskLevel:
        return classify_precipitation(precipitation_mm)

    def info(self, level: RiskLevel) -> RiskLevelInfo:
        """Display metadata for ``level``"""
        return RISK_LEVEL_INFO[RiskLevel(level)]

    def legend(self) -> List[RiskLevelInfo]:
        return risk_legend()
