"""
Weighted Factor Flood Prediction

Combines four normalized weather/history factors into a composite flood
probability, labels it with a risk level and selects advisory text:
- Rainfall impact (0-100)
- Humidity level (0-100)
- Pressure factor (0-100)
- Historical risk of the region (0-100)

Inputs are never clamped: callers must normalize factors into [0, 100]
before calling, anything else is rejected with a ValidationError.

Author: Flood Risk Engine Team
"""

import math
from dataclasses import dataclass, field, fields
from typing import Any, Dict, List, Mapping, Optional, Tuple, Union

from src.models.errors import ValidationError, require_in_range
from src.models.risk_levels import RiskLevel, RISK_LEVEL_INFO, classify
from src.utils.logger import get_logger
from src.utils.rounding import clamp, round_half_away

logger = get_logger(__name__)


@dataclass(frozen=True)
class FloodFactors:
    """
    Normalized input factors, each a real number in [0, 100]

    Attributes:
        rainfall: Rainfall impact
        humidity: Humidity level
        pressure: Pressure factor (low-pressure systems score higher)
        historical_risk: Historical flood risk of the region
    """
    rainfall: float
    humidity: float
    pressure: float
    historical_risk: float

    # Accepted spellings when building from an upstream mapping
    ALIASES = {"historicalRisk": "historical_risk"}

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "FloodFactors":
        """
        Build factors from a mapping, accepting ``historicalRisk`` as an alias

        Raises:
            ValidationError: if a factor is missing
        """
        normalized = {cls.ALIASES.get(key, key): value for key, value in data.items()}
        values = {}
        for f in fields(cls):
            if f.name not in normalized:
                raise ValidationError(f.name, "is required", None)
            values[f.name] = normalized[f.name]
        return cls(**values)

    def to_dict(self) -> Dict[str, float]:
        return {
            "rainfall": self.rainfall,
            "humidity": self.humidity,
            "pressure": self.pressure,
            "historical_risk": self.historical_risk,
        }


@dataclass(frozen=True)
class FloodPrediction:
    """
    Result of one aggregation call

    Never mutated; a new prediction replaces the old one wherever it is held.

    Attributes:
        risk_level: Level derived from ``probability`` via the fixed thresholds
        probability: Composite flood probability, integer 0-100
        factors: The factors the prediction was computed from
        recommendations: Advisory lines, most urgent first
    """
    risk_level: RiskLevel
    probability: int
    factors: FloodFactors
    recommendations: Tuple[str, ...] = field(default_factory=tuple)

    def displayed_recommendations(self, limit: int = 3) -> List[str]:
        """The leading recommendations a display surface should show"""
        return list(self.recommendations[:limit])

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for API responses"""
        return {
            "risk_level": self.risk_level.value,
            "probability": self.probability,
            "factors": self.factors.to_dict(),
            "recommendations": list(self.recommendations),
        }


class FactorAggregator:
    """
    Weighted-sum flood probability model

    Rainfall and historical risk dominate the composite; pressure contributes
    least. The model is pure: identical inputs always give identical
    predictions.
    """

    # Factor weights (must sum to 1.0)
    WEIGHTS: Dict[str, float] = {
        "rainfall": 0.35,
        "historical_risk": 0.30,
        "humidity": 0.20,
        "pressure": 0.15,
    }

    # Factor-specific warnings, in priority order. Only the first factor above
    # its threshold contributes a line.
    FACTOR_WARNINGS: Tuple[Tuple[str, float, str], ...] = (
        (
            "rainfall", 70.0,
            "Heavy rainfall detected: stay away from rivers, canals and storm drains."
        ),
        (
            "historical_risk", 70.0,
            "This area has a history of flooding: review local evacuation routes."
        ),
        (
            "humidity", 85.0,
            "Saturated air and ground: expect fast runoff if rain intensifies."
        ),
        (
            "pressure", 70.0,
            "Low-pressure system nearby: conditions may deteriorate quickly."
        ),
    )

    RECOMMENDATIONS: Dict[RiskLevel, Tuple[str, ...]] = {
        RiskLevel.LOW: (
            "Conditions are normal. Stay informed through official weather updates.",
            "Keep an emergency kit and a family communication plan ready.",
            "Know the evacuation routes and shelters in your area.",
        ),
        RiskLevel.MODERATE: (
            "Monitor official weather and flood updates closely.",
            "Clear drains and gutters around your property.",
            "Review your household emergency plan and check your emergency kit.",
        ),
        RiskLevel.HIGH: (
            "Prepare an evacuation kit with documents, water, medicine and food.",
            "Avoid low-lying areas, riverbanks and underpasses.",
            "Move valuables, vehicles and livestock to higher ground.",
            "Follow instructions from local authorities.",
        ),
        RiskLevel.SEVERE: (
            "Evacuate immediately if instructed by local authorities.",
            "Avoid all non-essential travel and never drive through floodwater.",
            "Move to the highest floor or higher ground if you cannot evacuate.",
            "Keep your phone charged and emergency contacts at hand.",
        ),
    }

    def __init__(self):
        total_weight = sum(self.WEIGHTS.values())
        if not math.isclose(total_weight, 1.0):
            raise ValueError(f"Factor weights must sum to 1.0, got {total_weight:.3f}")
        logger.debug("Initialized FactorAggregator")

    def _validate(self, factors: Union[FloodFactors, Mapping[str, Any]]) -> FloodFactors:
        """
        Check every factor before anything is computed

        Raises:
            ValidationError: naming the first offending factor
        """
        if not isinstance(factors, FloodFactors):
            if not isinstance(factors, Mapping):
                raise ValidationError("factors", "must be FloodFactors or a mapping", factors)
            factors = FloodFactors.from_mapping(factors)

        for name in ("rainfall", "humidity", "pressure", "historical_risk"):
            require_in_range(name, getattr(factors, name), 0.0, 100.0)
        return factors

    def composite_score(self, factors: FloodFactors) -> float:
        """Weighted sum of the factors, before rounding"""
        return sum(weight * getattr(factors, name) for name, weight in self.WEIGHTS.items())

    def _factor_warning(self, factors: FloodFactors) -> Optional[str]:
        for name, threshold, message in self.FACTOR_WARNINGS:
            if getattr(factors, name) > threshold:
                return message
        return None

    def recommendations_for(self, risk_level: RiskLevel, factors: FloodFactors) -> Tuple[str, ...]:
        """
        Select advisory text, most urgent first

        The level catalog's leading advisory stays first; a factor-specific
        warning, when one applies, follows it.
        """
        catalog = list(self.RECOMMENDATIONS[risk_level])
        warning = self._factor_warning(factors)
        if warning:
            catalog.insert(1, warning)
        return tuple(catalog)

    def aggregate(self, factors: Union[FloodFactors, Mapping[str, Any]]) -> FloodPrediction:
        """
        Compute a flood prediction from the four factors

        Args:
            factors: FloodFactors or a mapping with the four factor names

        Returns:
            A fresh FloodPrediction

        Raises:
            ValidationError: if any factor is missing, non-numeric or outside [0, 100]
        """
        factors = self._validate(factors)

        score = self.composite_score(factors)
        probability = int(clamp(round_half_away(score), 0, 100))
        risk_level = classify(probability)

        prediction = FloodPrediction(
            risk_level=risk_level,
            probability=probability,
            factors=factors,
            recommendations=self.recommendations_for(risk_level, factors),
        )

        logger.debug(
            f"Aggregated flood factors: {risk_level.value.upper()} "
            f"(probability: {probability}%, raw score: {score:.2f})"
        )
        return prediction

    def aggregate_many(
        self,
        factors_list: List[Union[FloodFactors, Mapping[str, Any]]]
    ) -> List[FloodPrediction]:
        """
        Aggregate several factor sets

        Fails fast: the first invalid entry raises and nothing is returned.
        """
        logger.info(f"Running aggregation for {len(factors_list)} factor sets")
        validated = [self._validate(factors) for factors in factors_list]
        return [self.aggregate(factors) for factors in validated]

    def explain(self, prediction: FloodPrediction) -> str:
        """
        Generate human-readable explanation of a prediction

        Args:
            prediction: FloodPrediction to explain

        Returns:
            Formatted explanation string
        """
        info = RISK_LEVEL_INFO[prediction.risk_level]
        explanation = [
            "\nFlood Probability Analysis",
            f"{'='*60}",
            f"Risk Level: {info.label} - {info.description}",
            f"Probability: {prediction.probability}%",
            "\nContributing Factors:",
        ]

        contributions = {
            name: weight * getattr(prediction.factors, name)
            for name, weight in self.WEIGHTS.items()
        }
        for name, contribution in sorted(contributions.items(), key=lambda x: x[1], reverse=True):
            value = getattr(prediction.factors, name)
            explanation.append(
                f"  - {name}: {value:.1f} (weight {self.WEIGHTS[name]:.2f}, contributes {contribution:.1f})"
            )

        explanation.append("\nRecommendations:")
        for line in prediction.recommendations:
            explanation.append(f"  - {line}")
        explanation.append(f"{'='*60}\n")

        return "\n".join(explanation)
