"""
Engine component providers for FastAPI dependency injection

The scoring components are stateless and shared. The precipitation feed is
the one stateful object: it owns the latest snapshot for the process.
"""

from functools import lru_cache

from src.models.flood_prediction import FactorAggregator
from src.models.risk_levels import RiskClassifier
from src.models.simulation import ScenarioSimulator
from src.models.visualization import VisualizationScaler
from src.services.precipitation_feed import PrecipitationFeed


@lru_cache()
def get_classifier() -> RiskClassifier:
    return RiskClassifier()


@lru_cache()
def get_aggregator() -> FactorAggregator:
    return FactorAggregator()


@lru_cache()
def get_simulator() -> ScenarioSimulator:
    return ScenarioSimulator()


@lru_cache()
def get_scaler() -> VisualizationScaler:
    return VisualizationScaler()


@lru_cache()
def get_precipitation_feed() -> PrecipitationFeed:
    """Process-wide precipitation store, created on first use"""
    return PrecipitationFeed(scaler=get_scaler())
