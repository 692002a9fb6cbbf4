"""
Flood risk scoring and simulation models

This module includes:
- Risk level classification and display metadata
- Weighted factor flood prediction
- Scenario simulation
- Map visualization sizing
- Weather input models (Pydantic)
"""

from .errors import ValidationError

from .risk_levels import (
    RiskLevel,
    RiskLevelInfo,
    RiskClassifier,
    RISK_LEVEL_INFO,
    RISK_THRESHOLDS,
    classify,
    classify_precipitation,
    risk_legend
)

from .flood_prediction import FactorAggregator, FloodFactors, FloodPrediction

from .simulation import (
    ScenarioSimulator,
    SimulationParams,
    SimulationResult,
    InfrastructureImpact,
    EvacuationZone,
    EvacuationZoneProvider,
    MitigationAction,
    TerrainType
)

from .visualization import VisualizationScaler, MapMarker

from .weather import PrecipitationPoint

__all__ = [
    'ValidationError',

    # Classification
    'RiskLevel',
    'RiskLevelInfo',
    'RiskClassifier',
    'RISK_LEVEL_INFO',
    'RISK_THRESHOLDS',
    'classify',
    'classify_precipitation',
    'risk_legend',

    # Prediction
    'FactorAggregator',
    'FloodFactors',
    'FloodPrediction',

    # Simulation
    'ScenarioSimulator',
    'SimulationParams',
    'SimulationResult',
    'InfrastructureImpact',
    'EvacuationZone',
    'EvacuationZoneProvider',
    'MitigationAction',
    'TerrainType',

    # Visualization
    'VisualizationScaler',
    'MapMarker',

    # Weather inputs
    'PrecipitationPoint'
]
