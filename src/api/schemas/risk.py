from pydantic import AliasChoices, BaseModel, Field
from typing import List


class RiskLevelResponse(BaseModel):
    """Schema for risk level display metadata"""
    level: str
    label: str
    color: str
    fill_color: str
    description: str


class RiskLegendResponse(BaseModel):
    """Schema for the ordered legend of all risk levels"""
    levels: List[RiskLevelResponse]
    thresholds: dict


class ClassificationResponse(BaseModel):
    """Schema for classifying a single score"""
    score: float
    risk_level: RiskLevelResponse


class FactorsRequest(BaseModel):
    """
    Schema for the flood prediction request

    Factors are expected in [0, 100]; range checks are made by the engine so
    every out-of-range field is reported the same way.
    """
    rainfall: float = Field(..., description="Rainfall impact (0-100)")
    humidity: float = Field(..., description="Humidity level (0-100)")
    pressure: float = Field(..., description="Pressure factor (0-100)")
    historical_risk: float = Field(
        ...,
        validation_alias=AliasChoices("historical_risk", "historicalRisk"),
        description="Historical flood risk (0-100)"
    )


class FactorsResponse(BaseModel):
    rainfall: float
    humidity: float
    pressure: float
    historical_risk: float


class PredictionResponse(BaseModel):
    """Schema for flood prediction response"""
    risk_level: str
    probability: int = Field(..., ge=0, le=100)
    factors: FactorsResponse
    recommendations: List[str]
    displayed_recommendations: List[str]
    level_info: RiskLevelResponse
