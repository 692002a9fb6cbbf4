from pydantic import AliasChoices, BaseModel, Field
from typing import List


class SimulationRequest(BaseModel):
    """
    Schema for a scenario simulation request

    Range and variant checks are made by the simulator; a violation is
    returned as a 422 naming the offending field.
    """
    rainfall_intensity: float = Field(
        ...,
        validation_alias=AliasChoices("rainfall_intensity", "rainfallIntensity"),
        description="Rainfall intensity (0-100)"
    )
    river_overflow: float = Field(
        ...,
        validation_alias=AliasChoices("river_overflow", "riverOverflow"),
        description="River overflow level (0-100)"
    )
    terrain_type: str = Field(
        ...,
        validation_alias=AliasChoices("terrain_type", "terrainType"),
        description="Terrain type: urban, rural or mixed"
    )
    duration: int = Field(..., description="Duration in hours (6-72)")


class SimulationParamsResponse(BaseModel):
    rainfall_intensity: float
    river_overflow: float
    terrain_type: str
    duration: int


class InfrastructureImpactResponse(BaseModel):
    roads: int
    buildings: int
    agriculture: int


class EvacuationZoneResponse(BaseModel):
    lat: float = Field(..., ge=-90, le=90)
    lon: float = Field(..., ge=-180, le=180)


class MitigationActionResponse(BaseModel):
    title: str
    description: str
    priority: str


class SimulationResponse(BaseModel):
    """Schema for a completed simulation"""
    params: SimulationParamsResponse
    severity: float
    affected_area: int
    population_at_risk: int
    infrastructure_impact: InfrastructureImpactResponse
    evacuation_zones: List[EvacuationZoneResponse]
    mitigation: List[MitigationActionResponse]
