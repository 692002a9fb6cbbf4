"""
Weather data models for the flood risk engine
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class PrecipitationPoint(BaseModel):
    """
    Precipitation reading for one monitored location

    Owned by the upstream precipitation feed; the engine only reads
    ``precipitation`` and passes the rest through for display.
    """
    model_config = ConfigDict(frozen=True)

    lat: float = Field(..., ge=-90, le=90, description="Latitude (WGS84)")
    lon: float = Field(..., ge=-180, le=180, description="Longitude (WGS84)")
    precipitation: float = Field(..., allow_inf_nan=False, description="Precipitation in millimeters")
    location: str = Field(..., description="Location display name")
    date: str = Field(..., description="Observation date (ISO 8601)")
    country: Optional[str] = Field(None, description="Country of the location")

    @field_validator('precipitation')
    @classmethod
    def validate_precipitation(cls, v: float) -> float:
        """Validate precipitation is non-negative"""
        if v < 0:
            raise ValueError(f"Precipitation {v}mm cannot be negative")
        return v
