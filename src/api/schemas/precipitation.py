from pydantic import BaseModel
from typing import List, Optional
from datetime import datetime

from src.api.schemas.risk import RiskLevelResponse


class MapMarkerResponse(BaseModel):
    """Schema for one styled precipitation marker"""
    location: str
    lat: float
    lon: float
    precipitation: float
    date: str
    risk_level: str
    label: str
    color: str
    fill_color: str
    description: str
    radius: float
    fill_opacity: float
    weight: int


class PrecipitationMapResponse(BaseModel):
    """Schema for the global precipitation risk map"""
    fetched_at: Optional[datetime]
    zoom: int
    count: int
    markers: List[MapMarkerResponse]
    legend: List[RiskLevelResponse]
    quality_passed: Optional[bool] = None


class RadiusResponse(BaseModel):
    """Schema for a single marker radius computation"""
    precipitation: float
    zoom: int
    radius: float
    fill_opacity: float
    risk_level: str
