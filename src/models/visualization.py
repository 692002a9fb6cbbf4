"""
Map visualization sizing for precipitation data points

Derives the circle radius and styling the rendering layer draws for each
precipitation reading. Radii grow with precipitation (capped at 2x) and
shrink as the map zooms in, but never below half the base size.
"""

import math
from dataclasses import dataclass
from typing import Any, Dict, Tuple

from src.models.risk_levels import RiskLevel, RISK_LEVEL_INFO, classify_precipitation
from src.models.weather import PrecipitationPoint


@dataclass(frozen=True)
class MapMarker:
    """Rendering instructions for one precipitation point"""
    location: str
    lat: float
    lon: float
    precipitation: float
    date: str
    risk_level: RiskLevel
    label: str
    color: str
    fill_color: str
    description: str
    radius: float
    fill_opacity: float
    weight: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "location": self.location,
            "lat": self.lat,
            "lon": self.lon,
            "precipitation": self.precipitation,
            "date": self.date,
            "risk_level": self.risk_level.value,
            "label": self.label,
            "color": self.color,
            "fill_color": self.fill_color,
            "description": self.description,
            "radius": self.radius,
            "fill_opacity": self.fill_opacity,
            "weight": self.weight,
        }


class VisualizationScaler:
    """Pure geometry/intensity mapping for the map layer"""

    BASE_RADIUS_M = 200000.0
    MAX_PRECIP_FACTOR = 2.0
    MIN_ZOOM_FACTOR = 0.5
    REFERENCE_ZOOM = 3

    MIN_FILL_OPACITY = 0.3
    MAX_FILL_OPACITY = 0.7
    OPACITY_PRECIP_SCALE = 150.0
    STROKE_WEIGHT = 2

    # Map view bounds of the visualization collaborator
    DEFAULT_CENTER: Tuple[float, float] = (20.0, 0.0)
    DEFAULT_ZOOM = 2
    MIN_ZOOM = 2
    MAX_ZOOM = 12

    # Zoom range accepted for standalone radius queries (web map tile levels)
    MIN_TILE_ZOOM = 0
    MAX_TILE_ZOOM = 24

    def precip_factor(self, precipitation_mm: float) -> float:
        return min(self.MAX_PRECIP_FACTOR, 1 + precipitation_mm / 100)

    def zoom_factor(self, zoom_level: int) -> float:
        """
        Scale factor for the zoom level, 2^(3 - zoom) floored at 0.5

        Extremely zoomed-out levels overflow to ``math.inf``.
        """
        try:
            factor = math.ldexp(1.0, self.REFERENCE_ZOOM - zoom_level)
        except OverflowError:
            return math.inf
        return max(self.MIN_ZOOM_FACTOR, factor)

    def radius(self, precipitation_mm: float, zoom_level: int) -> float:
        """
        Circle radius in metres for a reading at the given zoom level

        Args:
            precipitation_mm: Precipitation in millimetres
            zoom_level: Current map zoom (any integer)

        Returns:
            Radius in metres
        """
        return self.BASE_RADIUS_M * self.precip_factor(precipitation_mm) * self.zoom_factor(zoom_level)

    def fill_opacity(self, precipitation_mm: float) -> float:
        """Fill opacity rising with precipitation, capped at 0.7"""
        return min(self.MAX_FILL_OPACITY, self.MIN_FILL_OPACITY + precipitation_mm / self.OPACITY_PRECIP_SCALE)

    def style(self, point: PrecipitationPoint, zoom_level: int) -> MapMarker:
        """
        Build the marker for one precipitation point

        Location, coordinates and date are passed through untouched.
        """
        level = classify_precipitation(point.precipitation)
        info = RISK_LEVEL_INFO[level]
        return MapMarker(
            location=point.location,
            lat=point.lat,
            lon=point.lon,
            precipitation=point.precipitation,
            date=point.date,
            risk_level=level,
            label=info.label,
            color=info.color,
            fill_color=info.fill_color,
            description=info.description,
            radius=self.radius(point.precipitation, zoom_level),
            fill_opacity=self.fill_opacity(point.precipitation),
            weight=self.STROKE_WEIGHT,
        )
