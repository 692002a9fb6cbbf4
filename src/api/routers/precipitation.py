from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.concurrency import run_in_threadpool

from src.api.core.engine import get_precipitation_feed, get_scaler
from src.api.schemas.precipitation import MapMarkerResponse, PrecipitationMapResponse, RadiusResponse
from src.api.schemas.risk import RiskLevelResponse
from src.models.risk_levels import classify_precipitation, risk_legend
from src.models.visualization import VisualizationScaler
from src.services.precipitation_feed import PrecipitationFeed

router = APIRouter()


@router.get("/map", response_model=PrecipitationMapResponse)
async def get_precipitation_map(
    zoom: int = Query(
        VisualizationScaler.DEFAULT_ZOOM,
        ge=VisualizationScaler.MIN_ZOOM,
        le=VisualizationScaler.MAX_ZOOM,
        description="Current map zoom level"
    ),
    feed: PrecipitationFeed = Depends(get_precipitation_feed)
):
    """
    Get styled flood-risk markers for the latest precipitation readings.

    Readings are refreshed when the stored snapshot is older than the
    configured refresh interval. Returns 503 if no readings are available.
    """
    snapshot = await run_in_threadpool(feed.current)
    if snapshot.is_empty:
        raise HTTPException(status_code=503, detail="Precipitation data unavailable")

    markers = feed.markers(zoom, snapshot)
    return PrecipitationMapResponse(
        fetched_at=snapshot.fetched_at,
        zoom=zoom,
        count=len(markers),
        markers=[MapMarkerResponse(**marker.to_dict()) for marker in markers],
        legend=[RiskLevelResponse(**info.to_dict()) for info in risk_legend()],
        quality_passed=snapshot.quality.get('all_passed') if snapshot.quality else None
    )


@router.get("/radius", response_model=RadiusResponse)
async def get_marker_radius(
    precipitation: float = Query(..., ge=0, description="Precipitation in millimeters"),
    zoom: int = Query(
        VisualizationScaler.DEFAULT_ZOOM,
        ge=VisualizationScaler.MIN_TILE_ZOOM,
        le=VisualizationScaler.MAX_TILE_ZOOM,
        description="Map zoom level"
    ),
    scaler: VisualizationScaler = Depends(get_scaler)
):
    """Compute the marker radius (meters) and styling for a single reading"""
    return RadiusResponse(
        precipitation=precipitation,
        zoom=zoom,
        radius=scaler.radius(precipitation, zoom),
        fill_opacity=scaler.fill_opacity(precipitation),
        risk_level=classify_precipitation(precipitation).value
    )
