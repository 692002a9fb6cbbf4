"""
Unit tests for Precipitation Router
Run with: pytest tests/test_precipitation_router.py -v
"""

from datetime import datetime, timezone
from unittest.mock import Mock

import pytest
from fastapi.testclient import TestClient

from src.api.core.engine import get_precipitation_feed
from src.api.main import app
from src.ingestion.precipitation_connector import MonitoredLocation, PrecipitationConnector
from src.models.weather import PrecipitationPoint
from src.services.precipitation_feed import PrecipitationFeed

client = TestClient(app)

NOW = datetime(2026, 10, 19, 6, 0, tzinfo=timezone.utc)


@pytest.fixture
def connector():
    connector = Mock(spec=PrecipitationConnector)
    connector.locations = [
        MonitoredLocation("Patna", "India", 25.5941, 85.1376),
        MonitoredLocation("Jakarta", "Indonesia", -6.2088, 106.8456),
    ]
    connector.fetch_points.return_value = [
        PrecipitationPoint(lat=25.5941, lon=85.1376, precipitation=30.0,
                           location="Patna", date="2026-10-19", country="India"),
        PrecipitationPoint(lat=-6.2088, lon=106.8456, precipitation=120.0,
                           location="Jakarta", date="2026-10-19", country="Indonesia"),
    ]
    return connector


@pytest.fixture
def feed(connector):
    feed = PrecipitationFeed(connector=connector, refresh_seconds=300, clock=lambda: NOW)
    app.dependency_overrides[get_precipitation_feed] = lambda: feed
    yield feed
    app.dependency_overrides.clear()


class TestPrecipitationEndpoints:
    """Test suite for Precipitation Router endpoints"""

    def test_map(self, feed):
        response = client.get("/api/v1/precipitation/map", params={"zoom": 3})
        assert response.status_code == 200

        data = response.json()
        assert data["count"] == 2
        assert data["zoom"] == 3
        assert data["quality_passed"] is True
        assert len(data["legend"]) == 4

        patna, jakarta = data["markers"]
        assert patna["location"] == "Patna"
        assert patna["risk_level"] == "moderate"
        assert patna["radius"] == pytest.approx(260000)
        assert jakarta["risk_level"] == "severe"
        assert jakarta["radius"] == pytest.approx(400000)
        assert jakarta["fill_opacity"] == pytest.approx(0.7)

    def test_map_default_zoom(self, feed):
        response = client.get("/api/v1/precipitation/map")
        assert response.status_code == 200
        assert response.json()["zoom"] == 2

    @pytest.mark.parametrize("zoom", [1, 13])
    def test_map_zoom_out_of_bounds(self, feed, zoom):
        response = client.get("/api/v1/precipitation/map", params={"zoom": zoom})
        assert response.status_code == 422

    def test_map_unavailable(self, feed, connector):
        connector.fetch_points.return_value = None
        response = client.get("/api/v1/precipitation/map")
        assert response.status_code == 503

    def test_health_reports_feed(self, feed):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json()["precipitation_feed"] == "stale"

        client.get("/api/v1/precipitation/map")
        assert client.get("/health").json()["precipitation_feed"] == "ready"

    @pytest.mark.parametrize("precipitation,zoom,radius", [
        (0, 3, 200000),
        (200, 3, 400000),
        (0, 1, 800000),
    ])
    def test_radius(self, precipitation, zoom, radius):
        response = client.get(
            "/api/v1/precipitation/radius",
            params={"precipitation": precipitation, "zoom": zoom}
        )
        assert response.status_code == 200
        assert response.json()["radius"] == pytest.approx(radius)

    @pytest.mark.parametrize("zoom", [-1100, -1, 25])
    def test_radius_zoom_out_of_bounds(self, zoom):
        response = client.get(
            "/api/v1/precipitation/radius",
            params={"precipitation": 0, "zoom": zoom}
        )
        assert response.status_code == 422

    def test_radius_negative_precipitation(self):
        response = client.get("/api/v1/precipitation/radius", params={"precipitation": -1})
        assert response.status_code == 422
