"""
Tests for the precipitation connector
"""

import pytest
from unittest.mock import Mock, patch
import requests

from src.ingestion.precipitation_connector import (
    DEFAULT_LOCATIONS,
    MonitoredLocation,
    PrecipitationConnector
)
from src.models.weather import PrecipitationPoint


LOCATIONS = [
    MonitoredLocation("Lucknow", "India", 26.8467, 80.9462),
    MonitoredLocation("Dhaka", "Bangladesh", 23.8103, 90.4125),
]


def daily_entry(precipitation, day="2026-10-19"):
    return {
        "latitude": 0.0,
        "longitude": 0.0,
        "daily": {"time": [day], "precipitation_sum": [precipitation]}
    }


class TestPrecipitationConnector:
    """Test cases for PrecipitationConnector class"""

    @pytest.fixture
    def connector(self):
        """Create a connector instance for testing"""
        return PrecipitationConnector(
            api_url="https://example.test/v1/forecast",
            locations=LOCATIONS,
            timeout=10,
            max_retries=2
        )

    @pytest.fixture
    def mock_response(self):
        response = Mock()
        response.raise_for_status.return_value = None
        response.json.return_value = [daily_entry(12.5), daily_entry(80.0)]
        response.elapsed.total_seconds.return_value = 0.12
        return response

    def test_connector_initialization(self, connector):
        """Test that connector initializes correctly"""
        assert connector.timeout == 10
        assert connector.max_retries == 2
        assert connector.locations == LOCATIONS
        assert connector.session is not None

    def test_default_locations(self):
        connector = PrecipitationConnector()
        assert connector.locations == DEFAULT_LOCATIONS
        assert len({loc.name for loc in connector.locations}) == len(DEFAULT_LOCATIONS)

    def test_build_params_batches_locations(self, connector):
        params = connector._build_params()
        assert params["latitude"] == "26.8467,23.8103"
        assert params["longitude"] == "80.9462,90.4125"
        assert params["daily"] == "precipitation_sum"

    @patch('src.ingestion.precipitation_connector.requests.Session.get')
    def test_fetch_precipitation_data_success(self, mock_get, connector, mock_response):
        """Test successful data fetch"""
        mock_get.return_value = mock_response

        result = connector.fetch_precipitation_data()

        assert result == mock_response.json.return_value
        mock_get.assert_called_once()
        assert mock_get.call_args.kwargs["timeout"] == 10

    @patch('src.ingestion.precipitation_connector.requests.Session.get')
    def test_fetch_precipitation_data_failure(self, mock_get, connector):
        """Test handling of request failures"""
        mock_get.side_effect = requests.exceptions.ConnectionError("Connection failed")

        assert connector.fetch_precipitation_data() is None

    @patch('src.ingestion.precipitation_connector.requests.Session.get')
    def test_fetch_precipitation_data_invalid_json(self, mock_get, connector, mock_response):
        mock_response.json.side_effect = ValueError("Expecting value")
        mock_get.return_value = mock_response

        assert connector.fetch_precipitation_data() is None

    def test_fetch_without_locations(self):
        connector = PrecipitationConnector(locations=[])
        assert connector.fetch_precipitation_data() is None

    def test_parse_response(self, connector):
        points = connector.parse_precipitation_response([daily_entry(12.5), daily_entry(80.0)])

        assert len(points) == 2
        assert all(isinstance(p, PrecipitationPoint) for p in points)
        assert points[0].location == "Lucknow"
        assert points[0].precipitation == 12.5
        assert points[1].country == "Bangladesh"
        assert points[1].lat == 23.8103
        assert points[1].date == "2026-10-19"

    def test_parse_single_location_object(self):
        connector = PrecipitationConnector(locations=LOCATIONS[:1])
        points = connector.parse_precipitation_response(daily_entry(3.0))
        assert len(points) == 1
        assert points[0].location == "Lucknow"

    def test_parse_skips_malformed_entries(self, connector):
        points = connector.parse_precipitation_response([{"daily": {}}, daily_entry(None)])
        assert points == []

    def test_parse_skips_negative_precipitation(self, connector):
        points = connector.parse_precipitation_response([daily_entry(-4.0), daily_entry(5.0)])
        assert [p.location for p in points] == ["Dhaka"]

    @patch('src.ingestion.precipitation_connector.requests.Session.get')
    def test_fetch_points(self, mock_get, connector, mock_response):
        mock_get.return_value = mock_response

        points = connector.fetch_points()

        assert [p.precipitation for p in points] == [12.5, 80.0]

    @patch('src.ingestion.precipitation_connector.requests.Session.get')
    def test_fetch_points_failure(self, mock_get, connector):
        mock_get.side_effect = requests.exceptions.Timeout("timed out")
        assert connector.fetch_points() is None
