"""
Precipitation API Connector for the global flood risk map
"""

from dataclasses import dataclass
from typing import Optional, Dict, Any, List, Sequence, Union

import requests
from pydantic import ValidationError as PydanticValidationError
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from ..api.config import settings
from ..models.weather import PrecipitationPoint
from ..utils.logger import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class MonitoredLocation:
    """A location the precipitation feed reports on"""
    name: str
    country: str
    lat: float
    lon: float


# Flood-prone reference cities shown on the global map
DEFAULT_LOCATIONS: List[MonitoredLocation] = [
    MonitoredLocation("Lucknow", "India", 26.8467, 80.9462),
    MonitoredLocation("Patna", "India", 25.5941, 85.1376),
    MonitoredLocation("Guwahati", "India", 26.1445, 91.7362),
    MonitoredLocation("Kolkata", "India", 22.5726, 88.3639),
    MonitoredLocation("Mumbai", "India", 19.0760, 72.8777),
    MonitoredLocation("Dhaka", "Bangladesh", 23.8103, 90.4125),
    MonitoredLocation("Jakarta", "Indonesia", -6.2088, 106.8456),
    MonitoredLocation("Bangkok", "Thailand", 13.7563, 100.5018),
    MonitoredLocation("Manila", "Philippines", 14.5995, 120.9842),
    MonitoredLocation("Ho Chi Minh City", "Vietnam", 10.8231, 106.6297),
    MonitoredLocation("Shanghai", "China", 31.2304, 121.4737),
    MonitoredLocation("Lagos", "Nigeria", 6.5244, 3.3792),
    MonitoredLocation("New Orleans", "United States", 29.9511, -90.0715),
    MonitoredLocation("Houston", "United States", 29.7604, -95.3698),
    MonitoredLocation("Rotterdam", "Netherlands", 51.9244, 4.4777),
    MonitoredLocation("Venice", "Italy", 45.4408, 12.3155),
    MonitoredLocation("Sao Paulo", "Brazil", -23.5505, -46.6333),
]


class PrecipitationConnector:
    """
    Connector for daily precipitation readings

    Fetches the current day's precipitation sum for every monitored location
    from the Open-Meteo forecast API in a single batched request.
    """

    def __init__(
        self,
        api_url: Optional[str] = None,
        locations: Optional[Sequence[MonitoredLocation]] = None,
        timeout: Optional[int] = None,
        max_retries: Optional[int] = None,
        backoff_factor: Optional[float] = None
    ):
        """
        Initialize precipitation connector

        Args:
            api_url: Forecast endpoint (defaults to PRECIPITATION_API_URL)
            locations: Locations to report on (defaults to DEFAULT_LOCATIONS)
            timeout: Request timeout in seconds
            max_retries: Maximum number of retry attempts
            backoff_factor: Backoff factor for retries
        """
        self.api_url = api_url or settings.PRECIPITATION_API_URL
        self.locations = list(locations) if locations is not None else list(DEFAULT_LOCATIONS)
        self.timeout = timeout if timeout is not None else settings.PRECIPITATION_TIMEOUT
        self.max_retries = max_retries if max_retries is not None else settings.PRECIPITATION_MAX_RETRIES
        self.backoff_factor = backoff_factor if backoff_factor is not None else settings.PRECIPITATION_BACKOFF
        self.session = self._create_session()
        logger.info(f"Precipitation Connector initialized for {len(self.locations)} locations")

    def _create_session(self) -> requests.Session:
        """
        Create a requests session with retry logic

        Returns:
            Configured requests session
        """
        session = requests.Session()

        retry_strategy = Retry(
            total=self.max_retries,
            backoff_factor=self.backoff_factor,
            status_forcelist=[429, 500, 502, 503, 504],
            allowed_methods=["HEAD", "GET", "OPTIONS"]
        )

        adapter = HTTPAdapter(max_retries=retry_strategy)
        session.mount("http://", adapter)
        session.mount("https://", adapter)

        return session

    def _build_params(self) -> Dict[str, Any]:
        return {
            "latitude": ",".join(f"{loc.lat:.4f}" for loc in self.locations),
            "longitude": ",".join(f"{loc.lon:.4f}" for loc in self.locations),
            "daily": "precipitation_sum",
            "forecast_days": 1,
            "timezone": "UTC",
        }

    def fetch_precipitation_data(self) -> Optional[Union[Dict[str, Any], List[Dict[str, Any]]]]:
        """
        Fetch raw precipitation data for all monitored locations

        Returns:
            Raw API payload (an object for one location, a list otherwise),
            or None if the fetch fails
        """
        if not self.locations:
            logger.warning("No monitored locations configured")
            return None

        logger.info("Fetching precipitation data...")

        try:
            response = self.session.get(
                self.api_url,
                params=self._build_params(),
                timeout=self.timeout
            )
            response.raise_for_status()

            data = response.json()
            logger.info(
                f"Fetched precipitation data in {response.elapsed.total_seconds() * 1000:.0f}ms"
            )
            return data

        except requests.exceptions.RequestException as e:
            logger.error(f"Failed to fetch precipitation data: {e}")
            return None
        except ValueError as e:
            logger.error(f"Precipitation API returned invalid JSON: {e}")
            return None

    def parse_precipitation_response(
        self,
        raw_data: Union[Dict[str, Any], List[Dict[str, Any]]]
    ) -> List[PrecipitationPoint]:
        """
        Parse a raw API payload into precipitation points

        Entries are matched to monitored locations by position. Malformed
        entries are skipped with a warning.

        Args:
            raw_data: Raw API payload

        Returns:
            List of PrecipitationPoint objects
        """
        entries = raw_data if isinstance(raw_data, list) else [raw_data]

        if len(entries) != len(self.locations):
            logger.warning(
                f"Expected {len(self.locations)} precipitation entries, got {len(entries)}"
            )

        points = []
        for location, entry in zip(self.locations, entries):
            try:
                daily = entry["daily"]
                dates = daily["time"]
                sums = daily["precipitation_sum"]
                if not dates or sums[0] is None:
                    logger.warning(f"No precipitation reading for {location.name}")
                    continue

                points.append(PrecipitationPoint(
                    lat=location.lat,
                    lon=location.lon,
                    precipitation=float(sums[0]),
                    location=location.name,
                    date=str(dates[0]),
                    country=location.country
                ))
            except (KeyError, IndexError, TypeError, ValueError, PydanticValidationError) as e:
                logger.warning(f"Skipping malformed precipitation entry for {location.name}: {e}")

        logger.info(f"Parsed {len(points)} precipitation points")
        return points

    def fetch_points(self) -> Optional[List[PrecipitationPoint]]:
        """
        Fetch and parse precipitation points

        Returns:
            List of PrecipitationPoint objects, or None if the fetch fails
        """
        raw_data = self.fetch_precipitation_data()
        if raw_data is None:
            return None
        return self.parse_precipitation_response(raw_data)
