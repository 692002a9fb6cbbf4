"""
Caller-owned store for the latest precipitation readings

Holds one immutable snapshot at a time. A refresh builds a new snapshot and
swaps it in; readers always see either the old or the new snapshot, never a
partially updated one. A failed refresh keeps the previous snapshot.
"""

import threading
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Optional, Tuple

from src.api.config import settings
from src.ingestion.precipitation_connector import PrecipitationConnector
from src.models.visualization import MapMarker, VisualizationScaler
from src.models.weather import PrecipitationPoint
from src.quality.validators import PrecipitationDataValidator
from src.utils.logger import get_logger

logger = get_logger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class PrecipitationSnapshot:
    """Precipitation points as fetched at one point in time"""
    points: Tuple[PrecipitationPoint, ...] = field(default_factory=tuple)
    fetched_at: Optional[datetime] = None
    quality: Optional[Dict[str, Any]] = None

    @property
    def is_empty(self) -> bool:
        return not self.points


class PrecipitationFeed:
    """
    Periodically refreshed precipitation data for the map layer

    Args:
        connector: Upstream precipitation connector
        refresh_seconds: Maximum snapshot age before ``current`` refetches
        scaler: Visualization scaler used to style markers
        clock: Returns the current UTC time
    """

    def __init__(
        self,
        connector: Optional[PrecipitationConnector] = None,
        refresh_seconds: Optional[int] = None,
        scaler: Optional[VisualizationScaler] = None,
        clock: Callable[[], datetime] = _utcnow
    ):
        self.connector = connector or PrecipitationConnector()
        self.refresh_seconds = (
            refresh_seconds if refresh_seconds is not None else settings.PRECIPITATION_REFRESH_SECONDS
        )
        self.scaler = scaler or VisualizationScaler()
        self.clock = clock
        self._snapshot = PrecipitationSnapshot()
        self._lock = threading.Lock()
        self._attempts = 0

    @property
    def snapshot(self) -> PrecipitationSnapshot:
        return self._snapshot

    def is_stale(self) -> bool:
        fetched_at = self._snapshot.fetched_at
        if fetched_at is None:
            return True
        return (self.clock() - fetched_at).total_seconds() >= self.refresh_seconds

    def refresh(self) -> PrecipitationSnapshot:
        """
        Fetch new readings and replace the snapshot

        Returns:
            The snapshot in effect after the refresh (the previous one if the
            fetch failed)
        """
        with self._lock:
            return self._refresh()

    def _refresh(self) -> PrecipitationSnapshot:
        # Caller holds self._lock
        try:
            points = self.connector.fetch_points()
        finally:
            self._attempts += 1
        if points is None:
            logger.warning("Precipitation refresh failed, keeping previous snapshot")
            return self._snapshot

        fetched_at = self.clock()
        quality = PrecipitationDataValidator(points).run_all_checks(
            expected_locations=[loc.name for loc in self.connector.locations],
            now=fetched_at
        )
        if not quality['all_passed']:
            logger.warning(f"Precipitation batch has {quality['critical_failures']} critical quality failures")

        self._snapshot = PrecipitationSnapshot(
            points=tuple(points),
            fetched_at=fetched_at,
            quality=quality
        )
        logger.info(f"Precipitation snapshot replaced with {len(points)} points")
        return self._snapshot

    def current(self) -> PrecipitationSnapshot:
        """
        The latest snapshot, refreshed first if it is stale

        Concurrent callers share one fetch attempt: a caller that waited on
        the lock while another caller fetched returns that result, even if the
        fetch failed.
        """
        if not self.is_stale():
            return self._snapshot
        attempts = self._attempts
        with self._lock:
            if self._attempts != attempts or not self.is_stale():
                return self._snapshot
            return self._refresh()

    def markers(
        self,
        zoom_level: int,
        snapshot: Optional[PrecipitationSnapshot] = None
    ) -> List[MapMarker]:
        """Styled map markers for ``snapshot`` (the current snapshot by default)"""
        if snapshot is None:
            snapshot = self.current()
        return [self.scaler.style(point, zoom_level) for point in snapshot.points]
