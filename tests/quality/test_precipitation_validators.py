"""
Unit tests for precipitation data quality validators

Tests:
- Null value validation
- Range validation
- Data freshness checks
- Location coverage validation
- Anomaly detection
"""

import pytest
from datetime import datetime, timezone

from src.models.weather import PrecipitationPoint
from src.quality.validators import (
    PrecipitationDataValidator,
    ValidationResult,
    ValidationSeverity
)


NOW = datetime(2026, 10, 19, 12, 0, tzinfo=timezone.utc)


def record(location, precipitation, date="2026-10-19", lat=10.0, lon=20.0):
    return {
        "lat": lat,
        "lon": lon,
        "precipitation": precipitation,
        "location": location,
        "date": date
    }


@pytest.fixture
def clean_records():
    return [record(name, value) for name, value in
            [("A", 5.0), ("B", 12.0), ("C", 30.0), ("D", 8.0)]]


class TestValidationResult:
    def test_to_dict(self):
        result = ValidationResult(
            check_name="test_check",
            passed=True,
            severity=ValidationSeverity.INFO,
            message="ok",
            threshold=1.0,
            actual_value=0.5
        )
        data = result.to_dict()
        assert data["check_name"] == "test_check"
        assert data["severity"] == "info"
        assert "timestamp" in data


class TestPrecipitationDataValidator:
    """Test cases for PrecipitationDataValidator"""

    def test_accepts_points(self):
        point = PrecipitationPoint(lat=1, lon=2, precipitation=3, location="A", date="2026-10-19")
        validator = PrecipitationDataValidator([point])
        assert len(validator.df) == 1
        assert validator.check_null_values().passed

    def test_null_values_pass(self, clean_records):
        result = PrecipitationDataValidator(clean_records).check_null_values()
        assert result.passed
        assert result.actual_value == 0

    def test_null_values_fail(self, clean_records):
        clean_records[0]["precipitation"] = None
        clean_records[1]["location"] = None
        clean_records[2]["date"] = None

        result = PrecipitationDataValidator(clean_records).check_null_values()

        assert not result.passed
        assert result.severity == ValidationSeverity.CRITICAL
        assert result.details["null_precipitation"] == 1

    def test_empty_batch(self):
        validator = PrecipitationDataValidator([])
        result = validator.check_null_values()
        assert not result.passed
        assert result.severity == ValidationSeverity.CRITICAL

    def test_value_ranges(self, clean_records):
        assert PrecipitationDataValidator(clean_records).check_value_ranges().passed

        clean_records[0]["precipitation"] = 650.0
        result = PrecipitationDataValidator(clean_records).check_value_ranges()

        assert not result.passed
        assert result.details["invalid_precipitation"] == 1
        assert result.severity == ValidationSeverity.CRITICAL

    def test_data_freshness(self, clean_records):
        result = PrecipitationDataValidator(clean_records).check_data_freshness(now=NOW)
        assert result.passed
        assert result.actual_value == pytest.approx(12.0)

    def test_stale_data(self, clean_records):
        stale = [record("A", 1.0, date="2026-10-10")]
        result = PrecipitationDataValidator(stale).check_data_freshness(now=NOW)
        assert not result.passed
        assert result.severity == ValidationSeverity.CRITICAL

    def test_location_coverage(self, clean_records):
        result = PrecipitationDataValidator(clean_records).check_location_coverage(["A", "B", "C", "D"])
        assert result.passed
        assert result.actual_value == 100

    def test_location_coverage_missing(self, clean_records):
        result = PrecipitationDataValidator(clean_records[:2]).check_location_coverage(["A", "B", "C", "D"])
        assert not result.passed
        assert result.actual_value == 50
        assert result.details["missing_locations"] == ["C", "D"]

    def test_no_anomalies_in_uniform_batch(self):
        records = [record(str(i), 10.0) for i in range(10)]
        result = PrecipitationDataValidator(records).check_anomalies()
        assert result.passed
        assert result.details["anomaly_count"] == 0

    def test_run_all_checks(self, clean_records):
        summary = PrecipitationDataValidator(clean_records).run_all_checks(
            expected_locations=["A", "B", "C", "D"],
            now=NOW
        )

        assert summary["total_checks"] == 5
        assert summary["all_passed"] is True
        assert summary["critical_failures"] == 0
        assert {c["check"] for c in summary["checks"]} == {
            "null_values", "value_ranges", "data_freshness", "location_coverage", "anomaly_detection"
        }

    def test_run_all_checks_with_critical_failure(self):
        summary = PrecipitationDataValidator([]).run_all_checks(now=NOW)
        assert summary["all_passed"] is False
        assert summary["critical_failures"] >= 1
