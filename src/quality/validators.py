"""
Precipitation Data Quality Validation

This module provides data quality checks for precipitation feed batches
before they reach the map layer:
- Null value validation
- Range validation
- Data freshness checks
- Location coverage validation
- Statistical anomaly detection

Author: Flood Risk Engine Team
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import List, Dict, Any, Optional, Sequence, Union
from enum import Enum

import pandas as pd

from src.models.weather import PrecipitationPoint
from src.utils.logger import get_logger

logger = get_logger(__name__)

PrecipitationRecord = Union[PrecipitationPoint, Dict[str, Any]]


class ValidationSeverity(str, Enum):
    """Severity levels for validation results"""
    CRITICAL = "critical"
    WARNING = "warning"
    INFO = "info"


@dataclass
class ValidationResult:
    """
    Result of a single validation check

    Attributes:
        check_name: Name of the validation check
        passed: Whether the check passed
        severity: Severity level
        message: Human-readable message
        details: Additional details about the check
        timestamp: When the check was performed
        threshold: The threshold value used (if applicable)
        actual_value: The actual value measured
    """
    check_name: str
    passed: bool
    severity: ValidationSeverity
    message: str
    details: Dict[str, Any] = field(default_factory=dict)
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    threshold: Optional[float] = None
    actual_value: Optional[float] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for reporting"""
        return {
            'check_name': self.check_name,
            'passed': self.passed,
            'severity': self.severity.value,
            'message': self.message,
            'details': self.details,
            'timestamp': self.timestamp.isoformat(),
            'threshold': self.threshold,
            'actual_value': self.actual_value
        }


class PrecipitationDataValidator:
    """
    Data quality validation for one batch of precipitation readings

    Accepts parsed PrecipitationPoint objects or raw record dictionaries
    (the latter may carry nulls the pydantic model would reject).
    """

    KEY_FIELDS = ['lat', 'lon', 'precipitation', 'location', 'date']

    # Thresholds for validation checks
    NULL_PERCENTAGE_THRESHOLD = 5.0  # Max % of null values
    INVALID_PERCENTAGE_THRESHOLD = 1.0  # Max % of out-of-range values
    DATA_FRESHNESS_HOURS = 48  # Max hours since latest reading
    LOCATION_COVERAGE_THRESHOLD = 90.0  # Min % of monitored locations with data
    ANOMALY_COUNT_THRESHOLD = 3  # Max number of statistical anomalies

    # Valid ranges for precipitation data
    VALID_RANGES = {
        'precipitation': (0, 500),
        'lat': (-90, 90),
        'lon': (-180, 180)
    }

    def __init__(self, records: Sequence[PrecipitationRecord]):
        """
        Initialize validator

        Args:
            records: Precipitation points or raw record dictionaries
        """
        self.df = self._to_frame(records)
        self.results: List[ValidationResult] = []
        logger.info(f"Initialized PrecipitationDataValidator with {len(self.df)} records")

    def _to_frame(self, records: Sequence[PrecipitationRecord]) -> pd.DataFrame:
        rows = [
            record.model_dump() if isinstance(record, PrecipitationPoint) else dict(record)
            for record in records
        ]
        df = pd.DataFrame(rows)
        for column in self.KEY_FIELDS:
            if column not in df.columns:
                df[column] = None
        return df

    def check_null_values(self) -> ValidationResult:
        """
        Check for NULL values in the key fields

        Returns:
            ValidationResult with null value statistics
        """
        logger.debug("Running null value check")

        total_records = len(self.df)
        if total_records == 0:
            return ValidationResult(
                check_name='null_values',
                passed=False,
                severity=ValidationSeverity.CRITICAL,
                message="No precipitation records to validate"
            )

        null_counts = {column: int(self.df[column].isna().sum()) for column in self.KEY_FIELDS}
        null_count = sum(null_counts.values())
        null_percentage = (null_count / (total_records * len(self.KEY_FIELDS))) * 100

        passed = null_percentage < self.NULL_PERCENTAGE_THRESHOLD
        severity = ValidationSeverity.CRITICAL if null_percentage > 10 else ValidationSeverity.WARNING

        return ValidationResult(
            check_name='null_values',
            passed=passed,
            severity=severity,
            message=f"Found {null_percentage:.2f}% NULL values in precipitation data",
            details={**{f'null_{k}': v for k, v in null_counts.items()}, 'total_records': total_records},
            threshold=self.NULL_PERCENTAGE_THRESHOLD,
            actual_value=null_percentage
        )

    def check_value_ranges(self) -> ValidationResult:
        """
        Check if values are within expected ranges

        Returns:
            ValidationResult with range violation statistics
        """
        logger.debug("Running value range check")

        total_records = len(self.df)
        if total_records == 0:
            return ValidationResult(
                check_name='value_ranges',
                passed=False,
                severity=ValidationSeverity.CRITICAL,
                message="No records found for range validation"
            )

        invalid_counts = {}
        for column, (minimum, maximum) in self.VALID_RANGES.items():
            values = pd.to_numeric(self.df[column], errors='coerce').dropna()
            invalid_counts[f'invalid_{column}'] = int(((values < minimum) | (values > maximum)).sum())

        invalid_percentage = (sum(invalid_counts.values()) / (total_records * len(self.VALID_RANGES))) * 100

        passed = invalid_percentage < self.INVALID_PERCENTAGE_THRESHOLD
        severity = ValidationSeverity.CRITICAL if invalid_percentage > 5 else ValidationSeverity.WARNING

        return ValidationResult(
            check_name='value_ranges',
            passed=passed,
            severity=severity,
            message=f"Found {invalid_percentage:.2f}% out-of-range values",
            details={
                **invalid_counts,
                'total_records': total_records,
                'valid_ranges': {k: list(v) for k, v in self.VALID_RANGES.items()}
            },
            threshold=self.INVALID_PERCENTAGE_THRESHOLD,
            actual_value=invalid_percentage
        )

    def check_data_freshness(self, now: Optional[datetime] = None) -> ValidationResult:
        """
        Check how old the most recent reading is

        Args:
            now: Reference time (defaults to current UTC time)

        Returns:
            ValidationResult with data age in hours
        """
        logger.debug("Running data freshness check")

        now = now or datetime.now(timezone.utc)
        dates = pd.to_datetime(self.df['date'], errors='coerce', utc=True).dropna()

        if dates.empty:
            return ValidationResult(
                check_name='data_freshness',
                passed=False,
                severity=ValidationSeverity.CRITICAL,
                message="No parseable reading dates found"
            )

        latest = dates.max().to_pydatetime()
        hours_old = (now - latest).total_seconds() / 3600

        passed = hours_old <= self.DATA_FRESHNESS_HOURS
        severity = ValidationSeverity.CRITICAL if hours_old > self.DATA_FRESHNESS_HOURS * 2 else ValidationSeverity.WARNING

        return ValidationResult(
            check_name='data_freshness',
            passed=passed,
            severity=severity,
            message=f"Latest reading is {hours_old:.1f} hours old",
            details={'latest_reading': latest.isoformat()},
            threshold=float(self.DATA_FRESHNESS_HOURS),
            actual_value=hours_old
        )

    def check_location_coverage(self, expected_locations: Sequence[str]) -> ValidationResult:
        """
        Check that the monitored locations have readings

        Args:
            expected_locations: Names of the monitored locations

        Returns:
            ValidationResult with coverage percentage
        """
        logger.debug("Running location coverage check")

        expected = set(expected_locations)
        if not expected:
            return ValidationResult(
                check_name='location_coverage',
                passed=True,
                severity=ValidationSeverity.INFO,
                message="No monitored locations configured",
                threshold=self.LOCATION_COVERAGE_THRESHOLD,
                actual_value=100.0
            )

        reported = set(self.df['location'].dropna())
        missing = sorted(expected - reported)
        coverage = (len(expected) - len(missing)) / len(expected) * 100

        passed = coverage >= self.LOCATION_COVERAGE_THRESHOLD
        severity = ValidationSeverity.CRITICAL if coverage < 50 else ValidationSeverity.WARNING

        return ValidationResult(
            check_name='location_coverage',
            passed=passed,
            severity=severity,
            message=f"{coverage:.1f}% of monitored locations have readings",
            details={
                'expected_locations': len(expected),
                'missing_locations': missing
            },
            threshold=self.LOCATION_COVERAGE_THRESHOLD,
            actual_value=coverage
        )

    def check_anomalies(self, std_threshold: float = 3.0) -> ValidationResult:
        """
        Detect statistical outliers in precipitation readings

        Args:
            std_threshold: Standard deviations for anomaly detection

        Returns:
            ValidationResult with anomaly statistics
        """
        logger.debug("Running statistical anomaly detection")

        values = pd.to_numeric(self.df['precipitation'], errors='coerce').dropna()
        std = values.std() if len(values) > 1 else 0.0

        if not std or pd.isna(std):
            anomaly_count = 0
        else:
            anomaly_count = int(((values - values.mean()).abs() > std_threshold * std).sum())

        passed = anomaly_count <= self.ANOMALY_COUNT_THRESHOLD

        return ValidationResult(
            check_name='anomaly_detection',
            passed=passed,
            severity=ValidationSeverity.WARNING if not passed else ValidationSeverity.INFO,
            message=f"Found {anomaly_count} statistical anomalies ({std_threshold}σ threshold)",
            details={
                'anomaly_count': anomaly_count,
                'std_threshold': std_threshold,
                'records_checked': int(len(values))
            },
            threshold=float(self.ANOMALY_COUNT_THRESHOLD),
            actual_value=float(anomaly_count)
        )

    def run_all_checks(
        self,
        expected_locations: Sequence[str] = (),
        now: Optional[datetime] = None
    ) -> Dict[str, Any]:
        """
        Execute all validation checks

        Args:
            expected_locations: Names of the monitored locations
            now: Reference time for the freshness check

        Returns:
            Summary of all validation results
        """
        logger.info("Running all precipitation validation checks")

        checks = [
            self.check_null_values(),
            self.check_value_ranges(),
            self.check_data_freshness(now=now),
            self.check_location_coverage(expected_locations),
            self.check_anomalies()
        ]

        self.results = checks

        total_checks = len(checks)
        passed_checks = sum(1 for c in checks if c.passed)
        critical_failures = [c for c in checks if not c.passed and c.severity == ValidationSeverity.CRITICAL]
        warnings = [c for c in checks if not c.passed and c.severity == ValidationSeverity.WARNING]

        summary = {
            'timestamp': datetime.now(timezone.utc).isoformat(),
            'total_checks': total_checks,
            'passed': passed_checks,
            'failed': total_checks - passed_checks,
            'success_rate': (passed_checks / total_checks) * 100,
            'critical_failures': len(critical_failures),
            'warnings': len(warnings),
            'all_passed': len(critical_failures) == 0,
            'checks': [
                {
                    'check': c.check_name,
                    'passed': c.passed,
                    'severity': c.severity.value,
                    'message': c.message,
                    'threshold': c.threshold,
                    'actual_value': c.actual_value
                }
                for c in checks
            ]
        }

        logger.info(f"Validation complete: {passed_checks}/{total_checks} passed")
        if critical_failures:
            logger.error(f"Critical failures: {[c.check_name for c in critical_failures]}")

        return summary
