"""
Unit tests for engine input validation helpers
"""

import pytest

from src.models.errors import ValidationError, require_in_range, require_number


class TestValidationError:
    def test_is_value_error(self):
        error = ValidationError("rainfall", "must be between 0 and 100", 120)
        assert isinstance(error, ValueError)
        assert error.field == "rainfall"
        assert "rainfall" in str(error)

    def test_to_dict_keeps_scalars(self):
        data = ValidationError("duration", "must be an integer", 12.5).to_dict()
        assert data == {"field": "duration", "constraint": "must be an integer", "value": 12.5}

    def test_to_dict_reprs_non_json_values(self):
        assert ValidationError("pressure", "must be a finite number", float("nan")).to_dict()["value"] == "nan"
        assert ValidationError("factors", "must be a mapping", [1]).to_dict()["value"] == "[1]"


class TestRequireHelpers:
    @pytest.mark.parametrize("value", [None, "5", True, float("inf"), float("nan")])
    def test_require_number_rejects(self, value):
        with pytest.raises(ValidationError):
            require_number("rainfall", value)

    def test_require_in_range_inclusive(self):
        assert require_in_range("rainfall", 0, 0, 100) == 0.0
        assert require_in_range("rainfall", 100, 0, 100) == 100.0

    def test_require_in_range_integer(self):
        value = require_in_range("duration", 12.0, 6, 72, integer=True, unit="hours")
        assert value == 12
        assert isinstance(value, int)

    def test_require_in_range_message_includes_unit(self):
        with pytest.raises(ValidationError) as exc_info:
            require_in_range("duration", 80, 6, 72, integer=True, unit="hours")
        assert exc_info.value.constraint == "must be between 6 and 72 hours"
