"""
Unit tests for Risk Router
Run with: pytest tests/test_risk_router.py -v
"""

import pytest
from fastapi.testclient import TestClient

from src.api.main import app

client = TestClient(app)


class TestRiskEndpoints:
    """Test suite for Risk Router endpoints"""

    def test_root_endpoint(self):
        response = client.get("/")
        assert response.status_code == 200
        assert "risk" in response.json()["endpoints"]

    def test_risk_levels(self):
        response = client.get("/api/v1/risk/levels")
        assert response.status_code == 200

        data = response.json()
        assert [level["level"] for level in data["levels"]] == ["low", "moderate", "high", "severe"]
        assert data["thresholds"] == {"low": 0.0, "moderate": 25.0, "high": 50.0, "severe": 75.0}

    @pytest.mark.parametrize("score,expected", [
        (0, "low"),
        (25, "moderate"),
        (50, "high"),
        (75, "severe"),
        (150, "severe"),
        (-5, "low"),
    ])
    def test_classify(self, score, expected):
        response = client.get("/api/v1/risk/classify", params={"score": score})
        assert response.status_code == 200
        assert response.json()["risk_level"]["level"] == expected

    def test_classify_missing_score(self):
        response = client.get("/api/v1/risk/classify")
        assert response.status_code == 422

    def test_predict(self):
        payload = {"rainfall": 80, "humidity": 60, "pressure": 40, "historical_risk": 70}
        response = client.post("/api/v1/risk/predict", json=payload)
        assert response.status_code == 200

        data = response.json()
        assert data["probability"] == 67
        assert data["risk_level"] == "high"
        assert data["level_info"]["label"] == "High Risk"
        assert len(data["recommendations"]) == 5
        assert data["displayed_recommendations"] == data["recommendations"][:3]

    def test_predict_accepts_camel_case(self):
        payload = {"rainfall": 0, "humidity": 0, "pressure": 0, "historicalRisk": 0}
        response = client.post("/api/v1/risk/predict", json=payload)
        assert response.status_code == 200
        assert response.json()["risk_level"] == "low"

    def test_predict_out_of_range_factor(self):
        payload = {"rainfall": 150, "humidity": 60, "pressure": 40, "historical_risk": 70}
        response = client.post("/api/v1/risk/predict", json=payload)
        assert response.status_code == 422

        data = response.json()
        assert data["error"] == "validation_error"
        assert data["field"] == "rainfall"

    def test_predict_missing_factor(self):
        response = client.post("/api/v1/risk/predict", json={"rainfall": 10})
        assert response.status_code == 422
