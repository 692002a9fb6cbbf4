from fastapi import APIRouter, Depends, Query

from src.api.core.engine import get_aggregator, get_classifier
from src.api.schemas.risk import (
    ClassificationResponse,
    FactorsRequest,
    PredictionResponse,
    RiskLegendResponse,
    RiskLevelResponse
)
from src.models.flood_prediction import FactorAggregator, FloodFactors
from src.models.risk_levels import RISK_THRESHOLDS, RiskClassifier

router = APIRouter()

# Number of recommendations a risk card shows
DISPLAYED_RECOMMENDATIONS = 3


@router.get("/levels", response_model=RiskLegendResponse)
async def get_risk_levels(classifier: RiskClassifier = Depends(get_classifier)):
    """
    Get the ordered risk level legend.

    Returns every level (lowest first) with its label, colors and
    description, plus the inclusive lower bound of each level.
    """
    return RiskLegendResponse(
        levels=[RiskLevelResponse(**info.to_dict()) for info in classifier.legend()],
        thresholds={"low": 0.0, **{level.value: bound for bound, level in RISK_THRESHOLDS}}
    )


@router.get("/classify", response_model=ClassificationResponse)
async def classify_score(
    score: float = Query(..., description="Risk score, nominally 0-100"),
    classifier: RiskClassifier = Depends(get_classifier)
):
    """
    Classify a numeric score into a risk level.

    Scores outside 0-100 fall into the lowest or highest level.
    """
    level = classifier.classify(score)
    return ClassificationResponse(
        score=score,
        risk_level=RiskLevelResponse(**classifier.info(level).to_dict())
    )


@router.post("/predict", response_model=PredictionResponse)
async def predict_flood_risk(
    request: FactorsRequest,
    aggregator: FactorAggregator = Depends(get_aggregator),
    classifier: RiskClassifier = Depends(get_classifier)
):
    """
    Compute a flood prediction from normalized weather and history factors.

    - **rainfall**, **humidity**, **pressure**, **historical_risk**: each 0-100

    Out-of-range factors are rejected with 422 naming the field.
    """
    prediction = aggregator.aggregate(FloodFactors(
        rainfall=request.rainfall,
        humidity=request.humidity,
        pressure=request.pressure,
        historical_risk=request.historical_risk
    ))

    payload = prediction.to_dict()
    return PredictionResponse(
        **payload,
        displayed_recommendations=prediction.displayed_recommendations(DISPLAYED_RECOMMENDATIONS),
        level_info=RiskLevelResponse(**classifier.info(prediction.risk_level).to_dict())
    )
