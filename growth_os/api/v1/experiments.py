from fastapi import APIRouter, Depends

from growth_os.config import Settings, get_settings
from growth_os.models.schemas import (
    ConfidenceRequest,
    ConfidenceResponse,
    EvaluateExperimentRequest,
    ExperimentEvaluationResponse,
    ExperimentExplanation,
    RecommendationKindEnum,
    RecommendationRequest,
    RecommendationResponse,
    SampleSizeRequest,
    SampleSizeResponse,
    UpliftRequest,
    UpliftResponse,
)
from growth_os.services.experiments.explainer import build_experiment_context
from growth_os.services.experiments.recommendation import Recommendation, get_recommendation
from growth_os.services.experiments.service import ExperimentEvaluation, ExperimentEvaluator
from growth_os.services.experiments.stats import (
    VariantData,
    calculate_minimum_sample_size,
    compute_confidence,
    compute_uplift,
)

router = APIRouter()


def _recommendation_response(recommendation: Recommendation) -> RecommendationResponse:
    return RecommendationResponse(
        kind=RecommendationKindEnum(recommendation.kind.value),
        message=recommendation.message,
        suggested_sample_size=recommendation.suggested_sample_size,
    )


def _evaluate(request: EvaluateExperimentRequest) -> ExperimentEvaluation:
    variants = [
        VariantData(
            visitors=v.visitors,
            conversions=v.conversions,
            name=v.variant_name,
            is_control=v.is_control,
        )
        for v in request.variants
    ]
    return ExperimentEvaluator().evaluate(request.experiment_id, variants)


@router.post("/confidence", response_model=ConfidenceResponse)
async def confidence(request: ConfidenceRequest, settings: Settings = Depends(get_settings)):
    value = compute_confidence(
        request.control.visitors,
        request.control.conversions,
        request.treatment.visitors,
        request.treatment.conversions,
    )
    return ConfidenceResponse(confidence=value, is_significant=value >= settings.SHIP_CONFIDENCE)


@router.post("/uplift", response_model=UpliftResponse)
async def uplift(request: UpliftRequest):
    return UpliftResponse(uplift=compute_uplift(request.rate_a, request.rate_b))


@router.post("/recommendation", response_model=RecommendationResponse)
async def recommendation(
    request: RecommendationRequest, settings: Settings = Depends(get_settings)
):
    result = get_recommendation(
        request.confidence,
        request.rate_a,
        request.rate_b,
        current_visitors=request.current_visitors,
        ship_threshold=settings.SHIP_CONFIDENCE,
        trend_threshold=settings.TREND_CONFIDENCE,
        power=settings.TARGET_POWER,
    )
    return _recommendation_response(result)


@router.post("/evaluate", response_model=ExperimentEvaluationResponse)
async def evaluate_experiment(request: EvaluateExperimentRequest):
    evaluation = _evaluate(request)

    return ExperimentEvaluationResponse(
        experiment_id=evaluation.experiment_id,
        control_variant=evaluation.control.name if evaluation.control else None,
        treatment_variant=evaluation.treatment.name if evaluation.treatment else None,
        control_conversion_rate=evaluation.control_conversion_rate,
        treatment_conversion_rate=evaluation.treatment_conversion_rate,
        confidence=evaluation.confidence,
        uplift=evaluation.uplift,
        recommendation=_recommendation_response(evaluation.recommendation),
    )


@router.post("/explain", response_model=ExperimentExplanation)
async def explain_experiment(request: EvaluateExperimentRequest):
    evaluation = _evaluate(request)

    return ExperimentExplanation(
        experiment_id=evaluation.experiment_id,
        recommendation=RecommendationKindEnum(evaluation.recommendation.kind.value),
        context=build_experiment_context(evaluation),
    )


@router.post("/sample-size", response_model=SampleSizeResponse)
async def sample_size(request: SampleSizeRequest):
    n = calculate_minimum_sample_size(
        request.baseline_rate,
        request.minimum_detectable_effect,
        confidence=request.confidence,
        power=request.power,
    )
    return SampleSizeResponse(sample_size_per_variant=n)
