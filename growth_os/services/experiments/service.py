from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Tuple

import structlog

from growth_os.config import get_settings
from growth_os.services.experiments.recommendation import (
    Recommendation,
    RecommendationKind,
    get_recommendation,
)
from growth_os.services.experiments.stats import VariantData, compute_confidence, compute_uplift

logger = structlog.get_logger()


@dataclass
class ExperimentEvaluation:
    experiment_id: str
    control: Optional[VariantData]
    treatment: Optional[VariantData]
    control_conversion_rate: float  # Percentage
    treatment_conversion_rate: float  # Percentage
    confidence: float
    uplift: float
    recommendation: Recommendation


def select_comparison_pair(
    variants: Sequence[VariantData],
) -> Tuple[Optional[VariantData], Optional[VariantData]]:
    """
    Pick the control and the strongest treatment from an experiment's variants.

    The control is the first variant flagged ``is_control``, or the first
    variant when none is flagged. The treatment is the remaining variant with
    the highest conversion rate.
    """
    if not variants:
        return None, None

    control = next((v for v in variants if v.is_control), variants[0])

    treatment = None
    for v in variants:
        if v is control:
            continue
        if treatment is None or v.conversion_rate > treatment.conversion_rate:
            treatment = v

    return control, treatment


class ExperimentEvaluator:
    def __init__(
        self,
        ship_threshold: Optional[float] = None,
        trend_threshold: Optional[float] = None,
        target_power: Optional[float] = None,
    ):
        settings = get_settings()

        self.ship_threshold = (
            settings.SHIP_CONFIDENCE if ship_threshold is None else ship_threshold
        )
        self.trend_threshold = (
            settings.TREND_CONFIDENCE if trend_threshold is None else trend_threshold
        )
        self.target_power = settings.TARGET_POWER if target_power is None else target_power

    def evaluate(self, experiment_id: str, variants: Sequence[VariantData]) -> ExperimentEvaluation:
        control, treatment = select_comparison_pair(variants)

        if control is None or treatment is None:
            return ExperimentEvaluation(
                experiment_id=experiment_id,
                control=control,
                treatment=treatment,
                control_conversion_rate=control.conversion_rate * 100 if control else 0.0,
                treatment_conversion_rate=0.0,
                confidence=0.0,
                uplift=0.0,
                recommendation=Recommendation(
                    kind=RecommendationKind.INCONCLUSIVE,
                    message="Insufficient data for a recommendation: at least two variants are needed.",
                ),
            )

        rate_a = control.conversion_rate * 100
        rate_b = treatment.conversion_rate * 100

        confidence = compute_confidence(
            control.visitors, control.conversions, treatment.visitors, treatment.conversions
        )
        uplift = compute_uplift(rate_a, rate_b)
        recommendation = get_recommendation(
            confidence,
            rate_a,
            rate_b,
            current_visitors=min(control.visitors, treatment.visitors),
            ship_threshold=self.ship_threshold,
            trend_threshold=self.trend_threshold,
            power=self.target_power,
        )

        logger.debug(
            "experiment_evaluated",
            experiment_id=experiment_id,
            control=control.name,
            treatment=treatment.name,
            confidence=round(confidence, 2),
            uplift=round(uplift, 2),
            recommendation=recommendation.kind.value,
        )

        return ExperimentEvaluation(
            experiment_id=experiment_id,
            control=control,
            treatment=treatment,
            control_conversion_rate=rate_a,
            treatment_conversion_rate=rate_b,
            confidence=confidence,
            uplift=uplift,
            recommendation=recommendation,
        )

    def evaluate_many(
        self, experiments: Dict[str, Sequence[VariantData]]
    ) -> List[ExperimentEvaluation]:
        return [
            self.evaluate(experiment_id, variants) for experiment_id, variants in experiments.items()
        ]
