import enum
from dataclasses import dataclass
from typing import Optional

from growth_os.services.experiments.stats import calculate_minimum_sample_size

SHIP_CONFIDENCE = 95.0
TREND_CONFIDENCE = 80.0


class RecommendationKind(str, enum.Enum):
    """Outcome of evaluating an A/B test."""

    SHIP_B = "ship_b"
    SHIP_A = "ship_a"
    KEEP_RUNNING = "keep_running"
    INCONCLUSIVE = "inconclusive"


@dataclass(frozen=True)
class Recommendation:
    kind: RecommendationKind
    message: str
    suggested_sample_size: Optional[int] = None


def estimate_additional_sample_size(
    rate_a: float,
    rate_b: float,
    current_visitors: int = 0,
    target_confidence: float = SHIP_CONFIDENCE,
    power: float = 80,
) -> Optional[int]:
    """
    Rough number of extra visitors per variant before the observed gap could
    reach the target confidence. Rates are percentages. This is a UX hint,
    not a power analysis the caller should rely on.
    """
    if rate_a <= 0:
        return None

    required = calculate_minimum_sample_size(
        baseline_rate=rate_a / 100,
        minimum_detectable_effect=(rate_b - rate_a) / rate_a,
        confidence=target_confidence,
        power=power,
    )
    if required is None:
        return None

    return max(required - current_visitors, 0)


def _sample_size_hint(additional: Optional[int]) -> str:
    if additional is None:
        return ""
    return f" About {additional:,} more visitors per variant are needed."


def get_recommendation(
    confidence: float,
    rate_a: float,
    rate_b: float,
    current_visitors: int = 0,
    ship_threshold: float = SHIP_CONFIDENCE,
    trend_threshold: float = TREND_CONFIDENCE,
    power: float = 80,
) -> Recommendation:
    """
    Turn a confidence level and the two conversion rates (percentages) into
    one of four recommendations. Every input resolves to a recommendation.
    """
    additional = None
    if confidence < max(ship_threshold, trend_threshold):
        additional = estimate_additional_sample_size(
            rate_a, rate_b, current_visitors, ship_threshold, power
        )

    if confidence < trend_threshold:
        return Recommendation(
            kind=RecommendationKind.INCONCLUSIVE,
            message=(
                f"Not enough data to conclude ({confidence:.1f}% confidence). "
                f"Keep the test running until it reaches {ship_threshold:.0f}% confidence."
                f"{_sample_size_hint(additional)}"
            ),
            suggested_sample_size=additional,
        )

    if confidence < ship_threshold and rate_a != rate_b:
        leader = "B" if rate_b > rate_a else "A"
        return Recommendation(
            kind=RecommendationKind.KEEP_RUNNING,
            message=(
                f"Variant {leader} is trending ahead ({confidence:.1f}% confidence) "
                f"but the lead is not yet significant. Keep the test running."
                f"{_sample_size_hint(additional)}"
            ),
            suggested_sample_size=additional,
        )

    if confidence >= ship_threshold and rate_b > rate_a:
        return Recommendation(
            kind=RecommendationKind.SHIP_B,
            message=(
                f"Variant B outperforms variant A with {confidence:.1f}% confidence. "
                f"Ship variant B."
            ),
        )

    if confidence >= ship_threshold and rate_a > rate_b:
        return Recommendation(
            kind=RecommendationKind.SHIP_A,
            message=(
                f"Variant A outperforms variant B with {confidence:.1f}% confidence. "
                f"Keep the current version."
            ),
        )

    return Recommendation(
        kind=RecommendationKind.INCONCLUSIVE,
        message="Both variants convert at the same rate. There is no winner to ship.",
    )
