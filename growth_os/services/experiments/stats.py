import math
from dataclasses import dataclass
from typing import Optional, Tuple

from scipy import stats as scipy_stats


@dataclass
class VariantData:
    visitors: int
    conversions: int
    name: str = ""
    is_control: bool = False

    @property
    def conversion_rate(self) -> float:
        if self.visitors == 0:
            return 0.0
        return self.conversions / self.visitors


def calculate_conversion_rate(conversions: int, visitors: int) -> float:
    if visitors == 0:
        return 0.0
    return (conversions / visitors) * 100


def calculate_pooled_proportion(control: VariantData, variant: VariantData) -> float:
    total_conversions = control.conversions + variant.conversions
    total_visitors = control.visitors + variant.visitors

    if total_visitors == 0:
        return 0.0

    return total_conversions / total_visitors


def calculate_standard_error(control: VariantData, variant: VariantData) -> float:
    if control.visitors == 0 or variant.visitors == 0:
        return 0.0

    p_pooled = calculate_pooled_proportion(control, variant)
    return math.sqrt(p_pooled * (1 - p_pooled) * (1 / control.visitors + 1 / variant.visitors))


def run_proportion_z_test(control: VariantData, variant: VariantData) -> Tuple[float, float]:
    se = calculate_standard_error(control, variant)

    if se == 0:
        return 0.0, 1.0

    z_score = (variant.conversion_rate - control.conversion_rate) / se

    # Two-tailed p-value
    p_value = 2 * (1 - scipy_stats.norm.cdf(abs(z_score)))

    return float(z_score), float(p_value)


def compute_confidence(
    visitors_a: int, conversions_a: int, visitors_b: int, conversions_b: int
) -> float:
    """
    Confidence (0-100) that the conversion rates of A and B really differ.

    Two-proportion z-test with a pooled standard error, mapped through the
    two-tailed standard normal CDF. Insufficient or degenerate data (a variant
    with no visitors, identical rates, zero variance) yields 0.
    """
    if visitors_a == 0 or visitors_b == 0:
        return 0.0

    # Cross-multiplied so that 50/100 and 100/200 compare exactly
    if conversions_a * visitors_b == conversions_b * visitors_a:
        return 0.0

    control = VariantData(visitors=visitors_a, conversions=conversions_a)
    variant = VariantData(visitors=visitors_b, conversions=conversions_b)

    z_score, p_value = run_proportion_z_test(control, variant)
    if z_score == 0:
        return 0.0

    confidence = (1 - p_value) * 100
    return float(min(max(confidence, 0.0), 100.0))


def compute_uplift(rate_a: float, rate_b: float) -> float:
    # No baseline to compare against
    if rate_a <= 0:
        return 0.0
    return ((rate_b - rate_a) / rate_a) * 100


def is_statistically_significant(
    visitors_a: int,
    conversions_a: int,
    visitors_b: int,
    conversions_b: int,
    threshold: float = 95,
) -> bool:
    return compute_confidence(visitors_a, conversions_a, visitors_b, conversions_b) >= threshold


def calculate_minimum_sample_size(
    baseline_rate: float,
    minimum_detectable_effect: float,
    confidence: float = 95,
    power: float = 80,
) -> Optional[int]:
    """
    Visitors needed per variant to detect a relative lift over a baseline.

    ``baseline_rate`` is a proportion (0-1) and ``minimum_detectable_effect``
    a relative change (0.1 for +10%). ``confidence`` and ``power`` are
    percentages. Returns None when no finite sample size exists.
    """
    if baseline_rate <= 0 or baseline_rate >= 1:
        return None

    if not 0 < confidence < 100 or not 0 < power < 100:
        return None

    p1 = baseline_rate
    p2 = baseline_rate * (1 + minimum_detectable_effect)

    if p2 <= 0 or p2 >= 1 or p2 == p1:
        return None

    alpha = 1 - confidence / 100
    z_alpha = scipy_stats.norm.ppf(1 - alpha / 2)
    z_beta = scipy_stats.norm.ppf(power / 100)

    p_pooled = (p1 + p2) / 2

    numerator = (
        z_alpha * math.sqrt(2 * p_pooled * (1 - p_pooled))
        + z_beta * math.sqrt(p1 * (1 - p1) + p2 * (1 - p2))
    ) ** 2

    denominator = (p2 - p1) ** 2

    n = numerator / denominator
    if not math.isfinite(n):
        return None

    return math.ceil(n)
