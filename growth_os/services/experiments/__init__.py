"""
Experiment statistics for the conversion-rate optimization module.

This module provides:
- Confidence estimation for A/B tests (two-proportion z-test)
- Uplift between two conversion rates
- Recommendation engine for shipping/holding experiments
- Evaluation of experiment variant rows
"""

from growth_os.services.experiments.recommendation import (
    Recommendation,
    RecommendationKind,
    get_recommendation,
)
from growth_os.services.experiments.service import ExperimentEvaluation, ExperimentEvaluator
from growth_os.services.experiments.stats import (
    VariantData,
    calculate_minimum_sample_size,
    compute_confidence,
    compute_uplift,
    is_statistically_significant,
)

__all__ = [
    "VariantData",
    "compute_confidence",
    "compute_uplift",
    "is_statistically_significant",
    "calculate_minimum_sample_size",
    "Recommendation",
    "RecommendationKind",
    "get_recommendation",
    "ExperimentEvaluation",
    "ExperimentEvaluator",
]
