import pytest

from growth_os.services.experiments.explainer import build_experiment_context
from growth_os.services.experiments.recommendation import RecommendationKind
from growth_os.services.experiments.service import ExperimentEvaluator, select_comparison_pair
from growth_os.services.experiments.stats import VariantData, compute_confidence


@pytest.fixture
def evaluator():
    return ExperimentEvaluator(ship_threshold=95, trend_threshold=80, target_power=80)


class TestSelectComparisonPair:
    def test_explicit_control(self):
        treatment = VariantData(visitors=1000, conversions=75, name="b")
        control = VariantData(visitors=1000, conversions=50, name="a", is_control=True)

        assert select_comparison_pair([treatment, control]) == (control, treatment)

    def test_first_row_is_control_when_unflagged(self):
        first = VariantData(visitors=100, conversions=10, name="first")
        second = VariantData(visitors=100, conversions=5, name="second")

        control, treatment = select_comparison_pair([first, second])

        assert control is first
        assert treatment is second

    def test_best_treatment_wins(self):
        control = VariantData(visitors=1000, conversions=50, name="control", is_control=True)
        weak = VariantData(visitors=1000, conversions=55, name="weak")
        strong = VariantData(visitors=1000, conversions=90, name="strong")

        _, treatment = select_comparison_pair([control, weak, strong])

        assert treatment is strong

    def test_empty(self):
        assert select_comparison_pair([]) == (None, None)


class TestExperimentEvaluator:
    def test_end_to_end(self, evaluator):
        evaluation = evaluator.evaluate(
            "exp-1",
            [
                VariantData(visitors=1000, conversions=50, name="control", is_control=True),
                VariantData(visitors=1000, conversions=75, name="new_headline"),
            ],
        )

        assert evaluation.control_conversion_rate == pytest.approx(5.0)
        assert evaluation.treatment_conversion_rate == pytest.approx(7.5)
        assert evaluation.uplift == pytest.approx(50.0)
        assert evaluation.confidence == pytest.approx(compute_confidence(1000, 50, 1000, 75))
        assert evaluation.recommendation.kind in (
            RecommendationKind.KEEP_RUNNING,
            RecommendationKind.SHIP_B,
        )

    def test_losing_treatment_keeps_control(self, evaluator):
        evaluation = evaluator.evaluate(
            "exp-2",
            [
                VariantData(visitors=5000, conversions=400, name="control", is_control=True),
                VariantData(visitors=5000, conversions=250, name="variant"),
            ],
        )

        assert evaluation.uplift < 0
        assert evaluation.recommendation.kind == RecommendationKind.SHIP_A

    def test_single_variant_is_inconclusive(self, evaluator):
        evaluation = evaluator.evaluate(
            "exp-3", [VariantData(visitors=100, conversions=10, name="control", is_control=True)]
        )

        assert evaluation.treatment is None
        assert evaluation.confidence == 0
        assert evaluation.control_conversion_rate == pytest.approx(10.0)
        assert evaluation.recommendation.kind == RecommendationKind.INCONCLUSIVE
        assert "insufficient data" in evaluation.recommendation.message.lower()

    def test_no_traffic_yet(self, evaluator):
        evaluation = evaluator.evaluate(
            "exp-4",
            [
                VariantData(visitors=0, conversions=0, name="control", is_control=True),
                VariantData(visitors=0, conversions=0, name="variant"),
            ],
        )

        assert evaluation.confidence == 0
        assert evaluation.uplift == 0
        assert evaluation.recommendation.kind == RecommendationKind.INCONCLUSIVE

    def test_sample_hint_accounts_for_collected_visitors(self, evaluator):
        variants = [
            VariantData(visitors=200, conversions=10, name="control", is_control=True),
            VariantData(visitors=200, conversions=12, name="variant"),
        ]
        evaluation = evaluator.evaluate("exp-5", variants)

        assert evaluation.recommendation.kind == RecommendationKind.INCONCLUSIVE
        assert evaluation.recommendation.suggested_sample_size > 0

    def test_explicit_zero_thresholds_are_kept(self):
        evaluator = ExperimentEvaluator(ship_threshold=0, trend_threshold=0, target_power=0)

        assert evaluator.ship_threshold == 0
        assert evaluator.trend_threshold == 0
        assert evaluator.target_power == 0

    def test_thresholds_default_to_settings(self, settings):
        evaluator = ExperimentEvaluator()

        assert evaluator.ship_threshold == settings.SHIP_CONFIDENCE
        assert evaluator.trend_threshold == settings.TREND_CONFIDENCE
        assert evaluator.target_power == settings.TARGET_POWER

    def test_evaluate_many(self, evaluator):
        evaluations = evaluator.evaluate_many(
            {
                "a": [VariantData(100, 10, is_control=True), VariantData(100, 12)],
                "b": [VariantData(100, 10, is_control=True)],
            }
        )

        assert [e.experiment_id for e in evaluations] == ["a", "b"]


class TestExplainer:
    def test_context_contains_results(self, evaluator):
        evaluation = evaluator.evaluate(
            "exp-ctx",
            [
                VariantData(visitors=1000, conversions=50, name="control", is_control=True),
                VariantData(visitors=1000, conversions=75, name="new_headline"),
            ],
        )

        context = build_experiment_context(evaluation)

        assert "EXPERIMENT: exp-ctx" in context
        assert "1,000 visitors" in context
        assert "5.00% conversion rate" in context
        assert "Uplift: +50.0%" in context
        assert "new_headline" in context

    def test_context_without_treatment(self, evaluator):
        evaluation = evaluator.evaluate("solo", [VariantData(100, 10, name="control")])

        context = build_experiment_context(evaluation)

        assert "Variant B: no data" in context
        assert "RECOMMENDATION: INCONCLUSIVE" in context
