from growth_os.services.experiments.service import ExperimentEvaluation


def _describe_variant(label: str, rate: float, variant) -> str:
    if variant is None:
        return f"- {label}: no data"
    name = f" ({variant.name})" if variant.name else ""
    return (
        f"- {label}{name}: {variant.visitors:,} visitors, "
        f"{variant.conversions:,} conversions, {rate:.2f}% conversion rate"
    )


def build_experiment_context(evaluation: ExperimentEvaluation) -> str:
    """Plain-text summary of an evaluation, used for dashboard tooltips and reports."""
    recommendation = evaluation.recommendation

    lines = [
        f"EXPERIMENT: {evaluation.experiment_id}",
        "",
        "RESULTS:",
        _describe_variant("Variant A", evaluation.control_conversion_rate, evaluation.control),
        _describe_variant("Variant B", evaluation.treatment_conversion_rate, evaluation.treatment),
        "",
        "STATISTICAL ANALYSIS:",
        f"- Uplift: {evaluation.uplift:+.1f}%",
        f"- Confidence: {evaluation.confidence:.1f}%",
        "",
        f"RECOMMENDATION: {recommendation.kind.value.upper().replace('_', ' ')}",
        f"RATIONALE: {recommendation.message}",
    ]

    if recommendation.suggested_sample_size is not None:
        lines.append(
            f"SUGGESTED ADDITIONAL VISITORS PER VARIANT: {recommendation.suggested_sample_size:,}"
        )

    return "\n".join(lines)
