from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field, model_validator


class RecommendationKindEnum(str, Enum):
    SHIP_B = "ship_b"
    SHIP_A = "ship_a"
    KEEP_RUNNING = "keep_running"
    INCONCLUSIVE = "inconclusive"


class VariantObservation(BaseModel):
    visitors: int = Field(..., ge=0, description="Visitors exposed to the variant")
    conversions: int = Field(..., ge=0, description="Visitors who converted")

    @model_validator(mode="after")
    def check_conversions(self):
        if self.conversions > self.visitors:
            raise ValueError("conversions cannot exceed visitors")
        return self


class ConfidenceRequest(BaseModel):
    control: VariantObservation
    treatment: VariantObservation


class ConfidenceResponse(BaseModel):
    confidence: float = Field(..., ge=0, le=100)
    is_significant: bool


class UpliftRequest(BaseModel):
    rate_a: float = Field(..., ge=0, description="Control conversion rate")
    rate_b: float = Field(..., ge=0, description="Treatment conversion rate, same unit as rate_a")


class UpliftResponse(BaseModel):
    uplift: float  # Signed percentage


class RecommendationRequest(BaseModel):
    confidence: float = Field(..., ge=0, le=100)
    rate_a: float = Field(..., ge=0, le=100, description="Control conversion rate in percent")
    rate_b: float = Field(..., ge=0, le=100, description="Treatment conversion rate in percent")
    current_visitors: int = Field(0, ge=0, description="Visitors already collected per variant")


class RecommendationResponse(BaseModel):
    kind: RecommendationKindEnum
    message: str
    suggested_sample_size: Optional[int] = None


class VariantRow(VariantObservation):
    variant_name: str = Field(..., description="Name of the variant (e.g., 'control', 'variant_b')")
    is_control: bool = Field(False, description="Whether this is the control group")


class EvaluateExperimentRequest(BaseModel):
    experiment_id: str
    variants: List[VariantRow] = Field(..., min_length=1)


class ExperimentEvaluationResponse(BaseModel):
    experiment_id: str
    control_variant: Optional[str] = None
    treatment_variant: Optional[str] = None
    control_conversion_rate: float
    treatment_conversion_rate: float
    confidence: float
    uplift: float
    recommendation: RecommendationResponse


class SampleSizeRequest(BaseModel):
    baseline_rate: float = Field(..., gt=0, lt=1, description="Baseline conversion rate (0-1)")
    minimum_detectable_effect: float = Field(
        ..., description="Relative change to detect (0.1 for +10%)"
    )
    confidence: float = Field(95, gt=0, lt=100)
    power: float = Field(80, gt=0, lt=100)


class SampleSizeResponse(BaseModel):
    sample_size_per_variant: Optional[int] = None


class ExperimentExplanation(BaseModel):
    experiment_id: str
    recommendation: RecommendationKindEnum
    context: str
