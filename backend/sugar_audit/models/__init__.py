"""Pydantic models for request/response schemas."""

from .schemas import (
    SugarVerdict,
    ClaimVerdict,
    Confidence,
    Zones,
    Nutrients,
    SugarMatchResult,
    SweetenerResult,
    Ingredients,
    SugaryIngredientResult,
    ClaimResultModel,
    LabelAnalysisResult,
    AnalyzeRequest,
    AnalyzeResponse,
    ClaimEvaluationRequest,
    ClaimEvaluationResponse,
    ClaimInfo,
    ClaimListResponse,
    SweetenerFactCardModel,
    SweetenerInfoModel,
    SweetenerListResponse,
    BatchRowResult,
    BatchAnalysisResponse,
    ErrorResponse,
    HealthResponse,
)

__all__ = [
    "SugarVerdict",
    "ClaimVerdict",
    "Confidence",
    "Zones",
    "Nutrients",
    "SugarMatchResult",
    "SweetenerResult",
    "Ingredients",
    "SugaryIngredientResult",
    "ClaimResultModel",
    "LabelAnalysisResult",
    "AnalyzeRequest",
    "AnalyzeResponse",
    "ClaimEvaluationRequest",
    "ClaimEvaluationResponse",
    "ClaimInfo",
    "ClaimListResponse",
    "SweetenerFactCardModel",
    "SweetenerInfoModel",
    "SweetenerListResponse",
    "BatchRowResult",
    "BatchAnalysisResponse",
    "ErrorResponse",
    "HealthResponse",
]
