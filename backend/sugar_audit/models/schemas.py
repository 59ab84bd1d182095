"""Pydantic schemas for API requests and responses."""

from pydantic import BaseModel, Field
from typing import Optional

from ..services.verdict import SugarVerdict
from ..services.claims import ClaimVerdict
from ..services.analyzer import Confidence


class Zones(BaseModel):
    """Scoped label regions."""
    nutrition_block: str = ""
    ingredients_block: str = ""


class Nutrients(BaseModel):
    """Extracted nutrient values with the label text each came from."""
    values: dict[str, Optional[float]]
    per_unit: str = "100g"
    evidence: dict[str, str] = {}

    class Config:
        json_schema_extra = {
            "example": {
                "values": {"sugar_per_100g": 12.0, "protein_per_100g": None},
                "per_unit": "100g",
                "evidence": {"sugar_per_100g": "Total Sugars 12g"}
            }
        }


class SugarMatchResult(BaseModel):
    alias: str
    verbatim: str


class SweetenerFactCardModel(BaseModel):
    """Consumer fact card: intake limit and gut effects."""
    headline: str
    summary: str
    safety: str
    gut: str
    spike_warning: bool = False


class SweetenerResult(BaseModel):
    """A sweetener or polyol found in the ingredients."""
    name: str
    verbatim: str
    gi_band: str
    calories_per_gram: float
    safety: str
    is_polyol: bool = False
    note: str = ""
    fact_card: Optional[SweetenerFactCardModel] = None


class Ingredients(BaseModel):
    """Ingredient classification."""
    sugar_aliases_found: list[str] = []
    sugar_matches: list[SugarMatchResult] = []
    sweeteners: list[SweetenerResult] = []
    fat_identifiers_found: list[str] = []
    raw_ingredients: list[str] = []


class SugaryIngredientResult(BaseModel):
    """A sugar ingredient with its glycemic profile."""
    alias: str
    verbatim: str
    name: str
    description: str
    gi: Optional[int] = None
    blood_sugar_impact: str


class ClaimResultModel(BaseModel):
    """Result for a single claim."""
    claim: str
    verdict: ClaimVerdict
    reason: str

    class Config:
        json_schema_extra = {
            "example": {
                "claim": "No added sugar",
                "verdict": "fail",
                "reason": "Found in ingredients: maltodextrin."
            }
        }


class LabelAnalysisResult(BaseModel):
    """Full analysis of one label."""
    zones: Zones
    degraded: bool
    nutrients: Nutrients
    ingredients: Ingredients
    verdict: SugarVerdict
    warnings: list[str]
    sugary_ingredients: list[SugaryIngredientResult]
    daily_intake: dict[str, int]
    claims: list[ClaimResultModel]
    readability_score: int = Field(ge=1, le=10)
    confidence: Confidence
    processing_time_ms: int


class AnalyzeRequest(BaseModel):
    """Request body for analyzing OCR lines from one label."""
    lines: list[str] = Field(..., description="Text lines returned by OCR")
    claims: list[str] = Field(default_factory=list, description="Marketing claims to verify")
    branding_text: str = Field("", description="Front-of-pack text; claims found here are verified too")

    class Config:
        json_schema_extra = {
            "example": {
                "lines": [
                    "Nutrition Information",
                    "Total Sugars 12g",
                    "Ingredients: Sugar, Wheat Flour, Honey"
                ],
                "claims": ["No added sugar"],
                "branding_text": "Baked, not fried"
            }
        }


class AnalyzeResponse(BaseModel):
    """Response for single label analysis."""
    success: bool
    result: Optional[LabelAnalysisResult] = None
    error: Optional[str] = None


class ClaimEvaluationRequest(BaseModel):
    """Request body for evaluating claims against already scoped zones."""
    nutrition_zone: str = ""
    ingredients_zone: str = ""
    claims: list[str] = Field(default_factory=list)
    branding_text: str = ""

    class Config:
        json_schema_extra = {
            "example": {
                "nutrition_zone": "Protein 8g\nTotal Sugars 1g",
                "ingredients_zone": "Ingredients: Water, Maltodextrin, Salt",
                "claims": ["No added sugar", "High protein"],
                "branding_text": ""
            }
        }


class ClaimEvaluationResponse(BaseModel):
    """Response for claim evaluation."""
    success: bool
    results: list[ClaimResultModel] = []
    error: Optional[str] = None


class ClaimInfo(BaseModel):
    """A supported claim with its explanation, where one exists."""
    name: str
    aliases: list[str]
    what_made_them_say: Optional[str] = None
    where_the_lie_is: Optional[str] = None
    takeaway: Optional[str] = None


class ClaimListResponse(BaseModel):
    claims: list[ClaimInfo]


class SweetenerInfoModel(BaseModel):
    """A known sweetener or polyol with its fact card, where one exists."""
    name: str
    aliases: list[str]
    gi_band: str
    calories_per_gram: float
    safety: str
    is_polyol: bool = False
    note: str = ""
    fact_card: Optional[SweetenerFactCardModel] = None

    class Config:
        json_schema_extra = {
            "example": {
                "name": "Maltitol",
                "aliases": ["maltitol", "965", "e965", "ins 965"],
                "gi_band": "35-52",
                "calories_per_gram": 2.1,
                "safety": "Moderate",
                "is_polyol": True,
                "note": "The hidden spiker; GI is high enough to affect diabetics.",
                "fact_card": {
                    "headline": "The Sweet Lie",
                    "summary": "It has about half the glycemic impact of real sugar.",
                    "safety": "Limit to 30g daily to avoid gastric distress.",
                    "gut": "Strong laxative effect; notorious for causing gas and bloating.",
                    "spike_warning": True
                }
            }
        }


class SweetenerListResponse(BaseModel):
    sweeteners: list[SweetenerInfoModel]


class BatchRowResult(BaseModel):
    """Result for a single row in batch analysis."""
    product_id: str
    success: bool
    result: Optional[LabelAnalysisResult] = None
    error: Optional[str] = None


class BatchAnalysisResponse(BaseModel):
    """Response for batch analysis."""
    success: bool
    total: int
    completed: int
    sugar_present: int
    no_sugar: int
    results: list[BatchRowResult]
    errors: list[str] = []
    processing_time_ms: int


class ErrorResponse(BaseModel):
    """Standard error response."""
    success: bool = False
    error: str
    detail: Optional[str] = None

    class Config:
        json_schema_extra = {
            "example": {
                "success": False,
                "error": "Invalid request",
                "detail": "At least one line of label text is required"
            }
        }


class HealthResponse(BaseModel):
    """Health check response."""
    status: str
    version: str
    claim_rules: int
