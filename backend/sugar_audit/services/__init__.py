"""Services for zone scoping, nutrient extraction, ingredient classification, verdicts, claims and batch analysis."""

from .zones import LabelZones, ZoneScoper, scope_zones
from .nutrients import NutrientExtractor, NutrientFacts, PerUnit, extract_nutrients, normalize_ocr_digits
from .ingredients import (
    IngredientClassifier,
    ClassificationResult,
    SugarMatch,
    SweetenerMatch,
    classify_ingredients,
)
from .verdict import SugarVerdict, SugaryIngredient, synthesize_verdict, describe_sugar_matches
from .claims import (
    ClaimVerdict,
    ClaimResult,
    ClaimRule,
    ClaimEvaluator,
    RuleContext,
    detect_claims,
    evaluate_claims,
    supported_claims,
)
from .analyzer import LabelAnalyzer, LabelAnalysis, Confidence, analyze_label, analysis_to_dict, fact_card_to_dict
from .batch import CSVParser, CSVRow, CSVValidationError, BatchProcessor, SequentialBatchProcessor

__all__ = [
    "LabelZones",
    "ZoneScoper",
    "scope_zones",
    "NutrientExtractor",
    "NutrientFacts",
    "PerUnit",
    "extract_nutrients",
    "normalize_ocr_digits",
    "IngredientClassifier",
    "ClassificationResult",
    "SugarMatch",
    "SweetenerMatch",
    "classify_ingredients",
    "SugarVerdict",
    "SugaryIngredient",
    "synthesize_verdict",
    "describe_sugar_matches",
    "ClaimVerdict",
    "ClaimResult",
    "ClaimRule",
    "ClaimEvaluator",
    "RuleContext",
    "detect_claims",
    "evaluate_claims",
    "supported_claims",
    "LabelAnalyzer",
    "LabelAnalysis",
    "Confidence",
    "analyze_label",
    "analysis_to_dict",
    "fact_card_to_dict",
    "CSVParser",
    "CSVRow",
    "CSVValidationError",
    "BatchProcessor",
    "SequentialBatchProcessor",
]
