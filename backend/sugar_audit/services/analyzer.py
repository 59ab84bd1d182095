"""
End-to-end label analysis.

Runs raw label text through zone scoping, nutrient extraction, ingredient
classification, verdict synthesis and claim evaluation. When a zone anchor is
missing the passes fall back to the rest of the text (degraded mode) rather
than returning nothing.
"""

import re
import time
import logging
from enum import Enum
from typing import Any, Dict, List, Optional, Sequence, Union
from dataclasses import dataclass, field

from ..config import get_settings
from ..knowledge import DAILY_VALUES, get_sweetener_fact_card
from .zones import LabelZones, ZoneScoper, prepare_lines
from .nutrients import NUTRIENT_FIELDS, NutrientExtractor, NutrientFacts, PerUnit
from .ingredients import ClassificationResult, IngredientClassifier
from .verdict import SugarVerdict, SugaryIngredient, describe_sugar_matches, synthesize_verdict
from .claims import ClaimEvaluator, ClaimResult, RuleContext, merge_claims

logger = logging.getLogger(__name__)


class Confidence(str, Enum):
    """How far the result can be trusted given how much of the label was read."""
    HIGH = "high"
    LOW = "low"
    INCONCLUSIVE = "inconclusive"


@dataclass
class LabelAnalysis:
    """Complete analysis of one label."""
    zones: LabelZones
    degraded: bool
    facts: NutrientFacts
    classification: ClassificationResult
    verdict: SugarVerdict
    warnings: List[str]
    sugary_ingredients: List[SugaryIngredient]
    daily_intake: Dict[str, int]
    claim_results: List[ClaimResult]
    readability_score: int
    confidence: Confidence
    processing_time_ms: int = 0
    claims: List[str] = field(default_factory=list)


# =============================================================================
# READABILITY
# =============================================================================

_LENGTH_BUCKETS = (80, 140, 220, 300, 380, 460, 540, 620, 700)
_KEYWORDS = re.compile(r"sugar|ingredient|calorie|energy|fat|protein|carb|sodium|per\s*100|kcal", re.IGNORECASE)
_WORDS = re.compile(r"[A-Za-z]{2,}")


def readability_score(text: str) -> int:
    """
    Score how much usable text was read, from 1 (almost nothing) to 10.

    Length sets the base score; missing keywords, few words, few digits or
    few lines cap it.
    """
    lines = prepare_lines(text or "")
    if not lines:
        return 1
    cleaned = "\n".join(lines)

    score = 10
    for bucket, length in enumerate(_LENGTH_BUCKETS, start=1):
        if len(cleaned) < length:
            score = bucket
            break

    if not _KEYWORDS.search(cleaned):
        score = min(score, 2)
    if len(_WORDS.findall(cleaned)) < 12:
        score = min(score, 2)
    if sum(ch.isdigit() for ch in cleaned) < 4:
        score = min(score, 3)
    if len(lines) < 3:
        score = min(score, 3)
    return max(1, min(10, score))


def assess_confidence(score: int, has_data: bool, degraded: bool) -> Confidence:
    if score <= 1 and not has_data:
        return Confidence.INCONCLUSIVE
    if score <= 3 or degraded:
        return Confidence.LOW
    return Confidence.HIGH


# =============================================================================
# DAILY INTAKE
# =============================================================================

_DAILY_FIELDS = {
    "sugar": "sugar_per_100g",
    "fat": "fat_per_100g",
    "protein": "protein_per_100g",
}


def daily_intake_percent(facts: NutrientFacts) -> Dict[str, int]:
    """
    Percent of the adult daily reference amount in one serving.

    Values stated per 100g are scaled to the serving size when the label gives
    one; otherwise 100g is assumed.
    """
    percents = {}
    for nutrient, name in _DAILY_FIELDS.items():
        value = facts.get(name)
        if value is None:
            continue
        if facts.per_unit == PerUnit.PER_100G and facts.serving_size_g:
            value = value / 100 * facts.serving_size_g
        percents[nutrient] = round(value / DAILY_VALUES[nutrient] * 100)
    return percents


# =============================================================================
# ANALYZER
# =============================================================================

def _text_without(lines: List[str], zone: str) -> str:
    """The prepared lines with a zone's lines removed."""
    zone_lines = zone.split("\n") if zone else []
    size = len(zone_lines)
    for i in range(len(lines) - size + 1):
        if size and lines[i:i + size] == zone_lines:
            return "\n".join(lines[:i] + lines[i + size:])
    remove = set(zone_lines)
    return "\n".join(line for line in lines if line not in remove)


class LabelAnalyzer:
    """Orchestrates the full pipeline for one label."""

    def __init__(self):
        self.settings = get_settings()
        self.scoper = ZoneScoper()
        self.extractor = NutrientExtractor()
        self.classifier = IngredientClassifier()
        self.evaluator = ClaimEvaluator()

    def analyze(
        self,
        raw_text: Union[str, Sequence[str]],
        claims: Optional[Sequence[str]] = None,
        branding_text: str = "",
    ) -> LabelAnalysis:
        """
        Analyze label text.

        Args:
            raw_text: OCR text as a string or list of lines
            claims: Declared marketing claims
            branding_text: Front-of-pack text to detect further claims in

        Returns:
            LabelAnalysis
        """
        start_time = time.time()

        lines = prepare_lines(raw_text)
        full_text = "\n".join(lines)
        zones = self.scoper.scope(lines)

        nutrition_text = zones.nutrition_block
        ingredients_text = zones.ingredients_block
        degraded = False

        if zones.is_empty:
            if full_text:
                logger.warning("No zone anchors found; reading the full label text")
                degraded = True
            nutrition_text = ingredients_text = full_text
        elif not zones.has_nutrition:
            logger.warning("No nutrition anchor; reading nutrients from text outside the ingredients zone")
            degraded = True
            nutrition_text = _text_without(lines, zones.ingredients_block)
        elif not zones.has_ingredients:
            logger.warning("No ingredients anchor; reading ingredients from text outside the nutrition zone")
            degraded = True
            ingredients_text = _text_without(lines, zones.nutrition_block)

        facts = self.extractor.extract(nutrition_text)
        classification = self.classifier.classify(ingredients_text)
        verdict, warnings = synthesize_verdict(facts, classification.sugar_matches)

        all_claims = merge_claims(claims or [], branding_text)
        context = RuleContext(
            facts=facts,
            classification=classification,
            ingredients_text=ingredients_text,
            branding_text=branding_text or "",
        )
        claim_results = self.evaluator.evaluate(context, all_claims)

        score = readability_score(full_text)
        has_data = bool(
            not zones.is_empty
            or facts.found_fields()
            or classification.raw_ingredients
        )
        confidence = assess_confidence(score, has_data, degraded)

        processing_time = int((time.time() - start_time) * 1000)
        logger.info(
            f"Analyzed label: verdict={verdict.value}, confidence={confidence.value}, "
            f"claims={len(all_claims)}, {processing_time}ms"
        )

        return LabelAnalysis(
            zones=zones,
            degraded=degraded,
            facts=facts,
            classification=classification,
            verdict=verdict,
            warnings=warnings,
            sugary_ingredients=describe_sugar_matches(classification.sugar_matches),
            daily_intake=daily_intake_percent(facts),
            claim_results=claim_results,
            readability_score=score,
            confidence=confidence,
            processing_time_ms=processing_time,
            claims=all_claims,
        )


def analyze_label(
    raw_text: Union[str, Sequence[str]],
    claims: Optional[Sequence[str]] = None,
    branding_text: str = "",
) -> LabelAnalysis:
    """Standalone function to analyze one label's text."""
    return LabelAnalyzer().analyze(raw_text, claims=claims, branding_text=branding_text)


def fact_card_to_dict(name: str) -> Optional[Dict[str, Any]]:
    """Fact card for a sweetener as plain data, or None when there is no card."""
    card = get_sweetener_fact_card(name)
    if card is None:
        return None
    return {
        "headline": card.headline,
        "summary": card.summary,
        "safety": card.safety,
        "gut": card.gut,
        "spike_warning": card.spike_warning,
    }


def analysis_to_dict(analysis: LabelAnalysis) -> Dict[str, Any]:
    """Convert a LabelAnalysis into plain, picklable data for the API and batch workers."""
    facts = analysis.facts
    classification = analysis.classification
    return {
        "zones": {
            "nutrition_block": analysis.zones.nutrition_block,
            "ingredients_block": analysis.zones.ingredients_block,
        },
        "degraded": analysis.degraded,
        "nutrients": {
            "values": {name: facts.get(name) for name in NUTRIENT_FIELDS},
            "per_unit": facts.per_unit.value,
            "evidence": dict(facts.evidence),
        },
        "ingredients": {
            "sugar_aliases_found": list(classification.sugar_aliases_found),
            "sugar_matches": [
                {"alias": m.alias, "verbatim": m.verbatim} for m in classification.sugar_matches
            ],
            "sweeteners": [
                {
                    "name": m.info.name,
                    "verbatim": m.verbatim,
                    "gi_band": m.info.gi_band,
                    "calories_per_gram": m.info.calories_per_gram,
                    "safety": m.info.safety.value,
                    "is_polyol": m.info.is_polyol,
                    "note": m.info.note,
                    "fact_card": fact_card_to_dict(m.info.name),
                }
                for m in classification.sweetener_matches
            ],
            "fat_identifiers_found": list(classification.fat_identifiers_found),
            "raw_ingredients": list(classification.raw_ingredients),
        },
        "verdict": analysis.verdict.value,
        "warnings": list(analysis.warnings),
        "sugary_ingredients": [
            {
                "alias": s.alias,
                "verbatim": s.verbatim,
                "name": s.info.name,
                "description": s.info.description,
                "gi": s.info.gi,
                "blood_sugar_impact": s.info.blood_sugar_impact,
            }
            for s in analysis.sugary_ingredients
        ],
        "daily_intake": dict(analysis.daily_intake),
        "claims": [
            {"claim": r.claim, "verdict": r.verdict.value, "reason": r.reason}
            for r in analysis.claim_results
        ],
        "readability_score": analysis.readability_score,
        "confidence": analysis.confidence.value,
        "processing_time_ms": analysis.processing_time_ms,
    }
