"""
Claim evaluation rule engine.

Each supported marketing claim maps to one ClaimRule whose evaluator is a
pure function of a RuleContext (nutrient facts, ingredient classification and
the raw zone text). Thresholds are the stricter of WHO/Codex and FSSAI.
When the data a rule needs is missing the verdict is AMBER, never a guess.
"""

import re
import logging
from enum import Enum
from typing import Callable, Dict, List, Optional, Sequence, Tuple
from dataclasses import dataclass

from ..knowledge import (
    CLAIM_THRESHOLDS,
    FRUIT_TERMS,
    HONEY_JAGGERY_DATES,
    REFINED_SUGAR_ALIASES,
)
from .ingredients import ClassificationResult, classify_ingredients
from .nutrients import NutrientFacts, extract_nutrients
from .rules import word_pattern

logger = logging.getLogger(__name__)


class ClaimVerdict(str, Enum):
    """Outcome of checking one claim against the label."""
    PASS = "pass"
    FAIL = "fail"
    AMBER = "amber"  # cannot verify


@dataclass(frozen=True)
class ClaimResult:
    claim: str
    verdict: ClaimVerdict
    reason: str


@dataclass(frozen=True)
class RuleContext:
    """Everything an evaluator may look at."""
    facts: NutrientFacts
    classification: ClassificationResult
    ingredients_text: str = ""
    branding_text: str = ""

    @property
    def sugar_aliases(self) -> List[str]:
        return self.classification.sugar_aliases_found

    @property
    def has_ingredients(self) -> bool:
        return bool(self.ingredients_text.strip())


Evaluation = Tuple[ClaimVerdict, str]


@dataclass(frozen=True)
class ClaimRule:
    """A claim, the spellings it is known by, and its evaluator."""
    name: str
    aliases: Tuple[str, ...]
    evaluate: Callable[[RuleContext], Evaluation]


NO_CLAIMS = "No claims to verify"
UNKNOWN_CLAIM_REASON = "Claim not in rule set; manual review recommended."

T = CLAIM_THRESHOLDS


def normalize_claim(claim: str) -> str:
    """Lookup key for a claim name: case, hyphens, slashes and spacing ignored."""
    return re.sub(r"\s+", " ", re.sub(r"[-/]", " ", claim.lower())).strip()


def _amount(ctx: RuleContext, value: float, unit: str, nutrient: str) -> str:
    sep = " " if unit == "kcal" else ""
    return f"{value:g}{sep}{unit} {nutrient} {ctx.facts.unit_label}"


def _cannot_verify(nutrient: str) -> Evaluation:
    return ClaimVerdict.AMBER, f"Could not extract {nutrient} from the label. Cannot verify."


# =============================================================================
# EVALUATORS
# =============================================================================

def eval_sugar_free(ctx: RuleContext) -> Evaluation:
    sugar = ctx.facts.sugar_per_100g
    if sugar is None:
        return _cannot_verify("sugar")
    if sugar < T.sugar_free_max:
        return ClaimVerdict.PASS, f"Product has {_amount(ctx, sugar, 'g', 'sugar')}, below the {T.sugar_free_max:g}g threshold."
    return ClaimVerdict.FAIL, f"Product has {_amount(ctx, sugar, 'g', 'sugar')} (must be below {T.sugar_free_max:g}g)."


def eval_no_added_sugar(ctx: RuleContext) -> Evaluation:
    if ctx.sugar_aliases:
        return ClaimVerdict.FAIL, f"Found in ingredients: {', '.join(ctx.sugar_aliases)}."

    added = ctx.facts.added_sugar_per_100g
    if added is not None and added > T.no_added_sugar_max:
        return ClaimVerdict.FAIL, f"Label declares {_amount(ctx, added, 'g', 'added sugar')}."

    sugar = ctx.facts.sugar_per_100g
    if sugar is not None and sugar > T.no_added_sugar_max:
        return ClaimVerdict.FAIL, f"Product has {_amount(ctx, sugar, 'g', 'sugar')} (tolerance {T.no_added_sugar_max:g}g)."

    if not ctx.has_ingredients:
        return ClaimVerdict.AMBER, "No ingredients list found. Cannot verify."

    count = len(ctx.classification.raw_ingredients)
    if sugar is None:
        return ClaimVerdict.PASS, f"No sugar ingredients among {count} ingredients listed."
    return ClaimVerdict.PASS, (
        f"No sugar ingredients among {count} ingredients listed; "
        f"{_amount(ctx, sugar, 'g', 'sugar')} is within tolerance."
    )


def _sugar_at_most(limit: float) -> Callable[[RuleContext], Evaluation]:
    def evaluate(ctx: RuleContext) -> Evaluation:
        sugar = ctx.facts.sugar_per_100g
        if sugar is None:
            return _cannot_verify("sugar")
        if sugar <= limit:
            return ClaimVerdict.PASS, f"Product has {_amount(ctx, sugar, 'g', 'sugar')} (max {limit:g}g)."
        return ClaimVerdict.FAIL, f"Product has {_amount(ctx, sugar, 'g', 'sugar')} (max {limit:g}g)."
    return evaluate


eval_less_sugar = _sugar_at_most(T.less_sugar_max)
eval_low_sugar = _sugar_at_most(T.low_sugar_max)


def eval_high_protein(ctx: RuleContext) -> Evaluation:
    protein = ctx.facts.protein_per_100g
    if protein is None:
        return _cannot_verify("protein")
    if protein >= T.high_protein_min:
        return ClaimVerdict.PASS, f"Product has {_amount(ctx, protein, 'g', 'protein')}."
    return ClaimVerdict.FAIL, f"Product has {_amount(ctx, protein, 'g', 'protein')} (threshold {T.high_protein_min:g}g)."


def eval_baked(ctx: RuleContext) -> Evaluation:
    fat = ctx.facts.fat_per_100g
    if fat is None:
        return _cannot_verify("fat")
    if fat > T.baked_fat_limit:
        return ClaimVerdict.AMBER, (
            f"Product has {_amount(ctx, fat, 'g', 'fat')}, high for a baked product "
            f"(above {T.baked_fat_limit:g}g)."
        )
    return ClaimVerdict.PASS, f"Product has {_amount(ctx, fat, 'g', 'fat')}, within range for a baked product."


def eval_fat_free(ctx: RuleContext) -> Evaluation:
    fat = ctx.facts.fat_per_100g
    if fat is None:
        return _cannot_verify("fat")
    if fat <= T.fat_free_max:
        return ClaimVerdict.PASS, f"Product has {_amount(ctx, fat, 'g', 'fat')} (max {T.fat_free_max:g}g)."
    return ClaimVerdict.FAIL, f"Product has {_amount(ctx, fat, 'g', 'fat')} (max {T.fat_free_max:g}g)."


def eval_low_fat(ctx: RuleContext) -> Evaluation:
    fat = ctx.facts.fat_per_100g
    if fat is None:
        return _cannot_verify("fat")
    if fat <= T.low_fat_max:
        return ClaimVerdict.PASS, f"Product has {_amount(ctx, fat, 'g', 'fat')}."
    return ClaimVerdict.FAIL, f"Product has {_amount(ctx, fat, 'g', 'fat')} (max {T.low_fat_max:g}g)."


def eval_low_carb(ctx: RuleContext) -> Evaluation:
    carbs = ctx.facts.carbs_per_100g
    if carbs is None:
        return _cannot_verify("carbs")
    if carbs <= T.low_carb_max:
        return ClaimVerdict.PASS, f"Product has {_amount(ctx, carbs, 'g', 'carbs')}."
    return ClaimVerdict.FAIL, f"Product has {_amount(ctx, carbs, 'g', 'carbs')} (max {T.low_carb_max:g}g)."


def eval_no_refined_sugar(ctx: RuleContext) -> Evaluation:
    found = [a for a in ctx.sugar_aliases if a in REFINED_SUGAR_ALIASES]
    if found:
        return ClaimVerdict.FAIL, f"Found in ingredients: {', '.join(found)}."
    if not ctx.has_ingredients:
        return ClaimVerdict.AMBER, "No ingredients list found. Cannot verify."
    others = ctx.sugar_aliases
    if others:
        return ClaimVerdict.PASS, f"No refined sugar, but still sweetened with: {', '.join(others)}."
    return ClaimVerdict.PASS, "No refined sugar ingredients detected."


_FRUIT_PATTERNS = tuple((term, word_pattern(term)) for term in FRUIT_TERMS)


def eval_made_with_real_fruit(ctx: RuleContext) -> Evaluation:
    if not ctx.has_ingredients:
        return ClaimVerdict.AMBER, "No ingredients list found. Cannot verify."
    found = [term for term, pattern in _FRUIT_PATTERNS if pattern.search(ctx.ingredients_text)]
    if found:
        return ClaimVerdict.PASS, f"Found fruit in ingredients: {', '.join(found)}."
    return ClaimVerdict.FAIL, "No fruit ingredients found in the ingredients list."


def eval_sweetened_with_honey_jaggery_dates(ctx: RuleContext) -> Evaluation:
    found = [a for a in ctx.sugar_aliases if a in HONEY_JAGGERY_DATES]
    if found:
        return ClaimVerdict.PASS, f"Found in ingredients: {', '.join(found)}."
    if not ctx.has_ingredients:
        return ClaimVerdict.AMBER, "No ingredients list found. Cannot verify."
    return ClaimVerdict.FAIL, "None of honey, jaggery or dates found in the ingredients."


def eval_cholesterol_free(ctx: RuleContext) -> Evaluation:
    chol = ctx.facts.cholesterol_per_100g
    if chol is None:
        return _cannot_verify("cholesterol")
    if chol <= T.cholesterol_free_max:
        return ClaimVerdict.PASS, f"Product has {_amount(ctx, chol, 'mg', 'cholesterol')} (max {T.cholesterol_free_max:g}mg)."
    return ClaimVerdict.FAIL, f"Product has {_amount(ctx, chol, 'mg', 'cholesterol')} (max {T.cholesterol_free_max:g}mg)."


def _calories_at_most(limit: float) -> Callable[[RuleContext], Evaluation]:
    def evaluate(ctx: RuleContext) -> Evaluation:
        cal = ctx.facts.calories_per_100g
        if cal is None:
            return _cannot_verify("calories")
        if cal <= limit:
            return ClaimVerdict.PASS, f"Product has {_amount(ctx, cal, 'kcal', 'energy')} (max {limit:g} kcal)."
        return ClaimVerdict.FAIL, f"Product has {_amount(ctx, cal, 'kcal', 'energy')} (max {limit:g} kcal)."
    return evaluate


eval_low_calorie = _calories_at_most(T.low_calorie_max)
eval_zero_calorie = _calories_at_most(T.zero_calorie_max)


def eval_protein_value(ctx: RuleContext) -> Evaluation:
    protein = ctx.facts.protein_per_100g
    if protein is None:
        return _cannot_verify("protein")
    return ClaimVerdict.PASS, f"Protein value found: {_amount(ctx, protein, 'g', 'protein')}."


# =============================================================================
# REGISTRY
# =============================================================================

CLAIM_RULES: Tuple[ClaimRule, ...] = (
    ClaimRule("Sugar free", ("sugar free", "zero sugar", "sugar free zero sugar"), eval_sugar_free),
    ClaimRule("No added sugar", ("no added sugar",), eval_no_added_sugar),
    ClaimRule("No processed sugar", ("no processed sugar",), eval_no_added_sugar),
    ClaimRule("Less sugar", ("less sugar",), eval_less_sugar),
    ClaimRule("Low sugar", ("low sugar",), eval_low_sugar),
    ClaimRule("High protein", ("high protein", "protein rich"), eval_high_protein),
    ClaimRule("Baked", ("baked",), eval_baked),
    ClaimRule("Baked not fried", ("baked not fried", "baked, not fried"), eval_baked),
    ClaimRule("Fat free", ("fat free",), eval_fat_free),
    ClaimRule("Oil free", ("oil free",), eval_fat_free),
    ClaimRule("Low fat", ("low fat",), eval_low_fat),
    ClaimRule("Low carb", ("low carb", "low carbs"), eval_low_carb),
    ClaimRule("No refined sugar", ("no refined sugar",), eval_no_refined_sugar),
    ClaimRule("Made with real fruit", ("made with real fruit",), eval_made_with_real_fruit),
    ClaimRule(
        "Sweetened with honey/jaggery/dates",
        ("sweetened with honey jaggery dates",),
        eval_sweetened_with_honey_jaggery_dates,
    ),
    ClaimRule("Cholesterol free", ("cholesterol free",), eval_cholesterol_free),
    ClaimRule("Low calorie", ("low calorie", "low calories"), eval_low_calorie),
    ClaimRule("Diet", ("diet",), eval_low_calorie),
    ClaimRule("Light", ("light", "lite"), eval_low_calorie),
    ClaimRule("Zero calorie", ("zero calorie", "zero calories"), eval_zero_calorie),
    ClaimRule("Mentions protein value", ("mentions protein value",), eval_protein_value),
)

_RULES_BY_KEY: Dict[str, ClaimRule] = {
    normalize_claim(alias): claim_rule
    for claim_rule in CLAIM_RULES
    for alias in (claim_rule.name,) + claim_rule.aliases
}


def find_rule(claim: str) -> Optional[ClaimRule]:
    return _RULES_BY_KEY.get(normalize_claim(claim))


def supported_claims() -> List[str]:
    return [claim_rule.name for claim_rule in CLAIM_RULES]


# Branding phrases and the claim each one asserts
CLAIM_PATTERNS: Tuple[Tuple[re.Pattern, str], ...] = tuple(
    (re.compile(pattern, re.IGNORECASE), name) for pattern, name in (
        (r"\bno\s+added\s+sugars?\b", "No added sugar"),
        (r"\bsugar[\s-]*free\b", "Sugar free"),
        (r"\bzero\s+sugars?\b", "Sugar free"),
        (r"\bhigh[\s-]+protein\b", "High protein"),
        (r"\bprotein[\s-]+rich\b", "High protein"),
        (r"\bbaked,?\s+not\s+fried\b", "Baked not fried"),
        (r"\bbaked\b(?!,?\s+not\s+fried)", "Baked"),
        (r"\blow[\s-]+fat\b", "Low fat"),
        (r"\bfat[\s-]*free\b", "Fat free"),
        (r"\boil[\s-]*free\b", "Oil free"),
        (r"\bless\s+sugars?\b", "Less sugar"),
        (r"\blow\s+sugars?\b", "Low sugar"),
        (r"\blow[\s-]+carbs?\b", "Low carb"),
        (r"\bno\s+refined\s+sugars?\b", "No refined sugar"),
        (r"\bcholesterol[\s-]*free\b", "Cholesterol free"),
        (r"\blow[\s-]+calories?\b", "Low calorie"),
        (r"\bzero[\s-]+calories?\b", "Zero calorie"),
    )
)


def detect_claims(branding_text: str) -> List[str]:
    """Canonical claim names asserted by branding text, in pattern order, without duplicates."""
    claims = []
    if not branding_text:
        return claims
    for pattern, name in CLAIM_PATTERNS:
        if name not in claims and pattern.search(branding_text):
            claims.append(name)
    return claims


def merge_claims(declared: Sequence[str], branding_text: str = "") -> List[str]:
    """Declared claims followed by detected ones, duplicates (by lookup key) removed."""
    merged = []
    keys = set()
    for claim in list(declared or []) + detect_claims(branding_text):
        claim = claim.strip()
        key = normalize_claim(claim)
        if not key or key in keys:
            continue
        keys.add(key)
        merged.append(claim)
    return merged


# =============================================================================
# EVALUATOR
# =============================================================================

class ClaimEvaluator:
    """Runs claims through their rules."""

    def evaluate(self, context: RuleContext, claims: Sequence[str]) -> List[ClaimResult]:
        """
        Evaluate claims against a prepared context.

        Args:
            context: Facts, classification and zone text
            claims: Claim names, already merged with detected ones

        Returns:
            One ClaimResult per claim, or the single "No claims to verify" result
        """
        results = []
        for claim in claims:
            claim_rule = find_rule(claim)
            if claim_rule is None:
                logger.debug(f"No rule for claim {claim!r}")
                results.append(ClaimResult(claim, ClaimVerdict.PASS, UNKNOWN_CLAIM_REASON))
                continue
            verdict, reason = claim_rule.evaluate(context)
            results.append(ClaimResult(claim, verdict, reason))

        if not results:
            results.append(ClaimResult(
                NO_CLAIMS, ClaimVerdict.PASS, "Select claims or provide branding text to verify."
            ))
        return results


def evaluate_claims(
    nutrition_zone: str,
    ingredients_zone: str,
    claims: Sequence[str],
    branding_text: str = "",
) -> List[ClaimResult]:
    """
    Evaluate marketing claims using only the scoped zones.

    Args:
        nutrition_zone: Nutrition zone text
        ingredients_zone: Ingredients zone text
        claims: Declared claim names
        branding_text: Front-of-pack text; claims found in it are added

    Returns:
        List of ClaimResult in claim order
    """
    context = RuleContext(
        facts=extract_nutrients(nutrition_zone or ""),
        classification=classify_ingredients(ingredients_zone or ""),
        ingredients_text=ingredients_zone or "",
        branding_text=branding_text or "",
    )
    return ClaimEvaluator().evaluate(context, merge_claims(claims, branding_text))
