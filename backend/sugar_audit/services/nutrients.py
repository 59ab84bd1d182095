"""Nutrient value extraction from the Nutrition zone.

Two passes:
1. Prioritized pattern rules per nutrient, most specific first ("Total Sugars (g) 12.5")
   down to a bare catch-all ("sugar 12.5"). First match wins.
2. A position-based scan of every <label><number><unit> triplet that fills in
   nutrients the rules missed, first occurrence per nutrient.

OCR digit confusions (O for 0, l for 1, decimal comma) are normalized first.
The normalization is length-preserving so match offsets always point into the
original zone text, which is kept as evidence.
"""

import re
import logging
from enum import Enum
from functools import lru_cache
from typing import Dict, List, Optional, Tuple
from dataclasses import dataclass, field

from .rules import MatchRule, RuleMatch, first_match, rule
from ..config import get_settings

logger = logging.getLogger(__name__)


class PerUnit(str, Enum):
    """Reference quantity the nutrition values are stated for."""
    PER_100G = "100g"
    SERVING = "serving"
    PACK = "pack"


@dataclass
class NutrientFacts:
    """Nutrient values recovered from a label. Every value is optional."""
    sugar_per_100g: Optional[float] = None
    added_sugar_per_100g: Optional[float] = None
    polyols_per_100g: Optional[float] = None
    fat_per_100g: Optional[float] = None
    saturated_fat_per_100g: Optional[float] = None
    protein_per_100g: Optional[float] = None
    carbs_per_100g: Optional[float] = None
    fiber_per_100g: Optional[float] = None
    calories_per_100g: Optional[float] = None  # kcal
    sodium_per_100g: Optional[float] = None  # mg
    cholesterol_per_100g: Optional[float] = None  # mg
    phosphorus_per_100g: Optional[float] = None  # mg
    vitamin_c_per_100g: Optional[float] = None  # mg
    serving_size_g: Optional[float] = None
    per_unit: PerUnit = PerUnit.PER_100G
    # Field name -> literal zone text the value was read from
    evidence: Dict[str, str] = field(default_factory=dict)

    def get(self, name: str) -> Optional[float]:
        return getattr(self, name, None)

    def found_fields(self) -> List[str]:
        """Names of the nutrient fields that hold a value."""
        return [name for name in NUTRIENT_FIELDS if self.get(name) is not None]

    @property
    def unit_label(self) -> str:
        """Human-readable reference quantity, e.g. "per 100g"."""
        return {
            PerUnit.PER_100G: "per 100g",
            PerUnit.SERVING: "per serving",
            PerUnit.PACK: "per pack",
        }[self.per_unit]


# =============================================================================
# OCR NORMALIZATION
# =============================================================================

# A numeric token, possibly starting with a confusable letter followed by a digit ("O.5", "l2")
_NUMERIC_TOKEN = re.compile(r"(?<![A-Za-z])(?=[OoIl]?[.,]?\d)[\dOoIl]+(?:[.,][\dOoIl]+)?")
_CONFUSABLES = str.maketrans({"O": "0", "o": "0", "I": "1", "l": "1", ",": "."})
# "1,200mg": a comma followed by exactly three digits and then a unit groups thousands
_THOUSANDS = re.compile(
    r"(?<![\d.,])(\d{1,3}),(\d{3})(?=\s*(?:mg|gms?|gm|g|kj|kcal|ml)\b)",
    re.IGNORECASE,
)


def normalize_ocr_digits(text: str) -> str:
    """
    Fix OCR character confusions inside numbers: "O.5" -> "0.5", "2l" -> "21",
    "12,5" -> "12.5". A thousands separator before a unit is dropped and the
    freed character becomes a space: "1,200mg" -> "1200 mg". Output has
    exactly the same length as the input.
    """
    text = _THOUSANDS.sub(lambda m: m.group(1) + m.group(2) + " ", text)
    return _NUMERIC_TOKEN.sub(lambda m: m.group(0).translate(_CONFUSABLES), text)


def _to_unit(value: float, unit: Optional[str], target: str) -> Optional[float]:
    """Convert a parsed value into the field's unit. None means not a quantity."""
    if unit is None:
        return value
    unit = unit.lower()
    if unit == "%":
        return None
    if unit in ("g", "gm", "gms", "gram", "grams"):
        unit = "g"
    if unit == target:
        return value
    if unit == "g" and target == "mg":
        return round(value * 1000, 3)
    if unit == "mg" and target == "g":
        return round(value / 1000, 6)
    if unit == "kj" and target == "kcal":
        return round(value / 4.184, 1)
    return None


# =============================================================================
# PRIMARY PATTERN RULES
# =============================================================================

NUM = r"(\d+(?:\.\d+)?)"
GRAMS = r"\s*(?:grams?|gms?|g)\b"
SEP = r"\s*[:\-]?\s*"
PER_100G = r"\s*(?:per\s*100\s*g\s*)?"
MG_OR_G = r"\s*(mg|g)\b"
NOT_ADDED = r"(?<!added\s)(?<!added\s\s)(?<!\w)"


@dataclass(frozen=True)
class NutrientRules:
    """Target field, its unit, and its rules in priority order."""
    name: str
    unit: str
    rules: Tuple[MatchRule, ...]


NUTRIENT_RULES: Tuple[NutrientRules, ...] = (
    NutrientRules("sugar_per_100g", "g", (
        rule("total_sugars_g_header", r"total\s*sugars?\s*\(\s*g\s*\)" + SEP + NUM),
        rule("total_sugars", r"total\s*sugars?" + SEP + NUM + GRAMS),
        rule("sugars_per_100g", NOT_ADDED + r"sugars?(?!\s*alcohol)" + PER_100G + SEP + NUM + GRAMS),
        rule("sugar_misread", r"(?<!\w)(?:5ugar|sugr|suger)s?" + SEP + NUM + GRAMS),
        rule("grams_of_sugar", NUM + r"\s*g\s+of\s+sugars?\b(?!\s*alcohol)"),
        rule("sugars_g_header", NOT_ADDED + r"sugars?\s*\(\s*g\s*\)" + SEP + NUM),
        rule("sugars_bare", NOT_ADDED + r"sugars?(?!\s*alcohol)" + SEP + NUM),
    )),
    NutrientRules("added_sugar_per_100g", "g", (
        rule("added_sugars_g_header", r"added\s*sugars?\s*\(\s*g\s*\)" + SEP + NUM),
        rule("added_sugars", r"added\s*sugars?" + SEP + NUM + GRAMS),
        rule("grams_added_sugars", NUM + r"\s*g\s+(?:of\s+)?added\s+sugars?\b"),
        rule("added_sugars_bare", r"added\s*sugars?" + SEP + NUM),
    )),
    NutrientRules("polyols_per_100g", "g", (
        rule("sugar_alcohol_polyols", r"sugar\s*alcohols?\s*\(?\s*polyols?\s*\)?" + SEP + NUM + GRAMS),
        rule("polyols_g_header", r"polyols?\s*\(\s*g\s*\)" + SEP + NUM),
        rule("sugar_alcohol", r"sugar\s*alcohols?" + SEP + NUM + GRAMS),
        rule("polyols", r"polyols?" + SEP + NUM + GRAMS),
        rule("polyols_bare", r"polyols?" + SEP + NUM),
    )),
    NutrientRules("fat_per_100g", "g", (
        rule("total_fat_g_header", r"total\s*fats?\s*\(\s*g\s*\)" + SEP + NUM),
        rule("total_fat", r"total\s*fats?" + SEP + NUM + GRAMS),
        rule("fat_per_100g", r"(?<!saturated\s)(?<!trans\s)(?<!\w)fats?" + PER_100G + SEP + NUM + GRAMS),
        rule("grams_of_fat", NUM + r"\s*g\s+of\s+fat\b"),
        rule("fat_bare", r"(?<!saturated\s)(?<!trans\s)(?<!\w)fats?" + SEP + NUM),
    )),
    NutrientRules("saturated_fat_per_100g", "g", (
        rule("saturated_fat", r"(?<!\w)saturated\s*fat(?:ty\s*acids?|s)?\s*(?:\(\s*g\s*\))?" + SEP + NUM + GRAMS),
        rule("saturated_fat_bare", r"(?<!\w)saturated\s*fat(?:ty\s*acids?|s)?\s*(?:\(\s*g\s*\))?" + SEP + NUM),
    )),
    NutrientRules("protein_per_100g", "g", (
        rule("protein_g_header", r"prot(?:ein|ien)s?\s*\(\s*g\s*\)" + SEP + NUM),
        rule("protein", r"prot(?:ein|ien)s?" + PER_100G + SEP + NUM + GRAMS),
        rule("grams_of_protein", NUM + r"\s*g\s+(?:of\s+)?protein\b"),
        rule("protein_bare", r"prot(?:ein|ien)s?" + SEP + NUM),
    )),
    NutrientRules("carbs_per_100g", "g", (
        rule("total_carbs_g_header", r"total\s*carb(?:ohydrate)?s?\s*\(\s*g\s*\)" + SEP + NUM),
        rule("carbs", r"(?<!net\s)(?<!\w)(?:total\s*)?carb(?:ohydrate)?s?" + PER_100G + SEP + NUM + GRAMS),
        rule("carbs_g_header", r"(?<!net\s)(?<!\w)carb(?:ohydrate)?s?\s*\(\s*g\s*\)" + SEP + NUM),
        rule("carbs_bare", r"(?<!net\s)(?<!\w)carb(?:ohydrate)?s?" + SEP + NUM),
    )),
    NutrientRules("fiber_per_100g", "g", (
        rule("fiber", r"(?:dietary\s*)?fib(?:er|re)s?\s*(?:\(\s*g\s*\))?" + SEP + NUM + GRAMS),
        rule("fiber_bare", r"(?:dietary\s*)?fib(?:er|re)s?\s*(?:\(\s*g\s*\))?" + SEP + NUM),
    )),
    NutrientRules("calories_per_100g", "kcal", (
        rule("energy_kcal_header", r"(?:energy|calories?)\s*\(\s*kcal\s*\)" + SEP + NUM, unit="kcal"),
        rule("energy_kcal", r"(?:energy|calories?)" + PER_100G + SEP + NUM + r"\s*kcal\b", unit="kcal"),
        rule("energy_kj_then_kcal",
             r"(?:energy|calories?)" + SEP + r"\d+(?:\.\d+)?\s*kj\s*[/|(,]?\s*" + NUM + r"\s*kcal\b",
             unit="kcal"),
        rule("any_kcal", NUM + r"\s*kcal\b", unit="kcal"),
        rule("energy_kj", r"energy" + PER_100G + SEP + NUM + r"\s*kj\b", unit="kj"),
        rule("calories_bare", r"calories?" + SEP + NUM, unit="kcal"),
        rule("energy_bare", r"energy" + SEP + NUM, unit="kcal"),
    )),
    NutrientRules("cholesterol_per_100g", "mg", (
        rule("cholesterol", r"cholesterol\s*(?:\(\s*mg\s*\))?" + PER_100G + SEP + NUM + MG_OR_G, unit_group=2),
        rule("cholesterol_bare", r"cholesterol\s*(?:\(\s*mg\s*\))?" + SEP + NUM, unit="mg"),
    )),
    NutrientRules("sodium_per_100g", "mg", (
        rule("sodium", r"sodium\s*(?:\(\s*mg\s*\))?" + PER_100G + SEP + NUM + MG_OR_G, unit_group=2),
        rule("sodium_bare", r"sodium\s*(?:\(\s*mg\s*\))?" + SEP + NUM, unit="mg"),
    )),
    NutrientRules("phosphorus_per_100g", "mg", (
        rule("phosphorus", r"phosphorus\s*(?:\(\s*mg\s*\))?" + PER_100G + SEP + NUM + MG_OR_G, unit_group=2),
    )),
    NutrientRules("vitamin_c_per_100g", "mg", (
        rule("vitamin_c", r"vitamin\s*c\b\s*(?:\(\s*mg\s*\))?" + PER_100G + SEP + NUM + MG_OR_G, unit_group=2),
    )),
    NutrientRules("serving_size_g", "g", (
        rule("serving_size", r"serving\s*size" + SEP + r"(?:\d+\s*[A-Za-z]+\s*)?\(?\s*" + NUM + GRAMS),
        rule("per_serving_parens", r"per\s*serving\s*\(\s*" + NUM + GRAMS),
        rule("serving_parens", r"serving\s*\(\s*" + NUM + GRAMS),
        rule("grams_per_serving", NUM + r"\s*g\s*per\s*serving"),
    )),
)

NUTRIENT_FIELDS = tuple(nutrient.name for nutrient in NUTRIENT_RULES)
_FIELD_UNITS = {nutrient.name: nutrient.unit for nutrient in NUTRIENT_RULES}


# =============================================================================
# SECONDARY TRIPLET SCAN
# =============================================================================

# Label keywords mapped to fields; None marks rows that are recognised but not stored.
# When several keywords match a label, the one closest to the number wins;
# ties go to the earlier (more specific) entry.
LABEL_KEYWORDS: Tuple[Tuple[re.Pattern, Optional[str]], ...] = tuple(
    (re.compile(pattern, re.IGNORECASE), target) for pattern, target in (
        (r"\bsugar\s*alcohols?\b", "polyols_per_100g"),
        (r"\bpolyols?\b", "polyols_per_100g"),
        (r"\btotal\s*carbohydrates?\b", "carbs_per_100g"),
        (r"\btotal\s*sugars?\b", "sugar_per_100g"),
        (r"\badded\s*sugars?\b", "added_sugar_per_100g"),
        (r"\bdietary\s*fib(?:er|re)\b", "fiber_per_100g"),
        (r"\btotal\s*fat\b", "fat_per_100g"),
        (r"\b(?:mono|poly)?\s*unsaturated\s*fat\b", None),
        (r"\bsaturated\s*fat\b", "saturated_fat_per_100g"),
        (r"\btrans\s*fat\b", None),
        (r"\bnet\s*carb(?:ohydrate)?s?\b", None),
        (r"\bvitamin\s*c\b", "vitamin_c_per_100g"),
        (r"\benergy\b", "calories_per_100g"),
        (r"\bcalories?\b", "calories_per_100g"),
        (r"\bprotein\b", "protein_per_100g"),
        (r"\bcholesterol\b", "cholesterol_per_100g"),
        (r"\bsodium\b|\bsod[iu]?um\b|\bdium\b", "sodium_per_100g"),
        (r"\bphos\s*phorus\b", "phosphorus_per_100g"),
        (r"\bcarbohydrates?\b", "carbs_per_100g"),
        (r"\bfat\b", "fat_per_100g"),
        (r"\bsugars?\b", "sugar_per_100g"),
        (r"\bfib(?:er|re)\b", "fiber_per_100g"),
        (r"\bcarbs?\b", "carbs_per_100g"),
    )
)

_VALUE_WITH_UNIT = re.compile(
    r"(?<![\d.])(\d+(?:\.\d+)?)(?![\d.])\s*(kcal|kj|mg|grams?|gms|gm|g|%)?(?![A-Za-z])",
    re.IGNORECASE,
)
_LABEL_UNIT = re.compile(r"\(\s*(kcal|kj|mg|g)\s*\)", re.IGNORECASE)
_SUGAR_DISCLAIMER = re.compile(r"source\s+of\s+sugar|significant\s+source", re.IGNORECASE)
_ENERGY_LABEL = re.compile(r"\b(?:calories?|energy)\b", re.IGNORECASE)
_PERCENT_AFTER = re.compile(r"\s*%")


def match_nutrient_label(label: str) -> Tuple[bool, Optional[str]]:
    """
    Map free label text to a nutrient field.

    Returns:
        (recognised, field). field is None for recognised rows that are not stored.
    """
    best: Optional[Tuple[int, int, Optional[str]]] = None
    for priority, (pattern, target) in enumerate(LABEL_KEYWORDS):
        for match in pattern.finditer(label):
            candidate = (match.end(), -priority, target)
            if best is None or candidate[:2] > best[:2]:
                best = candidate
    if best is None:
        return False, None
    return True, best[2]


# =============================================================================
# EXTRACTOR
# =============================================================================

class NutrientExtractor:
    """Extracts NutrientFacts from a Nutrition zone."""

    def __init__(self):
        self.settings = get_settings()

    def extract(self, zone: str) -> NutrientFacts:
        """
        Extract nutrient values from zone text.

        Args:
            zone: Nutrition zone text (may be empty)

        Returns:
            NutrientFacts with whatever could be recovered
        """
        facts = NutrientFacts()
        if not zone or not zone.strip():
            return facts

        normalized = normalize_ocr_digits(zone)

        for nutrient in NUTRIENT_RULES:
            match = first_match(nutrient.rules, normalized)
            if match is None:
                continue
            value = self._value_from_match(match, nutrient.unit)
            if value is None or _PERCENT_AFTER.match(normalized, match.end):
                logger.debug(f"Rejected {nutrient.name} from rule {match.rule_name}: {match.value_text!r}")
                continue
            setattr(facts, nutrient.name, value)
            facts.evidence[nutrient.name] = zone[match.start:match.end]

        self._fill_from_triplets(zone, normalized, facts)
        facts.per_unit = detect_per_unit(normalized)
        return facts

    def _value_from_match(self, match: RuleMatch, target_unit: str) -> Optional[float]:
        try:
            value = float(match.value_text)
        except ValueError:
            return None
        return _to_unit(value, match.unit, target_unit)

    def _fill_from_triplets(self, zone: str, normalized: str, facts: NutrientFacts) -> None:
        """Fill missing fields from <label><number><unit> triplets, first occurrence wins."""
        flat = normalized.replace("\r", " ").replace("\n", " ")
        ceiling = self.settings.spurious_value_ceiling
        seen = set(facts.found_fields())
        label_start = 0

        for match in _VALUE_WITH_UNIT.finditer(flat):
            label = flat[label_start:match.start()]
            previous_start = label_start
            label_start = match.end()

            if _SUGAR_DISCLAIMER.search(flat[max(0, match.start() - 25):match.start()]):
                continue

            unit = match.group(2)
            if unit is None:
                unit_in_label = _LABEL_UNIT.search(label)
                if unit_in_label:
                    unit = unit_in_label.group(1)
                elif _ENERGY_LABEL.search(label):
                    unit = "kcal"
                else:
                    continue

            recognised, target = match_nutrient_label(label)
            if not recognised or target is None or target in seen:
                continue

            value = float(match.group(1))
            if value >= ceiling:
                logger.debug(f"Rejected spurious {target} value {value} (>= {ceiling})")
                continue
            converted = _to_unit(value, unit, _FIELD_UNITS[target])
            if converted is None:
                continue

            setattr(facts, target, converted)
            facts.evidence[target] = zone[previous_start:match.end()].strip()
            seen.add(target)


def detect_per_unit(text: str) -> PerUnit:
    """Infer the reference quantity from canonical phrases; defaults to per 100g."""
    t = re.sub(r"\s+", " ", text.lower())
    if re.search(r"amount per 100|per 100 ?(?:g|gm|gms|grams?|ml)\b", t):
        return PerUnit.PER_100G
    if "per serving" in t or "serving size" in t:
        return PerUnit.SERVING
    if re.search(r"per pack(?:et)?\b", t):
        return PerUnit.PACK
    return PerUnit.PER_100G


@lru_cache
def _default_extractor() -> NutrientExtractor:
    return NutrientExtractor()


def extract_nutrients(zone: str) -> NutrientFacts:
    """
    Standalone function to extract nutrients from a Nutrition zone.

    Args:
        zone: Nutrition zone text

    Returns:
        NutrientFacts (empty when nothing is recognised)
    """
    return _default_extractor().extract(zone)
