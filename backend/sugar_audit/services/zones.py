"""Zone scoping: isolate the Nutrition table and the Ingredients list from label text.

Marketing copy, disclaimers and packaging footers are left out so that
"No added sugar!" on the front of a pack never reaches the classifiers.
Anchors are matched with regexes for the known spellings plus a rapidfuzz
fallback for OCR-mangled headers.
"""

import re
import logging
from functools import lru_cache
from typing import List, Optional, Sequence, Union
from dataclasses import dataclass

from rapidfuzz import fuzz

from ..config import get_settings

logger = logging.getLogger(__name__)

NUTRITION = "nutrition"
INGREDIENTS = "ingredients"


@dataclass(frozen=True)
class LabelZones:
    """The two scoped regions of a label. Either may be empty."""
    nutrition_block: str = ""
    ingredients_block: str = ""

    @property
    def has_nutrition(self) -> bool:
        return bool(self.nutrition_block)

    @property
    def has_ingredients(self) -> bool:
        return bool(self.ingredients_block)

    @property
    def is_empty(self) -> bool:
        return not (self.nutrition_block or self.ingredients_block)


# =============================================================================
# ANCHORS AND STOP CONDITIONS
# =============================================================================

NUTRITION_ANCHORS = [
    re.compile(p, re.IGNORECASE) for p in (
        r"\bnutrition(?:al)?\s*(?:facts?|information|info|values?|label|declaration)\b",
        # OCR typos seen on real labels
        r"\b(?:nutrition|nutritional|nutrtional|nutritonal|nutritinal)\s*"
        r"(?:infromation|informaton|infomation|informtion|information)\b",
        r"\bnutritive\s+values?\b",
        r"^\W*amount\s+per\b",
        r"\bamount\s+per\s+\d+\s*(?:g|gm)\b",
        r"\bper\s*100\s*(?:g|gm|gms|ml)\b",
        r"^\W*nutrition(?:al)?\s*[:\-]?\s*$",
        r"^\W*typical\s+values?\b",
    )
]

NUTRITION_CANONICAL = (
    "nutrition facts",
    "nutrition information",
    "nutritional information",
    "nutritional facts",
    "nutritional value",
    "nutrition values",
)

INGREDIENTS_START = re.compile(
    r"^\W*(?:ingredients?|ingridients?|ingrediants?|ingrediens|ingredlents|lngredients?|ingedients)\b",
    re.IGNORECASE,
)
INGREDIENTS_INLINE = re.compile(r"\bingredients?\s*[:\-]", re.IGNORECASE)
NOT_INGREDIENTS = re.compile(r"^\W*(?:total|added)\s+sugars?\b", re.IGNORECASE)

# OCR often merges two sections onto one line; split before a strong header
SPLIT_BEFORE_HEADER = re.compile(
    r"(?<=\S)\s+(?=ingredients?\s*[:\-]|nutrition(?:al)?\s+(?:facts|information)\b)",
    re.IGNORECASE,
)

_FOOTER = (
    r"batch\s*(?:no|number|#)|b\.\s*no\b|m\.?\s*r\.?\s*p\b|mfg\b|mfd\b|"
    r"manufactured\s+(?:by|for|on)|marketed\s+by|packed\s+(?:by|on)|"
    r"best\s+before|use\s+by|expiry|exp\.?\s*date|fssai|lic(?:ence|ense)\s*no|customer\s+care"
)
NUTRITION_STOP = re.compile(r"^\W*(?:" + _FOOTER + r")", re.IGNORECASE)
INGREDIENTS_STOP = re.compile(
    r"^\W*(?:allerg(?:en|y)|contains\s+allergens|storage(?:\s+instructions?)?\b|store\s+in\b|"
    + _FOOTER + r")",
    re.IGNORECASE,
)

JUNK_LINE = re.compile(r"^[\W_]*$")
_LEADING_WORDS = re.compile(r"[a-z]+")


# =============================================================================
# SCOPER
# =============================================================================

class ZoneScoper:
    """Finds the Nutrition and Ingredients zones in raw OCR lines."""

    def __init__(self):
        self.settings = get_settings()

    def scope(self, raw_text: Union[str, Sequence[str]]) -> LabelZones:
        """
        Scope raw label text into zones.

        Args:
            raw_text: Full OCR text, as one string or a sequence of lines

        Returns:
            LabelZones; a zone is empty when its anchor was not found
        """
        lines = prepare_lines(raw_text)
        if not lines:
            return LabelZones()

        kinds = [self.anchor_kind(line) for line in lines]
        nutrition_start = _first_index(kinds, NUTRITION)
        ingredients_start = _first_index(kinds, INGREDIENTS)

        zones = LabelZones(
            nutrition_block=_collect(lines, kinds, nutrition_start, INGREDIENTS, NUTRITION_STOP),
            ingredients_block=_collect(lines, kinds, ingredients_start, NUTRITION, INGREDIENTS_STOP),
        )
        logger.debug(
            f"Zones: nutrition anchor={nutrition_start}, ingredients anchor={ingredients_start}"
        )
        return zones

    def anchor_kind(self, line: str) -> Optional[str]:
        """Classify a line as a Nutrition anchor, an Ingredients anchor, or neither."""
        if not NOT_INGREDIENTS.match(line):
            if INGREDIENTS_START.match(line) or self._fuzzy_ingredients(line):
                return INGREDIENTS
        if any(p.search(line) for p in NUTRITION_ANCHORS) or self._fuzzy_nutrition(line):
            return NUTRITION
        if INGREDIENTS_INLINE.search(line) and not NOT_INGREDIENTS.match(line):
            return INGREDIENTS
        return None

    def _fuzzy_ingredients(self, line: str) -> bool:
        words = _LEADING_WORDS.findall(line.lower())
        return bool(words) and is_ingredients_word(words[0], self.settings.anchor_fuzzy_threshold)

    def _fuzzy_nutrition(self, line: str) -> bool:
        words = _LEADING_WORDS.findall(line.lower())
        if len(words) < 2:
            return False
        head = f"{words[0]} {words[1]}"
        if len(head) < 12:
            return False
        score = max(fuzz.ratio(head, canonical) for canonical in NUTRITION_CANONICAL)
        return score >= self.settings.anchor_fuzzy_threshold


def prepare_lines(raw_text: Union[str, Sequence[str]]) -> List[str]:
    """Split into stripped lines, separate merged section headers, drop junk-only lines."""
    if raw_text is None:
        return []
    if not isinstance(raw_text, str):
        raw_text = "\n".join(raw_text)
    lines = []
    for raw_line in re.split(r"\r?\n", raw_text):
        for piece in SPLIT_BEFORE_HEADER.split(raw_line.strip()):
            piece = piece.strip()
            if piece and not JUNK_LINE.match(piece):
                lines.append(piece)
    return lines


def is_ingredients_word(word: str, threshold: float) -> bool:
    """Fuzzy test for an OCR-mangled "ingredients" header word."""
    if len(word) < 8:
        return False
    word = word.lower()
    score = max(fuzz.ratio(word, "ingredients"), fuzz.ratio(word, "ingredient"))
    return score >= threshold


_FIRST_WORD = re.compile(r"^[^A-Za-z]*([A-Za-z]+)")
_HEADER_TAIL = re.compile(r"\s*[:\-]?\s*")


def ingredients_header_end(line: str, threshold: Optional[float] = None) -> Optional[int]:
    """
    Offset just past the ingredients header on a line, or None.

    A header either starts the line (known spellings or a fuzzy match on the
    first word) or appears mid-line followed by a colon or dash. A bare
    "ingredients" inside a sentence is not a header.
    """
    if NOT_INGREDIENTS.match(line):
        return None
    if threshold is None:
        threshold = get_settings().anchor_fuzzy_threshold

    start = INGREDIENTS_START.match(line)
    if start is None:
        first = _FIRST_WORD.match(line)
        if first and is_ingredients_word(first.group(1), threshold):
            start = first
    if start is not None:
        return _HEADER_TAIL.match(line, start.end()).end()

    inline = INGREDIENTS_INLINE.search(line)
    if inline:
        return _HEADER_TAIL.match(line, inline.end()).end()
    return None


def _first_index(kinds: List[Optional[str]], kind: str) -> Optional[int]:
    for i, k in enumerate(kinds):
        if k == kind:
            return i
    return None


def _collect(
    lines: List[str],
    kinds: List[Optional[str]],
    start: Optional[int],
    stop_kind: str,
    stop_pattern: re.Pattern,
) -> str:
    """Accumulate lines from an anchor until the other anchor or a stop pattern."""
    if start is None:
        return ""
    block = [lines[start]]
    for i in range(start + 1, len(lines)):
        if kinds[i] == stop_kind or stop_pattern.match(lines[i]):
            break
        block.append(lines[i])
    return "\n".join(block)


@lru_cache
def _default_scoper() -> ZoneScoper:
    return ZoneScoper()


def scope_zones(raw_text: Union[str, Sequence[str]]) -> LabelZones:
    """Scope raw label text into its Nutrition and Ingredients zones. Never raises."""
    return _default_scoper().scope(raw_text)
