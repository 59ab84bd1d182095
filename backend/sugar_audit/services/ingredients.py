"""
Ingredient tokenization and classification.

Splits the Ingredients zone into tokens and matches them against the sugar
alias, fat identifier and sweetener dictionaries. Tokens that a label uses to
deny an ingredient ("No added sugar", "Free from jaggery, honey") are dropped
before matching, as are nutrition-table rows that OCR leaked into the zone.
"""

import re
import logging
from functools import lru_cache
from typing import Iterable, List, Optional, Tuple
from dataclasses import dataclass, field

from ..config import get_settings
from ..knowledge import (
    SUGAR_ALIASES,
    FAT_IDENTIFIERS,
    SWEETENER_TABLE,
    SWEETENER_INS_NUMBERS,
    SweetenerInfo,
)
from .rules import word_pattern
from .zones import ingredients_header_end

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SugarMatch:
    """A sugar alias and the label text that triggered it."""
    alias: str
    verbatim: str


@dataclass(frozen=True)
class SweetenerMatch:
    """A sweetener or polyol and the label text that triggered it."""
    verbatim: str
    info: SweetenerInfo


@dataclass
class ClassificationResult:
    """Everything the classifier found in an Ingredients zone."""
    sugar_aliases_found: List[str] = field(default_factory=list)
    sugar_matches: List[SugarMatch] = field(default_factory=list)
    sweetener_matches: List[SweetenerMatch] = field(default_factory=list)
    fat_identifiers_found: List[str] = field(default_factory=list)
    raw_ingredients: List[str] = field(default_factory=list)

    @property
    def has_sugar(self) -> bool:
        return bool(self.sugar_matches)


# =============================================================================
# DICTIONARY PATTERNS (compiled once)
# =============================================================================

_SUGAR_PATTERNS: Tuple[Tuple[str, re.Pattern], ...] = tuple(
    (alias, word_pattern(alias)) for alias in SUGAR_ALIASES
)
_FAT_PATTERNS: Tuple[Tuple[str, re.Pattern], ...] = tuple(
    (term, word_pattern(term)) for term in FAT_IDENTIFIERS
)
_SWEETENER_PATTERNS: Tuple[Tuple[SweetenerInfo, Tuple[re.Pattern, ...]], ...] = tuple(
    (info, tuple(word_pattern(alias) for alias in info.aliases)) for info in SWEETENER_TABLE
)


def _alternation(terms: Iterable[str]) -> str:
    return "|".join(re.escape(t) for t in sorted(set(terms), key=len, reverse=True))


_ANY_SUGAR = _alternation(SUGAR_ALIASES)
_ANY_SWEETENER = _alternation(a for info in SWEETENER_TABLE for a in info.aliases)

_SUGAR_TERM = re.compile(r"\b(?:" + _ANY_SUGAR + r")\b", re.IGNORECASE)
_SWEETENER_TERM = re.compile(r"\b(?:" + _ANY_SWEETENER + r")\b", re.IGNORECASE)


# =============================================================================
# SECTION, PARENTHESES AND SPLITTING
# =============================================================================

_ADDITIVE_CODE = re.compile(r"\bins\b|\bins\s*\d{3}|\be\s?\d{3}[a-z]?\b|\b\d{3}\b", re.IGNORECASE)
_SWEETENER_LINE = re.compile(r"\bsweeteners?\b", re.IGNORECASE)
_INS_NUMBER = re.compile(r"\b(?:e|ins\s*)?(\d{3})\b", re.IGNORECASE)

_OPEN = "(["
_CLOSE = ")]"


def extract_section(zone: str, fuzzy_threshold: Optional[float] = None) -> str:
    """Text after the first ingredients header, or the whole zone when there is none."""
    lines = re.split(r"\r?\n", zone)
    for i, line in enumerate(lines):
        line = line.strip()
        end = ingredients_header_end(line, fuzzy_threshold)
        if end is not None:
            return "\n".join([line[end:]] + lines[i + 1:]).strip()
    return zone


def should_preserve_parenthetical(content: str) -> bool:
    """Parentheses survive only when they name an additive code, a sugar or a sweetener."""
    return bool(
        _ADDITIVE_CODE.search(content)
        or _SUGAR_TERM.search(content)
        or _SWEETENER_TERM.search(content)
    )


def strip_parentheticals(text: str) -> str:
    """Remove top-level (...) and [...] groups unless should_preserve_parenthetical."""
    out = []
    i = 0
    while i < len(text):
        ch = text[i]
        if ch in _OPEN:
            end = _closing_index(text, i)
            if end is None:
                out.append(text[i:])
                break
            group = text[i:end + 1]
            if should_preserve_parenthetical(group[1:-1]):
                out.append(group)
            i = end + 1
            continue
        out.append(ch)
        i += 1
    return re.sub(r"\s{2,}", " ", "".join(out)).strip()


def _closing_index(text: str, start: int) -> Optional[int]:
    depth = 0
    for i in range(start, len(text)):
        if text[i] in _OPEN:
            depth += 1
        elif text[i] in _CLOSE:
            depth -= 1
            if depth == 0:
                return i
    return None


def split_top_level(line: str) -> List[str]:
    """Split on commas and semicolons that are not inside brackets."""
    parts = []
    depth = 0
    current = []
    for ch in line:
        if ch in _OPEN:
            depth += 1
        elif ch in _CLOSE and depth > 0:
            depth -= 1
        if ch in ",;" and depth == 0:
            parts.append("".join(current))
            current = []
        else:
            current.append(ch)
    parts.append("".join(current))
    return parts


def sweetener_ins_tokens(line: str) -> List[str]:
    """Known sweetener INS numbers on a "Sweetener(s) (960, 955)" line."""
    if not _SWEETENER_LINE.search(line):
        return []
    found = []
    for match in _INS_NUMBER.finditer(line):
        number = match.group(1)
        if number in SWEETENER_INS_NUMBERS and number not in found:
            found.append(number)
    return found


# =============================================================================
# NEGATION AND NOISE FILTERS
# =============================================================================

_SUGARISH = r"(?:sugars?|sucrose|glucose|fructose|dextrose|maltodextrin|malt|honey|jaggery|mishri)"

NEGATION_PHRASES = [
    re.compile(p, re.IGNORECASE) for p in (
        r"^\W*(?:contains\s+)?(?:no|without|zero)\s",
        r"^\W*(?:free\s+(?:from|of)|fromall)\b",
        r"\bcontains\s+no\s+(?:added\s+)?" + _SUGARISH,
        r"\bno\s+added\s+" + _SUGARISH + r"\b",
        r"\b(?:" + _ANY_SUGAR + r")\s*[-–]?\s*free\b(?!\s+(?:of|from)\b)",
        r"\bfree\s+(?:of|from)\s+(?:added\s+)?(?:" + _ANY_SUGAR + r")\b",
        r"\bfree\s+from\s*all\s+forms\s+of\s+sugar",
        r"\bfree\s+fromall\b",
        r"\b(?:not|ot|n0t|no)\s+(?:a\s+)?significant\s+(?:source\s+of\s+)?(?:sugars?|sucrose)\b",
        r"\binsignificant\s+source\s+of\s+(?:sugars?|sucrose)\b",
        r"^\W*(?:urce|ource|source|significant\s+source)\s+of\s+(?:sugars?|sucrose)\W*$",
        r"\bnegligible\s+(?:source\s+of\s+)?(?:sugars?|sucrose)\b",
        r"\btrace\s+(?:amounts?\s+of\s+)?(?:sugars?|sucrose)\b",
        r"^\W*(?:honey|jaggery|mishri)\s+and\s*(?:mishri|jaggery|honey|sugar)?\W*$",
    )
]

# "source of sugar." tail of a truncated disclaimer, only on short fragments
_DISCLAIMER_TAIL = re.compile(r"\b(?:urce|ource|source)\s+of\s+(?:sugars?|sucrose)\s*\.?\s*$", re.IGNORECASE)

NEGATION_TRIGGERS = re.compile(
    r"\bfree\s+from\b|\bfree\s+of\b|\bfromall\b|"
    r"\b(?:no|without|zero)\s+(?:added\s+)?(?:" + _ANY_SUGAR + r")\b",
    re.IGNORECASE,
)

CONTINUATION_FRAGMENT = re.compile(
    r"\b(?:honey|jaggery|mishri|sugar)\.\s*(?:these|this|our)\s+"
    r"(?:candies|products?|snacks|ingredients|food|benefits)\b",
    re.IGNORECASE,
)

NUTRITION_ROWS = [
    re.compile(p, re.IGNORECASE) for p in (
        r"^\W*amount\s+per\s+\d|per\s*100\s*g|per\s*serving",
        r"^\W*(?:total|added)\s+sugars?\s+[\d.,]|\bsugars?\s+[\d.,].*g\b",
        r"^\W*(?:total|added|natural)\s+sugars?\s*[-–—]?\s*$",
        r"^\W*polyols?\s*(?:\(\s*g\s*\))?\s*[-–—:]?\s*[\d.,]",
        r"\bsugar\s+alcohols?\b.*\d",
        r"^\W*net\s*carbs?\s*[-–—:]?\s*[\d.,]",
        r"^\W*dietary\s*fib(?:er|re)\s*[-–—:]?\s*[\d.,]",
        r"^\W*(?:total\s+)?fat\s+[\d.,]|\bprotein\s+[\d.,]|\bcarb(?:ohydrate)?s?\s+[\d.,]",
        r"\bcalories?\s+[\d.,]|\benergy\s+[\d.,]|\bsodium\s+[\d.,]|\bcholesterol\s+[\d.,]",
        r"^\W*\d+[.,]?\d*\s*g\s*(?:of\s+)?(?:sugar|fat|protein)",
    )
]

_SUGAR_ALCOHOL = re.compile(r"\bsugar\s+alcohols?\b|\bpolyols?\b", re.IGNORECASE)


def is_negation_phrase(text: str) -> bool:
    """True when text denies an ingredient rather than listing it."""
    t = text.strip()
    if any(p.search(t) for p in NEGATION_PHRASES):
        return True
    return len(t) < 80 and bool(_DISCLAIMER_TAIL.search(t))


_LEADING_NEGATION = re.compile(
    r"^\W*(?:contains\s+)?(?:no|without|zero|free\s+(?:from|of)|fromall|(?:n|n0)?ot\s+a\s+significant)\b",
    re.IGNORECASE,
)


def is_negation_line(line: str) -> bool:
    """A whole line that only denies ingredients, e.g. "No added sugar or preservatives"."""
    if _LEADING_NEGATION.match(line):
        return True
    return len(split_top_level(line)) == 1 and is_negation_phrase(line)


def is_nutrition_row(text: str) -> bool:
    return any(p.search(text.strip()) for p in NUTRITION_ROWS)


def is_sugar_alcohol_phrase(text: str) -> bool:
    """Sugar alcohols and polyols are substitutes, not sugar."""
    return bool(_SUGAR_ALCOHOL.search(text))


def is_continuation_fragment(text: str) -> bool:
    return bool(CONTINUATION_FRAGMENT.search(text))


def has_sugar_term(text: str) -> bool:
    return bool(_SUGAR_TERM.search(text))


# =============================================================================
# CLASSIFIER
# =============================================================================

class IngredientClassifier:
    """Tokenizes an Ingredients zone and classifies the tokens."""

    def __init__(self):
        self.settings = get_settings()

    def classify(self, zone: str) -> ClassificationResult:
        """
        Classify the ingredients in a zone.

        Args:
            zone: Ingredients zone text (may be empty)

        Returns:
            ClassificationResult; empty when no ingredients are found
        """
        if not zone or not zone.strip():
            return ClassificationResult()

        tokens = self.tokenize(zone)
        matchable = [
            t for t in tokens
            if not (is_nutrition_row(t) or is_negation_phrase(t) or is_sugar_alcohol_phrase(t))
        ]

        sugar_matches = self._sugar_matches(matchable)
        aliases = []
        for match in sugar_matches:
            if match.alias not in aliases:
                aliases.append(match.alias)

        return ClassificationResult(
            sugar_aliases_found=aliases,
            sugar_matches=sugar_matches,
            sweetener_matches=self._sweetener_matches(tokens),
            fat_identifiers_found=self._fat_identifiers(matchable),
            raw_ingredients=tokens,
        )

    def tokenize(self, zone: str) -> List[str]:
        """
        Split a zone into ingredient tokens, dropping negated ones.

        The negation window is the tail of the previous line plus the tokens
        already read on the current line. It starts empty after the header.
        """
        window = self.settings.negation_window_chars
        section = extract_section(zone, self.settings.anchor_fuzzy_threshold)
        lines = [line.strip() for line in re.split(r"\r?\n", section) if line.strip()]

        tokens: List[str] = []
        previous_line = ""
        for line in lines:
            if is_negation_line(line):
                logger.debug(f"Skipping negation line: {line!r}")
                previous_line = line
                continue

            chunks = [strip_parentheticals(part) for part in split_top_level(line)]
            line_so_far = ""
            for chunk in chunks:
                if len(chunk) <= 1:
                    continue
                context = (previous_line[-window:] + " " + line_so_far).strip()[-window:]
                if is_continuation_fragment(chunk):
                    logger.debug(f"Skipping continuation fragment: {chunk!r}")
                elif is_negation_phrase(chunk):
                    logger.debug(f"Skipping negated token: {chunk!r}")
                elif has_sugar_term(chunk) and NEGATION_TRIGGERS.search(context):
                    logger.debug(f"Skipping {chunk!r}, negated by context {context!r}")
                else:
                    tokens.append(chunk)
                line_so_far += (", " if line_so_far else "") + chunk

            tokens.extend(sweetener_ins_tokens(line))
            previous_line = line

        return tokens

    def _sugar_matches(self, tokens: List[str]) -> List[SugarMatch]:
        seen = set()
        matches = []
        for token in tokens:
            for alias, pattern in _SUGAR_PATTERNS:
                if pattern.search(token):
                    match = SugarMatch(alias=alias, verbatim=token.strip())
                    if match not in seen:
                        seen.add(match)
                        matches.append(match)
        return matches

    def _fat_identifiers(self, tokens: List[str]) -> List[str]:
        found = []
        for token in tokens:
            for term, pattern in _FAT_PATTERNS:
                if term not in found and pattern.search(token):
                    found.append(term)
        return found

    def _sweetener_matches(self, tokens: List[str]) -> List[SweetenerMatch]:
        seen = set()
        matches = []
        for token in tokens:
            if is_nutrition_row(token):
                continue
            for info, patterns in _SWEETENER_PATTERNS:
                if info.name in seen:
                    continue
                if any(p.search(token) for p in patterns):
                    seen.add(info.name)
                    matches.append(SweetenerMatch(verbatim=token.strip(), info=info))
        return matches


@lru_cache
def _default_classifier() -> IngredientClassifier:
    return IngredientClassifier()


def classify_ingredients(zone: str) -> ClassificationResult:
    """Classify the ingredients of an Ingredients zone. Never raises."""
    return _default_classifier().classify(zone)
