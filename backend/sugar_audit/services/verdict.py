"""
Sugar verdict and warning synthesis.

The verdict is a pure function of the extracted nutrient values and the
ingredient sugar matches, so any result can be re-derived for auditing.
"""

from enum import Enum
from typing import List, Optional, Sequence, Tuple
from dataclasses import dataclass

from ..config import get_settings
from ..knowledge import HIGH_GI_TRAP, HEALTH_HALO_TRAP, SugarIngredientInfo, lookup_sugar_info
from .ingredients import SugarMatch
from .nutrients import NutrientFacts


class SugarVerdict(str, Enum):
    NO_SUGAR = "NO_SUGAR"
    SUGAR_PRESENT = "SUGAR_PRESENT"


@dataclass(frozen=True)
class SugaryIngredient:
    """A matched sugar alias enriched with display information."""
    verbatim: str
    alias: str
    info: SugarIngredientInfo


def _format_grams(value: float) -> str:
    return f"{value:g}g"


def _distinct_aliases(sugar_matches: Sequence[SugarMatch]) -> List[str]:
    aliases = []
    for match in sugar_matches:
        alias = match.alias.lower()
        if alias not in aliases:
            aliases.append(alias)
    return aliases


def synthesize_verdict(
    facts: NutrientFacts,
    sugar_matches: Sequence[SugarMatch],
    sugar_threshold: Optional[float] = None,
    polyol_threshold: Optional[float] = None,
) -> Tuple[SugarVerdict, List[str]]:
    """
    Combine nutrient values and ingredient matches into a verdict.

    Args:
        facts: Extracted nutrient values
        sugar_matches: Sugar aliases matched in the ingredients
        sugar_threshold: Sugar grams at or above which sugar is present
            (defaults to settings)
        polyol_threshold: Polyol grams at or above which polyols count as sugar
            (defaults to settings)

    Returns:
        Tuple of (verdict, warnings). Warnings are ordered: polyols, high-GI
        additives, health-halo sweeteners.
    """
    settings = get_settings()
    if sugar_threshold is None:
        sugar_threshold = settings.sugar_present_threshold
    if polyol_threshold is None:
        polyol_threshold = settings.polyol_present_threshold

    aliases = _distinct_aliases(sugar_matches)
    sugar = facts.sugar_per_100g
    polyols = facts.polyols_per_100g

    high_polyols = polyols is not None and polyols >= polyol_threshold
    sugar_present = (
        bool(aliases)
        or (sugar is not None and sugar >= sugar_threshold)
        or high_polyols
    )
    verdict = SugarVerdict.SUGAR_PRESENT if sugar_present else SugarVerdict.NO_SUGAR

    warnings = []
    if high_polyols:
        warnings.append(
            f"WARNING: Contains {_format_grams(polyols)} sugar alcohols (polyols) {facts.unit_label}. "
            f"At {_format_grams(polyol_threshold)} or more, polyols raise blood sugar and can upset digestion."
        )

    high_gi = [a for a in aliases if a in HIGH_GI_TRAP]
    if high_gi:
        warnings.append(
            f"WARNING: Contains High-GI additives ({', '.join(high_gi)}) which spike blood sugar "
            f"faster than table sugar."
        )

    halo = [a for a in aliases if a in HEALTH_HALO_TRAP]
    if halo:
        warnings.append(
            f"NOTE: Contains 'Natural' sugars ({', '.join(halo)}). While unrefined, these still "
            f"impact insulin significantly."
        )

    return verdict, warnings


def describe_sugar_matches(sugar_matches: Sequence[SugarMatch]) -> List[SugaryIngredient]:
    """Enrich sugar matches with description, GI and blood sugar impact, one per ingredient type."""
    seen = set()
    described = []
    for match in sugar_matches:
        info = lookup_sugar_info(match.alias)
        key = info.name.lower()
        if key in seen:
            continue
        seen.add(key)
        described.append(SugaryIngredient(verbatim=match.verbatim, alias=match.alias, info=info))
    return described
