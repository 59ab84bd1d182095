"""Read-only label dictionaries: sugar aliases, fats, sweeteners, claim thresholds and explanations."""

from .sugar_aliases import (
    SUGAR_ALIASES,
    HIGH_GI_TRAP,
    HEALTH_HALO_TRAP,
    REFINED_SUGAR_ALIASES,
    HONEY_JAGGERY_DATES,
    FRUIT_TERMS,
)
from .fat_identifiers import FAT_IDENTIFIERS
from .sweeteners import (
    SweetenerSafety,
    SweetenerInfo,
    SWEETENER_TABLE,
    SWEETENER_INS_NUMBERS,
)
from .sugar_info import SugarIngredientInfo, SUGAR_INGREDIENT_INFO, lookup_sugar_info
from .claim_thresholds import ClaimThresholds, CLAIM_THRESHOLDS, DAILY_VALUES
from .claim_education import ClaimEducation, CLAIM_EDUCATION, get_claim_education
from .sweetener_facts import SweetenerFactCard, SWEETENER_FACT_CARDS, get_sweetener_fact_card

__all__ = [
    "SUGAR_ALIASES",
    "HIGH_GI_TRAP",
    "HEALTH_HALO_TRAP",
    "REFINED_SUGAR_ALIASES",
    "HONEY_JAGGERY_DATES",
    "FRUIT_TERMS",
    "FAT_IDENTIFIERS",
    "SweetenerSafety",
    "SweetenerInfo",
    "SWEETENER_TABLE",
    "SWEETENER_INS_NUMBERS",
    "SugarIngredientInfo",
    "SUGAR_INGREDIENT_INFO",
    "lookup_sugar_info",
    "ClaimThresholds",
    "CLAIM_THRESHOLDS",
    "DAILY_VALUES",
    "ClaimEducation",
    "CLAIM_EDUCATION",
    "get_claim_education",
    "SweetenerFactCard",
    "SWEETENER_FACT_CARDS",
    "get_sweetener_fact_card",
]
