"""
Claim thresholds: the stricter of WHO/Codex and FSSAI per claim.

Sources: FSSAI Advertising and Claims Regulations 2018, Schedule I;
Codex CAC/GL 23-1997. All values are per 100 g unless noted.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class ClaimThresholds:
    sugar_free_max: float = 0.5         # g, strictly below
    fat_free_max: float = 0.5           # g
    no_added_sugar_max: float = 0.5     # g, trace tolerance
    high_protein_min: float = 24.0      # g (Codex "high" = 2x source; FSSAI source = 12 g)
    low_carb_max: float = 5.0           # g
    baked_fat_limit: float = 15.0       # g, above this "baked" is questionable
    less_sugar_max: float = 15.0        # g, heuristic: no reference product on the label
    low_sugar_max: float = 5.0          # g
    low_fat_max: float = 3.0            # g
    cholesterol_free_max: float = 5.0   # mg
    low_calorie_max: float = 40.0       # kcal
    zero_calorie_max: float = 5.0       # kcal


CLAIM_THRESHOLDS = ClaimThresholds()

# WHO/FAO adult daily reference amounts (g)
DAILY_VALUES = {
    "sugar": 50.0,
    "fat": 65.0,
    "protein": 50.0,
}
