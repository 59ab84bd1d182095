"""Plain-language explanations shown next to sugar claim verdicts."""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class ClaimEducation:
    what_made_them_say: str
    where_the_lie_is: str
    takeaway: str


_SUGAR_FREE = ClaimEducation(
    what_made_them_say="Contains less than ~0.5g sugar per 100g (legal definition).",
    where_the_lie_is=(
        "The product may still contain maltodextrin, refined flour, starches, or "
        "sweeteners that spike glucose anyway."
    ),
    takeaway="Sugar-free is not glucose-free.",
)

# Keyed by canonical claim name
CLAIM_EDUCATION = {
    "No added sugar": ClaimEducation(
        what_made_them_say="They did not add white/table sugar during processing.",
        where_the_lie_is=(
            "They may still use fruit juice concentrate, dates or date paste, malt extract, "
            "or honey, all of which raise blood glucose."
        ),
        takeaway="No added sugar is not low sugar.",
    ),
    "Sugar free": _SUGAR_FREE,
    "No refined sugar": ClaimEducation(
        what_made_them_say="No white processed sugar (sucrose) used.",
        where_the_lie_is=(
            "They may replace it with jaggery, honey, coconut sugar, or date syrup. "
            "Your body treats these very similarly to sugar."
        ),
        takeaway="Unrefined sugar is still sugar.",
    ),
    "Made with real fruit": ClaimEducation(
        what_made_them_say="The product contains some fruit or fruit concentrate.",
        where_the_lie_is=(
            "Often there is very little fruit and the rest is sugar or syrup. "
            "Fruit concentrate behaves like sugar and creates a healthy perception."
        ),
        takeaway="Real fruit doesn't mean low sugar.",
    ),
    "Sweetened with honey/jaggery/dates": ClaimEducation(
        what_made_them_say="They replaced white sugar with natural sweeteners.",
        where_the_lie_is=(
            "Honey, jaggery, and dates raise blood sugar quickly, have similar calories "
            "to sugar, and are still sugar sources."
        ),
        takeaway="Natural sweetener is not healthier for glucose.",
    ),
}


def get_claim_education(claim: str) -> Optional[ClaimEducation]:
    return CLAIM_EDUCATION.get(claim)
