"""
Sweetener and polyol knowledge base.

Sugar substitutes are reported separately from sugar. Each entry lists the
label aliases it is recognised by, including INS/E additive numbers, so that
"Sweetener (960)" resolves to Stevia.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Tuple


class SweetenerSafety(str, Enum):
    """Glycemic safety category for people watching blood sugar."""
    SAFE = "Safe"
    MODERATE = "Moderate"
    HIGH = "High"


@dataclass(frozen=True)
class SweetenerInfo:
    """A sweetener or polyol with its glycemic profile."""
    name: str
    aliases: Tuple[str, ...]
    gi_band: str
    calories_per_gram: float
    safety: SweetenerSafety
    is_polyol: bool = False
    note: str = ""


SWEETENER_TABLE = (
    SweetenerInfo(
        name="Stevia",
        aliases=("stevia", "steviol glycosides", "steviol glycoside", "reb-a", "rebiana",
                 "rebaudioside", "steviol", "960", "e960", "ins 960"),
        gi_band="0",
        calories_per_gram=0.0,
        safety=SweetenerSafety.SAFE,
        note="A natural plant extract; excellent for glucose control but can have a bitter aftertaste.",
    ),
    SweetenerInfo(
        name="Monk Fruit",
        aliases=("monk fruit", "luo han guo", "mogroside", "mogrosides"),
        gi_band="0",
        calories_per_gram=0.0,
        safety=SweetenerSafety.SAFE,
        note="Also known as Luo Han Guo; a natural, high-intensity sweetener that is very stable.",
    ),
    SweetenerInfo(
        name="Erythritol",
        aliases=("erythritol", "968", "e968", "ins 968"),
        gi_band="0-1",
        calories_per_gram=0.2,
        safety=SweetenerSafety.SAFE,
        is_polyol=True,
        note="A sugar alcohol with the lowest glycemic impact; very tooth-friendly.",
    ),
    SweetenerInfo(
        name="Allulose",
        aliases=("allulose", "d-psicose", "psicose"),
        gi_band="0",
        calories_per_gram=0.4,
        safety=SweetenerSafety.SAFE,
        note="A rare sugar that tastes and bakes like sugar but is not metabolised as a carb.",
    ),
    SweetenerInfo(
        name="Sucralose",
        aliases=("sucralose", "splenda", "955", "e955", "ins 955"),
        gi_band="0",
        calories_per_gram=0.0,
        safety=SweetenerSafety.SAFE,
        note="Highly concentrated (600x sugar); safe for spikes but often blended with fillers that are not.",
    ),
    SweetenerInfo(
        name="Aspartame",
        aliases=("aspartame", "nutrasweet", "equal", "951", "e951", "ins 951"),
        gi_band="0",
        calories_per_gram=4.0,
        safety=SweetenerSafety.SAFE,
        note="Common in diet sodas; breaks down under heat, so not for cooking.",
    ),
    SweetenerInfo(
        name="Acesulfame K",
        aliases=("acesulfame k", "acesulfame potassium", "ace-k", "ace k", "950", "e950", "ins 950"),
        gi_band="0",
        calories_per_gram=0.0,
        safety=SweetenerSafety.SAFE,
        note="Known as Ace-K; usually blended with others to balance flavour.",
    ),
    SweetenerInfo(
        name="Saccharin",
        aliases=("saccharin", "sweet'n low", "sweet and low", "954", "e954", "ins 954"),
        gi_band="0",
        calories_per_gram=0.0,
        safety=SweetenerSafety.SAFE,
        note="The oldest artificial sweetener; zero calories but has a metallic finish.",
    ),
    SweetenerInfo(
        name="Advantame",
        aliases=("advantame", "969", "e969", "ins 969"),
        gi_band="0",
        calories_per_gram=0.0,
        safety=SweetenerSafety.SAFE,
        note="Ultra-high intensity (20,000x sugar); used in tiny, metabolically invisible amounts.",
    ),
    SweetenerInfo(
        name="Neotame",
        aliases=("neotame", "961", "e961", "ins 961"),
        gi_band="0",
        calories_per_gram=0.0,
        safety=SweetenerSafety.SAFE,
        note="A derivative of aspartame that is much sweeter and more heat-stable.",
    ),
    SweetenerInfo(
        name="Thaumatin",
        aliases=("thaumatin", "957", "e957", "ins 957"),
        gi_band="0",
        calories_per_gram=0.0,
        safety=SweetenerSafety.SAFE,
        note="A natural protein from fruit; creates a lingering sweetness.",
    ),
    SweetenerInfo(
        name="Xylitol",
        aliases=("xylitol", "967", "e967", "ins 967"),
        gi_band="7-13",
        calories_per_gram=2.4,
        safety=SweetenerSafety.SAFE,
        is_polyol=True,
        note="A sugar alcohol with low impact.",
    ),
    SweetenerInfo(
        name="Sorbitol",
        aliases=("sorbitol", "420", "e420", "ins 420"),
        gi_band="9",
        calories_per_gram=2.6,
        safety=SweetenerSafety.SAFE,
        is_polyol=True,
        note="Often used in sugar-free candies; has a small glycemic effect.",
    ),
    SweetenerInfo(
        name="Isomalt",
        aliases=("isomalt", "953", "e953", "ins 953"),
        gi_band="2-9",
        calories_per_gram=2.0,
        safety=SweetenerSafety.SAFE,
        is_polyol=True,
        note="Frequently used in sugar-free syrups and hard candies.",
    ),
    SweetenerInfo(
        name="Maltitol",
        aliases=("maltitol", "965", "e965", "ins 965"),
        gi_band="35-52",
        calories_per_gram=2.1,
        safety=SweetenerSafety.MODERATE,
        is_polyol=True,
        note="The hidden spiker; GI is high enough to affect diabetics.",
    ),
    SweetenerInfo(
        name="Mannitol",
        aliases=("mannitol", "421", "e421", "ins 421"),
        gi_band="0-2",
        calories_per_gram=1.6,
        safety=SweetenerSafety.SAFE,
        is_polyol=True,
        note="A sugar alcohol with minimal glycemic impact.",
    ),
    SweetenerInfo(
        name="Lactitol",
        aliases=("lactitol", "966", "e966", "ins 966"),
        gi_band="3-6",
        calories_per_gram=2.0,
        safety=SweetenerSafety.SAFE,
        is_polyol=True,
        note="A milk-derived sugar alcohol used in sugar-free chocolate.",
    ),
    SweetenerInfo(
        name="Trehalose",
        aliases=("trehalose",),
        gi_band="70",
        calories_per_gram=4.0,
        safety=SweetenerSafety.HIGH,
        note="Marketed as a sugar substitute but digested like sugar.",
    ),
)

# Additive numbers that identify a sweetener when printed alone, e.g. "Sweeteners (960, 955)"
SWEETENER_INS_NUMBERS = tuple(
    alias for info in SWEETENER_TABLE for alias in info.aliases if alias.isdigit()
)
