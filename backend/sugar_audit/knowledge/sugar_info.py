"""
Sugar ingredient knowledge base: description, glycemic index and blood
sugar impact for the sugar aliases found on a label.

GI values follow the University of Sydney GI database (glycemicindex.com).
"""

from dataclasses import dataclass
from typing import Optional, Tuple


@dataclass(frozen=True)
class SugarIngredientInfo:
    """Display information for a sugar-type ingredient."""
    name: str
    aliases: Tuple[str, ...]
    description: str
    gi: Optional[int]
    blood_sugar_impact: str


DEFAULT_SUGAR_INFO = SugarIngredientInfo(
    name="Added sweetener",
    aliases=(),
    description="Added sweetener; type may vary.",
    gi=None,
    blood_sugar_impact="GI varies; may raise blood sugar.",
)

SUGAR_INGREDIENT_INFO = (
    SugarIngredientInfo(
        name="Sucrose / Table sugar",
        aliases=("sucrose", "sugar", "suger", "sugr", "sugat", "5ugar", "5ugr", "table sugar",
                 "refined sugar", "beet sugar", "cane sugar", "brown sugar", "raw sugar",
                 "icing sugar", "confectioners sugar", "castor sugar", "evaporated cane juice",
                 "fruit juice crystals", "panela", "succanat", "muscovado", "turbinado",
                 "demerara", "khandsari", "khand", "bura", "shakar", "misri", "mishri"),
        description="Table sugar; disaccharide of glucose and fructose.",
        gi=65,
        blood_sugar_impact="Moderate spike; raises blood glucose.",
    ),
    SugarIngredientInfo(
        name="Maltodextrin",
        aliases=("maltodextrin", "maitodextrin", "maltodextrn", "dextrin"),
        description="Starch derivative; rapidly digested.",
        gi=105,
        blood_sugar_impact="Very high; fast glucose spike.",
    ),
    SugarIngredientInfo(
        name="Glucose / Dextrose",
        aliases=("glucose", "glucoze", "dextrose", "glucose solids", "glucose syrup",
                 "crystalline fructose", "tapioca syrup"),
        description="Pure glucose; reference standard for GI.",
        gi=100,
        blood_sugar_impact="Very high; immediate spike.",
    ),
    SugarIngredientInfo(
        name="Fructose",
        aliases=("fructose", "fructose syrup", "liquid fructose"),
        description="Fruit sugar; lower GI than glucose.",
        gi=15,
        blood_sugar_impact="Lower impact; slower absorption.",
    ),
    SugarIngredientInfo(
        name="High fructose corn syrup",
        aliases=("high fructose corn syrup", "hfcs"),
        description="Industrial sweetener from corn starch.",
        gi=68,
        blood_sugar_impact="High; rapid glucose rise.",
    ),
    SugarIngredientInfo(
        name="Corn syrup",
        aliases=("corn syrup", "corn solids"),
        description="Glucose syrup from corn starch.",
        gi=75,
        blood_sugar_impact="High; fast glucose spike.",
    ),
    SugarIngredientInfo(
        name="Honey",
        aliases=("honey", "honeyy"),
        description="Natural sweetener from bees.",
        gi=58,
        blood_sugar_impact="Moderate; similar to table sugar.",
    ),
    SugarIngredientInfo(
        name="Jaggery",
        aliases=("jaggery", "jaggry", "jgery", "gur", "gud", "rab"),
        description="Unrefined cane or palm sugar.",
        gi=84,
        blood_sugar_impact="High; rapid spike.",
    ),
    SugarIngredientInfo(
        name="Molasses / Treacle",
        aliases=("molasses", "molases", "blackstrap molasses", "treacle", "golden syrup"),
        description="Cane or beet sugar byproduct.",
        gi=55,
        blood_sugar_impact="Moderate.",
    ),
    SugarIngredientInfo(
        name="Maple syrup",
        aliases=("maple syrup", "pancake syrup"),
        description="Tree sap concentrate.",
        gi=54,
        blood_sugar_impact="Moderate.",
    ),
    SugarIngredientInfo(
        name="Agave",
        aliases=("agave", "agave nectar", "agave syrup"),
        description="Plant nectar; high fructose.",
        gi=15,
        blood_sugar_impact="Lower than table sugar.",
    ),
    SugarIngredientInfo(
        name="Rice syrup",
        aliases=("rice syrup", "brown rice syrup"),
        description="Starch-based syrup from rice.",
        gi=98,
        blood_sugar_impact="Very high; fast glucose.",
    ),
    SugarIngredientInfo(
        name="Dates / Date paste",
        aliases=("dates", "date paste", "date syrup", "date sugar", "khajoor", "raisin paste"),
        description="Dried fruit sugar; concentrated.",
        gi=103,
        blood_sugar_impact="Very high when concentrated.",
    ),
    SugarIngredientInfo(
        name="Lactose",
        aliases=("lactose", "galactose"),
        description="Milk sugar.",
        gi=46,
        blood_sugar_impact="Moderate.",
    ),
    SugarIngredientInfo(
        name="Maltose",
        aliases=("maltose",),
        description="Malt sugar; two glucose units.",
        gi=105,
        blood_sugar_impact="Very high; rapid spike.",
    ),
    SugarIngredientInfo(
        name="Barley malt / Malt",
        aliases=("barley malt", "malt extract", "malt syrup", "malt", "ethyl maltol"),
        description="Grain-derived sweetener; high maltose.",
        gi=95,
        blood_sugar_impact="High; fast glucose spike.",
    ),
    SugarIngredientInfo(
        name="Invert sugar",
        aliases=("invert sugar", "inverted sugar", "invert syrup"),
        description="Hydrolysed sucrose; glucose + fructose.",
        gi=60,
        blood_sugar_impact="Moderate to high.",
    ),
    SugarIngredientInfo(
        name="Fruit concentrate",
        aliases=("fruit juice concentrate", "fruit juice concentrates", "apple juice concentrate",
                 "apple juice concentrates", "grape juice concentrate", "grape juice concentrates",
                 "fruit powder", "mango powder"),
        description="Concentrated fruit sugars.",
        gi=65,
        blood_sugar_impact="Moderate to high; varies by fruit.",
    ),
    SugarIngredientInfo(
        name="Caramel",
        aliases=("caramel",),
        description="Heated sugar; used for colour and flavour.",
        gi=60,
        blood_sugar_impact="Moderate; raises blood glucose.",
    ),
    SugarIngredientInfo(
        name="Coconut / Palm sugar",
        aliases=("coconut sugar", "palm sugar"),
        description="Plant-derived sweeteners.",
        gi=54,
        blood_sugar_impact="Moderate; similar to table sugar.",
    ),
    SugarIngredientInfo(
        name="Sorghum / Yacon syrup",
        aliases=("sorghum syrup", "yacon syrup"),
        description="Plant-based syrups.",
        gi=50,
        blood_sugar_impact="Moderate.",
    ),
    SugarIngredientInfo(
        name="Starch-derived sweeteners",
        aliases=("modified starch",),
        description="Hydrolysed starches.",
        gi=85,
        blood_sugar_impact="High; rapid digestion.",
    ),
    SugarIngredientInfo(
        name="Confectionery sugars",
        aliases=("fondant",),
        description="Processed sweeteners for baked goods.",
        gi=65,
        blood_sugar_impact="Moderate; raises blood glucose.",
    ),
    SugarIngredientInfo(
        name="General syrup / nectar",
        aliases=("nectar", "syrupp"),
        description="Added sweetener; type varies.",
        gi=None,
        blood_sugar_impact="May raise blood sugar; GI varies by type.",
    ),
)


def lookup_sugar_info(alias: str) -> SugarIngredientInfo:
    """Look up ingredient info by alias, falling back to a generic entry named after the alias."""
    normalized = alias.lower().strip()
    for info in SUGAR_INGREDIENT_INFO:
        if normalized in info.aliases:
            return info
    return SugarIngredientInfo(
        name=alias,
        aliases=(),
        description=DEFAULT_SUGAR_INFO.description,
        gi=DEFAULT_SUGAR_INFO.gi,
        blood_sugar_impact=DEFAULT_SUGAR_INFO.blood_sugar_impact,
    )
