"""
Sugar alias dictionary.

Terms are matched on word boundaries, so both singular and plural forms
(and common OCR misreads) are listed where labels use either. Longer and
more specific terms come first so they are reported ahead of the generic
ones they contain.
"""

SUGAR_ALIASES = (
    # High-GI additives (metabolic sugars)
    "maltodextrin",
    "dextrin",
    "modified starch",
    "corn solids",
    "glucose solids",

    # Regional / Indian terms
    "jaggery",
    "gur",
    "gud",
    "misri",
    "mishri",
    "khandsari",
    "khand",
    "rab",
    "bura",
    "shakar",

    # Syrups and nectars
    "high fructose corn syrup",
    "hfcs",
    "corn syrup",
    "agave nectar",
    "agave syrup",
    "agave",
    "fructose syrup",
    "glucose syrup",
    "tapioca syrup",
    "brown rice syrup",
    "rice syrup",
    "malt syrup",
    "invert sugar",
    "inverted sugar",
    "invert syrup",
    "golden syrup",
    "maple syrup",
    "sorghum syrup",
    "yacon syrup",
    "pancake syrup",
    "treacle",

    # Fruit based (stealth sugars)
    "fruit juice concentrate",
    "fruit juice concentrates",
    "apple juice concentrate",
    "apple juice concentrates",
    "grape juice concentrate",
    "grape juice concentrates",
    "date paste",
    "date syrup",
    "dates",
    "khajoor",
    "raisin paste",
    "fruit powder",
    "mango powder",
    "fruit juice crystals",

    # Core sugars and chemical names
    "sugar",
    "sucrose",
    "glucose",
    "fructose",
    "dextrose",
    "maltose",
    "lactose",
    "galactose",
    "crystalline fructose",
    "liquid fructose",
    "cane sugar",
    "beet sugar",
    "coconut sugar",
    "palm sugar",
    "date sugar",
    "raw sugar",
    "brown sugar",
    "icing sugar",
    "confectioners sugar",
    "castor sugar",
    "table sugar",
    "refined sugar",
    "demerara",
    "turbinado",
    "muscovado",
    "panela",
    "succanat",
    "honey",
    "blackstrap molasses",
    "molasses",
    "fondant",
    "caramel",
    "evaporated cane juice",

    # Malts
    "barley malt",
    "malt extract",
    "malt",
    "ethyl maltol",

    # OCR misreads seen on real labels
    "suger",
    "sugr",
    "sugat",
    "5ugar",
    "5ugr",
    "glucoze",
    "maitodextrin",
    "maltodextrn",
    "jaggry",
    "jgery",
    "honeyy",
    "molases",
    "syrupp",

    # Catch-all
    "nectar",
)

# Rapidly absorbed industrial sugars: spike glucose faster than table sugar
HIGH_GI_TRAP = (
    "maltodextrin",
    "dextrin",
    "modified starch",
    "malt extract",
    "barley malt",
)

# "Natural" sweeteners that are still glycemic
HEALTH_HALO_TRAP = (
    "honey",
    "jaggery",
    "dates",
    "date paste",
    "date syrup",
    "coconut sugar",
    "agave",
    "agave nectar",
    "agave syrup",
    "maple syrup",
)

REFINED_SUGAR_ALIASES = (
    "sugar",
    "sucrose",
    "dextrose",
    "glucose",
    "glucose syrup",
    "corn syrup",
    "high fructose corn syrup",
    "hfcs",
    "maltodextrin",
    "refined sugar",
    "table sugar",
    "icing sugar",
    "castor sugar",
)

HONEY_JAGGERY_DATES = (
    "honey",
    "jaggery",
    "dates",
    "date paste",
    "date syrup",
    "khajoor",
)

FRUIT_TERMS = (
    "fruit",
    "apple",
    "mango",
    "banana",
    "berry",
    "berries",
    "orange",
    "grape",
    "pineapple",
    "strawberry",
    "blueberry",
    "raspberry",
    "blackberry",
    "cherry",
    "peach",
    "pear",
    "apricot",
    "plum",
    "cranberry",
    "pomegranate",
    "passion fruit",
    "papaya",
)
