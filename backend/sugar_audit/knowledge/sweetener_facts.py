"""
Consumer fact cards for sweeteners and polyols.

Each card carries a short headline, what the sweetener is, its intake limit
(ADI where one is set) and how it behaves in the gut. Cards flagged with
``spike_warning`` describe polyols that still raise blood glucose.
"""

from dataclasses import dataclass
from typing import Dict, Optional


@dataclass(frozen=True)
class SweetenerFactCard:
    """Fact card for one sweetener; ``name`` matches SweetenerInfo.name."""
    name: str
    headline: str
    summary: str
    safety: str
    gut: str
    spike_warning: bool = False


SWEETENER_FACT_CARDS: Dict[str, SweetenerFactCard] = {card.name: card for card in (
    SweetenerFactCard(
        name="Stevia",
        headline="The Natural Choice",
        summary=(
            "Extracted from plant leaves, this is 200x sweeter than sugar with zero calories. "
            "Watch for fillers like Maltodextrin in packets which can cause unexpected spikes."
        ),
        safety="ADI (Acceptable Daily Intake) is 4mg per kg of body weight.",
        gut="Generally gut-friendly; additives in blends may cause mild bloating.",
    ),
    SweetenerFactCard(
        name="Monk Fruit",
        headline="The Ancient Melon",
        summary=(
            "A natural fruit extract containing mogrosides that are 250x sweeter than sugar "
            "with zero glycemic impact. It is very stable and clean-tasting."
        ),
        safety="ADI not formally set; generally recognized as safe globally.",
        gut="Considered very safe and gentle on the digestive system.",
    ),
    SweetenerFactCard(
        name="Erythritol",
        headline="The Gold Standard",
        summary=(
            "A fruit-derived sugar alcohol that passes through you without spiking glucose. "
            "It is the most tooth-safe and metabolically clean substitute available."
        ),
        safety="ADI is 0.7g per kg of body weight.",
        gut="Most gut-safe polyol; absorbed early and rarely causes a laxative effect.",
    ),
    SweetenerFactCard(
        name="Sucralose",
        headline="The Heat-Hero",
        summary=(
            "600x sweeter than sugar and perfect for baking because it stays stable at high "
            "temperatures. It is calorie-free but extremely concentrated."
        ),
        safety="ADI is 5mg per kg of body weight.",
        gut="High, frequent doses may negatively influence beneficial gut bacteria.",
    ),
    SweetenerFactCard(
        name="Aspartame",
        headline="The Soda Classic",
        summary=(
            "Found in most diet drinks but breaks down when heated. It is zero-calorie and "
            "remains a staple for glucose management in beverages."
        ),
        safety="ADI is 40-50mg per kg of body weight.",
        gut="Broken down into amino acids; lacks the bloating typical of polyols.",
    ),
    SweetenerFactCard(
        name="Acesulfame K",
        headline="The Team Player",
        summary=(
            "A heat-stable synthetic often used in blends to balance flavor profiles. "
            "It has zero impact on insulin or glucose."
        ),
        safety="ADI is 15mg per kg of body weight.",
        gut="May influence the gut environment if consumed in very high quantities.",
    ),
    SweetenerFactCard(
        name="Allulose",
        headline="The Rare Sugar",
        summary=(
            "Tastes and bakes like real sugar but isn't metabolized as a carb. It may "
            "actually help lower blood sugar in some clinical settings."
        ),
        safety="ADI is 0.6g per kg of body weight.",
        gut="Mostly absorbed in the small intestine; much easier on the gut than polyols.",
    ),
    SweetenerFactCard(
        name="Saccharin",
        headline="The Original",
        summary=(
            "The oldest substitute; zero calories and reliable for blood sugar management. "
            "It often leaves a distinct metallic aftertaste."
        ),
        safety="ADI is 5mg per kg of body weight.",
        gut="Mostly unchanged by digestion; high intake may impact gut microbiome.",
    ),
    SweetenerFactCard(
        name="Neotame",
        headline="The Modern High-Intensity",
        summary=(
            "A derivative of aspartame that is 8,000x sweeter than sugar. It is heat-stable "
            "and used in very tiny, metabolically invisible amounts."
        ),
        safety="ADI is 2mg per kg of body weight.",
        gut="Rapidly eliminated and doesn't ferment in the digestive tract.",
    ),
    SweetenerFactCard(
        name="Advantame",
        headline="The Ultra-Sweetener",
        summary=(
            "One of the most potent sweeteners available (20,000x sweeter than sugar). "
            "It is clean-tasting and zero-GI."
        ),
        safety="ADI is 5mg per kg of body weight.",
        gut="Safe for consumption; used in such small amounts it has no digestive impact.",
    ),
    SweetenerFactCard(
        name="Thaumatin",
        headline="The Natural Protein",
        summary=(
            "Derived from West African fruit, it is a protein-based sweetener with a "
            "lingering, licorice-like finish."
        ),
        safety="Generally recognized as safe (GRAS); no specific ADI limit.",
        gut="Digested as a protein; completely gut-safe with no laxative effect.",
    ),
    SweetenerFactCard(
        name="Sorbitol",
        headline="The Gentle Nudge",
        summary=(
            "A common polyol that has a small, measurable effect on blood sugar. "
            "It provides a smooth texture to candies and syrups."
        ),
        safety="Avoid exceeding 20g daily to prevent digestive issues.",
        gut="Strong osmotic laxative; can cause significant bloating and diarrhea.",
        spike_warning=True,
    ),
    SweetenerFactCard(
        name="Xylitol",
        headline="The Smile-Saver",
        summary=(
            "A sugar alcohol that prevents tooth decay while providing sweetness with a very "
            "low glucose nudge. Highly toxic to pets, especially dogs."
        ),
        safety="30g+ daily may trigger digestive upset.",
        gut="Slowly fermented; acts as a prebiotic but can cause a laxative effect.",
    ),
    SweetenerFactCard(
        name="Isomalt",
        headline="The Candy Builder",
        summary=(
            "A low-calorie polyol that keeps hard candies crunchy without rotting teeth. "
            "It has a very low impact on glucose."
        ),
        safety="ADI is 0.5g per kg of body weight.",
        gut="Fermented in the large intestine; can cause gas in large servings.",
    ),
    SweetenerFactCard(
        name="Mannitol",
        headline="The Dusting Agent",
        summary=(
            "Often used on the outside of gums to prevent sticking; it has a very low "
            "glycemic impact."
        ),
        safety="ADI is 50mg per kg of body weight.",
        gut="Poorly absorbed; can lead to gas and bloating if consumed in large amounts.",
    ),
    SweetenerFactCard(
        name="Maltitol",
        headline="The Sweet Lie",
        summary=(
            "It has about half the glycemic impact of real sugar and will cause a moderate "
            "rise in blood glucose. It provides bulk and texture similar to sugar."
        ),
        safety="Limit to 30g daily to avoid gastric distress.",
        gut="Strong laxative effect; notorious for causing gas and bloating.",
        spike_warning=True,
    ),
)}


def get_sweetener_fact_card(name: str) -> Optional[SweetenerFactCard]:
    return SWEETENER_FACT_CARDS.get(name)
