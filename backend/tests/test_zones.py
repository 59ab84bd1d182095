"""Tests for zone scoping."""

import pytest
from sugar_audit.services.zones import ZoneScoper, LabelZones, scope_zones, prepare_lines


LABEL = """Best snack ever! No added sugar!
Nutrition Information
Per 100g
Energy 450 kcal
Total Sugars 12g
Ingredients: Wheat flour, Sugar, Palm oil
Allergen advice: contains wheat
Mfg by Good Foods Pvt Ltd"""


@pytest.fixture
def scoper():
    """Create zone scoper instance."""
    return ZoneScoper()


class TestAnchors:
    """Test anchor detection and zone boundaries."""

    def test_nutrition_then_ingredients(self, scoper):
        """Test the common layout with marketing copy and a footer."""
        zones = scoper.scope(LABEL)

        assert zones.nutrition_block == "Nutrition Information\nPer 100g\nEnergy 450 kcal\nTotal Sugars 12g"
        assert zones.ingredients_block == "Ingredients: Wheat flour, Sugar, Palm oil"

    def test_marketing_copy_excluded(self, scoper):
        """Test that front-of-pack text is in neither zone."""
        zones = scoper.scope(LABEL)

        assert "No added sugar" not in zones.nutrition_block
        assert "No added sugar" not in zones.ingredients_block

    def test_ingredients_then_nutrition(self, scoper):
        """Test that anchor order does not matter."""
        text = "Ingredients: Oats, Honey\nNutrition Facts\nProtein 10g\nBest before 6 months"
        zones = scoper.scope(text)

        assert zones.ingredients_block == "Ingredients: Oats, Honey"
        assert zones.nutrition_block == "Nutrition Facts\nProtein 10g"

    def test_merged_header_line_is_split(self, scoper):
        """Test a line where OCR merged a nutrition row with the ingredients header."""
        text = "Nutrition Facts\nTotal Fat 10g Ingredients: Sugar, Cocoa"
        zones = scoper.scope(text)

        assert zones.nutrition_block == "Nutrition Facts\nTotal Fat 10g"
        assert zones.ingredients_block == "Ingredients: Sugar, Cocoa"

    def test_misspelled_ingredients_header(self, scoper):
        """Test fuzzy matching of an OCR-mangled ingredients header."""
        zones = scoper.scope("Ingredtents: Sugar, Salt")
        assert zones.ingredients_block == "Ingredtents: Sugar, Salt"

    def test_misspelled_nutrition_header(self, scoper):
        """Test fuzzy matching of an OCR-mangled nutrition header."""
        zones = scoper.scope("Nutritlon Facts\nSugars 5g")
        assert zones.nutrition_block == "Nutritlon Facts\nSugars 5g"

    def test_total_sugar_is_not_ingredients_anchor(self, scoper):
        """Test that a sugar row never opens the ingredients zone."""
        assert scoper.anchor_kind("Total Sugar 5g") is None
        assert scoper.anchor_kind("Added sugars ingredients: 0g") is None

    def test_accepts_sequence_of_lines(self, scoper):
        """Test that OCR line lists are accepted."""
        zones = scoper.scope(["Nutrition Facts", "Sugars 5g"])
        assert zones.nutrition_block == "Nutrition Facts\nSugars 5g"


class TestEmptyAndMissing:
    """Test inputs without anchors."""

    def test_no_anchors(self):
        """Test text with no anchors gives empty zones."""
        zones = scope_zones("Tasty crunchy snack\nMade with love")
        assert zones.is_empty
        assert not zones.has_nutrition
        assert not zones.has_ingredients

    def test_empty_input(self):
        """Test empty input never raises."""
        assert scope_zones("") == LabelZones()
        assert scope_zones([]) == LabelZones()

    def test_junk_lines_dropped(self):
        """Test that punctuation-only lines are removed."""
        assert prepare_lines("Sugar\n---\n  \n***\nSalt") == ["Sugar", "Salt"]


class TestIdempotence:
    """Re-scoping a zone returns it unchanged."""

    @pytest.mark.parametrize("text", [
        LABEL,
        "Ingredients: Oats, Honey\nNutrition Facts\nProtein 10g\nBest before 6 months",
        "Nutrition Facts\nTotal Fat 10g Ingredients: Sugar, Cocoa",
    ])
    def test_rescoping_zones(self, text):
        """Test both zones survive a second pass."""
        zones = scope_zones(text)

        assert scope_zones(zones.nutrition_block).nutrition_block == zones.nutrition_block
        assert scope_zones(zones.ingredients_block).ingredients_block == zones.ingredients_block
