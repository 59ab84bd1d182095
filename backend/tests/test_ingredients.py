"""Tests for ingredient tokenization and classification."""

import pytest
from sugar_audit.knowledge import SUGAR_ALIASES
from sugar_audit.services.zones import scope_zones, ingredients_header_end
from sugar_audit.services.ingredients import (
    IngredientClassifier,
    SugarMatch,
    classify_ingredients,
    extract_section,
    strip_parentheticals,
    split_top_level,
    sweetener_ins_tokens,
    is_negation_phrase,
)


@pytest.fixture
def classifier():
    """Create classifier instance."""
    return IngredientClassifier()


def sweetener_names(result):
    return [m.info.name for m in result.sweetener_matches]


class TestSugarAliases:
    """Test dictionary matching and its negated forms."""

    @pytest.mark.parametrize("alias", SUGAR_ALIASES)
    def test_bare_alias_found(self, classifier, alias):
        """Test every alias is matched exactly once on its own."""
        result = classifier.classify(alias)
        assert [m.alias for m in result.sugar_matches].count(alias) == 1

    @pytest.mark.parametrize("alias", SUGAR_ALIASES)
    def test_no_added_alias_ignored(self, classifier, alias):
        """Test "no added X" is never a sugar."""
        assert classifier.classify(f"no added {alias}").sugar_matches == []

    @pytest.mark.parametrize("alias", SUGAR_ALIASES)
    def test_free_from_alias_ignored(self, classifier, alias):
        """Test "free from X" is never a sugar."""
        assert classifier.classify(f"free from {alias}").sugar_matches == []

    def test_isomalt_is_not_malt(self, classifier):
        """Test aliases match whole words only."""
        result = classifier.classify("Ingredients: Isomalt, Cocoa")
        assert result.sugar_aliases_found == []
        assert sweetener_names(result) == ["Isomalt"]

    def test_barley_malt_reports_both(self, classifier):
        """Test the specific alias comes before the generic one."""
        result = classifier.classify("Ingredients: Barley malt, Oats")
        assert result.sugar_aliases_found == ["barley malt", "malt"]

    def test_duplicates_removed(self, classifier):
        """Test a repeated ingredient is reported once."""
        result = classifier.classify("Sugar, Sugar, Honey")
        assert result.sugar_aliases_found == ["sugar", "honey"]
        assert result.sugar_matches == [
            SugarMatch(alias="sugar", verbatim="Sugar"),
            SugarMatch(alias="honey", verbatim="Honey"),
        ]
        assert len(result.raw_ingredients) == 3

    def test_verbatim_kept(self, classifier):
        """Test the matched token is kept as printed."""
        result = classifier.classify("Ingredients: Liquid Glucose, Salt")
        assert SugarMatch(alias="glucose", verbatim="Liquid Glucose") in result.sugar_matches


class TestSweeteners:
    """Test sweetener and polyol detection."""

    def test_named_with_ins_number(self, classifier):
        """Test a named sweetener with its number is reported once."""
        result = classifier.classify("Stevia (960)")
        assert sweetener_names(result) == ["Stevia"]

    def test_generic_sweetener_line(self, classifier):
        """Test "Sweetener (960)" resolves to Stevia."""
        result = classifier.classify("Ingredients: Oats, Sweetener (960)")
        assert sweetener_names(result) == ["Stevia"]
        assert "960" in result.raw_ingredients

    def test_several_numbers(self, classifier):
        """Test E-numbers inside one parenthetical."""
        result = classifier.classify("Sweeteners (E955, E950)")
        assert sweetener_names(result) == ["Sucralose", "Acesulfame K"]
        assert result.sugar_matches == []

    def test_sugar_alcohol_is_not_sugar(self, classifier):
        """Test "Sugar alcohol (maltitol)" is a polyol, not sugar."""
        result = classifier.classify("Ingredients: Sugar alcohol (maltitol), Cocoa")
        assert result.sugar_matches == []
        assert sweetener_names(result) == ["Maltitol"]
        assert result.sweetener_matches[0].info.is_polyol

    def test_free_from_sweetener_ignored(self, classifier):
        """Test a denied sweetener is not reported."""
        result = classifier.classify("Wheat flour\nFree from aspartame")
        assert result.sweetener_matches == []
        assert result.raw_ingredients == ["Wheat flour"]


class TestNegationWindow:
    """Test negation context across tokens and lines."""

    def test_window_crosses_lines(self, classifier):
        """Test "free from" at the end of one line negates the next."""
        result = classifier.classify("Oats, Nuts, free from\nhoney")
        assert result.sugar_matches == []
        assert result.raw_ingredients == ["Oats", "Nuts"]

    def test_nearby_negation(self, classifier):
        """Test a negation line just above negates a close token."""
        result = classifier.classify("No added sugar\nOats, honey")
        assert result.sugar_matches == []
        assert result.raw_ingredients == ["Oats"]

    def test_window_limit(self, classifier):
        """Test a negation more than the window away does not apply."""
        zone = "No added sugar\nWhole wheat flour, rolled oats, milk solids, cocoa powder, salt, honey"
        result = classifier.classify(zone)
        assert result.sugar_aliases_found == ["honey"]

    def test_window_resets_after_header(self, classifier):
        """Test text before the header cannot negate ingredients."""
        result = classifier.classify("Sugar free crackers\nIngredients: Wheat flour, honey")
        assert result.sugar_aliases_found == ["honey"]

    def test_fuzzy_header_then_ingredients_word(self, classifier):
        """Test a misspelt header is not overridden by a later "ingredients" word."""
        zones = scope_zones("Ingredents: Wheat flour, Sugar, Salt\nAll ingredients are vegetarian")
        result = classifier.classify(zones.ingredients_block)
        assert result.sugar_aliases_found == ["sugar"]
        assert result.raw_ingredients[:3] == ["Wheat flour", "Sugar", "Salt"]

    def test_ingredients_word_in_sentence(self, classifier):
        """Test a sentence mentioning ingredients does not hide earlier text."""
        result = classifier.classify("Sugar, Cocoa butter\nAll ingredients are plant based")
        assert result.sugar_aliases_found == ["sugar"]

    def test_inline_header_needs_colon(self, classifier):
        """Test a mid-line header is recognised only with its colon."""
        result = classifier.classify("Nutrition facts Total Sugars 9g Ingredients: Oats, Honey")
        assert result.sugar_aliases_found == ["honey"]
        assert result.raw_ingredients == ["Oats", "Honey"]

    def test_sugar_free_token(self, classifier):
        """Test a "sugar-free" qualifier is not sugar."""
        result = classifier.classify("Oats, sugar-free chocolate chips")
        assert result.sugar_matches == []
        assert result.raw_ingredients == ["Oats"]

    @pytest.mark.parametrize("text", [
        "No added sugar",
        "Contains no added sugar",
        "Free from jaggery",
        "Not a significant source of sugar",
        "source of sugar.",
        "sugar free",
    ])
    def test_negation_phrases(self, text):
        """Test common disclaimers."""
        assert is_negation_phrase(text)

    @pytest.mark.parametrize("text", ["Sugar", "Honey", "Cane sugar syrup"])
    def test_not_negation(self, text):
        """Test plain ingredients are not disclaimers."""
        assert not is_negation_phrase(text)


class TestNoise:
    """Test nutrition rows and OCR fragments are dropped."""

    def test_nutrition_row_ignored(self, classifier):
        """Test a leaked nutrition row does not count as sugar."""
        result = classifier.classify("Wheat flour, Total Sugars 12g, Salt")
        assert result.sugar_matches == []

    def test_continuation_fragment_ignored(self, classifier):
        """Test marketing text run on after a disclaimer."""
        result = classifier.classify("Oats, honey. These candies are great")
        assert result.sugar_matches == []
        assert result.raw_ingredients == ["Oats"]

    def test_fat_identifiers(self, classifier):
        """Test fat sources are reported."""
        result = classifier.classify("Ingredients: Wheat flour, Palm oil, Sugar")
        assert result.fat_identifiers_found == ["palm oil"]

    def test_empty_zone(self, classifier):
        """Test an empty zone classifies as nothing."""
        result = classifier.classify("")
        assert result.raw_ingredients == []
        assert not result.has_sugar

    def test_module_function(self):
        """Test the module-level shortcut."""
        assert classify_ingredients("Sugar").has_sugar


class TestParentheses:
    """Test parenthetical handling and top-level splitting."""

    def test_sub_ingredients_dropped(self, classifier):
        """Test plain sub-ingredient lists are removed."""
        result = classifier.classify("Chocolate (cocoa mass, cocoa butter), Salt")
        assert result.raw_ingredients == ["Chocolate", "Salt"]
        assert result.fat_identifiers_found == []

    def test_sugar_parenthetical_kept(self, classifier):
        """Test sub-ingredients that name a sugar survive."""
        result = classifier.classify("Chocolate (sugar, cocoa mass), Salt")
        assert result.raw_ingredients == ["Chocolate (sugar, cocoa mass)", "Salt"]
        assert result.sugar_matches == [
            SugarMatch(alias="sugar", verbatim="Chocolate (sugar, cocoa mass)")
        ]

    @pytest.mark.parametrize("text,expected", [
        ("Milk solids (12%)", "Milk solids"),
        ("Emulsifier (INS 322)", "Emulsifier (INS 322)"),
        ("Cream [milk, salt] filling", "Cream filling"),
    ])
    def test_strip_parentheticals(self, text, expected):
        """Test which groups survive."""
        assert strip_parentheticals(text) == expected

    def test_split_top_level(self):
        """Test separators inside brackets are ignored."""
        assert split_top_level("A (b, c), D; E") == ["A (b, c)", " D", " E"]

    def test_sweetener_ins_tokens(self):
        """Test numbers are read only on sweetener lines."""
        assert sweetener_ins_tokens("Sweetener (960, 955)") == ["960", "955"]
        assert sweetener_ins_tokens("Acidity regulator (330)") == []


class TestSectionHeader:
    """Test where the ingredients section starts."""

    @pytest.mark.parametrize("line,expected", [
        ("Ingredients: Oats", 13),
        ("INGREDIENTS - Oats", 14),
        ("Ingedients Oats", 11),
        ("Ingredents: Oats", 12),
        ("Made in India. Ingredients: Oats", 28),
    ])
    def test_header_end(self, line, expected):
        """Test line-start, fuzzy and inline headers."""
        assert ingredients_header_end(line, 85.0) == expected

    @pytest.mark.parametrize("line", [
        "All ingredients are vegetarian",
        "Added sugars ingredients: 0g",
        "Total Sugars 12g",
    ])
    def test_not_a_header(self, line):
        """Test sentences and nutrition rows are not headers."""
        assert ingredients_header_end(line, 85.0) is None

    def test_extract_section_without_header(self):
        """Test the whole zone is kept when nothing is a header."""
        zone = "Sugar, Cocoa butter\nAll ingredients are plant based"
        assert extract_section(zone) == zone

    def test_extract_section_keeps_following_lines(self):
        """Test lines after the header line stay in the section."""
        assert extract_section("Ingredients: Oats,\nHoney") == "Oats,\nHoney"
