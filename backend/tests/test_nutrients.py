"""Tests for nutrient extraction."""

import pytest
from sugar_audit.services.nutrients import (
    NutrientExtractor,
    PerUnit,
    extract_nutrients,
    normalize_ocr_digits,
    match_nutrient_label,
)


@pytest.fixture
def extractor():
    """Create extractor instance."""
    return NutrientExtractor()


class TestOCRNormalization:
    """Test digit confusion fixes."""

    @pytest.mark.parametrize("raw,expected", [
        ("Total Sugars O.5g", "Total Sugars 0.5g"),
        ("Protein l2g", "Protein 12g"),
        ("Fat 12,5g", "Fat 12.5g"),
        ("Sodium 2I0mg", "Sodium 210mg"),
        ("Sodium 1,200mg", "Sodium 1200 mg"),
        ("Energy 1,650 kJ", "Energy 1650  kJ"),
    ])
    def test_confusions_fixed(self, raw, expected):
        """Test O/l/I and decimal comma inside numbers."""
        assert normalize_ocr_digits(raw) == expected

    def test_words_untouched(self):
        """Test letters outside numbers are kept."""
        text = "Total Oil Protein"
        assert normalize_ocr_digits(text) == text

    def test_length_preserved(self):
        """Test the output has the same length as the input."""
        text = "Sugars O,5g  Protein l2 g  Energy 4OO kcal"
        assert len(normalize_ocr_digits(text)) == len(text)

    def test_comma_without_unit_is_decimal(self):
        """Test three digits after a comma stay a decimal when no unit follows."""
        assert normalize_ocr_digits("ratio 1,200") == "ratio 1.200"


class TestSugar:
    """Test sugar extraction."""

    def test_sugar_round_trip(self, extractor):
        """Test "sugar {v}g" reads back v for every value up to 9999."""
        for v in range(10000):
            assert extractor.extract(f"sugar {v}g").sugar_per_100g == v

    @pytest.mark.parametrize("v", [0, 7, 12, 99, 450, 9999])
    def test_sugar_decimal_comma(self, extractor, v):
        """Test a comma decimal separator."""
        assert extractor.extract(f"sugar {v},5g").sugar_per_100g == v + 0.5

    def test_total_and_added_sugars(self, extractor):
        """Test added sugars feed their own field."""
        facts = extractor.extract("Total Sugars 10g\nAdded Sugars 4g")
        assert facts.sugar_per_100g == 10
        assert facts.added_sugar_per_100g == 4

    def test_added_sugars_alone_not_total(self, extractor):
        """Test added sugars never fill total sugar."""
        facts = extractor.extract("Added Sugars 4g")
        assert facts.added_sugar_per_100g == 4
        assert facts.sugar_per_100g is None

    def test_ocr_misread_value(self, extractor):
        """Test an O read in place of 0."""
        facts = extractor.extract("Total Sugars O.5g")
        assert facts.sugar_per_100g == 0.5
        assert facts.evidence["sugar_per_100g"] == "Total Sugars O.5g"


class TestPolyols:
    """Test sugar alcohols stay separate from sugar."""

    def test_sugar_alcohol_polyols(self, extractor):
        """Test the combined sugar alcohol (polyols) row."""
        facts = extractor.extract("Sugar alcohol (Polyols) 18g")
        assert facts.polyols_per_100g == 18
        assert facts.sugar_per_100g is None

    def test_polyols_with_sugar(self, extractor):
        """Test both rows on one table."""
        facts = extractor.extract("Total Sugars 0.2g\nPolyols 18 g")
        assert facts.sugar_per_100g == 0.2
        assert facts.polyols_per_100g == 18


class TestUnits:
    """Test unit handling."""

    def test_kj_converted_to_kcal(self, extractor):
        """Test energy in kJ is converted."""
        facts = extractor.extract("Energy 1000 kJ")
        assert facts.calories_per_100g == pytest.approx(239.0, abs=0.1)

    def test_kcal_preferred(self, extractor):
        """Test kcal is read when both are printed."""
        facts = extractor.extract("Energy 1883 kJ / 450 kcal")
        assert facts.calories_per_100g == 450

    def test_sodium_grams_to_mg(self, extractor):
        """Test micronutrients in grams are stored in mg."""
        facts = extractor.extract("Sodium 0.2g")
        assert facts.sodium_per_100g == 200

    def test_percent_ignored(self, extractor):
        """Test %DV values are not read as quantities."""
        facts = extractor.extract("Protein 20%")
        assert facts.protein_per_100g is None

    def test_thousands_separator_mg(self, extractor):
        """Test "1,200mg" is twelve hundred, not 1.2."""
        facts = extractor.extract("Sodium 1,200mg")
        assert facts.sodium_per_100g == 1200
        assert facts.evidence["sodium_per_100g"] == "Sodium 1,200mg"

    def test_thousands_separator_kj(self, extractor):
        """Test a grouped kJ value is converted as a whole."""
        facts = extractor.extract("Energy 1,650 kJ")
        assert facts.calories_per_100g == pytest.approx(394.4, abs=0.1)

    def test_decimal_comma_kept(self, extractor):
        """Test a single digit after the comma is still a decimal."""
        facts = extractor.extract("Fat 12,5g")
        assert facts.fat_per_100g == 12.5


class TestPrimaryRules:
    """Test values read by the prioritized rules."""

    def test_rule_hit_returns_value(self, extractor):
        """Test a plain rule match yields its value."""
        assert extractor.extract("sugar 12g").sugar_per_100g == 12

    def test_rule_hit_in_full_label(self):
        """Test the module function on a two-line zone."""
        facts = extract_nutrients("Total Sugars 12g\nProtein 8g")
        assert facts.sugar_per_100g == 12
        assert facts.protein_per_100g == 8
        assert facts.evidence["protein_per_100g"] == "Protein 8g"


class TestSecondaryScan:
    """Test the triplet scan for rows the rules miss."""

    def test_split_label_recovered(self, extractor):
        """Test a label word broken by OCR."""
        facts = extractor.extract("Phos phorus 120mg")
        assert facts.phosphorus_per_100g == 120
        assert facts.evidence["phosphorus_per_100g"] == "Phos phorus 120mg"

    def test_spurious_value_rejected(self, extractor):
        """Test values at or above the ceiling are rejected."""
        facts = extractor.extract("Phos phorus 12000mg")
        assert facts.phosphorus_per_100g is None

    def test_label_matching_prefers_closest_keyword(self):
        """Test sugar alcohol wins over sugar."""
        assert match_nutrient_label("Sugar alcohol ") == (True, "polyols_per_100g")
        assert match_nutrient_label("Trans Fat ") == (True, None)
        assert match_nutrient_label("Batch ") == (False, None)


class TestPerUnit:
    """Test reference quantity detection."""

    @pytest.mark.parametrize("text,expected", [
        ("Amount per 100g\nSugars 5g", PerUnit.PER_100G),
        ("Per 100 gm\nSugars 5g", PerUnit.PER_100G),
        ("Amount per serving\nSugars 5g", PerUnit.SERVING),
        ("Per pack\nSugars 5g", PerUnit.PACK),
        ("Sugars 5g", PerUnit.PER_100G),
    ])
    def test_per_unit(self, extractor, text, expected):
        """Test canonical phrases."""
        assert extractor.extract(text).per_unit == expected

    def test_unit_label(self, extractor):
        """Test the human-readable label."""
        assert extractor.extract("Per serving\nSugars 5g").unit_label == "per serving"


class TestFullTable:
    """Test a realistic table."""

    def test_table(self):
        """Test every row of a typical Indian label."""
        zone = """Nutritional Information
Per 100g
Energy 480 kcal
Protein 8.5g
Carbohydrate 62g
Total Sugars 24g
Added Sugars 20g
Total Fat 22g
Saturated Fat 10g
Sodium 320mg
Serving size 30g"""
        facts = extract_nutrients(zone)

        assert facts.calories_per_100g == 480
        assert facts.protein_per_100g == 8.5
        assert facts.carbs_per_100g == 62
        assert facts.sugar_per_100g == 24
        assert facts.added_sugar_per_100g == 20
        assert facts.fat_per_100g == 22
        assert facts.saturated_fat_per_100g == 10
        assert facts.sodium_per_100g == 320
        assert facts.serving_size_g == 30
        assert facts.per_unit == PerUnit.PER_100G

    def test_empty_zone(self):
        """Test empty input gives empty facts."""
        facts = extract_nutrients("")
        assert facts.found_fields() == []
