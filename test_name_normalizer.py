#!/usr/bin/env python3
"""
Tests for vendor name normalization and Turkish folding.
"""

import unittest

from standardization.name_normalizer import fold_turkish, normalize_name
from standardization.quantity_parser import extract_size


class TestFoldTurkish(unittest.TestCase):

    def test_upper_and_lower_letters_fold(self):
        self.assertEqual(fold_turkish("ÇĞİÖŞÜ çğıöşü"), "cgiosu cgiosu")

    def test_circumflex_letters_fold(self):
        self.assertEqual(fold_turkish("Kâğıt Îmâl Ûmit"), "kagit imal umit")

    def test_dotted_capital_i_leaves_no_combining_mark(self):
        self.assertEqual(fold_turkish("İSTANBUL"), "istanbul")

    def test_empty(self):
        self.assertEqual(fold_turkish(""), "")


class TestNormalizeName(unittest.TestCase):
    """normalize_name strips boilerplate but keeps what sizes need."""

    def test_code_and_marketing_suffix_removed(self):
        self.assertEqual(
            normalize_name("PB-2041 - Kablosuz Şarjlı Powerbank 10.000 mAh | Ücretsiz Kargo"),
            "kablosuz sarjli powerbank 10.000 mah",
        )

    def test_bracketed_code_removed(self):
        self.assertEqual(normalize_name("(12345) Seramik Kupa"), "seramik kupa")

    def test_filler_phrase_removed(self):
        self.assertEqual(normalize_name("Logo Baskılı ÇELİK Termos 500 ml"), "celik termos 500 ml")

    def test_domain_suffix_removed(self):
        self.assertEqual(normalize_name("Bambu Kalem - promozone.com.tr"), "bambu kalem")

    def test_html_leftovers_removed(self):
        self.assertEqual(normalize_name("Metal <b>Kalem</b> &amp; Kutu"), "metal kalem kutu")

    def test_trademark_signs_removed(self):
        self.assertEqual(normalize_name("Parker® Jotter™ Kalem"), "parker jotter kalem")

    def test_size_separators_survive(self):
        self.assertEqual(normalize_name("Spiralli Defter 14,5x21 cm"), "spiralli defter 14,5x21 cm")

    def test_size_at_start_is_not_a_code(self):
        self.assertEqual(normalize_name("500 ml Termos"), "500 ml termos")

    def test_attached_size_before_separator_is_kept(self):
        self.assertEqual(normalize_name("10000mAh - Metal Powerbank"), "10000mah - metal powerbank")
        self.assertEqual(normalize_name("5000mAh | Metal Powerbank"), "5000mah | metal powerbank")
        self.assertEqual(normalize_name("500ml - Termos Kupa"), "500ml - termos kupa")
        self.assertEqual(normalize_name("(500ml) Termos"), "(500ml) termos")
        self.assertEqual(extract_size(normalize_name("10000mAh - Metal Powerbank")), ('10000 mah', False))

    def test_numeric_code_before_separator_removed(self):
        self.assertEqual(normalize_name("12345 | Kalem"), "kalem")
        self.assertEqual(normalize_name("kod 5531: Defter"), "defter")

    def test_empty_and_whitespace(self):
        self.assertEqual(normalize_name(""), "")
        self.assertEqual(normalize_name("   "), "")
        self.assertEqual(normalize_name(None), "")

    def test_idempotent(self):
        names = [
            "PB-2041 - Kablosuz Şarjlı Powerbank 10.000 mAh | Ücretsiz Kargo",
            "Logo Baskılı ÇELİK Termos 500 ml",
            "Bambu Kalem - promozone.com.tr",
        ]
        for name in names:
            once = normalize_name(name)
            self.assertEqual(normalize_name(once), once, name)


if __name__ == '__main__':
    unittest.main()
