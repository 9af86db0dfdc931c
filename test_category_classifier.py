#!/usr/bin/env python3
"""
Tests for the ordered product-type taxonomy.
"""

import unittest

from standardization.category_classifier import (
    CATEGORY_NAMES,
    TAXONOMY_RULES,
    CategoryClassifier,
    TaxonomyRule,
    classify_product,
    get_category_name,
)


class TestTaxonomyPrecedence(unittest.TestCase):
    """Specific rules must win over the generic ones they contain."""

    def test_sharpener_beats_pencil(self):
        self.assertEqual(classify_product("pencil-sharpener and pencil"), 'kalemtras')
        self.assertEqual(classify_product("metal kalemtras ve kursun kalem seti"), 'kalemtras')

    def test_powerbank_notebook_beats_powerbank_and_notebook(self):
        self.assertEqual(classify_product("powerbankli defter a5"), 'powerbank_defter')

    def test_pen_set_beats_pen(self):
        self.assertEqual(classify_product("tukenmez kalem seti"), 'kalem_seti')
        self.assertEqual(classify_product("metal kalem"), 'kalem')

    def test_travel_mug_beats_thermos(self):
        self.assertEqual(classify_product("termos bardak 350 ml"), 'kupa')
        self.assertEqual(classify_product("celik termos 500 ml"), 'termos')

    def test_bag_beats_notebook(self):
        self.assertEqual(classify_product("notebook cantasi"), 'canta')

    def test_diameter_is_not_a_cap(self):
        self.assertEqual(classify_product("yuvarlak rozet cap 58 mm"), 'rozet')

    def test_english_names(self):
        self.assertEqual(classify_product("ceramic mug"), 'kupa')
        self.assertEqual(classify_product("ballpoint pen"), 'kalem')
        self.assertEqual(classify_product("cotton tote bag"), 'canta')


class TestClassifier(unittest.TestCase):

    def test_no_match(self):
        self.assertIsNone(classify_product("ahsap kutu"))
        self.assertIsNone(classify_product(""))

    def test_custom_rules(self):
        classifier = CategoryClassifier(rules=(TaxonomyRule('x', ('foo',)),))
        self.assertEqual(classifier.classify("foo bar"), 'x')
        self.assertIsNone(classifier.classify("metal kalem"))
        self.assertEqual(classifier.tags, ('x',))

    def test_tags_unique_and_named(self):
        tags = [rule.tag for rule in TAXONOMY_RULES]
        self.assertEqual(len(tags), len(set(tags)))
        for tag in tags:
            self.assertIn(tag, CATEGORY_NAMES)

    def test_category_name_fallback(self):
        self.assertEqual(get_category_name('kalem'), 'Kalem')
        self.assertEqual(get_category_name('kalemtras'), 'Kalemtıraş')
        self.assertEqual(get_category_name('unknown_tag'), 'unknown_tag')


if __name__ == '__main__':
    unittest.main()
