#!/usr/bin/env python3
"""
Tests for record parsing, selection and annotation.
"""

import unittest
from decimal import Decimal

from standardization.processor import ProductProcessor
from standardization.schema import ProductRecord, parse_price


class TestParsePrice(unittest.TestCase):

    def test_formats(self):
        self.assertEqual(parse_price("1.234,50"), Decimal('1234.50'))
        self.assertEqual(parse_price("1,234.50"), Decimal('1234.50'))
        self.assertEqual(parse_price("12,5 TL"), Decimal('12.5'))
        self.assertEqual(parse_price(12), Decimal('12'))
        self.assertEqual(parse_price(12.5), Decimal('12.5'))
        self.assertEqual(parse_price(Decimal('3.10')), Decimal('3.10'))

    def test_garbage_never_raises(self):
        for raw in (None, "", "teklif", "--", True, "NaN"):
            self.assertIsNone(parse_price(raw), raw)

    def test_grouped_thousands(self):
        self.assertEqual(parse_price("1.234.567"), Decimal('1234567'))
        self.assertEqual(parse_price("1,234,567 TL"), Decimal('1234567'))
        self.assertEqual(parse_price("TL 1 234,50"), Decimal('1234.50'))

    def test_letters_between_digits_rejected(self):
        for raw in ("1e3", "12a50", "1.2x3"):
            self.assertIsNone(parse_price(raw), raw)


class TestProductRecord(unittest.TestCase):

    def test_from_crawler_columns(self):
        record = ProductRecord.from_dict({
            'Store': 'promozone.com.tr',
            'ProductName': 'Metal Kalem',
            'Price': '12,50',
            'Currency': 'TRY',
            'Url': 'https://promozone.com.tr/metal-kalem',
            'MinOrderQty': '100',
            'RequiresQuote': 'False',
        })
        self.assertEqual(record.vendor, 'promozone.com.tr')
        self.assertEqual(record.name, 'Metal Kalem')
        self.assertEqual(record.price, Decimal('12.50'))
        self.assertEqual(record.min_order_qty, 100)
        self.assertFalse(record.requires_quote)

    def test_garbled_values_fall_back(self):
        record = ProductRecord.from_dict({'vendor': 'x', 'name': 'Metal Kalem', 'min_order_qty': 'yok'})
        self.assertIsNone(record.price)
        self.assertEqual(record.min_order_qty, 1)
        self.assertEqual(record.currency, 'TRY')

    def test_to_dict(self):
        record = ProductRecord(vendor='a', name='Metal Kalem', price=Decimal('12.50'))
        self.assertEqual(record.to_dict()['price'], '12.50')
        self.assertEqual(ProductRecord.from_dict(record.to_dict()), record)


class TestSelection(unittest.TestCase):

    def setUp(self):
        self.processor = ProductProcessor()

    def test_url_dedupe_prefers_priced(self):
        records = [
            ProductRecord(vendor='a', name='Metal Kalem', url='https://a.example/1'),
            ProductRecord(vendor='a', name='Metal Kalem', price=Decimal('5'), url='https://a.example/1'),
        ]
        priced, quote = self.processor.select_records(records)
        self.assertEqual([r.price for r in priced], [Decimal('5')])
        self.assertEqual(quote, [])
        self.assertEqual(self.processor.get_stats()['duplicate_url'], 1)

    def test_records_without_url_are_not_merged(self):
        records = [
            ProductRecord(vendor='a', name='Metal Kalem', price=Decimal('5')),
            ProductRecord(vendor='b', name='Metal Kalem', price=Decimal('6')),
        ]
        priced, _ = self.processor.select_records(records)
        self.assertEqual(len(priced), 2)

    def test_split_priced_and_quote(self):
        records = [
            ProductRecord(vendor='a', name='Metal Kalem', price=Decimal('5'), url='u1'),
            ProductRecord(vendor='a', name='Deri Ajanda', url='u2'),
            ProductRecord(vendor='a', name='Ahşap Kalem', price=Decimal('5'), requires_quote=True, url='u3'),
            ProductRecord(vendor='a', name='Kupa', price=Decimal('5'), url='u4'),
            ProductRecord(vendor='a', name='Bambu Kalem', price=Decimal('0'), url='u5'),
        ]
        priced, quote = self.processor.select_records(records)
        self.assertEqual([r.url for r in priced], ['u1'])
        self.assertEqual([r.url for r in quote], ['u2', 'u3'])

        stats = self.processor.get_stats()
        self.assertEqual(stats['short_name'], 1)
        self.assertEqual(stats['invalid_price'], 1)

    def test_reset_stats(self):
        self.processor.select_records([ProductRecord(vendor='a', name='Kupa')])
        self.processor.reset_stats()
        self.assertEqual(self.processor.get_stats()['received'], 0)


class TestAnnotation(unittest.TestCase):

    def setUp(self):
        self.processor = ProductProcessor()

    def test_annotate(self):
        product = self.processor.annotate(
            ProductRecord(vendor='A', name='10.000 mAh Metal Powerbank Hediye', price=Decimal('135'))
        )
        self.assertEqual(product.normalized_name, '10.000 mah metal powerbank hediye')
        self.assertEqual(product.product_type, 'powerbank')
        self.assertEqual(product.size_key, '10000 mah')
        self.assertFalse(product.is_volume)
        self.assertEqual(product.tokens, frozenset({'metal', 'powerbank'}))
        self.assertEqual(product.features, frozenset({'metal'}))
        self.assertEqual(product.price, Decimal('135'))
        self.assertEqual(product.vendor, 'A')

    def test_batch_drops_unclassified(self):
        records = [
            ProductRecord(vendor='a', name='Metal Kalem', price=Decimal('5')),
            ProductRecord(vendor='a', name='Ahşap Kutu', price=Decimal('5')),
        ]
        annotated = self.processor.annotate_batch(records)
        self.assertEqual([p.product_type for p in annotated], ['kalem'])
        self.assertEqual(self.processor.get_stats()['unclassified'], 1)

    def test_batch_drops_ineligible(self):
        annotated = self.processor.annotate_batch([ProductRecord(vendor='a', name='Metal Kalem')])
        self.assertEqual(annotated, [])
        self.assertEqual(self.processor.get_stats()['ineligible'], 1)


if __name__ == '__main__':
    unittest.main()
