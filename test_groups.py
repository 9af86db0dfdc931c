#!/usr/bin/env python3
"""
Tests for building comparison groups from clusters.
"""

import unittest
from decimal import Decimal

from matching.clustering import ProductCluster
from matching.groups import best_deals, build_group, cheapest_per_vendor, sort_groups
from standardization.schema import AnnotatedProduct, ProductRecord


def offer(vendor, price, url=None, size=None, features=(), moq=1, product_type='kupa'):
    record = ProductRecord(
        vendor=vendor,
        name=f"Seramik Kupa {vendor}",
        price=Decimal(price),
        url=url or f"https://{vendor.lower()}.example/{price}",
        min_order_qty=moq,
    )
    return AnnotatedProduct(
        record=record,
        normalized_name=record.name.lower(),
        product_type=product_type,
        size_key=size,
        tokens=frozenset({'seramik', 'kupa'}),
        features=frozenset(features),
        price=record.price,
    )


def cluster_of(*offers, product_type='kupa'):
    cluster = ProductCluster(product_type)
    for o in offers:
        cluster.add(o)
    return cluster


class TestVendorCollapse(unittest.TestCase):

    def test_cheapest_offer_per_vendor(self):
        cluster = cluster_of(
            offer('A', '15.00'), offer('B', '18.00'), offer('A', '12.00'),
            offer('A', '20.00'), offer('B', '14.00'),
        )
        group = build_group(cluster)

        self.assertEqual(group.site_count, 2)
        self.assertEqual(group.product_count, 5)
        self.assertEqual(group.vendors, ('A', 'B'))
        self.assertEqual([c.unit_price for c in group.vendor_costs], [Decimal('12.00'), Decimal('14.00')])
        self.assertEqual(group.min_price, Decimal('12.00'))
        self.assertEqual(group.min_price_vendor, 'A')
        self.assertEqual(group.max_price, Decimal('14.00'))
        self.assertEqual(group.max_price_vendor, 'B')
        self.assertEqual(group.price_difference, Decimal('2.00'))
        self.assertEqual(group.avg_price, Decimal('13.00'))

    def test_price_tie_keeps_first_seen(self):
        reps = cheapest_per_vendor([
            offer('A', '12.00', url='https://a.example/first'),
            offer('A', '12.00', url='https://a.example/second'),
        ])
        self.assertEqual([r.record.url for r in reps], ['https://a.example/first'])

    def test_single_vendor_gives_no_group(self):
        self.assertIsNone(build_group(cluster_of(offer('A', '10'), offer('A', '12'), offer('A', '9'))))
        self.assertIsNone(build_group(cluster_of(offer('A', '10'))))


class TestGroupStats(unittest.TestCase):

    def test_total_cost_uses_min_order_qty(self):
        group = build_group(cluster_of(offer('A', '2.50', moq=50), offer('B', '3.00', moq=0)))
        self.assertEqual(group.min_price_total_cost, Decimal('125.00'))
        self.assertEqual(group.max_price_order_qty, 1)
        self.assertEqual(group.max_price_total_cost, Decimal('3.00'))
        self.assertEqual(group.min_order_qty, 1)

    def test_average_rounds_half_up(self):
        group = build_group(cluster_of(offer('A', '1.00'), offer('B', '1.01')))
        self.assertEqual(group.avg_price, Decimal('1.01'))

    def test_most_common_size(self):
        group = build_group(cluster_of(
            offer('A', '10', size='550 ml'), offer('B', '11', size='500 ml'), offer('C', '12', size='500 ml'),
        ))
        self.assertEqual(group.size, '500 ml')

    def test_size_tie_keeps_first_seen(self):
        group = build_group(cluster_of(offer('A', '10', size='550 ml'), offer('B', '11', size='500 ml')))
        self.assertEqual(group.size, '550 ml')

    def test_no_size(self):
        group = build_group(cluster_of(offer('A', '10'), offer('B', '11')))
        self.assertEqual(group.size, '')

    def test_common_features_sorted(self):
        group = build_group(cluster_of(
            offer('A', '10', features={'metal', 'kapakli', 'led'}),
            offer('B', '11', features={'metal', 'kapakli'}),
        ))
        self.assertEqual(group.features, ('kapakli', 'metal'))
        self.assertEqual(group.key_features, 'kapakli, metal')

    def test_category_display_name(self):
        group = build_group(cluster_of(offer('A', '10'), offer('B', '11')))
        self.assertEqual(group.category, 'Kupa')
        self.assertEqual(group.product_type, 'kupa')

    def test_to_dict_renders_decimals_as_strings(self):
        group = build_group(cluster_of(offer('A', '12.00'), offer('B', '14.00')))
        data = group.to_dict()
        self.assertEqual(data['min_price'], '12.00')
        self.assertEqual(data['price_difference'], '2.00')
        self.assertEqual(data['price_difference_pct'], '14.3')
        self.assertEqual(data['vendor_costs'][1]['total_cost'], '14.00')
        self.assertEqual(group.cost_breakdown, "A: 12.00 x 1 = 12.00 | B: 14.00 x 1 = 14.00")


class TestOrdering(unittest.TestCase):

    def setUp(self):
        self.two_small = build_group(cluster_of(offer('A', '10'), offer('B', '11')))
        self.two_big = build_group(cluster_of(offer('A', '10'), offer('B', '30')))
        self.three = build_group(cluster_of(offer('A', '10'), offer('B', '10'), offer('C', '10')))

    def test_sort_site_count_then_difference(self):
        ordered = sort_groups([self.two_small, self.two_big, self.three])
        self.assertEqual(ordered, [self.three, self.two_big, self.two_small])

    def test_sort_is_stable(self):
        twin = build_group(cluster_of(offer('C', '10'), offer('D', '11')))
        self.assertEqual(sort_groups([self.two_small, twin]), [self.two_small, twin])
        self.assertEqual(sort_groups([twin, self.two_small]), [twin, self.two_small])

    def test_best_deals(self):
        deals = best_deals([self.two_small, self.three, self.two_big])
        self.assertEqual(deals, [self.two_big, self.two_small])
        self.assertEqual(best_deals([self.two_small, self.two_big], limit=1), [self.two_big])


if __name__ == '__main__':
    unittest.main()
