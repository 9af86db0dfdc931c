"""
Comparison Groups

Turns a product cluster into a cross-vendor price comparison. A cluster
only becomes a group when at least two vendors remain after keeping each
vendor's cheapest offer.

All money values are Decimal.
"""

from collections import Counter, OrderedDict
from dataclasses import dataclass, field
from decimal import ROUND_HALF_UP, Decimal
from functools import reduce
from typing import Any, Dict, Iterable, List, Optional, Tuple

from standardization.category_classifier import get_category_name
from standardization.schema import AnnotatedProduct

from .clustering import ProductCluster

CENTS = Decimal('0.01')
BEST_DEALS_LIMIT = 50


@dataclass(frozen=True)
class VendorCost:
    """What buying from one vendor costs at its minimum order quantity."""
    vendor: str
    unit_price: Decimal
    min_order_qty: int
    total_cost: Decimal
    url: str = ""

    def describe(self) -> str:
        return f"{self.vendor}: {self.unit_price:.2f} x {self.min_order_qty} = {self.total_cost:.2f}"


@dataclass(frozen=True)
class ComparisonGroup:
    """One cross-vendor price comparison for products judged equivalent."""

    category: str
    product_type: str
    size: str
    features: Tuple[str, ...]
    product_count: int
    site_count: int

    min_price: Decimal
    min_price_vendor: str
    min_price_url: str
    min_price_order_qty: int
    min_price_total_cost: Decimal

    max_price: Decimal
    max_price_vendor: str
    max_price_url: str
    max_price_order_qty: int
    max_price_total_cost: Decimal

    price_difference: Decimal
    avg_price: Decimal
    min_order_qty: int
    currency: str = "TRY"

    vendor_costs: Tuple[VendorCost, ...] = field(default_factory=tuple)
    product_names: Tuple[str, ...] = field(default_factory=tuple)
    vendors: Tuple[str, ...] = field(default_factory=tuple)
    urls: Tuple[str, ...] = field(default_factory=tuple)

    @property
    def key_features(self) -> str:
        return ", ".join(self.features)

    @property
    def cost_breakdown(self) -> str:
        return " | ".join(cost.describe() for cost in self.vendor_costs)

    @property
    def price_difference_pct(self) -> Decimal:
        """Difference as a share of the max price, in percent (1 decimal)."""
        if self.max_price <= 0:
            return Decimal('0.0')
        pct = self.price_difference / self.max_price * 100
        return pct.quantize(Decimal('0.1'), rounding=ROUND_HALF_UP)

    def to_dict(self) -> Dict[str, Any]:
        """JSON-friendly form; Decimals become strings."""
        return {
            "category": self.category,
            "product_type": self.product_type,
            "size": self.size,
            "features": list(self.features),
            "product_count": self.product_count,
            "site_count": self.site_count,
            "min_price": str(self.min_price),
            "min_price_vendor": self.min_price_vendor,
            "min_price_url": self.min_price_url,
            "min_price_order_qty": self.min_price_order_qty,
            "min_price_total_cost": str(self.min_price_total_cost),
            "max_price": str(self.max_price),
            "max_price_vendor": self.max_price_vendor,
            "max_price_url": self.max_price_url,
            "max_price_order_qty": self.max_price_order_qty,
            "max_price_total_cost": str(self.max_price_total_cost),
            "price_difference": str(self.price_difference),
            "price_difference_pct": str(self.price_difference_pct),
            "avg_price": str(self.avg_price),
            "min_order_qty": self.min_order_qty,
            "currency": self.currency,
            "vendor_costs": [
                {
                    "vendor": c.vendor,
                    "unit_price": str(c.unit_price),
                    "min_order_qty": c.min_order_qty,
                    "total_cost": str(c.total_cost),
                    "url": c.url,
                }
                for c in self.vendor_costs
            ],
            "product_names": list(self.product_names),
            "vendors": list(self.vendors),
            "urls": list(self.urls),
        }


def cheapest_per_vendor(members: Iterable[AnnotatedProduct]) -> List[AnnotatedProduct]:
    """
    One representative per vendor: its cheapest offer.

    Vendors keep first-seen order; price ties keep the first-seen offer.
    """
    best: "OrderedDict[str, AnnotatedProduct]" = OrderedDict()
    for product in members:
        if product.price is None:
            continue
        current = best.get(product.vendor)
        if current is None or product.price < current.price:
            best[product.vendor] = product
    return list(best.values())


def representative_size(members: Iterable[AnnotatedProduct]) -> str:
    """Most common size key over all members (ties: first seen)."""
    counts = Counter(m.size_key for m in members if m.size_key)
    if not counts:
        return ""
    return counts.most_common(1)[0][0]


def common_features(members: List[AnnotatedProduct]) -> Tuple[str, ...]:
    """Features every member shares, sorted."""
    if not members:
        return ()
    shared = reduce(lambda acc, m: acc & m.features, members[1:], members[0].features)
    return tuple(sorted(shared))


def _total_cost(product: AnnotatedProduct) -> Decimal:
    return product.price * product.order_qty


def build_group(cluster: ProductCluster) -> Optional[ComparisonGroup]:
    """
    Build a comparison group from a cluster.

    Returns:
        ComparisonGroup, or None when fewer than two vendors remain
    """
    members = cluster.members
    representatives = cheapest_per_vendor(members)
    if len(representatives) < 2:
        return None

    cheapest = min(representatives, key=lambda p: p.price)
    priciest = max(representatives, key=lambda p: p.price)

    prices = [p.price for p in representatives]
    avg_price = (sum(prices, Decimal('0')) / len(prices)).quantize(CENTS, rounding=ROUND_HALF_UP)

    vendor_costs = tuple(
        VendorCost(
            vendor=p.vendor,
            unit_price=p.price,
            min_order_qty=p.order_qty,
            total_cost=_total_cost(p),
            url=p.record.url,
        )
        for p in representatives
    )

    product_type = cluster.product_type or members[0].product_type

    return ComparisonGroup(
        category=get_category_name(product_type),
        product_type=product_type,
        size=representative_size(members),
        features=common_features(members),
        product_count=len(members),
        site_count=len(representatives),
        min_price=cheapest.price,
        min_price_vendor=cheapest.vendor,
        min_price_url=cheapest.record.url,
        min_price_order_qty=cheapest.order_qty,
        min_price_total_cost=_total_cost(cheapest),
        max_price=priciest.price,
        max_price_vendor=priciest.vendor,
        max_price_url=priciest.record.url,
        max_price_order_qty=priciest.order_qty,
        max_price_total_cost=_total_cost(priciest),
        price_difference=priciest.price - cheapest.price,
        avg_price=avg_price,
        min_order_qty=min(p.order_qty for p in representatives),
        currency=cheapest.record.currency,
        vendor_costs=vendor_costs,
        product_names=tuple(p.record.name for p in representatives),
        vendors=tuple(p.vendor for p in representatives),
        urls=tuple(p.record.url for p in representatives),
    )


def sort_groups(groups: Iterable[ComparisonGroup]) -> List[ComparisonGroup]:
    """Most vendors first, then biggest price difference. Stable for ties."""
    return sorted(groups, key=lambda g: (-g.site_count, -g.price_difference))


def best_deals(groups: Iterable[ComparisonGroup], limit: int = BEST_DEALS_LIMIT) -> List[ComparisonGroup]:
    """Cross-vendor groups with a real price gap, biggest gap first."""
    deals = [g for g in groups if g.site_count >= 2 and g.price_difference > 0]
    deals.sort(key=lambda g: -g.price_difference)
    return deals[:limit]
