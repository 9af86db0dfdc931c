"""
Pairwise product similarity.

similarity(a, b) is symmetric, pure and always within [0, 1].

Evaluation order (any gate short-circuits to 0):
1. Size gate       - both sizes known and too far apart
2. Price-tier gate - different currencies, or one offer costs more than
                   `price_ratio_limit` times the other
3. Empty tokens    - nothing left to compare
4. Jaccard of token sets
5. Material conflict penalty, else premium-material mismatch penalty
6. Shared feature bonus, clipped to 1.0
"""

from decimal import Decimal
from typing import FrozenSet

from standardization.feature_tagger import MATERIAL_FAMILIES, PREMIUM_MATERIALS
from standardization.quantity_parser import sizes_compatible
from standardization.schema import AnnotatedProduct

from .config import MatchingConfig, default_config


def jaccard(a: FrozenSet[str], b: FrozenSet[str]) -> float:
    """|A∩B| / |A∪B|, 0.0 for two empty sets."""
    union = len(a | b)
    if union == 0:
        return 0.0
    return len(a & b) / union


def size_gate(a: AnnotatedProduct, b: AnnotatedProduct, config: MatchingConfig = default_config) -> bool:
    """True when the two sizes are compatible (or either is unknown)."""
    if a.is_volume or b.is_volume:
        tolerance = config.volume_size_tolerance
    else:
        tolerance = config.size_tolerance
    return sizes_compatible(a.size_key, b.size_key, tolerance, config.epsilon)


def price_gate(a: AnnotatedProduct, b: AnnotatedProduct, config: MatchingConfig = default_config) -> bool:
    """True unless the offers are in different currencies or price tiers."""
    if a.record.currency.upper() != b.record.currency.upper():
        return False
    if a.price is None or b.price is None or a.price <= 0 or b.price <= 0:
        return True
    return price_ratio(a.price, b.price, config.epsilon) <= config.price_ratio_limit


def material_factor(a: AnnotatedProduct, b: AnnotatedProduct, config: MatchingConfig = default_config) -> float:
    """Multiplier for material disagreement between two names."""
    families_a = a.features & MATERIAL_FAMILIES
    families_b = b.features & MATERIAL_FAMILIES

    if families_a and families_b and families_a.isdisjoint(families_b):
        return config.material_conflict_penalty

    premium_a = bool(families_a & PREMIUM_MATERIALS)
    premium_b = bool(families_b & PREMIUM_MATERIALS)
    if (premium_a and not families_b) or (premium_b and not families_a):
        return config.premium_mismatch_penalty

    return 1.0


def similarity(a: AnnotatedProduct, b: AnnotatedProduct, config: MatchingConfig = default_config) -> float:
    """
    Similarity score between two annotated products.

    Returns:
        Score in [0, 1]; 0 means "never the same product"
    """
    if not size_gate(a, b, config):
        return 0.0
    if not price_gate(a, b, config):
        return 0.0
    if not a.tokens or not b.tokens:
        return 0.0

    score = jaccard(a.tokens, b.tokens)
    score *= material_factor(a, b, config)

    shared = len(a.features & b.features)
    score += config.feature_bonus * shared

    return max(0.0, min(1.0, score))


def price_ratio(a: Decimal, b: Decimal, epsilon: Decimal = default_config.epsilon) -> Decimal:
    """max/min of two prices with the denominator clamped to epsilon."""
    return max(a, b) / max(min(a, b), epsilon)
