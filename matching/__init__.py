"""
PromoScanner Matching Module

Cross-vendor product matching with product-type blocking.
"""

from .config import MatchingConfig, default_config, load_config
from .similarity import jaccard, similarity
from .clustering import ProductCluster, bucket_by_type, cluster_bucket
from .groups import ComparisonGroup, VendorCost, best_deals, build_group, sort_groups
from .pipeline import MatchResult, ProductMatcher, match_products, run_matching_pipeline

__all__ = [
    'MatchingConfig',
    'default_config',
    'load_config',
    'jaccard',
    'similarity',
    'ProductCluster',
    'bucket_by_type',
    'cluster_bucket',
    'ComparisonGroup',
    'VendorCost',
    'best_deals',
    'build_group',
    'sort_groups',
    'MatchResult',
    'ProductMatcher',
    'match_products',
    'run_matching_pipeline',
]
