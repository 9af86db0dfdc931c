"""
Cross-Vendor Matching Pipeline

Matches promotional products across vendor sites.
Uses product-type blocking so only same-type offers are ever compared.

Phases:
1. Selection: URL dedupe, priced vs quote-only split
2. Annotation: normalize, classify, size, tokens, features
3. Blocking: bucket by product type (first-appearance order)
4. Clustering: online complete-linkage per bucket
5. Grouping: cheapest offer per vendor, price statistics, sorting
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Tuple

from standardization.processor import ProductProcessor
from standardization.schema import ProductRecord

from .clustering import ProductCluster, bucket_by_type, cluster_bucket
from .config import MatchingConfig, default_config
from .groups import ComparisonGroup, best_deals, build_group, sort_groups

logger = logging.getLogger(__name__)


@dataclass
class MatchResult:
    """Everything one matching run produces."""
    groups: List[ComparisonGroup] = field(default_factory=list)
    quote_only: List[ProductRecord] = field(default_factory=list)
    stats: Dict[str, Any] = field(default_factory=dict)

    def best_deals(self, limit: int = 50) -> List[ComparisonGroup]:
        return best_deals(self.groups, limit)


class ProductMatcher:
    """
    Cross-vendor product matcher with product-type blocking.

    A matcher holds no state between runs apart from its stats, so the
    same input always gives the same groups in the same order.
    """

    def __init__(self, config: MatchingConfig = default_config, processor: Optional[ProductProcessor] = None):
        self.config = config
        self.processor = processor or ProductProcessor(min_name_length=config.min_name_length)

    def run(self, records: Iterable[ProductRecord], max_workers: Optional[int] = None) -> MatchResult:
        self.processor.reset_stats()

        priced, quote = self.processor.select_records(records)
        annotated = self.processor.annotate_batch(priced)
        buckets = bucket_by_type(annotated)

        clustered = self._cluster(buckets, max_workers or self.config.max_workers)

        groups = []
        clusters_total = 0
        singletons = 0
        for _, clusters in clustered:
            for cluster in clusters:
                clusters_total += 1
                if len(cluster) == 1:
                    singletons += 1
                group = build_group(cluster)
                if group is not None:
                    groups.append(group)

        groups = sort_groups(groups)

        stats = self.processor.get_stats()
        stats.update({
            'buckets': len(buckets),
            'by_type': {product_type: len(bucket) for product_type, bucket in buckets.items()},
            'clusters': clusters_total,
            'singletons': singletons,
            'groups': len(groups),
        })
        return MatchResult(groups=groups, quote_only=quote, stats=stats)

    def _cluster(
        self,
        buckets: Dict[str, list],
        max_workers: int,
    ) -> List[Tuple[str, List[ProductCluster]]]:
        """Cluster buckets, optionally in a thread pool. Output keeps bucket order."""
        types = list(buckets)
        if max_workers <= 1 or len(types) <= 1:
            return [(t, cluster_bucket(buckets[t], self.config)) for t in types]

        logger.debug(f"Clustering {len(types)} buckets with {max_workers} workers")
        with ThreadPoolExecutor(max_workers=max_workers) as executor:
            results = executor.map(lambda t: cluster_bucket(buckets[t], self.config), types)
            return list(zip(types, results))


def match_products(
    records: Iterable[ProductRecord],
    config: MatchingConfig = default_config,
    max_workers: Optional[int] = None,
) -> List[ComparisonGroup]:
    """
    Match records across vendors and return sorted comparison groups.

    Example:
        >>> groups = match_products(records)
        >>> groups[0].site_count >= groups[-1].site_count
        True
    """
    return ProductMatcher(config).run(records, max_workers=max_workers).groups


def run_matching_pipeline(
    records: Iterable[ProductRecord],
    config: MatchingConfig = default_config,
    max_workers: Optional[int] = None,
) -> MatchResult:
    """Run the matcher and log a summary of the run."""
    logger.info("=" * 60)
    logger.info("CROSS-VENDOR MATCHING PIPELINE")
    logger.info("=" * 60)

    result = ProductMatcher(config).run(records, max_workers=max_workers)
    stats = result.stats

    logger.info(f"Records received: {stats['received']}")
    logger.info(f"Priced: {stats['priced']}, quote only: {stats['quote_only']}")
    logger.info(
        f"Dropped: {stats['short_name']} short names, {stats['duplicate_url']} duplicate URLs, "
        f"{stats['invalid_price']} invalid prices, {stats['unclassified']} unclassified"
    )
    logger.info(f"Product types: {stats['buckets']}, clusters: {stats['clusters']} ({stats['singletons']} singletons)")
    logger.info(f"Comparison groups: {stats['groups']}")
    return result
