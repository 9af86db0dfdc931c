"""
Online complete-linkage clustering within one product-type bucket.

Candidates are taken in the order received. A candidate joins the
existing cluster whose *weakest* link to it is strongest, provided that
link meets the bucket threshold and the cluster is below the size cap.
Otherwise it starts a new cluster.

The result depends on input order: similarity is not transitive, and a
member is only guaranteed to be similar enough to the members that were
already present when it joined.
"""

import logging
from collections import OrderedDict
from dataclasses import dataclass, field
from typing import Callable, Dict, Iterable, List, Optional, Tuple

from standardization.schema import AnnotatedProduct

from .config import MatchingConfig, default_config
from .similarity import similarity

logger = logging.getLogger(__name__)

SimilarityFn = Callable[[AnnotatedProduct, AnnotatedProduct, MatchingConfig], float]


@dataclass
class ProductCluster:
    """Same-type products assembled by the clusterer, in insertion order."""

    product_type: Optional[str]
    members: List[AnnotatedProduct] = field(default_factory=list)
    # Linkage score each member joined with (1.0 for the seed)
    link_scores: List[float] = field(default_factory=list)

    def add(self, product: AnnotatedProduct, link_score: float = 1.0):
        self.members.append(product)
        self.link_scores.append(link_score)

    def __len__(self) -> int:
        return len(self.members)

    @property
    def vendors(self) -> List[str]:
        """Distinct vendors in first-seen order."""
        return list(OrderedDict.fromkeys(m.vendor for m in self.members))


def bucket_by_type(products: Iterable[AnnotatedProduct]) -> "OrderedDict[str, List[AnnotatedProduct]]":
    """
    Partition products by product type.

    Buckets appear in order of their first product; products keep their
    relative order inside a bucket. Unclassified products are skipped.
    """
    buckets: "OrderedDict[str, List[AnnotatedProduct]]" = OrderedDict()
    for product in products:
        if product.product_type is None:
            continue
        buckets.setdefault(product.product_type, []).append(product)
    return buckets


def _weakest_link(
    candidate: AnnotatedProduct,
    cluster: ProductCluster,
    threshold: float,
    config: MatchingConfig,
    score_fn: SimilarityFn,
) -> float:
    """Minimum similarity to all members; stops once below threshold."""
    weakest = 1.0
    for member in cluster.members:
        score = score_fn(candidate, member, config)
        if score < weakest:
            weakest = score
            if weakest < threshold:
                break
    return weakest


def cluster_bucket(
    products: List[AnnotatedProduct],
    config: MatchingConfig = default_config,
    threshold: Optional[float] = None,
    score_fn: SimilarityFn = similarity,
) -> List[ProductCluster]:
    """
    Cluster one bucket of same-type products.

    Args:
        products: Bucket members in processing order
        config: Matching configuration (threshold, cluster size cap)
        threshold: Override for the bucket threshold
        score_fn: Pairwise similarity function

    Returns:
        Clusters in creation order
    """
    if not products:
        return []

    product_type = products[0].product_type
    if threshold is None:
        threshold = config.threshold_for(product_type)

    clusters: List[ProductCluster] = []

    for candidate in products:
        best: Optional[ProductCluster] = None
        best_score = -1.0

        for cluster in clusters:
            if len(cluster) >= config.max_cluster_size:
                continue
            score = _weakest_link(candidate, cluster, threshold, config, score_fn)
            if score >= threshold and score > best_score:
                best, best_score = cluster, score

        if best is None:
            cluster = ProductCluster(product_type=product_type)
            cluster.add(candidate)
            clusters.append(cluster)
        else:
            best.add(candidate, best_score)

    logger.debug(
        f"Bucket {product_type}: {len(products)} products → {len(clusters)} clusters "
        f"(threshold {threshold:.2f})"
    )
    return clusters


def cluster_buckets(
    buckets: Dict[str, List[AnnotatedProduct]],
    config: MatchingConfig = default_config,
) -> List[Tuple[str, List[ProductCluster]]]:
    """Cluster every bucket sequentially, keeping bucket order."""
    return [(product_type, cluster_bucket(bucket, config)) for product_type, bucket in buckets.items()]
