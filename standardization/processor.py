"""
Product Processor

Turns crawler ProductRecords into AnnotatedProducts. Runs every
standardization step in the correct order and keeps counts of what was
dropped and why.

Usage:
    processor = ProductProcessor()

    priced, quote = processor.select_records(records)
    annotated = processor.annotate_batch(priced)
"""

import logging
from collections import OrderedDict
from typing import Dict, Iterable, Iterator, List, Tuple

from .category_classifier import CategoryClassifier
from .feature_tagger import extract_features
from .name_normalizer import normalize_name
from .quantity_parser import extract_size
from .schema import AnnotatedProduct, ProductRecord
from .tokenizer import tokenize

logger = logging.getLogger(__name__)

DEFAULT_MIN_NAME_LENGTH = 5


class ProductProcessor:
    """
    Annotates product records for matching.

    Records are processed in the order given; nothing is cached between
    calls, so two runs over the same input give the same output.
    """

    def __init__(
        self,
        classifier: CategoryClassifier = None,
        min_name_length: int = DEFAULT_MIN_NAME_LENGTH,
    ):
        self.classifier = classifier or CategoryClassifier()
        self.min_name_length = min_name_length
        self.reset_stats()

    # === Selection ===

    def is_eligible(self, record: ProductRecord) -> bool:
        """A record enters matching only with a positive price and a real name."""
        if record.requires_quote:
            return False
        if record.price is None or record.price <= 0:
            return False
        name = (record.name or '').strip()
        return len(name) >= self.min_name_length

    def select_records(
        self,
        records: Iterable[ProductRecord],
    ) -> Tuple[List[ProductRecord], List[ProductRecord]]:
        """
        Deduplicate crawler output and split it into priced and quote-only.

        - Records with a name shorter than the minimum are dropped
        - One record per URL: the first priced one, else the first seen
        - Records without a URL are never merged
        - Order of first appearance is kept

        Returns:
            (priced, quote_only) lists
        """
        by_url: "OrderedDict[object, ProductRecord]" = OrderedDict()

        for index, record in enumerate(records):
            self.stats['received'] += 1
            if len((record.name or '').strip()) < self.min_name_length:
                self.stats['short_name'] += 1
                logger.debug(f"Dropped short name: {record.name!r} ({record.vendor})")
                continue

            key = record.url.lower() if record.url else ('__no_url__', index)
            existing = by_url.get(key)
            if existing is None:
                by_url[key] = record
            else:
                self.stats['duplicate_url'] += 1
                if not self._has_price(existing) and self._has_price(record):
                    by_url[key] = record

        priced, quote = [], []
        for record in by_url.values():
            if self.is_eligible(record):
                priced.append(record)
            elif record.requires_quote or record.price is None:
                quote.append(record)
            else:
                self.stats['invalid_price'] += 1
                logger.debug(f"Dropped invalid price {record.price}: {record.name!r}")

        self.stats['priced'] += len(priced)
        self.stats['quote_only'] += len(quote)
        return priced, quote

    @staticmethod
    def _has_price(record: ProductRecord) -> bool:
        return record.price is not None and record.price > 0 and not record.requires_quote

    # === Annotation ===

    def annotate(self, record: ProductRecord) -> AnnotatedProduct:
        """
        Derive everything the matcher needs from one record.

        Steps:
        1. Normalize name
        2. Classify product type
        3. Extract size key
        4. Tokenize
        5. Tag features
        """
        normalized = normalize_name(record.name)
        product_type = self.classifier.classify(normalized)
        size_key, is_volume = extract_size(normalized)

        return AnnotatedProduct(
            record=record,
            normalized_name=normalized,
            product_type=product_type,
            size_key=size_key,
            is_volume=is_volume,
            tokens=tokenize(normalized),
            features=extract_features(normalized),
            price=record.price,
        )

    def annotate_batch(self, records: Iterable[ProductRecord]) -> List[AnnotatedProduct]:
        """
        Annotate eligible records, dropping ineligible and unclassifiable ones.

        Output order follows input order.
        """
        return list(self._iter_annotated(records))

    def _iter_annotated(self, records: Iterable[ProductRecord]) -> Iterator[AnnotatedProduct]:
        for record in records:
            if not self.is_eligible(record):
                self.stats['ineligible'] += 1
                logger.debug(f"Not eligible: {record.name!r} ({record.vendor}, price={record.price})")
                continue

            product = self.annotate(record)
            self.stats['annotated'] += 1

            if product.product_type is None:
                self.stats['unclassified'] += 1
                logger.debug(f"Unclassified: {product.normalized_name!r}")
                continue

            if product.size_key:
                self.stats['sized'] += 1
            yield product

    # === Stats ===

    def get_stats(self) -> Dict[str, int]:
        """Return processing statistics."""
        return dict(self.stats)

    def reset_stats(self):
        """Reset processing statistics."""
        self.stats = {
            'received': 0,
            'short_name': 0,
            'duplicate_url': 0,
            'invalid_price': 0,
            'priced': 0,
            'quote_only': 0,
            'ineligible': 0,
            'annotated': 0,
            'unclassified': 0,
            'sized': 0,
        }
