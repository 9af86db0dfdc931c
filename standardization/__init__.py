"""
PromoScanner Standardization Module

Turns inconsistently named vendor listings into comparable annotated
products. Everything here works on one record at a time.

Key Components:
- ProductRecord / AnnotatedProduct: input and per-run schemas
- normalize_name: Turkish folding + boilerplate stripping
- CategoryClassifier: ordered keyword taxonomy (first rule wins)
- extract_size: capacity/dimension key with unit + locale normalization
- tokenize: stop-word filtered, size-free word set
- extract_features: materials, mechanisms and finishes
- ProductProcessor: selection + annotation orchestrator
"""

from .schema import AnnotatedProduct, ProductRecord, parse_price
from .name_normalizer import fold_turkish, normalize_name
from .category_classifier import (
    CATEGORY_NAMES,
    TAXONOMY_RULES,
    CategoryClassifier,
    TaxonomyRule,
    classify_product,
    get_category_name,
)
from .quantity_parser import extract_size, size_numbers, sizes_compatible, strip_sizes
from .tokenizer import STOP_WORDS, tokenize
from .feature_tagger import (
    FEATURE_KEYWORDS,
    MATERIAL_FAMILIES,
    MATERIAL_KEYWORDS,
    PREMIUM_MATERIALS,
    extract_features,
    material_families,
)
from .processor import ProductProcessor

__all__ = [
    # Schema
    'ProductRecord',
    'AnnotatedProduct',
    'parse_price',

    # Name normalization
    'fold_turkish',
    'normalize_name',

    # Taxonomy
    'CATEGORY_NAMES',
    'TAXONOMY_RULES',
    'CategoryClassifier',
    'TaxonomyRule',
    'classify_product',
    'get_category_name',

    # Sizes
    'extract_size',
    'size_numbers',
    'sizes_compatible',
    'strip_sizes',

    # Tokens and features
    'STOP_WORDS',
    'tokenize',
    'FEATURE_KEYWORDS',
    'MATERIAL_FAMILIES',
    'MATERIAL_KEYWORDS',
    'PREMIUM_MATERIALS',
    'extract_features',
    'material_families',

    # Processor
    'ProductProcessor',
]
