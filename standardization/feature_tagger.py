"""
Feature Tagger

Extracts differentiating keywords (materials, mechanisms, finishes,
power features) from a normalized product name.

Keywords match at the start of a word, so Turkish suffixes still hit:
"ahsaptan" → wood, "spiralli" → spiral. Entries ending in '$' must match
the whole word.

Example:
    >>> sorted(extract_features("bambu kapakli celik termos"))
    ['kapakli', 'metal', 'wood']
"""

import re
from types import MappingProxyType
from typing import FrozenSet, Iterable, Mapping, Pattern


def _compile(keywords: Iterable[str]) -> Pattern:
    parts = []
    for keyword in keywords:
        if keyword.endswith('$'):
            parts.append(re.escape(keyword[:-1]) + r'\b')
        else:
            parts.append(re.escape(keyword))
    return re.compile(r'\b(?:' + '|'.join(parts) + ')')


# === Material Families ===
# Mutually exclusive: a product is made of one of these, not two of them.

MATERIAL_KEYWORDS: Mapping[str, tuple] = MappingProxyType({
    'metal': ('metal', 'aluminyum', 'aluminum', 'celik', 'steel', 'paslanmaz',
              'stainless', 'krom', 'pirinc', 'inox$'),
    'plastic': ('plastik', 'plastic', 'abs$', 'pp$', 'polipropilen', 'akrilik'),
    'wood': ('ahsap', 'wood', 'bambu', 'bamboo', 'kayin', 'ceviz', 'mantar', 'cork'),
    'leather': ('deri', 'leather', 'pu deri', 'suni deri'),
    'fabric': ('kumas', 'fabric', 'pamuk', 'cotton', 'polyester', 'non woven',
               'nonwoven', 'keten', 'kanvas', 'canvas', 'jut', 'spunbond', 'felt'),
    'rubber': ('kaucuk', 'rubber', 'silikon', 'silicone'),
    'glass': ('cam$', 'camli', 'glass', 'borosilikat', 'kristal'),
})

MATERIAL_FAMILIES: FrozenSet[str] = frozenset(MATERIAL_KEYWORDS)
PREMIUM_MATERIALS: FrozenSet[str] = frozenset({'wood', 'metal', 'glass', 'leather'})

_MATERIAL_PATTERNS = MappingProxyType({
    family: _compile(keywords) for family, keywords in MATERIAL_KEYWORDS.items()
})


# === Mechanism / Finish / Power Features ===

FEATURE_KEYWORDS: Mapping[str, tuple] = MappingProxyType({
    'wireless': ('wireless', 'kablosuz', 'bluetooth', 'wi-fi'),
    'magsafe': ('magsafe', 'magnetic', 'manyetik', 'miknatisli'),
    'led': ('led$', 'isikli', 'light$', 'aydinlatmali'),
    'solar': ('solar', 'gunes enerjili'),
    'dijital': ('dijital', 'digital', 'lcd', 'ekranli'),
    'hizli_sarj': ('hizli sarj', 'fast charge', 'quick charge', 'pd$'),
    'touch': ('touch pen', 'dokunmatik', 'stylus'),
    'basmali': ('basmali', 'click', 'itmeli'),
    'cevirmeli': ('cevirmeli', 'twist', 'donerli'),
    'kapakli': ('kapakli',),
    'vakumlu': ('vakum', 'vacuum', 'double wall', 'cift cidarli'),
    'spiral': ('spiral', 'ringli', 'telli'),
    'sertkapak': ('sert kapak', 'sertkapak', 'hardcover', 'karton kapak'),
    'lastikli': ('lastikli', 'elastic', 'lastik bant'),
    'geri_donusum': ('geri donusum', 'recycled', 'rpet', 'tohumlu', 'ekolojik', 'eco$'),
    'soft_touch': ('soft touch', 'softtouch', 'kadife'),
    'mat': ('mat$', 'matte'),
    'parlak': ('parlak', 'glossy', 'lake'),
})

_FEATURE_PATTERNS = MappingProxyType({
    feature: _compile(keywords) for feature, keywords in FEATURE_KEYWORDS.items()
})


def material_families(normalized_name: str) -> FrozenSet[str]:
    """Material families named in a normalized name."""
    if not normalized_name:
        return frozenset()
    return frozenset(
        family for family, pattern in _MATERIAL_PATTERNS.items()
        if pattern.search(normalized_name)
    )


def extract_features(normalized_name: str) -> FrozenSet[str]:
    """
    Feature tags present in a normalized name.

    Material families are reported under their family name
    ('metal', 'wood', ...) next to the mechanism/finish tags.
    """
    if not normalized_name:
        return frozenset()
    tags = set(material_families(normalized_name))
    for feature, pattern in _FEATURE_PATTERNS.items():
        if pattern.search(normalized_name):
            tags.add(feature)
    return frozenset(tags)
