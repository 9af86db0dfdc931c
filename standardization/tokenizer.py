"""
Tokenizer

Reduces a normalized product name to the set of words that actually
identify the product. Sizes, short tokens, digits and generic marketing
words are dropped so that word overlap reflects the product itself.

Example:
    >>> sorted(tokenize("10.000 mah metal powerbank hediye"))
    ['metal', 'powerbank']
"""

import re
from typing import FrozenSet

from .quantity_parser import strip_sizes


STOP_WORDS: FrozenSet[str] = frozenset({
    # Connectives (TR / EN)
    've', 'ile', 'icin', 'olan', 'gibi', 'her', 'cok', 'tum', 'yeni',
    'and', 'with', 'for', 'the', 'new', 'set',
    # Marketing / promotional boilerplate
    'promosyon', 'promosyonel', 'promosyonlu', 'promo', 'baskili', 'baskisiz',
    'baski', 'logolu', 'logo', 'firma', 'firmaya', 'ozel', 'kurumsal',
    'hediye', 'hediyelik', 'gift', 'toptan', 'ucuz', 'uygun', 'fiyat',
    'fiyatli', 'kaliteli', 'kalite', 'premium', 'lux', 'luks', 'super',
    'ekonomik', 'model', 'modeli', 'urun', 'urunu', 'adet', 'adetli',
    'stok', 'stoklu', 'kampanya', 'indirim', 'indirimli', 'siparis',
    'minimum', 'kdv', 'dahil', 'tl',
    # Colours never identify a product model
    'renkli', 'renk', 'siyah', 'beyaz', 'kirmizi', 'mavi', 'yesil', 'sari',
    'gri', 'pembe', 'turuncu', 'lacivert', 'mor', 'black', 'white', 'red',
    'blue', 'green',
    # Raw units and size words
    'mah', 'ml', 'cl', 'lt', 'litre', 'liter', 'litrelik', 'gr', 'gram',
    'gsm', 'kg', 'gb', 'tb', 'cm', 'mm', 'boy', 'boyut', 'ebat', 'ebatli',
    'olcu', 'kapasite', 'kapasiteli', 'buyuk', 'kucuk', 'orta', 'mini',
    'maxi', 'size',
})

_SPLIT_RE = re.compile(r'[^a-z0-9]+')


def tokenize(normalized_name: str) -> FrozenSet[str]:
    """
    Tokenize a normalized name for Jaccard comparison.

    - Size substrings erased first
    - Split on anything that is not a letter or digit
    - Tokens of length <= 2, pure digits and stop-words dropped
    """
    text = strip_sizes(normalized_name)
    tokens = set()
    for token in _SPLIT_RE.split(text):
        if len(token) <= 2 or token.isdigit():
            continue
        if token in STOP_WORDS:
            continue
        tokens.add(token)
    return frozenset(tokens)
