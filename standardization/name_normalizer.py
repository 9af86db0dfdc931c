"""
Name Normalizer

Folds vendor product names into a comparable form.

Key functions:
1. fold_turkish: Lowercase and map Turkish letters to ASCII
2. normalize_name: fold + strip product codes, marketing clauses and filler

Example:
    >>> normalize_name("PB-2041 - Kablosuz Şarjlı Powerbank 10.000 mAh | Ücretsiz Kargo")
    'kablosuz sarjli powerbank 10.000 mah'
"""

import re


# === Character Folding ===

TURKISH_FOLD = str.maketrans({
    'ç': 'c', 'Ç': 'c',
    'ğ': 'g', 'Ğ': 'g',
    'ı': 'i', 'İ': 'i',
    'ö': 'o', 'Ö': 'o',
    'ş': 's', 'Ş': 's',
    'ü': 'u', 'Ü': 'u',
    'â': 'a', 'Â': 'a',
    'î': 'i', 'Î': 'i',
    'û': 'u', 'Û': 'u',
    '\u0307': None,  # combining dot left behind by 'İ'.lower()
})


# === Boilerplate Patterns ===
# Applied in order after folding, so patterns are plain ASCII.

# A leading number followed by a unit word is a size, not a product code
_NOT_A_SIZE = r'(?![.,]?\d*\s*(?:ml|cl|lt|l|mah|gb|tb|gr|g|gsm|kg|cm|mm)\b)'

PRODUCT_CODE_PATTERNS = (
    # "PB-2041 - Powerbank", "12345 | Kalem", "kod 5531: Defter"
    re.compile(r'^(?:urun\s+kodu|kod)?\s*:?\s*(?:[a-z]{1,4}[-.]?)?\d{3,}' + _NOT_A_SIZE + r'[a-z]{0,3}\s*[-–—|:]\s*'),
    # "(12345) Powerbank", "[PB2041] Powerbank"
    re.compile(r'^[(\[]\s*[a-z]{0,4}[-.]?\d{3,}' + _NOT_A_SIZE + r'[a-z]{0,3}\s*[)\]]\s*'),
    # "... urun kodu: PB2041" anywhere
    re.compile(r'\burun\s+kodu\s*:?\s*[a-z0-9-]+'),
)

MARKETING_SUFFIX_PATTERNS = (
    # "Powerbank | Ücretsiz Kargo", "Kupa - En Uygun Fiyat"
    re.compile(
        r'\s*[-–—|]\s*(?:en\s+uygun\s+fiyat|ucretsiz\s+kargo|hemen\s+al|'
        r'stokta|indirim|kampanya|firsat|yeni\s+sezon|toptan\s+satis)\b.*$'
    ),
    re.compile(r'\s*\b(?:ucretsiz\s+kargo|kargo\s+bedava|hizli\s+teslimat)\b.*$'),
    re.compile(r'\s*[-–—|]\s*[a-z0-9-]+\.(?:com|net|org)(?:\.tr)?\s*$'),
)

FILLER_PATTERNS = (
    re.compile(r'\blogo\s+baskili\b'),
    re.compile(r'\bbaski\s+dahil\b'),
    re.compile(r'\bfirma(?:ya)?\s+(?:ozel|logolu)\b'),
    re.compile(r'\bkurumsal\s+hediye(?:lik)?\b'),
    re.compile(r'\bpromosyon(?:el|luk|lu)?\s+urun(?:ler)?\b'),
    re.compile(r'\buygun\s+fiyatli\b'),
    re.compile(r'\ben\s+ucuz\b'),
    re.compile(r'\bkdv\s+dahil\b'),
    re.compile(r'\bcok\s+satan\b'),
)


def fold_turkish(text: str) -> str:
    """Lowercase and fold Turkish/circumflexed letters to ASCII."""
    if not text:
        return ""
    return text.translate(TURKISH_FOLD).lower().translate(TURKISH_FOLD)


def normalize_name(name: str) -> str:
    """
    Create normalized version of a vendor product name.

    - Lowercase, Turkish letters folded to ASCII
    - Leading product codes and trailing marketing clauses removed
    - Generic filler phrases removed
    - Whitespace collapsed

    Digits and the separators the size extractor needs ('.', ',', 'x')
    are kept.

    Example:
        >>> normalize_name("Logo Baskılı ÇELİK Termos 500 ml")
        'celik termos 500 ml'
        >>> normalize_name("   ")
        ''
    """
    if not name or not name.strip():
        return ""

    normalized = fold_turkish(name)

    # HTML leftovers from listing pages
    normalized = re.sub(r'<[^>]+>', ' ', normalized)
    normalized = re.sub(r'&[a-z]+;|&#\d+;', ' ', normalized)
    normalized = re.sub(r'\s+', ' ', normalized).strip()

    for pattern in PRODUCT_CODE_PATTERNS:
        normalized = pattern.sub('', normalized)

    for pattern in MARKETING_SUFFIX_PATTERNS:
        normalized = pattern.sub('', normalized)

    for pattern in FILLER_PATTERNS:
        normalized = pattern.sub(' ', normalized)

    # Trademark signs and stray quoting
    normalized = re.sub(r'[®™©"\'`]', ' ', normalized)

    normalized = re.sub(r'\s+', ' ', normalized)
    return normalized.strip(' -–—|')
