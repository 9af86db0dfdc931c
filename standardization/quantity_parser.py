"""
Quantity Parser

Finds the capacity/dimension of a promotional product in its normalized
name and turns it into a comparable size key.

Handles:
- Dimensions: "14x21 cm", "140 x 210 mm", "40x30x10"
- Volumes: "500 ml", "50 cl", "0,75 lt", "1 litrelik"
- Battery capacity: "10000 mah", "10.000 mah"
- Storage: "16 gb", "1 tb"
- Weight / paper: "180 gr", "80 gsm", "1 kg"
- Diameter: "ø 60 mm", "cap 8 cm"

Locale thousands separators are folded ("10.000" == "10,000" == "10000").
Units are normalized (cl/lt → ml, mm → cm, kg → gr, tb → gb) so the same
physical size always yields the same key.

Example:
    >>> extract_size("10.000 mah metal powerbank")
    ('10000 mah', False)
    >>> extract_size("celik termos 0,5 lt")
    ('500 ml', True)
"""

import re
from decimal import Decimal, InvalidOperation
from typing import Callable, List, Optional, Pattern, Tuple


# Thousands-grouped number first so "10.000" is not read as 10.0
NUM = r'(?:\d{1,3}(?:[.,]\d{3})+|\d+(?:[.,]\d+)?)(?![.,]?\d)'
_LEFT = r'(?<![a-wyz\d.,])'  # 'x' allowed: "2x500 ml"

_THOUSANDS_RE = re.compile(r'\d{1,3}(?:[.,]\d{3})+')

_OTHER_UNITS = r'(?:ml|cl|lt|l|litre|liter|gb|tb|mah|gr|g|gsm|kg)\b'


def parse_number(raw: str) -> Optional[Decimal]:
    """
    Parse a locale-formatted number.

    Example:
        >>> parse_number("10.000")
        Decimal('10000')
        >>> parse_number("1,5")
        Decimal('1.5')
    """
    if not raw:
        return None
    if _THOUSANDS_RE.fullmatch(raw):
        cleaned = raw.replace('.', '').replace(',', '')
    else:
        cleaned = raw.replace(',', '.')
    try:
        return Decimal(cleaned)
    except InvalidOperation:
        return None


def format_number(value: Decimal) -> str:
    """Plain decimal string without exponent or trailing zeros."""
    normalized = value.normalize()
    text = format(normalized, 'f')
    if '.' in text:
        text = text.rstrip('0').rstrip('.')
    return text


# === Size Handlers ===

def _dimensions(match) -> Tuple[str, bool]:
    values = [parse_number(v) for v in match.group(1, 2, 3) if v]
    if match.group(4) == 'mm':
        values = [v / 10 for v in values]
    return 'x'.join(format_number(v) for v in values) + ' cm', False


def _millilitres(match) -> Tuple[str, bool]:
    value = parse_number(match.group(1))
    if match.group(2) == 'cl':
        value = value * 10
    return f"{format_number(value)} ml", True


def _litres(match) -> Tuple[str, bool]:
    value = parse_number(match.group(1)) * 1000
    return f"{format_number(value)} ml", True


def _milliamp_hours(match) -> Tuple[str, bool]:
    return f"{format_number(parse_number(match.group(1)))} mah", False


def _storage(match) -> Tuple[str, bool]:
    value = parse_number(match.group(1))
    if match.group(2) == 'tb':
        value = value * 1024
    return f"{format_number(value)} gb", False


def _weight(match) -> Tuple[str, bool]:
    value = parse_number(match.group(1))
    unit = match.group(2)
    if unit == 'gsm':
        return f"{format_number(value)} gsm", False
    if unit == 'kg':
        value = value * 1000
    return f"{format_number(value)} gr", False


def _diameter(match) -> Tuple[str, bool]:
    value = parse_number(match.group('num'))
    if match.group('unit') == 'mm':
        value = value / 10
    return f"ø{format_number(value)} cm", False


# === Size Patterns ===
# Ordered by specificity (most specific first)

SIZE_PATTERNS: Tuple[Tuple[str, Pattern, Callable], ...] = (
    (
        'dimensions',
        re.compile(
            _LEFT + rf'({NUM})\s*[x×*]\s*({NUM})(?:\s*[x×*]\s*({NUM}))?'
            rf'(?:\s*(cm|mm)\b|(?!\s*{_OTHER_UNITS}))'
        ),
        _dimensions,
    ),
    (
        'millilitres',
        re.compile(_LEFT + rf'({NUM})\s*(ml|cl)\b'),
        _millilitres,
    ),
    (
        'litres',
        re.compile(_LEFT + rf'({NUM})\s*(?:litrelik|litre|liter|lt|l)\b'),
        _litres,
    ),
    (
        'milliamp_hours',
        re.compile(_LEFT + rf'({NUM})\s*mah\b'),
        _milliamp_hours,
    ),
    (
        'storage',
        re.compile(_LEFT + rf'({NUM})\s*(gb|tb)\b'),
        _storage,
    ),
    (
        'weight',
        re.compile(_LEFT + rf'({NUM})\s*(gsm|gram|gr|g|kg)\b'),
        _weight,
    ),
    (
        'diameter',
        re.compile(rf'(?:ø|⌀|\bcap\b|\bcapi\b)\s*:?\s*(?P<num>{NUM})\s*(?P<unit>cm|mm)?\b'),
        _diameter,
    ),
    (
        'diameter',
        re.compile(_LEFT + rf'(?P<num>{NUM})\s*(?P<unit>cm|mm)\s*(?:cap|capinda|capli|diameter)\b'),
        _diameter,
    ),
)


def extract_size(normalized_name: str) -> Tuple[Optional[str], bool]:
    """
    Extract the size key from a normalized product name.

    Returns:
        Tuple of (size_key, is_volume) or (None, False) when no size is found

    Example:
        >>> extract_size("spiralli defter 14x21 cm")
        ('14x21 cm', False)
        >>> extract_size("metal kalem")
        (None, False)
    """
    if not normalized_name:
        return (None, False)

    for _name, pattern, handler in SIZE_PATTERNS:
        match = pattern.search(normalized_name)
        if match:
            return handler(match)

    return (None, False)


def strip_sizes(normalized_name: str) -> str:
    """Erase every substring any size pattern matches."""
    text = normalized_name or ''
    for _name, pattern, _handler in SIZE_PATTERNS:
        text = pattern.sub(' ', text)
    return text


def size_numbers(size_key: str) -> List[Decimal]:
    """
    Numbers embedded in a size key, in order.

    Example:
        >>> size_numbers("14x21 cm")
        [Decimal('14'), Decimal('21')]
    """
    return [Decimal(n) for n in re.findall(r'\d+(?:\.\d+)?', size_key or '')]


def sizes_compatible(
    key1: Optional[str],
    key2: Optional[str],
    tolerance: Decimal,
    epsilon: Decimal = Decimal('0.000001'),
) -> bool:
    """
    Check whether two size keys describe the same physical size.

    Compatible means:
    - Either key missing (can't compare), or
    - Keys equal, or
    - Same count of embedded numbers and every positional pair within
      the max/min ratio tolerance

    Example:
        >>> sizes_compatible("500 ml", "550 ml", Decimal("1.15"))
        True
        >>> sizes_compatible("500 ml", "650 ml", Decimal("1.15"))
        False
        >>> sizes_compatible("14x21 cm", "21 cm", Decimal("1.25"))
        False
    """
    if not key1 or not key2:
        return True
    if key1 == key2:
        return True

    numbers1 = size_numbers(key1)
    numbers2 = size_numbers(key2)
    if len(numbers1) != len(numbers2):
        return False

    for n1, n2 in zip(numbers1, numbers2):
        low = max(min(n1, n2), epsilon)
        if max(n1, n2) / low > tolerance:
            return False
    return True
