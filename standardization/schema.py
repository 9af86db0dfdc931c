"""
Product Schemas

ProductRecord is what the crawler hands over: one priced listing from one
vendor site. AnnotatedProduct is the per-run view the matcher works on.

Example:
    record = ProductRecord(
        vendor="promozone.com.tr",
        name="10.000 mAh Metal Powerbank",
        price=Decimal("135.00"),
        currency="TRY",
        url="https://promozone.com.tr/urun/metal-powerbank",
        min_order_qty=50,
    )
"""

import re
from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, FrozenSet, Optional


# Keys used by the crawler's results.csv, mapped to our field names
FIELD_ALIASES = {
    'store': 'vendor',
    'vendor_id': 'vendor',
    'productname': 'name',
    'product_name': 'name',
    'raw_name': 'name',
    'minorderqty': 'min_order_qty',
    'requiresquote': 'requires_quote',
    'quote_required': 'requires_quote',
}

_TRUE_STRINGS = {'1', 'true', 'yes', 'evet', 'y'}

# Currency labels before or after the number: "TL 12,50", "12,50 TL/adet"
_PRICE_LABEL_RE = re.compile(r'^[^\d-]+|[^\d]+$')
_PRICE_RE = re.compile(r'-?\d[\d.,\s]*')


def parse_price(raw: Any) -> Optional[Decimal]:
    """
    Parse a price into Decimal without ever raising.

    Accepts Decimal, int, float (via str) and strings with either
    decimal separator ("1.234,50", "1,234.50", "12,5"). Currency labels
    around the number are ignored; letters between digits are not.

    Example:
        >>> parse_price("1.234,50")
        Decimal('1234.50')
        >>> parse_price("1.234.567 TL")
        Decimal('1234567')
        >>> parse_price("1e3") is None
        True
        >>> parse_price("teklif") is None
        True
    """
    if raw is None or isinstance(raw, bool):
        return None
    if isinstance(raw, Decimal):
        value = raw
    elif isinstance(raw, (int, float)):
        value = Decimal(str(raw))
    else:
        text = _PRICE_LABEL_RE.sub('', str(raw).strip())
        if not _PRICE_RE.fullmatch(text):
            return None
        text = re.sub(r'\s+', '', text)
        if ',' in text and '.' in text:
            # Whichever separator comes last is the decimal one
            if text.rfind(',') > text.rfind('.'):
                text = text.replace('.', '').replace(',', '.')
            else:
                text = text.replace(',', '')
        elif text.count('.') > 1:
            text = text.replace('.', '')
        elif text.count(',') > 1:
            text = text.replace(',', '')
        elif ',' in text:
            text = text.replace(',', '.')
        try:
            value = Decimal(text)
        except InvalidOperation:
            return None
    if not value.is_finite():
        return None
    return value


def _parse_int(raw: Any, default: int = 1) -> int:
    try:
        return int(str(raw).strip())
    except (TypeError, ValueError):
        return default


def _parse_bool(raw: Any) -> bool:
    if isinstance(raw, bool):
        return raw
    return str(raw).strip().lower() in _TRUE_STRINGS


@dataclass(frozen=True)
class ProductRecord:
    """
    One vendor listing as delivered by the crawl collaborator.

    Only records with a positive price and a long enough name are
    annotated; see ProductProcessor.is_eligible.
    """

    vendor: str
    name: str
    price: Optional[Decimal] = None
    currency: str = "TRY"
    url: str = ""
    min_order_qty: int = 1
    requires_quote: bool = False
    category: str = ""  # vendor-side category label, informational only

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ProductRecord":
        """
        Create a ProductRecord from loose crawler output.

        Unknown keys are ignored; garbled values fall back to defaults.
        """
        fields = {}
        for key, value in data.items():
            norm_key = str(key).strip().lower()
            fields[FIELD_ALIASES.get(norm_key, norm_key)] = value

        return cls(
            vendor=str(fields.get('vendor') or '').strip(),
            name=str(fields.get('name') or ''),
            price=parse_price(fields.get('price')),
            currency=str(fields.get('currency') or 'TRY').strip(),
            url=str(fields.get('url') or '').strip(),
            min_order_qty=_parse_int(fields.get('min_order_qty'), 1),
            requires_quote=_parse_bool(fields.get('requires_quote', False)),
            category=str(fields.get('category') or '').strip(),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "vendor": self.vendor,
            "name": self.name,
            "price": str(self.price) if self.price is not None else None,
            "currency": self.currency,
            "url": self.url,
            "min_order_qty": self.min_order_qty,
            "requires_quote": self.requires_quote,
            "category": self.category,
        }


@dataclass(frozen=True)
class AnnotatedProduct:
    """
    A ProductRecord plus everything the matcher derives from its name.

    Recomputed on every run; never cached or persisted.
    """

    record: ProductRecord
    normalized_name: str
    product_type: Optional[str]
    size_key: Optional[str] = None
    is_volume: bool = False
    tokens: FrozenSet[str] = field(default_factory=frozenset)
    features: FrozenSet[str] = field(default_factory=frozenset)
    price: Optional[Decimal] = None

    @property
    def vendor(self) -> str:
        return self.record.vendor

    @property
    def order_qty(self) -> int:
        """Minimum order quantity, never below one."""
        return max(1, self.record.min_order_qty)
