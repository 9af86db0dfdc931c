"""
Category Classifier

Maps a normalized product name to one internal product-type tag using an
ordered list of keyword rules. The first matching rule wins.

Rule order matters: compound items ("powerbankli defter", "kalemtras")
must come before the generic rules ("powerbank", "kalem") that would
otherwise claim them by substring.

Example:
    >>> classify_product("metal kalemtras ve kursun kalem seti")
    'kalemtras'
    >>> get_category_name('kalemtras')
    'Kalemtıraş'
"""

import re
from dataclasses import dataclass
from types import MappingProxyType
from typing import Optional, Pattern, Tuple


@dataclass(frozen=True)
class TaxonomyRule:
    """One (keywords, tag) entry. Keywords are plain substrings."""
    tag: str
    keywords: Tuple[str, ...] = ()
    pattern: Optional[Pattern] = None

    def matches(self, text: str) -> bool:
        if any(keyword in text for keyword in self.keywords):
            return True
        return bool(self.pattern and self.pattern.search(text))


TAXONOMY_RULES: Tuple[TaxonomyRule, ...] = (
    # --- Compound / specific items first ---
    TaxonomyRule('powerbank_defter', (
        'powerbankli defter', 'powerbank defter', 'powerbankli ajanda',
        'powerbank ajanda', 'powerbank notebook', 'notebook with powerbank',
    )),
    TaxonomyRule('kalemtras', (
        'kalemtras', 'kalem tras', 'pencil sharpener', 'pencil-sharpener', 'sharpener',
    )),
    TaxonomyRule('kalem_kutu', (
        'kalemlik', 'kalem kutusu', 'kalem kutu', 'pen holder', 'pencil case',
    )),
    TaxonomyRule('kalem_seti', (
        'kalem seti', 'kalem set', 'pen set',
    )),
    TaxonomyRule('kupa', (
        'termos bardak', 'termos kupa', 'seyahat bardagi', 'kupa', 'fincan',
    ), re.compile(r'\bmugs?\b')),
    TaxonomyRule('mousepad', (
        'mouse pad', 'mousepad', 'fare alti', 'mouse alti',
    )),
    TaxonomyRule('telefon_stand', (
        'telefon stand', 'telefon tutucu', 'phone stand', 'phone holder', 'selfie',
    )),
    TaxonomyRule('kablosuz_sarj', (
        'kablosuz sarj aleti', 'kablosuz sarj pedi', 'kablosuz sarj standi',
        'wireless charger', 'wireless charging pad',
    )),

    # --- Generic items ---
    TaxonomyRule('powerbank', (
        'powerbank', 'power bank', 'tasinabilir sarj', 'mobil sarj', 'tasinabilir batarya',
    )),
    TaxonomyRule('usb', (
        'usb bellek', 'flash bellek', 'flash disk', 'usb disk', 'usb flash', 'flash drive',
    )),
    TaxonomyRule('kablo', (
        'sarj kablosu', 'usb kablo', 'data kablosu',
    ), re.compile(r'\bcables?\b')),
    TaxonomyRule('termos', (
        'termos', 'matara', 'suluk', 'su sisesi', 'thermos', 'vacuum flask', 'water bottle',
    )),
    TaxonomyRule('bardak', (
        'bardak', 'tumbler',
    )),
    TaxonomyRule('canta', (
        'canta', 'torba', 'sirt cantasi', 'bez canta',
    ), re.compile(r'\b(?:bags?|tote|backpack)\b')),
    TaxonomyRule('defter', (
        'defter', 'ajanda', 'notebook', 'bloknot', 'not defteri', 'planlayici', 'planner',
    )),
    TaxonomyRule('tisort', (
        'tisort', 't-shirt', 't shirt', 'tshirt', 'polo yaka', 'sweatshirt',
    )),
    TaxonomyRule('sapka', (
        'sapka', 'kasket',
    ), re.compile(r'\b(?:bere|bone|caps?)\b(?!\s*:?\s*\d)')),
    TaxonomyRule('semsiye', (
        'semsiye', 'umbrella',
    )),
    TaxonomyRule('takvim', (
        'takvim', 'calendar',
    )),
    TaxonomyRule('anahtarlik', (
        'anahtarlik', 'keychain', 'key ring', 'keyring',
    )),
    TaxonomyRule('rozet', (
        'rozet', 'badge',
    ), re.compile(r'\bpins?\b')),
    TaxonomyRule('cakmak', (
        'cakmak', 'lighter',
    )),
    TaxonomyRule('saat', (
        'duvar saati', 'masa saati', 'kol saati', 'wall clock',
    )),

    # --- Widest writing-instrument rule last ---
    TaxonomyRule('kalem', (
        'kalem', 'tukenmez', 'roller', 'fosforlu', 'marker', 'markor', 'pencil',
    ), re.compile(r'\bpens?\b')),
)


CATEGORY_NAMES = MappingProxyType({
    'powerbank_defter': 'Powerbankli Defter',
    'kalemtras': 'Kalemtıraş',
    'kalem_kutu': 'Kalemlik',
    'kalem_seti': 'Kalem Seti',
    'kupa': 'Kupa',
    'mousepad': 'Mouse Pad',
    'telefon_stand': 'Telefon Standı',
    'kablosuz_sarj': 'Kablosuz Şarj Cihazı',
    'powerbank': 'Powerbank',
    'usb': 'USB Bellek',
    'kablo': 'Şarj Kablosu',
    'termos': 'Termos',
    'bardak': 'Bardak',
    'defter': 'Defter',
    'canta': 'Çanta',
    'tisort': 'Tişört',
    'sapka': 'Şapka',
    'semsiye': 'Şemsiye',
    'takvim': 'Takvim',
    'anahtarlik': 'Anahtarlık',
    'rozet': 'Rozet',
    'cakmak': 'Çakmak',
    'saat': 'Saat',
    'kalem': 'Kalem',
})


class CategoryClassifier:
    """
    First-matching-rule-wins classifier over an ordered rule list.

    A custom rule list can be passed for vendors with unusual naming;
    it is stored as a tuple and never mutated.
    """

    def __init__(self, rules: Tuple[TaxonomyRule, ...] = TAXONOMY_RULES):
        self.rules = tuple(rules)

    def classify(self, normalized_name: str) -> Optional[str]:
        """
        Return the product-type tag for an already normalized name.

        Returns:
            Tag string or None if no rule matches
        """
        if not normalized_name:
            return None
        for rule in self.rules:
            if rule.matches(normalized_name):
                return rule.tag
        return None

    @property
    def tags(self) -> Tuple[str, ...]:
        return tuple(rule.tag for rule in self.rules)


def get_category_name(tag: str) -> str:
    """Human-readable name for a tag, falling back to the tag itself."""
    return CATEGORY_NAMES.get(tag, tag)


_default_classifier = CategoryClassifier()


def classify_product(normalized_name: str) -> Optional[str]:
    """Convenience function using the default rule list."""
    return _default_classifier.classify(normalized_name)
