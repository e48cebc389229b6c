"""
Ordering rules for catalog listings.
Availability rank first, then the product name under Ukrainian collation.
"""

import unicodedata
from functools import lru_cache
from typing import Iterable, Optional

from pyuca.collator import Collator_9_0_0

from storefront.core.models import Product


class UkrainianCollator(Collator_9_0_0):
    """
    DUCET collator with the Ukrainian tailoring applied.

    ґ and ї are letters of their own right after г and і, and Cyrillic
    sorts ahead of Latin. Digits and punctuation keep their root order.
    """

    # Primary weights of the 9.0.0 key table.
    LATIN_FIRST = 0x1C47
    CYRILLIC_FIRST = 0x2022
    CYRILLIC_LAST = 0x21E1

    # Unused primaries right after г (0x2036) and і (0x2088).
    TAILORED_LETTERS = {
        "ґ": 0x2037,
        "ї": 0x2089,
    }

    LOWER_TERTIARY = 0x0002
    UPPER_TERTIARY = 0x0008

    def __init__(self, filename=None):
        super().__init__(filename)
        for letter, primary in self.TAILORED_LETTERS.items():
            for variant, tertiary in (
                (letter, self.LOWER_TERTIARY),
                (letter.upper(), self.UPPER_TERTIARY),
            ):
                key = [ord(ch) for ch in unicodedata.normalize("NFD", variant)]
                self.table.add(key, [[primary, 0x0020, tertiary]])

    @classmethod
    def reorder_primary(cls, weight: int) -> int:
        """Moves the Cyrillic block in front of Latin."""
        if cls.CYRILLIC_FIRST <= weight <= cls.CYRILLIC_LAST:
            return weight - cls.CYRILLIC_FIRST + cls.LATIN_FIRST
        if cls.LATIN_FIRST <= weight < cls.CYRILLIC_FIRST:
            return weight + cls.CYRILLIC_LAST - cls.CYRILLIC_FIRST + 1
        return weight

    def collation_elements(self, normalized_string):
        return [
            [self.reorder_primary(element[0]), *element[1:]]
            for element in super().collation_elements(normalized_string)
        ]


@lru_cache(maxsize=1)
def get_collator() -> UkrainianCollator:
    """Ukrainian collator, built once per process."""
    return UkrainianCollator()


def collation_key(text: Optional[str]) -> tuple[int, ...]:
    """
    Locale-aware sort key.

    Letters compare case-insensitively first, with case only breaking
    ties, so "apple" < "Banana" < "banana2". Cyrillic comes before
    Latin: "гора" < "ґанок" < "ірис" < "їжак" < "apple".
    """
    return tuple(get_collator().sort_key(text or ""))


def sort_strings(values: Iterable[str]) -> list[str]:
    """Sorts strings by collation key."""
    return sorted(values, key=collation_key)


def product_sort_key(product: Product) -> tuple[int, tuple[int, ...]]:
    return (product.availability.rank, collation_key(product.display_name))


def sort_products(products: Iterable[Product]) -> list[Product]:
    """
    Returns products ordered for display.

    Stable: products with equal rank and name keep their upstream order.
    """
    return sorted(products, key=product_sort_key)
