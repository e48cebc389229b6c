"""
Lenient parsing of numeric-as-string catalog and vendor values.
Reads a leading number the way a browser "parseFloat" does, so values
such as "1.2 bar" or "38.5" are understood.
"""

import re
from decimal import Decimal, InvalidOperation
from typing import Optional

from config.logging_config import LoggerMixin
from storefront.core.constants import LEADING_NUMBER_PATTERN

_LOAD_SEPARATORS = re.compile(r"[\s,]+")


class ValueParser(LoggerMixin):
    """
    Parser for pressures, loads and diameters.
    Every method returns None for unparseable input instead of raising.
    """

    def parse_leading_decimal(self, raw: Optional[str]) -> Optional[Decimal]:
        """
        Extracts the leading number of a string.

        Args:
            raw: Text such as "38", "1.2 bar", " 0.8"

        Returns:
            Finite Decimal or None
        """
        if raw is None:
            return None

        match = LEADING_NUMBER_PATTERN.match(str(raw))
        if not match:
            return None

        try:
            value = Decimal(match.group(1))
        except InvalidOperation:
            return None

        return value if value.is_finite() else None

    def parse_pressure(self, raw: Optional[str]) -> Optional[Decimal]:
        """
        Parses a pressure label.

        Examples:
            "1,2" -> 1.2
            "0.8 bar" -> 0.8
        """
        if raw is None:
            return None
        return self.parse_leading_decimal(str(raw).replace(",", ".", 1))

    def parse_load(self, raw: Optional[str]) -> Optional[Decimal]:
        """
        Parses a load label, ignoring grouping separators.

        Examples:
            "1 000" -> 1000
            "3,450" -> 3450
        """
        if raw is None:
            return None
        return self.parse_leading_decimal(_LOAD_SEPARATORS.sub("", str(raw)))

    def parse_diameter(self, raw: Optional[str]) -> Optional[Decimal]:
        """Parses a rim diameter such as "38" or "26.5"."""
        return self.parse_leading_decimal(raw)
