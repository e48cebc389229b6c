"""
Constants and regex rule sets used by the catalog and vendor pipelines.
"""

import re
from typing import Final

from storefront.core.types import SearchField

# =============================================================================
# CATALOG API
# =============================================================================

PRODUCT_COLLECTION: Final[str] = "Product"

# Directus "no limit" marker for unpaginated item queries
UNPAGINATED_LIMIT: Final[int] = -1

# Fields searched by the general product listing
FULL_SEARCH_FIELDS: Final[tuple[SearchField, ...]] = (
    "product_name",
    "model",
    "size",
    "sku",
)

# Fields searched by the filter sidebar listing
NAME_SEARCH_FIELDS: Final[tuple[SearchField, ...]] = ("product_name",)

# Warehouse filter value meaning "any availability"
WAREHOUSE_ANY: Final[str] = "all"

DEFAULT_HEADERS: Final[dict[str, str]] = {
    "Accept": "application/json",
    "Content-Type": "application/json",
}


# =============================================================================
# BRANDS
# =============================================================================

# Detection order matters: the first brand found in a candidate wins
BRAND_ORDER: Final[tuple[str, ...]] = ("Trelleborg", "Mitas", "CEAT")

DEFAULT_BRAND: Final[str] = "CEAT"

VENDOR_TRELLEBORG: Final[str] = "trelleborg"


# =============================================================================
# TRELLEBORG TABLE TRANSLATION RULES
# =============================================================================

# Applied in order over the whole fragment. No replacement text may match
# any pattern of the list, so normalizing twice is a no-op.
_DUAL_10LT = "(*) = 10 LT при 0,4 bar лише для здвоєних/строєних коліс"
_DUAL_10HT = "(**) = 10 HT при 0,6 bar лише для здвоєних/строєних коліс"
_SW_NOMINAL_DASH = "SW — на номінальному диску (не стосується дозволених дисків)"
_SW_NOMINAL_EQ = "SW = на номінальному диску (не стосується дозволених дисків)"
_SRI = (
    "SRI — індекс радіуса швидкості; значення для розрахунку теоретичної "
    "швидкості трактора під час сертифікації в ЄС та для взаємозамінності "
    "різних типорозмірів шин."
)
_SLOPES = (
    "Усі значення навантаження наведені для ухилів до 20%; "
    "при ухилах понад 20% проконсультуйтеся з TWS."
)
_IMPORTANT_APPLICATION = (
    "ВАЖЛИВО: тиск накачування встановлюється з урахуванням застосування "
    "та навантаження для кожної шини."
)

TRANSLATION_RULES: Final[list[tuple[re.Pattern, str]]] = [
    (
        re.compile(r"\(\*\)\s*=\s*10\s*LT\s*at\s*0[.,]4\s*bar\s*only\s*dual/triple\s*use", re.IGNORECASE),
        _DUAL_10LT,
    ),
    (
        re.compile(r"\(\*\*\)\s*=\s*10\s*HT\s*at\s*0[.,]6\s*bar\s*only\s*dual/triple\s*use", re.IGNORECASE),
        _DUAL_10HT,
    ),
    (
        re.compile(
            r"SW\s*[-–]\s*on\s*the\s*nominal\s*rim\.?\s*"
            r"\(not\s*(?:riferred|referred)\s*to\s*the\s*PERMITTED\s*RIMS\)",
            re.IGNORECASE,
        ),
        _SW_NOMINAL_DASH,
    ),
    (
        re.compile(
            r"SW\s*=\s*On\s*the\s*nominal\s*RIM\.?\s*"
            r"\(Not\s*referred?\s*to\s*the\s*PERMITTED\s*RIMS\)",
            re.IGNORECASE,
        ),
        _SW_NOMINAL_EQ,
    ),
    (
        re.compile(r"\bS\s*=\s*Single\s*fitment\.?", re.IGNORECASE),
        "S = одиночне встановлення.",
    ),
    (
        re.compile(
            r"SRI\s*[-–]\s*Speed\s*Radius\s*Index\s*[-–]\s*value\s*to\s*be\s*used\s*for\s*the\s*"
            r"calculation\s*of\s*the\s*theoretical\s*tractor\s*speed\s*during\s*European\s*Union\s*"
            r"homologation\s*and\s*for\s*the\s*(?:interchangebility|interchangeability)\s*of\s*"
            r"different\s*tyre\s*sizes\.?",
            re.IGNORECASE,
        ),
        _SRI,
    ),
    (
        re.compile(
            r"SRI\s*=\s*Speed\s*Radius\s*Index\s*-\s*value\s*to\s*be\s*used\s*for\s*calculation\s*"
            r"of\s*the\s*theoretical\s*tractor\s*speed\s*during\s*European\s*Union\s*homologation\s*"
            r"and\s*for\s*the\s*interchangeability\s*of\s*different\s*tyre\s*sizes\.?",
            re.IGNORECASE,
        ),
        _SRI,
    ),
    (
        re.compile(
            r"For\s*intensive\s*road\s*transport\s*above\s*40\s*km/h\s*the\s*pressure\s*"
            r"could\s*be\s*increased\s*by\s*0\.4\s*bar\.?",
            re.IGNORECASE,
        ),
        "Для інтенсивних дорожніх перевезень понад 40 км/год тиск можна підвищити на 0,4 bar.",
    ),
    (
        re.compile(
            r"70/65/50/40/30\s*=\s*On\s*road\s*transport\s*at\s*70/65/50/40/30\s*Km/h\.\s*"
            r"For\s*intensive\s*road\s*transport\s*at\s*40,\s*50,\s*65\s*and\s*70\s*Km/h\s*"
            r"the\s*pressure\s*should\s*be\s*increased\s*by\s*0,4\s*bar\.?",
            re.IGNORECASE,
        ),
        "70/65/50/40/30 = для руху дорогами зі швидкістю 70/65/50/40/30 км/год. "
        "Для інтенсивних перевезень на 40, 50, 65 та 70 км/год тиск слід збільшити на 0,4 bar.",
    ),
    (
        re.compile(
            r"All\s*load\s*values?\s*for\s*ground\s*slopes\s*up\s*to\s*20%\s*"
            r"\(above\s*20%\s*consult\s*TWS\)",
            re.IGNORECASE,
        ),
        _SLOPES,
    ),
    (
        re.compile(
            r"10\s*LT\s*=\s*Maximum\s*Speed\s*10\s*Km/h\.\s*Surface\s*treatment\s*"
            r"with\s*low\s*torque\s*value\.?",
            re.IGNORECASE,
        ),
        "10 LT = максимальна швидкість 10 км/год. Поверхнева обробка з низьким крутним моментом.",
    ),
    (
        re.compile(
            r"10\s*HT\s*=\s*Maximum\s*Speed\s*10\s*Km/h\.\s*Field\s*application\s*"
            r"with\s*high\s*torque\s*value\.?",
            re.IGNORECASE,
        ),
        "10 HT = максимальна швидкість 10 км/год. Польові роботи з високим крутним моментом.",
    ),
    (
        re.compile(
            r"H\s*\(\*\)\s*=\s*Maximum\s*speed\s*10\s*Km/h\.\s*Harvesting\s*machines\s*in\s*"
            r"cyclic\s*loading\s*service\s*and\s*farm\s*to\s*field\s*transit\.?",
            re.IGNORECASE,
        ),
        "H (*) = максимальна швидкість 10 км/год. Зернозбиральні машини при циклічних "
        "навантаженнях та переїздах “господарство–поле”.",
    ),
    (
        re.compile(
            r"For\s*dual\s*mounting\s*use\s*the\s*pressure\s*correspondent\s*to\s*the\s*load\s*"
            r"per\s*each\s*wheel\s*divided\s*by\s*0\.88\.?",
            re.IGNORECASE,
        ),
        "Для здвоєних коліс використовуйте тиск, що відповідає навантаженню на одне колесо, "
        "поділеному на 0,88.",
    ),
    (
        re.compile(
            r"IMPORTANT\s*[-–]\s*The\s*inflation\s*pressure\s*is\s*estabilished\s*considering\s*"
            r"the\s*max\s*load\s*for\s*each\s*tyre\.?",
            re.IGNORECASE,
        ),
        "ВАЖЛИВО: тиск накачування встановлюється з урахуванням максимального "
        "навантаження для кожної шини.",
    ),
    (
        re.compile(
            r"IMPORTANT(?::|\s*[-–])\s*The\s*inflation\s*pressure\s*is\s*established\s*considering\s*"
            r"the\s*application\s*and\s*the\s*load\s*for\s*each\s*tyre\.?",
            re.IGNORECASE,
        ),
        _IMPORTANT_APPLICATION,
    ),
]


# =============================================================================
# TRELLEBORG TABLE LAYOUT
# =============================================================================

TABLE_CLOSE_TAG: Final[str] = "</table>"

LINE_BREAK: Final[str] = "<br>"

# Two-word headers that must render on two lines
TABLE_HEADER_BREAKS: Final[list[tuple[re.Pattern, str]]] = [
    (re.compile(r"TREAD\s+PATTERN", re.IGNORECASE), "TREAD<br>PATTERN"),
    (re.compile(r"PERMITTED\s+RIMS", re.IGNORECASE), "PERMITTED<br>RIMS"),
]

BR_TAG_PATTERN: Final[re.Pattern] = re.compile(r"<br\s*/?>", re.IGNORECASE)
BR_RUN_PATTERN: Final[re.Pattern] = re.compile(r"(?:<br\s*/?>\s*){2,}", re.IGNORECASE)
NBSP_ENTITY_PATTERN: Final[re.Pattern] = re.compile(r"&nbsp;", re.IGNORECASE)
NEWLINE_RUN_PATTERN: Final[re.Pattern] = re.compile(r"\n{2,}")


# =============================================================================
# NUMBER PARSING
# =============================================================================

# Leading decimal number, as read by a lenient "parse float" (e.g. "1.2 bar")
LEADING_NUMBER_PATTERN: Final[re.Pattern] = re.compile(
    r"^\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)"
)

HTML_TAG_PATTERN: Final[re.Pattern] = re.compile(r"<[^>]+>")
WHITESPACE_RUN_PATTERN: Final[re.Pattern] = re.compile(r"\s+")
