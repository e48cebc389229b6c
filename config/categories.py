"""
Catalog categories and segments.
Maps storefront aliases to catalog category names and holds the
Ukrainian phrasing used when building SEO copy.
"""

from typing import Final


# Storefront alias (English or Ukrainian) -> category name stored in the catalog
CATEGORY_TO_API: Final[dict[str, str]] = {
    "Навісне та Причіпне Обладнання": "Навісне та Причіпне Обладнання",
    "Flotation/Agri Transport": "Навісне та Причіпне Обладнання",
    "Трактори Великої Потужності": "Трактори Великої Потужності",
    "High Power Tractor": "Трактори Великої Потужності",
    "Комбайни": "Комбайни",
    "Harvester": "Комбайни",
    "Обприскувачі": "Обприскувачі",
    "Sprayer": "Обприскувачі",
}


# Segment -> genitive phrase used in "a wide choice of ..." sentences
SEGMENT_DESCRIPTIONS: Final[dict[str, str]] = {
    "Сільськогосподарські шини (С/Г)": "сільськогосподарських шин для підвищення ефективності та збереження ґрунту",
    "Будівельні шини": "будівельних шин для високої прохідності та стійкості до пошкоджень на екскаваторах і навантажувачах",
    "Шини для газонокосарок та саду": "садових шин з мінімальним тиском на ґрунт для мінітехніки та газонокосарок",
    "Шини для лісової техніки": "лісових шин із посиленим каркасом для форвардерів та харвестерів",
    "Кар'єрні шини (Гірнича техніка)": "кар'єрних шин, що витримують екстремальні навантаження у шахтах та розробках",
    "Портові та складські шини": "портових і складських шин для стабільної роботи річтракерів і термінальних тягачів",
    "Індустріальні та багатофункціональні шини": "універсальних індустріальних шин для телескопічних навантажувачів і спецтехніки",
}


# Category -> genitive label used in "tyres for ..." sentences
CATEGORY_LABELS: Final[dict[str, str]] = {
    "Трактори (Стандартна та Середня Потужність)": "тракторів стандартної та середньої потужності",
    "Трактори Великої Потужності": "тракторів великої потужності",
    "Комбайни": "комбайнів",
    "Обприскувачі": "обприскувачів",
    "Навісне та Причіпне Обладнання": "навісного та причіпного обладнання",
    "Будівельна та Землерійна Техніка (OTR)": "будівельної та землерийної техніки",
    "Навантажувачі (Телескопічні, Колісні, Екскаватори-навантажувачі)": "навантажувачів та екскаваторів-навантажувачів",
    "Міні-навантажувачі (Skid Steer)": "міні-навантажувачів",
    "Лісова Техніка": "лісової техніки",
    "Спеціальна, Портова та Шахтна Техніка": "спеціальної, портової та шахтної техніки",
}


def map_category_to_api(category_name: str) -> str:
    """
    Resolves a storefront category alias to the catalog category name.

    Unknown names are returned unchanged.
    """
    return CATEGORY_TO_API.get(category_name, category_name)
