"""
Unit tests for SEO helpers.
"""

import pytest

from config.categories import map_category_to_api
from storefront.core.models import Product
from storefront.seo import (
    availability_info,
    build_categories_list,
    build_product_seo,
    build_segments_description,
    derive_size_seo_data,
    detect_brand,
    format_list,
    sanitize_description,
)


class TestFormatting:

    @pytest.mark.parametrize("items,expected", [
        ([], ""),
        (["a"], "a"),
        (["a", "b"], "a та b"),
        (["a", "b", "c"], "a, b та c"),
    ])
    def test_format_list(self, items, expected):
        assert format_list(items) == expected

    def test_categories_list_uses_labels(self):
        assert build_categories_list(["Комбайни", "Обприскувачі"]) == "комбайнів та обприскувачів"

    def test_categories_list_unknown_and_empty(self):
        assert build_categories_list(["Нова"]) == "Нова"
        assert build_categories_list([]) == "різної сільськогосподарської техніки"

    def test_segments_description_fallback(self):
        assert build_segments_description(["Нові Шини"]) == "рішень для сегмента нові шини"
        assert build_segments_description([]).startswith("різних напрямів")


class TestCategoryAliases:

    @pytest.mark.parametrize("alias,expected", [
        ("Harvester", "Комбайни"),
        ("Sprayer", "Обприскувачі"),
        ("Flotation/Agri Transport", "Навісне та Причіпне Обладнання"),
        ("Комбайни", "Комбайни"),
        ("Лісова Техніка", "Лісова Техніка"),
    ])
    def test_map_category_to_api(self, alias, expected):
        assert map_category_to_api(alias) == expected


class TestSizeSeo:

    def test_derive_from_products(self, products):
        similar = [p for p in products if p.size == "710/70R42"]

        data = derive_size_seo_data(similar)

        assert data.categories == ["Трактори Великої Потужності", "Обприскувачі"]
        assert data.segments == ["Сільськогосподарські шини (С/Г)"]
        assert data.categories_list == "тракторів великої потужності та обприскувачів"
        assert data.segments_description.startswith("сільськогосподарських шин")

    def test_derive_from_nothing(self):
        data = derive_size_seo_data([])

        assert data.categories == []
        assert data.categories_list == "різної сільськогосподарської техніки"


class TestProductSeo:

    @pytest.mark.parametrize("candidates,expected", [
        (("Trelleborg", None), "Trelleborg"),
        ((None, "MITAS HC1000 710/70R42"), "Mitas"),
        (("", "Farmax by ceat"), "CEAT"),
        (("BKT", "Agrimax"), "CEAT"),
    ])
    def test_detect_brand(self, candidates, expected):
        assert detect_brand(*candidates) == expected

    def test_sanitize_description(self):
        assert sanitize_description("<p>Шина   для\n<b>тракторів</b></p>") == "Шина для тракторів"
        assert sanitize_description(None) == ""

    def test_availability(self):
        assert availability_info("in stock").short == "в наявності"
        assert availability_info("On order").short == "під замовлення"
        assert availability_info(None).short == "під замовлення"

    def test_build_product_seo(self, products):
        product = next(p for p in products if p.id == 6)

        seo = build_product_seo(product)

        assert seo.brand == "Trelleborg"
        assert "Trelleborg" in seo.headline
        assert seo.description == "Шина для тракторів"
        assert seo.availability.short == "під замовлення"

    def test_build_product_seo_defaults(self):
        seo = build_product_seo(Product(id=1, product_name="Unknown tyre", warehouse="In stock"))

        assert seo.brand == "CEAT"
        assert seo.description == ""
        assert "Agro-Solar" in seo.availability.phrase
