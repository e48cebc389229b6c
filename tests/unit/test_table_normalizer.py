"""
Unit tests for the vendor table normalizer.
"""

import re

import pytest

from storefront.pipeline.table_normalizer import TableNormalizer

TABLE = (
    '<table><tr><th>TREAD PATTERN</th><th>PERMITTED RIMS</th></tr>'
    '<tr><td>TM900</td><td>DW23A</td></tr></table>'
)


class TestTableNormalizer:
    """Tests for TableNormalizer."""

    @pytest.fixture
    def normalizer(self) -> TableNormalizer:
        return TableNormalizer()

    # TRANSLATION

    class TestTranslation:
        """English footnotes -> Ukrainian."""

        @pytest.mark.parametrize("source,expected", [
            (
                "(*) = 10 LT at 0.4 bar only dual/triple use",
                "(*) = 10 LT при 0,4 bar лише для здвоєних/строєних коліс",
            ),
            (
                "(**) = 10 HT at 0,6 bar only dual/triple use",
                "(**) = 10 HT при 0,6 bar лише для здвоєних/строєних коліс",
            ),
            (
                "S = Single fitment.",
                "S = одиночне встановлення.",
            ),
            (
                "SW = On the nominal RIM. (Not referred to the PERMITTED RIMS)",
                "SW = на номінальному диску (не стосується дозволених дисків)",
            ),
            (
                "10 LT = Maximum Speed 10 Km/h. Surface treatment with low torque value.",
                "10 LT = максимальна швидкість 10 км/год. Поверхнева обробка з низьким крутним моментом.",
            ),
        ])
        def test_rules(self, normalizer, source, expected):
            assert normalizer.translate(source) == expected

        def test_case_insensitive(self, normalizer):
            assert normalizer.translate("s = SINGLE FITMENT") == "S = одиночне встановлення."

        @pytest.mark.parametrize("prefix", ["IMPORTANT:", "IMPORTANT: ", "IMPORTANT - ", "IMPORTANT–"])
        def test_application_note_separators(self, normalizer, prefix):
            source = (
                f"{prefix}The inflation pressure is established considering "
                "the application and the load for each tyre."
            )

            assert normalizer.translate(source) == (
                "ВАЖЛИВО: тиск накачування встановлюється з урахуванням застосування "
                "та навантаження для кожної шини."
            )

        def test_application_note_needs_attached_colon(self, normalizer):
            source = (
                "IMPORTANT : The inflation pressure is established considering "
                "the application and the load for each tyre."
            )

            assert normalizer.translate(source) == source

        def test_leaves_unknown_text(self, normalizer):
            assert normalizer.translate("Load index 173") == "Load index 173"

        def test_replacement_is_literal(self):
            normalizer = TableNormalizer(rules=[(re.compile("x"), r"\1 & \g<0>")])

            assert normalizer.translate("axb") == r"a\1 & \g<0>b"

    # TAIL

    class TestTail:

        def test_breaks_and_spaces(self, normalizer):
            text = "\r\n<br/>first&nbsp;line\r\n\r\n\n second line <BR><br>\n"

            assert normalizer.normalize_tail(text) == "first line<br> second line"

        def test_break_runs_collapse(self, normalizer):
            assert normalizer.normalize_tail("a\n \nb") == "a<br>b"

        def test_empty(self, normalizer):
            assert normalizer.normalize_tail(" \n<br> ") == ""

    # FULL PASS

    def test_table_with_footnotes(self, normalizer):
        html = (
            f"{TABLE}\r\n<br/>SW - on the nominal rim (not riferred to the PERMITTED RIMS)"
            "&nbsp;\r\n\r\nS = Single fitment.<br><br>"
        )

        result = normalizer.normalize(html)

        assert result == (
            '<table><tr><th>TREAD<br>PATTERN</th><th>PERMITTED<br>RIMS</th></tr>'
            '<tr><td>TM900</td><td>DW23A</td></tr></table>'
            "<br>SW — на номінальному диску (не стосується дозволених дисків) "
            "<br>S = одиночне встановлення."
        )

    def test_table_without_tail(self, normalizer):
        result = normalizer.normalize(f"{TABLE}\n  <br>")

        assert result.endswith("</table>")
        assert "TREAD<br>PATTERN" in result

    def test_no_table_marker(self, normalizer):
        """Without </table> only the text cleanup applies."""
        html = "TREAD PATTERN\n\nPERMITTED RIMS&nbsp;"

        assert normalizer.normalize(html) == "TREAD PATTERN<br>PERMITTED RIMS"

    def test_split_at_first_table(self, normalizer):
        table, tail = normalizer.split_table("<table>a</TABLE>x<table>b</table>")

        assert table == "<table>a</TABLE>"
        assert tail == "x<table>b</table>"

    @pytest.mark.parametrize("html", [
        f"{TABLE}\n\nS = Single fitment.\n \n(*) = 10 LT at 0.4 bar only dual/triple use",
        f"{TABLE}",
        "no table\r\n\r\nAll load values for ground slopes up to 20% (above 20% consult TWS)",
        "",
        "<br><br>",
    ])
    def test_idempotent(self, normalizer, html):
        once = normalizer.normalize(html)

        assert normalizer.normalize(once) == once
