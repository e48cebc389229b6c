"""
Normalizer for vendor technical tables.
Translates the English footnotes of a Trelleborg pressure/load table into
Ukrainian and cleans the whitespace of the text that follows the table.
"""

import re
from typing import Optional

from config.logging_config import LoggerMixin
from storefront.core.constants import (
    BR_RUN_PATTERN,
    BR_TAG_PATTERN,
    LINE_BREAK,
    NBSP_ENTITY_PATTERN,
    NEWLINE_RUN_PATTERN,
    TABLE_HEADER_BREAKS,
    TRANSLATION_RULES,
)

_TABLE_CLOSE = re.compile(r"</table>", re.IGNORECASE)


class TableNormalizer(LoggerMixin):
    """
    Single pass: translate -> split at </table> -> clean tail ->
    break table headers -> recompose.

    The output of normalize() is a fixed point: normalizing it again
    returns it unchanged.
    """

    def __init__(
        self,
        rules: Optional[list[tuple[re.Pattern, str]]] = None,
        header_breaks: Optional[list[tuple[re.Pattern, str]]] = None,
    ):
        """
        Args:
            rules: Ordered (pattern, replacement) translation rules
            header_breaks: Ordered (pattern, replacement) header rules
        """
        self.rules = TRANSLATION_RULES if rules is None else rules
        self.header_breaks = TABLE_HEADER_BREAKS if header_breaks is None else header_breaks

    def translate(self, html: str) -> str:
        """Applies every translation rule, in order, to the whole text."""
        out = html
        for pattern, replacement in self.rules:
            out = pattern.sub(lambda _match, text=replacement: text, out)
        return out

    def split_table(self, html: str) -> tuple[Optional[str], str]:
        """
        Splits at the first closing table tag.

        Returns:
            Tuple (table part including the tag, tail); the table part is
            None when there is no table
        """
        match = _TABLE_CLOSE.search(html)
        if not match:
            return None, html
        return html[:match.end()], html[match.end():]

    def normalize_tail(self, text: str) -> str:
        """
        Whitespace cleanup of the footnote text.

        Line breaks become a single <br> between non-empty lines,
        non-breaking spaces become plain spaces and the result is trimmed.
        """
        out = text.replace("\r\n", "\n")
        out = BR_TAG_PATTERN.sub("\n", out)
        out = NBSP_ENTITY_PATTERN.sub(" ", out)
        out = out.replace("\u00a0", " ")
        out = NEWLINE_RUN_PATTERN.sub("\n", out)
        out = out.strip()
        out = out.replace("\n", LINE_BREAK)
        out = BR_RUN_PATTERN.sub(LINE_BREAK, out)
        return out

    def normalize_headers(self, table: str) -> str:
        """Puts each word of the two-word headers on its own line."""
        out = table
        for pattern, replacement in self.header_breaks:
            out = pattern.sub(replacement, out)
        return out

    def normalize(self, html: str) -> str:
        """
        Full normalization of a vendor table fragment.

        Args:
            html: Raw fragment (table followed by footnotes)

        Returns:
            Localized, whitespace-normalized fragment
        """
        translated = self.translate(html)
        table, tail = self.split_table(translated)

        if table is None:
            self.logger.debug("No table in fragment, normalizing as text", length=len(html))
            return self.normalize_tail(translated)

        normalized_table = self.normalize_headers(table)
        normalized_tail = self.normalize_tail(tail) if tail else ""

        if not normalized_tail:
            return normalized_table
        return f"{normalized_table}{LINE_BREAK}{normalized_tail}"
