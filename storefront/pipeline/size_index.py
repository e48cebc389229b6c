"""
Diameter -> sizes index for the cascading size selector.

The index is precomputed by an offline job over the whole catalog.
At runtime the static file is read; if it is missing the index is derived
from a bounded live sample, which may omit sizes.
"""

import json
from collections.abc import Iterable, Mapping
from decimal import Decimal
from pathlib import Path
from typing import Any, Optional

from config.logging_config import LoggerMixin
from storefront.core.exceptions import VendorDataError
from storefront.core.models import SizeFilterIndex
from storefront.core.types import SizeIndexSource
from storefront.directus.client import DirectusClient
from storefront.pipeline.parser import ValueParser
from storefront.pipeline.sorting import collation_key, sort_strings

INDEX_FIELDS = ["size", "diameter"]

_parser = ValueParser()


def _clean(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _read_field(item: Any, field: str) -> Any:
    if isinstance(item, Mapping):
        return item.get(field)
    return getattr(item, field, None)


def sort_diameter_values(values: Iterable[str]) -> list[str]:
    """
    Orders diameters numerically.

    Values with a leading number come first, by value; the rest follow in
    collation order. Equal numbers fall back to collation order.
    """

    def key(value: str) -> tuple[int, Decimal, tuple[int, ...]]:
        number = _parser.parse_diameter(value)
        if number is None:
            return (1, Decimal(0), collation_key(value))
        return (0, number, collation_key(value))

    return sorted(values, key=key)


def build_size_filter_map(items: Iterable[Any]) -> dict[str, list[str]]:
    """
    Groups sizes by diameter.

    Items without a diameter or a size are skipped. Sizes are deduplicated
    and sorted; diameters are sorted by sort_diameter_values.

    Args:
        items: Products or raw mappings with "diameter" and "size"

    Returns:
        Ordered dict diameter -> sizes
    """
    groups: dict[str, set[str]] = {}

    for item in items:
        diameter = _clean(_read_field(item, "diameter"))
        size = _clean(_read_field(item, "size"))

        if not diameter or not size:
            continue

        groups.setdefault(diameter, set()).add(size)

    return {
        diameter: sort_strings(groups[diameter])
        for diameter in sort_diameter_values(groups)
    }


class SizeIndexBuilder(LoggerMixin):
    """
    Builds, writes and loads the size filter index.
    """

    def __init__(
        self,
        client: DirectusClient,
        index_path: Path,
        *,
        page_size: int = 500,
        fallback_limit: int = 1000,
    ):
        """
        Args:
            client: Catalog API client
            index_path: Location of the static JSON artifact
            page_size: Items per request for the full build
            fallback_limit: Sample size for the live fallback
        """
        self.client = client
        self.index_path = Path(index_path)
        self.page_size = page_size
        self.fallback_limit = fallback_limit

    async def build_full(self) -> SizeFilterIndex:
        """Builds the index from every product in the catalog."""
        items = await self.client.fetch_all_pages(INDEX_FIELDS, page_size=self.page_size)
        index = SizeFilterIndex(
            diameters=build_size_filter_map(items),
            source=SizeIndexSource.STATIC,
            is_complete=True,
        )
        self.logger.info(
            "Size index built",
            products=len(items),
            diameters=len(index.diameters),
            sizes=index.total_sizes,
        )
        return index

    def write(self, index: SizeFilterIndex, path: Optional[Path] = None) -> Path:
        """
        Writes the index as pretty-printed JSON.

        Returns:
            Path of the written file
        """
        target = Path(path or self.index_path)
        target.parent.mkdir(parents=True, exist_ok=True)

        with open(target, "w", encoding="utf-8") as f:
            json.dump(index.diameters, f, ensure_ascii=False, indent=2)
            f.write("\n")

        self.logger.info("Size index saved", path=str(target))
        return target

    def read_static(self, path: Optional[Path] = None) -> SizeFilterIndex:
        """
        Reads the precomputed artifact.

        Raises:
            VendorDataError: Missing, unreadable or malformed file
        """
        source = Path(path or self.index_path)

        try:
            with open(source, encoding="utf-8") as f:
                payload = json.load(f)
        except (OSError, ValueError) as e:
            raise VendorDataError(
                "Static size index unavailable",
                path=str(source),
                cause=e,
            ) from e

        if not isinstance(payload, dict) or not all(
            isinstance(sizes, list) and all(isinstance(s, str) for s in sizes)
            for sizes in payload.values()
        ):
            raise VendorDataError("Static size index has an invalid shape", path=str(source))

        return SizeFilterIndex(diameters=payload, source=SizeIndexSource.STATIC)

    async def load(self) -> SizeFilterIndex:
        """
        Static artifact first, bounded live sample as a fallback.

        The fallback only sees the first fallback_limit products, so the
        result is flagged is_complete=False.
        """
        try:
            return self.read_static()
        except VendorDataError as e:
            self.logger.warning(
                "Static size index unavailable, falling back to live sample",
                path=str(self.index_path),
                error=e.message,
                sample_limit=self.fallback_limit,
            )

        items = await self.client.fetch_items(
            [
                ("fields", ",".join(INDEX_FIELDS)),
                ("limit", str(self.fallback_limit)),
            ]
        )
        return SizeFilterIndex(
            diameters=build_size_filter_map(items),
            source=SizeIndexSource.LIVE_SAMPLE,
            is_complete=False,
        )
