"""
Inflation pressure recommendation from a vendor calculator table.
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Optional, Sequence

from config.logging_config import LoggerMixin
from storefront.core.models import CCalcEntry, PressureRecommendation
from storefront.pipeline.parser import ValueParser
from storefront.pipeline.sorting import sort_strings


@dataclass
class _Candidate:
    entry: CCalcEntry
    pressure: Decimal
    load: Decimal


class PressureCalculator(LoggerMixin):
    """
    Picks the lowest pressure that carries a load at a given speed.
    """

    def __init__(self, parser: Optional[ValueParser] = None):
        self.parser = parser or ValueParser()

    def speeds(self, entries: Sequence[CCalcEntry]) -> list[str]:
        """Distinct speed options, in collation order."""
        return sort_strings({entry.speed for entry in entries})

    def load_options(self, entries: Sequence[CCalcEntry], speed: str) -> list[str]:
        """Distinct load labels for a speed, in table order."""
        loads: list[str] = []
        for entry in entries:
            if entry.speed == speed and entry.load not in loads:
                loads.append(entry.load)
        return loads

    def default_selection(self, entries: Sequence[CCalcEntry]) -> tuple[str, str]:
        """
        Initial (speed, load) selection: first speed, first load for it.

        Returns:
            Tuple of labels; empty strings for an empty table
        """
        speeds = self.speeds(entries)
        if not speeds:
            return "", ""
        loads = self.load_options(entries, speeds[0])
        return speeds[0], loads[0] if loads else ""

    def recommend(
        self,
        entries: Optional[Sequence[CCalcEntry]],
        speed: Optional[str],
        load: Optional[str],
    ) -> Optional[PressureRecommendation]:
        """
        Recommends a pressure for the selected speed and load.

        Rows of the selected speed are sorted by pressure. The row whose load
        equals the requested load wins; otherwise the first row whose load is
        not less than it; otherwise the highest-pressure row. Rows whose
        pressure or load cannot be parsed are ignored.

        Args:
            entries: Calculator rows
            speed: Selected speed label
            load: Selected load label

        Returns:
            Recommendation, or None when nothing can be recommended
        """
        if not speed or not entries:
            return None

        target = self.parser.parse_load(load)
        if target is None:
            return None

        candidates: list[_Candidate] = []
        for entry in entries:
            if entry.speed != speed:
                continue

            pressure = self.parser.parse_pressure(entry.pressure)
            entry_load = self.parser.parse_load(entry.load)
            if pressure is None or entry_load is None:
                self.logger.debug(
                    "Calculator row skipped",
                    pressure=entry.pressure,
                    load=entry.load,
                )
                continue

            candidates.append(_Candidate(entry, pressure, entry_load))

        if not candidates:
            return None

        candidates.sort(key=lambda c: c.pressure)

        chosen = next((c for c in candidates if c.load == target), None)
        exact = chosen is not None
        if chosen is None:
            chosen = next((c for c in candidates if c.load >= target), candidates[-1])

        return PressureRecommendation(
            speed=speed,
            pressure_label=chosen.entry.pressure,
            pressure_value=chosen.pressure,
            load_label=chosen.entry.load,
            load_value=chosen.load,
            exact_match=exact,
        )
