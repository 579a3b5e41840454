"""
Pattern matcher: evaluates the rule table against a chart's trailing window.
"""

import logging
from typing import TYPE_CHECKING, Iterable, List, Optional

from ...exceptions import NoMoreCandlesError
from ...models.patterns import PatternRecord
from .rules import DEFAULT_RULES, PatternRule

if TYPE_CHECKING:
    from ..candle_chart import CandleChart


logger = logging.getLogger(__name__)


class PatternMatcher:
    """
    Matches the last candle of a chart's pattern window against every rule.

    Rules are independent: several may match the same window. A rule that
    needs more history than the chart holds is skipped; only an undersized
    window fails the whole scan.
    """

    def __init__(self, rules: Optional[Iterable[PatternRule]] = None):
        self.rules = tuple(rules) if rules is not None else DEFAULT_RULES

    def scan(self, chart: 'CandleChart') -> List[PatternRecord]:
        """
        Scan `chart` and record every match through `chart.add_pattern`.

        Returns the records appended by this scan.

        Raises:
            InsufficientWindowError: If the chart is smaller than its pattern window
        """
        last = chart.window()[-1]

        records = []
        for rule in self.rules:
            if not rule.applies_to(last):
                continue
            try:
                anchor = rule.match(chart, last)
            except NoMoreCandlesError as e:
                logger.debug(f"Skipping rule {rule.name}: {e}")
                continue
            if anchor is None:
                continue

            record = chart.add_pattern(anchor, rule.kind)
            if record is not None:
                records.append(record)

        return records
