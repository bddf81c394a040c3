"""Emoji collection counters"""

import time
from typing import Callable, Dict, Optional

from ..models import Expression
from ..utils import get_logger

logger = get_logger(__name__)


class EmojiCollection:
    """
    Counts how often each expression was recognized

    An expression is counted only when it differs from the last counted
    one and at least `interval` seconds passed since that count, so
    holding a face does not run the counter up.
    """

    def __init__(self, interval: float = 1.0, clock: Callable[[], float] = time.monotonic):
        """
        Args:
            interval: minimum seconds between two counted expressions
            clock: time source (seconds)
        """
        self.interval = interval
        self._clock = clock
        self._counts: Dict[Expression, int] = {e: 0 for e in Expression}
        self.last_expression: Optional[Expression] = None
        self._last_time: Optional[float] = None

    def record(self, expression: Optional[Expression]) -> bool:
        """
        Offer the currently committed expression

        Args:
            expression: expression of the latest frame (None: no face)

        Returns:
            bool: True when the counter was incremented
        """
        if expression is None or expression == self.last_expression:
            return False

        now = self._clock()
        if self._last_time is not None and now - self._last_time < self.interval:
            return False

        self.last_expression = expression
        self._last_time = now
        self._counts[expression] += 1

        logger.debug(f"collected {expression.value} ({self._counts[expression]})")
        return True

    def count(self, expression: Expression) -> int:
        return self._counts[expression]

    def counts(self) -> Dict[str, int]:
        """Counters keyed by expression value"""
        return {e.value: n for e, n in self._counts.items()}

    def total(self) -> int:
        return sum(self._counts.values())

    def reset(self):
        for expression in self._counts:
            self._counts[expression] = 0
        self.last_expression = None
        self._last_time = None
