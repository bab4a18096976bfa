"""
Extractor Base Classes.

Every field extractor is an ordered list of named strategies run against a
prepared view of the normalized text. The first strategy that produces a
non-empty value wins; when none does, the extractor returns its empty value.
The order of the strategies is part of the extraction ruleset.

Usage:
    from invoice_intake.extraction import AmountExtractor

    outcome = AmountExtractor().extract("Amount Due: $1,234.56")
    outcome.value      # "$1,234.56"
    outcome.matched    # True
    outcome.strategy   # "amount_due"
"""

from dataclasses import dataclass
from typing import Any, Callable, List, Optional

from invoice_intake.utils.logger import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class ExtractionOutcome:
    """
    Result of running one field extractor.

    Attributes:
        value: Extracted value, or the extractor's empty value.
        matched: Whether any strategy produced a value.
        strategy: Name of the winning strategy, None on a miss.
    """
    value: Any
    matched: bool
    strategy: Optional[str] = None


@dataclass(frozen=True)
class Strategy:
    """
    A named candidate rule for one field.

    The function receives the extractor's prepared context and returns the
    value it found, or a falsy value when it found nothing.
    """
    name: str
    func: Callable[[Any], Any]

    def __call__(self, context: Any) -> Any:
        return self.func(context)


class Extractor:
    """
    Base class for field extractors.

    Subclasses set ``field_name``, optionally override ``prepare`` to build
    the context their strategies share (a window around the anchor, a list
    of segments), and return their ordered strategies from ``strategies``.
    """

    field_name: str = ""
    empty_value: Any = ""

    def prepare(self, text: str) -> Any:
        """
        Build the context handed to every strategy.

        Returning None short-circuits the extractor to a miss.
        """
        return text

    def strategies(self) -> List[Strategy]:
        raise NotImplementedError

    def extract(self, text: str) -> ExtractionOutcome:
        """
        Run the strategies in order and return the first hit.

        Args:
            text: Normalized invoice text. None is treated as empty.

        Returns:
            ExtractionOutcome for this field.
        """
        context = self.prepare(text or "")
        if context is None:
            logger.debug(f"{self.field_name}: no context")
            return ExtractionOutcome(self.empty_value, False)

        for strategy in self.strategies():
            value = strategy(context)
            if value:
                logger.debug(f"{self.field_name}: '{value}' via {strategy.name}")
                return ExtractionOutcome(value, True, strategy.name)

        logger.debug(f"{self.field_name}: no strategy matched")
        return ExtractionOutcome(self.empty_value, False)

    def __call__(self, text: str) -> Any:
        return self.extract(text).value

    @property
    def strategy_names(self) -> List[str]:
        return [s.name for s in self.strategies()]
