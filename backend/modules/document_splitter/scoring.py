"""Pure scoring functions over boundary signals."""

from typing import Iterable

from .models import BoundarySignal, ConfidenceLevel
from .patterns import BOUNDARY_THRESHOLD, CONFIDENCE_HIGH


def score(signals: Iterable[BoundarySignal]) -> int:
    """Aggregate score of a page: the sum of its signal scores."""
    return sum(signal.score for signal in signals)


def is_boundary(page_index: int, total_score: int) -> bool:
    """Page 0 always starts a document; other pages need the threshold."""
    return page_index == 0 or total_score >= BOUNDARY_THRESHOLD


def score_to_confidence(total_score: int) -> ConfidenceLevel:
    """Map an aggregate score to a confidence level."""
    if total_score >= CONFIDENCE_HIGH:
        return ConfidenceLevel.HIGH
    if total_score >= BOUNDARY_THRESHOLD:
        return ConfidenceLevel.MEDIUM
    return ConfidenceLevel.LOW
