"""Manual page-range overrides, e.g. "1-3,4-6,7"."""

import re
from typing import List

from backend.shared.exceptions import ValidationError
from .document_builder import format_page_range
from .models import ConfidenceLevel, DetectedDocument

RANGE_TOKEN = re.compile(r"^(\d+)(?:-(\d+))?$", re.ASCII)


def parse_page_ranges(ranges: str, page_count: int) -> List[DetectedDocument]:
    """Parse a comma-separated list of 1-based inclusive ranges.
    
    Manual ranges are trusted: every document gets high confidence and no
    signals. Gaps between ranges are allowed; overlaps and inverted ranges
    are not.
    
    Raises:
        ValidationError: On the first malformed, out-of-bounds or
            overlapping token. No partial result is returned.
    """
    tokens = [token.strip() for token in (ranges or "").split(",")]
    tokens = [token for token in tokens if token]
    if not tokens:
        raise ValidationError(
            'Empty page range - provide ranges like "1-3,4-6,7"',
            details={"token": ranges},
        )
    
    documents: List[DetectedDocument] = []
    last_end = 0
    
    for i, token in enumerate(tokens):
        match = RANGE_TOKEN.match(token)
        if not match:
            raise ValidationError(
                f'Invalid page range "{token}" - use format "1-3" or "7"',
                details={"token": token},
            )
        
        page_start = int(match.group(1))
        page_end = int(match.group(2)) if match.group(2) else page_start
        
        if page_start < 1 or page_end < 1:
            raise ValidationError(
                f'Page numbers must be positive (got "{token}")',
                details={"token": token},
            )
        if page_start > page_end:
            raise ValidationError(
                f'Invalid range "{token}" - start must be <= end',
                details={"token": token},
            )
        if page_end > page_count:
            raise ValidationError(
                f'Range "{token}" exceeds page count ({page_count} pages)',
                details={"token": token, "page_count": page_count},
            )
        if page_start <= last_end:
            raise ValidationError(
                f'Overlapping range "{token}" - previous range ended at page {last_end}',
                details={"token": token, "previous_end": last_end},
            )
        
        documents.append(DetectedDocument(
            index=i,
            page_start=page_start,
            page_end=page_end,
            page_range=format_page_range(page_start, page_end),
            confidence=ConfidenceLevel.HIGH,
            signals=[],
        ))
        last_end = page_end
    
    return documents
