"""Per-page text scan for keyword, page-number and reference signals."""

from dataclasses import dataclass, field
from typing import List

from .models import BoundarySignal, PageText, SignalType, TextRun
from .patterns import (
    CONTINUATION_TABLE,
    DOC_REF_PATTERN,
    KEYWORD_TABLE,
    LARGE_FONT_PT,
    PAGE_N_PATTERN,
    PAGE_ONE_PATTERN,
    SCORE_CONTINUATION_PAGE,
    SCORE_CONTINUATION_TEXT,
    SCORE_DOC_REF,
    SCORE_KEYWORD,
    SCORE_KEYWORD_LARGE,
    SCORE_PAGE_ONE_OF,
    SCORE_SCANNED,
    UPPER_PORTION,
)


@dataclass
class PageScan:
    """Textual signals found on one page."""
    signals: List[BoundarySignal] = field(default_factory=list)
    is_scanned: bool = False


def scan_page(page: PageText) -> PageScan:
    """Derive boundary and anti-boundary signals from a page's text runs."""
    result = PageScan()
    
    if not page.runs:
        result.is_scanned = True
        result.signals.append(BoundarySignal(
            type=SignalType.SCANNED,
            label="No extractable text",
            score=SCORE_SCANNED,
        ))
        return result
    
    upper_runs: List[TextRun] = []
    all_texts: List[str] = []
    upper_cutoff = 1 - UPPER_PORTION
    
    for run in page.runs:
        text = run.text.strip()
        if not text:
            continue
        all_texts.append(text)
        if run.y_position / page.height >= upper_cutoff:
            upper_runs.append(run)
    
    full_text = " ".join(all_texts)
    upper_text = " ".join(run.text.strip() for run in upper_runs)
    signals = result.signals
    
    for keyword, pattern in KEYWORD_TABLE:
        if not pattern.search(upper_text):
            continue
        signals.append(BoundarySignal(
            type=SignalType.KEYWORD,
            label=f"{keyword} in header",
            score=SCORE_KEYWORD,
        ))
        if any(pattern.search(run.text) and run.font_size_pt >= LARGE_FONT_PT for run in upper_runs):
            signals.append(BoundarySignal(
                type=SignalType.KEYWORD_LARGE,
                label=f"{keyword} in large font (>={LARGE_FONT_PT}pt)",
                score=SCORE_KEYWORD_LARGE,
            ))
        break  # First keyword only
    
    if PAGE_ONE_PATTERN.search(full_text):
        signals.append(BoundarySignal(
            type=SignalType.PAGE_ONE_OF,
            label="Page 1 of N",
            score=SCORE_PAGE_ONE_OF,
        ))
    
    if DOC_REF_PATTERN.search(upper_text):
        signals.append(BoundarySignal(
            type=SignalType.DOC_REF,
            label="Document reference in header",
            score=SCORE_DOC_REF,
        ))
    
    page_match = PAGE_N_PATTERN.search(full_text)
    if page_match and int(page_match.group(1)) > 1:
        signals.append(BoundarySignal(
            type=SignalType.CONTINUATION,
            label=f"Page {page_match.group(1)} of N (continuation)",
            score=SCORE_CONTINUATION_PAGE,
        ))
    
    for _, pattern in CONTINUATION_TABLE:
        if pattern.search(full_text):
            signals.append(BoundarySignal(
                type=SignalType.CONTINUATION,
                label="Continuation text detected",
                score=SCORE_CONTINUATION_TEXT,
            ))
            break
    
    return result
