"""Convert boundary pages into contiguous document page ranges."""

from typing import List

from .models import DetectedDocument, PageProbe
from .scoring import score_to_confidence


def format_page_range(page_start: int, page_end: int) -> str:
    """Display form of a 1-based range: "7" or "1-3"."""
    if page_start == page_end:
        return str(page_start)
    return f"{page_start}-{page_end}"


def build_documents(pages: List[PageProbe], page_count: int) -> List[DetectedDocument]:
    """Build one document per boundary page, running to the next boundary.
    
    Args:
        pages: Scored page probes in index order
        page_count: Total number of pages in the PDF
        
    Returns:
        Documents partitioning pages 1..page_count, in order
    """
    boundaries = [page for page in pages if page.is_boundary]
    documents: List[DetectedDocument] = []
    
    for i, boundary in enumerate(boundaries):
        start = boundary.page_index
        if i + 1 < len(boundaries):
            end = boundaries[i + 1].page_index - 1
        else:
            end = page_count - 1
        
        documents.append(DetectedDocument(
            index=i,
            page_start=start + 1,
            page_end=end + 1,
            page_range=format_page_range(start + 1, end + 1),
            confidence=score_to_confidence(boundary.total_score),
            signals=list(boundary.signals),
        ))
    
    return documents
