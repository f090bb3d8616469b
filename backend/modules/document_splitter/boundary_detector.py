"""Heuristic document boundary detection for merged PDFs.

Each page collects signals (positive = boundary evidence, negative =
anti-signal) from structural probes and a text scan:

    outline-bookmark     +80   PDF bookmark points to this page
    page-label-reset     +70   Page label restarts at "1"
    keyword (upper 40%)  +40   Document-type keyword near the top
    page-one-of          +35   "Page 1 of N"
    keyword-large        +25   Keyword set in a large font
    doc-ref (upper 40%)  +20   Reference such as INV-001
    continuation         -60   "Page N of M" with N > 1
    continuation         -40   "Continued" and similar

A page scoring >= 50 starts a new document; page 0 always does.
"""

from pathlib import Path
from typing import List, Union

from loguru import logger

from backend.shared.exceptions import PDFExtractionError
from .document_builder import build_documents
from .extractor import PyMuPDFExtractor, StructuralExtractor
from .models import BoundarySignal, DetectionResult, PageProbe, SignalType
from .page_scanner import scan_page
from .patterns import SCORE_OUTLINE, SCORE_PAGE_LABEL_RESET
from .scoring import is_boundary, score
from .structural_probes import probe_outline, probe_page_labels


class BoundaryDetector:
    """Detects document boundaries within a merged PDF."""
    
    def detect(self, extractor: StructuralExtractor) -> DetectionResult:
        """Run structural probes and the per-page scan over an open PDF.
        
        Pages are scanned sequentially in index order.
        
        Args:
            extractor: Open structural extractor for the PDF
            
        Returns:
            DetectionResult with per-page probes and detected documents
        """
        page_count = extractor.page_count
        logger.info(f"Detecting boundaries in {page_count} pages")
        
        outline_pages = probe_outline(extractor)
        label_reset_pages = probe_page_labels(extractor)
        
        pages: List[PageProbe] = []
        scanned_count = 0
        
        for page_index in range(page_count):
            signals: List[BoundarySignal] = []
            
            if page_index in outline_pages:
                signals.append(BoundarySignal(
                    type=SignalType.OUTLINE_BOOKMARK,
                    label="PDF bookmark",
                    score=SCORE_OUTLINE,
                ))
            if page_index in label_reset_pages:
                signals.append(BoundarySignal(
                    type=SignalType.PAGE_LABEL_RESET,
                    label="Page label reset to 1",
                    score=SCORE_PAGE_LABEL_RESET,
                ))
            
            try:
                page_text = extractor.get_page_text(page_index)
            except Exception as e:
                logger.error(f"Text extraction failed on page {page_index + 1}: {e}")
                raise PDFExtractionError(
                    f"Failed to extract text from page {page_index + 1}: {e}",
                    details={"page_index": page_index},
                ) from e
            
            scan = scan_page(page_text)
            signals.extend(scan.signals)
            if scan.is_scanned:
                scanned_count += 1
            
            total_score = score(signals)
            probe = PageProbe(
                page_index=page_index,
                signals=signals,
                total_score=total_score,
                is_boundary=is_boundary(page_index, total_score),
            )
            pages.append(probe)
            
            logger.debug(
                f"Page {page_index + 1}: score {total_score} "
                f"[{', '.join(s.type.value for s in signals)}]"
                f"{' -> boundary' if probe.is_boundary else ''}"
            )
        
        documents = build_documents(pages, page_count)
        is_scanned_pdf = page_count > 0 and scanned_count == page_count
        
        if is_scanned_pdf:
            logger.info("No extractable text on any page - PDF looks scanned")
        logger.info(f"Found {len(documents)} documents")
        
        return DetectionResult(
            page_count=page_count,
            pages=pages,
            documents=documents,
            is_scanned_pdf=is_scanned_pdf,
        )
    
    def detect_bytes(self, buffer: bytes) -> DetectionResult:
        """Detect boundaries in a PDF held in memory."""
        with PyMuPDFExtractor(buffer) as extractor:
            return self.detect(extractor)


def detect_boundaries(buffer: bytes) -> DetectionResult:
    """Detect document boundaries in raw PDF bytes."""
    return BoundaryDetector().detect_bytes(buffer)


def detect_boundaries_from_file(path: Union[str, Path]) -> DetectionResult:
    """Read a PDF file once into memory and detect its boundaries."""
    path = Path(path)
    if not path.exists():
        raise PDFExtractionError(f"PDF file not found: {path}")
    try:
        buffer = path.read_bytes()
    except OSError as e:
        raise PDFExtractionError(f"Failed to read {path.name}: {e}") from e
    return detect_boundaries(buffer)
