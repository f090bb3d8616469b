"""Document splitter module.

This module handles:
- Document boundary detection in merged PDFs
- Manual page-range overrides
- Splitting page ranges into separate files via qpdf
"""

from .boundary_detector import BoundaryDetector, detect_boundaries, detect_boundaries_from_file
from .extractor import PyMuPDFExtractor, StructuralExtractor
from .models import (
    BoundarySignal,
    ConfidenceLevel,
    DetectedDocument,
    DetectionResult,
    PageProbe,
    SignalType,
    SplitFailure,
    SplitFile,
    SplitResult,
)
from .page_ranges import parse_page_ranges
from .pdf_splitter import (
    PDFSplitter,
    cleanup_split_files,
    source_base_name,
    split_pdf,
    split_session,
)
from .qpdf import get_page_count, is_qpdf_available

__all__ = [
    "BoundaryDetector",
    "detect_boundaries",
    "detect_boundaries_from_file",
    "PyMuPDFExtractor",
    "StructuralExtractor",
    "BoundarySignal",
    "ConfidenceLevel",
    "DetectedDocument",
    "DetectionResult",
    "PageProbe",
    "SignalType",
    "SplitFailure",
    "SplitFile",
    "SplitResult",
    "parse_page_ranges",
    "PDFSplitter",
    "cleanup_split_files",
    "source_base_name",
    "split_pdf",
    "split_session",
    "get_page_count",
    "is_qpdf_available",
]
