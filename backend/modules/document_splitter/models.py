"""Pydantic models for boundary detection and PDF splitting."""

from enum import Enum
from pathlib import Path
from typing import Any, List, Optional

from pydantic import BaseModel, Field, ConfigDict


class SignalType(str, Enum):
    """Kinds of boundary evidence a page can carry."""
    
    KEYWORD = "keyword"  # Document-type keyword in upper portion
    KEYWORD_LARGE = "keyword-large"  # Keyword in large font
    PAGE_ONE_OF = "page-one-of"  # "Page 1 of N"
    PAGE_LABEL_RESET = "page-label-reset"  # Page label restarts at "1"
    OUTLINE_BOOKMARK = "outline-bookmark"  # Bookmark points to this page
    DOC_REF = "doc-ref"  # INV-001, PO#123, ...
    CONTINUATION = "continuation"  # Anti-signal
    SCANNED = "scanned"  # Informational: no extractable text


class ConfidenceLevel(str, Enum):
    """Qualitative bucket for a boundary score."""
    
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class BoundarySignal(BaseModel):
    """A single piece of evidence that a page is (or is not) a boundary."""
    
    type: SignalType
    label: str = Field(description="Human-readable description, e.g. 'TAX INVOICE in header'")
    score: int = Field(description="Positive = boundary evidence, negative = anti-evidence")
    
    model_config = ConfigDict(frozen=True)


class PageProbe(BaseModel):
    """Detection result for a single page."""
    
    page_index: int = Field(ge=0, description="Zero-based page index")
    signals: List[BoundarySignal] = Field(default_factory=list)
    total_score: int = 0
    is_boundary: bool = False
    
    model_config = ConfigDict(frozen=True)


class DetectedDocument(BaseModel):
    """A logical document within the merged PDF."""
    
    index: int = Field(ge=0, description="Zero-based index in the split sequence")
    page_start: int = Field(ge=1, description="1-based first page (inclusive)")
    page_end: int = Field(ge=1, description="1-based last page (inclusive)")
    page_range: str = Field(description="Display range, e.g. '1-3' or '7'")
    confidence: ConfidenceLevel
    signals: List[BoundarySignal] = Field(default_factory=list)
    
    @property
    def page_count(self) -> int:
        """Number of pages in the document."""
        return self.page_end - self.page_start + 1


class DetectionResult(BaseModel):
    """Full result of boundary detection on a PDF."""
    
    page_count: int
    pages: List[PageProbe] = Field(default_factory=list)
    documents: List[DetectedDocument] = Field(default_factory=list)
    is_scanned_pdf: bool = False
    
    @property
    def boundary_pages(self) -> List[int]:
        """Zero-based indices of boundary pages."""
        return [p.page_index for p in self.pages if p.is_boundary]
    
    @property
    def has_low_confidence(self) -> bool:
        """Whether any detected document has low confidence."""
        return any(d.confidence == ConfidenceLevel.LOW for d in self.documents)


class SplitFile(BaseModel):
    """A split file extracted from the merged PDF."""
    
    index: int
    page_range: str
    path: Path = Field(description="Absolute path to the split temp file")
    file_name: str = Field(description="Generated name, e.g. 'merged-invoices_1.pdf'")


class SplitFailure(BaseModel):
    """A range that could not be cut."""
    
    index: int
    page_range: str
    error: str


class SplitResult(BaseModel):
    """Result of a split batch. The caller owns temp_dir and must clean it up."""
    
    temp_dir: Path
    files: List[SplitFile] = Field(default_factory=list)
    failures: List[SplitFailure] = Field(default_factory=list)
    
    @property
    def total(self) -> int:
        return len(self.files) + len(self.failures)
    
    @property
    def succeeded(self) -> int:
        return len(self.files)
    
    @property
    def failed(self) -> int:
        return len(self.failures)
    
    def failure_messages(self) -> List[str]:
        """One reason string per failed range."""
        return [f"pages {f.page_range}: {f.error}" for f in self.failures]


# Structural extractor contract

class TextRun(BaseModel):
    """A positioned run of text on a page.
    
    ``y_position`` is measured from the bottom of the page, as in PDF
    user space, so larger values are closer to the top.
    """
    
    text: str
    y_position: float
    font_size_pt: float = 0.0


class PageText(BaseModel):
    """Text runs for one page plus the page height used to normalize y."""
    
    runs: List[TextRun] = Field(default_factory=list)
    height: float = Field(gt=0)


class OutlineNode(BaseModel):
    """A bookmark in the outline tree."""
    
    title: str = ""
    destination: Optional[Any] = None
    children: List["OutlineNode"] = Field(default_factory=list)
OutlineNode.model_rebuild()
