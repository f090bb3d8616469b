"""Structural extraction of page text, outlines and page labels.

The detector only depends on :class:`StructuralExtractor`; the PyMuPDF
implementation below is the one used for real PDF buffers.
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, List, Optional, Union

import fitz  # PyMuPDF
from loguru import logger

from backend.shared.exceptions import PDFExtractionError
from .models import OutlineNode, PageText, TextRun


class StructuralExtractor(ABC):
    """Read-only view of a PDF's structure and positioned text."""
    
    @property
    @abstractmethod
    def page_count(self) -> int:
        """Number of pages in the document."""
        pass
    
    @abstractmethod
    def get_page_text(self, page_index: int) -> PageText:
        """Return positioned text runs for a zero-based page index."""
        pass
    
    def get_outline(self) -> List[OutlineNode]:
        """Return the top-level outline nodes (empty when there is none)."""
        return []
    
    def resolve_destination(self, destination: Any) -> Optional[int]:
        """Resolve a bookmark destination to a zero-based page index."""
        return None
    
    def get_page_labels(self) -> Optional[List[str]]:
        """Return one display label per page, or None if the PDF defines none."""
        return None
    
    def close(self) -> None:
        pass
    
    def __enter__(self):
        return self
    
    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()


class PyMuPDFExtractor(StructuralExtractor):
    """Structural extractor backed by PyMuPDF."""
    
    def __init__(self, source: Union[bytes, bytearray, str, Path]):
        try:
            if isinstance(source, (bytes, bytearray)):
                self._doc = fitz.open(stream=bytes(source), filetype="pdf")
            else:
                self._doc = fitz.open(str(source))
        except Exception as e:
            raise PDFExtractionError(f"Failed to open PDF: {e}") from e
        
        if self._doc.needs_pass:
            self._doc.close()
            raise PDFExtractionError("PDF is encrypted - decrypt it before detection")
    
    @property
    def page_count(self) -> int:
        return self._doc.page_count
    
    def get_page_text(self, page_index: int) -> PageText:
        page = self._doc[page_index]
        height = page.rect.height
        runs: List[TextRun] = []
        
        for block in page.get_text("dict")["blocks"]:
            if block.get("type") != 0:  # Image block
                continue
            for line in block["lines"]:
                for span in line["spans"]:
                    # origin is the baseline in top-down coordinates
                    baseline = span["origin"][1]
                    runs.append(TextRun(
                        text=span["text"],
                        y_position=height - baseline,
                        font_size_pt=abs(span["size"]),
                    ))
        
        return PageText(runs=runs, height=height)
    
    def get_outline(self) -> List[OutlineNode]:
        roots: List[OutlineNode] = []
        
        # Flat [level, title, page, dest] entries; page is 1-based, < 1 when unresolved
        parents = [(0, roots)]
        for level, title, page, *_ in self._doc.get_toc(simple=False):
            while parents[-1][0] >= level:
                parents.pop()
            node = OutlineNode(
                title=title or "",
                destination=page - 1 if page > 0 else None,
            )
            parents[-1][1].append(node)
            parents.append((level, node.children))
        
        return roots
    
    def resolve_destination(self, destination: Any) -> Optional[int]:
        if isinstance(destination, int) and 0 <= destination < self.page_count:
            return destination
        return None
    
    def get_page_labels(self) -> Optional[List[str]]:
        if not self._doc.get_page_labels():
            return None
        return [page.get_label() for page in self._doc]
    
    def close(self) -> None:
        try:
            self._doc.close()
        except Exception as e:
            logger.debug(f"Error closing PDF document: {e}")
