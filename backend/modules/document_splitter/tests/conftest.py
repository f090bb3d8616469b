"""Shared fixtures for document splitter tests."""

from typing import Any, Dict, List, Optional

import pytest

from backend.modules.document_splitter.extractor import StructuralExtractor
from backend.modules.document_splitter.models import OutlineNode, PageText, TextRun
from backend.modules.document_splitter.qpdf import reset_qpdf_cache

PAGE_HEIGHT = 842.0  # A4


def make_page(*runs, height: float = PAGE_HEIGHT) -> PageText:
    """Build a page from (text, normalized_y, font_size) tuples."""
    return PageText(
        runs=[TextRun(text=text, y_position=y * height, font_size_pt=size) for text, y, size in runs],
        height=height,
    )


def blank_page() -> PageText:
    return PageText(runs=[], height=PAGE_HEIGHT)


class FakeExtractor(StructuralExtractor):
    """In-memory extractor for tests."""
    
    def __init__(
        self,
        pages: List[PageText],
        outline: Optional[List[OutlineNode]] = None,
        labels: Optional[List[str]] = None,
        destinations: Optional[Dict[Any, int]] = None,
    ):
        self.pages = pages
        self.outline = outline or []
        self.labels = labels
        self.destinations = destinations or {}
        self.closed = False
    
    @property
    def page_count(self) -> int:
        return len(self.pages)
    
    def get_page_text(self, page_index: int) -> PageText:
        return self.pages[page_index]
    
    def get_outline(self) -> List[OutlineNode]:
        return self.outline
    
    def resolve_destination(self, destination: Any) -> Optional[int]:
        if destination not in self.destinations:
            raise KeyError(destination)
        return self.destinations[destination]
    
    def get_page_labels(self) -> Optional[List[str]]:
        return self.labels
    
    def close(self) -> None:
        self.closed = True


@pytest.fixture(autouse=True)
def clear_qpdf_cache():
    """Each test starts without a cached qpdf check."""
    reset_qpdf_cache()
    yield
    reset_qpdf_cache()
