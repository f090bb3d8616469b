"""Integration tests for the detect-then-split pipeline.

Builds merged PDFs with PyMuPDF, runs boundary detection on the raw bytes
and cuts the detected ranges with the real qpdf binary when it is installed.
"""

import shutil

import fitz  # PyMuPDF
import pytest

from backend.modules.document_splitter import (
    ConfidenceLevel,
    DetectedDocument,
    detect_boundaries,
    detect_boundaries_from_file,
    get_page_count,
    parse_page_ranges,
    split_session,
)
from backend.modules.document_splitter.qpdf import reset_qpdf_cache

requires_qpdf = pytest.mark.skipif(shutil.which("qpdf") is None, reason="qpdf not installed")

# (header, reference, page count) per merged document
INVOICES = [
    ("TAX INVOICE", "INV-1001", 2),
    ("OFFICIAL RECEIPT", "OR-2002", 1),
    ("CREDIT NOTE", "CN-3003", 2),
]


def build_merged_pdf() -> bytes:
    doc = fitz.open()
    for header, reference, pages in INVOICES:
        for number in range(1, pages + 1):
            page = doc.new_page(width=595, height=842)
            if number == 1:
                page.insert_text((72, 80), header, fontsize=24)
                page.insert_text((72, 120), f"No. {reference}", fontsize=11)
            else:
                page.insert_text((72, 80), f"{header} (continued)", fontsize=11)
            page.insert_text((72, 400), "Description        Qty        Amount", fontsize=10)
            page.insert_text((260, 820), f"Page {number} of {pages}", fontsize=8)
    data = doc.tobytes()
    doc.close()
    return data


def build_scanned_pdf() -> bytes:
    doc = fitz.open()
    for _ in range(3):
        doc.new_page(width=595, height=842)
    data = doc.tobytes()
    doc.close()
    return data


class TestBoundarySplittingPipeline:
    """Test the complete detection and splitting pipeline."""
    
    @pytest.fixture
    def merged_pdf(self, tmp_path):
        path = tmp_path / "merged-invoices.pdf"
        path.write_bytes(build_merged_pdf())
        return path
    
    @pytest.fixture(autouse=True)
    def fresh_qpdf_check(self):
        reset_qpdf_cache()
        yield
        reset_qpdf_cache()
    
    def test_detects_each_invoice(self, merged_pdf):
        result = detect_boundaries(merged_pdf.read_bytes())
        
        assert result.page_count == 5
        assert not result.is_scanned_pdf
        assert [d.page_range for d in result.documents] == ["1-2", "3", "4-5"]
        assert all(d.confidence == ConfidenceLevel.HIGH for d in result.documents)
        assert result.pages[1].total_score < 0
        assert result.pages[4].total_score < 0
    
    def test_detect_from_file_matches_buffer(self, merged_pdf):
        from_file = detect_boundaries_from_file(merged_pdf)
        from_buffer = detect_boundaries(merged_pdf.read_bytes())
        
        assert from_file.model_dump() == from_buffer.model_dump()
    
    def test_bookmarks_mark_boundaries(self, tmp_path):
        doc = fitz.open()
        for _ in range(4):
            page = doc.new_page(width=595, height=842)
            page.insert_text((72, 400), "Plain body text", fontsize=10)
        doc.set_toc([[1, "First", 1], [1, "Second", 3], [2, "Second, detail", 4]])
        data = doc.tobytes()
        doc.close()
        
        result = detect_boundaries(data)
        
        assert [d.page_range for d in result.documents] == ["1-2", "3", "4"]
        assert result.documents[1].confidence == ConfidenceLevel.HIGH
    
    def test_scanned_pdf_is_flagged(self):
        result = detect_boundaries(build_scanned_pdf())
        
        assert result.is_scanned_pdf
        assert len(result.documents) == 1
        assert result.documents[0].page_range == "1-3"
    
    @requires_qpdf
    def test_split_detected_documents(self, merged_pdf):
        result = detect_boundaries(merged_pdf.read_bytes())
        
        with split_session(merged_pdf, result.documents) as split:
            temp_dir = split.temp_dir
            assert split.failures == []
            assert [f.file_name for f in split.files] == [
                "merged-invoices_1.pdf",
                "merged-invoices_2.pdf",
                "merged-invoices_3.pdf",
            ]
            page_counts = []
            for split_file in split.files:
                with fitz.open(str(split_file.path)) as part:
                    page_counts.append(part.page_count)
            assert page_counts == [2, 1, 2]
        
        assert not temp_dir.exists()
    
    @requires_qpdf
    def test_manual_ranges_with_tool_page_count(self, merged_pdf):
        page_count = get_page_count(merged_pdf)
        documents = parse_page_ranges("1-3,5", page_count)
        
        with split_session(merged_pdf, documents, base_name="manual") as split:
            assert page_count == 5
            assert [f.page_range for f in split.files] == ["1-3", "5"]
    
    @requires_qpdf
    def test_bad_range_fails_alone(self, merged_pdf):
        documents = [
            DetectedDocument(index=0, page_start=1, page_end=2, page_range="1-2",
                             confidence=ConfidenceLevel.HIGH),
            DetectedDocument(index=1, page_start=8, page_end=9, page_range="8-9",
                             confidence=ConfidenceLevel.HIGH),
            DetectedDocument(index=2, page_start=3, page_end=3, page_range="3",
                             confidence=ConfidenceLevel.HIGH),
        ]
        
        with split_session(merged_pdf, documents) as split:
            temp_dir = split.temp_dir
            assert [f.index for f in split.files] == [0, 2]
            assert [f.index for f in split.failures] == [1]
            assert split.failures[0].page_range == "8-9"
        
        assert not temp_dir.exists()
