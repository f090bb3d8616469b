"""Tests for manual page-range parsing."""

import pytest

from backend.modules.document_splitter.models import ConfidenceLevel
from backend.modules.document_splitter.page_ranges import parse_page_ranges
from backend.shared.exceptions import ValidationError


class TestParsePageRanges:
    """Test suite for parse_page_ranges."""
    
    def test_valid_ranges(self):
        documents = parse_page_ranges("1-3,4-6,7", 7)
        
        assert [d.page_range for d in documents] == ["1-3", "4-6", "7"]
        assert [d.index for d in documents] == [0, 1, 2]
        assert all(d.confidence == ConfidenceLevel.HIGH for d in documents)
        assert all(d.signals == [] for d in documents)
        assert (documents[2].page_start, documents[2].page_end) == (7, 7)
    
    def test_whitespace_and_empty_tokens_ignored(self):
        documents = parse_page_ranges(" 1-2 , ,3 ", 3)
        
        assert [d.page_range for d in documents] == ["1-2", "3"]
    
    def test_gaps_are_allowed(self):
        documents = parse_page_ranges("1-2,5-6", 10)
        
        assert [d.page_range for d in documents] == ["1-2", "5-6"]
    
    @pytest.mark.parametrize("ranges", ["", "  ", ",,"])
    def test_empty_input(self, ranges):
        with pytest.raises(ValidationError, match="Empty page range"):
            parse_page_ranges(ranges, 5)
    
    @pytest.mark.parametrize("token", ["abc", "1-", "-3", "1-2-3", "1..3", "2 - 4"])
    def test_malformed_token(self, token):
        with pytest.raises(ValidationError) as exc_info:
            parse_page_ranges(f"1,{token}", 10)
        
        assert f'"{token}"' in str(exc_info.value)
        assert exc_info.value.details["token"] == token
    
    def test_non_ascii_digits_rejected(self):
        with pytest.raises(ValidationError) as exc_info:
            parse_page_ranges("１-３", 5)
        
        assert exc_info.value.details["token"] == "１-３"
    
    def test_zero_page_rejected(self):
        with pytest.raises(ValidationError, match="must be positive"):
            parse_page_ranges("0-2", 5)
    
    def test_inverted_range_rejected(self):
        with pytest.raises(ValidationError, match="start must be <= end"):
            parse_page_ranges("5-3", 10)
    
    def test_range_beyond_page_count(self):
        with pytest.raises(ValidationError) as exc_info:
            parse_page_ranges("1-20", 10)
        
        assert "10 pages" in str(exc_info.value)
    
    def test_overlap_rejected(self):
        with pytest.raises(ValidationError) as exc_info:
            parse_page_ranges("1-3,3-5", 10)
        
        assert "previous range ended at page 3" in str(exc_info.value)
    
    def test_out_of_order_rejected_as_overlap(self):
        with pytest.raises(ValidationError, match="Overlapping"):
            parse_page_ranges("4-6,1-2", 10)
