"""Custom exceptions for the PDF boundary splitter."""

from typing import Any, Dict, Optional


class SplitterException(Exception):
    """Base exception for all splitter errors."""
    
    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class DocumentProcessingError(SplitterException):
    """Raised when document processing fails."""
    pass


class PDFExtractionError(DocumentProcessingError):
    """Raised when the source PDF cannot be read for boundary detection."""
    pass


class ExtractionFailure(DocumentProcessingError):
    """Raised when a single page range cannot be cut from the source PDF."""
    pass


class ConfigurationError(SplitterException):
    """Raised when a required external tool is not installed."""
    pass


class ValidationError(SplitterException):
    """Raised when input validation fails."""
    pass


class CleanupError(SplitterException):
    """Raised when temp files cannot be removed. Never escapes cleanup."""
    pass
