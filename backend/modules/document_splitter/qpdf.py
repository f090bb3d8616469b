"""Adapter for the qpdf command-line tool.

qpdf is an optional system dependency used to cut page ranges out of the
source PDF. Arguments are always passed as a list, never through a shell.
"""

import subprocess
import sys
from pathlib import Path
from typing import Dict, Optional, Union

from loguru import logger

from backend.shared.config import get_settings
from backend.shared.exceptions import (
    ConfigurationError,
    ExtractionFailure,
    PDFExtractionError,
)

# Availability per binary, checked once per process
_availability: Dict[str, bool] = {}
VERSION_CHECK_TIMEOUT = 10.0  # seconds


def install_hint() -> str:
    """Platform-appropriate instructions for installing qpdf."""
    if sys.platform == "darwin":
        return "install: brew install qpdf"
    if sys.platform.startswith("win"):
        return "install: choco install qpdf (or download from https://qpdf.sourceforge.io)"
    return "install: sudo apt install qpdf (Debian/Ubuntu) or sudo dnf install qpdf (Fedora)"


def is_qpdf_available(binary: Optional[str] = None) -> bool:
    """Check whether qpdf is installed. The result is cached per binary."""
    binary = binary or get_settings().qpdf_binary
    if binary in _availability:
        return _availability[binary]
    
    try:
        subprocess.run(
            [binary, "--version"],
            stdout=subprocess.DEVNULL,
            stderr=subprocess.DEVNULL,
            timeout=get_settings().qpdf_timeout_seconds or VERSION_CHECK_TIMEOUT,
            check=True,
        )
        available = True
    except (OSError, subprocess.CalledProcessError, subprocess.TimeoutExpired) as e:
        logger.debug(f"qpdf availability check failed: {e}")
        available = False
    
    _availability[binary] = available
    return available


def reset_qpdf_cache() -> None:
    """Forget the cached availability check."""
    _availability.clear()


def require_qpdf(binary: Optional[str] = None) -> str:
    """Return the qpdf binary name, or raise if it is not installed."""
    binary = binary or get_settings().qpdf_binary
    if not is_qpdf_available(binary):
        raise ConfigurationError(
            f"qpdf is required for PDF splitting - {install_hint()}",
            details={"binary": binary},
        )
    return binary


def get_page_count(path: Union[str, Path], binary: Optional[str] = None) -> int:
    """Get the page count of a PDF file using qpdf.
    
    Raises:
        ConfigurationError: If qpdf is not installed
        PDFExtractionError: If the file cannot be read as a PDF
    """
    binary = require_qpdf(binary)
    path = Path(path)
    
    try:
        completed = subprocess.run(
            [binary, "--show-npages", str(path)],
            capture_output=True,
            text=True,
            check=True,
        )
    except subprocess.CalledProcessError as e:
        raise PDFExtractionError(
            f'Failed to read page count from "{path.name}": {(e.stderr or "").strip()}'
        ) from e
    
    output = completed.stdout.strip()
    if not output.isdigit() or int(output) < 1:
        raise PDFExtractionError(f'Failed to read page count from "{path.name}"')
    return int(output)


def extract_pages(
    source: Union[str, Path],
    page_start: int,
    page_end: int,
    destination: Union[str, Path],
    binary: Optional[str] = None,
    timeout: Optional[float] = None,
) -> Path:
    """Write 1-based pages ``page_start..page_end`` of ``source`` to ``destination``.
    
    Raises:
        ExtractionFailure: If qpdf exits non-zero, times out or cannot be run
    """
    binary = binary or get_settings().qpdf_binary
    destination = Path(destination)
    command = [
        binary,
        str(source),
        "--pages", ".", f"{page_start}-{page_end}", "--",
        str(destination),
    ]
    logger.debug(f"Running: {' '.join(command)}")
    
    try:
        completed = subprocess.run(
            command,
            capture_output=True,
            text=True,
            timeout=timeout,
            check=False,
        )
    except subprocess.TimeoutExpired as e:
        raise ExtractionFailure(
            f"qpdf timed out after {timeout}s extracting pages {page_start}-{page_end}"
        ) from e
    except OSError as e:
        raise ExtractionFailure(f"Could not run qpdf ({install_hint()}): {e}") from e
    
    if completed.returncode != 0:
        stderr = (completed.stderr or "").strip()
        raise ExtractionFailure(
            f"qpdf exited with status {completed.returncode}"
            + (f": {stderr}" if stderr else ""),
            details={"returncode": completed.returncode, "stderr": stderr},
        )
    
    return destination
