"""Cut detected (or manually specified) documents out of a merged PDF.

Every range is written to its own file inside a fresh temp directory.
A failing range is recorded and the batch carries on. The caller owns the
returned temp directory and must release it with ``cleanup_split_files``
(or use ``split_session``, which does so on every exit path).
"""

import os
import re
import shutil
import tempfile
from concurrent.futures import ThreadPoolExecutor
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, List, Optional, Sequence, Union

from loguru import logger

from backend.shared.config import Settings, get_settings
from backend.shared.exceptions import CleanupError
from .models import DetectedDocument, SplitFailure, SplitFile, SplitResult
from .qpdf import extract_pages, require_qpdf

_PDF_EXTENSION = re.compile(r"\.pdf$", re.IGNORECASE)
_PASSWORD_MARKER = re.compile(r"^(.+?)__pw__.+$", re.IGNORECASE)


def source_base_name(filename: Union[str, Path]) -> str:
    """Base name for split files: no directory, no .pdf, no __pw__ marker.
    
    ``receipt__pw__s3cret.pdf`` becomes ``receipt``.
    """
    stem = _PDF_EXTENSION.sub("", Path(filename).name)
    match = _PASSWORD_MARKER.match(stem)
    return match.group(1) if match else stem


class PDFSplitter:
    """Splits a merged PDF into one file per document range."""
    
    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or get_settings()
    
    def split(
        self,
        source_path: Union[str, Path],
        documents: Sequence[DetectedDocument],
        base_name: Optional[str] = None,
        max_workers: Optional[int] = None,
    ) -> SplitResult:
        """Extract each document's page range into its own PDF.
        
        Args:
            source_path: Path to the merged PDF
            documents: Detected or manually parsed documents
            base_name: Prefix for output file names (derived from source if omitted)
            max_workers: Parallel qpdf processes; 1 runs sequentially
            
        Returns:
            SplitResult with one file or failure per requested document
            
        Raises:
            ConfigurationError: If qpdf is not installed. Nothing is written.
        """
        binary = require_qpdf(self.settings.qpdf_binary)
        source_path = Path(source_path).resolve()
        base_name = base_name or source_base_name(source_path)
        
        if self.settings.temp_dir:
            Path(self.settings.temp_dir).mkdir(parents=True, exist_ok=True)
        temp_dir = Path(tempfile.mkdtemp(
            prefix=self.settings.temp_prefix,
            dir=self.settings.temp_dir,
        )).resolve()
        
        logger.info(
            f"Splitting {source_path.name} into {len(documents)} documents in {temp_dir}"
        )
        
        try:
            outcomes = self._run(binary, source_path, documents, base_name, temp_dir, max_workers)
        except BaseException:
            # Interrupted mid-batch: nobody will receive the temp dir
            cleanup_split_files(temp_dir)
            raise
        
        result = SplitResult(temp_dir=temp_dir)
        for outcome in outcomes:
            if isinstance(outcome, SplitFile):
                result.files.append(outcome)
            else:
                result.failures.append(outcome)
        
        logger.info(f"Split complete: {result.succeeded} succeeded, {result.failed} failed")
        return result
    
    def _run(
        self,
        binary: str,
        source_path: Path,
        documents: Sequence[DetectedDocument],
        base_name: str,
        temp_dir: Path,
        max_workers: Optional[int],
    ) -> List[Union[SplitFile, SplitFailure]]:
        workers = max_workers or self.settings.split_max_workers
        workers = max(1, min(workers, os.cpu_count() or 1, len(documents) or 1))
        
        def cut(document: DetectedDocument) -> Union[SplitFile, SplitFailure]:
            return self._cut_document(binary, source_path, document, base_name, temp_dir)
        
        if workers == 1:
            return [cut(document) for document in documents]
        
        # Results are collected in submission order, not completion order
        executor = ThreadPoolExecutor(max_workers=workers)
        try:
            futures = [executor.submit(cut, document) for document in documents]
            return [future.result() for future in futures]
        finally:
            # Queued ranges are dropped if collection is interrupted
            executor.shutdown(wait=True, cancel_futures=True)
    
    def _cut_document(
        self,
        binary: str,
        source_path: Path,
        document: DetectedDocument,
        base_name: str,
        temp_dir: Path,
    ) -> Union[SplitFile, SplitFailure]:
        file_name = f"{base_name}_{document.index + 1}.pdf"
        output_path = temp_dir / file_name
        
        try:
            extract_pages(
                source_path,
                document.page_start,
                document.page_end,
                output_path,
                binary=binary,
                timeout=self.settings.qpdf_timeout_seconds,
            )
        except Exception as e:
            logger.warning(
                f"Failed to split document {document.index + 1} "
                f"(pages {document.page_range}): {e}"
            )
            return SplitFailure(
                index=document.index,
                page_range=document.page_range,
                error=str(e),
            )
        
        return SplitFile(
            index=document.index,
            page_range=document.page_range,
            path=output_path,
            file_name=file_name,
        )


def split_pdf(
    source_path: Union[str, Path],
    documents: Sequence[DetectedDocument],
    base_name: Optional[str] = None,
    max_workers: Optional[int] = None,
) -> SplitResult:
    """Split a PDF with the global settings. Caller must clean up ``temp_dir``."""
    return PDFSplitter().split(source_path, documents, base_name, max_workers)


def _remove_tree(path: Path) -> None:
    try:
        shutil.rmtree(path)
    except FileNotFoundError:
        return
    except OSError as e:
        raise CleanupError(f"Failed to remove {path}: {e}", details={"path": str(path)}) from e


def cleanup_split_files(temp_dir: Optional[Union[str, Path]]) -> None:
    """Remove a split temp directory. Best effort, safe to call repeatedly."""
    if not temp_dir:
        return
    try:
        _remove_tree(Path(temp_dir))
    except CleanupError as e:
        logger.warning(f"Cleanup failed, leaving temp files behind: {e}")
    except Exception as e:
        logger.warning(f"Unexpected cleanup error for {temp_dir}: {e}")


@contextmanager
def split_session(
    source_path: Union[str, Path],
    documents: Sequence[DetectedDocument],
    base_name: Optional[str] = None,
    max_workers: Optional[int] = None,
    splitter: Optional[PDFSplitter] = None,
) -> Iterator[SplitResult]:
    """Split a PDF and remove the temp directory when the block exits."""
    splitter = splitter or PDFSplitter()
    result = splitter.split(source_path, documents, base_name, max_workers)
    try:
        yield result
    finally:
        cleanup_split_files(result.temp_dir)
