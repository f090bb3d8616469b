"""Whole-document structural probes: outline bookmarks and page-label resets."""

from typing import Optional, Sequence, Set

from loguru import logger

from .extractor import StructuralExtractor


def probe_outline(extractor: StructuralExtractor) -> Set[int]:
    """Zero-based page indices targeted by any outline bookmark.
    
    The tree is walked with an explicit stack so arbitrarily deep outlines
    are safe. Unresolvable destinations are skipped; a missing or unreadable
    outline yields an empty set.
    """
    pages: Set[int] = set()
    try:
        outline = extractor.get_outline()
    except Exception as e:
        logger.warning(f"Could not read PDF outline, ignoring bookmarks: {e}")
        return pages
    
    stack = list(outline or [])
    while stack:
        node = stack.pop()
        if node.destination is not None:
            try:
                page_index = extractor.resolve_destination(node.destination)
            except Exception as e:
                logger.debug(f"Skipping unresolvable bookmark '{node.title}': {e}")
                page_index = None
            if page_index is not None:
                pages.add(page_index)
        stack.extend(node.children)
    
    return pages


def find_label_resets(labels: Optional[Sequence[str]]) -> Set[int]:
    """Pages whose label is "1" while the previous page's label is not."""
    if not labels:
        return set()
    return {
        i for i in range(1, len(labels))
        if labels[i] == "1" and labels[i - 1] != "1"
    }


def probe_page_labels(extractor: StructuralExtractor) -> Set[int]:
    """Zero-based page indices where the page label resets to "1"."""
    try:
        labels = extractor.get_page_labels()
    except Exception as e:
        logger.warning(f"Could not read page labels, ignoring them: {e}")
        return set()
    return find_label_resets(labels)
