"""Static signal catalogue for boundary detection.

Scores, thresholds and the multilingual keyword/continuation tables live
here as data. Tables are compiled and validated once at import time;
extending language coverage means adding entries, not code.
"""

import re
from typing import List, Sequence, Tuple

# Score contributions (positive = boundary evidence, negative = anti-signal)
SCORE_OUTLINE = 80
SCORE_PAGE_LABEL_RESET = 70
SCORE_KEYWORD = 40
SCORE_PAGE_ONE_OF = 35
SCORE_KEYWORD_LARGE = 25
SCORE_DOC_REF = 20
SCORE_CONTINUATION_PAGE = -60
SCORE_CONTINUATION_TEXT = -40
SCORE_SCANNED = 0

BOUNDARY_THRESHOLD = 50
CONFIDENCE_HIGH = 80

# Upper portion = top 40% of the page (normalized y >= 0.6)
UPPER_PORTION = 0.4
LARGE_FONT_PT = 18

# Ordered: only the first match per page is scored.
BOUNDARY_KEYWORDS: Tuple[str, ...] = (
    # English
    "TAX INVOICE", "INVOICE", "PROFORMA INVOICE", "COMMERCIAL INVOICE",
    "BILL", "BILLING STATEMENT", "STATEMENT OF ACCOUNT",
    "CREDIT NOTE", "CREDIT MEMO", "DEBIT NOTE", "DEBIT MEMO",
    "PURCHASE ORDER", "DELIVERY ORDER", "DELIVERY NOTE",
    "RECEIPT", "OFFICIAL RECEIPT", "ACKNOWLEDGMENT RECEIPT",
    "QUOTATION", "SALES ORDER", "CONTRACT",
    "PACKING LIST", "BILL OF LADING", "CERTIFICATE OF ORIGIN",
    # Filipino
    "RESIBO", "KATIBAYAN NG PAGBABAYAD",
    # Indonesian / Malay
    "FAKTUR PAJAK", "FAKTUR", "NOTA KREDIT", "NOTA DEBIT",
    "KWITANSI", "SURAT JALAN",
    # Vietnamese
    "HOA DON", "HOÁ ĐƠN", "PHIẾU THU", "PHIẾU CHI",
    # Chinese
    "发票", "税务发票", "收据", "信用票据", "送货单",
)

CONTINUATION_PHRASES: Tuple[str, ...] = (
    r"continued",
    r"cont['’]?d",
    r"lanjutan",  # Indonesian
    r"tiếp theo",  # Vietnamese
)

_CJK_RE = re.compile(r"[\u4e00-\u9fff]")

PAGE_ONE_PATTERN = re.compile(r"\bpage\s+1\s+of\s+\d+", re.IGNORECASE)
PAGE_N_PATTERN = re.compile(r"\bpage\s+(\d+)\s+of\s+\d+", re.IGNORECASE)
DOC_REF_PATTERN = re.compile(
    r"\b(?:INV|SO|PO|DO|CN|DN|OR|CR|BL|SI|PI|QU|CT|REC)[\s#._-]*\d{2,}",
    re.IGNORECASE,
)


def keyword_pattern(keyword: str) -> re.Pattern:
    """Compile a case-insensitive whole-word pattern for a keyword.
    
    CJK keywords have no word boundaries, so they match anywhere.
    """
    escaped = re.escape(keyword)
    if _CJK_RE.search(keyword):
        return re.compile(escaped, re.IGNORECASE)
    return re.compile(rf"\b{escaped}\b", re.IGNORECASE)


def compile_keyword_table(keywords: Sequence[str]) -> List[Tuple[str, re.Pattern]]:
    """Build the ordered ``(keyword, pattern)`` table, rejecting bad entries."""
    table = []
    seen = set()
    for keyword in keywords:
        if not keyword or not keyword.strip():
            raise ValueError("Boundary keyword table contains an empty entry")
        folded = keyword.casefold()
        if folded in seen:
            raise ValueError(f"Duplicate boundary keyword: {keyword!r}")
        seen.add(folded)
        table.append((keyword, keyword_pattern(keyword)))
    return table


def compile_phrase_table(phrases: Sequence[str]) -> List[Tuple[str, re.Pattern]]:
    """Build the ordered continuation ``(phrase, pattern)`` table."""
    table = []
    for phrase in phrases:
        if not phrase:
            raise ValueError("Continuation phrase table contains an empty entry")
        table.append((phrase, re.compile(rf"\b(?:{phrase})\b", re.IGNORECASE)))
    return table


KEYWORD_TABLE = compile_keyword_table(BOUNDARY_KEYWORDS)
CONTINUATION_TABLE = compile_phrase_table(CONTINUATION_PHRASES)
