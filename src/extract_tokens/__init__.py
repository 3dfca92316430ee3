"""
Stage 0 - PDF text layer -> positioned tokens.

This package is intentionally limited to token extraction:
- It reads the embedded text layer with its geometry (PDF user space, y up).
- It performs NO OCR, page rendering, row grouping or field interpretation.
- It is the ONLY stage allowed to open PDFs.
"""

from .contracts import ExtractEngineName, ExtractTokensConfig, ExtractTokensError, ExtractTokensResult
from .module import parse_page_selection, run_extract_tokens_relpath

__all__ = [
    "ExtractEngineName",
    "ExtractTokensConfig",
    "ExtractTokensError",
    "ExtractTokensResult",
    "parse_page_selection",
    "run_extract_tokens_relpath",
]
