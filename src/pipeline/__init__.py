"""
End-to-end batch: PDFs -> tokens -> rows -> raw parts -> processed parts.

Several PDFs passed together form one batch and share one leather label
registry.
"""

from .contracts import DespieceConfig, DespieceResult, DocumentSummary
from .module import extract_raw_parts, run_despiece_on_pdfs, run_despiece_on_tokens

__all__ = [
    "DespieceConfig",
    "DespieceResult",
    "DocumentSummary",
    "extract_raw_parts",
    "run_despiece_on_pdfs",
    "run_despiece_on_tokens",
]
