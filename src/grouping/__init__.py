"""
Stage 1: deterministic row reconstruction.

Clusters positioned tokens into printed rows using only Y/X geometry:
- read order is top-to-bottom (y descending), then left-to-right
- tokens within `row_y_tolerance` of a row's first token share that row

No field interpretation happens here.
"""

from .config import RowGroupingConfig
from .group_rows import RowGroupingResult, group_page_tokens, group_tokens_into_rows, normalize_tokens

__all__ = [
    "RowGroupingConfig",
    "RowGroupingResult",
    "group_page_tokens",
    "group_tokens_into_rows",
    "normalize_tokens",
]
