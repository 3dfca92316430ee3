"""
Stage 2: row -> raw part field extraction.

Tokens of one row are classified by an ordered rule table (material code,
WxH dimension pair, bare integer, description fragment), then leftover bare
integers are disambiguated into width/height/quantity.
"""

from .row_parser import RowParseResult, new_part_id, parse_row, parse_rows, scan_row
from .rules import ROW_FIELD_RULES, FieldRule, RowState, classify_token, split_material_code

__all__ = [
    "FieldRule",
    "ROW_FIELD_RULES",
    "RowParseResult",
    "RowState",
    "classify_token",
    "new_part_id",
    "parse_row",
    "parse_rows",
    "scan_row",
    "split_material_code",
]
