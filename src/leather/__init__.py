"""
Stage 3: leather classification and cut-area computation.

- `1cap...` codes (caprino) are measured in dm², `1vaq...` codes (vacuno) in ft²
- each distinct code gets a "Cuero {n}" label, scoped to one registry
- any other material passes through unclassified (area 0, unit "N/A")
"""

from .processor import FAMILY_UNITS, LeatherFamily, classify_family, final_description, process_part, process_parts
from .registry import LeatherLabelRegistry, material_key
from .units import MM2_PER_DM2, MM2_PER_FT2, convert_mm2, format_area, raw_area_mm2, round_area

__all__ = [
    "FAMILY_UNITS",
    "LeatherFamily",
    "LeatherLabelRegistry",
    "MM2_PER_DM2",
    "MM2_PER_FT2",
    "classify_family",
    "convert_mm2",
    "final_description",
    "format_area",
    "material_key",
    "process_part",
    "process_parts",
    "raw_area_mm2",
    "round_area",
]
