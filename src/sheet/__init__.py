"""
Downstream consumers of processed parts: the editable sheet and the
delimited export.
"""

from .editor import CuttingSheet
from .export import EXPORT_UNITS, export_filename, export_header, serialize_parts_csv, write_parts_csv

__all__ = [
    "CuttingSheet",
    "EXPORT_UNITS",
    "export_filename",
    "export_header",
    "serialize_parts_csv",
    "write_parts_csv",
]
