from __future__ import annotations

import math
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class RowGroupingConfig:
    """
    Row reconstruction parameters.

    `row_y_tolerance` is in the extraction backend's coordinate units (PDF
    points for pypdfium2). Recalibrate it when swapping backends; the
    algorithm itself stays the same.
    """

    row_y_tolerance: float = 5.0

    def validate(self) -> None:
        if not math.isfinite(self.row_y_tolerance) or self.row_y_tolerance <= 0:
            raise ValueError("row_y_tolerance must be a finite number > 0")

    def __post_init__(self) -> None:
        self.validate()
