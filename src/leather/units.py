from __future__ import annotations

import math
from decimal import ROUND_HALF_UP, Context, Decimal

from contracts.parts import AreaUnit

# Exact conversion factors, shared with sheet.export.
MM2_PER_DM2 = 10000
MM2_PER_FT2 = 92903.04

_MM2_PER_UNIT: dict[AreaUnit, float] = {
    AreaUnit.DM2: MM2_PER_DM2,
    AreaUnit.FT2: MM2_PER_FT2,
}

_CENTS = Decimal("0.01")
# Enough digits for any finite float quantized to cents.
_WIDE = Context(prec=400)


def raw_area_mm2(width: float, height: float, quantity: float) -> float:
    """
    width * height * quantity in mm².

    Negative products (hand edits) and products that do not fit a float read as 0.
    """
    try:
        area = float(width) * float(height) * float(quantity)
    except OverflowError:
        return 0.0
    if not math.isfinite(area) or area < 0:
        return 0.0
    return area


def convert_mm2(area_mm2: float, unit: AreaUnit) -> float:
    if unit not in _MM2_PER_UNIT:
        raise ValueError(f"No mm² conversion for unit: {unit!r}")
    return area_mm2 / _MM2_PER_UNIT[unit]


def _quantize(value: float) -> Decimal:
    # Half-up on the exact binary value of `value`; nan/inf read as 0.
    if not math.isfinite(value):
        value = 0.0
    return Decimal(value).quantize(_CENTS, rounding=ROUND_HALF_UP, context=_WIDE)


def round_area(value: float) -> float:
    return float(_quantize(value))


def format_area(value: float) -> str:
    """Exactly two decimals, e.g. 24 -> '24.00'."""
    return f"{_quantize(value):.2f}"
