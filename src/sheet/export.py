from __future__ import annotations

import csv
import io
from pathlib import Path
from typing import Iterable

from contracts.parts import AreaUnit, RawPart
from leather.units import convert_mm2, format_area, raw_area_mm2

EXPORT_UNITS: tuple[AreaUnit, ...] = (AreaUnit.DM2, AreaUnit.FT2)

_FILENAME_SUFFIX = {AreaUnit.DM2: "dm2", AreaUnit.FT2: "ft2"}


def _require_export_unit(unit: AreaUnit | str) -> AreaUnit:
    try:
        u = AreaUnit(unit)
    except ValueError:
        u = None
    if u not in EXPORT_UNITS:
        raise ValueError(f"Export unit must be one of {[x.value for x in EXPORT_UNITS]}, got: {unit!r}")
    return u


def export_header(unit: AreaUnit | str) -> list[str]:
    u = _require_export_unit(unit)
    return ["Material", "Color", "Descripción", "Ancho (mm)", "Alto (mm)", "Cantidad", f"Área ({u.value})"]


def export_filename(unit: AreaUnit | str) -> str:
    return f"fichas_tecnicas_{_FILENAME_SUFFIX[_require_export_unit(unit)]}.csv"


def _fmt_number(v: float) -> str:
    # 300.0 -> "300"; hand-typed fractional millimetres are kept as-is
    if isinstance(v, int):
        return str(v)
    f = float(v)
    return str(int(f)) if f.is_integer() else repr(f)


def export_row(part: RawPart, unit: AreaUnit) -> list[str]:
    # Area is recomputed for the chosen unit, whatever the material family.
    area = convert_mm2(raw_area_mm2(part.width, part.height, part.quantity), unit)
    return [
        part.material,
        part.color,
        part.description + (f" {part.notes}" if part.notes else ""),
        _fmt_number(part.width),
        _fmt_number(part.height),
        _fmt_number(part.quantity),
        format_area(area),
    ]


def serialize_parts_csv(parts: Iterable[RawPart], *, unit: AreaUnit | str) -> str:
    u = _require_export_unit(unit)
    buf = io.StringIO()
    writer = csv.writer(buf, lineterminator="\n")
    writer.writerow(export_header(u))
    for p in parts:
        writer.writerow(export_row(p, u))
    return buf.getvalue()


def write_parts_csv(parts: Iterable[RawPart], *, unit: AreaUnit | str, out_dir: Path) -> Path:
    out_dir.mkdir(parents=True, exist_ok=True)
    out_file = out_dir / export_filename(unit)
    out_file.write_text(serialize_parts_csv(parts, unit=unit), encoding="utf-8")
    return out_file
