from __future__ import annotations

from dataclasses import asdict, dataclass
from enum import Enum
from typing import Any


class AreaUnit(str, Enum):
    DM2 = "dm²"
    FT2 = "ft²"
    NA = "N/A"


@dataclass(frozen=True, slots=True)
class RawPart:
    """
    One cutting piece as read from a sheet row (or typed in by hand).

    Dimensions are millimetres; 0 means unknown.
    """

    id: str
    material: str
    color: str
    description: str
    notes: str
    width: float
    height: float
    quantity: int

    @staticmethod
    def from_dict(d: dict[str, Any]) -> "RawPart":
        return RawPart(
            id=str(d["id"]),
            material=str(d.get("material", "")),
            color=str(d.get("color", "")),
            description=str(d.get("description", "")),
            notes=str(d.get("notes", "")),
            width=d.get("width", 0) or 0,
            height=d.get("height", 0) or 0,
            quantity=int(d.get("quantity", 1)),
        )

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True, slots=True)
class ProcessedPart:
    """RawPart fields plus the derived leather group and area. Never stored on its own."""

    id: str
    material: str
    color: str
    description: str
    notes: str
    width: float
    height: float
    quantity: int
    leather_label: str | None
    final_description: str
    area: float  # rounded to 2 decimals
    area_unit: AreaUnit

    def raw(self) -> RawPart:
        return RawPart(
            id=self.id,
            material=self.material,
            color=self.color,
            description=self.description,
            notes=self.notes,
            width=self.width,
            height=self.height,
            quantity=self.quantity,
        )

    def to_dict(self) -> dict[str, Any]:
        out = asdict(self)
        out["area_unit"] = self.area_unit.value
        return out
