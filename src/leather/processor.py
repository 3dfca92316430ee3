from __future__ import annotations

from enum import Enum
from typing import Iterable

from contracts.parts import AreaUnit, ProcessedPart, RawPart

from .registry import LeatherLabelRegistry
from .units import convert_mm2, raw_area_mm2, round_area


class LeatherFamily(str, Enum):
    CAPRINO = "1cap"  # goat, measured in dm²
    VACUNO = "1vaq"  # cattle, measured in ft²


FAMILY_UNITS: dict[LeatherFamily, AreaUnit] = {
    LeatherFamily.CAPRINO: AreaUnit.DM2,
    LeatherFamily.VACUNO: AreaUnit.FT2,
}


def classify_family(material: str) -> LeatherFamily | None:
    code = material.strip().lower()
    for family in LeatherFamily:
        if code.startswith(family.value):
            return family
    return None


def final_description(description: str, notes: str) -> str:
    return f"{description} {notes}".strip() if notes else description


def process_part(part: RawPart, registry: LeatherLabelRegistry) -> ProcessedPart:
    family = classify_family(part.material)

    leather_label: str | None = None
    area = 0.0
    area_unit = AreaUnit.NA
    if family is not None:
        leather_label = registry.label_for(part.material)
        area_unit = FAMILY_UNITS[family]
        area = convert_mm2(raw_area_mm2(part.width, part.height, part.quantity), area_unit)

    return ProcessedPart(
        id=part.id,
        material=part.material,
        color=part.color,
        description=part.description,
        notes=part.notes,
        width=part.width,
        height=part.height,
        quantity=part.quantity,
        leather_label=leather_label,
        final_description=final_description(part.description, part.notes),
        area=round_area(area),
        area_unit=area_unit,
    )


def process_parts(
    parts: Iterable[RawPart],
    *,
    registry: LeatherLabelRegistry | None = None,
) -> list[ProcessedPart]:
    """
    Label and measure a batch of parts, preserving input order.

    Without `registry` a fresh one is used, so unrelated calls never share
    numbering. Pass the same registry to keep labels consistent across calls
    that belong to one logical batch. Inputs are not mutated.
    """

    reg = registry if registry is not None else LeatherLabelRegistry()
    return [process_part(p, reg) for p in parts]
