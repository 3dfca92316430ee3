from __future__ import annotations

from dataclasses import fields, replace
from typing import Any, Iterable

from contracts.parts import ProcessedPart, RawPart
from leather.processor import process_parts
from parsing.row_parser import IdFactory, new_part_id
from parsing.rules import split_material_code

_EDITABLE_FIELDS = frozenset(f.name for f in fields(RawPart)) - {"id"}


class CuttingSheet:
    """
    Editable list of raw parts.

    Processed parts are never stored; `processed()` re-derives them from the
    current raw parts with a fresh label registry on every call.
    """

    def __init__(self, parts: Iterable[RawPart] = (), *, id_factory: IdFactory | None = None) -> None:
        self._parts: list[RawPart] = []
        self._id_factory = id_factory or new_part_id
        self.extend(parts)

    @property
    def parts(self) -> list[RawPart]:
        return list(self._parts)

    def __len__(self) -> int:
        return len(self._parts)

    def _index_of(self, part_id: str) -> int:
        for i, p in enumerate(self._parts):
            if p.id == part_id:
                return i
        raise KeyError(part_id)

    def extend(self, parts: Iterable[RawPart]) -> None:
        seen = {p.id for p in self._parts}
        for p in parts:
            if p.id in seen:
                raise ValueError(f"Duplicate part id: {p.id!r}")
            seen.add(p.id)
            self._parts.append(p)

    def add_blank_part(self) -> RawPart:
        part = RawPart(
            id=self._id_factory(),
            material="",
            color="",
            description="",
            notes="",
            width=0,
            height=0,
            quantity=1,
        )
        self.extend([part])
        return part

    def update_part(self, part_id: str, **changes: Any) -> RawPart:
        unknown = set(changes) - _EDITABLE_FIELDS
        if unknown:
            raise ValueError(f"Not editable: {sorted(unknown)}")
        idx = self._index_of(part_id)
        self._parts[idx] = replace(self._parts[idx], **changes)
        return self._parts[idx]

    def set_material_code(self, part_id: str, value: str) -> RawPart:
        """'1cap/Negro' fills material and color; a code without '/' clears color."""
        material, color = split_material_code(value)
        return self.update_part(part_id, material=material, color=color)

    def remove_part(self, part_id: str) -> RawPart:
        return self._parts.pop(self._index_of(part_id))

    def processed(self) -> list[ProcessedPart]:
        return process_parts(self._parts)
