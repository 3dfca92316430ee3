from __future__ import annotations

import uuid
from dataclasses import dataclass
from typing import Any, Callable, Iterable

from contracts.parts import RawPart
from contracts.tokens import Row

from .rules import ROW_FIELD_RULES, FieldRule, RowState, classify_token

IdFactory = Callable[[], str]


def new_part_id() -> str:
    return str(uuid.uuid4())


def _resolve_numbers(state: RowState) -> None:
    if not state.dimensions_found:
        if len(state.numbers) >= 2:
            state.width, state.height = state.numbers[0], state.numbers[1]
            if len(state.numbers) >= 3:
                state.quantity = state.numbers[2]
        elif len(state.numbers) == 1:
            # A lone number is read as a quantity, never as half a dimension.
            state.quantity = state.numbers[0]
    elif state.numbers:
        state.quantity = state.numbers[0]

    if state.quantity == 0:
        state.quantity = 1


def scan_row(row: Row, rules: tuple[FieldRule, ...] = ROW_FIELD_RULES) -> RowState:
    state = RowState()
    for tok in row.tokens:
        text = tok.text.strip()
        if not text:
            continue
        classify_token(state, text, rules)
    _resolve_numbers(state)
    return state


def is_part_row(state: RowState) -> bool:
    return state.material_found or (state.width > 0 and state.height > 0)


def parse_row(row: Row, *, id_factory: IdFactory | None = None) -> RawPart | None:
    """
    Extract one raw part from a row, or None when the row carries no part
    (headers, page numbers, decoration). Never raises.
    """

    state = scan_row(row)
    if not is_part_row(state):
        return None

    make_id = id_factory or new_part_id
    return RawPart(
        id=make_id(),
        material=state.material,
        color=state.color,
        description=" ".join(state.description_parts),
        notes="",
        width=state.width,
        height=state.height,
        quantity=state.quantity,
    )


@dataclass(frozen=True, slots=True)
class RowParseResult:
    parts: list[RawPart]
    meta: dict[str, Any]


def parse_rows(rows: Iterable[Row], *, id_factory: IdFactory | None = None) -> RowParseResult:
    parts: list[RawPart] = []
    discarded: list[str] = []
    for row in rows:
        part = parse_row(row, id_factory=id_factory)
        if part is None:
            discarded.append(row.row_id)
        else:
            parts.append(part)

    meta: dict[str, Any] = {
        "counts": {"rows_accepted": len(parts), "rows_discarded": len(discarded)},
        "discarded_row_ids": sorted(discarded),
    }
    return RowParseResult(parts=parts, meta=meta)
