from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Callable

MATERIAL_PREFIX_RE = re.compile(r"^(1cap|1vaq)", re.IGNORECASE)
# Unanchored: "Pieza 300x400mm" still yields a dimension pair.
DIMENSION_RE = re.compile(r"([0-9]+)\s*[xX*]\s*([0-9]+)")
BARE_INTEGER_RE = re.compile(r"^[0-9]+$")
ASCII_LETTER_RE = re.compile(r"[a-zA-Z]")
# Longer digit runs are not read as numbers and fall through to the next rule.
MAX_NUMBER_DIGITS = 15


@dataclass(slots=True)
class RowState:
    """Mutable per-row accumulator; one instance per parsed row."""

    material: str = ""
    color: str = ""
    width: int = 0
    height: int = 0
    quantity: int = 0
    description_parts: list[str] = field(default_factory=list)
    numbers: list[int] = field(default_factory=list)
    material_found: bool = False
    dimensions_found: bool = False


@dataclass(frozen=True, slots=True)
class FieldRule:
    name: str
    matches: Callable[[RowState, str], bool]
    apply: Callable[[RowState, str], None]


def split_material_code(text: str) -> tuple[str, str]:
    """'1cap/Negro/Mate' -> ('1cap', 'Negro/Mate'); no slash -> (text, '')."""
    if "/" not in text:
        return text, ""
    head, *rest = text.split("/")
    return head.strip(), "/".join(rest).strip()


def _is_material_code(state: RowState, text: str) -> bool:
    return not state.material_found and ("/" in text or MATERIAL_PREFIX_RE.match(text) is not None)


def _take_material_code(state: RowState, text: str) -> None:
    state.material, state.color = split_material_code(text)
    state.material_found = True


def _dimension_match(text: str) -> re.Match[str] | None:
    m = DIMENSION_RE.search(text)
    if m is None or len(m.group(1)) > MAX_NUMBER_DIGITS or len(m.group(2)) > MAX_NUMBER_DIGITS:
        return None
    return m


def _is_dimension_pair(state: RowState, text: str) -> bool:
    return not state.dimensions_found and _dimension_match(text) is not None


def _take_dimension_pair(state: RowState, text: str) -> None:
    m = _dimension_match(text)
    if m is None:
        return
    state.width = int(m.group(1))
    state.height = int(m.group(2))
    state.dimensions_found = True


def _is_bare_integer(state: RowState, text: str) -> bool:
    return len(text) <= MAX_NUMBER_DIGITS and BARE_INTEGER_RE.match(text) is not None


def _take_bare_integer(state: RowState, text: str) -> None:
    state.numbers.append(int(text))


def _is_description_fragment(state: RowState, text: str) -> bool:
    # Single punctuation/noise characters are not description.
    return len(text) > 1 or ASCII_LETTER_RE.search(text) is not None


def _take_description_fragment(state: RowState, text: str) -> None:
    state.description_parts.append(text)


# Evaluated top to bottom; the first matching rule consumes the token.
ROW_FIELD_RULES: tuple[FieldRule, ...] = (
    FieldRule("material_code", _is_material_code, _take_material_code),
    FieldRule("dimension_pair", _is_dimension_pair, _take_dimension_pair),
    FieldRule("bare_integer", _is_bare_integer, _take_bare_integer),
    FieldRule("description_fragment", _is_description_fragment, _take_description_fragment),
)


def classify_token(state: RowState, text: str, rules: tuple[FieldRule, ...] = ROW_FIELD_RULES) -> str | None:
    """Apply the first matching rule to `state`; return its name, or None when ignored."""
    for rule in rules:
        if rule.matches(state, text):
            rule.apply(state, text)
            return rule.name
    return None
