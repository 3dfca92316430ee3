from __future__ import annotations

import math
from dataclasses import dataclass
from functools import cmp_to_key
from typing import Any, Iterable

from contracts.tokens import PositionedToken, Row, TokenPage

from .config import RowGroupingConfig


def _fmt_row_id(page_num: int, idx: int) -> str:
    return f"p{page_num:03d}_r{idx:06d}"


@dataclass(frozen=True, slots=True)
class RowGroupingResult:
    page_num: int
    rows: list[Row]
    meta: dict[str, Any]

    def to_dict(self) -> dict[str, Any]:
        return {
            "page_num": self.page_num,
            "rows": [r.to_dict() for r in self.rows],
            "meta": dict(self.meta),
        }


def normalize_tokens(tokens: Iterable[PositionedToken]) -> tuple[list[PositionedToken], list[dict[str, Any]]]:
    """
    Boundary filter applied before grouping.

    Returns (kept tokens in input order, dropped ledger). Nothing is repaired or
    rewritten; a token is either kept verbatim or dropped with a reason code.
    """

    kept: list[PositionedToken] = []
    dropped: list[dict[str, Any]] = []
    for idx, t in enumerate(tokens):
        if t.text.strip() == "":
            dropped.append({"token_index": idx, "reason": "WHITESPACE"})
            continue
        if not (math.isfinite(t.x) and math.isfinite(t.y)):
            dropped.append({"token_index": idx, "reason": "NON_FINITE_GEOMETRY"})
            continue
        kept.append(t)
    return kept, dropped


def _reading_order(a: PositionedToken, b: PositionedToken, *, tol: float) -> int:
    # Same printed line (baseline jitter below tol): x asc. Otherwise top first.
    if abs(a.y - b.y) < tol:
        return -1 if a.x < b.x else (1 if a.x > b.x else 0)
    return -1 if a.y > b.y else 1


def _cluster_rows(tokens: list[PositionedToken], *, tol: float) -> list[list[PositionedToken]]:
    sweep = sorted(tokens, key=cmp_to_key(lambda a, b: _reading_order(a, b, tol=tol)))

    rows: list[list[PositionedToken]] = []
    cur: list[PositionedToken] = []
    for tok in sweep:
        # Membership is measured against the row's first token.
        if cur and abs(tok.y - cur[0].y) >= tol:
            rows.append(sorted(cur, key=lambda t: t.x))
            cur = []
        cur.append(tok)

    if cur:
        rows.append(sorted(cur, key=lambda t: t.x))
    return rows


def group_tokens_into_rows(
    tokens: Iterable[PositionedToken],
    *,
    page_num: int = 1,
    config: RowGroupingConfig | None = None,
) -> list[Row]:
    """
    Reconstruct visual rows, top-to-bottom, each ordered left-to-right.

    Pure; never raises for any token list (empty input -> []).
    """

    cfg = config or RowGroupingConfig()
    used, _dropped = normalize_tokens(tokens)
    clusters = _cluster_rows(used, tol=cfg.row_y_tolerance)
    return [Row(row_id=_fmt_row_id(page_num, idx), page_num=page_num, tokens=toks) for idx, toks in enumerate(clusters)]


def group_page_tokens(page: TokenPage, config: RowGroupingConfig | None = None) -> RowGroupingResult:
    cfg = config or RowGroupingConfig()

    used, dropped = normalize_tokens(page.tokens)
    clusters = _cluster_rows(used, tol=cfg.row_y_tolerance)
    rows = [
        Row(row_id=_fmt_row_id(page.page_num, idx), page_num=page.page_num, tokens=toks)
        for idx, toks in enumerate(clusters)
    ]

    meta: dict[str, Any] = {
        "row_y_tolerance": cfg.row_y_tolerance,
        "counts": {
            "tokens_in": len(page.tokens),
            "tokens_used": len(used),
            "rows": len(rows),
        },
        "dropped_tokens": sorted(dropped, key=lambda d: (d["token_index"], d["reason"])),
    }
    return RowGroupingResult(page_num=page.page_num, rows=rows, meta=meta)
