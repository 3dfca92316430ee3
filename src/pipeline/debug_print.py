from __future__ import annotations

import argparse
from pathlib import Path

from extract_tokens.artifacts import read_extract_tokens_json
from grouping.config import RowGroupingConfig
from grouping.group_rows import group_page_tokens
from parsing.row_parser import is_part_row, scan_row


def main(argv: list[str] | None = None) -> int:
    ap = argparse.ArgumentParser(prog="despiece-debug-rows")
    ap.add_argument("--tokens", required=True, type=Path, help="Stage 0 tokens JSON artifact.")
    ap.add_argument("--row-y-tolerance", type=float, default=5.0)
    ap.add_argument("--max-rows", type=int, default=0, help="If >0, truncate each page after N rows.")
    args = ap.parse_args(argv)

    extracted = read_extract_tokens_json(args.tokens)
    cfg = RowGroupingConfig(row_y_tolerance=args.row_y_tolerance)

    for page in extracted.pages:
        grouped = group_page_tokens(page, cfg)
        print(f"\n=== PAGE {page.page_num:03d} ===")
        print(f"tokens={len(page.tokens)} rows={len(grouped.rows)} dropped={len(grouped.meta['dropped_tokens'])}")

        for i, row in enumerate(grouped.rows):
            if args.max_rows and i >= args.max_rows:
                print(f"... (truncated at {args.max_rows})")
                break

            state = scan_row(row)
            if is_part_row(state):
                verdict = (
                    f"material={state.material!r} color={state.color!r} "
                    f"{state.width}x{state.height} qty={state.quantity}"
                )
            else:
                verdict = "discarded"
            print(f"{row.row_id} y={row.tokens[0].y:>7.1f} :: {row.text}  ->  {verdict}")

            for t in row.tokens:
                print(f"  - x={t.x:>7.1f} y={t.y:>7.1f} text={t.text!r}")

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
