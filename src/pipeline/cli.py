from __future__ import annotations

import argparse
import json
from pathlib import Path

from contracts.parts import AreaUnit
from extract_tokens.contracts import ExtractTokensConfig
from grouping.config import RowGroupingConfig
from sheet.export import write_parts_csv

from .artifacts import write_despiece_json
from .contracts import DespieceConfig
from .module import run_despiece_on_pdfs

_CSV_UNITS = {"dm2": AreaUnit.DM2, "ft2": AreaUnit.FT2}


def build_arg_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="despiece-run",
        description="Cutting sheet PDFs -> labelled parts with cut areas (JSON, optional CSV).",
    )
    p.add_argument("--data-root", required=True, type=Path, help="Directory holding the cutting sheets.")
    p.add_argument(
        "--pdf-relpath",
        required=True,
        action="append",
        dest="pdf_relpaths",
        help="PDF path relative to --data-root. Repeat to merge several sheets into one batch.",
    )
    p.add_argument("--out-json", required=True, type=Path, help="Output JSON artifact.")
    p.add_argument("--out-csv-dir", type=Path, default=None, help="If set, also write the CSV export here.")
    p.add_argument("--csv-unit", choices=sorted(_CSV_UNITS), default="dm2", help="Area unit of the CSV export.")
    p.add_argument("--row-y-tolerance", type=float, default=5.0, help="Same-row Y tolerance (PDF points).")
    p.add_argument(
        "--page-selection",
        default=None,
        help='Optional page selection like "1,3-5", applied to every PDF. Default: all pages.',
    )
    return p


def main(argv: list[str] | None = None) -> int:
    args = build_arg_parser().parse_args(argv)

    config = DespieceConfig(
        extract=ExtractTokensConfig(data_root=args.data_root, page_selection=args.page_selection),
        grouping=RowGroupingConfig(row_y_tolerance=args.row_y_tolerance),
    )

    result = run_despiece_on_pdfs(config=config, pdf_relpaths=args.pdf_relpaths)
    write_despiece_json(result=result, out_file=args.out_json)

    csv_file = None
    if args.out_csv_dir is not None:
        csv_file = write_parts_csv(result.raw_parts, unit=_CSV_UNITS[args.csv_unit], out_dir=args.out_csv_dir)

    summary = {
        "ok": result.ok,
        "documents": len(result.documents),
        "parts": len(result.parts),
        "leather_labels": len(result.meta.get("leather_labels", {})),
        "errors": [e.code for e in result.errors],
        "csv": (None if csv_file is None else str(csv_file)),
    }
    print(json.dumps(summary, sort_keys=True, separators=(",", ":"), ensure_ascii=False))

    return 0 if result.ok else 2


if __name__ == "__main__":
    raise SystemExit(main())
