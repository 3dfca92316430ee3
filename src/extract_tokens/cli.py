from __future__ import annotations

import argparse
import json
from pathlib import Path

from .artifacts import write_extract_tokens_json
from .contracts import ExtractTokensConfig
from .module import run_extract_tokens_relpath


def build_arg_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="despiece-extract-tokens",
        description="Stage 0: PDF text layer -> positioned tokens JSON artifact.",
    )
    p.add_argument("--data-root", required=True, type=Path, help="Directory holding the cutting sheets.")
    p.add_argument("--pdf-relpath", required=True, help="PDF path relative to --data-root.")
    p.add_argument("--out-json", required=True, type=Path, help="Output tokens JSON file.")
    p.add_argument(
        "--page-selection",
        default=None,
        help='Optional page selection like "1,3-5". Default: all pages.',
    )
    p.add_argument(
        "--compute-source-sha256",
        action="store_true",
        help="Include SHA-256 of the source PDF in meta for auditing.",
    )
    return p


def main(argv: list[str] | None = None) -> int:
    args = build_arg_parser().parse_args(argv)

    config = ExtractTokensConfig(
        data_root=args.data_root,
        page_selection=args.page_selection,
        compute_source_sha256=args.compute_source_sha256,
    )

    result = run_extract_tokens_relpath(config=config, pdf_relpath=args.pdf_relpath)
    write_extract_tokens_json(result=result, out_file=args.out_json)

    summary = {
        "ok": result.ok,
        "doc_id": result.doc_id,
        "pages": len(result.pages),
        "tokens": sum(len(p.tokens) for p in result.pages),
        "errors": [e.code for e in result.errors],
    }
    print(json.dumps(summary, sort_keys=True, separators=(",", ":"), ensure_ascii=False))

    return 0 if result.ok else 2


if __name__ == "__main__":
    raise SystemExit(main())
