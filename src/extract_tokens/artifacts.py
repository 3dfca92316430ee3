from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from .contracts import ExtractTokensResult


def serialize_extract_result(result: ExtractTokensResult) -> str:
    payload: dict[str, Any] = result.to_dict()
    return json.dumps(payload, ensure_ascii=False, sort_keys=True, indent=2) + "\n"


def write_extract_tokens_json(*, result: ExtractTokensResult, out_file: Path) -> None:
    out_file.parent.mkdir(parents=True, exist_ok=True)
    out_file.write_text(serialize_extract_result(result), encoding="utf-8")


def read_extract_tokens_json(in_file: Path) -> ExtractTokensResult:
    return ExtractTokensResult.from_dict(json.loads(in_file.read_text(encoding="utf-8")))
