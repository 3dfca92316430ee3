from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from contracts.parts import ProcessedPart, RawPart
from extract_tokens.contracts import ExtractTokensConfig, ExtractTokensError
from grouping.config import RowGroupingConfig


@dataclass(frozen=True, slots=True)
class DespieceConfig:
    extract: ExtractTokensConfig
    grouping: RowGroupingConfig = field(default_factory=RowGroupingConfig)


@dataclass(frozen=True, slots=True)
class DocumentSummary:
    source_pdf_relpath: str
    doc_id: str
    ok: bool
    pages: int
    parts: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "source_pdf_relpath": self.source_pdf_relpath,
            "doc_id": self.doc_id,
            "ok": self.ok,
            "pages": self.pages,
            "parts": self.parts,
        }


@dataclass(frozen=True, slots=True)
class DespieceResult:
    """
    One processed batch. `parts` is derived from `raw_parts` (same order, same ids)
    with a single label registry for the whole batch.
    """

    ok: bool
    errors: list[ExtractTokensError]
    meta: dict[str, Any]
    documents: list[DocumentSummary]
    raw_parts: list[RawPart]
    parts: list[ProcessedPart]

    def to_dict(self) -> dict[str, Any]:
        return {
            "ok": self.ok,
            "errors": [e.to_dict() for e in self.errors],
            "meta": dict(self.meta),
            "documents": [d.to_dict() for d in self.documents],
            "raw_parts": [p.to_dict() for p in self.raw_parts],
            "parts": [p.to_dict() for p in self.parts],
        }
