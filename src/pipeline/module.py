from __future__ import annotations

from typing import Any, Iterable

from contracts.parts import RawPart
from contracts.tokens import TokenPage
from extract_tokens.contracts import ExtractTokensError
from extract_tokens.module import run_extract_tokens_relpath
from grouping.config import RowGroupingConfig
from grouping.group_rows import group_page_tokens
from leather.processor import process_parts
from leather.registry import LeatherLabelRegistry
from parsing.row_parser import IdFactory, parse_rows

from .contracts import DespieceConfig, DespieceResult, DocumentSummary


def extract_raw_parts(
    pages: Iterable[TokenPage],
    *,
    config: RowGroupingConfig | None = None,
    id_factory: IdFactory | None = None,
) -> tuple[list[RawPart], dict[str, Any]]:
    """
    Stages 1-2 for one document: tokens -> rows -> raw parts.

    Returns parts in page order, then row order, plus per-page audit counts.
    """

    parts: list[RawPart] = []
    page_meta: dict[str, Any] = {}
    for page in pages:
        grouped = group_page_tokens(page, config)
        parsed = parse_rows(grouped.rows, id_factory=id_factory)
        parts.extend(parsed.parts)
        page_meta[f"page_{page.page_num:03d}"] = {
            **grouped.meta["counts"],
            **parsed.meta["counts"],
            "dropped_tokens": grouped.meta["dropped_tokens"],
        }
    return parts, page_meta


def _finish(
    *,
    errors: list[ExtractTokensError],
    meta: dict[str, Any],
    documents: list[DocumentSummary],
    raw_parts: list[RawPart],
) -> DespieceResult:
    # One registry for everything merged into this batch.
    registry = LeatherLabelRegistry()
    parts = process_parts(raw_parts, registry=registry)

    meta["leather_labels"] = registry.labels()
    meta["counts"] = {
        "documents": len(documents),
        "raw_parts": len(raw_parts),
        "classified_parts": sum(1 for p in parts if p.leather_label is not None),
    }

    ids = [p.id for p in raw_parts]
    if len(set(ids)) != len(ids):
        errors.append(
            ExtractTokensError(
                code="PIPELINE_DUPLICATE_PART_ID",
                message="Part ids must be unique within a batch",
                detail={"duplicates": sorted({i for i in ids if ids.count(i) > 1})},
            )
        )

    return DespieceResult(
        ok=len(errors) == 0,
        errors=errors,
        meta=meta,
        documents=documents,
        raw_parts=raw_parts,
        parts=parts,
    )


def run_despiece_on_tokens(
    pages: Iterable[TokenPage],
    *,
    config: RowGroupingConfig | None = None,
    id_factory: IdFactory | None = None,
    source_label: str = "tokens",
) -> DespieceResult:
    """Stages 1-3 on already-extracted token pages (one document)."""

    pages = list(pages)
    raw_parts, page_meta = extract_raw_parts(pages, config=config, id_factory=id_factory)
    documents = [
        DocumentSummary(source_pdf_relpath=source_label, doc_id=source_label, ok=True, pages=len(pages), parts=len(raw_parts))
    ]
    meta: dict[str, Any] = {"pages": {source_label: page_meta}}
    return _finish(errors=[], meta=meta, documents=documents, raw_parts=raw_parts)


def run_despiece_on_pdfs(
    *,
    config: DespieceConfig,
    pdf_relpaths: list[str],
    id_factory: IdFactory | None = None,
) -> DespieceResult:
    """
    Full batch: every PDF is extracted, grouped and parsed, then all raw parts
    are classified together so label numbering spans the whole batch.

    A failing document contributes its errors and no parts; the others still
    contribute theirs, and the batch result has ok=False.
    """

    errors: list[ExtractTokensError] = []
    documents: list[DocumentSummary] = []
    raw_parts: list[RawPart] = []
    meta: dict[str, Any] = {
        "row_y_tolerance": config.grouping.row_y_tolerance,
        "pages": {},
    }

    for idx, relpath in enumerate(pdf_relpaths):
        extracted = run_extract_tokens_relpath(config=config.extract, pdf_relpath=relpath)
        if not extracted.ok:
            for e in extracted.errors:
                errors.append(
                    ExtractTokensError(
                        code=e.code,
                        message=e.message,
                        detail={**(e.detail or {}), "source_pdf_relpath": relpath},
                    )
                )
            documents.append(
                DocumentSummary(source_pdf_relpath=relpath, doc_id=extracted.doc_id, ok=False, pages=0, parts=0)
            )
            continue

        doc_parts, page_meta = extract_raw_parts(extracted.pages, config=config.grouping, id_factory=id_factory)
        raw_parts.extend(doc_parts)
        # One entry per input, even when a relpath repeats.
        meta["pages"][f"{idx:03d}:{relpath}"] = page_meta
        documents.append(
            DocumentSummary(
                source_pdf_relpath=relpath,
                doc_id=extracted.doc_id,
                ok=True,
                pages=len(extracted.pages),
                parts=len(doc_parts),
            )
        )

    return _finish(errors=errors, meta=meta, documents=documents, raw_parts=raw_parts)
