from __future__ import annotations

import hashlib
import json
import re
from pathlib import PurePosixPath
from typing import Any

from contracts.tokens import TokenPage

from .contracts import ExtractEngineName, ExtractTokensConfig, ExtractTokensError, ExtractTokensResult
from .data_access import DataAccessError, resolve_under_data_root, sha256_file
from .engines import Pypdfium2Engine, TokenExtractionEngine

_UNSAFE_STEM_CHARS = re.compile(r"[^A-Za-z0-9._-]+")
_PAGE_ITEM_RE = re.compile(r"^([0-9]+)(?:-([0-9]+))?$")


def _compute_doc_id(*, source_pdf_relpath: str, backend_id: str, page_selection: str | None) -> str:
    """`<readable stem>_<12 hex>`; the hash covers relpath, backend and whitespace-free selection."""
    relpath = source_pdf_relpath.replace("\\", "/")
    selection = "".join((page_selection or "").split()) or "all"
    payload = json.dumps(
        {"source_pdf_relpath": relpath, "backend": backend_id, "page_selection": selection},
        sort_keys=True,
        separators=(",", ":"),
        ensure_ascii=False,
    )
    digest = hashlib.sha256(payload.encode("utf-8")).hexdigest()

    name = PurePosixPath(relpath).name
    if name.lower().endswith(".pdf"):
        name = name[:-4]
    stem = _UNSAFE_STEM_CHARS.sub("_", name).strip("_")
    stem = re.sub(r"_{2,}", "_", stem)
    return f"{stem or 'pdf'}_{digest[:12]}"


def parse_page_selection(selection: str | None, *, page_count: int) -> list[int]:
    """
    "1,3-5" -> [1, 3, 4, 5]. Blank or None selects every page.

    Raises ValueError for malformed items, page 0, reversed ranges and pages
    past `page_count`.
    """

    if selection is None or not selection.strip():
        return list(range(1, page_count + 1))

    chosen: set[int] = set()
    for item in "".join(selection.split()).split(","):
        if not item:
            continue
        m = _PAGE_ITEM_RE.match(item)
        if m is None:
            raise ValueError(f"invalid page item: {item!r}")
        first = int(m.group(1))
        last = int(m.group(2)) if m.group(2) else first
        if first < 1 or last < first:
            raise ValueError(f"invalid page item: {item!r}")
        if last > page_count:
            raise ValueError(f"page {last} out of bounds (1..{page_count})")
        chosen.update(range(first, last + 1))
    return sorted(chosen)


def _get_engine(engine: ExtractEngineName) -> TokenExtractionEngine:
    if engine == ExtractEngineName.PYPDFIUM2:
        return Pypdfium2Engine()
    raise ValueError(f"Unsupported extraction engine: {engine}")


def run_extract_tokens_relpath(*, config: ExtractTokensConfig, pdf_relpath: str) -> ExtractTokensResult:
    """
    Preferred Stage 0 programmatic entrypoint.

    Input: PDF relpath under `config.data_root`
    Output: per-page positioned tokens. Backend failures come back as coded
    errors with ok=False; nothing is raised.
    """

    meta: dict[str, Any] = {"page_selection": config.page_selection}

    engine = _get_engine(config.engine)
    doc_id = _compute_doc_id(
        source_pdf_relpath=pdf_relpath,
        backend_id=engine.backend_id(),
        page_selection=config.page_selection,
    )

    def failed(code: str, message: str, detail: dict[str, Any]) -> ExtractTokensResult:
        return ExtractTokensResult(
            doc_id=doc_id,
            ok=False,
            engine=config.engine,
            source_pdf_relpath=pdf_relpath,
            pages=[],
            errors=[ExtractTokensError(code=code, message=message, detail=detail)],
            meta=meta,
        )

    if not pdf_relpath.lower().endswith(".pdf"):
        return failed(
            "EXTRACT_INPUT_NOT_PDF",
            "Stage 0 only accepts PDFs (by .pdf extension)",
            {"pdf_relpath": pdf_relpath},
        )

    try:
        pdf_file = resolve_under_data_root(data_root=config.data_root, relpath=pdf_relpath)
    except DataAccessError as e:
        return failed(
            "EXTRACT_DATA_ACCESS_ERROR",
            str(e),
            {"data_root": str(config.data_root), "relpath": pdf_relpath},
        )

    if not pdf_file.exists():
        return failed("EXTRACT_INPUT_NOT_FOUND", "Input PDF not found", {"source_pdf_relpath": pdf_relpath})

    try:
        page_count = engine.get_page_count(pdf_file=pdf_file)
    except Exception as e:
        return failed("EXTRACT_BACKEND_PAGECOUNT_FAILED", "Failed to read PDF page count", {"error": repr(e)})

    try:
        page_nums = parse_page_selection(config.page_selection, page_count=page_count)
    except ValueError as e:
        return failed(
            "EXTRACT_BAD_PAGE_SELECTION",
            "Invalid page_selection",
            {"page_selection": config.page_selection, "error": str(e)},
        )

    try:
        pages: list[TokenPage] = engine.extract_page_tokens(pdf_file=pdf_file, pages=page_nums)
    except Exception as e:
        return failed("EXTRACT_BACKEND_TEXT_FAILED", "PDF text extraction failed", {"error": repr(e)})

    meta["backend"] = engine.backend_id()
    meta["backend_version"] = engine.backend_version()
    meta["page_count"] = page_count
    meta["pages_selected"] = page_nums
    meta["counts"] = {f"page_{p.page_num:03d}": {"tokens": len(p.tokens)} for p in pages}

    if config.compute_source_sha256:
        try:
            meta["source_sha256"] = sha256_file(pdf_file)
        except OSError as e:
            meta.setdefault("audit_warnings", []).append({"code": "EXTRACT_SOURCE_HASH_FAILED", "error": repr(e)})

    return ExtractTokensResult(
        doc_id=doc_id,
        ok=True,
        engine=config.engine,
        source_pdf_relpath=pdf_relpath,
        pages=sorted(pages, key=lambda p: p.page_num),
        errors=[],
        meta=meta,
    )
