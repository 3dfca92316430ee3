from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any

from contracts.tokens import TokenPage


class ExtractEngineName(str, Enum):
    """
    Text-layer backends. Each must report tokens in PDF user space (y up).
    """

    PYPDFIUM2 = "pypdfium2"


@dataclass(frozen=True, slots=True)
class ExtractTokensError:
    code: str
    message: str
    detail: dict[str, Any] | None = None

    def to_dict(self) -> dict[str, Any]:
        return {"code": self.code, "message": self.message, "detail": self.detail}

    @staticmethod
    def from_dict(d: dict[str, Any]) -> "ExtractTokensError":
        return ExtractTokensError(
            code=str(d["code"]),
            message=str(d.get("message", "")),
            detail=(None if d.get("detail") is None else dict(d["detail"])),
        )


@dataclass(frozen=True, slots=True)
class ExtractTokensResult:
    # Stable for identical (source_pdf_relpath + backend + page selection).
    doc_id: str
    ok: bool
    engine: ExtractEngineName
    source_pdf_relpath: str
    pages: list[TokenPage]
    errors: list[ExtractTokensError]
    meta: dict[str, Any]

    def to_dict(self) -> dict[str, Any]:
        return {
            "doc_id": self.doc_id,
            "ok": self.ok,
            "engine": self.engine.value,
            "source_pdf_relpath": self.source_pdf_relpath,
            "pages": [p.to_dict() for p in self.pages],
            "errors": [e.to_dict() for e in self.errors],
            "meta": dict(self.meta),
        }

    @staticmethod
    def from_dict(d: dict[str, Any]) -> "ExtractTokensResult":
        pages_raw = d.get("pages") or []
        if not isinstance(pages_raw, list):
            raise TypeError("ExtractTokensResult.pages must be a list")
        return ExtractTokensResult(
            doc_id=str(d.get("doc_id", "")),
            ok=bool(d.get("ok", False)),
            engine=ExtractEngineName(d.get("engine", ExtractEngineName.PYPDFIUM2.value)),
            source_pdf_relpath=str(d.get("source_pdf_relpath", "")),
            pages=[TokenPage.from_dict(p) for p in pages_raw],
            errors=[ExtractTokensError.from_dict(e) for e in (d.get("errors") or [])],
            meta=dict(d.get("meta") or {}),
        )


@dataclass(frozen=True, slots=True)
class ExtractTokensConfig:
    """
    Stage 0 configuration.

    - `data_root` must be passed explicitly
    - no environment variable reads in this module
    """

    data_root: Path
    engine: ExtractEngineName = ExtractEngineName.PYPDFIUM2
    page_selection: str | None = None  # e.g. "1,3-5"; None => all pages
    compute_source_sha256: bool = False

    def __post_init__(self) -> None:
        if not isinstance(self.data_root, Path):
            raise TypeError("data_root must be a pathlib.Path")
