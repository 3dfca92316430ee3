from __future__ import annotations

from pathlib import Path
from typing import Any

from contracts.tokens import PositionedToken, TokenPage

from .base import TokenExtractionEngine


def tokens_from_textpage(textpage: Any) -> list[PositionedToken]:
    """
    One token per text-segment rectangle of a `pypdfium2.PdfTextPage`.

    pdfium reports rects as (left, bottom, right, top) in PDF points with the
    origin at the bottom-left, which is the coordinate convention rows are
    grouped in. Line breaks inside a segment are folded into single spaces.
    """

    tokens: list[PositionedToken] = []
    for i in range(textpage.count_rects()):
        left, bottom, right, top = textpage.get_rect(i)
        text = textpage.get_text_bounded(left=left, bottom=bottom, right=right, top=top)
        tokens.append(
            PositionedToken(
                text=" ".join(text.split()),
                x=float(left),
                y=float(bottom),
                width=float(right - left),
                height=float(top - bottom),
            )
        )
    return tokens


class Pypdfium2Engine(TokenExtractionEngine):
    def backend_id(self) -> str:
        return "pypdfium2"

    def backend_version(self) -> str | None:
        try:
            import pypdfium2 as pdfium  # type: ignore

            return getattr(pdfium, "__version__", None)
        except ImportError:
            return None

    def _require_pdfium(self):
        try:
            import pypdfium2 as pdfium  # type: ignore

            return pdfium
        except ImportError as e:
            raise RuntimeError(
                "Missing dependency: pypdfium2 is required for Stage 0 token extraction."
            ) from e

    def get_page_count(self, *, pdf_file: Path) -> int:
        pdfium = self._require_pdfium()
        doc = pdfium.PdfDocument(str(pdf_file))
        try:
            return len(doc)
        finally:
            doc.close()

    def extract_page_tokens(self, *, pdf_file: Path, pages: list[int]) -> list[TokenPage]:
        pdfium = self._require_pdfium()
        doc = pdfium.PdfDocument(str(pdf_file))
        try:
            page_count = len(doc)
            out: list[TokenPage] = []
            for page_num in pages:
                if page_num < 1 or page_num > page_count:
                    raise ValueError(f"Page out of range: {page_num} (1..{page_count})")

                page = doc[page_num - 1]
                textpage = page.get_textpage()
                try:
                    out.append(TokenPage(page_num=page_num, tokens=tokens_from_textpage(textpage)))
                finally:
                    textpage.close()
                    page.close()
            return out
        finally:
            doc.close()
