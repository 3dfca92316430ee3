from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path

from contracts.tokens import TokenPage


class TokenExtractionEngine(ABC):
    """
    Stage 0 text-layer engine abstraction.

    Engines must:
    - Read the PDF's embedded text layer (no OCR, no rendering)
    - Report one token per contiguous text run, in PDF user space (y up)
    - Be deterministic for a given input+params
    - Perform NO field interpretation or filtering
    """

    @abstractmethod
    def backend_id(self) -> str:
        raise NotImplementedError

    def backend_version(self) -> str | None:
        return None

    @abstractmethod
    def get_page_count(self, *, pdf_file: Path) -> int:
        raise NotImplementedError

    @abstractmethod
    def extract_page_tokens(
        self,
        *,
        pdf_file: Path,
        pages: list[int],  # 1-indexed, explicit ordering
    ) -> list[TokenPage]:
        """Return one TokenPage per requested page, in the same order as `pages`."""

        raise NotImplementedError
