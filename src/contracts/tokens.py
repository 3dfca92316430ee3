from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True, slots=True)
class PositionedToken:
    """
    One contiguous run of extracted text with its geometry.

    Coordinates are PDF user space as produced by the text layer:
    - (x, y) is the bottom-left corner of the run
    - y increases upward
    """

    text: str
    x: float
    y: float
    width: float
    height: float

    @staticmethod
    def from_dict(d: dict[str, Any]) -> "PositionedToken":
        return PositionedToken(
            text=str(d.get("text", "")),
            x=float(d["x"]),
            y=float(d["y"]),
            width=float(d.get("width", 0.0)),
            height=float(d.get("height", 0.0)),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "text": self.text,
            "x": self.x,
            "y": self.y,
            "width": self.width,
            "height": self.height,
        }


@dataclass(frozen=True, slots=True)
class TokenPage:
    page_num: int  # 1-indexed
    tokens: list[PositionedToken]

    @staticmethod
    def from_dict(d: dict[str, Any]) -> "TokenPage":
        tokens_raw = d.get("tokens") or []
        if not isinstance(tokens_raw, list):
            raise TypeError("TokenPage.tokens must be a list")
        return TokenPage(page_num=int(d["page_num"]), tokens=[PositionedToken.from_dict(t) for t in tokens_raw])

    def to_dict(self) -> dict[str, Any]:
        return {"page_num": self.page_num, "tokens": [t.to_dict() for t in self.tokens]}


@dataclass(frozen=True, slots=True)
class Row:
    # p{page_num:03d}_r{row_index:06d}
    row_id: str
    page_num: int
    tokens: list[PositionedToken]  # left-to-right

    @property
    def text(self) -> str:
        return " ".join(t.text.strip() for t in self.tokens if t.text.strip() != "")

    def to_dict(self) -> dict[str, Any]:
        return {
            "row_id": self.row_id,
            "page_num": self.page_num,
            "tokens": [t.to_dict() for t in self.tokens],
        }

    @staticmethod
    def from_dict(d: dict[str, Any]) -> "Row":
        return Row(
            row_id=str(d["row_id"]),
            page_num=int(d["page_num"]),
            tokens=[PositionedToken.from_dict(t) for t in (d.get("tokens") or [])],
        )
