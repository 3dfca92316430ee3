"""
Canonical data contracts shared by every stage.

tokens -> rows -> raw parts -> processed parts

Stage code should consume/produce these contract objects (not ad-hoc dicts).
"""

from .parts import AreaUnit, ProcessedPart, RawPart
from .tokens import PositionedToken, Row, TokenPage

__all__ = [
    "AreaUnit",
    "PositionedToken",
    "ProcessedPart",
    "RawPart",
    "Row",
    "TokenPage",
]
