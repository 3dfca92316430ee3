from .base import TokenExtractionEngine
from .pypdfium2_engine import Pypdfium2Engine, tokens_from_textpage

__all__ = ["Pypdfium2Engine", "TokenExtractionEngine", "tokens_from_textpage"]
