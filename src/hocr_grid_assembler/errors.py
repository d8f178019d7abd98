# src/hocr_grid_assembler/errors.py
from __future__ import annotations
from typing import Optional


class GridExtractionError(Exception):
    """Error base de la extracción de la rejilla 4x4."""


class InvalidInput(GridExtractionError, ValueError):
    """Una palabra trae una coordenada ausente, no numérica o no finita."""


class ImplausibleLayout(GridExtractionError):
    """La imagen no parece contener una rejilla 4x4 (aviso, no error del núcleo).

    `reason` es uno de:
      - "no_text": el OCR no devolvió ninguna palabra
      - "too_few_words": menos palabras que `GridConfig.min_words`
      - "aspect_ratio": la dispersión de los centros no es aproximadamente cuadrada
    """

    def __init__(self, reason: str, message: str,
                 word_count: int = 0,
                 aspect_ratio: Optional[float] = None) -> None:
        super().__init__(message)
        self.reason = reason
        self.word_count = word_count
        self.aspect_ratio = aspect_ratio
