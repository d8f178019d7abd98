# src/hocr_grid_assembler/validation.py
from __future__ import annotations
import logging
import math
from typing import Sequence

from .config import DEFAULT_CONFIG, GridConfig
from .errors import ImplausibleLayout
from .grid_builder import word_centers
from .spatial import RecognizedWord

log = logging.getLogger(__name__)

def layout_aspect_ratio(words: Sequence[RecognizedWord]) -> float:
    """Relación rango-X / rango-Y de los centros de las palabras.

    Devuelve `inf` si sólo hay dispersión horizontal y `nan` si no hay ninguna.
    """
    centers = word_centers(words)
    if not centers:
        return float("nan")
    xs = [c.x for c in centers]
    ys = [c.y for c in centers]
    x_range = max(xs) - min(xs)
    y_range = max(ys) - min(ys)
    if y_range == 0:
        return float("inf") if x_range > 0 else float("nan")
    return x_range / y_range

def check_grid_plausibility(words: Sequence[RecognizedWord],
                            config: GridConfig = DEFAULT_CONFIG) -> None:
    """
    Filtro previo opcional: lanza ImplausibleLayout si hay menos de
    `min_words` palabras o si la dispersión no es aproximadamente cuadrada.
    """
    n = len(words)
    if n < config.min_words:
        raise ImplausibleLayout(
            "too_few_words",
            f"Texto insuficiente: se esperaban al menos {config.min_words} palabras, hay {n}.",
            word_count=n,
        )

    ratio = layout_aspect_ratio(words)
    log.debug("Relación de aspecto de la dispersión: %.3f", ratio)
    if math.isnan(ratio) or not (config.min_aspect_ratio <= ratio <= config.max_aspect_ratio):
        raise ImplausibleLayout(
            "aspect_ratio",
            f"La imagen no parece contener una rejilla (relación de aspecto {ratio:.3f}).",
            word_count=n,
            aspect_ratio=ratio,
        )
