from __future__ import annotations

import logging
from typing import List, Optional, Tuple

from .config import DEFAULT_CONFIG, GridConfig
from .errors import ImplausibleLayout
from .exporters import cells_to_csv, cells_to_json
from .grid_builder import assemble
from .ocr_utils import generate_hocr_from_image, recognize_words
from .parser import parse_hocr_words
from .validation import check_grid_plausibility

log = logging.getLogger(__name__)


def extract_grid(
    *,
    hocr_path: Optional[str] = None,
    image_path: Optional[str] = None,
    table_bbox: Optional[Tuple[int, int, int, int]] = None,
    config: GridConfig = DEFAULT_CONFIG,
    check_layout: bool = True,
    lang: str = "eng",
    min_confidence: float = 0.0,
    hocr_out: Optional[str] = None,
) -> List[str]:
    """
    Orquesta OCR (o HOCR existente) → validación opcional → rejilla 4x4.
    Devuelve las 16 celdas en orden fila-mayor.

    Con `image_path` y `hocr_out` el OCR se guarda primero como HOCR y las
    palabras se leen de ese archivo (sin filtro de confianza).
    """
    if bool(hocr_path) == bool(image_path):
        raise ValueError("Se requiere exactamente una fuente: hocr_path o image_path.")
    config.validate()

    if hocr_out and not image_path:
        raise ValueError("hocr_out sólo aplica junto con image_path.")
    if image_path and hocr_out:
        hocr_path = generate_hocr_from_image(image_path, hocr_out, lang=lang)

    if hocr_path:
        log.info("Parseando HOCR desde: %s", hocr_path)
        words = parse_hocr_words(hocr_path, table_bbox=table_bbox)
    else:
        words = recognize_words(
            image_path, lang=lang, min_confidence=min_confidence, table_bbox=table_bbox,
        )

    if not words:
        if check_layout:
            raise ImplausibleLayout("no_text", "No se detectó texto en la imagen.")
        log.warning("No se encontraron palabras. Se devuelve una rejilla vacía.")
        return assemble([], config)

    if check_layout:
        check_grid_plausibility(words, config)
    else:
        log.debug("Validación de la rejilla desactivada.")

    return assemble(words, config)


def grid_to_files(
    *,
    csv_path: Optional[str] = None,
    json_path: Optional[str] = None,
    **kwargs,
) -> List[str]:
    """Ejecuta `extract_grid` y escribe las exportaciones pedidas."""
    cells = extract_grid(**kwargs)
    if csv_path:
        cells_to_csv(cells, csv_path)
        log.info("CSV escrito en: %s", csv_path)
    if json_path:
        cells_to_json(cells, json_path)
        log.info("JSON escrito en: %s", json_path)
    return cells
