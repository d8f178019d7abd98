from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, List, Mapping, Optional, Tuple

from .spatial import BBox, RecognizedWord, within_bbox

log = logging.getLogger(__name__)

WORD_LEVEL = 5


def _require_ocr_stack():
    try:
        from PIL import Image
    except ImportError as exc:
        raise RuntimeError("Pillow es requerido para ejecutar el OCR.") from exc

    try:
        import pytesseract
    except ImportError as exc:
        raise RuntimeError("pytesseract es requerido para ejecutar el OCR.") from exc
    return Image, pytesseract


def _tesseract_config(psm: int, oem: int, extra: str = "") -> str:
    return f"--oem {oem} --psm {psm} {extra}".strip()


def generate_hocr_from_image(
    image_path: str,
    output_path: Optional[str] = None,
    *,
    lang: str = "eng",
    psm: int = 11,
    oem: int = 3,
) -> str:
    """
    Genera un archivo HOCR a partir de una imagen usando Tesseract.

    Devuelve la ruta del archivo HOCR generado. Si `output_path` es None,
    crea un archivo junto a la imagen con la extensión `.hocr`.
    """
    Image, pytesseract = _require_ocr_stack()

    img_path = Path(image_path)
    hocr_path = Path(output_path) if output_path else img_path.with_suffix(".hocr")

    log.debug("Generando HOCR para %s → %s", img_path, hocr_path)

    image = Image.open(str(img_path)).convert("RGB")
    hocr_bytes = pytesseract.image_to_pdf_or_hocr(
        image, extension="hocr", lang=lang,
        config=_tesseract_config(psm, oem, "-c tessedit_create_hocr=1"),
    )
    hocr_path.parent.mkdir(parents=True, exist_ok=True)
    hocr_path.write_bytes(hocr_bytes)
    log.info("HOCR generado: %s", hocr_path)
    return str(hocr_path)


def words_from_tesseract_data(
    data: Mapping[str, List[Any]],
    *,
    min_confidence: float = 0.0,
    table_bbox: Optional[Tuple[int, int, int, int]] = None,
) -> List[RecognizedWord]:
    """
    Convierte la salida de `pytesseract.image_to_data(..., output_type=DICT)`
    en palabras reconocidas. Descarta texto vacío, niveles que no son palabra
    y confianzas por debajo de `min_confidence`.
    """
    words: List[RecognizedWord] = []
    n = len(data.get("text", []))
    levels = data.get("level") or [WORD_LEVEL] * n
    for i in range(n):
        if int(levels[i]) != WORD_LEVEL:
            continue
        text = str(data["text"][i] or "").strip()
        if not text:
            continue
        conf = float(data["conf"][i])
        if conf < min_confidence:
            continue
        left, top = int(data["left"][i]), int(data["top"][i])
        x1, y1 = left + int(data["width"][i]), top + int(data["height"][i])
        if table_bbox and not within_bbox(table_bbox, left, top, x1, y1):
            continue
        words.append(RecognizedWord(text=text, bbox=BBox(left, top, x1, y1)))
    return words


def recognize_words(
    image_path: str,
    *,
    lang: str = "eng",
    psm: int = 11,
    oem: int = 3,
    min_confidence: float = 0.0,
    table_bbox: Optional[Tuple[int, int, int, int]] = None,
) -> List[RecognizedWord]:
    """Ejecuta Tesseract sobre la imagen y devuelve las palabras con su bbox."""
    Image, pytesseract = _require_ocr_stack()

    log.info("Ejecutando OCR sobre %s (lang=%s, psm=%d)", image_path, lang, psm)
    image = Image.open(str(image_path)).convert("RGB")
    data = pytesseract.image_to_data(
        image, lang=lang, config=_tesseract_config(psm, oem),
        output_type=pytesseract.Output.DICT,
    )
    words = words_from_tesseract_data(data, min_confidence=min_confidence, table_bbox=table_bbox)
    log.info("Palabras reconocidas: %d", len(words))
    return words
