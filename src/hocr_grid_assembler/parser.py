# src/hocr_grid_assembler/parser.py
from __future__ import annotations
import logging
from typing import List, Optional, Tuple
from bs4 import BeautifulSoup

from .spatial import BBox, RecognizedWord, parse_bbox, within_bbox

log = logging.getLogger(__name__)

def _load_soup(text: str) -> BeautifulSoup:
    """
    Intenta XML (lxml-xml) y, si no hay nodos HOCR, fallback a HTML (lxml).
    """
    soup_xml = BeautifulSoup(text, "lxml-xml")
    if soup_xml.find(class_=lambda c: c and "ocr_page" in c):
        return soup_xml
    return BeautifulSoup(text, "lxml")

def parse_hocr_text(raw: str,
                    table_bbox: Optional[Tuple[int,int,int,int]] = None,
                    page: int = 1,
                    ) -> List[RecognizedWord]:
    """
    Extrae las palabras (`ocrx_word`) de una página HOCR con su bbox.
    Las palabras vacías o sólo con espacios se descartan aquí, antes del núcleo.
    """
    soup = _load_soup(raw)
    pages = soup.find_all(class_=lambda c: c and "ocr_page" in c)
    if not pages:
        log.warning("El HOCR no contiene nodos 'ocr_page'.")
        return []
    if len(pages) > 1:
        log.warning("El HOCR tiene %d páginas; sólo se usa la página %d.", len(pages), page)
    if not (1 <= page <= len(pages)):
        raise ValueError(f"Página {page} fuera de rango (1..{len(pages)}).")

    words: List[RecognizedWord] = []
    for w in pages[page - 1].find_all(class_=lambda c: c and "ocrx_word" in c):
        bb = parse_bbox(w.get("title", ""))
        if not bb:
            continue
        if table_bbox and not within_bbox(table_bbox, *bb):
            continue
        text = (w.get_text() or "").strip()
        if not text:
            continue
        words.append(RecognizedWord(text=text, bbox=BBox(*bb)))

    log.debug("Palabras extraídas del HOCR: %d", len(words))
    return words

def parse_hocr_words(hocr_path: str,
                     table_bbox: Optional[Tuple[int,int,int,int]] = None,
                     page: int = 1,
                     ) -> List[RecognizedWord]:
    with open(hocr_path, "r", encoding="utf-8") as f:
        raw = f.read()
    return parse_hocr_text(raw, table_bbox=table_bbox, page=page)
