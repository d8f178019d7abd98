# src/hocr_grid_assembler/spatial.py
from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Mapping, Optional, Tuple
import re

from .errors import InvalidInput

BBOX_RE = re.compile(r"bbox (-?\d+)\s+(-?\d+)\s+(-?\d+)\s+(-?\d+)")
BBOX_KEYS = ("x0", "y0", "x1", "y1")

def parse_bbox(title_attr: str) -> Optional[Tuple[int, int, int, int]]:
    if not title_attr:
        return None
    m = BBOX_RE.search(title_attr)
    if not m:
        return None
    x0, y0, x1, y1 = map(int, m.groups())
    return x0, y0, x1, y1

def within_bbox(bbox: Tuple[int,int,int,int], x0: float, y0: float, x1: float, y1: float) -> bool:
    X0, Y0, X1, Y1 = bbox
    return (x0 >= X0 and y0 >= Y0 and x1 <= X1 and y1 <= Y1)

@dataclass(frozen=True)
class BBox:
    """Bounding box alineado a los ejes, en píxeles de la imagen: x0, y0, x1, y1."""
    x0: float
    y0: float
    x1: float
    y1: float

    @property
    def xc(self) -> float:
        return (self.x0 + self.x1) / 2.0

    @property
    def yc(self) -> float:
        return (self.y0 + self.y1) / 2.0

    @property
    def width(self) -> float:
        return self.x1 - self.x0

    @property
    def height(self) -> float:
        return self.y1 - self.y0

@dataclass(frozen=True)
class RecognizedWord:
    """Palabra reconocida por el OCR: texto y posición espacial (bbox)."""
    text: str
    bbox: BBox

@dataclass(frozen=True)
class WordCenter:
    """Centro de una palabra, calculado una sola vez por pasada."""
    word: RecognizedWord
    x: float
    y: float

def word_from_mapping(record: Mapping[str, Any]) -> RecognizedWord:
    """Construye una palabra desde un registro {text, bbox: {x0, y0, x1, y1}}."""
    try:
        box = record["bbox"]
        coords = [box[k] for k in BBOX_KEYS]
    except (KeyError, TypeError) as exc:
        raise InvalidInput(f"Registro de palabra sin bbox completo: {record!r}") from exc
    return RecognizedWord(text=str(record.get("text") or ""), bbox=BBox(*coords))
