# src/hocr_grid_assembler/grid_builder.py
from __future__ import annotations
import logging
from collections import defaultdict
from numbers import Real
from typing import Dict, List, Sequence, Tuple
import numpy as np

from .clustering import cluster4, nearest
from .config import DEFAULT_CONFIG, GridConfig
from .errors import InvalidInput
from .spatial import RecognizedWord, WordCenter

log = logging.getLogger(__name__)

CellKey = Tuple[int, int]

def _check_coords(word: RecognizedWord) -> None:
    box = word.bbox
    raw = [box.x0, box.y0, box.x1, box.y1]
    if not all(isinstance(v, Real) and not isinstance(v, bool) for v in raw):
        raise InvalidInput(f"Coordenadas no numéricas en la palabra {word.text!r}: {box}")
    if not np.isfinite(np.asarray(raw, dtype=float)).all():
        raise InvalidInput(f"Coordenadas no finitas en la palabra {word.text!r}: {box}")

def word_centers(words: Sequence[RecognizedWord]) -> List[WordCenter]:
    """Calcula el centro (x, y) de cada palabra, rechazando coordenadas NaN/inf."""
    centers = []
    for word in words:
        _check_coords(word)
        centers.append(WordCenter(word=word, x=float(word.bbox.xc), y=float(word.bbox.yc)))
    return centers

def assign_cells(centers: List[WordCenter],
                 config: GridConfig = DEFAULT_CONFIG
                 ) -> Dict[CellKey, List[WordCenter]]:
    """Agrupa las palabras por celda (fila, columna).

    Filas y columnas se agrupan de forma independiente: se asume una rejilla
    alineada a los ejes.
    """
    size = config.grid_size
    row_centers = cluster4([c.y for c in centers], config)
    col_centers = cluster4([c.x for c in centers], config)
    log.debug("Centros de fila: %s", row_centers)
    log.debug("Centros de columna: %s", col_centers)

    cells: Dict[CellKey, List[WordCenter]] = defaultdict(list)
    for c in centers:
        row = nearest(c.y, row_centers)
        col = nearest(c.x, col_centers)
        if not (0 <= row < size and 0 <= col < size):
            log.debug("Palabra %r fuera de la rejilla (%d, %d); se descarta.", c.word.text, row, col)
            continue
        cells[(row, col)].append(c)
    return cells

def join_cell(words: List[WordCenter]) -> str:
    """Une las palabras de una celda de izquierda a derecha con un solo espacio."""
    ordered = sorted(words, key=lambda c: c.x)
    texts = [c.word.text.strip() for c in ordered]
    return " ".join(t for t in texts if t)

def assemble(words: Sequence[RecognizedWord],
             config: GridConfig = DEFAULT_CONFIG) -> List[str]:
    """
    Asigna las palabras reconocidas a las 16 celdas de la rejilla 4x4.

    Devuelve 16 cadenas en orden fila-mayor (índice = fila*4 + columna);
    una celda sin palabras queda como "". No realiza E/S ni guarda estado
    entre llamadas.
    """
    config.validate()
    size = config.grid_size
    if not words:
        return [""] * (size * size)

    centers = word_centers(words)
    cells = assign_cells(centers, config)

    out = []
    for row in range(size):
        for col in range(size):
            out.append(join_cell(cells.get((row, col), [])))
    log.info("Rejilla ensamblada: %d palabras en %d celdas ocupadas.",
             len(centers), sum(1 for c in out if c))
    return out

def cells_to_rows(cells: Sequence[str], size: int = DEFAULT_CONFIG.grid_size) -> List[List[str]]:
    """Convierte las 16 celdas fila-mayor en 4 filas de 4 columnas."""
    if len(cells) != size * size:
        raise ValueError(f"Se esperaban {size * size} celdas, llegaron {len(cells)}.")
    return [list(cells[r * size:(r + 1) * size]) for r in range(size)]
