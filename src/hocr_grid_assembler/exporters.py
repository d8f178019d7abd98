# src/hocr_grid_assembler/exporters.py
from __future__ import annotations
from pathlib import Path
from typing import Sequence
import csv
import json

from .grid_builder import cells_to_rows

def _ensure_parent_dir(path: str) -> None:
    Path(path).parent.mkdir(parents=True, exist_ok=True)

def cells_to_csv(cells: Sequence[str], csv_path: str) -> None:
    """Escribe las 16 celdas como 4 filas x 4 columnas, sin cabecera."""
    rows = cells_to_rows(cells)
    _ensure_parent_dir(csv_path)
    with open(csv_path, "w", encoding="utf-8-sig", newline="") as f:
        w = csv.writer(f)
        w.writerows(rows)

def cells_to_json(cells: Sequence[str], json_path: str) -> None:
    _ensure_parent_dir(json_path)
    with open(json_path, "w", encoding="utf-8") as f:
        json.dump({"cells": list(cells)}, f, ensure_ascii=False, indent=2)
