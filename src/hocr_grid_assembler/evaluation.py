from __future__ import annotations

import csv
import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Sequence, Tuple

import numpy as np
import pandas as pd

from .config import GRID_SIZE

log = logging.getLogger(__name__)

N_CELLS = GRID_SIZE * GRID_SIZE


@dataclass
class GridEvaluation:
    accuracy: float
    total_cells: int
    matched_cells: int
    mismatches: List[Tuple[int, str, str]] = field(default_factory=list)

    def to_dict(self) -> Dict[str, object]:
        return {
            "accuracy": self.accuracy,
            "total_cells": self.total_cells,
            "matched_cells": self.matched_cells,
            "mismatches": [
                {"index": idx, "expected": exp, "predicted": got}
                for idx, exp, got in self.mismatches
            ],
        }


def _read_csv(path: str) -> pd.DataFrame:
    df = pd.read_csv(path, header=None, dtype=str, keep_default_na=False, encoding="utf-8-sig")
    # normalizar espacios
    df = df.map(lambda x: (x or "").strip())
    return df


def _normalize(cells: Sequence[str], source: str) -> List[str]:
    cleaned = [(c or "").strip() for c in cells]
    if len(cleaned) != N_CELLS:
        log.warning("La rejilla %s tiene %d celdas (se esperaban %d); se rellena o recorta.",
                    source, len(cleaned), N_CELLS)
    cleaned = cleaned[:N_CELLS]
    return cleaned + [""] * (N_CELLS - len(cleaned))


def load_expected_cells(path: str) -> List[str]:
    """
    Carga las celdas de referencia desde `{"cells": [...]}` (JSON) o desde
    un CSV de 4x4 sin cabecera. Siempre devuelve 16 cadenas.
    """
    if Path(path).suffix.lower() == ".json":
        with open(path, "r", encoding="utf-8") as fh:
            payload = json.load(fh)
        if not isinstance(payload, dict) or not isinstance(payload.get("cells"), list):
            raise ValueError(f"JSON sin lista 'cells': {path}")
        return _normalize([str(c) for c in payload["cells"]], path)

    df = _read_csv(path)
    return _normalize(df.to_numpy().ravel().tolist(), path)


def evaluate_cells(expected: Sequence[str], predicted: Sequence[str]) -> GridEvaluation:
    ref = np.array(_normalize(expected, "esperada"), dtype=object)
    pred = np.array(_normalize(predicted, "predicha"), dtype=object)

    hits = ref == pred
    matches = int(hits.sum())
    mismatches = [(int(i), str(ref[i]), str(pred[i])) for i in np.flatnonzero(~hits)]
    return GridEvaluation(
        accuracy=matches / N_CELLS,
        total_cells=N_CELLS,
        matched_cells=matches,
        mismatches=mismatches,
    )


def write_report(evaluation: GridEvaluation, output_path: str) -> None:
    Path(output_path).parent.mkdir(parents=True, exist_ok=True)
    with open(output_path, "w", newline="", encoding="utf-8") as fh:
        writer = csv.writer(fh)
        writer.writerow(["Metric", "Index", "Expected", "Predicted"])
        writer.writerow(["accuracy", "-", f"{evaluation.accuracy:.4f}", f"{evaluation.matched_cells}/{evaluation.total_cells}"])
        for idx, exp, got in evaluation.mismatches:
            writer.writerow(["mismatch", idx, exp, got])
