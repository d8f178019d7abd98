# src/hocr_grid_assembler/config.py
from __future__ import annotations
from dataclasses import dataclass
from enum import Enum

GRID_SIZE = 4


class CenterUpdate(str, Enum):
    MEDIAN = "median"
    MEAN = "mean"


def as_center_update(value) -> CenterUpdate:
    """Acepta el enum o su nombre en texto ("median" | "mean")."""
    try:
        return CenterUpdate(value)
    except ValueError as exc:
        raise ValueError(f"center_update desconocido: {value!r}") from exc


@dataclass(frozen=True)
class GridConfig:
    """
    Parámetros de la asignación palabra→celda.

    La rejilla es fija de 4x4; los umbrales de aspecto sólo los usa la
    validación previa, nunca `assemble`.
    """

    grid_size: int = GRID_SIZE
    max_iterations: int = 20
    epsilon: float = 0.1  # desplazamiento mínimo de un centro para seguir iterando
    center_update: CenterUpdate = CenterUpdate.MEDIAN

    min_words: int = 4
    min_aspect_ratio: float = 0.5
    max_aspect_ratio: float = 2.0

    def validate(self) -> None:
        if self.grid_size != GRID_SIZE:
            raise ValueError(f"grid_size debe ser {GRID_SIZE}")
        if self.max_iterations < 1:
            raise ValueError("max_iterations debe ser >= 1")
        if self.epsilon < 0:
            raise ValueError("epsilon debe ser >= 0")
        as_center_update(self.center_update)
        if self.min_words < 0:
            raise ValueError("min_words debe ser >= 0")
        if not (0 < self.min_aspect_ratio <= self.max_aspect_ratio):
            raise ValueError("se requiere 0 < min_aspect_ratio <= max_aspect_ratio")


DEFAULT_CONFIG = GridConfig()
