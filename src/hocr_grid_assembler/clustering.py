# src/hocr_grid_assembler/clustering.py
from __future__ import annotations
import logging
from typing import List, Sequence
import numpy as np

from .config import DEFAULT_CONFIG, CenterUpdate, GridConfig, as_center_update

log = logging.getLogger(__name__)

def init_fractions(k: int) -> List[float]:
    """Offsets relativos al rango para k centros equiespaciados (0.125, 0.375, ... con k=4)."""
    return [(2 * i + 1) / (2.0 * k) for i in range(k)]

def nearest(value: float, centers: Sequence[float]) -> int:
    """Índice del centro más cercano; ante empate gana el de menor índice."""
    if len(centers) == 0:
        raise ValueError("nearest() requiere al menos un centro.")
    dists = np.abs(np.asarray(centers, dtype=float) - float(value))
    # argmin devuelve la primera ocurrencia del mínimo
    return int(np.argmin(dists))

def update_center(bucket: np.ndarray, strategy: CenterUpdate) -> float:
    if as_center_update(strategy) is CenterUpdate.MEAN:
        return float(np.mean(bucket))
    # mediana "superior": siempre es uno de los valores del bucket
    ordered = np.sort(bucket)
    return float(ordered[len(ordered) // 2])

def cluster4(values: Sequence[float], config: GridConfig = DEFAULT_CONFIG) -> List[float]:
    """Encuentra 4 centros representativos de un eje (k-means 1-D con k=4).

    Casos degenerados:
      - sin valores → [0, 0, 0, 0]
      - menos de 4 valores → ordenados y rellenados repitiendo el máximo
      - todos iguales → ese valor repetido 4 veces

    En el caso general los centros arrancan equiespaciados dentro de [min, max]
    y se recalculan con la estrategia `config.center_update` (mediana por
    defecto, robusta ante una palabra perdida) hasta que ninguno se mueva más
    de `config.epsilon` o se agoten `config.max_iterations` iteraciones.
    El resultado siempre tiene longitud 4 y está ordenado ascendentemente.
    """
    config.validate()
    k = config.grid_size
    ordered = sorted(float(v) for v in values)
    if not ordered:
        return [0.0] * k
    if len(ordered) < k:
        return ordered + [ordered[-1]] * (k - len(ordered))

    lo, hi = ordered[0], ordered[-1]
    if hi == lo:
        return [lo] * k

    strategy = as_center_update(config.center_update)
    arr = np.asarray(ordered, dtype=float)
    centers = [lo + (hi - lo) * f for f in init_fractions(k)]

    for it in range(config.max_iterations):
        # argmin por fila: empates al centro de menor índice, igual que nearest()
        labels = np.argmin(np.abs(arr[:, None] - np.asarray(centers)[None, :]), axis=1)
        changed = False
        for i in range(k):
            bucket = arr[labels == i]
            if bucket.size == 0:
                continue
            new_center = update_center(bucket, strategy)
            if abs(new_center - centers[i]) > config.epsilon:
                changed = True
            centers[i] = new_center
        if not changed:
            log.debug("Centros convergidos en %d iteraciones: %s", it + 1, centers)
            break
    else:
        log.debug("Se alcanzó el límite de %d iteraciones sin converger.", config.max_iterations)

    return sorted(centers)
