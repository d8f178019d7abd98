from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path

from .evaluation import evaluate_cells, load_expected_cells, write_report

log = logging.getLogger(__name__)


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Compara una rejilla 4x4 predicha contra la referencia y calcula el acierto por celda."
    )
    parser.add_argument("--expected", required=True, help="Referencia: .expected.json ({\"cells\": [...]}) o CSV 4x4.")
    parser.add_argument("--predicted", required=True, help="Rejilla generada: JSON o CSV 4x4.")
    parser.add_argument("--report", help="Ruta opcional para guardar un reporte CSV.")
    parser.add_argument("--json", help="Ruta opcional para guardar métricas en JSON.")
    parser.add_argument("--loglevel", default="INFO", choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    return parser.parse_args()


def main() -> None:
    args = parse_args()
    logging.basicConfig(level=args.loglevel, format="%(asctime)s - %(levelname)s - %(message)s")

    evaluation = evaluate_cells(
        load_expected_cells(args.expected),
        load_expected_cells(args.predicted),
    )

    log.info("Accuracy: %.4f (%d/%d)", evaluation.accuracy, evaluation.matched_cells, evaluation.total_cells)
    for idx, exp, got in evaluation.mismatches:
        log.info("Celda %d -> esperado %r, obtenido %r", idx, exp, got)

    if args.report:
        write_report(evaluation, args.report)
        log.info("Reporte CSV guardado en %s", args.report)

    if args.json:
        Path(args.json).parent.mkdir(parents=True, exist_ok=True)
        with open(args.json, "w", encoding="utf-8") as fh:
            json.dump(evaluation.to_dict(), fh, indent=2)
        log.info("Reporte JSON guardado en %s", args.json)


if __name__ == "__main__":
    main()
