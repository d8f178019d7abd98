# run.py
from __future__ import annotations
import sys
from pathlib import Path
import logging
import argparse

sys.path.append(str(Path(__file__).parent / "src"))
from importlib import import_module
grid_main = import_module("hocr_grid_assembler.main")
grid_config = import_module("hocr_grid_assembler.config")
grid_errors = import_module("hocr_grid_assembler.errors")

log = logging.getLogger(__name__)

def main() -> None:
    parser = argparse.ArgumentParser(description="Reconstruir una rejilla 4x4 de palabras a partir de una imagen o un hOCR.")
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument("--hocr_path", type=str, help="Ruta al archivo de entrada .hocr")
    source.add_argument("--image", type=str, help="Ruta a la imagen de entrada (se ejecuta Tesseract)")
    parser.add_argument("--csv", type=str, help="Ruta al archivo de salida .csv (4x4)")
    parser.add_argument("--json", type=str, help="Ruta al archivo de salida .json ({\"cells\": [...]})")
    parser.add_argument("--hocr-out", type=str,
                        help="Con --image: guarda el HOCR de Tesseract en esta ruta y lo usa como entrada")
    parser.add_argument("--bbox", type=int, nargs=4, metavar=('X0', 'Y0', 'X1', 'Y1'),
                        help="Bbox opcional de la rejilla: x0 y0 x1 y1")
    parser.add_argument("--lang", type=str, default="eng", help="Idioma OCR para Tesseract (default: eng)")
    parser.add_argument("--min-confidence", type=float, default=0.0, help="Confianza mínima de Tesseract por palabra")
    parser.add_argument("--center-update", type=str, default="median", choices=["median", "mean"],
                        help="Estrategia de actualización de centros (default: median)")
    parser.add_argument("--no-check", action="store_true",
                        help="No validar que la imagen parezca una rejilla 4x4")
    parser.add_argument("--loglevel", type=str, default="INFO", choices=["DEBUG", "INFO", "WARNING", "ERROR"],
                        help="Nivel de verbosidad del log (default: INFO)")

    args = parser.parse_args()
    if args.hocr_out and not args.image:
        parser.error("--hocr-out requiere --image")
    logging.basicConfig(level=args.loglevel, format='%(asctime)s - %(levelname)s - %(message)s')

    config = grid_config.GridConfig(center_update=grid_config.CenterUpdate(args.center_update))
    try:
        cells = grid_main.grid_to_files(
            hocr_path=args.hocr_path,
            image_path=args.image,
            csv_path=args.csv,
            json_path=args.json,
            table_bbox=tuple(args.bbox) if args.bbox else None,
            config=config,
            check_layout=not args.no_check,
            lang=args.lang,
            min_confidence=args.min_confidence,
            hocr_out=args.hocr_out,
        )
    except FileNotFoundError:
        log.error(f"Error: No se encontró el archivo de entrada: {args.hocr_path or args.image}")
        sys.exit(1)
    except (grid_errors.ImplausibleLayout, grid_errors.InvalidInput) as e:
        log.error(f"Rejilla no válida: {e}")
        sys.exit(1)
    except Exception as e:
        log.error(f"Ocurrió un error inesperado: {e}", exc_info=True)
        sys.exit(1)

    if not args.csv and not args.json:
        for r in range(4):
            print(" | ".join(cells[r * 4:(r + 1) * 4]))
    log.info("✔ Proceso completado.")

if __name__ == "__main__":
    main()
