from __future__ import annotations

import argparse
import logging
import sys
from typing import List, NoReturn, Optional

from PySide6.QtWidgets import QApplication

from rubik_anim.app.main_window import MainWindow
from rubik_anim.core.config import RubikConfig


def build_config(argv: Optional[List[str]] = None) -> RubikConfig:
    """Construye la configuración del cubo a partir de argumentos de línea de comando.

    Args:
        argv: Argumentos (sin el nombre del programa); por defecto `sys.argv[1:]`.

    Returns:
        `RubikConfig` con los valores indicados.
    """
    parser = argparse.ArgumentParser(description="Cubo Rubik 3D animado")
    parser.add_argument(
        "--only",
        nargs="*",
        default=[],
        metavar="X,Y,Z",
        help='Cubelets con color (ej: --only "1,1,1" "0,1,2"); el resto queda en blanco',
    )
    parser.add_argument("--no-emphasize", action="store_true", help="No atenuar las capas quietas")
    parser.add_argument("--updates", type=int, default=30, help="Ticks por cada giro de 90°")
    parser.add_argument("--pause", type=int, default=40, help="Pausa entre movimientos (ms)")
    parser.add_argument("--debug", action="store_true", help="Logging a nivel DEBUG")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    return RubikConfig(
        specific_cubes=list(args.only),
        emphasize=not args.no_emphasize,
        updates_per_rotation=args.updates,
        pause_duration=args.pause,
    )


def main() -> NoReturn:
    """Punto de entrada de la aplicación.

    Crea la instancia de `QApplication`, construye la ventana principal
    (`MainWindow`) y ejecuta el loop de eventos de Qt.

    Returns:
        No retorna (finaliza el proceso con `sys.exit`).
    """
    config = build_config()
    app = QApplication(sys.argv[:1])
    w = MainWindow(config)
    w.resize(900, 600)
    w.show()
    sys.exit(app.exec())


if __name__ == "__main__":
    main()
