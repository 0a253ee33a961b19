# ============================================================================
# PUNTO DE ENTRADA PRINCIPAL
# ============================================================================
"""
Punto de entrada de la calculadora.

Ejecución:
    python -m calculadora_tactil                 # Ventana con teclado
    python -m calculadora_tactil --no-voice      # Sin feedback por voz
    python -m calculadora_tactil --keys "5 + 3 × 2 ="
                                                 # Sin ventana: imprime el estado final

Manejo de errores:
    - KeyboardInterrupt (Ctrl+C): Cierre graceful por usuario
    - Exception general: Captura errores inesperados y muestra traceback
"""

import argparse
import sys
import traceback

from .config.settings import CalculatorConfig
from .core.engine import UnknownKeyError, replay


def build_parser():
    parser = argparse.ArgumentParser(
        prog="calculadora_tactil",
        description="Calculadora estilo iOS con OpenCV",
    )
    parser.add_argument("--no-voice", action="store_true", help="Desactivar feedback por voz")
    parser.add_argument("--width", type=int, help="Ancho de la ventana en píxeles")
    parser.add_argument("--height", type=int, help="Alto de la ventana en píxeles")
    parser.add_argument("--keys", help="Secuencia de teclas separadas por espacios; no abre ventana")
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)
    config = CalculatorConfig.from_args(args)

    if args.keys is not None:
        try:
            snapshot = replay(args.keys.split(), config)
        except UnknownKeyError as e:
            print(f"Error: {e}", file=sys.stderr)
            return 2
        print(snapshot.rendered_expression)
        print(snapshot.rendered_display)
        return 0

    # Importación diferida: la ventana solo hace falta en modo interactivo
    from .app.calculator_app import CalculatorApp

    try:
        app = CalculatorApp(config)
        app.run()
    except KeyboardInterrupt:
        print("\nInterrumpido por el usuario")
    except Exception as e:
        print(f"\nError: {e}")
        traceback.print_exc()
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
