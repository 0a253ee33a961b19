"""
Motor de la calculadora estilo iOS.

Este módulo contiene la clase CalculatorEngine, una máquina de estados que
construye la expresión tecla a tecla, decide cuándo evaluarla y formatea el
resultado para el display.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from ..config.settings import CalculatorConfig
from .evaluator import CalculatorError, evaluate, format_operand, format_result, parse_number

DIGITS = ("0", "1", "2", "3", "4", "5", "6", "7", "8", "9")
OPERATORS = ("+", "-", "×", "÷")
KEYS = DIGITS + OPERATORS + (".", "+/-", "%", "C", "=")


class UnknownKeyError(ValueError):
    """Identificador de tecla desconocido."""


class Mode(str, Enum):
    """Estados del motor."""

    ENTERING = "entering"
    EVALUATED = "evaluated"
    ERROR = "error"


@dataclass(frozen=True)
class Snapshot:
    """Estado observable del motor tras una pulsación."""

    expression: str
    display: str
    mode: Mode
    just_evaluated: bool = False
    key: Optional[str] = None

    @property
    def rendered_expression(self) -> str:
        return self.expression.replace("*", "×")

    @property
    def rendered_display(self) -> str:
        return self.display


# ============================================================================
# CLASE: CalculatorEngine
# Propósito: Lógica de la calculadora con construcción incremental
# Responsabilidades:
#   - Construir el operando actual dígito a dígito en el display
#   - Acumular operandos y operadores en la expresión
#   - Evaluar la expresión completa con "="
#   - Notificar a los observadores tras cada tecla
# ============================================================================
class CalculatorEngine:
    """
    Máquina de estados de la calculadora.

    Modelo de operación:
        1. Usuario teclea dígitos → se acumulan en display
        2. Usuario pulsa un operador → display se añade a expression ("5 + ")
        3. Usuario repite hasta completar la expresión ("5 + 3 × ")
        4. Usuario pulsa = → se añade el operando pendiente y se evalúa

    Estados:
        - ENTERING: componiendo un operando
        - EVALUATED: display contiene el resultado del último cálculo
        - ERROR: display contiene el marcador de error; solo "C" y los
          dígitos tienen efecto
    """

    def __init__(self, config=None, evaluator=evaluate):
        """
        Inicializa el motor en estado vacío.

        Args:
            config (CalculatorConfig): Configuración (opcional)
            evaluator (callable): Función texto → float que lanza CalculatorError
        """
        self.config = config if config else CalculatorConfig()
        self._evaluator = evaluator
        self._listeners = []
        self._reset()

    def _reset(self):
        self._expression = ""
        self._display = "0"
        self._mode = Mode.ENTERING
        self._just_evaluated = False

    # ── Estado observable ────────────────────────────────────────

    @property
    def expression(self):
        return self._expression

    @property
    def display(self):
        return self._display

    @property
    def mode(self):
        return self._mode

    @property
    def just_evaluated(self):
        """
        True tras un cálculo correcto y hasta la siguiente tecla que lo consuma.

        Un fallo de "=" no lo modifica: tras "5 + 3 = =" sigue siendo True
        aunque el motor esté en ERROR.
        """
        return self._just_evaluated

    @property
    def rendered_expression(self):
        """Expresión para mostrar: "*" vuelve a dibujarse como "×"."""
        return self._expression.replace("*", "×")

    @property
    def rendered_display(self):
        return self._display

    def snapshot(self, key=None):
        return Snapshot(self._expression, self._display, self._mode, self._just_evaluated, key)

    def subscribe(self, listener):
        """
        Registra un observador que recibe un Snapshot tras cada tecla.

        Returns:
            callable: Función que anula la suscripción
        """
        self._listeners.append(listener)
        return lambda: self._listeners.remove(listener)

    # ── Entrada ──────────────────────────────────────────────────

    def handle_key(self, key):
        """
        Procesa una pulsación de tecla.

        Args:
            key (str): Dígito, ".", "+", "-", "×", "÷", "+/-", "%", "C" o "="

        Raises:
            UnknownKeyError: Si la tecla no pertenece al teclado

        Los fallos de evaluación nunca se propagan: se muestran como el
        marcador de error en el display.
        """
        if key not in KEYS:
            raise UnknownKeyError(f"Tecla desconocida: {key!r}")

        if key == "C":
            self._reset()
        elif key in DIGITS:
            self._press_digit(key)
        elif self._mode is Mode.ERROR:
            pass
        elif key == "=":
            self._evaluate()
        elif key in OPERATORS:
            self._press_operator(key)
        elif key == ".":
            if "." not in self._display:
                self._display += "."
        elif key == "+/-":
            if self._display.startswith("-"):
                self._display = self._display[1:]
            elif self._display != "0":
                self._display = "-" + self._display
        elif key == "%":
            n = parse_number(self._display)
            self._display = format_operand(n / 100)

        self._notify(key)

    def _press_digit(self, digit):
        if self._mode is not Mode.ENTERING:
            # Nuevo cálculo tras un resultado o un error
            self._display = digit
            self._expression = ""
            self._mode = Mode.ENTERING
            self._just_evaluated = False
        elif self._display == "0":
            self._display = digit
        else:
            self._display += digit

    def _press_operator(self, op):
        if self._mode is Mode.EVALUATED:
            # El resultado pasa a ser el primer operando
            self._expression = f"{self._display} {op} "
            self._mode = Mode.ENTERING
            self._just_evaluated = False
        else:
            self._expression += f"{self._display} {op} "
        self._display = "0"

    def _evaluate(self):
        exp = self._expression
        if not exp or exp.rstrip().endswith(OPERATORS):
            exp += self._display

        exp = (exp.replace("×", "*")
                  .replace("÷", "/")
                  .replace("%", "/100")
                  .strip())

        try:
            result = self._evaluator(exp)
        except CalculatorError:
            self._display = self.config.error_marker
            self._mode = Mode.ERROR
            return

        self._expression = f"{exp} ="
        self._display = format_result(result, self.config.max_decimals)
        self._mode = Mode.EVALUATED
        self._just_evaluated = True

    def _notify(self, key):
        snapshot = self.snapshot(key)
        for listener in list(self._listeners):
            listener(snapshot)


def replay(keys, config=None):
    """
    Ejecuta una secuencia de teclas sobre un motor nuevo.

    Args:
        keys (iterable): Identificadores de tecla
        config (CalculatorConfig): Configuración (opcional)

    Returns:
        Snapshot: Estado final
    """
    engine = CalculatorEngine(config)
    for key in keys:
        engine.handle_key(key)
    return engine.snapshot()
