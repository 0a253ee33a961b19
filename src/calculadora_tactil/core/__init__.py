"""
Módulo core con la lógica principal de la calculadora.
Contiene la máquina de estados y el evaluador de expresiones.
"""

from .engine import CalculatorEngine, Mode, Snapshot, UnknownKeyError, replay, KEYS
from .evaluator import CalculatorError, EvaluationError, ParseError, evaluate, format_operand, format_result

__all__ = [
    'CalculatorEngine', 'Mode', 'Snapshot', 'UnknownKeyError', 'replay', 'KEYS',
    'CalculatorError', 'EvaluationError', 'ParseError', 'evaluate', 'format_operand', 'format_result',
]
