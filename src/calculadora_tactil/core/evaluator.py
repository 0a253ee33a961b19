"""
Evaluación de expresiones aritméticas con SymPy.

Este módulo envuelve el parser de SymPy para ofrecer a la calculadora un
contrato simple: texto infijo con "+ - * /" y decimales con "." de entrada,
número real de salida, o una excepción de la jerarquía CalculatorError.
"""

import math
from tokenize import TokenError

import numpy as np
from sympy.parsing.sympy_parser import parse_expr, standard_transformations


class CalculatorError(Exception):
    """Error base de evaluación de la calculadora."""


class ParseError(CalculatorError):
    """La expresión traducida no es sintácticamente válida."""


class EvaluationError(CalculatorError):
    """La expresión es válida pero su valor no está definido (ej: división por cero)."""


def evaluate(text):
    """
    Evalúa una expresión aritmética y retorna su valor real.

    Args:
        text (str): Expresión infija ASCII (ej: "5 + 3 * 2")

    Returns:
        float: Resultado en doble precisión

    Raises:
        ParseError: Sintaxis inválida o expresión no numérica
        EvaluationError: Resultado indefinido, infinito o no real

    Ejemplo:
        evaluate("5 + 3 * 2") → 11.0
        evaluate("5 / 0")     → EvaluationError (SymPy produce zoo)
    """
    try:
        # local_dict vacío: no hay variables, solo números y operadores
        expr = parse_expr(text, local_dict={}, transformations=standard_transformations)
    except (SyntaxError, TokenError) as e:
        raise ParseError(f"Expresión inválida: {text!r}") from e
    except Exception as e:
        raise EvaluationError(f"No se pudo evaluar {text!r}: {e}") from e

    if not getattr(expr, "is_number", False):
        raise ParseError(f"Expresión no numérica: {text!r}")

    # zoo (división por cero), nan (0/0) y complejos se rechazan aquí
    if expr.is_finite is not True or expr.is_real is not True:
        raise EvaluationError(f"Resultado indefinido para {text!r}")

    try:
        value = float(expr)
    except (TypeError, OverflowError) as e:
        raise EvaluationError(f"Resultado no representable para {text!r}") from e

    if not math.isfinite(value):
        raise EvaluationError(f"Resultado fuera de rango para {text!r}")
    return value


def format_result(value, max_decimals=6):
    """
    Formatea un resultado numérico para el display.

    Args:
        value (float): Resultado del cálculo
        max_decimals (int): Decimales máximos a mostrar

    Returns:
        str: Texto del display

    Formateo:
        - 42.0       → "42" (enteros sin decimales)
        - 3.14159265 → "3.141593" (máximo 6 decimales, sin ceros finales)
        - 0.5000     → "0.5"
    """
    if value % 1 == 0:
        return str(int(value))

    text = f"{value:.{max_decimals}f}".rstrip('0').rstrip('.')
    # -0.0000001 se redondea a "-0"
    return "0" if text == "-0" else text


def parse_number(text):
    """Convierte el texto del display a número; 0.0 si no es numérico."""
    try:
        return float(text)
    except ValueError:
        return 0.0


def format_operand(value):
    """
    Formatea un operando que sigue editándose en el display (tecla "%").

    Args:
        value (float): Valor del operando

    Returns:
        str: Dígitos mínimos que reproducen el float, sin notación exponencial

    A diferencia de format_result no redondea: el operando entra tal cual
    en la expresión.
        - 1.0         → "1"
        - 0.012345678 → "0.012345678"
        - 1e-07       → "0.0000001"
    """
    text = np.format_float_positional(value, trim='-')
    return "0" if text == "-0" else text
