"""
Calculadora táctil estilo iOS.

Motor de acumulación y evaluación de expresiones: convierte pulsaciones de
teclas en una expresión aritmética, la evalúa con SymPy y formatea el
resultado para el display. La ventana (OpenCV) y la voz (pyttsx3) son capas
de presentación que observan al motor.
"""

from .core.engine import CalculatorEngine, Mode, Snapshot, replay

__version__ = "1.0.0"

__all__ = ['CalculatorEngine', 'Mode', 'Snapshot', 'replay']
