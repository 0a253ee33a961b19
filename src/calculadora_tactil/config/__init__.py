"""
Módulo de configuración para la calculadora táctil.
Contiene la clase de configuración del motor, la ventana y la voz.
"""

from .settings import CalculatorConfig

__all__ = ['CalculatorConfig']
