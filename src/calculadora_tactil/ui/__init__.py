"""
Módulo de interfaz de usuario.
Contiene el renderizador del display y del teclado.
"""

from .renderer import UIRenderer, Button

__all__ = ['UIRenderer', 'Button']
