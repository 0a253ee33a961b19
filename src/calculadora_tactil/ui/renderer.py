"""
Interfaz de usuario y renderizado.

Este módulo contiene la clase UIRenderer que dibuja el display y el teclado
de la calculadora sobre un lienzo de OpenCV y resuelve qué tecla hay bajo
un clic.
"""

from dataclasses import dataclass

import cv2
import numpy as np

from ..config.settings import CalculatorConfig


# Distribución del teclado: bloque izquierdo de 3 columnas y columna derecha
# de operadores donde "=" ocupa dos filas.
LEFT_ROWS = [
    ["C", "%", "÷"],
    ["7", "8", "9"],
    ["4", "5", "6"],
    ["1", "2", "3"],
    ["+/-", "0", "."],
]
RIGHT_COLUMN = [("×", 1), ("-", 1), ("+", 1), ("=", 2)]
ORANGE_KEYS = ("÷", "×", "-", "+", "=")

# Las fuentes Hershey de OpenCV solo dibujan ASCII
ASCII_GLYPHS = {"×": "x", "÷": "/"}


@dataclass
class Button:
    """Tecla del teclado en coordenadas de píxel."""

    key: str
    x: int
    y: int
    w: int
    h: int
    orange: bool = False

    @property
    def center(self):
        return (self.x + self.w // 2, self.y + self.h // 2)

    @property
    def radius(self):
        return min(self.w, self.h) // 2

    @property
    def is_pill(self):
        return self.h > self.w

    def contains(self, px, py):
        return self.x <= px < self.x + self.w and self.y <= py < self.y + self.h


def to_ascii(text):
    """Sustituye los glifos que las fuentes Hershey no pueden dibujar."""
    for glyph, ascii_glyph in ASCII_GLYPHS.items():
        text = text.replace(glyph, ascii_glyph)
    return text


# ============================================================================
class UIRenderer:
    """
    Renderizador de la calculadora estilo iOS.

    Componentes visuales:
        1. Display: expresión en curso (gris, pequeña) y número actual
           o resultado (blanco, grande; rojo si es el marcador de error)
        2. Teclado: teclas circulares grises y naranjas, "=" alargada
        3. Resaltado breve de la última tecla pulsada
        4. Feedback: mensajes temporales sobre el teclado
    """

    def __init__(self, width, height, config=None):
        """
        Inicializa el renderizador con dimensiones de la ventana.

        Args:
            width (int): Ancho de la ventana en píxeles
            height (int): Alto de la ventana en píxeles
            config (CalculatorConfig): Configuración (opcional)
        """
        self.width = width
        self.height = height
        self.config = config if config else CalculatorConfig()
        self.display_height = height * 2 // 5   # Proporción 2:3 display/teclado
        self.buttons = self.layout()

        self.feedback_msg = ""               # Mensaje de feedback actual
        self.feedback_timer = 0              # Frames restantes para mostrar feedback
        self.feedback_color = (0, 255, 0)    # Color del feedback
        self.pressed_key = None              # Última tecla pulsada
        self.pressed_timer = 0               # Frames restantes de resaltado

    def layout(self):
        """
        Calcula la posición de cada tecla.

        Returns:
            list[Button]: Teclas en orden de dibujo

        El teclado ocupa la zona inferior: 4 columnas iguales y 5 filas
        iguales, con un margen de 8 px alrededor de cada tecla.
        """
        pad, margin = 10, 8
        top = self.display_height + pad
        col_w = (self.width - 2 * pad) // 4
        row_h = (self.height - top - pad) // 5

        buttons = []
        for r, row in enumerate(LEFT_ROWS):
            for c, key in enumerate(row):
                buttons.append(Button(
                    key,
                    pad + c * col_w + margin,
                    top + r * row_h + margin,
                    col_w - 2 * margin,
                    row_h - 2 * margin,
                    key in ORANGE_KEYS,
                ))

        r = 0
        for key, span in RIGHT_COLUMN:
            buttons.append(Button(
                key,
                pad + 3 * col_w + margin,
                top + r * row_h + margin,
                col_w - 2 * margin,
                span * row_h - 2 * margin,
                True,
            ))
            r += span
        return buttons

    def button_at(self, x, y):
        """Retorna la tecla bajo el punto (x, y), o None."""
        for button in self.buttons:
            if button.contains(x, y):
                return button.key
        return None

    def new_frame(self):
        """Crea un lienzo vacío con el color de fondo."""
        frame = np.zeros((self.height, self.width, 3), dtype=np.uint8)
        frame[:] = self.config.bg_color
        return frame

    def show_feedback(self, msg, color=(0, 255, 0), duration=40):
        """
        Muestra mensaje de feedback temporal.

        Args:
            msg (str): Mensaje a mostrar
            color (tuple): Color BGR del mensaje
            duration (int): Duración en frames
        """
        self.feedback_msg = msg
        self.feedback_color = color
        self.feedback_timer = duration

    def highlight(self, key, duration=6):
        """Resalta una tecla durante unos frames."""
        self.pressed_key = key
        self.pressed_timer = duration

    def draw(self, img, snapshot):
        """Dibuja el estado completo de la calculadora sobre img."""
        self.draw_display(img, snapshot)
        self.draw_keypad(img)
        self.draw_feedback(img)
        return img

    def draw_display(self, img, snapshot):
        """
        Dibuja el display de la calculadora.

        Args:
            img (np.array): Imagen sobre la cual dibujar
            snapshot (Snapshot): Estado observable del motor

        Ambas líneas se alinean a la derecha. La expresión larga se recorta
        por la izquierda; el número reduce su tamaño hasta caber.
        """
        right = self.width - 20
        max_w = self.width - 40

        expr = to_ascii(snapshot.rendered_expression)
        if expr:
            expr = self._clip_left(expr, cv2.FONT_HERSHEY_SIMPLEX, 0.9, 2, max_w)
            (tw, _), _ = cv2.getTextSize(expr, cv2.FONT_HERSHEY_SIMPLEX, 0.9, 2)
            cv2.putText(img, expr, (right - tw, self.display_height - 110),
                        cv2.FONT_HERSHEY_SIMPLEX, 0.9, self.config.expression_color, 2)

        display = to_ascii(snapshot.rendered_display)
        color = self.config.text_color
        if display == self.config.error_marker:
            color = self.config.error_color

        scale = self._fit_scale(display, cv2.FONT_HERSHEY_SIMPLEX, 3.0, 3, max_w)
        (tw, _), _ = cv2.getTextSize(display, cv2.FONT_HERSHEY_SIMPLEX, scale, 3)
        cv2.putText(img, display, (right - tw, self.display_height - 30),
                    cv2.FONT_HERSHEY_SIMPLEX, scale, color, 3)

    def draw_keypad(self, img):
        if self.pressed_timer > 0:
            self.pressed_timer -= 1

        for button in self.buttons:
            color = self.config.key_orange if button.orange else self.config.key_gray
            if button.key == self.pressed_key and self.pressed_timer > 0:
                color = tuple(min(255, c + 80) for c in color)

            cx, cy = button.center
            if button.is_pill:
                r = button.w // 2
                cv2.circle(img, (cx, button.y + r), r, color, -1)
                cv2.circle(img, (cx, button.y + button.h - r), r, color, -1)
                cv2.rectangle(img, (button.x, button.y + r),
                              (button.x + button.w, button.y + button.h - r), color, -1)
            else:
                cv2.circle(img, (cx, cy), button.radius, color, -1)

            self._draw_label(img, button)

    def _draw_label(self, img, button):
        cx, cy = button.center
        color = self.config.text_color

        # "÷" y "×" se dibujan con primitivas, no hay glifo ASCII fiel
        if button.key == "÷":
            cv2.line(img, (cx - 14, cy), (cx + 14, cy), color, 3)
            cv2.circle(img, (cx, cy - 10), 3, color, -1)
            cv2.circle(img, (cx, cy + 10), 3, color, -1)
            return
        if button.key == "×":
            cv2.line(img, (cx - 10, cy - 10), (cx + 10, cy + 10), color, 3)
            cv2.line(img, (cx - 10, cy + 10), (cx + 10, cy - 10), color, 3)
            return

        scale = 0.8 if len(button.key) > 1 else 1.1
        (tw, th), _ = cv2.getTextSize(button.key, cv2.FONT_HERSHEY_SIMPLEX, scale, 2)
        cv2.putText(img, button.key, (cx - tw // 2, cy + th // 2),
                    cv2.FONT_HERSHEY_SIMPLEX, scale, color, 2)

    def draw_feedback(self, img):
        """
        Dibuja mensaje de feedback temporal sobre la parte alta del display.

        Efecto:
            - Fade-out usando alpha blending
            - Duración controlada por feedback_timer
        """
        if self.feedback_timer > 0:
            self.feedback_timer -= 1
            alpha = min(self.feedback_timer / 20.0, 1.0)

            x, y = 20, 50
            overlay = img.copy()
            cv2.rectangle(overlay, (x - 10, y - 35), (self.width - 10, y + 12), (40, 40, 40), -1)
            cv2.addWeighted(overlay, alpha * 0.88, img, 1 - alpha * 0.88, 0, img)

            color = tuple(int(c * alpha) for c in self.feedback_color)
            cv2.putText(img, to_ascii(self.feedback_msg), (x, y),
                        cv2.FONT_HERSHEY_SIMPLEX, 0.8, color, 2)

    @staticmethod
    def _fit_scale(text, font, scale, thickness, max_w):
        while scale > 0.6:
            (tw, _), _ = cv2.getTextSize(text, font, scale, thickness)
            if tw <= max_w:
                break
            scale -= 0.1
        return scale

    @staticmethod
    def _clip_left(text, font, scale, thickness, max_w):
        def width(t):
            return cv2.getTextSize(t, font, scale, thickness)[0][0]

        if width(text) <= max_w:
            return text
        while len(text) > 1 and width("..." + text) > max_w:
            text = text[1:]
        return "..." + text
