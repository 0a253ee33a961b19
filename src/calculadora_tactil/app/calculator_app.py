"""
Aplicación principal que integra todos los componentes.

Este módulo contiene la clase CalculatorApp.
"""

import cv2

from ..config.settings import CalculatorConfig
from ..core.engine import CalculatorEngine, Mode
from ..ui.renderer import UIRenderer
from ..voice.feedback import VoiceFeedback


# ============================================================================
class CalculatorApp:
    """
    Aplicación principal de la calculadora táctil.

    Arquitectura:
        - CalculatorEngine: Máquina de estados y evaluación
        - UIRenderer: Renderizado del display y del teclado
        - VoiceFeedback: Anuncio de teclas y resultados
        - CalculatorApp: Coordinador y loop principal

    El motor no conoce la interfaz: la aplicación se suscribe a sus cambios
    y la ventana se redibuja en cada vuelta del loop.
    """

    def __init__(self, config=None, voice=None):
        """
        Inicializa la aplicación.

        Args:
            config (CalculatorConfig): Configuración (opcional)
            voice (VoiceFeedback): Sistema de voz (opcional, se crea uno si falta)
        """
        self.config = config if config else CalculatorConfig()

        self.engine = CalculatorEngine(self.config)
        self.ui = UIRenderer(self.config.window_width, self.config.window_height, self.config)
        self.voice = voice if voice else VoiceFeedback(self.config)

        self.last_snapshot = self.engine.snapshot()
        self.engine.subscribe(self.on_change)

    def press(self, key):
        """
        Envía una tecla de la calculadora al motor.

        Args:
            key (str): Identificador de tecla ("7", "×", "=", ...)
        """
        self.ui.highlight(key)
        self.engine.handle_key(key)

    def on_change(self, snapshot):
        """
        Reacciona a un nuevo estado del motor.

        Feedback:
            - Resultado: mensaje cian y anuncio "égal ..."
            - Error: mensaje rojo y anuncio "erreur de calcul"
            - Otras teclas: anuncio de la tecla
            - Teclas sin efecto (ej: operador en estado de error): silencio
        """
        previous, self.last_snapshot = self.last_snapshot, snapshot
        if (snapshot.expression, snapshot.display, snapshot.mode) == \
                (previous.expression, previous.display, previous.mode):
            return

        if snapshot.key == "=":
            if snapshot.mode is Mode.ERROR:
                self.ui.show_feedback(self.config.error_marker, self.config.error_color)
            else:
                self.ui.show_feedback(f"= {snapshot.display}", (255, 255, 0), 60)
            self.voice.speak_result(snapshot.display)
        else:
            self.voice.speak_key(snapshot.key)

    def key_from_keycode(self, code):
        """
        Traduce un código de cv2.waitKey a una tecla de la calculadora.

        Returns:
            str | None: Tecla, o None si el código no tiene atajo
        """
        if code < 0 or code == 255:
            return None
        char = chr(code)
        return self.config.get_key_binding(char.lower() if char.isalpha() else char)

    def handle_keycode(self, code):
        """
        Procesa una tecla física.

        Returns:
            bool: False si el usuario pidió salir
        """
        if code in self.config.quit_keys:
            return False

        if code == self.config.voice_toggle_key:
            self.toggle_voice()
            return True

        key = self.key_from_keycode(code)
        if key:
            self.press(key)
        return True

    def toggle_voice(self):
        self.config.voice_enabled = not self.config.voice_enabled
        status = "ACTIVADA" if self.config.voice_enabled else "DESACTIVADA"
        print(f"🔊 Voz: {status}")
        self.ui.show_feedback(f"VOZ {status}", (0, 255, 255), 60)

    def on_mouse(self, event, x, y, flags, param):
        """Callback de ratón de OpenCV: un clic izquierdo pulsa la tecla bajo el cursor."""
        if event != cv2.EVENT_LBUTTONDOWN:
            return
        key = self.ui.button_at(x, y)
        if key:
            self.press(key)

    def run(self):
        """
        Bucle principal de la aplicación.

        Ciclo de ejecución:
            1. Crear lienzo vacío
            2. Dibujar display y teclado con el estado actual del motor
            3. Mostrar frame y procesar teclado (los clics llegan por callback)
            4. Repetir hasta ESC, 'q' o cierre de la ventana
        """
        print("\n" + "=" * 60)
        print("CALCULATRICE - ESTILO iOS")
        print("=" * 60)
        print("\nClic en las teclas o usa el teclado:")
        print("  0-9 . + - * / %   Enter: =   c/Backspace: C   n: +/-")
        print("\nPresiona ESC o 'q' para salir")
        print("Presiona 'v' para activar/desactivar voz\n")

        title = self.config.window_title
        cv2.namedWindow(title)
        cv2.setMouseCallback(title, self.on_mouse)

        while True:
            frame = self.ui.new_frame()
            self.ui.draw(frame, self.engine.snapshot())
            cv2.imshow(title, frame)

            code = cv2.waitKey(30) & 0xFF
            if not self.handle_keycode(code):
                break
            if cv2.getWindowProperty(title, cv2.WND_PROP_VISIBLE) < 1:
                break

        cv2.destroyAllWindows()
        print("\nOK Aplicacion cerrada correctamente")
