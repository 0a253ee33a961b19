"""
Configuración centralizada de la calculadora táctil.

Este módulo contiene la clase CalculatorConfig con las preferencias del motor,
de la ventana, de la voz y del teclado físico.
"""


# ============================================================================
# CLASE: CalculatorConfig
# Propósito: Configuración de la calculadora y de su capa de presentación
# Responsabilidades:
#   - Parámetros del motor (marcador de error, decimales del resultado)
#   - Dimensiones y colores de la ventana
#   - Preferencias de voz (volumen, velocidad, idioma)
#   - Correspondencia entre teclas físicas y teclas de la calculadora
# ============================================================================
class CalculatorConfig:
    """
    Configuración de la calculadora estilo iOS.

    Opciones disponibles:
        - Motor: texto del marcador de error y decimales máximos del resultado
        - Ventana: tamaño, título y paleta de colores (BGR)
        - Voz: activación, volumen, velocidad e idioma
        - Teclado: atajos de teclado físico
    """

    def __init__(self):
        """Inicializa configuración con valores por defecto."""
        # ====================================================================
        # MOTOR
        # ====================================================================
        self.error_marker = "Erreur"        # Texto mostrado tras un fallo de cálculo
        self.max_decimals = 6               # Decimales máximos del resultado

        # ====================================================================
        # VENTANA
        # ====================================================================
        self.window_title = "Calculatrice"
        self.window_width = 420
        self.window_height = 760
        self.bg_color = (0, 0, 0)           # Negro
        self.key_gray = (51, 51, 51)        # 0xFF333333
        self.key_orange = (10, 159, 255)    # 0xFFFF9F0A en BGR
        self.text_color = (255, 255, 255)
        self.expression_color = (140, 140, 140)
        self.error_color = (80, 80, 255)

        # ====================================================================
        # VOZ
        # ====================================================================
        self.voice_enabled = True           # Activar/desactivar feedback por voz
        self.voice_volume = 0.8             # Volumen (0.0-1.0)
        self.voice_rate = 160               # Velocidad de habla (palabras por minuto)
        self.voice_language = 'fr'          # Idioma de las frases

        # ====================================================================
        # TECLADO FÍSICO
        # ====================================================================
        self.key_bindings = {
            "*": "×",
            "x": "×",
            "/": "÷",
            "\r": "=",
            "\n": "=",
            "=": "=",
            ",": ".",
            "c": "C",
            "\x08": "C",     # Backspace
            "\x7f": "C",     # Delete
            "n": "+/-",
        }
        self.quit_keys = (27, ord('q'))     # ESC o 'q'
        self.voice_toggle_key = ord('v')

    def get_key_binding(self, char):
        """
        Traduce un carácter del teclado físico a una tecla de la calculadora.

        Args:
            char (str): Carácter recibido del teclado

        Returns:
            str | None: Identificador de tecla, o None si no tiene atajo

        Los dígitos y los operadores "+", "-", "%" se usan tal cual.
        """
        if char in self.key_bindings:
            return self.key_bindings[char]
        if char.isdigit() or char in ("+", "-", "%", "."):
            return char
        return None

    @classmethod
    def from_args(cls, args):
        """
        Construye una configuración a partir de los argumentos de línea de comandos.

        Args:
            args (argparse.Namespace): Argumentos ya parseados

        Returns:
            CalculatorConfig: Configuración con los valores sobrescritos
        """
        config = cls()
        if getattr(args, "no_voice", False):
            config.voice_enabled = False
        if getattr(args, "width", None):
            config.window_width = args.width
        if getattr(args, "height", None):
            config.window_height = args.height
        return config
