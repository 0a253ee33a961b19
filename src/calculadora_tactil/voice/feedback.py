"""
Sistema de feedback por voz usando pyttsx3.

Este módulo proporciona síntesis de voz para anunciar teclas y resultados,
ejecutándose de forma asíncrona para no bloquear la interfaz.
"""

import threading
from collections import deque

import pyttsx3

# Frases en francés, idioma del marcador de error "Erreur"
KEY_PHRASES = {
    "+": "plus",
    "-": "moins",
    "×": "fois",
    "÷": "divisé par",
    ".": "virgule",
    "+/-": "changement de signe",
    "%": "pourcentage",
    "C": "effacé",
    "=": "égal",
}


# ============================================================================
# CLASE: VoiceFeedback
# Propósito: Síntesis de voz para feedback auditivo
# Responsabilidades:
#   - Sintetizar teclas y resultados en francés
#   - Ejecutar en hilo separado para no bloquear la ventana
#   - Gestionar cola de mensajes para evitar solapamiento
# ============================================================================
class VoiceFeedback:
    """
    Sistema de feedback por voz usando pyttsx3.

    Características:
        - Ejecución asíncrona (no bloquea la aplicación)
        - Cola de mensajes acotada (un mensaje a la vez)
        - Configuración de volumen y velocidad
        - Selección automática de una voz francesa
    """

    def __init__(self, config):
        """
        Inicializa el motor de síntesis de voz.

        Args:
            config (CalculatorConfig): Configuración de la calculadora
        """
        self.config = config
        self.engine = None
        self.is_speaking = False
        self.message_queue = deque(maxlen=5)  # Cola de máximo 5 mensajes
        self._lock = threading.Lock()
        self.worker = None

        # El motor se crea aunque la voz empiece desactivada: 'v' puede activarla luego
        try:
            self.engine = pyttsx3.init()
            self._configure_engine()
            print("✓ Sistema de voz inicializado correctamente")
        except Exception as e:
            print(f"⚠ Advertencia: No se pudo inicializar el sistema de voz: {e}")
            self.engine = None
            self.config.voice_enabled = False

    def _configure_engine(self):
        """
        Configura el motor de voz con las preferencias del usuario.
        Busca una voz cuyo id o idiomas coincidan con voice_language.
        """
        if not self.engine:
            return

        try:
            self.engine.setProperty('volume', self.config.voice_volume)
            self.engine.setProperty('rate', self.config.voice_rate)

            lang = self.config.voice_language.lower()
            for voice in self.engine.getProperty('voices'):
                languages = [str(l).lower() for l in (getattr(voice, 'languages', None) or [])]
                if (f"{lang}-" in voice.id.lower() or f"{lang}_" in voice.id.lower()
                        or any(lang in l for l in languages)):
                    self.engine.setProperty('voice', voice.id)
                    print(f"✓ Voz seleccionada: {voice.name}")
                    return

            print(f"⚠ No se encontró voz para '{lang}'. Usando voz predeterminada.")
        except Exception as e:
            print(f"⚠ Error al configurar voz: {e}")

    def speak(self, text):
        """
        Reproduce un mensaje de voz de forma asíncrona.

        Args:
            text (str): Texto a sintetizar
        """
        if not self.config.voice_enabled or not self.engine:
            return

        self.message_queue.append(text)

        with self._lock:
            if self.is_speaking:
                return
            self.is_speaking = True

        self.worker = threading.Thread(target=self._process_queue, daemon=True)
        self.worker.start()

    def _process_queue(self):
        """Procesa la cola de mensajes uno por uno."""
        while True:
            with self._lock:
                if not self.message_queue:
                    self.is_speaking = False
                    return
                message = self.message_queue.popleft()
            try:
                self.engine.say(message)
                self.engine.runAndWait()
            except Exception as e:
                print(f"⚠ Error al reproducir voz: {e}")

    def speak_key(self, key):
        """
        Anuncia una tecla pulsada.

        Args:
            key (str): Identificador de tecla ("7", "+", "=", ...)

        "=" no se anuncia aquí: el resultado lo anuncia speak_result.
        """
        if key == "=":
            return
        self.speak(KEY_PHRASES.get(key, key))

    def speak_result(self, display):
        """
        Anuncia el resultado de un cálculo.

        Args:
            display (str): Texto del display tras "="
        """
        if display == self.config.error_marker:
            self.speak("erreur de calcul")
            return
        text = display.replace('-', 'moins ').replace('.', ' virgule ')
        self.speak(f"égal {text}")
