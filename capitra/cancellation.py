# capitra/cancellation.py
import threading

from capitra.errors import AbortedError


class CancellationToken:
    """
    Señal de cancelación cooperativa para un trabajo.
    Se activa una sola vez y queda activa para el resto del trabajo.
    El Orchestrator y el transporte solo la consultan en puntos fijos:
    nunca interrumpe una llamada de red en curso.
    """

    def __init__(self):
        self._event = threading.Event()

    def cancel(self) -> None:
        self._event.set()

    @property
    def is_cancelled(self) -> bool:
        return self._event.is_set()

    def raise_if_cancelled(self) -> None:
        if self._event.is_set():
            raise AbortedError("Tradução cancelada pelo usuário.")

    def wait(self, seconds: float) -> bool:
        """
        Duerme hasta `seconds` o hasta que se cancele, lo que ocurra primero.
        Devuelve True si se canceló durante la espera.
        """
        return self._event.wait(timeout=seconds)
