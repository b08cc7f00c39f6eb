# router/transport.py
import logging
import random
from typing import Callable, Optional

from capitra.cancellation import CancellationToken
from capitra.errors import AbortedError, BackendError
from capitra.router.base import BaseModel
from capitra.router.models import ModelResponse, TranslationPrompt

logger = logging.getLogger(__name__)


class RetryingTransport:
    """
    Envía un prompt a un único backend con reintentos y backoff exponencial.

    Responsabilidades:
    - Consultar la cancelación antes de cada intento
    - Reintentar cualquier fallo que no sea una cancelación
    - Esperar 2^intento * base_delay + jitter aleatorio entre intentos
    - Propagar el último error como BackendError al agotar los intentos
    """

    def __init__(
        self,
        backend:      BaseModel,
        max_attempts: int                                = 5,
        base_delay:   float                              = 1.0,
        jitter:       float                              = 1.0,
        sleep:        Optional[Callable[[float], None]]  = None,
        rand:         Callable[[], float]                = random.random,
    ):
        if max_attempts < 1:
            raise ValueError("max_attempts debe ser al menos 1")
        self._backend      = backend
        self._max_attempts = max_attempts
        self._base_delay   = base_delay
        self._jitter       = jitter
        self._sleep        = sleep
        self._rand         = rand

    @property
    def backend_name(self) -> str:
        return self._backend.name

    def send(
        self,
        prompt:       TranslationPrompt,
        cancellation: Optional[CancellationToken] = None,
    ) -> ModelResponse:
        cancellation = cancellation or CancellationToken()
        last_error: Exception | None = None

        for attempt in range(self._max_attempts):
            cancellation.raise_if_cancelled()

            try:
                return self._backend.translate(
                    prompt.user_prompt,
                    prompt.system_instruction,
                )

            except AbortedError:
                raise

            except Exception as e:
                last_error = e
                logger.warning(
                    "Intento %d/%d con %s falló: %s",
                    attempt + 1, self._max_attempts, self._backend.name, e,
                )

            if attempt < self._max_attempts - 1:
                delay = self.backoff_delay(attempt)
                logger.info("Reintentando en %.1fs...", delay)
                self._pause(delay, cancellation)

        raise BackendError(str(last_error)) from last_error

    def backoff_delay(self, attempt: int) -> float:
        """Segundos de espera tras el intento `attempt` (base 0)."""
        return (2 ** attempt) * self._base_delay + self._rand() * self._jitter

    def _pause(self, delay: float, cancellation: CancellationToken) -> None:
        if self._sleep is not None:
            self._sleep(delay)
        else:
            # Despierta antes si se cancela; el chequeo del siguiente intento aborta
            cancellation.wait(delay)
