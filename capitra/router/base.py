# router/base.py
from abc import ABC, abstractmethod
from capitra.router.models import ModelResponse


class BaseModel(ABC):
    """
    Contrato que deben cumplir todos los adaptadores.
    El transporte y el Orchestrator solo hablan con esta interfaz.
    Nunca importan gemini.py ni claude.py directamente.
    """

    @abstractmethod
    def translate(self, prompt: str, system_instruction: str) -> ModelResponse:
        """
        Envía el prompt al modelo y devuelve una ModelResponse.
        Puede lanzar cualquier error del SDK (red, auth, quota, timeout):
        el RetryingTransport los captura y decide si reintentar.
        """
        ...

    @property
    @abstractmethod
    def name(self) -> str:
        """Identificador del backend, usado en logs y en ModelResponse.model_used."""
        ...
