# capitra/factory.py
import logging
from typing import Optional

from capitra.orchestrator import Orchestrator
from capitra.processor.segmenter import ChapterSegmenter
from capitra.router.base import BaseModel
from capitra.router.config_loader import load_backend_config
from capitra.router.models import BackendConfig
from capitra.router.transport import RetryingTransport

logger = logging.getLogger(__name__)

_SUPPORTED_BACKENDS = ("gemini", "claude")


def build_orchestrator(config_path: Optional[str] = None) -> Orchestrator:
    """
    Ensambla el Orchestrator con todas sus dependencias.
    Punto de entrada único para el CLI y los tests de integración.
    """
    config  = load_backend_config(config_path)
    backend = _build_backend(config)

    transport = RetryingTransport(
        backend      = backend,
        max_attempts = config.max_attempts,
        base_delay   = config.base_delay_seconds,
        jitter       = config.jitter_seconds,
    )
    logger.debug("Backend %s listo (max_attempts=%d)", transport.backend_name, config.max_attempts)

    return Orchestrator(transport=transport, segmenter=ChapterSegmenter())


def _build_backend(config: BackendConfig) -> BaseModel:
    """
    Construye el adaptador indicado en el config.
    Los SDKs se importan aquí para no cargar el que no se usa.
    """
    if config.name not in _SUPPORTED_BACKENDS:
        raise RuntimeError(
            f"Backend desconhecido: '{config.name}'. "
            f"Disponíveis: {', '.join(_SUPPORTED_BACKENDS)}"
        )

    if not config.api_key:
        raise RuntimeError(
            f"{config.name}: nenhuma api_key configurada. "
            f"Revise ~/.capitra/config.yaml e suas variáveis de ambiente."
        )

    if config.name == "claude":
        from capitra.router.claude import ClaudeAdapter
        return ClaudeAdapter(config)

    from capitra.router.gemini import GeminiAdapter
    return GeminiAdapter(config)
