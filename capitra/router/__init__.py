from capitra.router.base import BaseModel
from capitra.router.models import BackendConfig, ModelResponse, TranslationPrompt
from capitra.router.prompt_builder import build_prompt
from capitra.router.config_loader import load_backend_config
from capitra.router.transport import RetryingTransport

__all__ = [
    "BaseModel",
    "BackendConfig",
    "ModelResponse",
    "TranslationPrompt",
    "build_prompt",
    "load_backend_config",
    "RetryingTransport",
]
