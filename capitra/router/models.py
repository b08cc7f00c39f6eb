# router/models.py
from dataclasses import dataclass
from typing import Optional


@dataclass
class ModelResponse:
    text:          str
    model_used:    str
    tokens_input:  int = 0
    tokens_output: int = 0


@dataclass(frozen=True)
class TranslationPrompt:
    """Lo que viaja al backend: instrucciones de sistema + mensaje de usuario."""
    system_instruction: str
    user_prompt:        str


@dataclass
class BackendConfig:
    """
    Configuración del backend de traducción.
    Se carga desde ~/.capitra/config.yaml (o defaults + entorno).
    """
    name:               str            = "gemini"
    model:              Optional[str]  = None    # None → modelo por defecto del adaptador
    api_key:            Optional[str]  = None
    timeout_seconds:    int            = 120
    temperature:        float          = 0.3
    max_output_tokens:  int            = 8192

    # Política de reintentos del transporte
    max_attempts:       int            = 5
    base_delay_seconds: float          = 1.0
    jitter_seconds:     float          = 1.0
