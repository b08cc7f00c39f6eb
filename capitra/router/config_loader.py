# router/config_loader.py
import logging
import os
from pathlib import Path
from typing import Optional

import yaml

from capitra.router.models import BackendConfig

logger = logging.getLogger(__name__)

_DEFAULT_CONFIG_PATH = Path.home() / ".capitra" / "config.yaml"

# Variables de entorno de las que se toma la api_key si el YAML no la trae
_API_KEY_ENV_VARS: dict[str, tuple[str, ...]] = {
    "gemini": ("GEMINI_API_KEY", "API_KEY"),
    "claude": ("ANTHROPIC_API_KEY",),
}


def load_backend_config(config_path: Optional[str] = None) -> BackendConfig:
    """
    Carga la configuración del backend desde YAML.
    Resuelve variables de entorno en api_key (${VAR}).

    - Ruta explícita (argumento o CAPITRA_CONFIG_PATH) inexistente → FileNotFoundError.
    - Sin ruta explícita y sin ~/.capitra/config.yaml → defaults + api_key del entorno.
    """
    explicit = config_path or os.environ.get("CAPITRA_CONFIG_PATH")
    path     = Path(explicit) if explicit else _DEFAULT_CONFIG_PATH

    if not path.exists():
        if explicit:
            raise FileNotFoundError(
                f"Config não encontrada em {path}. "
                f"Copie config.example.yaml para ~/.capitra/config.yaml"
            )
        logger.debug("Sin config en %s, usando defaults + entorno", path)
        return BackendConfig(api_key=_api_key_from_env(BackendConfig.name))

    with path.open(encoding="utf-8") as f:
        raw = yaml.safe_load(f) or {}

    entry    = raw.get("backend") or {}
    defaults = BackendConfig()
    name     = entry.get("name", defaults.name)

    return BackendConfig(
        name               = name,
        model              = entry.get("model"),
        api_key            = _resolve_env(entry.get("api_key")) or _api_key_from_env(name),
        timeout_seconds    = entry.get("timeout_seconds", defaults.timeout_seconds),
        temperature        = entry.get("temperature", defaults.temperature),
        max_output_tokens  = entry.get("max_output_tokens", defaults.max_output_tokens),
        max_attempts       = entry.get("max_attempts", defaults.max_attempts),
        base_delay_seconds = entry.get("base_delay_seconds", defaults.base_delay_seconds),
        jitter_seconds     = entry.get("jitter_seconds", defaults.jitter_seconds),
    )


def _resolve_env(value: Optional[str]) -> Optional[str]:
    """Expande ${VAR_NAME} desde el entorno."""
    if not value or not value.startswith("${"):
        return value
    var_name = value.strip("${}").strip()
    return os.environ.get(var_name)


def _api_key_from_env(backend_name: str) -> Optional[str]:
    for var_name in _API_KEY_ENV_VARS.get(backend_name, ()):
        value = os.environ.get(var_name)
        if value:
            return value
    return None
