# router/claude.py
import logging

import anthropic

from capitra.router.base import BaseModel
from capitra.router.models import BackendConfig, ModelResponse

logger = logging.getLogger(__name__)

_DEFAULT_MODEL = "claude-haiku-4-5-20251001"

_TRANSIENT_ERRORS = (
    anthropic.RateLimitError,
    anthropic.APITimeoutError,
    anthropic.APIConnectionError,
)


class ClaudeAdapter(BaseModel):

    def __init__(self, config: BackendConfig):
        self._config     = config
        self._model_name = config.model or _DEFAULT_MODEL
        self._client = anthropic.Anthropic(
            api_key     = config.api_key,
            timeout     = config.timeout_seconds,
            max_retries = 0,   # los reintentos los gobierna el RetryingTransport
        )

    @property
    def name(self) -> str:
        return self._model_name

    def translate(self, prompt: str, system_instruction: str) -> ModelResponse:
        try:
            response = self._client.messages.create(
                model       = self._model_name,
                max_tokens  = self._config.max_output_tokens,
                temperature = self._config.temperature,
                system      = system_instruction,
                messages    = [{"role": "user", "content": prompt}],
            )
        except _TRANSIENT_ERRORS as e:
            logger.warning("Claude error transitorio: %s", e)
            raise

        except anthropic.BadRequestError as e:
            # Contenido bloqueado o prompt inválido: se reintenta igual, pero lo dejamos visible
            logger.error("Claude BadRequest: %s", e)
            raise

        return ModelResponse(
            text          = "".join(
                block.text for block in response.content if getattr(block, "type", "text") == "text"
            ),
            model_used    = self.name,
            tokens_input  = response.usage.input_tokens,
            tokens_output = response.usage.output_tokens,
        )
