# router/gemini.py
import logging

import google.generativeai as genai
from google.api_core import exceptions as google_exceptions

from capitra.router.base import BaseModel
from capitra.router.models import BackendConfig, ModelResponse

logger = logging.getLogger(__name__)

_DEFAULT_MODEL = "gemini-2.5-pro"

# Solo para logging: el RetryingTransport reintenta cualquier error
_TRANSIENT_ERRORS = (
    google_exceptions.ResourceExhausted,   # 429
    google_exceptions.DeadlineExceeded,    # timeout
    google_exceptions.ServiceUnavailable,
)


class GeminiAdapter(BaseModel):

    def __init__(self, config: BackendConfig):
        self._config     = config
        self._model_name = config.model or _DEFAULT_MODEL
        genai.configure(api_key=config.api_key)
        # Un GenerativeModel por system_instruction: dentro de un trabajo es siempre la misma
        self._models: dict[str, "genai.GenerativeModel"] = {}

    @property
    def name(self) -> str:
        return self._model_name

    def translate(self, prompt: str, system_instruction: str) -> ModelResponse:
        model = self._model_for(system_instruction)

        try:
            response = model.generate_content(
                prompt,
                request_options={"timeout": self._config.timeout_seconds},
            )
        except _TRANSIENT_ERRORS as e:
            logger.warning("Gemini error transitorio: %s", e)
            raise

        usage = response.usage_metadata
        return ModelResponse(
            text          = response.text,
            model_used    = self.name,
            tokens_input  = usage.prompt_token_count,
            tokens_output = usage.candidates_token_count,
        )

    def _model_for(self, system_instruction: str) -> "genai.GenerativeModel":
        model = self._models.get(system_instruction)
        if model is None:
            model = genai.GenerativeModel(
                model_name         = self._model_name,
                system_instruction = system_instruction,
                generation_config  = genai.GenerationConfig(
                    temperature       = self._config.temperature,
                    max_output_tokens = self._config.max_output_tokens,
                ),
            )
            self._models[system_instruction] = model
        return model
