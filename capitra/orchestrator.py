# capitra/orchestrator.py
import dataclasses
import logging
from enum import Enum
from typing import Callable, Optional

from capitra.cancellation import CancellationToken
from capitra.errors import AbortedError
from capitra.processor.models import (
    Chapter,
    ChapterSeed,
    ChapterStatus,
    Job,
    TranslationProfile,
)
from capitra.processor.segmenter import ChapterSegmenter
from capitra.router.prompt_builder import build_prompt
from capitra.router.transport import RetryingTransport

logger = logging.getLogger(__name__)

ChapterCallback = Callable[[Chapter], None]


# ------------------------------------------------------------------
# Clasificación de errores por capítulo
# ------------------------------------------------------------------

class FailureCause(Enum):
    NETWORK    = "network"
    AUTH       = "auth"
    TIMEOUT    = "timeout"
    RATE_LIMIT = "rate_limit"
    UNEXPECTED = "unexpected"
    UNKNOWN    = "unknown"      # error sin mensaje


# El orden importa: gana la primera causa cuyo marcador aparezca en el mensaje
_CAUSE_MARKERS: list[tuple[FailureCause, tuple[str, ...]]] = [
    (FailureCause.NETWORK,    ("fetch", "network")),
    (FailureCause.AUTH,       ("api key", "api_key", "x-api-key", "unauthenticated",
                               "authentication", "permission denied", "401")),
    (FailureCause.TIMEOUT,    ("timed out", "timeout", "deadline")),
    (FailureCause.RATE_LIMIT, ("429", "quota", "rate limit", "resource exhausted")),
    # "connection" va después de timeout: "Connection timed out" es un timeout
    (FailureCause.NETWORK,    ("connection",)),
]

_CAUSE_SENTENCES: dict[FailureCause, str] = {
    FailureCause.NETWORK:    "Houve um problema de conexão. Por favor, verifique sua internet.",
    FailureCause.AUTH:       "Problema com a chave de API. Por favor, verifique as configurações.",
    FailureCause.TIMEOUT:    "A requisição demorou demais para responder.",
    FailureCause.RATE_LIMIT: "O limite de requisições foi atingido. Por favor, aguarde um pouco.",
    FailureCause.UNEXPECTED: "Ocorreu um erro inesperado.",
    FailureCause.UNKNOWN:    "Verifique sua conexão ou tente novamente.",
}


def classify_error(error: BaseException) -> FailureCause:
    message = str(error).lower()
    if not message.strip():
        return FailureCause.UNKNOWN

    for cause, markers in _CAUSE_MARKERS:
        if any(marker in message for marker in markers):
            return cause
    return FailureCause.UNEXPECTED


def describe_failure(chapter_title: str, error: BaseException) -> str:
    """Mensaje para el usuario: prefijo con el capítulo + frase fija de la causa."""
    return f'Falha ao traduzir o "{chapter_title}". {_CAUSE_SENTENCES[classify_error(error)]}'


# ------------------------------------------------------------------
# Orchestrator
# ------------------------------------------------------------------

class Orchestrator:
    """
    Dirige un trabajo de traducción de punta a punta.
    No tiene lógica de negocio propia: coordina módulos.

    Responsabilidades:
    - Segmentar el texto una sola vez y anunciar todos los capítulos en pending
    - Procesar los capítulos en orden, uno por vez
    - Capturar los errores por capítulo sin detener el trabajo
    - Propagar solo la cancelación
    """

    def __init__(
        self,
        transport: RetryingTransport,
        segmenter: Optional[ChapterSegmenter] = None,
    ):
        self._transport = transport
        self._segmenter = segmenter or ChapterSegmenter()

    def run(
        self,
        raw_text:        str,
        context:         str,
        profile:         TranslationProfile,
        source_language: str,
        target_language: str,
        on_update:       ChapterCallback,
        cancellation:    Optional[CancellationToken] = None,
    ) -> None:
        """
        Traduce todos los capítulos de raw_text.
        Devuelve normalmente cuando todos están en success/failed.
        Lanza AbortedError si se cancela; los resultados parciales se descartan.
        """
        cancellation = cancellation or CancellationToken()

        # ── Paso 1: segmentar y anunciar el esqueleto completo ────────
        chapters = _build_chapters(self._segmenter.segment(raw_text))
        job = Job(
            source_language = source_language,
            target_language = target_language,
            profile         = profile,
            context         = context,
            chapter_count   = len(chapters),
        )

        logger.info(
            "Trabajo %s → %s (%s): %d capítulos",
            source_language, target_language, profile.value, len(chapters),
        )

        for chapter in chapters:
            on_update(chapter)

        # ── Paso 2: procesar en orden estricto ────────────────────────
        for i, chapter in enumerate(chapters):
            if cancellation.is_cancelled:
                logger.info("Trabajo cancelado antes de %s", chapter.id)
                raise AbortedError("Tradução cancelada pelo usuário.")

            chapters[i] = self._process_chapter(chapter, job, on_update, cancellation)

        failed = sum(1 for c in chapters if c.status == ChapterStatus.FAILED)
        logger.info(
            "Trabajo terminado: %d traducidos, %d fallidos",
            len(chapters) - failed, failed,
        )

    def _process_chapter(
        self,
        chapter:      Chapter,
        job:          Job,
        on_update:    ChapterCallback,
        cancellation: CancellationToken,
    ) -> Chapter:
        """
        Lleva un capítulo a un estado terminal y devuelve el snapshot final.
        AbortedError se deja pasar sin marcar el capítulo como failed.
        """
        if chapter.is_empty:
            # Sin contenido: success directo, sin pasar por translating ni por el backend
            done = _transition(chapter, ChapterStatus.SUCCESS, translated_text="")
            on_update(done)
            logger.debug("%s vacío, resuelto sin backend", chapter.id)
            return done

        translating = _transition(chapter, ChapterStatus.TRANSLATING)
        on_update(translating)

        try:
            response = self._transport.send(build_prompt(chapter, job), cancellation)

        except AbortedError:
            raise

        except Exception as e:
            logger.warning(
                "Error en %s (%d/%d) tras todos los intentos: %s",
                chapter.id, chapter.index + 1, job.chapter_count, e,
            )
            failed = _transition(
                chapter, ChapterStatus.FAILED,
                error_message = describe_failure(chapter.title, e),
            )
            on_update(failed)
            return failed

        done = _transition(chapter, ChapterStatus.SUCCESS, translated_text=response.text)
        on_update(done)
        logger.info(
            "%s traducido con %s | tokens: %d+%d",
            chapter.id, response.model_used, response.tokens_input, response.tokens_output,
        )
        return done


# ------------------------------------------------------------------
# Funciones de módulo (helpers privados)
# ------------------------------------------------------------------

def _build_chapters(seeds: list[ChapterSeed]) -> list[Chapter]:
    return [
        Chapter(
            id            = f"chapter-{index}",
            index         = index,
            title         = seed.title,
            original_text = seed.content,
        )
        for index, seed in enumerate(seeds)
    ]


def _transition(
    chapter:         Chapter,
    status:          ChapterStatus,
    translated_text: Optional[str] = None,
    error_message:   Optional[str] = None,
) -> Chapter:
    """Snapshot nuevo con el estado indicado; limpia lo que no corresponde al estado."""
    return dataclasses.replace(
        chapter,
        status          = status,
        translated_text = translated_text,
        error_message   = error_message,
    )
