# capitra/reconstructor.py
import logging
from pathlib import Path

from capitra.processor.models import Chapter, ChapterStatus

logger = logging.getLogger(__name__)

_REVIEW_MARKER = "[⚠ FALHA NA TRADUÇÃO: TEXTO ORIGINAL]\n"


class Reconstructor:
    """
    Responsabilidad única: tomar los capítulos terminados de un trabajo
    y producir el texto final.

    No sabe nada de modelos, prompts ni reintentos.
    """

    def __init__(self, include_failed: bool = False):
        self._include_failed = include_failed

    def assemble(self, chapters: list[Chapter]) -> str:
        """
        Une las traducciones con una línea en blanco entre capítulos.
        Los capítulos fallidos se omiten, o se insertan con el original
        y una marca visible si include_failed=True.
        """
        parts: list[str] = []

        for chapter in chapters:   # ya vienen en orden de documento
            text = self._resolve_chapter_text(chapter)
            if text:
                parts.append(text)

        return "\n\n".join(parts)

    def write(self, chapters: list[Chapter], output_path: Path) -> Path:
        """Escribe el texto final y devuelve la ruta."""
        if not chapters:
            raise ValueError("Não há capítulos para escrever")

        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(self.assemble(chapters), encoding="utf-8")
        logger.info("Output escrito en: %s", output_path)
        return output_path

    def _resolve_chapter_text(self, chapter: Chapter) -> str | None:
        """
        Orden de preferencia:
        1. translated_text (el camino feliz)
        2. original con marca de revisión (failed, solo con include_failed)
        """
        if chapter.status == ChapterStatus.SUCCESS:
            return chapter.translated_text

        if chapter.status == ChapterStatus.FAILED and self._include_failed:
            return f"{_REVIEW_MARKER}{chapter.title}\n\n{chapter.original_text}"

        return None
