# capitra/tracker.py
from capitra.processor.models import Chapter, ChapterStatus


class ChapterTracker:
    """
    Lado del llamador: acumula los snapshots que emite el Orchestrator.
    Cada update reemplaza al capítulo con el mismo id; los ids nuevos
    se agregan al final, así que el orden es el de los anuncios en pending.

    Se puede pasar directamente como callback: `on_update=tracker.update`.
    """

    def __init__(self):
        self._chapters: dict[str, Chapter] = {}

    def update(self, chapter: Chapter) -> None:
        self._chapters[chapter.id] = chapter

    __call__ = update

    def reset(self) -> None:
        """Descarta todo (p. ej. tras una cancelación)."""
        self._chapters.clear()

    @property
    def chapters(self) -> list[Chapter]:
        return list(self._chapters.values())

    @property
    def total(self) -> int:
        return len(self._chapters)

    @property
    def completed(self) -> int:
        return sum(1 for c in self._chapters.values() if c.status.is_terminal)

    @property
    def succeeded(self) -> list[Chapter]:
        return [c for c in self._chapters.values() if c.status == ChapterStatus.SUCCESS]

    @property
    def failed(self) -> list[Chapter]:
        return [c for c in self._chapters.values() if c.status == ChapterStatus.FAILED]

    @property
    def progress(self) -> int:
        """Porcentaje entero de capítulos terminados."""
        if not self._chapters:
            return 0
        return round(self.completed / self.total * 100)
