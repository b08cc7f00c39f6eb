# processor/models.py
from dataclasses import dataclass
from enum import Enum
from typing import Optional


class ChapterStatus(Enum):
    PENDING     = "pending"
    TRANSLATING = "translating"
    SUCCESS     = "success"
    FAILED      = "failed"

    @property
    def is_terminal(self) -> bool:
        return self in (ChapterStatus.SUCCESS, ChapterStatus.FAILED)


class TranslationProfile(Enum):
    """Voz de la traducción. Solo tiene efecto en el par Inglés → Portugués (Brasil)."""
    LITERARIA = "Literária"
    FIEL      = "Fiel"
    NATURAL   = "Natural"


@dataclass(frozen=True)
class ChapterSeed:
    """
    Resultado del Segmenter.
    start/end delimitan el tramo del texto crudo que le pertenece
    al capítulo, ANTES de recortar espacios y el título.
    """
    title:   str
    content: str
    start:   int
    end:     int


@dataclass(frozen=True)
class Chapter:
    """
    Unidad de trabajo del pipeline.
    Es inmutable: cada transición de estado produce un snapshot nuevo,
    que es lo que recibe el callback del llamador.
    """
    id:              str
    index:           int
    title:           str
    original_text:   str
    status:          ChapterStatus = ChapterStatus.PENDING
    translated_text: Optional[str] = None
    error_message:   Optional[str] = None

    def __post_init__(self):
        if (self.translated_text is not None) != (self.status == ChapterStatus.SUCCESS):
            raise ValueError(
                f"{self.id}: translated_text solo puede existir con status success "
                f"(status={self.status.value})"
            )
        if (self.error_message is not None) != (self.status == ChapterStatus.FAILED):
            raise ValueError(
                f"{self.id}: error_message solo puede existir con status failed "
                f"(status={self.status.value})"
            )

    @property
    def is_empty(self) -> bool:
        return not self.original_text.strip()


@dataclass(frozen=True)
class Job:
    """Parámetros compartidos e inmutables de una traducción completa."""
    source_language: str
    target_language: str
    profile:         TranslationProfile = TranslationProfile.FIEL
    context:         str                = ""
    chapter_count:   int                = 1
