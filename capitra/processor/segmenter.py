# processor/segmenter.py
import re

from capitra.processor.models import ChapterSeed

# "Chapter 3" / "Capítulo 3", con punto opcional, al inicio del documento
# o justo después de una línea en blanco.
_HEADING_RE = re.compile(
    r"(^|\n\n)((?:cap[íÍ]tulo|chapter)\s+\d+)\.?",
    re.IGNORECASE,
)

FULL_TEXT_TITLE = "Texto Completo"
PREAMBLE_TITLE  = "Texto Inicial"


class ChapterSegmenter:
    """
    Responsabilidad única: tomar texto plano y devolver la lista ordenada
    de capítulos detectados por encabezado.
    No sabe nada de modelos, prompts ni estados.
    """

    def __init__(self, heading_pattern: re.Pattern = _HEADING_RE):
        self._heading = heading_pattern

    def segment(self, raw_text: str) -> list[ChapterSeed]:
        assert isinstance(raw_text, str), "El Segmenter recibe texto plano, no bytes."

        matches = list(self._heading.finditer(raw_text))

        if not matches:
            return [ChapterSeed(
                title   = FULL_TEXT_TITLE,
                content = raw_text.strip(),
                start   = 0,
                end     = len(raw_text),
            )]

        seeds: list[ChapterSeed] = []
        first_start = matches[0].start()

        # Texto antes del primer encabezado: capítulo propio si tiene contenido,
        # si no se absorbe en el tramo del primer capítulo.
        preamble = raw_text[:first_start]
        if preamble.strip():
            seeds.append(ChapterSeed(
                title   = PREAMBLE_TITLE,
                content = preamble.strip(),
                start   = 0,
                end     = first_start,
            ))
            span_start = first_start
        else:
            span_start = 0

        for i, match in enumerate(matches):
            title    = match.group(2).strip()
            span_end = matches[i + 1].start() if i + 1 < len(matches) else len(raw_text)

            seeds.append(ChapterSeed(
                title   = title,
                content = _strip_title(raw_text[match.end():span_end], title),
                start   = span_start,
                end     = span_end,
            ))
            span_start = span_end

        return seeds


def segment(raw_text: str) -> list[ChapterSeed]:
    """Atajo con el patrón por defecto."""
    return ChapterSegmenter().segment(raw_text)


def _strip_title(content: str, title: str) -> str:
    """Recorta espacios y el título si viene duplicado al inicio del contenido."""
    content = content.strip()
    if content.startswith(title):
        content = content[len(title):].strip()
    return content
