# capitra/cli.py
import logging
import signal
import sys
from contextlib import contextmanager
from pathlib import Path
from typing import Optional

import click
from dotenv import load_dotenv

from capitra.cancellation import CancellationToken
from capitra.errors import AbortedError
from capitra.factory import build_orchestrator
from capitra.languages import (
    LANGUAGES,
    SPECIALIZED_SOURCE,
    SPECIALIZED_TARGET,
    is_specialized_pair,
    language_code,
    resolve_language,
)
from capitra.processor.models import Chapter, ChapterStatus, TranslationProfile
from capitra.reconstructor import Reconstructor
from capitra.tracker import ChapterTracker


# Carga .env una sola vez, antes que cualquier otra cosa
load_dotenv()

# Solo texto plano: la extracción de .docx/.pdf queda fuera del núcleo
_SUPPORTED_FORMATS = {".txt", ".md"}

_EXIT_CHAPTERS_FAILED = 2
_EXIT_CANCELLED       = 130


# ------------------------------------------------------------------
# Grupo raíz
# ------------------------------------------------------------------

@click.group()
@click.version_option(package_name="capitra")
def main():
    """
    capitra: tradução de documentos longos capítulo a capítulo.

    Divide o texto em capítulos e traduz cada um de forma independente,
    sem interromper o trabalho quando um capítulo falha.
    """


# ------------------------------------------------------------------
# capitra translate
# ------------------------------------------------------------------

@main.command()
@click.option(
    "--input", "-i", "input_path",
    required = True,
    type     = click.Path(exists=False),   # validamos nosotros para mejor mensaje
    help     = "Arquivo de texto a traduzir (.txt, .md)",
)
@click.option(
    "--from", "source_lang",
    default      = "en",
    show_default = True,
    metavar      = "LANG",
    help         = "Idioma de origem (código ou nome, ex: en, Inglês)",
)
@click.option(
    "--to", "target_lang",
    default      = "pt-BR",
    show_default = True,
    metavar      = "LANG",
    help         = "Idioma de destino (código ou nome, ex: pt-BR, es)",
)
@click.option(
    "--profile",
    type = click.Choice([p.value for p in TranslationProfile], case_sensitive=False),
    help = "Estilo de tradução (só para Inglês → Português (Brasil)). Padrão: Fiel",
)
@click.option("--context", default="", help="Contexto da obra: gênero, época, estilo do autor...")
@click.option(
    "--context-file",
    type = click.Path(exists=True, dir_okay=False),
    help = "Arquivo com o contexto da obra (substitui --context)",
)
@click.option(
    "--output", "-o", "output_path",
    type = click.Path(dir_okay=False),
    help = "Arquivo de saída. Padrão: <entrada>_<idioma>.txt",
)
@click.option(
    "--include-failed",
    is_flag = True,
    help    = "Inclui o texto original dos capítulos que falharam, marcado para revisão",
)
@click.option("--config", "config_path", type=click.Path(dir_okay=False), help="Config YAML do backend")
@click.option("--verbose", "-v", is_flag=True, help="Logs detalhados")
def translate(
    input_path:     str,
    source_lang:    str,
    target_lang:    str,
    profile:        Optional[str],
    context:        str,
    context_file:   Optional[str],
    output_path:    Optional[str],
    include_failed: bool,
    config_path:    Optional[str],
    verbose:        bool,
):
    """Traduz um documento capítulo a capítulo."""
    _configure_logging(verbose)

    # ── Validaciones de entrada ───────────────────────────────────
    _validate_file(input_path)
    source_language = _resolve_lang(source_lang, "--from")
    target_language = _resolve_lang(target_lang, "--to")

    if source_language == target_language:
        _abort("O idioma de origem e destino não podem ser o mesmo.")

    raw_text = _read_text(Path(input_path))
    if not raw_text.strip():
        _abort(f"O arquivo está vazio: {input_path}")

    if context_file:
        context = _read_text(Path(context_file))

    if profile and not is_specialized_pair(source_language, target_language):
        _warn(
            f"--profile só se aplica a {SPECIALIZED_SOURCE} → {SPECIALIZED_TARGET}; "
            f"será ignorado."
        )
    translation_profile = TranslationProfile(profile) if profile else TranslationProfile.FIEL

    # ── Ensamblar pipeline ────────────────────────────────────────
    try:
        orchestrator = build_orchestrator(config_path=config_path)
    except FileNotFoundError as e:
        _abort(str(e))
    except RuntimeError as e:
        _abort(str(e))

    # ── Ejecutar ──────────────────────────────────────────────────
    tracker      = ChapterTracker()
    cancellation = CancellationToken()

    def on_update(chapter: Chapter) -> None:
        tracker.update(chapter)
        _print_update(chapter, tracker)

    try:
        with _cancel_on_sigint(cancellation):
            orchestrator.run(
                raw_text        = raw_text,
                context         = context,
                profile         = translation_profile,
                source_language = source_language,
                target_language = target_language,
                on_update       = on_update,
                cancellation    = cancellation,
            )

    except (AbortedError, KeyboardInterrupt):
        tracker.reset()
        click.echo("\n[capitra] Tradução cancelada. Nenhum resultado foi salvo.")
        sys.exit(_EXIT_CANCELLED)

    except Exception as e:
        _error(f"Erro inesperado: {type(e).__name__}: {e}")
        sys.exit(1)

    # ── Output ────────────────────────────────────────────────────
    written: Optional[Path] = None
    if tracker.succeeded or (include_failed and tracker.failed):
        target  = Path(output_path) if output_path else _default_output(input_path, target_language)
        written = Reconstructor(include_failed=include_failed).write(tracker.chapters, target)

    _print_summary(tracker, written)

    if tracker.failed:
        sys.exit(_EXIT_CHAPTERS_FAILED)


# ------------------------------------------------------------------
# capitra languages
# ------------------------------------------------------------------

@main.command()
def languages():
    """Lista os idiomas disponíveis."""
    for code, name in LANGUAGES.items():
        click.echo(f"  {code:<6} {name}")
    click.echo(
        f"\nEstilos de tradução (--profile) disponíveis para "
        f"{SPECIALIZED_SOURCE} → {SPECIALIZED_TARGET}: "
        f"{', '.join(p.value for p in TranslationProfile)}"
    )


# ------------------------------------------------------------------
# Helpers de validación
# ------------------------------------------------------------------

def _validate_file(path: str) -> None:
    """Verifica existencia y formato del archivo."""
    p = Path(path)

    if not p.exists():
        _abort(f"Arquivo não encontrado: {path}")

    if not p.is_file():
        _abort(f"O caminho não é um arquivo: {path}")

    if p.suffix.lower() not in _SUPPORTED_FORMATS:
        supported = ", ".join(sorted(_SUPPORTED_FORMATS))
        _abort(
            f"Formato não suportado: '{p.suffix}'\n"
            f"Formatos disponíveis: {supported}"
        )


def _resolve_lang(value: str, option: str) -> str:
    if not value.strip():
        _abort(f"{option} não pode estar vazio.")
    try:
        return resolve_language(value)
    except ValueError as e:
        _abort(f"{option}: {e}")


def _read_text(path: Path) -> str:
    """Lee el archivo intentando UTF-8 primero, latin-1 como fallback."""
    try:
        return path.read_text(encoding="utf-8")
    except UnicodeDecodeError:
        return path.read_text(encoding="latin-1")


def _default_output(input_path: str, target_language: str) -> Path:
    p = Path(input_path)
    return p.with_name(f"{p.stem}_{language_code(target_language)}.txt")


@contextmanager
def _cancel_on_sigint(cancellation: CancellationToken):
    """
    El primer Ctrl+C activa la cancelación cooperativa: el trabajo se
    detiene en el siguiente punto de control. El segundo interrumpe en seco.
    """
    previous = signal.getsignal(signal.SIGINT) or signal.default_int_handler

    def handler(signum, frame):
        click.echo("\n[capitra] Cancelando após a requisição em andamento... (Ctrl+C de novo força a saída)")
        cancellation.cancel()
        signal.signal(signal.SIGINT, previous)

    signal.signal(signal.SIGINT, handler)
    try:
        yield
    finally:
        signal.signal(signal.SIGINT, previous)


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level  = logging.DEBUG if verbose else logging.WARNING,
        format = "%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


# ------------------------------------------------------------------
# Helpers de output
# ------------------------------------------------------------------

def _print_update(chapter: Chapter, tracker: ChapterTracker) -> None:
    position = f"{chapter.index + 1}/{tracker.total}"

    if chapter.status == ChapterStatus.PENDING:
        return

    if chapter.status == ChapterStatus.TRANSLATING:
        click.echo(f'[capitra] Traduzindo "{chapter.title}" ({position})...')

    elif chapter.status == ChapterStatus.SUCCESS:
        click.echo(f'[capitra] ✓ "{chapter.title}" ({position}) {tracker.progress}%')

    elif chapter.status == ChapterStatus.FAILED:
        click.echo(
            click.style(f"[capitra] ⚠ {chapter.error_message} ({position})", fg="yellow"),
            err=True,
        )


def _print_summary(tracker: ChapterTracker, output_path: Optional[Path]) -> None:
    """Imprime el resumen final del trabajo."""
    click.echo("")
    click.echo("─" * 50)
    if tracker.failed:
        click.echo("[capitra] ⚠ Tradução concluída com falhas")
    else:
        click.echo("[capitra] ✓ Tradução concluída")
    click.echo(f"[capitra]   Capítulos  : {tracker.total}")
    click.echo(f"[capitra]   Traduzidos : {len(tracker.succeeded)}")

    if tracker.failed:
        click.echo(
            click.style(f"[capitra]   Falharam   : {len(tracker.failed)}", fg="yellow")
        )
        for chapter in tracker.failed:
            click.echo(click.style(f"[capitra]     - {chapter.error_message}", fg="yellow"))

    if output_path is not None:
        click.echo(f"[capitra]   Output     : {output_path}")
    click.echo("─" * 50)


def _abort(message: str) -> None:
    """Error de validación: culpa del usuario."""
    click.echo(click.style(f"[capitra] Erro: {message}", fg="red"), err=True)
    sys.exit(1)


def _warn(message: str) -> None:
    click.echo(click.style(f"[capitra] Aviso: {message}", fg="yellow"), err=True)


def _error(message: str) -> None:
    """Error de sistema, no es culpa del usuario."""
    click.echo(click.style(f"[capitra] {message}", fg="red"), err=True)
