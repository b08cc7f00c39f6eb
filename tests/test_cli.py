# tests/test_cli.py
import dataclasses
import pytest
from pathlib import Path
from unittest.mock import MagicMock, patch
from click.testing import CliRunner

from capitra.cli import main
from capitra.errors import AbortedError
from capitra.processor.models import Chapter, ChapterStatus, TranslationProfile


# ------------------------------------------------------------------
# Fixtures
# ------------------------------------------------------------------

@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def book_file(tmp_path) -> Path:
    f = tmp_path / "livro.txt"
    f.write_text("Chapter 1\n\nOne.\n\nChapter 2\n\nTwo.", encoding="utf-8")
    return f


def emit_chapters(*outcomes):
    """
    Devuelve un side_effect para Orchestrator.run que emite los updates
    como lo haría el real: todos en pending, luego cada uno a su estado final.
    outcomes: ("success", texto) | ("failed", mensaje)
    """
    def fake_run(**kwargs):
        on_update = kwargs["on_update"]
        chapters = [
            Chapter(id=f"chapter-{i}", index=i, title=f"Chapter {i + 1}", original_text=f"T{i}")
            for i in range(len(outcomes))
        ]
        for chapter in chapters:
            on_update(chapter)
        for chapter, (status, value) in zip(chapters, outcomes):
            on_update(dataclasses.replace(chapter, status=ChapterStatus.TRANSLATING))
            if status == "success":
                on_update(dataclasses.replace(
                    chapter, status=ChapterStatus.SUCCESS, translated_text=value,
                ))
            else:
                on_update(dataclasses.replace(
                    chapter, status=ChapterStatus.FAILED, error_message=value,
                ))
    return fake_run


def make_orchestrator(side_effect=None):
    orch = MagicMock()
    orch.run.side_effect = side_effect or emit_chapters(
        ("success", "Capítulo 1\n\nUm."),
        ("success", "Capítulo 2\n\nDois."),
    )
    return orch


def run_translate(runner, book, *extra):
    return runner.invoke(main, ["translate", "--input", str(book), *extra])


# ------------------------------------------------------------------
# translate
# ------------------------------------------------------------------

class TestTranslate:

    @patch("capitra.cli.build_orchestrator")
    def test_traduccion_exitosa_escribe_output(self, mock_build, runner, book_file):
        mock_build.return_value = make_orchestrator()

        result = run_translate(runner, book_file)

        assert result.exit_code == 0, result.output
        output = book_file.with_name("livro_pt-BR.txt")
        assert output.read_text(encoding="utf-8") == "Capítulo 1\n\nUm.\n\nCapítulo 2\n\nDois."
        assert "Tradução concluída" in result.output

    @patch("capitra.cli.build_orchestrator")
    def test_pasa_parametros_al_orchestrator(self, mock_build, runner, book_file):
        orch = make_orchestrator()
        mock_build.return_value = orch

        run_translate(runner, book_file, "--profile", "Literária", "--context", "Romance")

        kwargs = orch.run.call_args.kwargs
        assert kwargs["profile"] == TranslationProfile.LITERARIA
        assert kwargs["context"] == "Romance"
        assert kwargs["source_language"] == "Inglês"
        assert kwargs["target_language"] == "Português (Brasil)"
        assert kwargs["raw_text"].startswith("Chapter 1")
        assert kwargs["cancellation"] is not None

    @patch("capitra.cli.build_orchestrator")
    def test_perfil_por_defecto_es_fiel(self, mock_build, runner, book_file):
        orch = make_orchestrator()
        mock_build.return_value = orch

        run_translate(runner, book_file)

        assert orch.run.call_args.kwargs["profile"] == TranslationProfile.FIEL

    @patch("capitra.cli.build_orchestrator")
    def test_context_file(self, mock_build, runner, book_file, tmp_path):
        orch = make_orchestrator()
        mock_build.return_value = orch
        ctx = tmp_path / "contexto.txt"
        ctx.write_text("Época vitoriana", encoding="utf-8")

        run_translate(runner, book_file, "--context-file", str(ctx))

        assert orch.run.call_args.kwargs["context"] == "Época vitoriana"

    @patch("capitra.cli.build_orchestrator")
    def test_output_explicito(self, mock_build, runner, book_file, tmp_path):
        mock_build.return_value = make_orchestrator()
        target = tmp_path / "saida.txt"

        result = run_translate(runner, book_file, "-o", str(target))

        assert result.exit_code == 0
        assert target.exists()

    @patch("capitra.cli.build_orchestrator")
    def test_capitulo_fallido_sale_con_codigo_2(self, mock_build, runner, book_file):
        mock_build.return_value = make_orchestrator(emit_chapters(
            ("failed", 'Falha ao traduzir o "Chapter 1". Ocorreu um erro inesperado.'),
            ("success", "Capítulo 2\n\nDois."),
        ))

        result = run_translate(runner, book_file)

        assert result.exit_code == 2
        assert "Falharam" in result.output
        assert 'Falha ao traduzir o "Chapter 1"' in result.output
        output = book_file.with_name("livro_pt-BR.txt")
        assert output.read_text(encoding="utf-8") == "Capítulo 2\n\nDois."

    @patch("capitra.cli.build_orchestrator")
    def test_include_failed_agrega_original(self, mock_build, runner, book_file):
        mock_build.return_value = make_orchestrator(emit_chapters(
            ("failed", 'Falha ao traduzir o "Chapter 1". Ocorreu um erro inesperado.'),
            ("success", "Capítulo 2\n\nDois."),
        ))

        run_translate(runner, book_file, "--include-failed")

        text = book_file.with_name("livro_pt-BR.txt").read_text(encoding="utf-8")
        assert "FALHA NA TRADUÇÃO" in text
        assert "T0" in text

    @patch("capitra.cli.build_orchestrator")
    def test_todos_fallidos_no_escribe_output(self, mock_build, runner, book_file):
        mock_build.return_value = make_orchestrator(emit_chapters(
            ("failed", "Falha 1"),
            ("failed", "Falha 2"),
        ))

        result = run_translate(runner, book_file)

        assert result.exit_code == 2
        assert not book_file.with_name("livro_pt-BR.txt").exists()

    @patch("capitra.cli.build_orchestrator")
    def test_cancelacion_descarta_resultados(self, mock_build, runner, book_file):
        orch = MagicMock()
        orch.run.side_effect = AbortedError("cancelado")
        mock_build.return_value = orch

        result = run_translate(runner, book_file)

        assert result.exit_code == 130
        assert "cancelada" in result.output
        assert not book_file.with_name("livro_pt-BR.txt").exists()

    @patch("capitra.cli.build_orchestrator")
    def test_error_inesperado(self, mock_build, runner, book_file):
        orch = MagicMock()
        orch.run.side_effect = KeyError("raro")
        mock_build.return_value = orch

        result = run_translate(runner, book_file)

        assert result.exit_code == 1
        assert "Erro inesperado" in result.output

    @patch("capitra.cli.build_orchestrator")
    def test_error_de_config_aborta(self, mock_build, runner, book_file):
        mock_build.side_effect = RuntimeError("gemini: nenhuma api_key configurada.")

        result = run_translate(runner, book_file)

        assert result.exit_code == 1
        assert "api_key" in result.output

    @patch("capitra.cli.build_orchestrator")
    def test_perfil_fuera_del_par_afinado_avisa(self, mock_build, runner, book_file):
        mock_build.return_value = make_orchestrator()

        result = run_translate(runner, book_file, "--to", "es", "--profile", "Natural")

        assert result.exit_code == 0
        assert "Aviso" in result.output
        assert book_file.with_name("livro_es.txt").exists()


class TestValidaciones:

    def test_archivo_inexistente(self, runner, tmp_path):
        result = run_translate(runner, tmp_path / "nada.txt")
        assert result.exit_code == 1
        assert "não encontrado" in result.output

    def test_formato_no_soportado(self, runner, tmp_path):
        f = tmp_path / "livro.docx"
        f.write_bytes(b"PK")
        result = run_translate(runner, f)
        assert result.exit_code == 1
        assert "Formato não suportado" in result.output

    def test_mismo_idioma(self, runner, book_file):
        result = run_translate(runner, book_file, "--from", "en", "--to", "Inglês")
        assert result.exit_code == 1
        assert "não podem ser o mesmo" in result.output

    def test_idioma_desconocido(self, runner, book_file):
        result = run_translate(runner, book_file, "--to", "klingon")
        assert result.exit_code == 1
        assert "--to" in result.output

    def test_archivo_vacio(self, runner, tmp_path):
        f = tmp_path / "vazio.txt"
        f.write_text("   \n", encoding="utf-8")
        result = run_translate(runner, f)
        assert result.exit_code == 1
        assert "vazio" in result.output


# ------------------------------------------------------------------
# languages
# ------------------------------------------------------------------

class TestLanguages:

    def test_lista_idiomas_y_perfiles(self, runner):
        result = runner.invoke(main, ["languages"])

        assert result.exit_code == 0
        assert "pt-BR" in result.output
        assert "Português (Brasil)" in result.output
        assert "Literária" in result.output
